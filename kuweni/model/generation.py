from typing import Optional

from pydantic import BaseModel


class TextReply(BaseModel):
    response: str
    model: str


class ImageResult(BaseModel):
    image_url: str
    proxy_url: str
    model: str
    prompt: str


class VoiceResult(BaseModel):
    audio_url: str
    voice: str


class ProxiedImage(BaseModel):
    content: bytes
    content_type: str


class GenerationResult(BaseModel):
    """What the UI is currently showing for an image or voice request; replaced wholesale."""
    url: str
    source_prompt: str
    model_or_voice: str
    direct_url: Optional[str] = None
