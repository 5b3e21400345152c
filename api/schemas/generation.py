from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    message: Optional[str] = None
    model: Optional[str] = None  # 仅作标签透传


class ChatResponse(BaseModel):
    response: str
    model: str


class ImageRequest(BaseModel):
    prompt: Optional[str] = None
    model: Optional[str] = None


class ImageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(alias="imageUrl")
    proxy_url: str = Field(alias="proxyUrl")
    model: str
    prompt: str


class VoiceRequest(BaseModel):
    prompt: Optional[str] = None
    voice: Optional[str] = None


class VoiceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    audio_url: str = Field(alias="audioUrl")
    voice: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class ModelOptionSchema(BaseModel):
    id: str
    name: str


class ModelCatalogResponse(BaseModel):
    text: List[ModelOptionSchema]
    image: List[ModelOptionSchema]
    voice: List[ModelOptionSchema]
