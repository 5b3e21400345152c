from .generation import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    ImageRequest,
    ImageResponse,
    ModelCatalogResponse,
    VoiceRequest,
    VoiceResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "ImageRequest",
    "ImageResponse",
    "ModelCatalogResponse",
    "VoiceRequest",
    "VoiceResponse",
]
