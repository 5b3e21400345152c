from .chat import DEFAULT_TITLE, ChatSession, Message, assistant_message, user_message
from .generation import GenerationResult, ImageResult, ProxiedImage, TextReply, VoiceResult

__all__ = [
    "DEFAULT_TITLE",
    "ChatSession",
    "Message",
    "assistant_message",
    "user_message",
    "GenerationResult",
    "ImageResult",
    "ProxiedImage",
    "TextReply",
    "VoiceResult",
]
