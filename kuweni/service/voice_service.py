# kuweni/service/voice_service.py

"""
Voice Service - 语音生成适配器

只构造上游 TTS 的 URL，浏览器直接播放；HEAD 探测结果只写日志。
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import requests

from kuweni.config import Config
from kuweni.errors import ValidationError
from kuweni.model.generation import VoiceResult
from kuweni.utils.urls import encode_component

logger = logging.getLogger(__name__)

DEFAULT_VOICE = "alloy"


def build_voice_url(prompt: str, voice: str) -> str:
    cfg = Config.pollinations
    query = urlencode({"model": cfg.audio_model, "voice": voice})
    return f"{cfg.text_base_url}/{encode_component(prompt)}?{query}"


def generate_voice(prompt: Optional[str], voice: Optional[str] = None) -> VoiceResult:
    if not prompt or not prompt.strip():
        raise ValidationError("Prompt is required")

    voice = voice or DEFAULT_VOICE
    logger.info(f"🎙️ Voice API: generating voice for prompt: {prompt[:100]}")

    audio_url = build_voice_url(prompt, voice)
    logger.info(f"🔗 Voice API: generated URL: {audio_url}")

    try:
        r = requests.head(audio_url, timeout=Config.pollinations.probe_timeout)
        logger.info(f"📡 Voice API: URL accessibility test: {r.status_code}")
    except requests.RequestException as e:
        logger.warning(f"⚠️ Voice API: URL accessibility test failed: {e}")

    return VoiceResult(audio_url=audio_url, voice=voice)
