# kuweni/service/text_service.py

"""
Text Service - 文本生成适配器

model 参数只是透传的标签，所有请求都发往同一个上游文本接口。
"""

import logging
from typing import Optional

import requests

from kuweni.config import Config
from kuweni.errors import UpstreamError, ValidationError
from kuweni.model.generation import TextReply
from kuweni.utils.urls import encode_component

logger = logging.getLogger(__name__)


def build_text_url(message: str) -> str:
    return f"{Config.pollinations.text_base_url}/{encode_component(message)}"


def generate_text(message: Optional[str], model: Optional[str] = None) -> TextReply:
    """
    发送消息并获取回复

    Raises:
        ValidationError: message 为空
        UpstreamError: 上游返回非 2xx 或请求失败
    """
    if not message:
        raise ValidationError("Message is required")

    logger.info(f"💬 Chat API: sending request to Pollinations.AI: {message[:100]}")

    try:
        r = requests.get(
            build_text_url(message),
            headers={"Accept": "text/plain"},
            timeout=Config.pollinations.text_timeout,
        )
    except requests.RequestException as e:
        logger.error(f"❌ Chat API: request failed: {e}")
        raise UpstreamError(f"Failed to generate response: {e}") from e

    logger.info(f"📡 Chat API: response status: {r.status_code}")

    if not r.ok:
        logger.error(f"❌ Chat API: error response: {r.text[:500]}")
        raise UpstreamError(
            f"Failed to generate response: {r.status_code} {r.text}",
            upstream_status=r.status_code,
            upstream_body=r.text,
        )

    text = r.text
    logger.info(f"📝 Chat API: response text: {text[:100]}...")

    return TextReply(response=text, model=model or "default")
