# kuweni/service/proxy_service.py

"""
Proxy Service - 同源图片代理

以浏览器身份拉取外部图片，避免前端直接显示/下载时的跨域限制。
"""

import logging
from typing import Optional

import requests

from kuweni.config import Config
from kuweni.errors import UpstreamError, UpstreamTimeoutError, ValidationError
from kuweni.model.generation import ProxiedImage

logger = logging.getLogger(__name__)

PROXY_ERROR_DETAILS = (
    "The image could not be loaded. This might be due to network issues "
    "or the image service being temporarily unavailable."
)


def proxy_request_headers() -> dict:
    cfg = Config.proxy
    return {
        "User-Agent": cfg.user_agent,
        "Accept": cfg.accept,
        "Accept-Language": cfg.accept_language,
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }


def proxy_response_headers(content_type: str, length: int) -> dict:
    return {
        "Content-Type": content_type,
        "Content-Length": str(length),
        "Cache-Control": f"public, max-age={Config.proxy.cache_max_age}",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, HEAD, OPTIONS",
        "Access-Control-Allow-Headers": "Origin, Content-Type, Accept",
    }


def fetch_image(url: Optional[str], timeout: Optional[float] = None) -> ProxiedImage:
    """
    拉取图片字节

    Raises:
        ValidationError: url 为空
        UpstreamTimeoutError: 超过等待上限
        UpstreamError: 非 2xx、网络错误或空 body
    """
    if not url:
        raise ValidationError("Image URL is required")

    logger.info(f"🖼️ Proxy Image: fetching image from: {url}")

    try:
        r = requests.get(
            url,
            headers=proxy_request_headers(),
            timeout=timeout or Config.proxy.timeout,
        )
    except requests.Timeout as e:
        logger.error(f"⏱️ Proxy Image: timeout fetching {url}: {e}")
        raise UpstreamTimeoutError(f"Failed to fetch image: timeout after {timeout or Config.proxy.timeout}s") from e
    except requests.RequestException as e:
        logger.error(f"❌ Proxy Image: request failed: {e}")
        raise UpstreamError(f"Failed to fetch image: {e}") from e

    if not r.ok:
        logger.error(f"❌ Proxy Image: upstream returned {r.status_code}")
        raise UpstreamError(
            f"Failed to fetch image: {r.status_code} {r.reason}",
            upstream_status=r.status_code,
            upstream_body=r.text[:500],
        )

    content = r.content
    if not content:
        raise UpstreamError("Received empty image data", upstream_status=r.status_code)

    content_type = r.headers.get("Content-Type") or "image/png"
    logger.info(f"✅ Proxy Image: fetched {len(content)} bytes, type: {content_type}")

    return ProxiedImage(content=content, content_type=content_type)
