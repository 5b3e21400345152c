from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import requests

from kuweni.config import Config
from kuweni.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class DownloadPayload:
    """可直接交给浏览器（或写入磁盘）的文件"""
    filename: str
    content: bytes
    mime_type: str = "image/png"


def build_download_filename(extension: str = "png") -> str:
    millis = int(time.time() * 1000)
    return f"{Config.ui.download_prefix}-{millis}.{extension}"


def fetch_download(url: str, filename: str | None = None, timeout: float | None = None) -> DownloadPayload:
    """把 ``url`` 完整拉取到内存，供下载使用"""
    try:
        r = requests.get(url, timeout=timeout or Config.proxy.timeout)
    except requests.RequestException as e:
        logger.error(f"❌ Failed to download image: {e}")
        raise UpstreamError(f"Failed to fetch image for download: {e}") from e

    if not r.ok:
        raise UpstreamError(
            "Failed to fetch image for download",
            upstream_status=r.status_code,
            upstream_body=r.text[:200],
        )
    return DownloadPayload(
        filename=filename or build_download_filename(),
        content=r.content,
        mime_type=r.headers.get("Content-Type", "image/png"),
    )


def save_download(payload: DownloadPayload, directory: str | Path = ".") -> Path:
    target = Path(directory) / payload.filename
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(payload.content)
    logger.info(f"💾 Saved download: {target} ({len(payload.content)} bytes)")
    return target
