# kuweni/service/gateway_client.py

"""
Gateway clients - 控制器访问生成网关的两种方式

- HttpGateway: 调用 FastAPI 网关 (/api/chat 等)，与浏览器前端走同一套接口
- LocalGateway: 进程内直接调用各适配器，不需要启动网关

两者返回相同的模型，失败时抛出 kuweni.errors 中对应的异常。
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, TypeVar
from urllib.parse import parse_qs, urlparse

import requests

from kuweni.config import Config
from kuweni.errors import KuweniError, UpstreamError, error_for_status
from kuweni.model.generation import ImageResult, ProxiedImage, TextReply, VoiceResult
from kuweni.service import image_service, proxy_service, text_service, voice_service

logger = logging.getLogger(__name__)

MALFORMED_RESPONSE = "Malformed gateway response"

T = TypeVar("T")


class Gateway(Protocol):
    def chat(self, message: str, model: Optional[str] = None) -> TextReply: ...

    def generate_image(self, prompt: str, model: Optional[str] = None) -> ImageResult: ...

    def generate_voice(self, prompt: str, voice: Optional[str] = None) -> VoiceResult: ...

    def fetch_image(self, url: str) -> ProxiedImage: ...


def is_proxy_url(url: str) -> bool:
    return url.startswith(Config.proxy.route)


class LocalGateway:
    """进程内网关"""

    def chat(self, message: str, model: Optional[str] = None) -> TextReply:
        return text_service.generate_text(message, model)

    def generate_image(self, prompt: str, model: Optional[str] = None) -> ImageResult:
        return image_service.generate_image(prompt, model)

    def generate_voice(self, prompt: str, voice: Optional[str] = None) -> VoiceResult:
        return voice_service.generate_voice(prompt, voice)

    def fetch_image(self, url: Optional[str]) -> ProxiedImage:
        if url and is_proxy_url(url):
            target = parse_qs(urlparse(url).query).get("url", [None])[0]
            return proxy_service.fetch_image(target)
        return proxy_service.fetch_image(url)


class HttpGateway:
    """通过 HTTP 调用 FastAPI 网关"""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or Config.gateway.base_url).rstrip("/")
        self.session = session or requests.Session()

    def resolve(self, url: str) -> str:
        """相对路径（如代理链接）补全为网关的绝对地址"""
        if url.startswith("/"):
            return f"{self.base_url}{url}"
        return url

    def _post(self, path: str, payload: dict) -> dict:
        try:
            r = self.session.post(f"{self.base_url}{path}", json=payload)
        except requests.RequestException as e:
            logger.error(f"❌ Gateway {path}: request failed: {e}")
            raise UpstreamError(str(e)) from e

        if not r.ok:
            raise self._error_from(r, "Request failed")

        try:
            data = r.json()
        except ValueError as e:
            logger.error(f"❌ Gateway {path}: response is not JSON: {r.text[:200]}")
            raise UpstreamError(MALFORMED_RESPONSE, upstream_status=r.status_code, upstream_body=r.text[:200]) from e
        if not isinstance(data, dict):
            raise UpstreamError(MALFORMED_RESPONSE, upstream_status=r.status_code, upstream_body=r.text[:200])
        return data

    @staticmethod
    def _error_from(r: requests.Response, fallback: str) -> KuweniError:
        try:
            message = r.json().get("error") or fallback
        except (ValueError, AttributeError):
            message = fallback
        logger.warning(f"⚠️ Gateway error {r.status_code}: {message}")
        return error_for_status(r.status_code, message)

    @staticmethod
    def _build(data: dict, build: Callable[[dict], T]) -> T:
        """字段缺失或类型不对时按上游错误处理"""
        try:
            return build(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"❌ Gateway response missing fields: {e} (body: {data})")
            raise UpstreamError(MALFORMED_RESPONSE) from e

    def chat(self, message: str, model: Optional[str] = None) -> TextReply:
        data = self._post("/api/chat", {"message": message, "model": model})
        return self._build(data, lambda d: TextReply(response=d["response"], model=d["model"]))

    def generate_image(self, prompt: str, model: Optional[str] = None) -> ImageResult:
        data = self._post("/api/generate-image", {"prompt": prompt, "model": model})
        return self._build(data, lambda d: ImageResult(
            image_url=d["imageUrl"],
            proxy_url=d["proxyUrl"],
            model=d["model"],
            prompt=d["prompt"],
        ))

    def generate_voice(self, prompt: str, voice: Optional[str] = None) -> VoiceResult:
        data = self._post("/api/generate-voice", {"prompt": prompt, "voice": voice})
        return self._build(data, lambda d: VoiceResult(audio_url=d["audioUrl"], voice=d["voice"]))

    def fetch_image(self, url: str) -> ProxiedImage:
        try:
            r = self.session.get(self.resolve(url), timeout=Config.proxy.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"Failed to fetch image: {e}") from e

        if not r.ok:
            raise self._error_from(r, "Failed to fetch image")
        if not r.content:
            raise UpstreamError("Received empty image data", upstream_status=r.status_code)
        return ProxiedImage(
            content=r.content,
            content_type=r.headers.get("Content-Type") or "image/png",
        )


def get_gateway() -> Gateway:
    if Config.gateway.mode == "local":
        return LocalGateway()
    return HttpGateway()
