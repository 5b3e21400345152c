"""Pytest configuration and shared fixtures."""
from typing import List, Optional

import pytest
import requests

from kuweni.controller import InteractionController, Notification
from kuweni.model.generation import ImageResult, ProxiedImage, TextReply, VoiceResult
from kuweni.store import SessionStore


def make_response(
    status_code: int = 200,
    content: bytes = b"",
    headers: Optional[dict] = None,
    reason: str = "OK",
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    r = requests.Response()
    r.status_code = status_code
    r._content = content
    r.reason = reason
    r.encoding = "utf-8"
    r.headers.update(headers or {})
    return r


class RecordingNotifier:
    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def titles(self) -> List[str]:
        return [n.title for n in self.notifications]


class FakeGateway:
    """Scripted gateway: set ``*_error`` to make the next call fail."""

    def __init__(self):
        self.reply = "hello!"
        self.chat_error: Optional[Exception] = None
        self.image_error: Optional[Exception] = None
        self.voice_error: Optional[Exception] = None
        self.fetch_error: Optional[Exception] = None
        self.calls: List[tuple] = []

    def chat(self, message, model=None):
        self.calls.append(("chat", message, model))
        if self.chat_error:
            raise self.chat_error
        return TextReply(response=self.reply, model=model or "default")

    def generate_image(self, prompt, model=None):
        self.calls.append(("image", prompt, model))
        if self.image_error:
            raise self.image_error
        direct = "https://image.pollinations.ai/prompt/a%20cat?width=512&height=512&nologo=true"
        return ImageResult(
            image_url=direct,
            proxy_url="/api/proxy-image?url=https%3A%2F%2Fimage.pollinations.ai%2Fprompt%2Fa%2520cat",
            model=model or "default",
            prompt=prompt,
        )

    def generate_voice(self, prompt, voice=None):
        self.calls.append(("voice", prompt, voice))
        if self.voice_error:
            raise self.voice_error
        return VoiceResult(audio_url=f"https://text.pollinations.ai/x?voice={voice}", voice=voice or "alloy")

    def fetch_image(self, url):
        self.calls.append(("fetch", url))
        if self.fetch_error:
            raise self.fetch_error
        return ProxiedImage(content=b"\x89PNG-bytes", content_type="image/png")


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def controller(store, gateway, notifier):
    return InteractionController(store=store, gateway=gateway, notifier=notifier)
