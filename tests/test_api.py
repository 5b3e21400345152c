"""Tests for the HTTP gateway routes."""
from unittest.mock import patch

import pytest
import requests
from fastapi.testclient import TestClient

from main import app
from tests.conftest import make_response


@pytest.fixture
def client():
    return TestClient(app)


class TestChatRoute:

    def test_chat_success(self, client):
        with patch("requests.get", return_value=make_response(200, b"hello!")):
            resp = client.post("/api/chat", json={"message": "hi", "model": "gpt-4"})

        assert resp.status_code == 200
        assert resp.json() == {"response": "hello!", "model": "gpt-4"}

    def test_chat_missing_message(self, client):
        with patch("requests.get") as get:
            resp = client.post("/api/chat", json={"model": "gpt-4"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Message is required"}
        assert get.call_count == 0

    def test_chat_upstream_failure(self, client):
        with patch("requests.get", return_value=make_response(503, b"overloaded")):
            resp = client.post("/api/chat", json={"message": "hi"})

        assert resp.status_code == 500
        assert "503" in resp.json()["error"]

    def test_invalid_json_body(self, client):
        resp = client.post("/api/chat", content=b"not json", headers={"Content-Type": "application/json"})

        assert resp.status_code == 400
        assert "error" in resp.json()


class TestImageRoute:

    def test_generate_image(self, client):
        with patch("requests.head", return_value=make_response(200)):
            resp = client.post("/api/generate-image", json={"prompt": "a cat\nin a hat", "model": "dall-e-3"})

        data = resp.json()
        assert resp.status_code == 200
        assert data["prompt"] == "a cat in a hat"
        assert data["model"] == "dall-e-3"
        assert data["imageUrl"].startswith("https://image.pollinations.ai/prompt/a%20cat%20in%20a%20hat")
        assert data["proxyUrl"].startswith("/api/proxy-image?url=")

    def test_missing_prompt(self, client):
        resp = client.post("/api/generate-image", json={})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Prompt is required"}


class TestVoiceRoute:

    def test_generate_voice_default(self, client):
        with patch("requests.head", return_value=make_response(200)):
            resp = client.post("/api/generate-voice", json={"prompt": "Hello"})

        assert resp.status_code == 200
        assert resp.json()["voice"] == "alloy"
        assert resp.json()["audioUrl"].endswith("voice=alloy")

    def test_missing_prompt(self, client):
        resp = client.post("/api/generate-voice", json={"voice": "nova"})
        assert resp.status_code == 400


class TestProxyRoute:

    def test_proxy_success(self, client):
        upstream = make_response(200, b"GIF89a", headers={"Content-Type": "image/gif"})
        with patch("requests.get", return_value=upstream):
            resp = client.get("/api/proxy-image", params={"url": "https://image.pollinations.ai/prompt/cat"})

        assert resp.status_code == 200
        assert resp.content == b"GIF89a"
        assert resp.headers["content-type"] == "image/gif"
        assert resp.headers["cache-control"] == "public, max-age=3600"
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_proxy_missing_url(self, client):
        resp = client.get("/api/proxy-image")

        assert resp.status_code == 400
        assert resp.json()["error"] == "Image URL is required"

    def test_proxy_empty_body(self, client):
        with patch("requests.get", return_value=make_response(200, b"")):
            resp = client.get("/api/proxy-image", params={"url": "https://example.com/x.png"})

        assert resp.status_code == 500
        assert resp.json()["error"] == "Received empty image data"
        assert "temporarily unavailable" in resp.json()["details"]

    def test_proxy_timeout(self, client):
        with patch("requests.get", side_effect=requests.Timeout("timed out")):
            resp = client.get("/api/proxy-image", params={"url": "https://example.com/x.png"})

        assert resp.status_code == 504


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_models_catalog(client):
    data = client.get("/api/models").json()
    assert [m["id"] for m in data["voice"]][0] == "alloy"
    assert "gpt-3.5-turbo" in [m["id"] for m in data["text"]]
