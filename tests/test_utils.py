"""Tests for the small helpers and the gateway clients."""
from datetime import datetime
from unittest.mock import MagicMock, patch

import pyperclip
import pytest
import requests

from kuweni.errors import UpstreamError, UpstreamTimeoutError, ValidationError, error_for_status
from kuweni.model.catalog import TEXT_MODELS, VOICES, option_index
from kuweni.service.gateway_client import MALFORMED_RESPONSE, HttpGateway, LocalGateway, is_proxy_url
from kuweni.utils import (
    DownloadPayload,
    copy_to_clipboard,
    format_message_time,
    generate_id,
    save_download,
)
from kuweni.utils.urls import encode_component
from tests.conftest import make_response


class TestTimeFormat:

    def test_afternoon(self):
        assert format_message_time(datetime(2024, 5, 1, 15, 7)) == "03:07 PM"

    def test_morning(self):
        assert format_message_time(datetime(2024, 5, 1, 9, 30)) == "09:30 AM"


class TestIds:

    def test_ids_are_unique(self):
        ids = {generate_id() for _ in range(500)}
        assert len(ids) == 500

    def test_ids_are_base36(self):
        assert generate_id().isalnum()


class TestClipboard:

    def test_copy_success(self):
        with patch("pyperclip.copy") as copy:
            assert copy_to_clipboard("hello") is True
        copy.assert_called_once_with("hello")

    def test_copy_failure(self):
        with patch("pyperclip.copy", side_effect=pyperclip.PyperclipException("no clipboard")):
            assert copy_to_clipboard("hello") is False


class TestDownloads:

    def test_save_download(self, tmp_path):
        payload = DownloadPayload(filename="kuweni-ai-1.png", content=b"png")

        path = save_download(payload, tmp_path)

        assert path.read_bytes() == b"png"


def test_encode_component_matches_browser_rules():
    assert encode_component("a b/c?d=e&f") == "a%20b%2Fc%3Fd%3De%26f"
    assert encode_component("it's(ok)!*~") == "it's(ok)!*~"


class TestErrorForStatus:

    def test_mapping(self):
        assert isinstance(error_for_status(400, "x"), ValidationError)
        assert isinstance(error_for_status(504, "x"), UpstreamTimeoutError)
        assert isinstance(error_for_status(500, "x"), UpstreamError)


class TestHttpGateway:

    def _gateway(self, response):
        session = MagicMock(spec=requests.Session)
        session.post.return_value = response
        session.get.return_value = response
        return HttpGateway(base_url="http://gateway:8000/", session=session), session

    def test_chat(self):
        gateway, session = self._gateway(make_response(200, b'{"response": "hello!", "model": "gpt-4"}'))

        reply = gateway.chat("hi", "gpt-4")

        assert reply.response == "hello!"
        session.post.assert_called_once_with(
            "http://gateway:8000/api/chat", json={"message": "hi", "model": "gpt-4"}
        )

    def test_error_body_is_rebuilt(self):
        gateway, _ = self._gateway(make_response(400, b'{"error": "Prompt is required"}'))

        with pytest.raises(ValidationError) as exc:
            gateway.generate_image("")
        assert exc.value.message == "Prompt is required"

    def test_image_fields(self):
        body = b'{"imageUrl": "https://i/x", "proxyUrl": "/api/proxy-image?url=x", "model": "default", "prompt": "x"}'
        gateway, _ = self._gateway(make_response(200, body))

        result = gateway.generate_image("x")

        assert result.image_url == "https://i/x"
        assert result.proxy_url == "/api/proxy-image?url=x"

    def test_non_json_success_body_is_upstream_error(self):
        gateway, _ = self._gateway(make_response(200, b"<html>bad gateway page</html>"))

        with pytest.raises(UpstreamError) as exc:
            gateway.chat("hi")
        assert exc.value.message == MALFORMED_RESPONSE
        assert exc.value.upstream_status == 200

    def test_missing_fields_are_upstream_error(self):
        gateway, _ = self._gateway(make_response(200, b'{"imageUrl": "https://i/x"}'))

        with pytest.raises(UpstreamError) as exc:
            gateway.generate_image("x")
        assert exc.value.message == MALFORMED_RESPONSE

    def test_non_object_json_is_upstream_error(self):
        gateway, _ = self._gateway(make_response(200, b'["audioUrl"]'))

        with pytest.raises(UpstreamError):
            gateway.generate_voice("x")

    def test_fetch_resolves_relative_proxy_url(self):
        gateway, session = self._gateway(make_response(200, b"img", headers={"Content-Type": "image/jpeg"}))

        image = gateway.fetch_image("/api/proxy-image?url=x")

        assert session.get.call_args.args[0] == "http://gateway:8000/api/proxy-image?url=x"
        assert image.content_type == "image/jpeg"

    def test_fetch_timeout_status(self):
        gateway, _ = self._gateway(make_response(504, b'{"error": "timeout"}'))

        with pytest.raises(UpstreamTimeoutError):
            gateway.fetch_image("/api/proxy-image?url=x")


class TestLocalGateway:

    def test_fetch_unwraps_proxy_url(self):
        with patch("requests.get", return_value=make_response(200, b"img")) as get:
            LocalGateway().fetch_image("/api/proxy-image?url=https%3A%2F%2Fimage.pollinations.ai%2Fprompt%2Fcat")

        assert get.call_args.args[0] == "https://image.pollinations.ai/prompt/cat"

    def test_is_proxy_url(self):
        assert is_proxy_url("/api/proxy-image?url=x")
        assert not is_proxy_url("https://image.pollinations.ai/prompt/cat")


class TestCatalog:

    def test_option_index(self):
        assert option_index(VOICES, "echo") == 1
        assert option_index(TEXT_MODELS, "gpt-3.5-turbo") == 0

    def test_unknown_default_falls_back_to_first(self):
        assert option_index(TEXT_MODELS, "not-a-model") == 0
