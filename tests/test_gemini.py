"""Tests for the Gemini REST client using httpx's mock transport."""

import asyncio
import base64
import json

import httpx
import pytest

from app.config import Settings
from app.services.errors import BackendError
from app.services.gemini import GeminiClient


def _client(handler, api_key: str = "test-key") -> GeminiClient:
    settings = Settings(gemini_api_key=api_key, gemini_base_url="https://gemini.test/v1beta")
    return GeminiClient(settings, transport=httpx.MockTransport(handler))


class TestGenerateContent:
    def test_sends_prompt_config_and_key(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"candidates": [{"content": {"parts": [{"text": '{"a": '}, {"text": "1}"}]}}]},
            )

        text = asyncio.run(
            _client(handler).generate_content("hello", {"responseMimeType": "application/json"})
        )

        assert text == '{"a": 1}'
        assert seen["url"] == "https://gemini.test/v1beta/models/gemini-2.5-flash:generateContent"
        assert seen["key"] == "test-key"
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "hello"
        assert seen["body"]["generationConfig"]["responseMimeType"] == "application/json"

    def test_no_candidates_returns_empty_string(self):
        client = _client(lambda request: httpx.Response(200, json={"candidates": []}))
        assert asyncio.run(client.generate_content("hello")) == ""

    def test_error_body_message_is_surfaced(self):
        def handler(request):
            return httpx.Response(
                429,
                json={"error": {"code": 429, "message": "Resource has been exhausted (e.g. check quota)."}},
            )

        with pytest.raises(BackendError) as exc_info:
            asyncio.run(_client(handler).generate_content("hello"))

        assert str(exc_info.value) == "Resource has been exhausted (e.g. check quota)."
        assert exc_info.value.status_code == 429

    def test_error_without_json_body_uses_status_line(self):
        client = _client(lambda request: httpx.Response(503, text="upstream down"))
        with pytest.raises(BackendError) as exc_info:
            asyncio.run(client.generate_content("hello"))
        assert "503" in str(exc_info.value)

    def test_timeout_is_flagged(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(BackendError) as exc_info:
            asyncio.run(_client(handler).generate_content("hello"))
        assert exc_info.value.timed_out is True

    def test_connection_error_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BackendError) as exc_info:
            asyncio.run(_client(handler).generate_content("hello"))
        assert "connection refused" in str(exc_info.value)

    def test_missing_api_key(self):
        def handler(request):
            raise AssertionError("no request must be sent without a key")

        with pytest.raises(BackendError) as exc_info:
            asyncio.run(_client(handler, api_key="").generate_content("hello"))
        assert exc_info.value.status_code == 401


class TestGenerateImages:
    def test_requests_one_image_and_decodes_bytes(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            encoded = base64.b64encode(b"\xff\xd8jpeg").decode()
            return httpx.Response(
                200,
                json={"predictions": [{"bytesBase64Encoded": encoded, "mimeType": "image/jpeg"}]},
            )

        images = asyncio.run(_client(handler).generate_images("a cat", "9:16"))

        assert seen["url"].endswith("/models/imagen-4.0-generate-001:predict")
        assert seen["body"]["instances"] == [{"prompt": "a cat"}]
        assert seen["body"]["parameters"] == {
            "sampleCount": 1,
            "aspectRatio": "9:16",
            "outputOptions": {"mimeType": "image/jpeg"},
        }
        assert len(images) == 1
        assert images[0].data == b"\xff\xd8jpeg"
        assert images[0].mime_type == "image/jpeg"

    def test_predictions_without_bytes_are_skipped(self):
        client = _client(
            lambda request: httpx.Response(200, json={"predictions": [{"raiFilteredReason": "blocked"}]})
        )
        assert asyncio.run(client.generate_images("a cat", "1:1")) == []
