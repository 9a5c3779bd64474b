"""Tests for model_connector providers."""

import json

import httpx
import pytest
import respx
from httpx import Response

from app.exceptions import ModelProviderError
from services.model_connector import PROVIDERS, GeminiConnector, get_connector

GENERATE_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/test-model:generateContent"
)


@pytest.fixture
def connector():
    return GeminiConnector(model="test-model")


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestProviderRegistry:
    def test_gemini_registered(self):
        assert "gemini" in PROVIDERS

    def test_get_connector_gemini(self):
        assert isinstance(get_connector("gemini"), GeminiConnector)

    def test_get_connector_unknown_raises(self):
        with pytest.raises(ModelProviderError):
            get_connector("unknown_provider")


class TestGeminiConnector:
    @respx.mock
    async def test_generate_json_success(self, connector):
        route = respx.post(GENERATE_URL).mock(
            return_value=Response(200, json=_candidate('{"summary": "ok"}'))
        )

        text = await connector.generate_json(
            "Review this", "test-key", response_schema={"type": "OBJECT"}
        )

        assert text == '{"summary": "ok"}'
        request = route.calls.last.request
        assert request.url.params["key"] == "test-key"
        body = json.loads(request.content)
        assert body["contents"][0]["parts"][0]["text"] == "Review this"
        assert body["generationConfig"]["responseMimeType"] == "application/json"
        assert body["generationConfig"]["responseSchema"] == {"type": "OBJECT"}

    @respx.mock
    async def test_generate_json_http_error(self, connector):
        respx.post(GENERATE_URL).mock(return_value=Response(403, json={"error": {}}))
        with pytest.raises(ModelProviderError):
            await connector.generate_json("prompt", "bad-key")

    @respx.mock
    async def test_generate_json_empty_candidates(self, connector):
        respx.post(GENERATE_URL).mock(return_value=Response(200, json={"candidates": []}))
        with pytest.raises(ModelProviderError):
            await connector.generate_json("prompt", "key")

    @respx.mock
    async def test_generate_json_network_error(self, connector):
        respx.post(GENERATE_URL).mock(side_effect=httpx.ConnectError("down"))
        with pytest.raises(ModelProviderError) as exc_info:
            await connector.generate_json("prompt", "secret-key-value")

        assert "secret-key-value" not in exc_info.value.message
