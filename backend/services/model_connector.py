"""AI Model Connector.

Wraps the Gemini ``generateContent`` REST endpoint for structured
(JSON) text generation.

SECURITY:
- Keys are NEVER logged, stored to disk, or persisted in any way
- Error messages NEVER contain key values
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from app.config import get_settings
from app.exceptions import ModelProviderError
from app.logging_config import get_logger
from app.metrics import MODEL_CALL_DURATION, MODEL_CALLS

logger = get_logger(__name__)


class BaseModelConnector(ABC):
    """Abstract base class for AI model connectors."""

    provider: str = ""

    @abstractmethod
    async def generate_json(
        self,
        prompt: str,
        api_key: str,
        response_schema: Optional[dict[str, Any]] = None,
    ) -> str:
        """Generate a JSON document (as text) from a prompt."""
        ...


class GeminiConnector(BaseModelConnector):
    """Google Gemini API connector."""

    provider = "gemini"

    def __init__(self, model: str | None = None) -> None:
        settings = get_settings()
        self.model = model or settings.gemini_model
        self.api_base = settings.gemini_api_base
        self.timeout = settings.gemini_timeout_seconds

    async def generate_json(
        self,
        prompt: str,
        api_key: str,
        response_schema: Optional[dict[str, Any]] = None,
    ) -> str:
        """Generate JSON text using Gemini structured output."""
        url = f"{self.api_base}/models/{self.model}:generateContent"

        generation_config: dict[str, Any] = {
            "responseMimeType": "application/json",
        }
        if response_schema:
            generation_config["responseSchema"] = response_schema

        payload = {
            "contents": [
                {
                    "parts": [{"text": prompt}],
                    "role": "user",
                }
            ],
            "generationConfig": generation_config,
        }

        try:
            with MODEL_CALL_DURATION.labels(provider=self.provider, model=self.model).time():
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(
                        url, json=payload, params={"key": api_key}
                    )
        except httpx.RequestError as exc:
            MODEL_CALLS.labels(provider=self.provider, model=self.model, status="error").inc()
            raise ModelProviderError(self.provider, "Gemini API connection failed") from exc

        MODEL_CALLS.labels(
            provider=self.provider,
            model=self.model,
            status=str(response.status_code),
        ).inc()

        if response.status_code != 200:
            raise ModelProviderError(self.provider, "Text generation failed")

        data = response.json()
        candidates = data.get("candidates", [])
        if candidates:
            parts = candidates[0].get("content", {}).get("parts", [])
            if parts:
                text = parts[0].get("text", "")
                if text:
                    return text

        raise ModelProviderError(self.provider, "Empty response from Gemini")


# Provider registry
PROVIDERS: dict[str, type[BaseModelConnector]] = {
    "gemini": GeminiConnector,
}


def get_connector(provider: str) -> BaseModelConnector:
    """Get a model connector instance by provider name."""
    connector_class = PROVIDERS.get(provider)
    if not connector_class:
        raise ModelProviderError(provider, f"Unknown provider: {provider}")
    return connector_class()
