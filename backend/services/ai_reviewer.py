"""AI Portfolio Reviewer.

Asks the AI model for a narrative review of a profile and validates the
structured response. ``review`` never raises: a missing key, transport
failure or malformed payload all yield ``None`` so callers fall back to
the heuristic score.

One case is surfaced instead of swallowed: a GitHub token supplied as
the AI key produces a diagnostic ``AIAnalysis`` explaining the mistake.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from app.exceptions import ModelProviderError
from app.logging_config import get_logger
from services.model_connector import BaseModelConnector, get_connector
from services.models import AIAnalysis, Profile, ReadmeSample, Repository
from services.prompt_orchestrator import REVIEW_RESPONSE_SCHEMA, PromptOrchestrator

logger = get_logger(__name__)

GITHUB_TOKEN_PREFIXES = ("github_pat_", "ghp_")

_CODE_FENCE = re.compile(r"```(?:json)?")

MISCONFIGURED_KEY_ANALYSIS = AIAnalysis(
    summary=(
        "Configuration Error: You have entered a GitHub Token into the AI API Key field. "
        "Please use a Google Gemini API Key for this feature."
    ),
    strengths=["Heuristic Analysis Only"],
    weaknesses=["AI Configuration Invalid"],
    suggestions=[
        "Get a Gemini API Key from aistudio.google.com",
        "Update your .env file correctly",
    ],
    readme_feedback=[],
)


def is_github_token(api_key: str) -> bool:
    return api_key.startswith(GITHUB_TOKEN_PREFIXES)


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the JSON object in a model response.

    Tolerates markdown code fences and prose around the object.
    Raises ValueError when no object can be decoded.
    """
    clean = _CODE_FENCE.sub("", text.strip())
    first = clean.find("{")
    last = clean.rfind("}")
    if first != -1 and last != -1:
        clean = clean[first : last + 1]
    data = json.loads(clean)
    if not isinstance(data, dict):
        raise ValueError("Model response is not a JSON object")
    return data


class AIReviewer:
    """Produces an optional AI review for a scored profile."""

    def __init__(
        self,
        connector: BaseModelConnector | None = None,
        prompts: PromptOrchestrator | None = None,
    ) -> None:
        self.connector = connector or get_connector("gemini")
        self.prompts = prompts or PromptOrchestrator()

    async def review(
        self,
        profile: Profile,
        repos: Sequence[Repository],
        readmes: Sequence[ReadmeSample],
        api_key: str | None,
    ) -> AIAnalysis | None:
        """Return an AI review, or None when the AI path is unavailable."""
        if not api_key:
            logger.warning("ai_key_missing_using_heuristics")
            return None

        if is_github_token(api_key):
            logger.error("ai_key_is_github_token")
            return MISCONFIGURED_KEY_ANALYSIS

        try:
            prompt = self.prompts.build_review_prompt(profile, repos, readmes)
            raw = await self.connector.generate_json(
                prompt, api_key, response_schema=REVIEW_RESPONSE_SCHEMA
            )
            return AIAnalysis.model_validate(extract_json_object(raw))
        except ModelProviderError as exc:
            logger.warning("ai_review_fallback", reason="provider_error", error=exc.message)
        except (ValueError, ValidationError) as exc:
            # json.JSONDecodeError and pydantic errors are both ValueErrors
            logger.warning("ai_review_fallback", reason="malformed_response", error=str(exc)[:200])
        except Exception:
            logger.exception("ai_review_fallback", reason="unexpected_error")
        return None
