"""Tests for the AI reviewer and its fallback contract."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.exceptions import ModelProviderError
from services.ai_reviewer import (
    MISCONFIGURED_KEY_ANALYSIS,
    AIReviewer,
    extract_json_object,
    is_github_token,
)
from services.model_connector import BaseModelConnector
from services.models import AIAnalysis, ReadmeSample

VALID_PAYLOAD = {
    "summary": "Solid backend engineer with clear documentation.",
    "strengths": ["Clean APIs", "Good tests"],
    "weaknesses": ["Few stars"],
    "suggestions": ["Pin your best work"],
    "readmeFeedback": [
        {"repoName": "data-pipeline", "clarityScore": 8, "feedback": "Clear setup steps."},
    ],
}


@pytest.fixture
def connector():
    mock = AsyncMock(spec=BaseModelConnector)
    mock.generate_json.return_value = json.dumps(VALID_PAYLOAD)
    return mock


@pytest.fixture
def reviewer(connector):
    return AIReviewer(connector=connector)


class TestCredentialChecks:
    @pytest.mark.parametrize("key", ["ghp_abc123", "github_pat_11ABC"])
    def test_github_token_detected(self, key):
        assert is_github_token(key)

    @pytest.mark.parametrize("key", ["AIzaSyExample", "sk-test", "my-ghp_key"])
    def test_other_keys_not_flagged(self, key):
        assert not is_github_token(key)

    async def test_missing_key_returns_none(self, reviewer, connector, sample_profile, sample_repos):
        result = await reviewer.review(sample_profile, sample_repos, [], None)

        assert result is None
        connector.generate_json.assert_not_called()

    async def test_empty_key_returns_none(self, reviewer, sample_profile, sample_repos):
        assert await reviewer.review(sample_profile, sample_repos, [], "") is None

    @pytest.mark.parametrize("key", ["ghp_abc123", "github_pat_11ABC"])
    async def test_github_token_returns_diagnostic(
        self, reviewer, connector, sample_profile, sample_repos, key
    ):
        result = await reviewer.review(sample_profile, sample_repos, [], key)

        assert result is MISCONFIGURED_KEY_ANALYSIS
        assert "AI Configuration Invalid" in result.weaknesses
        assert result.strengths == ["Heuristic Analysis Only"]
        assert result.readme_feedback == []
        assert "GitHub Token" in result.summary
        connector.generate_json.assert_not_called()


class TestReview:
    async def test_valid_response(self, reviewer, connector, sample_profile, sample_repos):
        readmes = [ReadmeSample(repo_name="data-pipeline", content="# Pipeline")]

        result = await reviewer.review(sample_profile, sample_repos, readmes, "AIza-key")

        assert isinstance(result, AIAnalysis)
        assert result.summary == VALID_PAYLOAD["summary"]
        assert result.readme_feedback[0].repo_name == "data-pipeline"
        assert result.readme_feedback[0].clarity_score == 8
        prompt, key = connector.generate_json.call_args.args
        assert key == "AIza-key"
        assert "Repo: data-pipeline" in prompt
        assert "response_schema" in connector.generate_json.call_args.kwargs

    async def test_fenced_response(self, reviewer, connector, sample_profile, sample_repos):
        connector.generate_json.return_value = (
            "Here is the review:\n```json\n" + json.dumps(VALID_PAYLOAD) + "\n```"
        )
        result = await reviewer.review(sample_profile, sample_repos, [], "AIza-key")

        assert result is not None
        assert result.strengths == VALID_PAYLOAD["strengths"]

    async def test_clarity_score_clamped(self, reviewer, connector, sample_profile, sample_repos):
        payload = dict(VALID_PAYLOAD)
        payload["readmeFeedback"] = [
            {"repoName": "a", "clarityScore": 14, "feedback": "x"},
            {"repoName": "b", "clarityScore": -2, "feedback": "y"},
        ]
        connector.generate_json.return_value = json.dumps(payload)

        result = await reviewer.review(sample_profile, sample_repos, [], "AIza-key")

        assert [f.clarity_score for f in result.readme_feedback] == [10, 0]

    async def test_malformed_json_returns_none(self, reviewer, connector, sample_profile, sample_repos):
        connector.generate_json.return_value = "{not json"
        assert await reviewer.review(sample_profile, sample_repos, [], "AIza-key") is None

    async def test_missing_fields_returns_none(self, reviewer, connector, sample_profile, sample_repos):
        connector.generate_json.return_value = json.dumps({"summary": "only a summary"})
        assert await reviewer.review(sample_profile, sample_repos, [], "AIza-key") is None

    async def test_provider_error_returns_none(self, reviewer, connector, sample_profile, sample_repos):
        connector.generate_json.side_effect = ModelProviderError("gemini", "Text generation failed")
        assert await reviewer.review(sample_profile, sample_repos, [], "AIza-key") is None

    async def test_unexpected_error_returns_none(self, connector, sample_profile, sample_repos):
        prompts = MagicMock()
        prompts.build_review_prompt.side_effect = RuntimeError("boom")
        reviewer = AIReviewer(connector=connector, prompts=prompts)

        assert await reviewer.review(sample_profile, sample_repos, [], "AIza-key") is None


class TestExtractJsonObject:
    def test_plain_object(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_surrounding_prose(self):
        assert extract_json_object('Sure! {"a": {"b": 2}} Hope this helps.') == {"a": {"b": 2}}

    def test_array_rejected(self):
        with pytest.raises(ValueError):
            extract_json_object("[1, 2]")

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            extract_json_object("no json here")
