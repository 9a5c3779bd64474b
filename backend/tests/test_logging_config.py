"""Tests for log redaction processors."""

from app.logging_config import (
    _filter_pii,
    _filter_sensitive_data,
    _scrub_credential_values,
)


class TestRedaction:
    def test_credential_fields_redacted(self):
        event = _filter_sensitive_data(
            None, "info", {"event": "x", "github_token": "ghp_abc", "ai_api_key": "AIza"}
        )
        assert event["github_token"] == "[REDACTED]"
        assert event["ai_api_key"] == "[REDACTED]"
        assert event["event"] == "x"

    def test_tokens_inside_messages_are_masked(self):
        event = _scrub_credential_values(
            None,
            "warning",
            {
                "event": "unhandled_error",
                "error": "401 for token ghp_A1b2C3d4 and github_pat_11AB_cd",
            },
        )
        assert "ghp_A1b2C3d4" not in event["error"]
        assert "github_pat_11AB_cd" not in event["error"]
        assert event["error"].count("[REDACTED]") == 2

    def test_gemini_key_query_param_is_masked(self):
        event = _scrub_credential_values(
            None,
            "warning",
            {"error": "POST https://example.test/models/m:generateContent?key=secret-123&alt=json"},
        )
        assert "secret-123" not in event["error"]
        assert "?key=[REDACTED]&alt=json" in event["error"]

    def test_non_string_values_untouched(self):
        event = _scrub_credential_values(None, "info", {"total_score": 94, "ok": True})
        assert event == {"total_score": 94, "ok": True}

    def test_handle_is_pii(self):
        event = _filter_pii(None, "info", {"username": "octocat", "repo": "dashboard"})
        assert event["username"] == "[PII_REDACTED]"
        assert event["repo"] == "dashboard"
