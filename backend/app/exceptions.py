"""Custom exception classes for GitFolio.

All exceptions follow the GitFolio error format:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable message",
        "details": {}  # optional
    }
}

CRITICAL: Error messages must NEVER contain credentials.
"""

from __future__ import annotations

from typing import Any


class FolioBaseError(Exception):
    """Base exception for GitFolio."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class GitHubAPIError(FolioBaseError):
    """GitHub API transport or unexpected status errors."""

    def __init__(self, message: str = "Failed to fetch data from GitHub", status_code: int = 502) -> None:
        super().__init__(
            code="GITHUB_API_ERROR",
            message=message,
            status_code=status_code,
        )


class GitHubUserNotFoundError(FolioBaseError):
    """GitHub user not found."""

    def __init__(self) -> None:
        super().__init__(
            code="GITHUB_USER_NOT_FOUND",
            message="User not found",
            status_code=404,
        )


class GitHubAuthError(FolioBaseError):
    """GitHub rejected the supplied token."""

    def __init__(self) -> None:
        super().__init__(
            code="GITHUB_UNAUTHORIZED",
            message="Invalid GitHub Token. Please check your Access Token.",
            status_code=401,
        )


class GitHubRateLimitError(FolioBaseError):
    """GitHub API rate limit exceeded."""

    def __init__(self, retry_after: int | None = None) -> None:
        details = {}
        if retry_after:
            details["retry_after_seconds"] = retry_after
        super().__init__(
            code="GITHUB_RATE_LIMIT",
            message="API rate limit exceeded. Please provide a valid Access Token.",
            status_code=429,
            details=details,
        )


class EmptyPortfolioError(FolioBaseError):
    """Profile has no public repositories to score."""

    def __init__(self) -> None:
        super().__init__(
            code="EMPTY_PORTFOLIO",
            message="No public repositories found for this user.",
            status_code=422,
        )


class ModelProviderError(FolioBaseError):
    """AI model provider error."""

    def __init__(self, provider: str, message: str = "Model call failed") -> None:
        super().__init__(
            code="MODEL_PROVIDER_ERROR",
            message=message,
            status_code=502,
            details={"provider": provider},
        )
