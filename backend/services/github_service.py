"""GitHub Data Service.

Fetches a public profile, its owned repositories and README contents
from the GitHub REST API (v3).

Profile and repository fetches fail fast with a typed error. README
fetches never raise: any failure is reported as missing content.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.config import get_settings
from app.exceptions import (
    GitHubAPIError,
    GitHubAuthError,
    GitHubRateLimitError,
    GitHubUserNotFoundError,
)
from app.logging_config import get_logger
from app.metrics import GITHUB_API_CALLS, GITHUB_API_DURATION
from services.models import Profile, Repository

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/vnd.github.v3+json"
RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"
FINE_GRAINED_TOKEN_PREFIX = "github_pat_"


def build_headers(token: str | None, accept: str = JSON_MEDIA_TYPE) -> dict[str, str]:
    """Build request headers, authenticating when a token is given.

    Fine-grained tokens use the Bearer scheme, classic tokens use ``token``.
    """
    headers = {"Accept": accept}
    if token:
        scheme = "Bearer" if token.startswith(FINE_GRAINED_TOKEN_PREFIX) else "token"
        headers["Authorization"] = f"{scheme} {token}"
    return headers


class GitHubService:
    """Service for fetching public GitHub profile data."""

    def __init__(self, default_token: str | None = None) -> None:
        self.settings = get_settings()
        self.default_token = default_token

    def _token(self, token: str | None) -> str | None:
        return token or self.default_token

    async def fetch_profile(self, username: str, token: str | None = None) -> Profile:
        """Fetch user profile from GitHub REST API."""
        url = f"{self.settings.github_api_base}/users/{username}"
        data = await self._api_request(url, token=self._token(token), endpoint="user")
        try:
            return Profile.model_validate(data)
        except ValidationError as exc:
            logger.warning("github_payload_invalid", endpoint="user")
            raise GitHubAPIError("Failed to fetch data from GitHub") from exc

    async def fetch_repositories(
        self,
        username: str,
        token: str | None = None,
        per_page: int = 100,
    ) -> list[Repository]:
        """Fetch owned public repositories, most recently updated first."""
        url = f"{self.settings.github_api_base}/users/{username}/repos"
        params = {
            "sort": "updated",
            "per_page": per_page,
            "type": "owner",
        }
        data = await self._api_request(
            url, token=self._token(token), params=params, endpoint="repos"
        )
        if not isinstance(data, list):
            raise GitHubAPIError("Failed to fetch repositories")
        try:
            return [Repository.model_validate(r) for r in data]
        except ValidationError as exc:
            logger.warning("github_payload_invalid", endpoint="repos")
            raise GitHubAPIError("Failed to fetch repositories") from exc

    async def fetch_readme(
        self,
        owner: str,
        repo_name: str,
        token: str | None = None,
    ) -> str | None:
        """Fetch raw README text, or None when it cannot be retrieved."""
        url = f"{self.settings.github_api_base}/repos/{owner}/{repo_name}/readme"
        headers = build_headers(self._token(token), accept=RAW_MEDIA_TYPE)
        try:
            async with httpx.AsyncClient(timeout=self.settings.github_timeout_seconds) as client:
                with GITHUB_API_DURATION.labels(endpoint="readme").time():
                    response = await client.get(url, headers=headers)
        except httpx.HTTPError:
            GITHUB_API_CALLS.labels(endpoint="readme", status="error").inc()
            logger.warning("readme_fetch_failed", repo=repo_name)
            return None

        GITHUB_API_CALLS.labels(endpoint="readme", status=str(response.status_code)).inc()
        if response.status_code != 200:
            logger.debug("readme_unavailable", repo=repo_name, status=response.status_code)
            return None
        return response.text

    async def _api_request(
        self,
        url: str,
        token: str | None,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Make a single request to the GitHub API.

        Errors are mapped without retrying:
        - 404 -> GitHubUserNotFoundError
        - 401 -> GitHubAuthError
        - 403/429 -> GitHubRateLimitError
        - other errors and connection failures -> GitHubAPIError
        """
        async with httpx.AsyncClient(timeout=self.settings.github_timeout_seconds) as client:
            with GITHUB_API_DURATION.labels(endpoint=endpoint).time():
                try:
                    response = await client.get(
                        url, headers=build_headers(token), params=params
                    )
                except httpx.RequestError as exc:
                    GITHUB_API_CALLS.labels(endpoint=endpoint, status="error").inc()
                    logger.warning("github_api_connection_failed", endpoint=endpoint)
                    raise GitHubAPIError("GitHub API connection failed") from exc

        status = response.status_code
        GITHUB_API_CALLS.labels(endpoint=endpoint, status=str(status)).inc()

        if status == 404:
            raise GitHubUserNotFoundError()
        if status == 401:
            raise GitHubAuthError()
        if status in (403, 429):
            retry_after = response.headers.get("Retry-After")
            logger.warning("github_rate_limited", endpoint=endpoint, status=status)
            raise GitHubRateLimitError(
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
            )
        if status >= 400:
            raise GitHubAPIError(
                f"GitHub API returned status {status}",
                status_code=502,
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("github_payload_not_json", endpoint=endpoint, status=status)
            raise GitHubAPIError("Failed to fetch data from GitHub") from exc
