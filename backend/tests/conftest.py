"""Shared test fixtures for the GitFolio backend."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr

from app.config import Environment, Settings
from app.main import create_app
from services.models import Profile, Repository

# Fixed evaluation time for recency checks
NOW = datetime(2026, 1, 20, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings with safe defaults."""
    return Settings(
        environment=Environment.TESTING,
        debug=True,
        github_token=SecretStr("ghp_test_token_fake_value"),
        gemini_api_key=SecretStr("AIza-test-key"),
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
async def app():
    """Create a test application instance."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator:
    """Provide an async HTTP client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sample_profile() -> Profile:
    return Profile(
        login="testuser",
        name="Test User",
        bio="Backend developer building data tools",
        location="Berlin",
        blog="https://example.com",
        public_repos=12,
        followers=8,
        following=3,
        created_at="2020-01-01T00:00:00Z",
    )


@pytest.fixture
def sample_repos() -> list[Repository]:
    return [
        Repository(
            name="data-pipeline",
            description="Streaming ETL toolkit",
            language="Python",
            stargazers_count=4,
            topics=["etl", "python"],
            license={"key": "mit", "name": "MIT License", "spdx_id": "MIT"},
            updated_at="2026-01-15T12:00:00Z",
        ),
        Repository(
            name="dashboard",
            description="Metrics dashboard",
            language="TypeScript",
            stargazers_count=9,
            topics=[],
            updated_at="2025-06-01T00:00:00Z",
        ),
        Repository(
            name="cli-tools",
            description=None,
            language="Go",
            stargazers_count=1,
            updated_at="2024-03-01T00:00:00Z",
        ),
        Repository(
            name="notes",
            description="Personal notes",
            language=None,
            stargazers_count=0,
            updated_at="2023-03-01T00:00:00Z",
        ),
    ]
