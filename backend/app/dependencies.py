"""Application-level dependencies.

Provides the analysis pipeline and its collaborators as FastAPI
dependencies for injection into route handlers.
"""

from __future__ import annotations

from fastapi import Depends

from app.config import Settings, first_credential, get_settings
from services.ai_reviewer import AIReviewer
from services.analysis_pipeline import AnalysisPipeline
from services.github_service import GitHubService


def get_github_service(settings: Settings = Depends(get_settings)) -> GitHubService:
    """GitHub client that falls back to the configured token."""
    return GitHubService(default_token=first_credential(settings.github_token))


def get_ai_reviewer() -> AIReviewer:
    return AIReviewer()


def get_analysis_pipeline(
    github: GitHubService = Depends(get_github_service),
    reviewer: AIReviewer = Depends(get_ai_reviewer),
) -> AnalysisPipeline:
    return AnalysisPipeline(github=github, reviewer=reviewer)
