"""Profile analysis endpoint.

POST /api/v1/public/analyze - Score a GitHub portfolio
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from api.deps import get_ai_api_key, get_github_token
from app.dependencies import get_analysis_pipeline
from app.logging_config import get_logger
from services.analysis_pipeline import AnalysisPipeline, resolve_feedback
from services.models import (
    AIAnalysis,
    LanguageStat,
    PortfolioFeedback,
    Profile,
    ProfileScore,
    Repository,
)

logger = get_logger(__name__)
router = APIRouter()


class AnalyzeRequest(BaseModel):
    """Profile analysis request."""

    github_username: str = Field(
        ..., min_length=1, max_length=39, pattern=r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?$"
    )


class AnalyzeResponse(BaseModel):
    """Profile analysis response."""

    profile: Profile
    repositories: list[Repository]
    languages: list[LanguageStat]
    score: ProfileScore
    ai_analysis: Optional[AIAnalysis] = None
    feedback: PortfolioFeedback
    meta: dict


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_profile(
    body: AnalyzeRequest,
    request: Request,
    pipeline: AnalysisPipeline = Depends(get_analysis_pipeline),
    github_token: Optional[str] = Depends(get_github_token),
    ai_api_key: Optional[str] = Depends(get_ai_api_key),
) -> AnalyzeResponse:
    """Analyze a GitHub profile and return its portfolio score.

    The heuristic score is always returned. ``ai_analysis`` is null when
    the AI review was unavailable, in which case ``feedback`` carries the
    heuristic fallback content.
    """
    result = await pipeline.run(
        body.github_username,
        github_token=github_token,
        ai_api_key=ai_api_key,
    )
    feedback = resolve_feedback(result)
    request_id = request.state.request_id

    logger.info(
        "profile_analyzed",
        using_fallback=feedback.using_fallback,
    )

    return AnalyzeResponse(
        profile=result.profile,
        repositories=result.repositories,
        languages=result.languages,
        score=result.score,
        ai_analysis=result.ai_analysis,
        feedback=feedback,
        meta={
            "request_id": request_id,
            "ai_review": not feedback.using_fallback,
        },
    )
