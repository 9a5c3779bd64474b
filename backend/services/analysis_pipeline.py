"""Profile analysis pipeline.

Sequences one analysis run:

1. Fetch profile and repositories (errors propagate)
2. Reject empty portfolios
3. Compute language stats and the heuristic score
4. Fetch READMEs of the three most starred repositories concurrently
5. Request the optional AI review
6. Assemble the AnalysisResult

The heuristic score never depends on the AI outcome. ``resolve_feedback``
derives what the user sees when the AI review is absent.
"""

from __future__ import annotations

import asyncio
from datetime import datetime

from app.exceptions import EmptyPortfolioError
from app.logging_config import get_logger
from app.metrics import ANALYSES_TOTAL
from services.ai_reviewer import AIReviewer
from services.github_service import GitHubService
from services.models import (
    AnalysisResult,
    PortfolioFeedback,
    Profile,
    ReadmeSample,
    Repository,
)
from services.scoring_engine import (
    ScoringEngine,
    calculate_language_stats,
    select_top_repositories,
)

logger = get_logger(__name__)

README_SAMPLE_REPOS = 3

DEFAULT_SUGGESTIONS = (
    "Add detailed READMEs to your top repositories.",
    "Contribute to open source projects to boost activity.",
    "Ensure all repositories have a description and topics.",
    "Add a professional bio and location to your profile.",
)


def readiness_label(total: int) -> str:
    if total > 80:
        return "Recruiter Ready"
    if total > 60:
        return "Needs Polish"
    return "Needs Improvement"


def resolve_feedback(result: AnalysisResult) -> PortfolioFeedback:
    """Pick the feedback to display for an analysis result.

    An AI review is shown verbatim. Without one, the heuristic strengths
    and weaknesses are used with the generic suggestions and no README
    feedback.
    """
    readiness = readiness_label(result.score.total)
    ai = result.ai_analysis
    if ai is not None:
        return PortfolioFeedback(
            strengths=list(ai.strengths),
            weaknesses=list(ai.weaknesses),
            suggestions=list(ai.suggestions),
            readme_feedback=list(ai.readme_feedback),
            using_fallback=False,
            readiness=readiness,
        )
    return PortfolioFeedback(
        strengths=list(result.score.details.strengths),
        weaknesses=list(result.score.details.weaknesses),
        suggestions=list(DEFAULT_SUGGESTIONS),
        readme_feedback=[],
        using_fallback=True,
        readiness=readiness,
    )


class AnalysisPipeline:
    """Runs a full profile analysis against GitHub and the AI reviewer."""

    def __init__(
        self,
        github: GitHubService,
        reviewer: AIReviewer,
        scoring_engine: ScoringEngine | None = None,
    ) -> None:
        self.github = github
        self.reviewer = reviewer
        self.scoring_engine = scoring_engine or ScoringEngine()

    async def run(
        self,
        username: str,
        github_token: str | None = None,
        ai_api_key: str | None = None,
        now: datetime | None = None,
    ) -> AnalysisResult:
        """Analyze one GitHub user.

        Raises:
            GitHubUserNotFoundError, GitHubAuthError, GitHubRateLimitError,
            GitHubAPIError: profile or repository fetch failed
            EmptyPortfolioError: the user owns no public repositories
        """
        profile = await self.github.fetch_profile(username, github_token)
        repos = await self.github.fetch_repositories(username, github_token)

        if not repos:
            raise EmptyPortfolioError()

        languages = calculate_language_stats(repos)
        score = self.scoring_engine.score_profile(profile, repos, now=now)

        readmes = await self._sample_readmes(profile, repos, github_token)
        ai_analysis = await self.reviewer.review(profile, repos, readmes, ai_api_key)

        outcome = "ai" if ai_analysis is not None else "fallback"
        ANALYSES_TOTAL.labels(outcome=outcome).inc()
        logger.info(
            "analysis_completed",
            total_score=score.total,
            repo_count=len(repos),
            readme_samples=len(readmes),
            ai_outcome=outcome,
        )

        return AnalysisResult(
            profile=profile,
            repositories=list(repos),
            languages=languages,
            score=score,
            ai_analysis=ai_analysis,
        )

    async def _sample_readmes(
        self,
        profile: Profile,
        repos: list[Repository],
        github_token: str | None,
    ) -> list[ReadmeSample]:
        """Fetch READMEs of the most starred repositories.

        A failed fetch counts as empty content; empty samples are dropped.
        """
        top_repos = select_top_repositories(repos, README_SAMPLE_REPOS)
        contents = await asyncio.gather(
            *(self._fetch_readme_text(profile.login, r.name, github_token) for r in top_repos)
        )
        return [
            ReadmeSample(repo_name=repo.name, content=content)
            for repo, content in zip(top_repos, contents)
            if content
        ]

    async def _fetch_readme_text(
        self, owner: str, repo_name: str, github_token: str | None
    ) -> str:
        try:
            return await self.github.fetch_readme(owner, repo_name, github_token) or ""
        except Exception:
            logger.warning("readme_sample_failed", repo=repo_name)
            return ""
