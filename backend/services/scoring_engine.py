"""Heuristic Portfolio Scoring Engine.

Scores a GitHub profile from public repository metadata across six
capped buckets that sum to at most 100:

- documentation (20), code_quality (20), activity (20)
- organization (15), impact (15), technical_depth (10)

The formula is deterministic so scores stay comparable between runs.
Strengths and weaknesses collected while scoring double as the fallback
feedback when no AI review is available.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from datetime import UTC, datetime

from app.logging_config import get_logger
from app.metrics import SCORING_DURATION
from services.models import (
    LanguageStat,
    Profile,
    ProfileScore,
    Repository,
    ScoreBreakdown,
    ScoreDetails,
)

logger = get_logger(__name__)

RECENT_ACTIVITY_DAYS = 30
SECONDS_PER_DAY = 60 * 60 * 24

# Default/throwaway repository names
LOW_EFFORT_NAME_PATTERN = re.compile(r"patch-|untitled|test|hello-world", re.IGNORECASE)

WEAKNESS_SHORT_BIO = "Missing or short profile bio"
WEAKNESS_MISSING_DESCRIPTIONS = "Many repositories lack descriptions"
WEAKNESS_NO_RECENT_ACTIVITY = "No recent activity in the last 30 days"
STRENGTH_RECENT_ACTIVITY = "Consistent recent activity"
STRENGTH_STARS = "Good community validation (Stars)"
STRENGTH_POLYGLOT = "Demonstrates polyglot versatility"


def round_half_up(value: float) -> int:
    """Round .5 upwards, so 12.5 -> 13 and 93.5 -> 94."""
    return math.floor(value + 0.5)


def text_length(text: str) -> int:
    """Length in UTF-16 code units, so astral characters such as emoji count twice."""
    return len(text.encode("utf-16-le")) // 2


def _parse_timestamp(date_str: str | None) -> datetime | None:
    if not date_str:
        return None
    try:
        parsed = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _is_recent(date_str: str | None, now: datetime) -> bool:
    """True when the timestamp lies within RECENT_ACTIVITY_DAYS of now.

    Elapsed days are rounded up, in either direction.
    """
    updated = _parse_timestamp(date_str)
    if updated is None:
        return False
    elapsed = abs((now - updated).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY) <= RECENT_ACTIVITY_DAYS


def calculate_language_stats(repos: Sequence[Repository]) -> list[LanguageStat]:
    """Aggregate primary-language usage across repositories.

    Sorted by repository count, highest first; ties keep the order in
    which languages were first seen. Repositories without a language are
    not counted.
    """
    lang_counts: dict[str, int] = {}
    for repo in repos:
        if repo.language:
            lang_counts[repo.language] = lang_counts.get(repo.language, 0) + 1

    total = sum(lang_counts.values())
    if total == 0:
        return []

    return [
        LanguageStat(
            name=lang,
            count=count,
            percentage=round_half_up(count / total * 100),
        )
        for lang, count in sorted(
            lang_counts.items(), key=lambda x: x[1], reverse=True
        )
    ]


def select_top_repositories(repos: Sequence[Repository], limit: int) -> list[Repository]:
    """Return up to ``limit`` repositories with the most stars.

    The sort is stable, so equally starred repositories keep their
    original relative order. The input is not modified.
    """
    if limit <= 0:
        return []
    return sorted(repos, key=lambda r: r.stargazers_count, reverse=True)[:limit]


class ScoringEngine:
    """Heuristic profile scoring engine."""

    @SCORING_DURATION.time()
    def score_profile(
        self,
        profile: Profile,
        repos: Sequence[Repository],
        now: datetime | None = None,
    ) -> ProfileScore:
        """Score a profile and its repositories.

        Args:
            profile: Account data from GitHubService
            repos: Owned repositories; callers guarantee at least one
            now: Evaluation time for the recency check (defaults to UTC now)

        Returns:
            Total, per-bucket breakdown and collected strengths/weaknesses
        """
        now = now or datetime.now(UTC)
        strengths: list[str] = []
        weaknesses: list[str] = []

        breakdown = ScoreBreakdown(
            documentation=self._score_documentation(profile, repos, weaknesses),
            code_quality=self._score_code_quality(repos),
            activity=self._score_activity(profile, repos, now, strengths, weaknesses),
            organization=self._score_organization(repos),
            impact=self._score_impact(profile, repos, strengths),
            technical_depth=self._score_technical_depth(repos, strengths),
        )
        total = round_half_up(sum(breakdown.bucket_values()))

        logger.debug("profile_scored", total=total, repo_count=len(repos))

        return ProfileScore(
            total=total,
            breakdown=breakdown,
            details=ScoreDetails(strengths=strengths, weaknesses=weaknesses),
        )

    @staticmethod
    def _ratio(matching: int, repos: Sequence[Repository]) -> float:
        return matching / len(repos) if repos else 0.0

    def _score_documentation(
        self,
        profile: Profile,
        repos: Sequence[Repository],
        weaknesses: list[str],
    ) -> float:
        """Bio (5), external link (5), description coverage (10)."""
        score = 0.0

        if profile.bio and text_length(profile.bio) > 10:
            score += 5
        else:
            weaknesses.append(WEAKNESS_SHORT_BIO)

        if profile.blog:
            score += 5

        described = sum(1 for r in repos if r.description and text_length(r.description) > 5)
        desc_ratio = self._ratio(described, repos)
        score += min(10, desc_ratio * 10)

        if desc_ratio < 0.5:
            weaknesses.append(WEAKNESS_MISSING_DESCRIPTIONS)

        return score

    def _score_code_quality(self, repos: Sequence[Repository]) -> float:
        """License coverage (10) and topic coverage (10)."""
        licensed = sum(1 for r in repos if r.license)
        with_topics = sum(1 for r in repos if r.topics)
        return min(10, self._ratio(licensed, repos) * 10) + min(
            10, self._ratio(with_topics, repos) * 10
        )

    def _score_activity(
        self,
        profile: Profile,
        repos: Sequence[Repository],
        now: datetime,
        strengths: list[str],
        weaknesses: list[str],
    ) -> float:
        """Public repo count (10, at 20 repos) and recent updates (10, at 5 repos)."""
        score = min(10, profile.public_repos * 0.5)

        recent = sum(1 for r in repos if _is_recent(r.updated_at, now))
        score += min(10, recent * 2)

        if recent == 0:
            weaknesses.append(WEAKNESS_NO_RECENT_ACTIVITY)
        else:
            strengths.append(STRENGTH_RECENT_ACTIVITY)

        return score

    def _score_organization(self, repos: Sequence[Repository]) -> float:
        """No throwaway names (5) and description length as a proxy (10)."""
        score = 0.0

        low_effort = sum(1 for r in repos if LOW_EFFORT_NAME_PATTERN.search(r.name))
        if low_effort == 0:
            score += 5

        total_desc_len = sum(text_length(r.description) if r.description else 0 for r in repos)
        avg_desc_len = total_desc_len / (len(repos) or 1)
        score += min(10, avg_desc_len / 5)

        return score

    def _score_impact(
        self,
        profile: Profile,
        repos: Sequence[Repository],
        strengths: list[str],
    ) -> float:
        """Stars (8, at 16 stars) and followers (7, at 14 followers)."""
        total_stars = sum(r.stargazers_count for r in repos)
        score = min(8, total_stars * 0.5) + min(7, profile.followers * 0.5)

        if total_stars > 10:
            strengths.append(STRENGTH_STARS)

        return score

    def _score_technical_depth(
        self,
        repos: Sequence[Repository],
        strengths: list[str],
    ) -> float:
        """Language diversity: 10 for three or more, 7 for two, else 4."""
        languages = {r.language for r in repos if r.language}
        if len(languages) >= 3:
            strengths.append(STRENGTH_POLYGLOT)
            return 10
        if len(languages) == 2:
            return 7
        return 4
