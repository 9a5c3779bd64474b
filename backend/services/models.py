"""Domain records for profile analysis.

Profile and Repository mirror the GitHub REST payloads; unknown fields
are ignored. Every record is frozen once built.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Profile(_Frozen):
    """Account-level attributes of the analyzed GitHub user."""

    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    html_url: Optional[str] = None
    bio: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None
    email: Optional[str] = None
    public_repos: int = 0
    public_gists: int = 0
    followers: int = 0
    following: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RepositoryLicense(_Frozen):
    key: str = ""
    name: str = ""
    spdx_id: Optional[str] = None
    url: Optional[str] = None


class Repository(_Frozen):
    """One owned repository as returned by /users/{user}/repos."""

    name: str
    full_name: Optional[str] = None
    html_url: Optional[str] = None
    description: Optional[str] = None
    language: Optional[str] = None
    homepage: Optional[str] = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    size: int = 0
    topics: list[str] = Field(default_factory=list)
    license: Optional[RepositoryLicense] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    pushed_at: Optional[str] = None
    fork: bool = False
    archived: bool = False
    disabled: bool = False
    private: bool = False

    @field_validator("topics", mode="before")
    @classmethod
    def _none_topics(cls, v: object) -> object:
        return [] if v is None else v


class LanguageStat(_Frozen):
    name: str
    count: int
    percentage: int


class ScoreBreakdown(_Frozen):
    """Six capped buckets; caps are listed in BUCKET_MAXIMA."""

    documentation: float = 0.0
    code_quality: float = 0.0
    activity: float = 0.0
    organization: float = 0.0
    impact: float = 0.0
    technical_depth: float = 0.0

    def bucket_values(self) -> list[float]:
        return [getattr(self, bucket) for bucket in BUCKET_MAXIMA]


BUCKET_MAXIMA: dict[str, int] = {
    "documentation": 20,
    "code_quality": 20,
    "activity": 20,
    "organization": 15,
    "impact": 15,
    "technical_depth": 10,
}


class ScoreDetails(_Frozen):
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)


class ProfileScore(_Frozen):
    total: int
    breakdown: ScoreBreakdown
    details: ScoreDetails


class ReadmeSample(_Frozen):
    """README text of one repository, as sent to the AI reviewer."""

    repo_name: str
    content: str


class ReadmeFeedback(_Frozen):
    repo_name: str = Field(alias="repoName")
    clarity_score: float = Field(alias="clarityScore")
    feedback: str

    @field_validator("clarity_score")
    @classmethod
    def _clamp_score(cls, v: float) -> float:
        return max(0.0, min(10.0, v))


class AIAnalysis(_Frozen):
    """Narrative review returned by the AI reviewer."""

    summary: str
    strengths: list[str]
    weaknesses: list[str]
    suggestions: list[str]
    readme_feedback: list[ReadmeFeedback] = Field(alias="readmeFeedback")


class AnalysisResult(_Frozen):
    """Everything one analysis run produced.

    ``ai_analysis`` is None when the AI path was unavailable; consumers
    derive the fallback view with ``resolve_feedback``.
    """

    profile: Profile
    repositories: list[Repository]
    languages: list[LanguageStat]
    score: ProfileScore
    ai_analysis: Optional[AIAnalysis] = None


class PortfolioFeedback(_Frozen):
    """Strengths, weaknesses and suggestions as shown to the user."""

    strengths: list[str]
    weaknesses: list[str]
    suggestions: list[str]
    readme_feedback: list[ReadmeFeedback]
    using_fallback: bool
    readiness: str
