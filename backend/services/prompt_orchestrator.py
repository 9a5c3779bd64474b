"""Prompt Orchestrator.

Builds the portfolio review prompt and the structured-output schema
sent to the AI model.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from services.models import Profile, ReadmeSample, Repository
from services.scoring_engine import select_top_repositories

PROMPT_CONTEXT_REPOS = 5
README_SNIPPET_CHARS = 1000
NO_READMES_TEXT = "No READMEs available."

REVIEW_TEMPLATE = (
    "Act as a strict Senior Technical Recruiter and Engineering Manager.\n"
    "Analyze this GitHub profile data to determine employability and technical strength.\n\n"
    'User Bio: "{bio}"\n'
    'Location: "{location}"\n'
    "Public Repos: {public_repos}\n"
    "Followers: {followers}\n\n"
    "Top Repositories:\n"
    "{top_repos}\n\n"
    "README Contents (Snippets):\n"
    "{readme_context}\n\n"
    "Provide a structured JSON response with:\n"
    "1. A professional summary (2-3 sentences).\n"
    "2. Key strengths (3-5 bullet points).\n"
    "3. Critical weaknesses or red flags (3-5 bullet points).\n"
    "4. Actionable suggestions to improve the profile for job hunting (3-5 items).\n"
    "5. Specific feedback on the READMEs provided (clarity, structure)."
)

_STRING_LIST = {"type": "ARRAY", "items": {"type": "STRING"}}

REVIEW_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "strengths": _STRING_LIST,
        "weaknesses": _STRING_LIST,
        "suggestions": _STRING_LIST,
        "readmeFeedback": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "repoName": {"type": "STRING"},
                    "clarityScore": {"type": "NUMBER", "description": "Score out of 10"},
                    "feedback": {"type": "STRING"},
                },
                "required": ["repoName", "clarityScore", "feedback"],
            },
        },
    },
    "required": ["summary", "strengths", "weaknesses", "suggestions", "readmeFeedback"],
}


def truncate(text: str | None, length: int) -> str:
    if not text:
        return ""
    return text[:length] + "..." if len(text) > length else text


class PromptOrchestrator:
    """Builds model prompts from profile data."""

    def build_review_prompt(
        self,
        profile: Profile,
        repos: Sequence[Repository],
        readmes: Sequence[ReadmeSample],
    ) -> str:
        top_repos = [
            {
                "name": r.name,
                "description": r.description,
                "language": r.language,
                "topics": list(r.topics),
                "stars": r.stargazers_count,
            }
            for r in select_top_repositories(repos, PROMPT_CONTEXT_REPOS)
        ]

        if readmes:
            readme_context = "\n---\n".join(
                f"Repo: {r.repo_name}\nReadme Snippet: {truncate(r.content, README_SNIPPET_CHARS)}"
                for r in readmes
            )
        else:
            readme_context = NO_READMES_TEXT

        return REVIEW_TEMPLATE.format(
            bio=profile.bio or "No bio provided",
            location=profile.location or "Not specified",
            public_repos=profile.public_repos,
            followers=profile.followers,
            top_repos=json.dumps(top_repos, indent=2),
            readme_context=readme_context,
        )
