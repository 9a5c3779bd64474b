"""Shared API dependencies.

Extracts caller-supplied credentials from request headers. Credentials
are opaque strings forwarded as given; request values take precedence
over configured ones.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header

from app.config import Settings, first_credential, get_settings


def get_github_token(
    x_github_token: Optional[str] = Header(None),
) -> Optional[str]:
    """Per-request GitHub token; the service applies the configured default."""
    return first_credential(x_github_token)


def get_ai_api_key(
    x_ai_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> Optional[str]:
    """AI key from the request header, else from configuration."""
    return first_credential(x_ai_api_key, settings.gemini_api_key)
