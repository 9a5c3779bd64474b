"""Structured logging configuration using structlog.

Provides JSON logging in production and colorized console output in development.
Credential fields, credential-shaped values and the analyzed handle are
automatically filtered.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog

from app.config import Environment, get_settings


def _filter_sensitive_data(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Remove credential fields from log events."""
    sensitive_keys = {
        "api_key",
        "password",
        "secret",
        "token",
        "authorization",
        "credential",
    }
    for key in list(event_dict.keys()):
        if any(s in key.lower() for s in sensitive_keys):
            event_dict[key] = "[REDACTED]"
    return event_dict


# Credentials that can surface inside free-text values such as error strings:
# GitHub tokens and the Gemini key, which travels as the ``key`` query param.
_CREDENTIAL_VALUE_PATTERN = re.compile(
    r"(?:github_pat_|ghp_|gho_)[A-Za-z0-9_]+|AIza[0-9A-Za-z_-]{8,}|(?<=[?&]key=)[^&\s\"']+"
)


def _scrub_credential_values(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask credentials embedded in string values."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _CREDENTIAL_VALUE_PATTERN.sub("[REDACTED]", value)
    return event_dict


def _filter_pii(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Remove account identifiers from log events."""
    pii_keys = {"username", "github_username", "login", "email"}
    for key in list(event_dict.keys()):
        if key in pii_keys:
            event_dict[key] = "[PII_REDACTED]"
    return event_dict


def setup_logging() -> None:
    """Configure structured logging for the application."""
    settings = get_settings()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _filter_sensitive_data,
        _scrub_credential_values,
        _filter_pii,
    ]

    if settings.environment == Environment.PRODUCTION:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level.upper()))

    # Suppress noisy loggers
    for logger_name in ("uvicorn.access", "httpx", "httpcore"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
