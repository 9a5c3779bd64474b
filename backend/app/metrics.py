"""Prometheus metrics for monitoring.

Tracks request latency, GitHub and model call outcomes, scoring time,
and how often analyses fall back to the heuristic baseline.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram, Info

# Application info
APP_INFO = Info("gitfolio_app", "GitFolio application info")

# HTTP metrics
HTTP_REQUESTS_TOTAL = Counter(
    "gitfolio_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION = Histogram(
    "gitfolio_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# GitHub API metrics
GITHUB_API_CALLS = Counter(
    "gitfolio_github_api_calls_total",
    "Total GitHub API calls",
    ["endpoint", "status"],
)

GITHUB_API_DURATION = Histogram(
    "gitfolio_github_api_duration_seconds",
    "GitHub API call duration",
    ["endpoint"],
)

# Model connector metrics
MODEL_CALLS = Counter(
    "gitfolio_model_calls_total",
    "Total AI model API calls",
    ["provider", "model", "status"],
)

MODEL_CALL_DURATION = Histogram(
    "gitfolio_model_call_duration_seconds",
    "AI model API call duration",
    ["provider", "model"],
    buckets=(0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

# Scoring metrics
SCORING_DURATION = Histogram(
    "gitfolio_scoring_duration_seconds",
    "Profile scoring duration",
)

ANALYSES_TOTAL = Counter(
    "gitfolio_analyses_total",
    "Completed profile analyses by AI outcome",
    ["outcome"],
)
