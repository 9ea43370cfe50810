"""Utility for logging outbound API requests when FINE_DUST_LOG_REQUESTS is enabled."""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"

# Upstream APIs take their credentials as query parameters
SENSITIVE_PARAMS = {"servicekey", "appid", "api_key", "apikey", "key"}
SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}


def should_log_requests() -> bool:
    """Check if request logging is enabled via FINE_DUST_LOG_REQUESTS environment variable."""
    return os.getenv("FINE_DUST_LOG_REQUESTS", "").lower() == "true"


def redact_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Replace credential query parameters with a placeholder."""
    if not params:
        return {}
    return {k: REDACTED if k.lower() in SENSITIVE_PARAMS else v for k, v in params.items()}


def _redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers from logging."""
    return {k: REDACTED if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}


def build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build full URL with redacted query parameters, sorted by name."""
    safe_params = redact_params(params)
    if not safe_params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(safe_params.items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    attempt: int = 1,
) -> None:
    """Log API request details if FINE_DUST_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters (optional, credentials are redacted).
        headers: Request headers (optional, sensitive headers are redacted).
        attempt: 1-based attempt number, logged when retrying.
    """
    if not should_log_requests():
        return

    full_url = build_url_with_params(url, params)
    log_parts = [f"{method} {full_url}"]
    if attempt > 1:
        log_parts.append(f"Attempt: {attempt}")

    if headers:
        safe_headers = _redact_sensitive_headers(headers)
        log_parts.append(f"Headers: {json.dumps(safe_headers, indent=2)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
