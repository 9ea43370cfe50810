"""Shared outbound HTTP plumbing."""

from fine_dust.adapters.http.json_http_client import JsonHttpClient, is_retryable

__all__ = ["JsonHttpClient", "is_retryable"]
