"""Resilience patterns for calls to local services."""

from doctalk.core.resilience.retry import (
    retry_with_backoff,
    retry_local_service,
    TRANSIENT_HTTP_ERRORS,
)

__all__ = [
    "retry_with_backoff",
    "retry_local_service",
    "TRANSIENT_HTTP_ERRORS",
]
