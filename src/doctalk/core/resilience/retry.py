"""Exponential backoff for calls to services that may be briefly unreachable."""

import logging
from typing import Callable, TypeVar, ParamSpec, Type, Tuple

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_sleep_log,
)

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

__all__ = [
    "retry_with_backoff",
    "retry_local_service",
    "TRANSIENT_HTTP_ERRORS",
]

# Connection-level failures worth another attempt; HTTP status errors are not
TRANSIENT_HTTP_ERRORS: Tuple[Type[Exception], ...] = (
    httpx.ConnectError,
    httpx.ReadTimeout,
    httpx.RemoteProtocolError,
)


def retry_with_backoff(
    max_attempts: int = 3,
    min_wait: float = 1.0,
    max_wait: float = 30.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    log_retries: bool = True,
):
    """
    Retry decorator with jittered exponential backoff.

    The last exception is re-raised once attempts are exhausted.

    Args:
        max_attempts: Total attempts, the first call included
        min_wait: First wait (seconds)
        max_wait: Upper bound of any wait (seconds)
        exceptions: Exception types that trigger a retry
        log_retries: Log a warning before each wait

    Usage:
        @retry_with_backoff(max_attempts=3, exceptions=(ConnectionError,))
        def call_service():
            ...
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential_jitter(initial=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING) if log_retries else None,
        reraise=True,
    )


def retry_local_service(func: Callable[P, T]) -> Callable[P, T]:
    """Three attempts, 0.5s to 5s apart, on connection-level HTTP failures (Ollama)."""
    return retry_with_backoff(
        max_attempts=3,
        min_wait=0.5,
        max_wait=5.0,
        exceptions=TRANSIENT_HTTP_ERRORS,
    )(func)
