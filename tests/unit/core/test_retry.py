"""Tests for retry patterns."""

import httpx
import pytest

from doctalk.core.resilience import TRANSIENT_HTTP_ERRORS, retry_local_service, retry_with_backoff


def flaky(failures: int, error: Exception):
    """Callable failing `failures` times with `error`, then returning "ok"."""
    calls = []

    def call():
        calls.append(1)
        if len(calls) <= failures:
            raise error
        return "ok"

    return call, calls


def fast(**kwargs):
    return retry_with_backoff(min_wait=0.01, max_wait=0.05, log_retries=False, **kwargs)


class TestRetryWithBackoff:
    def test_first_success_not_retried(self):
        call, calls = flaky(0, ValueError())

        assert fast(max_attempts=3)(call)() == "ok"
        assert len(calls) == 1

    def test_recovers_within_attempts(self):
        call, calls = flaky(2, ValueError("fail"))

        assert fast(max_attempts=3)(call)() == "ok"
        assert len(calls) == 3

    def test_reraises_last_error_when_exhausted(self):
        call, calls = flaky(5, ValueError("always fails"))

        with pytest.raises(ValueError, match="always fails"):
            fast(max_attempts=3)(call)()

        assert len(calls) == 3

    def test_other_exceptions_not_retried(self):
        call, calls = flaky(1, ValueError("not retryable"))

        with pytest.raises(ValueError):
            fast(max_attempts=3, exceptions=(ConnectionError,))(call)()

        assert len(calls) == 1

    def test_listed_exception_retried(self):
        call, calls = flaky(1, ConnectionError("refused"))

        assert fast(max_attempts=3, exceptions=(ConnectionError,))(call)() == "ok"
        assert len(calls) == 2


class TestRetryLocalService:
    def test_connection_errors_are_transient(self):
        assert httpx.ConnectError in TRANSIENT_HTTP_ERRORS
        assert httpx.HTTPStatusError not in TRANSIENT_HTTP_ERRORS

    def test_retries_connection_error(self):
        call, calls = flaky(1, httpx.ConnectError("refused"))

        assert retry_local_service(call)() == "ok"
        assert len(calls) == 2

    def test_status_error_not_retried(self):
        request = httpx.Request("POST", "http://localhost:11434/api/generate")
        error = httpx.HTTPStatusError("boom", request=request, response=httpx.Response(500, request=request))
        call, calls = flaky(1, error)

        with pytest.raises(httpx.HTTPStatusError):
            retry_local_service(call)()

        assert len(calls) == 1
