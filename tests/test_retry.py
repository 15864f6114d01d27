"""Tests for the bounded retry loop."""

import threading

import pytest

from mapping_engine.exceptions import OperationCancelledError, RetryExhaustedError
from mapping_engine.utils.retry import (
    call_with_retry,
    compute_backoff_delay,
    get_status_code,
    is_transient_error,
)
from tests.fakes import make_connection_error, make_status_error, make_timeout_error


class Flaky:
    """Callable that raises the queued errors before returning ``result``."""

    def __init__(self, errors, result="ok"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


def test_backoff_doubles_per_attempt():
    assert compute_backoff_delay(0, 0.4) == pytest.approx(0.4)
    assert compute_backoff_delay(1, 0.4) == pytest.approx(0.8)
    assert compute_backoff_delay(2, 0.4) == pytest.approx(1.6)


class TestTransientErrors:
    @pytest.mark.parametrize("status", [408, 429, 500, 502, 503, 504])
    def test_transient_statuses(self, status):
        error = make_status_error(status)
        assert get_status_code(error) == status
        assert is_transient_error(error)

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
    def test_permanent_statuses(self, status):
        assert not is_transient_error(make_status_error(status))

    def test_no_response_is_transient(self):
        assert is_transient_error(make_connection_error())
        assert is_transient_error(make_timeout_error())

    def test_unrelated_errors_are_not_transient(self):
        assert not is_transient_error(ValueError("boom"))


class TestCallWithRetry:
    def test_success_after_transient_failure(self):
        func = Flaky([make_status_error(429)])
        assert call_with_retry(func, retry_count=2, base_delay=0) == "ok"
        assert func.calls == 2

    def test_exhaustion_after_retry_count_plus_one_attempts(self):
        func = Flaky([make_status_error(503)] * 5)
        with pytest.raises(RetryExhaustedError) as exc_info:
            call_with_retry(func, retry_count=2, base_delay=0)
        assert func.calls == 3
        assert exc_info.value.attempts == 3
        assert get_status_code(exc_info.value.last_error) == 503

    def test_zero_retries_means_one_attempt(self):
        func = Flaky([make_connection_error()])
        with pytest.raises(RetryExhaustedError):
            call_with_retry(func, retry_count=0, base_delay=0)
        assert func.calls == 1

    def test_permanent_failure_is_not_retried(self):
        error = make_status_error(401)
        func = Flaky([error])
        with pytest.raises(type(error)):
            call_with_retry(func, retry_count=3, base_delay=0)
        assert func.calls == 1

    def test_cancelled_before_first_attempt(self):
        cancel = threading.Event()
        cancel.set()
        func = Flaky([])
        with pytest.raises(OperationCancelledError):
            call_with_retry(func, retry_count=2, base_delay=0, cancel_event=cancel)
        assert func.calls == 0

    def test_cancelled_during_backoff_wait(self):
        cancel = threading.Event()

        def fail_and_cancel():
            cancel.set()
            raise make_status_error(503)

        with pytest.raises(OperationCancelledError):
            call_with_retry(fail_and_cancel, retry_count=3, base_delay=5.0, cancel_event=cancel)

    def test_custom_transient_predicate(self):
        func = Flaky([KeyError("retry me")])
        result = call_with_retry(
            func,
            retry_count=1,
            base_delay=0,
            is_transient=lambda e: isinstance(e, KeyError),
        )
        assert result == "ok"
        assert func.calls == 2
