"""Retry utilities for calls to the remote similarity service."""

import logging
import threading
import time
from typing import Callable, Optional, TypeVar

import openai

from mapping_engine.constants import TRANSIENT_STATUS_CODES
from mapping_engine.exceptions import OperationCancelledError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def get_status_code(exception: Exception) -> Optional[int]:
    """Return the HTTP status carried by an SDK error, if any."""
    status = getattr(exception, "status_code", None)
    if status is None:
        response = getattr(exception, "response", None)
        status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def is_transient_error(exception: Exception) -> bool:
    """
    Check if an exception is a transient failure that should be retried.

    Transient means a 408/429/5xx-gateway status, or the request never got a
    response (connection error or timeout).

    Args:
        exception: Exception to check

    Returns:
        True if the call should be retried
    """
    if isinstance(exception, openai.APIConnectionError):  # includes APITimeoutError
        return True

    status = get_status_code(exception)
    return status is not None and status in TRANSIENT_STATUS_CODES


def compute_backoff_delay(attempt: int, base_delay: float, backoff_factor: float = 2.0) -> float:
    """
    Delay before the retry that follows ``attempt`` (zero-based).

    Args:
        attempt: Index of the attempt that just failed
        base_delay: Delay after the first failure, in seconds
        backoff_factor: Multiplier applied per attempt

    Returns:
        Delay in seconds
    """
    return base_delay * (backoff_factor ** attempt)


def _raise_if_cancelled(cancel_event: Optional[threading.Event], description: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError(f"{description} cancelled")


def call_with_retry(
    func: Callable[[], T],
    *,
    retry_count: int,
    base_delay: float,
    backoff_factor: float = 2.0,
    is_transient: Callable[[Exception], bool] = is_transient_error,
    cancel_event: Optional[threading.Event] = None,
    description: str = "call",
) -> T:
    """
    Call ``func`` with bounded exponential backoff on transient failures.

    At most ``retry_count + 1`` attempts are made, one at a time. Waits between
    attempts block on ``cancel_event`` so a cancellation ends the loop at once.

    Args:
        func: Zero-argument callable performing one attempt
        retry_count: Number of retries after the first attempt
        base_delay: Delay after the first failure, in seconds
        backoff_factor: Multiplier for delay between retries
        is_transient: Predicate deciding whether a failure is retried
        cancel_event: Optional cancellation signal
        description: Label used in log messages

    Returns:
        Result of the first successful attempt

    Raises:
        OperationCancelledError: If cancellation is observed before an attempt or during a wait
        RetryExhaustedError: If every attempt failed transiently
        Exception: The original error of a non-transient failure
    """
    max_attempts = retry_count + 1
    attempt = 0

    while True:
        _raise_if_cancelled(cancel_event, description)
        try:
            return func()
        except Exception as e:
            if not is_transient(e):
                raise

            if attempt + 1 >= max_attempts:
                logger.error(f"{description} failed after {max_attempts} attempts: {e}")
                raise RetryExhaustedError(max_attempts, e) from e

            delay = compute_backoff_delay(attempt, base_delay, backoff_factor)
            status = get_status_code(e)
            logger.warning(
                f"{description} transient failure"
                f"{f' (status {status})' if status is not None else ''}: {e}. "
                f"Retrying in {delay:.2f}s (attempt {attempt + 1}/{max_attempts})"
            )

            if cancel_event is not None:
                if cancel_event.wait(delay):
                    raise OperationCancelledError(f"{description} cancelled during retry wait") from e
            elif delay > 0:
                time.sleep(delay)

            attempt += 1
