"""
Bounded retry helper.

Retries are immediate: there is no backoff or delay between attempts.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from tenacity import Retrying, before_sleep_log, retry_if_exception, stop_after_attempt

from logging_config import get_logger

T = TypeVar("T")

logger = get_logger("core.retry")


def call_with_retries(
    func: Callable[[], T],
    max_attempts: int,
    is_retryable: Callable[[BaseException], bool],
) -> T:
    """
    Call func until it succeeds or attempts run out.

    Args:
        func: Zero-argument callable performing one attempt
        max_attempts: Total number of attempts, including the first
        is_retryable: Predicate deciding whether an error earns another attempt

    Returns:
        Whatever func returns on the first successful attempt

    Raises:
        The error from the last attempt, or the first non-retryable error
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    retrying = Retrying(
        stop=stop_after_attempt(max_attempts),
        retry=retry_if_exception(is_retryable),
        reraise=True,
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
    return retrying(func)
