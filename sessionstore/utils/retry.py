# ==============================================================================
# Retry Policy for Connectivity Probes
# ==============================================================================
"""
Tenacity-based retry used by the CLI's connectivity probes.

Session and timestamp store operations never retry; their failures reach
the caller on the first attempt. Probes retry briefly so a service that is
still starting is not reported as down.

Default: 3 attempts, exponential backoff of 1s then 2s (capped at 4s).
"""

import logging
from typing import Tuple, Type

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

PROBE_ATTEMPTS = 3
PROBE_WAIT_MIN = 1  # seconds
PROBE_WAIT_MAX = 4  # seconds


def log_probe_retry(logger: logging.Logger, attempts: int):
    """Build a before_sleep callback naming the probe and the failed attempt."""

    def _log(retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        name = getattr(retry_state.fn, "__name__", "probe")
        logger.warning(
            "%s failed (attempt %d/%d): %s",
            name,
            retry_state.attempt_number,
            attempts,
            exception,
        )

    return _log


def retry_light(
    exception_types: Tuple[Type[Exception], ...],
    logger: logging.Logger,
    attempts: int = PROBE_ATTEMPTS,
):
    """
    Retry decorator for connectivity probes.

    Only the listed exception types are retried; anything else, and the
    last failure, is re-raised unchanged.

    Example:
        @retry_light((RedisConnectionError,), logger)
        def _probe_valkey():
            ...
    """
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=PROBE_WAIT_MIN, max=PROBE_WAIT_MAX),
        retry=retry_if_exception_type(exception_types),
        before_sleep=log_probe_retry(logger, attempts),
        reraise=True,
    )
