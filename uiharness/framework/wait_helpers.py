# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# This module provides the condition-polling primitives the harness uses instead
# of bare fixed delays.
#
# Key Features:
#   - Bounded polling of a (success, result) check function
#   - Optional exponential backoff between attempts
#   - Settle waits that return early once a condition holds
#   - Monotonic clock, never raises before the configured timeout
#
# Usage:
#   locator = await poll_until(check_visible, timeout=5.0, description="nav")
#   await settle(0.5, until=lambda: page_has_result())
#
# ================================================================================

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar, Union

from loguru import logger


T = TypeVar("T")

CheckResult = Tuple[bool, Any]
CheckFn = Callable[[], Union[CheckResult, Awaitable[CheckResult]]]


@dataclass
class PollConfig:
    """
    Configuration for polling operations.

    Attributes:
        interval: Initial interval between attempts in seconds
        multiplier: Multiplier applied to the interval after each attempt
        max_interval: Maximum interval between attempts
    """
    interval: float = 0.1
    multiplier: float = 1.0
    max_interval: float = 1.0


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""

    def __init__(self, description: str, elapsed: float, attempts: int):
        self.description = description
        self.elapsed = elapsed
        self.attempts = attempts
        super().__init__(
            f"Timeout after {elapsed:.2f}s ({attempts} attempts): {description}"
        )


def calculate_next_interval(current_interval: float, config: PollConfig) -> float:
    """Next interval with exponential backoff, capped at max_interval."""
    return min(current_interval * config.multiplier, config.max_interval)


async def _call(check_fn: CheckFn) -> CheckResult:
    result = check_fn()
    if inspect.isawaitable(result):
        result = await result
    return result


async def poll_until(
    check_fn: CheckFn,
    timeout: float,
    description: str = "Waiting for condition",
    config: Optional[PollConfig] = None,
) -> Any:
    """
    Poll a condition until it succeeds or the timeout elapses.

    The check function may be sync or async and must return
    ``(success, result)``. Exceptions raised by the check propagate
    immediately; they are not retried.

    Args:
        check_fn: Function returning (success: bool, result)
        timeout: Total budget in seconds
        description: Human-readable description for logging
        config: Optional PollConfig

    Returns:
        The result from check_fn on the first successful attempt

    Raises:
        WaitTimeoutError: If the budget is spent without success. Never raised
            before ``timeout`` seconds have elapsed.
    """
    config = config or PollConfig()
    start = time.monotonic()
    interval = config.interval
    attempts = 0

    while True:
        attempts += 1
        success, result = await _call(check_fn)
        if success:
            logger.debug(
                f"Condition met after {attempts} attempt(s) "
                f"({time.monotonic() - start:.2f}s): {description}"
            )
            return result

        elapsed = time.monotonic() - start
        if elapsed >= timeout:
            raise WaitTimeoutError(description, elapsed, attempts)

        await asyncio.sleep(min(interval, timeout - elapsed))
        interval = calculate_next_interval(interval, config)


async def settle(
    delay: float,
    until: Optional[Callable[[], Union[bool, Awaitable[bool]]]] = None,
    config: Optional[PollConfig] = None,
) -> bool:
    """
    Yield control so asynchronous UI updates can complete.

    Without ``until`` this is a fixed pause of ``delay`` seconds. With
    ``until`` the delay becomes an upper bound: the wait returns as soon as
    the predicate holds.

    Returns:
        True if the predicate held (or none was given), False if the bound
        was reached first
    """
    if until is None:
        if delay > 0:
            await asyncio.sleep(delay)
        return True

    async def check() -> CheckResult:
        value = until()
        if inspect.isawaitable(value):
            value = await value
        return bool(value), None

    try:
        await poll_until(check, timeout=delay, description="settle", config=config)
        return True
    except WaitTimeoutError:
        logger.debug(f"Settle condition not met within {delay:.2f}s, continuing")
        return False


__all__ = [
    "PollConfig",
    "WaitTimeoutError",
    "calculate_next_interval",
    "poll_until",
    "settle",
]
