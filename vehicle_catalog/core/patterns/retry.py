"""Exponential backoff retry gated by the error taxonomy."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from vehicle_catalog.core.exceptions import is_retryable_error
from vehicle_catalog.core.logging import get_logger

if TYPE_CHECKING:
    from loguru import Logger

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[Any]]


class RetryState(Enum):
    """Lifecycle of one retried operation."""

    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class RetryConfig:
    """Retry configuration."""

    max_attempts: int = 3
    base_delay: float = 1.0  # seconds
    exponential_base: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after failed ``attempt`` (1-based) before the next one."""

        return self.base_delay * (self.exponential_base ** (attempt - 1))


class ExponentialBackoffRetry:
    """Runs an operation until it succeeds, fails terminally, or attempts run out."""

    def __init__(
        self,
        config: RetryConfig | None = None,
        *,
        logger: Logger | None = None,
        sleep: SleepFunc | None = None,
    ):
        self.config = config or RetryConfig()
        self.logger = logger or get_logger("retry")
        self._sleep = sleep or asyncio.sleep
        self.attempt_count = 0
        self.total_delay = 0.0
        self.state = RetryState.READY
        self.last_exception: BaseException | None = None

    async def execute(self, operation: Callable[[], Awaitable[T]], label: str) -> T:
        """Invoke ``operation`` applying the retry policy.

        Args:
            operation: Zero-argument coroutine factory
            label: Operation name used in retry warnings

        Returns:
            The operation's result

        Raises:
            Exception: The first non-retryable error, or the last error once
                ``max_attempts`` is reached
        """
        self.state = RetryState.RUNNING
        self.attempt_count = 0
        self.total_delay = 0.0

        while True:
            self.attempt_count += 1
            try:
                result = await operation()
            except Exception as exc:
                self.last_exception = exc
                if not is_retryable_error(exc) or self.attempt_count >= self.config.max_attempts:
                    self.state = RetryState.FAILED
                    raise

                delay = self.config.delay_for(self.attempt_count)
                self.logger.warning(
                    f"{label} failed, retrying",
                    attempt=self.attempt_count,
                    max_attempts=self.config.max_attempts,
                    retry_delay_ms=int(delay * 1000),
                    error=str(exc),
                )
                await self._sleep(delay)
                self.total_delay += delay
            else:
                self.state = RetryState.COMPLETED
                return result

    def get_stats(self) -> dict[str, Any]:
        """Return retry statistics for the last execution."""

        return {
            "attempts": self.attempt_count,
            "max_attempts": self.config.max_attempts,
            "total_delay": self.total_delay,
            "state": self.state.value,
            "last_exception": str(self.last_exception) if self.last_exception else None,
        }

    def reset(self) -> None:
        """Reset retry state."""

        self.attempt_count = 0
        self.total_delay = 0.0
        self.state = RetryState.READY
        self.last_exception = None


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    label: str,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    *,
    logger: Logger | None = None,
    sleep: SleepFunc | None = None,
) -> T:
    """Run ``operation`` with bounded exponential backoff.

    Delays are ``base_delay * 2 ** (attempt - 1)`` seconds with no jitter; the
    last attempt is never followed by a delay.
    """

    config = RetryConfig(max_attempts=max_attempts, base_delay=base_delay)
    return await ExponentialBackoffRetry(config, logger=logger, sleep=sleep).execute(operation, label)


__all__ = ["ExponentialBackoffRetry", "RetryConfig", "RetryState", "SleepFunc", "with_retry"]
