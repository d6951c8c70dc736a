"""Resilience patterns."""

from vehicle_catalog.core.patterns.retry import (
    ExponentialBackoffRetry,
    RetryConfig,
    RetryState,
    with_retry,
)

__all__ = ["ExponentialBackoffRetry", "RetryConfig", "RetryState", "with_retry"]
