"""Retry eligibility rules shared by every pipeline stage."""

from __future__ import annotations

import httpx

from vehicle_catalog.core.exceptions.base import DatastoreError, NetworkError

RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})

# timeout, connection reset / dropped by peer, host not found / unreachable
RETRYABLE_TRANSPORT_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.ConnectError,
    httpx.ReadError,
    httpx.WriteError,
    httpx.RemoteProtocolError,
)

# Heuristic over the storage library's error text; not a stable contract.
DATASTORE_RETRYABLE_MARKERS = ("connection", "timeout", "econnrefused")


def is_retryable_error(error: object) -> bool:
    """Return whether ``error`` may succeed if the operation is attempted again.

    Classified pipeline errors carry their own verdict. Raw httpx errors are
    judged by failure class or response status. Anything else, including
    ``None`` and non-exception values, is not retryable.
    """

    if isinstance(error, (NetworkError, DatastoreError)):
        return error.retryable
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRYABLE_STATUS_CODES
    if isinstance(error, RETRYABLE_TRANSPORT_ERRORS):
        return True
    return False


def is_connection_failure_message(message: str) -> bool:
    """Guess from a storage error message whether it was a connection problem."""

    lowered = message.lower()
    return any(marker in lowered for marker in DATASTORE_RETRYABLE_MARKERS)


__all__ = [
    "RETRYABLE_STATUS_CODES",
    "RETRYABLE_TRANSPORT_ERRORS",
    "is_connection_failure_message",
    "is_retryable_error",
]
