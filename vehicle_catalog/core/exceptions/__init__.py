"""Exception handling module."""

from vehicle_catalog.core.exceptions.base import (
    CatalogError,
    DatastoreError,
    NetworkError,
    TransformationError,
    XmlParsingError,
)
from vehicle_catalog.core.exceptions.retryable import (
    RETRYABLE_STATUS_CODES,
    is_connection_failure_message,
    is_retryable_error,
)

__all__ = [
    "CatalogError",
    "NetworkError",
    "XmlParsingError",
    "TransformationError",
    "DatastoreError",
    "RETRYABLE_STATUS_CODES",
    "is_connection_failure_message",
    "is_retryable_error",
]
