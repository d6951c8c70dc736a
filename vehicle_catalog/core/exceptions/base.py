"""Core exception types for the vehicle catalog ingestion pipeline."""

from __future__ import annotations

from typing import Any


class CatalogError(Exception):
    """Base class for every classified ingestion failure."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialise the error.

        Args:
            message: Human readable description
            error_code: Stable machine readable code
            details: Additional context for structured logs
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Return a serializable payload representing the error."""

        return {
            "code": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
            "details": dict(self.details),
        }


class NetworkError(CatalogError):
    """Transport failure or HTTP response with status >= 400."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retryable: bool = True,
        details: dict[str, Any] | None = None,
    ):
        super_details = dict(details or {})
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, "NETWORK_ERROR", super_details)
        self.status_code = status_code
        self.retryable = retryable


class XmlParsingError(CatalogError):
    """Malformed, empty or structureless XML payload."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, "XML_PARSING_ERROR", details)


class TransformationError(CatalogError):
    """A well-shaped record carrying a semantically invalid field."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, "TRANSFORMATION_ERROR", details)


class DatastoreError(CatalogError):
    """Failure raised by the persistence collaborator."""

    def __init__(
        self,
        message: str,
        retryable: bool = False,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, "DATASTORE_ERROR", details)
        self.retryable = retryable


__all__ = [
    "CatalogError",
    "DatastoreError",
    "NetworkError",
    "TransformationError",
    "XmlParsingError",
]
