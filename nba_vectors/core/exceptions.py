"""
Exception hierarchy for the NBA vectorization pipeline.

Provides layered exception structure for ingestion and upload errors.
All exceptions include context for observability and debugging.

Taxonomy:
- ValidationError: a record is missing required fields (skip the record)
- TransientServiceError / RateLimitError: retried once after a cooldown
- IndexConfigurationError: index shape mismatch (abort only that target)
- FatalError: anything else (abort the run)

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class NbaVectorsException(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(NbaVectorsException):
    """Raised when a source record cannot be turned into a Document."""

    def __init__(
        self,
        message: str,
        record_id: str | None = None,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            record_id: Identifier of the offending record, when known
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if record_id:
            details["record_id"] = record_id
        if field:
            details["field"] = field
        super().__init__(message, details)


class TransientServiceError(NbaVectorsException):
    """Raised for index service failures worth retrying (HTTP 5xx, 429)."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        target: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize transient service error.

        Args:
            message: Error message
            status: HTTP status returned by the service
            target: Index the request was sent to
            details: Additional context
        """
        details = details or {}
        if status is not None:
            details["status"] = status
        if target:
            details["target"] = target
        self.status = status
        super().__init__(message, details)


class RateLimitError(TransientServiceError):
    """Raised when the index service answers HTTP 429."""

    pass


class IndexConfigurationError(NbaVectorsException):
    """Raised when an index is provisioned with the wrong vector type."""

    def __init__(
        self,
        message: str,
        target: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize index configuration error.

        Args:
            message: Error message
            target: Index whose configuration does not match the payload
            details: Additional context
        """
        details = details or {}
        if target:
            details["target"] = target
        super().__init__(message, details)


class FatalError(NbaVectorsException):
    """Base for unrecoverable errors that terminate the run."""

    pass


class VectorStoreError(FatalError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, describe)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class DataSourceError(FatalError):
    """Raised when the local data files cannot be read."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize data source error.

        Args:
            message: Error message
            path: File or directory that failed
            details: Additional context
        """
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)


class SettingsError(FatalError):
    """Raised when required configuration is missing."""

    pass


class UploadCancelledError(NbaVectorsException):
    """Raised when a pending wait is cancelled by the caller."""

    pass
