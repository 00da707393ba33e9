"""Domain error types.

Every failure the API reports on purpose is an ``AppError`` subclass. Each one
carries the HTTP status it maps to, so routers and services raise domain
errors and ``src.main`` renders them in one place:

- AccessDenied: caller may not perform the action on the list
- NotFound: referenced list, item, market or share does not exist
- ValidationFailure: input is well-formed but violates a domain rule
- Conflict: the write would duplicate an existing record
- StorageFailure: the database raised while serving the request
"""

from typing import Any

from fastapi import status


class AppError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: Human readable message, returned as ``detail``
        code: Error code for programmatic handling
        details: Additional error context
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: str = "APP_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Response body for this error."""
        body: dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class AccessDenied(AppError):
    """The caller lacks the capability the operation requires."""

    status_code = status.HTTP_403_FORBIDDEN
    default_code = "ACCESS_DENIED"


class NotFound(AppError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"


class ValidationFailure(AppError):
    """Input rejected before any store write."""

    status_code = 422
    default_code = "VALIDATION_FAILURE"


class Conflict(AppError):
    """The write collides with an existing record."""

    status_code = status.HTTP_409_CONFLICT
    default_code = "CONFLICT"


class StorageFailure(AppError):
    """The store was unreachable or a query failed. Not retried."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = "STORAGE_FAILURE"
