"""
Custom exceptions for catalog storage and request validation.

Every error raised by the data-access layer derives from ``RepositoryError``.
The HTTP layer never inspects exception classes directly; it asks the
exception for its payload and status (see ``to_payload`` / ``http_status``).
"""

from typing import Iterable


class RepositoryError(Exception):
    """
    Base exception for repository/service errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['name'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - error_code: canonical short code (e.g., 'duplicate', 'not_found') used by clients
    """

    # canonical error_code -> HTTP status
    ERROR_CODE_TO_STATUS = {
        "invalid_identifier": 400,
        "nothing_to_update": 400,
        "not_found": 404,
        "duplicate": 409,
        "invalid_field": 422,
        "invalid_argument": 422,
        "internal": 500,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

        Shape:
            {
                "detail": "A human-friendly message",
                "code": "duplicate",
                "fields": ["name"],
            }

        ``constraint`` is never part of the payload.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        """Status for this error, 400 when the code is unknown or missing."""
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 400)
        return 400


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class DuplicateError(RepositoryError):
    """Unique-name violation, reported to clients as AlreadyExists."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


class InvalidFieldError(RepositoryError):
    """Raised when the caller passes unexpected/unknown fields to repository methods."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


class InvalidArgumentError(RepositoryError):
    """A value could not be used: wrong shape, bad reference or a violated rule."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="invalid_argument")


class InvalidIdentifierError(RepositoryError):
    """Missing, ambiguous or unrecognized id-or-name selection."""

    def __init__(self, message: str):
        super().__init__(message, fields=["id", "name"], error_code="invalid_identifier")


class NothingToUpdateError(RepositoryError):
    entity = "record"

    def __init__(self, message: str | None = None):
        super().__init__(message or f"nothing to change in {self.entity}", error_code="nothing_to_update")


class PizzaNothingToUpdateError(NothingToUpdateError):
    entity = "pizza"


class CategoryNothingToUpdateError(NothingToUpdateError):
    entity = "category"


class InternalError(RepositoryError):
    """
    Any storage failure that is not a recognized constraint or lookup miss.

    The original exception is chained (``raise ... from exc``) and logged
    server-side; clients only ever see ``PUBLIC_MESSAGE``.
    """

    PUBLIC_MESSAGE = "internal storage error"

    def __init__(self, message: str):
        super().__init__(message, error_code="internal")

    def to_payload(self) -> dict:
        return {"detail": self.PUBLIC_MESSAGE, "code": self.error_code}


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "InvalidArgumentError",
    "InvalidIdentifierError",
    "NothingToUpdateError",
    "PizzaNothingToUpdateError",
    "CategoryNothingToUpdateError",
    "InternalError",
]
