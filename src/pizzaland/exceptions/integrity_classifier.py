import logging
from enum import Enum
from typing import Type

from sqlalchemy.exc import IntegrityError

from .base import RepositoryError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific exceptions (internal labels, never raised to callers)
# =================================================================================================================


class ConstraintViolationError(RepositoryError):
    """Base for integrity/constraint violations."""


class UniqueConstraintError(ConstraintViolationError):
    """Unique constraint / duplicate value."""


class NotNullConstraintError(ConstraintViolationError):
    """NOT NULL violation (missing required field)."""


class ForeignKeyConstraintError(ConstraintViolationError):
    """Foreign key constraint violated."""


class CheckConstraintError(ConstraintViolationError):
    """CHECK constraint violated."""


class UnknownIntegrityError(ConstraintViolationError):
    """Unrecognized integrity error."""


# =================================================================================================================
# Postgres error codes
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION: CheckConstraintError,
}

# sqlite3 (Python 3.11+) exposes the extended result code name on the exception
SQLITE_ERRORNAME_MAP: dict[str, Type[ConstraintViolationError]] = {
    "SQLITE_CONSTRAINT_UNIQUE": UniqueConstraintError,
    "SQLITE_CONSTRAINT_PRIMARYKEY": UniqueConstraintError,
    "SQLITE_CONSTRAINT_NOTNULL": NotNullConstraintError,
    "SQLITE_CONSTRAINT_FOREIGNKEY": ForeignKeyConstraintError,
    "SQLITE_CONSTRAINT_CHECK": CheckConstraintError,
}

# Message fragments, checked in order. SQLite reports e.g. "UNIQUE constraint failed: items.name".
MESSAGE_SIGNATURES: list[tuple[Type[ConstraintViolationError], tuple[str, ...]]] = [
    (UniqueConstraintError, ("unique constraint", "unique failed", "unique violation", "duplicate")),
    (NotNullConstraintError, ("not null constraint", "not null", "null value in column")),
    (ForeignKeyConstraintError, ("foreign key constraint", "foreign key", "is not present in table")),
    (CheckConstraintError, ("check constraint", "check failed")),
]


def _classify_from_postgres_diag(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None

    exception_class = PGCODE_EXCEPTION_MAP.get(pgcode)
    if exception_class:
        logger.debug("integrity.pg_diagnostic", extra={"pgcode": pgcode, "constraint_name": constraint_name})
        return exception_class, constraint_name

    logger.warning("integrity.unknown_pgcode", extra={"pgcode": pgcode, "constraint_name": constraint_name})
    return UnknownIntegrityError, constraint_name


def _classify_from_sqlite_errorname(orig) -> Type[ConstraintViolationError] | None:
    errorname = getattr(orig, "sqlite_errorname", None)
    if not errorname:
        return None
    return SQLITE_ERRORNAME_MAP.get(errorname)


def _classify_from_generic_message(msg: str) -> tuple[Type[ConstraintViolationError], None]:
    """Fallback for SQLite, MySQL and anything without a pgcode."""
    normalized = (msg or "").lower()

    for exception_class, signatures in MESSAGE_SIGNATURES:
        if any(signature in normalized for signature in signatures):
            return exception_class, None

    logger.warning("integrity.unknown_message", extra={"message_snippet": (msg or "")[:200]})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Classify a SQLAlchemy IntegrityError into a ConstraintViolationError subclass.

    Postgres SQLSTATE first, then the sqlite3 extended error name, then the message text.

    Returns:
        A tuple of (ExceptionClass, constraint_name if available)
    """
    orig = exc.orig

    exception_class, constraint_name = _classify_from_postgres_diag(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    exception_class = _classify_from_sqlite_errorname(orig)
    if exception_class is not None:
        return exception_class, None

    return _classify_from_generic_message(str(orig) if orig is not None else str(exc))
