import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import (
    DuplicateError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    RepositoryError,
)

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Pull column names out of Postgres messages:
      - 'null value in column "name" violates not-null constraint'
      - 'DETAIL:  Key (name)=(Margherita) already exists.'
    """
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: items.name' / 'NOT NULL constraint failed: items.name'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]
    return None


def _extract_columns_mysql(msg: str) -> list[str] | None:
    # "Duplicate entry 'foo' for key 'items.uq_items_name'"
    m = re.search(r"Duplicate entry .* for key '?([^']+)'?", msg, flags=re.IGNORECASE)
    if m:
        return [m.group(1)]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """Best-effort extraction of column names from the DB message."""
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    if not msg:
        return None

    for extractor in (_extract_columns_postgres, _extract_columns_sqlite, _extract_columns_mysql):
        cols = extractor(msg)
        if cols:
            return cols
    return None


def extract_check_constraint(exc: IntegrityError) -> str | None:
    # SQLite: 'CHECK constraint failed: ck_items_price_positive'
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    m = re.search(r'CHECK constraint failed: (?P<name>\S+)', msg, flags=re.IGNORECASE)
    return m.group("name") if m else None


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """
    Map a SQLAlchemy IntegrityError to an app-level exception and raise it.

    unique -> DuplicateError; not-null, foreign key and check -> InvalidArgumentError;
    anything unrecognized -> InternalError.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"

    if exc_cls is UniqueConstraintError:
        logger.info(
            "mapper.duplicate_detected",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        if columns:
            raise DuplicateError(
                f"{model_part} already exists for field(s): {', '.join(columns)}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise DuplicateError(f"{model_part} already exists", constraint=constraint_name) from exc

    if exc_cls is NotNullConstraintError:
        logger.info(
            "mapper.not_null_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        if columns:
            raise InvalidArgumentError(
                f"Missing required field(s): {', '.join(columns)} for {model_part}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise InvalidArgumentError(f"Missing required field for {model_part}", constraint=constraint_name) from exc

    if exc_cls is ForeignKeyConstraintError:
        logger.info(
            "mapper.foreign_key_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        raise InvalidArgumentError(
            f"{model_part} references a record that does not exist",
            fields=columns, constraint=constraint_name,
        ) from exc

    if exc_cls is CheckConstraintError:
        constraint_name = constraint_name or extract_check_constraint(exc)
        logger.info("mapper.check_constraint_failure", extra={"model": model_part, "constraint": constraint_name})
        raise InvalidArgumentError(
            f"{model_part} violates a value rule", constraint=constraint_name,
        ) from exc

    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    raise InternalError(f"{model_part} database integrity error") from exc


# -----------------------
# Async context manager wrapped around every repository statement
# -----------------------

async def safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    """Roll back, logging rather than raising when the rollback itself fails."""
    try:
        await db.rollback()
    except Exception:
        logger.exception("mapper.rollback_failed", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... one statement ...

    Errors the repository raised itself pass through untouched, a missing row
    becomes NotFoundError, integrity failures are rolled back and mapped, and
    everything else is rolled back and reported as InternalError.
    Cancellation is a BaseException and is never converted.
    """
    try:
        yield
    except RepositoryError:
        raise
    except NoResultFound as exc:
        raise NotFoundError(f"{model_name or 'Record'} not found") from exc
    except IntegrityError as exc:
        await safe_rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except Exception as exc:
        await safe_rollback(db, model_name)
        logger.exception("mapper.unexpected_db_error", extra={"model": model_name})
        raise InternalError(f"Failed to operate on {model_name or 'database'}") from exc
