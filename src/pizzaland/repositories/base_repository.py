"""
Base repository with the operations every catalog entity shares.

Each method issues exactly one statement against the model's table and wraps
it in ``db_error_handler`` so driver errors surface as ``RepositoryError``
kinds. Rows are read as mappings and projected into the wire schema; nothing
is kept in the session's identity map. Repositories never commit; the caller
owns the unit of work.
"""

import logging
import time
from typing import Any, Generic, Mapping, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from pizzaland.core.identifiers import ById, Identifier, resolve_identifier
from pizzaland.core.projector import project, project_values
from pizzaland.database.base import Base
from pizzaland.exceptions.base import InvalidArgumentError, InvalidFieldError, NotFoundError
from pizzaland.exceptions.mapper import db_error_handler
from pizzaland.validators.model_validators import find_unknown_model_kwargs, get_required_columns

from .partial_update import PartialUpdateBuilder

ModelType = TypeVar("ModelType", bound=Base)
SchemaType = TypeVar("SchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100


def clamp_page(offset: int | None, limit: int | None, *, default: int = DEFAULT_PAGE_SIZE,
               maximum: int = MAX_PAGE_SIZE) -> tuple[int, int]:
    """Normalize paging input: negative offset -> 0, missing limit -> default, cap at maximum."""
    offset = max(int(offset or 0), 0)
    limit = int(limit or 0)
    if limit <= 0:
        limit = default
    return offset, min(limit, maximum)


class BaseRepository(Generic[ModelType, SchemaType]):
    """
    Generic repository over one mapped table.

    Type Parameters:
        ModelType: the SQLAlchemy model that owns the table.
        SchemaType: the pydantic message rows are projected into.
    """

    def __init__(
        self,
        model: Type[ModelType],
        db: AsyncSession,
        *,
        schema: Type[SchemaType],
        updater: PartialUpdateBuilder,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        """
        Args:
            model: the mapped class (not an instance), e.g. ``Pizza``.
            db: the async session statements run on.
            schema: wire message returned by reads.
            updater: partial-update builder configured for ``model``'s table.
        """
        self.model = model
        self.table = model.__table__
        self.db = db
        self.schema = schema
        self.updater = updater
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =============================================================================================================
    # Create
    # =============================================================================================================

    async def create(self, **kwargs) -> int:
        """
        Insert one row and return its surrogate key.

        Raises:
            InvalidFieldError: a key is not a writable column (``id`` included).
            InvalidArgumentError: a required column is missing, or the row breaks
                a foreign-key, not-null or check constraint.
            DuplicateError: the unique name is taken.
            InternalError: any other storage failure.
        """
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "operation": "create", "provided_keys": sorted(kwargs)},
        )

        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": self.model_name, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        missing = [c for c in get_required_columns(self.model) if kwargs.get(c) is None]
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": self.model_name, "operation": "create", "missing_fields": sorted(missing)},
            )
            raise InvalidArgumentError(
                f"Missing required field(s): {', '.join(missing)} for {self.model_name}", fields=missing,
            )

        start = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                insert(self.table).values(**kwargs).returning(self.table.c.id)
            )
            entity_id = result.scalar_one()

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": entity_id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity_id

    async def save(self, payload: BaseModel) -> int:
        """Project a create message onto the table's columns and insert it."""
        return await self.create(**project_values(payload, self.model))

    # =============================================================================================================
    # Read
    # =============================================================================================================

    async def get(self, identifier: Identifier | None) -> SchemaType:
        """
        Return the row matching an id or a name.

        Raises:
            InvalidIdentifierError: no usable identifier.
            NotFoundError: nothing matches.
        """
        key = resolve_identifier(identifier)
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(select(self.table).where(self.updater.where(key)))
            row = result.mappings().one_or_none()
            if row is None:
                raise NotFoundError(
                    f"{self.model_name} with {key.column} {key.value!r} not found", fields=[key.column],
                )
        return project(row, self.schema)

    async def get_all(self, offset: int | None = 0, limit: int | None = 0, *criteria) -> list[SchemaType]:
        """One page of rows ordered by id, optionally filtered by ``criteria``."""
        offset, limit = clamp_page(offset, limit, default=self.default_page_size, maximum=self.max_page_size)

        stmt = select(self.table)
        if criteria:
            stmt = stmt.where(*criteria)
        stmt = stmt.order_by(self.table.c.id).offset(offset).limit(limit)

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(stmt)
            rows = result.mappings().all()

        logger.debug(
            "repo.get_all.success",
            extra={"model": self.model_name, "offset": offset, "limit": limit, "count": len(rows)},
        )
        return [project(row, self.schema) for row in rows]

    # =============================================================================================================
    # Update / Remove
    # =============================================================================================================

    def _matched(self, key: Identifier, matched: list[Any], operation: str) -> bool:
        if not matched:
            logger.info(
                f"repo.{operation}.not_found",
                extra={"model": self.model_name, "lookup": key.column, "value": key.value},
            )
            raise NotFoundError(f"{self.model_name} with {key.column} {key.value!r} not found", fields=[key.column])
        # id-keyed: the returned key must be the requested one; name-keyed: a match is enough
        if isinstance(key, ById):
            return matched[0] == key.value
        return True

    async def update(self, identifier: Identifier | None, fields: Mapping[str, Any]) -> bool:
        """
        Apply a partial update.

        Raises:
            InvalidIdentifierError, InvalidFieldError, NothingToUpdateError: before
                any statement runs.
            NotFoundError: the key matches nothing.
            DuplicateError / InvalidArgumentError: a constraint rejects the new values.
        """
        partial = self.updater.build(identifier, fields)
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(partial.statement)
            matched = list(result.scalars().all())

        success = self._matched(partial.key, matched, "update")
        logger.info(
            "repo.update.success",
            extra={"model": self.model_name, "lookup": partial.key.column, "columns": list(partial.columns)},
        )
        return success

    async def remove(self, identifier: Identifier | None) -> bool:
        """Delete by id or name; NotFoundError when nothing matches."""
        key = resolve_identifier(identifier)
        stmt = delete(self.table).where(self.updater.where(key)).returning(self.table.c.id)
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(stmt)
            matched = list(result.scalars().all())

        success = self._matched(key, matched, "remove")
        logger.info("repo.remove.success", extra={"model": self.model_name, "lookup": key.column})
        return success
