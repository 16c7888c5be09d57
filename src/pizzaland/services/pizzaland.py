"""
PizzaLand domain service: the single entry point used by the HTTP layer.

Every public method runs inside ``_operation`` which

  - binds ``op=domain.pizzaland.<Operation>`` to the logger,
  - enforces the per-operation deadline (``asyncio.timeout``),
  - commits after a successful mutation and rolls back on any failure,
  - renames storage lookups / unique violations to pizza or category errors.

Cancellation is not intercepted: ``asyncio.CancelledError`` reaches the caller
as is, and the request-scoped session rolls back when it is closed.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from pizzaland.core.identifiers import Identifier
from pizzaland.core.logging.adapters import OperationLogger, get_operation_logger
from pizzaland.core.projector import all_fields_absent
from pizzaland.exceptions.base import DuplicateError, InternalError, NotFoundError
from pizzaland.exceptions.domain import (
    CategoryAlreadyExistsError,
    CategoryNotFoundError,
    PizzaAlreadyExistsError,
    PizzaNotFoundError,
)
from pizzaland.exceptions.mapper import safe_rollback
from pizzaland.repositories.base_repository import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from pizzaland.repositories.category_repository import CategoryRepository
from pizzaland.repositories.pizza_repository import PizzaRepository
from pizzaland.schemas.category import CategoryCreate, CategoryProperties, CategoryUpdate
from pizzaland.schemas.pizza import PizzaCreate, PizzaProperties, PizzaUpdate

logger = get_operation_logger(__name__)

OP_SAVE = "domain.pizzaland.Save"
OP_GET = "domain.pizzaland.Get"
OP_LIST = "domain.pizzaland.List"
OP_LIST_BY_CATEGORY = "domain.pizzaland.ListByCategory"
OP_UPDATE = "domain.pizzaland.Update"
OP_REMOVE = "domain.pizzaland.Remove"
OP_SAVE_CATEGORY = "domain.pizzaland.SaveCategory"
OP_GET_CATEGORY = "domain.pizzaland.GetCategory"
OP_LIST_CATEGORIES = "domain.pizzaland.ListCategories"
OP_UPDATE_CATEGORY = "domain.pizzaland.UpdateCategory"
OP_REMOVE_CATEGORY = "domain.pizzaland.RemoveCategory"


@dataclass(frozen=True)
class _Entity:
    name: str
    not_found: type[NotFoundError]
    already_exists: type[DuplicateError]


PIZZA = _Entity("pizza", PizzaNotFoundError, PizzaAlreadyExistsError)
CATEGORY = _Entity("category", CategoryNotFoundError, CategoryAlreadyExistsError)


class PizzaLandService:
    def __init__(
        self,
        db: AsyncSession,
        *,
        timeout: float | None = None,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self.db = db
        self.timeout = timeout
        paging = {"default_page_size": default_page_size, "max_page_size": max_page_size}
        self.pizzas = PizzaRepository(db, **paging)
        self.categories = CategoryRepository(db, **paging)

    @asynccontextmanager
    async def _operation(self, op: str, entity: _Entity, *, commit: bool = False) -> AsyncIterator[OperationLogger]:
        log = logger.bind(op=op)
        try:
            async with asyncio.timeout(self.timeout):
                yield log
                if commit:
                    await self.db.commit()
        except NotFoundError as exc:
            await safe_rollback(self.db, entity.name)
            if isinstance(exc, entity.not_found):
                raise
            raise entity.not_found(fields=exc.fields) from exc
        except DuplicateError as exc:
            await safe_rollback(self.db, entity.name)
            if isinstance(exc, entity.already_exists):
                raise
            raise entity.already_exists(fields=exc.fields, constraint=exc.constraint) from exc
        except InternalError:
            await safe_rollback(self.db, entity.name)
            log.exception("operation failed with an internal storage error")
            raise
        except TimeoutError:
            await safe_rollback(self.db, entity.name)
            log.warning("operation deadline exceeded", extra={"timeout_s": self.timeout})
            raise
        except Exception:
            await safe_rollback(self.db, entity.name)
            raise

    # =============================================================================================================
    # Pizzas
    # =============================================================================================================

    async def save_pizza(self, pizza: PizzaCreate) -> int:
        async with self._operation(OP_SAVE, PIZZA, commit=True) as log:
            pizza_id = await self.pizzas.save(pizza)
        log.info("pizza saved", extra={"pizza_id": pizza_id})
        return pizza_id

    async def get_pizza(self, identifier: Identifier | None) -> PizzaProperties:
        async with self._operation(OP_GET, PIZZA):
            return await self.pizzas.get(identifier)

    async def list_pizzas(self, offset: int | None = 0, limit: int | None = 0) -> list[PizzaProperties]:
        async with self._operation(OP_LIST, PIZZA):
            return await self.pizzas.get_all(offset, limit)

    async def list_pizzas_by_category(
        self, category: Identifier | None, offset: int | None = 0, limit: int | None = 0
    ) -> list[PizzaProperties]:
        async with self._operation(OP_LIST_BY_CATEGORY, CATEGORY):
            return await self.pizzas.list_by_category(category, offset, limit)

    async def update_pizza(self, identifier: Identifier | None, changes: PizzaUpdate) -> bool:
        async with self._operation(OP_UPDATE, PIZZA, commit=True) as log:
            if all_fields_absent(changes):
                log.info("update request carries no fields")
            success = await self.pizzas.update(identifier, changes.model_dump())
        log.info("pizza updated", extra={"success": success})
        return success

    async def remove_pizza(self, identifier: Identifier | None) -> bool:
        async with self._operation(OP_REMOVE, PIZZA, commit=True) as log:
            success = await self.pizzas.remove(identifier)
        log.info("pizza removed", extra={"success": success})
        return success

    # =============================================================================================================
    # Categories
    # =============================================================================================================

    async def save_category(self, category: CategoryCreate) -> int:
        async with self._operation(OP_SAVE_CATEGORY, CATEGORY, commit=True) as log:
            category_id = await self.categories.save(category)
        log.info("category saved", extra={"category_id": category_id})
        return category_id

    async def get_category(self, identifier: Identifier | None) -> CategoryProperties:
        async with self._operation(OP_GET_CATEGORY, CATEGORY):
            return await self.categories.get(identifier)

    async def list_categories(self, offset: int | None = 0, limit: int | None = 0) -> list[CategoryProperties]:
        async with self._operation(OP_LIST_CATEGORIES, CATEGORY):
            return await self.categories.get_all(offset, limit)

    async def update_category(self, identifier: Identifier | None, changes: CategoryUpdate) -> bool:
        async with self._operation(OP_UPDATE_CATEGORY, CATEGORY, commit=True) as log:
            if all_fields_absent(changes):
                log.info("update request carries no fields")
            success = await self.categories.update(identifier, changes.model_dump())
        log.info("category updated", extra={"success": success})
        return success

    async def remove_category(self, identifier: Identifier | None) -> bool:
        """Remove a category together with every pizza in it."""
        async with self._operation(OP_REMOVE_CATEGORY, CATEGORY, commit=True) as log:
            success = await self.categories.remove(identifier)
        log.info("category removed", extra={"success": success})
        return success
