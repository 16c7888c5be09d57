from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pizzaland.core.identifiers import ById, Identifier, resolve_identifier
from pizzaland.exceptions.base import PizzaNothingToUpdateError
from pizzaland.models.category import Category
from pizzaland.models.pizza import DoughType, Pizza
from pizzaland.schemas.pizza import PizzaProperties

from .base_repository import BaseRepository
from .partial_update import PartialUpdateBuilder, UpdatableColumn, supplied_unless

PIZZA_UPDATER = PartialUpdateBuilder(
    Pizza.__table__,
    [
        "category_id",
        "name",
        "description",
        UpdatableColumn("dough_type", supplied_unless(DoughType.UNKNOWN)),
        "price",
        "diameter",
    ],
    nothing_to_update=PizzaNothingToUpdateError,
)


class PizzaRepository(BaseRepository[Pizza, PizzaProperties]):
    """Pizza-specific repository; everything but the category filter comes from BaseRepository."""

    def __init__(self, db: AsyncSession, **kwargs):
        super().__init__(Pizza, db, schema=PizzaProperties, updater=PIZZA_UPDATER, **kwargs)

    async def list_by_category(
        self, category: Identifier | None, offset: int | None = 0, limit: int | None = 0
    ) -> list[PizzaProperties]:
        """
        One page of pizzas belonging to a category picked by id or by name.

        An unknown category yields an empty page, not NotFoundError.
        """
        key = resolve_identifier(category)
        if isinstance(key, ById):
            criterion = self.table.c.category_id == key.value
        else:
            categories = Category.__table__
            category_id = select(categories.c.id).where(categories.c.name == key.value).scalar_subquery()
            criterion = self.table.c.category_id == category_id
        return await self.get_all(offset, limit, criterion)
