from sqlalchemy.ext.asyncio import AsyncSession

from pizzaland.exceptions.base import CategoryNothingToUpdateError
from pizzaland.models.category import Category
from pizzaland.schemas.category import CategoryProperties

from .base_repository import BaseRepository
from .partial_update import PartialUpdateBuilder

CATEGORY_UPDATER = PartialUpdateBuilder(
    Category.__table__,
    ["name", "description"],
    nothing_to_update=CategoryNothingToUpdateError,
)


class CategoryRepository(BaseRepository[Category, CategoryProperties]):
    """
    Category repository.

    ``remove`` also deletes every pizza in the category through the
    ``ON DELETE CASCADE`` foreign key on ``items.category_id``.
    """

    def __init__(self, db: AsyncSession, **kwargs):
        super().__init__(Category, db, schema=CategoryProperties, updater=CATEGORY_UPDATER, **kwargs)
