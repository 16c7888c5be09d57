"""
Repository layer: one repository per catalog table.

Usage:
    from pizzaland.repositories import PizzaRepository, CategoryRepository
"""

from .base_repository import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, BaseRepository, clamp_page
from .category_repository import CategoryRepository
from .partial_update import PartialUpdate, PartialUpdateBuilder, UpdatableColumn
from .pizza_repository import PizzaRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "PizzaRepository",
    "PartialUpdate",
    "PartialUpdateBuilder",
    "UpdatableColumn",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "clamp_page",
]
