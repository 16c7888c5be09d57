"""Wire messages exchanged with clients."""

from pydantic import BaseModel

from .category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryProperties,
    CategoryUpdate,
    SaveCategoryResponse,
)
from .pizza import (
    PizzaCreate,
    PizzaListResponse,
    PizzaProperties,
    PizzaUpdate,
    SavePizzaResponse,
)


class SuccessResponse(BaseModel):
    success: bool


__all__ = [
    "CategoryCreate",
    "CategoryListResponse",
    "CategoryProperties",
    "CategoryUpdate",
    "SaveCategoryResponse",
    "PizzaCreate",
    "PizzaListResponse",
    "PizzaProperties",
    "PizzaUpdate",
    "SavePizzaResponse",
    "SuccessResponse",
]
