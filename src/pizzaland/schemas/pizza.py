from pydantic import BaseModel, ConfigDict, Field

from pizzaland.core.identifiers import MAX_U32
from pizzaland.models.pizza import DoughType


class PizzaProperties(BaseModel):
    """A pizza as returned to clients; ``description`` is absent rather than empty."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    name: str
    description: str | None = None
    dough_type: DoughType = DoughType.UNKNOWN
    price: float
    diameter: int


class PizzaCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category_id: int = Field(gt=0, le=MAX_U32)
    name: str = Field(min_length=1, max_length=120)
    description: str | None = Field(default=None, max_length=1000)
    dough_type: DoughType = DoughType.UNKNOWN
    price: float = Field(gt=0)
    diameter: int = Field(gt=0, le=MAX_U32)


class PizzaUpdate(BaseModel):
    """Sparse update: None, 0, "" and UNKNOWN all mean "leave unchanged"."""
    model_config = ConfigDict(extra="forbid")

    category_id: int | None = Field(default=None, ge=0, le=MAX_U32)
    name: str | None = Field(default=None, max_length=120)
    description: str | None = Field(default=None, max_length=1000)
    dough_type: DoughType | None = None
    price: float | None = Field(default=None, ge=0)
    diameter: int | None = Field(default=None, ge=0, le=MAX_U32)


class SavePizzaResponse(BaseModel):
    pizza_id: int


class PizzaListResponse(BaseModel):
    pizzas: list[PizzaProperties]
