from fastapi import APIRouter, Depends, Query, status

from pizzaland.api.dependencies import get_service
from pizzaland.core.identifiers import MAX_PIZZA_ID, MAX_U32, identifier_from
from pizzaland.repositories.base_repository import MAX_PAGE_SIZE
from pizzaland.schemas import (
    PizzaCreate,
    PizzaListResponse,
    PizzaProperties,
    PizzaUpdate,
    SavePizzaResponse,
    SuccessResponse,
)
from pizzaland.services.pizzaland import PizzaLandService

router = APIRouter(prefix="/pizzas", tags=["pizzas"])


@router.post("", response_model=SavePizzaResponse, status_code=status.HTTP_201_CREATED)
async def save_pizza(payload: PizzaCreate, service: PizzaLandService = Depends(get_service)):
    return SavePizzaResponse(pizza_id=await service.save_pizza(payload))


@router.get("", response_model=PizzaListResponse)
async def list_pizzas(
    offset: int = Query(0, ge=0),
    limit: int = Query(0, ge=0, le=MAX_PAGE_SIZE),
    category_id: int | None = Query(None, ge=0, le=MAX_U32),
    category_name: str | None = None,
    service: PizzaLandService = Depends(get_service),
):
    category = identifier_from(category_id, category_name)
    if category is None:
        pizzas = await service.list_pizzas(offset, limit)
    else:
        pizzas = await service.list_pizzas_by_category(category, offset, limit)
    return PizzaListResponse(pizzas=pizzas)


@router.get("/item", response_model=PizzaProperties)
async def get_pizza(
    id: int | None = Query(None, ge=0, le=MAX_PIZZA_ID),
    name: str | None = None,
    service: PizzaLandService = Depends(get_service),
):
    return await service.get_pizza(identifier_from(id, name))


@router.patch("/item", response_model=SuccessResponse)
async def update_pizza(
    changes: PizzaUpdate,
    id: int | None = Query(None, ge=0, le=MAX_PIZZA_ID),
    name: str | None = None,
    service: PizzaLandService = Depends(get_service),
):
    return SuccessResponse(success=await service.update_pizza(identifier_from(id, name), changes))


@router.delete("/item", response_model=SuccessResponse)
async def remove_pizza(
    id: int | None = Query(None, ge=0, le=MAX_PIZZA_ID),
    name: str | None = None,
    service: PizzaLandService = Depends(get_service),
):
    return SuccessResponse(success=await service.remove_pizza(identifier_from(id, name)))
