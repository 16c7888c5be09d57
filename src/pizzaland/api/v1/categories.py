from fastapi import APIRouter, Depends, Query, status

from pizzaland.api.dependencies import get_service
from pizzaland.core.identifiers import MAX_U32, identifier_from
from pizzaland.repositories.base_repository import MAX_PAGE_SIZE
from pizzaland.schemas import (
    CategoryCreate,
    CategoryListResponse,
    CategoryProperties,
    CategoryUpdate,
    SaveCategoryResponse,
    SuccessResponse,
)
from pizzaland.services.pizzaland import PizzaLandService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=SaveCategoryResponse, status_code=status.HTTP_201_CREATED)
async def save_category(payload: CategoryCreate, service: PizzaLandService = Depends(get_service)):
    return SaveCategoryResponse(category_id=await service.save_category(payload))


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    offset: int = Query(0, ge=0),
    limit: int = Query(0, ge=0, le=MAX_PAGE_SIZE),
    service: PizzaLandService = Depends(get_service),
):
    return CategoryListResponse(categories=await service.list_categories(offset, limit))


@router.get("/item", response_model=CategoryProperties)
async def get_category(
    id: int | None = Query(None, ge=0, le=MAX_U32),
    name: str | None = None,
    service: PizzaLandService = Depends(get_service),
):
    return await service.get_category(identifier_from(id, name))


@router.patch("/item", response_model=SuccessResponse)
async def update_category(
    changes: CategoryUpdate,
    id: int | None = Query(None, ge=0, le=MAX_U32),
    name: str | None = None,
    service: PizzaLandService = Depends(get_service),
):
    return SuccessResponse(success=await service.update_category(identifier_from(id, name), changes))


@router.delete("/item", response_model=SuccessResponse)
async def remove_category(
    id: int | None = Query(None, ge=0, le=MAX_U32),
    name: str | None = None,
    service: PizzaLandService = Depends(get_service),
):
    """Removes the category and every pizza in it."""
    return SuccessResponse(success=await service.remove_category(identifier_from(id, name)))
