from fastapi import APIRouter

from .categories import router as categories_router
from .error_handlers import register_exception_handlers
from .pizzas import router as pizzas_router

router = APIRouter(prefix="/v1")
router.include_router(pizzas_router)
router.include_router(categories_router)

__all__ = ["router", "register_exception_handlers"]
