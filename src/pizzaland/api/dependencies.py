from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from pizzaland.config.settings import Settings
from pizzaland.services.pizzaland import PizzaLandService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_db_session)):
            await db.execute(...)
    """
    async with request.app.state.sessionmaker() as session:
        yield session


def get_service(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> PizzaLandService:
    return PizzaLandService(
        db,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        default_page_size=settings.LIST_DEFAULT_LIMIT,
        max_page_size=settings.LIST_MAX_LIMIT,
    )
