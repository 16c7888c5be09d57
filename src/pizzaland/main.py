"""
Application factory and console entry point.

    pizzaland                 # console script -> run()
    create_app(settings)      # ASGI app for tests / other servers
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from pizzaland.api.v1 import register_exception_handlers, router as v1_router
from pizzaland.config.settings import Settings, get_settings
from pizzaland.core.logging import RequestIDMiddleware, setup_logging
from pizzaland.database.session import create_engine, init_models, make_sessionmaker
from pizzaland.utils.metadata import get_project_name, get_project_version

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, engine: AsyncEngine | None = None) -> FastAPI:
    settings = settings or get_settings()
    owns_engine = engine is None
    if engine is None:
        engine = create_engine(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_models(engine)
        logger.info("service started", extra={"env": settings.ENV})
        yield
        if owns_engine:
            await engine.dispose()
        logger.info("service stopped")

    app = FastAPI(title=get_project_name(), version=get_project_version(), lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = make_sessionmaker(engine)

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(v1_router)

    @app.get("/healthz", tags=["health"])
    async def healthz():
        return {"status": "ok"}

    return app


def _ensure_storage_dir(settings: Settings) -> None:
    if settings.is_sqlite and not settings.DB_URL:
        Path(settings.STORAGE_PATH).parent.mkdir(parents=True, exist_ok=True)


def run() -> None:
    import uvicorn

    settings = get_settings()
    setup_logging(settings)
    _ensure_storage_dir(settings)

    logger.info("listening", extra={"host": settings.HTTP_HOST, "port": settings.HTTP_PORT})
    # log_config=None keeps our dictConfig in place
    uvicorn.run(create_app(settings), host=settings.HTTP_HOST, port=settings.HTTP_PORT, log_config=None)


if __name__ == "__main__":
    run()
