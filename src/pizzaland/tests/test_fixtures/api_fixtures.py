"""Fixtures for HTTP tests: the app wired to the per-test engine, and a client for it."""

from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from pizzaland.config.settings import Settings
from pizzaland.main import create_app


@pytest.fixture
def app(async_engine: AsyncEngine) -> FastAPI:
    # ASGITransport does not run the lifespan; the engine already has its tables.
    settings = Settings(ENV="testing", TESTING=True, REQUEST_TIMEOUT_SECONDS=5.0)
    return create_app(settings, engine=async_engine)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
