"""
Core pytest configuration for the entire test suite.

Only the database setup and logging bootstrap live here. Domain fixtures
(repositories, service, sample payloads, HTTP client) are in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py

and are imported at the bottom of this module so every test can use them.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
from pathlib import Path
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block above the pizzaland.* imports so collection stays quiet.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from pizzaland import models  # noqa: F401 - registers the tables with Base.metadata
from pizzaland.config.settings import Settings
from pizzaland.core.logging.builder import setup_logging
from pizzaland.database.base import Base
from pizzaland.database.session import create_engine, make_sessionmaker

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install application logging for the whole test session.

    Text format on stdout; no files are written.
    """
    setup_logging(Settings(ENV="testing", LOG_FORMAT="text", LOG_TO_STDOUT=True, LOG_LEVEL="DEBUG"))
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture()
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh SQLite file per test.

    Every test gets its own database, so code under test may commit freely and
    nothing leaks into the next test. Foreign keys are switched on by
    ``create_engine``, which the category cascade relies on.
    """
    engine = create_engine(sqlite_url(tmp_path / "catalog.db"))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    maker = make_sessionmaker(async_engine)
    async with maker() as session:
        yield session
        await session.rollback()


# Repository / service fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    category_repository,
    create_category,
    create_pizza,
    created_category,
    created_pizza,
    pizza_repository,
    sample_category_data,
    sample_pizza_data,
    service,
)

# HTTP fixtures
from .test_fixtures.api_fixtures import app, client  # noqa: E402
