"""Fixtures for repository and service tests."""

import uuid

import pytest
from faker import Faker
from sqlalchemy.ext.asyncio import AsyncSession

from pizzaland.models.pizza import DoughType
from pizzaland.repositories.category_repository import CategoryRepository
from pizzaland.repositories.pizza_repository import PizzaRepository
from pizzaland.services.pizzaland import PizzaLandService

# NOTE: every fixture here depends on `db_session` from conftest.py, which is
# bound to a per-test SQLite file. Setup data is committed so that a failing
# statement later in the test (and the rollback it triggers) cannot undo it.

fake = Faker()


@pytest.fixture
async def pizza_repository(db_session: AsyncSession) -> PizzaRepository:
    return PizzaRepository(db_session)


@pytest.fixture
async def category_repository(db_session: AsyncSession) -> CategoryRepository:
    return CategoryRepository(db_session)


@pytest.fixture
async def service(db_session: AsyncSession) -> PizzaLandService:
    """
    The domain service over the test session, with no deadline.

    The service commits its own mutations, like it does behind the HTTP API.
    """
    return PizzaLandService(db_session)


@pytest.fixture
def sample_category_data() -> dict:
    return {"name": "Classic", "description": "Timeless recipes"}


@pytest.fixture
def sample_pizza_data() -> dict:
    """
    Deterministic pizza payload without ``category_id``.

    Tests add the category they created themselves.
    """
    return {
        "name": "Margherita",
        "description": "Tomato, mozzarella, basil",
        "dough_type": DoughType.THIN,
        "price": 9.5,
        "diameter": 30,
    }


@pytest.fixture
async def create_category(category_repository: CategoryRepository, db_session: AsyncSession):
    """
    Factory: insert and commit a category, return its id.

    Usage:
        category_id = await create_category(name="Veggie")
    """
    async def _create(**overrides) -> int:
        data = {
            "name": f"category_{uuid.uuid4().hex[:8]}",
            "description": fake.sentence(nb_words=6),
        }
        data.update(overrides)
        category_id = await category_repository.create(**data)
        await db_session.commit()
        return category_id

    return _create


@pytest.fixture
async def create_pizza(pizza_repository: PizzaRepository, db_session: AsyncSession):
    """
    Factory: insert and commit a pizza in ``category_id``, return its id.

    Usage:
        pizza_id = await create_pizza(category_id, name="Diavola")
    """
    async def _create(category_id: int, **overrides) -> int:
        data = {
            "category_id": category_id,
            "name": f"pizza_{uuid.uuid4().hex[:8]}",
            "description": fake.sentence(nb_words=8),
            "dough_type": DoughType.TRADITIONAL.value,
            "price": round(fake.pyfloat(min_value=5, max_value=25, right_digits=2), 2),
            "diameter": fake.random_element((25, 30, 35, 40)),
        }
        data.update(overrides)
        pizza_id = await pizza_repository.create(**data)
        await db_session.commit()
        return pizza_id

    return _create


@pytest.fixture
async def created_category(create_category, sample_category_data) -> int:
    return await create_category(**sample_category_data)


@pytest.fixture
async def created_pizza(create_pizza, created_category, sample_pizza_data) -> int:
    data = dict(sample_pizza_data, dough_type=sample_pizza_data["dough_type"].value)
    return await create_pizza(created_category, **data)
