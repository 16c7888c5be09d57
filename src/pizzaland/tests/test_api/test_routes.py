"""HTTP tests: the real app over the per-test SQLite file, driven through httpx."""

import pytest

from pizzaland.core.logging.middleware import REQUEST_ID_HEADER


async def create_category(client, name="Classic", **extra) -> int:
    resp = await client.post("/v1/categories", json={"name": name, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()["category_id"]


async def create_pizza(client, category_id, name="Margherita", **extra) -> int:
    body = {"category_id": category_id, "name": name, "price": 9.5, "diameter": 30, "dough_type": 1}
    body.update(extra)
    resp = await client.post("/v1/pizzas", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["pizza_id"]


@pytest.mark.asyncio
class TestHealth:

    async def test_healthz(self, client):
        resp = await client.get("/healthz")

        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
        assert resp.headers[REQUEST_ID_HEADER]


@pytest.mark.asyncio
class TestPizzaRoutes:

    async def test_create_and_get(self, client):
        """
        Behavior:
            - POST a category and a pizza, then GET the pizza by id and by name.

        Importance:
            - Confirms the wire shapes: save returns the id, get returns the
              full message with the dough type as its integer value.
        """
        category_id = await create_category(client)
        pizza_id = await create_pizza(client, category_id)

        by_id = await client.get("/v1/pizzas/item", params={"id": pizza_id})
        by_name = await client.get("/v1/pizzas/item", params={"name": "Margherita"})

        assert by_id.status_code == 200
        assert by_id.json() == {
            "id": pizza_id,
            "category_id": category_id,
            "name": "Margherita",
            "description": None,
            "dough_type": 1,
            "price": 9.5,
            "diameter": 30,
        }
        assert by_name.json() == by_id.json()

    async def test_partial_update(self, client):
        category_id = await create_category(client)
        pizza_id = await create_pizza(client, category_id)

        resp = await client.patch("/v1/pizzas/item", params={"id": pizza_id}, json={"price": 10.0})
        pizza = (await client.get("/v1/pizzas/item", params={"id": pizza_id})).json()

        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert pizza["price"] == 10.0
        assert pizza["name"] == "Margherita"

    async def test_empty_update(self, client):
        category_id = await create_category(client)
        pizza_id = await create_pizza(client, category_id)

        resp = await client.patch("/v1/pizzas/item", params={"id": pizza_id}, json={})

        assert resp.status_code == 400
        assert resp.json() == {"detail": "nothing to change in pizza", "code": "nothing_to_update"}

    async def test_update_unknown_field(self, client):
        resp = await client.patch("/v1/pizzas/item", params={"id": 1}, json={"topping": "ham"})

        assert resp.status_code == 422

    async def test_duplicate_name(self, client):
        category_id = await create_category(client)
        await create_pizza(client, category_id)

        resp = await client.post(
            "/v1/pizzas", json={"category_id": category_id, "name": "Margherita", "price": 8, "diameter": 25},
        )

        assert resp.status_code == 409
        assert resp.json()["detail"] == "pizza already exists in the system"
        assert resp.json()["code"] == "duplicate"

    async def test_unknown_category(self, client):
        resp = await client.post("/v1/pizzas", json={"category_id": 5, "name": "X", "price": 8, "diameter": 25})

        assert resp.status_code == 422
        assert resp.json()["code"] == "invalid_argument"

    @pytest.mark.parametrize(
        "params, message",
        [
            ({}, "no identifier supplied"),
            ({"id": 0, "name": ""}, "no identifier supplied"),
            ({"id": 1, "name": "Margherita"}, "ambiguous identifier: both id and name supplied"),
        ],
    )
    async def test_invalid_identifier(self, client, params, message):
        resp = await client.get("/v1/pizzas/item", params=params)

        assert resp.status_code == 400
        assert resp.json() == {"detail": message, "code": "invalid_identifier", "fields": ["id", "name"]}

    async def test_missing_pizza(self, client):
        resp = await client.delete("/v1/pizzas/item", params={"name": "Ghost"})

        assert resp.status_code == 404
        assert resp.json() == {"detail": "pizza not found in the system", "code": "not_found", "fields": ["name"]}

    async def test_remove(self, client):
        category_id = await create_category(client)
        pizza_id = await create_pizza(client, category_id)

        resp = await client.delete("/v1/pizzas/item", params={"id": pizza_id})
        after = await client.get("/v1/pizzas/item", params={"id": pizza_id})

        assert resp.json() == {"success": True}
        assert after.status_code == 404

    async def test_list_with_paging_and_category_filter(self, client):
        classic = await create_category(client, "Classic")
        spicy = await create_category(client, "Spicy")
        ids = [await create_pizza(client, classic, name=f"classic-{i}") for i in range(3)]
        diavola = await create_pizza(client, spicy, name="Diavola")

        page = await client.get("/v1/pizzas", params={"offset": 1, "limit": 2})
        by_id = await client.get("/v1/pizzas", params={"category_id": spicy})
        by_name = await client.get("/v1/pizzas", params={"category_name": "Classic"})

        assert [p["id"] for p in page.json()["pizzas"]] == ids[1:3]
        assert [p["id"] for p in by_id.json()["pizzas"]] == [diavola]
        assert [p["id"] for p in by_name.json()["pizzas"]] == ids

    async def test_list_limit_above_maximum(self, client):
        resp = await client.get("/v1/pizzas", params={"limit": 1000})

        assert resp.status_code == 422


@pytest.mark.asyncio
class TestCategoryRoutes:

    async def test_crud(self, client):
        category_id = await create_category(client, "Veggie", description="No meat")

        listed = await client.get("/v1/categories")
        updated = await client.patch("/v1/categories/item", params={"name": "Veggie"}, json={"description": "Greens"})
        fetched = await client.get("/v1/categories/item", params={"id": category_id})

        assert listed.json() == {"categories": [{"id": category_id, "name": "Veggie", "description": "No meat"}]}
        assert updated.json() == {"success": True}
        assert fetched.json()["description"] == "Greens"

    async def test_remove_cascades_to_pizzas(self, client):
        category_id = await create_category(client)
        pizza_id = await create_pizza(client, category_id)

        resp = await client.delete("/v1/categories/item", params={"id": category_id})
        pizza = await client.get("/v1/pizzas/item", params={"id": pizza_id})

        assert resp.json() == {"success": True}
        assert pizza.status_code == 404

    async def test_duplicate(self, client):
        await create_category(client)

        resp = await client.post("/v1/categories", json={"name": "Classic"})

        assert resp.status_code == 409
        assert resp.json()["detail"] == "category already exists in the system"

    async def test_missing(self, client):
        resp = await client.get("/v1/categories/item", params={"id": 9})

        assert resp.status_code == 404
        assert resp.json()["detail"] == "category not found in the system"


@pytest.mark.asyncio
class TestOutOfRangeValues:

    @pytest.mark.parametrize(
        "path, params",
        [
            ("/v1/pizzas/item", {"id": 2**64 - 1}),
            ("/v1/pizzas/item", {"id": 2**63}),
            ("/v1/categories/item", {"id": 2**32}),
            ("/v1/pizzas", {"category_id": 2**32}),
        ],
    )
    async def test_oversized_identifier_is_rejected(self, client, path, params):
        """
        Behavior:
            - An id larger than the column can hold fails request validation.

        Importance:
            - Without the bound the driver overflows while binding the value and
              the client sees an opaque 500 instead of a validation error.
        """
        resp = await client.get(path, params=params)

        assert resp.status_code == 422
        assert resp.json()["detail"][0]["type"] == "less_than_equal"

    async def test_largest_pizza_id_is_a_plain_miss(self, client):
        resp = await client.get("/v1/pizzas/item", params={"id": 2**63 - 1})

        assert resp.status_code == 404
        assert resp.json()["code"] == "not_found"

    @pytest.mark.parametrize("field", ["diameter", "category_id"])
    async def test_oversized_update_value_is_rejected(self, client, field):
        # Arrange
        category_id = await create_category(client)
        pizza_id = await create_pizza(client, category_id)

        # Act
        resp = await client.patch("/v1/pizzas/item", params={"id": pizza_id}, json={field: 2**63})
        pizza = await client.get("/v1/pizzas/item", params={"id": pizza_id})

        # Assert
        assert resp.status_code == 422
        assert pizza.json()[field] == {"diameter": 30, "category_id": category_id}[field]

    async def test_oversized_diameter_on_create(self, client):
        category_id = await create_category(client)

        resp = await client.post(
            "/v1/pizzas", json={"category_id": category_id, "name": "Huge", "price": 8, "diameter": 2**32},
        )

        assert resp.status_code == 422


@pytest.mark.asyncio
class TestDeadline:

    async def test_timeout_maps_to_504(self, app, client, monkeypatch):
        from pizzaland.services.pizzaland import PizzaLandService

        async def too_slow(self, offset=0, limit=0):
            raise TimeoutError()

        monkeypatch.setattr(PizzaLandService, "list_categories", too_slow)

        resp = await client.get("/v1/categories")

        assert resp.status_code == 504
        assert resp.json() == {"detail": "deadline exceeded", "code": "timeout"}


@pytest.mark.asyncio
class TestInternalErrors:

    async def test_storage_failure_is_opaque(self, client, monkeypatch):
        from pizzaland.exceptions import InternalError
        from pizzaland.services.pizzaland import PizzaLandService

        async def broken(self, identifier):
            raise InternalError("Failed to operate on Pizza: disk I/O error")

        monkeypatch.setattr(PizzaLandService, "get_pizza", broken)

        resp = await client.get("/v1/pizzas/item", params={"id": 1})

        assert resp.status_code == 500
        assert resp.json() == {"detail": "internal storage error", "code": "internal"}
