"""Unit tests for menu, user and health API endpoints."""
import pytest


class TestCategoriesAPI:
    """Test menu category endpoints."""

    @pytest.mark.asyncio
    async def test_create_category(self, test_client):
        response = await test_client.post(
            "/api/menu/categories",
            json={"name": "Pastries", "description": "Baked daily", "sort_order": 3},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Pastries"
        assert data["is_active"] is True

    @pytest.mark.asyncio
    async def test_duplicate_category(self, test_client):
        payload = {"name": "Pastries", "sort_order": 3}
        await test_client.post("/api/menu/categories", json=payload)

        response = await test_client.post("/api/menu/categories", json=payload)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_list_categories(self, test_client, sample_menu):
        await test_client.post(
            "/api/menu/categories",
            json={"name": "Retired", "sort_order": 9, "is_active": False},
        )

        response = await test_client.get("/api/menu/categories")
        assert [c["name"] for c in response.json()] == ["Coffee"]

        response = await test_client.get(
            "/api/menu/categories", params={"include_inactive": "true"}
        )
        assert [c["name"] for c in response.json()] == ["Coffee", "Retired"]


class TestMenuItemsAPI:
    """Test menu item endpoints."""

    @pytest.mark.asyncio
    async def test_create_menu_item(self, test_client, sample_menu):
        response = await test_client.post(
            "/api/menu/items",
            json={
                "category_id": sample_menu["category"].id,
                "name": "Mocha",
                "base_price": 5.25,
                "has_size_options": True,
                "max_extra_shots": 2,
                "sort_order": 6,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["base_price"] == 5.25
        assert data["is_available"] is True
        assert data["has_milk_options"] is False

    @pytest.mark.asyncio
    async def test_create_menu_item_unknown_category(self, test_client):
        response = await test_client.post(
            "/api/menu/items",
            json={"category_id": 99, "name": "Mocha", "base_price": 5.25, "sort_order": 1},
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("base_price", [0, -1.00, 4.999])
    async def test_create_menu_item_bad_price(self, test_client, sample_menu, base_price):
        response = await test_client.post(
            "/api/menu/items",
            json={
                "category_id": sample_menu["category"].id,
                "name": "Mocha",
                "base_price": base_price,
                "sort_order": 1,
            },
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_available_items(self, test_client, sample_menu):
        response = await test_client.get("/api/menu/items", params={"is_available": "true"})

        assert response.status_code == 200
        names = [i["name"] for i in response.json()]
        assert names == ["Test Coffee", "Test Latte", "Sparkling Water", "Green Tea"]

    @pytest.mark.asyncio
    async def test_update_menu_item(self, test_client, sample_menu):
        response = await test_client.patch(
            f"/api/menu/items/{sample_menu['special'].id}",
            json={"is_available": True, "description": "Back for autumn"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_available"] is True
        assert data["description"] == "Back for autumn"
        assert data["base_price"] == 6.0

    @pytest.mark.asyncio
    async def test_update_ignores_null_required_fields(self, test_client, sample_menu):
        response = await test_client.patch(
            f"/api/menu/items/{sample_menu['coffee'].id}",
            json={"name": None, "max_extra_shots": 1},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Test Coffee"
        assert response.json()["max_extra_shots"] == 1

    @pytest.mark.asyncio
    async def test_update_missing_item(self, test_client):
        response = await test_client.patch("/api/menu/items/404", json={"name": "Ghost"})
        assert response.status_code == 404


class TestSizePricingAPI:
    """Test size pricing endpoints."""

    @pytest.mark.asyncio
    async def test_add_and_list_sizes(self, test_client, sample_menu):
        tea_id = sample_menu["tea"].id

        response = await test_client.post(
            f"/api/menu/items/{tea_id}/sizes",
            json={"size": "large", "price_modifier": 0.80},
        )
        assert response.status_code == 201
        assert response.json()["price_modifier"] == 0.8

        response = await test_client.get(f"/api/menu/items/{tea_id}/sizes")
        assert [s["size"] for s in response.json()] == ["large"]

    @pytest.mark.asyncio
    async def test_duplicate_size(self, test_client, sample_menu):
        response = await test_client.post(
            f"/api/menu/items/{sample_menu['latte'].id}/sizes",
            json={"size": "small", "price_modifier": -0.25},
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_invalid_size(self, test_client, sample_menu):
        response = await test_client.post(
            f"/api/menu/items/{sample_menu['latte'].id}/sizes",
            json={"size": "venti", "price_modifier": 1.00},
        )
        assert response.status_code == 422


class TestUsersAPI:
    """Test user registration."""

    @pytest.mark.asyncio
    async def test_create_user(self, test_client):
        response = await test_client.post(
            "/api/users", json={"email": "ada@example.com", "name": "Ada"}
        )

        assert response.status_code == 201
        assert response.json()["role"] == "customer"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, test_client):
        payload = {"email": "ada@example.com", "name": "Ada"}
        await test_client.post("/api/users", json=payload)

        response = await test_client.post("/api/users", json=payload)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_invalid_email(self, test_client):
        response = await test_client.post("/api/users", json={"email": "nope", "name": "Ada"})
        assert response.status_code == 422


class TestHealthAPI:
    """Test service endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "timestamp" in response.json()

    @pytest.mark.asyncio
    async def test_root(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert "ordering API" in response.json()["message"]
