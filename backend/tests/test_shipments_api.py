"""Shipment booking, tracking and status endpoint tests."""

import pytest
from httpx import AsyncClient

from app.database import DocumentStore
from app.models.container import ContainerStatus
from app.models.inventory import ProductCategory
from app.models.shipment import ShipmentStatus


def _order(**overrides) -> dict:
    body = {
        "product_name": "Duke Blueberries",
        "category": "Fresh",
        "weight": 1000,
        "destination": "Berlin, Germany",
        "container_type": "Medium",
    }
    body.update(overrides)
    return body


def _stock(store: DocumentStore, category: ProductCategory) -> float:
    return store.find_one("inventory", lambda i: i.category == category).quantity


@pytest.mark.api
@pytest.mark.asyncio
class TestCreateShipment:

    async def test_create_prices_and_decrements_inventory(
        self, client: AsyncClient, store: DocumentStore, customer_headers: dict
    ):
        response = await client.post("/api/shipments/create", json=_order(), headers=customer_headers)

        assert response.status_code == 201
        data = response.json()
        shipment = data["shipment"]
        assert shipment["status"] == "Pending"
        assert shipment["distance"] == 3000
        assert shipment["price"] == 24000
        assert shipment["estimated_delivery_days"] == 8
        assert shipment["destination_country"] == "Germany"
        assert shipment["customer_name"] == "alice"
        assert data["price_breakdown"]["rate_per_km"] == 8
        assert data["price_breakdown"]["total_price_display"] == "₺24.000,00"

        assert _stock(store, ProductCategory.FRESH) == 9000

    async def test_requires_login(self, client: AsyncClient):
        response = await client.post("/api/shipments/create", json=_order())
        assert response.status_code == 401

    async def test_capacity_exceeded(
        self, client: AsyncClient, store: DocumentStore, customer_headers: dict
    ):
        response = await client.post(
            "/api/shipments/create",
            json=_order(weight=2500, container_type="Small"),
            headers=customer_headers,
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "CAPACITY_EXCEEDED"
        assert error["details"]["capacity_kg"] == 2000
        assert store.find_all("shipments") == []
        assert _stock(store, ProductCategory.FRESH) == 10000

    async def test_insufficient_inventory_changes_nothing(
        self, client: AsyncClient, store: DocumentStore, customer_headers: dict
    ):
        response = await client.post(
            "/api/shipments/create",
            json=_order(category="Organic", weight=6000, container_type="Large"),
            headers=customer_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INSUFFICIENT_INVENTORY"
        assert store.find_all("shipments") == []
        assert _stock(store, ProductCategory.ORGANIC) == 5000

    async def test_stock_below_minimum_is_marked_low(
        self, client: AsyncClient, store: DocumentStore, customer_headers: dict
    ):
        await client.post(
            "/api/shipments/create",
            json=_order(category="Organic", weight=4500, container_type="Medium"),
            headers=customer_headers,
        )

        item = store.find_one("inventory", lambda i: i.category == ProductCategory.ORGANIC)
        assert item.quantity == 500
        assert item.status.value == "Low"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"weight": 0},
            {"weight": -5},
            {"destination": "Berlin"},
            {"container_type": "Huge"},
            {"category": "Dried"},
            {"product_name": "<script>alert(1)</script>"},
        ],
    )
    async def test_invalid_payloads(self, client: AsyncClient, customer_headers: dict, overrides):
        response = await client.post(
            "/api/shipments/create", json=_order(**overrides), headers=customer_headers
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_unknown_city_falls_back_to_country_estimate(
        self, client: AsyncClient, customer_headers: dict
    ):
        response = await client.post(
            "/api/shipments/create",
            json=_order(destination="Kayseri, Turkey", container_type="Small"),
            headers=customer_headers,
        )
        shipment = response.json()["shipment"]
        assert shipment["distance"] == 300
        assert shipment["price"] == 1500
        assert shipment["estimated_delivery_days"] == 2


@pytest.mark.api
@pytest.mark.asyncio
class TestTrackingAndListing:

    async def test_my_shipments_only_lists_own(
        self, client: AsyncClient, customer_headers: dict, admin_headers: dict
    ):
        await client.post("/api/shipments/create", json=_order(), headers=customer_headers)
        await client.post("/api/shipments/create", json=_order(weight=200), headers=admin_headers)

        response = await client.get("/api/shipments/my-shipments", headers=customer_headers)
        data = response.json()
        assert data["count"] == 1
        assert data["items"][0]["weight"] == 1000

    async def test_track_is_public(self, client: AsyncClient, customer_headers: dict):
        created = await client.post("/api/shipments/create", json=_order(), headers=customer_headers)
        shipment_id = created.json()["shipment"]["id"]

        response = await client.get(f"/api/shipments/track/{shipment_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["container"] is None
        assert data["tracking"]["current_location"] == "Muğla Warehouse"
        assert data["tracking"]["requested_bin_type"] == "Medium"
        assert data["tracking"]["estimated_delivery"] == "8 days"

    async def test_track_unknown(self, client: AsyncClient):
        response = await client.get("/api/shipments/track/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"

    async def test_all_requires_admin(self, client: AsyncClient, customer_headers: dict):
        response = await client.get("/api/shipments/all", headers=customer_headers)
        assert response.status_code == 403

    async def test_admin_status_update_and_filter(
        self, client: AsyncClient, customer_headers: dict, admin_headers: dict
    ):
        first = await client.post("/api/shipments/create", json=_order(), headers=customer_headers)
        await client.post("/api/shipments/create", json=_order(weight=300), headers=customer_headers)
        shipment_id = first.json()["shipment"]["id"]

        response = await client.patch(
            f"/api/shipments/{shipment_id}/status",
            json={"status": "In Transit"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["shipment"]["status"] == "In Transit"

        tracked = await client.get(f"/api/shipments/track/{shipment_id}")
        assert tracked.json()["tracking"]["current_location"] == "En Route"

        response = await client.get(
            "/api/shipments/all", params={"status": "Pending"}, headers=admin_headers
        )
        assert response.json()["count"] == 1

        response = await client.get("/api/shipments/all", headers=admin_headers)
        assert response.json()["count"] == 2

    async def test_status_update_rejects_unknown_status(
        self, client: AsyncClient, customer_headers: dict, admin_headers: dict
    ):
        created = await client.post("/api/shipments/create", json=_order(), headers=customer_headers)
        shipment_id = created.json()["shipment"]["id"]

        response = await client.patch(
            f"/api/shipments/{shipment_id}/status",
            json={"status": "Lost"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    async def test_back_to_pending_unloads_container(
        self, client: AsyncClient, store: DocumentStore, customer_headers: dict, admin_headers: dict
    ):
        created = await client.post(
            "/api/shipments/create", json=_order(container_type="Small"), headers=customer_headers
        )
        shipment_id = created.json()["shipment"]["id"]
        await client.post("/api/admin/containers/optimize", headers=admin_headers)
        assert store.get("containers", 1).current_load == 1000

        response = await client.patch(
            f"/api/shipments/{shipment_id}/status", json={"status": "Pending"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["shipment"]["container_id"] is None
        container = store.get("containers", 1)
        assert container.current_load == 0
        assert container.status == ContainerStatus.AVAILABLE

        # Re-packing uses the freed container instead of a second one
        await client.post("/api/admin/containers/optimize", headers=admin_headers)
        loads = {c.id: c.current_load for c in store.find_all("containers")}
        assert loads == {1: 1000, 2: 0, 3: 0, 4: 0, 5: 0, 6: 0}

    async def test_back_to_pending_refused_once_container_left(
        self, client: AsyncClient, store: DocumentStore, customer_headers: dict, admin_headers: dict
    ):
        created = await client.post(
            "/api/shipments/create", json=_order(container_type="Small"), headers=customer_headers
        )
        shipment_id = created.json()["shipment"]["id"]
        await client.post("/api/admin/containers/optimize", headers=admin_headers)
        store.update("containers", lambda c: c.id == 1, {"status": ContainerStatus.IN_TRANSIT})

        response = await client.patch(
            f"/api/shipments/{shipment_id}/status", json={"status": "Pending"}, headers=admin_headers
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "CONTAINER_IN_USE"
        shipment = store.get("shipments", shipment_id)
        assert shipment.status == ShipmentStatus.READY
        assert shipment.container_id == 1

    async def test_status_update_unknown_shipment(self, client: AsyncClient, admin_headers: dict):
        response = await client.patch(
            "/api/shipments/42/status", json={"status": "Delivered"}, headers=admin_headers
        )
        assert response.status_code == 404


@pytest.mark.api
@pytest.mark.asyncio
class TestQuoteAndDestinations:

    async def test_quote_writes_nothing(self, client: AsyncClient, store: DocumentStore):
        response = await client.post(
            "/api/shipments/quote",
            json={"destination": "Tokyo, Japan", "container_type": "Large", "weight": 12000},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["distance_km"] == 9800
        assert data["total_price"] == 117600
        assert data["estimated_delivery_days"] == 23
        assert data["fits_container"] is False
        assert store.find_all("shipments") == []

    async def test_destinations(self, client: AsyncClient):
        response = await client.get("/api/shipments/destinations")

        data = response.json()
        assert data["origin"] == "Muğla, Turkey"
        assert "Berlin, Germany" in data["destinations"]
