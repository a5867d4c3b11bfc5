"""Pytest configuration and fixtures for Transport Management System tests.

Every test gets its own data file under tmp_path; the app's store
dependency is overridden to point at it.
"""

import os
from typing import AsyncGenerator

# Minimum bcrypt cost keeps the auth tests fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.auth.jwt import create_access_token
from app.auth.permissions import resolve_permissions
from app.cli import seed
from app.database import DocumentStore, get_store
from app.main import app
from app.models.container import BinType, Container, ContainerStatus
from app.models.inventory import ProductCategory
from app.models.shipment import ContainerClass, Shipment, ShipmentStatus
from app.models.user import User, UserRole
from app.services.users import create_user

CUSTOMER_PASSWORD = "customerpass123"
ADMIN_PASSWORD = "adminpass123"


# ── Store ────────────────────────────────────────────────────────

@pytest.fixture
def empty_store(tmp_path) -> DocumentStore:
    """A store backed by a data file that does not exist yet."""
    return DocumentStore(tmp_path / "db.json")


@pytest.fixture
def store(empty_store: DocumentStore) -> DocumentStore:
    """A store seeded with containers, fleet and inventory."""
    seed(empty_store)
    return empty_store


@pytest_asyncio.fixture
async def client(store: DocumentStore) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Record factories ─────────────────────────────────────────

@pytest.fixture
def make_shipment():
    """Factory for Shipment records with sensible defaults."""
    def _make(id=None, weight=1000.0, status=ShipmentStatus.PENDING, destination="Berlin, Germany", **kw):
        fields = dict(
            id=id,
            product_name="Blueberries",
            category=ProductCategory.FRESH,
            weight=weight,
            destination=destination,
            destination_country=destination.split(",")[-1].strip(),
            distance=3000,
            container_type=ContainerClass.LARGE,
            price=36000,
            estimated_delivery_days=9,
            status=status,
        )
        fields.update(kw)
        return Shipment(**fields)

    return _make


@pytest.fixture
def make_container():
    def _make(id, capacity=10000.0, current_load=0.0, status=ContainerStatus.AVAILABLE, type=BinType.LARGE):
        return Container(id=id, type=type, capacity=capacity, current_load=current_load, status=status)

    return _make


# ── Users & tokens ───────────────────────────────────────────────

@pytest.fixture
def customer(store: DocumentStore) -> User:
    return create_user(store, "alice", "alice@example.com", CUSTOMER_PASSWORD)


@pytest.fixture
def admin(store: DocumentStore) -> User:
    return create_user(store, "admin", "admin@example.com", ADMIN_PASSWORD, role=UserRole.ADMIN)


def _headers(user: User) -> dict:
    token = create_access_token(
        user_id=user.id,
        role=user.role.value,
        permissions=resolve_permissions(user.role.value),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(customer: User) -> dict:
    return _headers(customer)


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return _headers(admin)


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: HTTP API tests")
    config.addinivalue_line("markers", "auth: Authentication tests")
