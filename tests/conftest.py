# tests/conftest.py
"""
Shared pytest fixtures for the storefront API tests.

Provides:
- A fresh in-memory MongoDB (mongomock-motor) bound to Beanie per test
- An httpx client talking to the app over ASGI
- Admin / customer identities and auth headers
- A small catalog
"""
import os

# Must be set before the app is imported
os.environ["RATE_LIMIT"] = "100000/minute"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from storefront.core.config import settings
from storefront.db import init_models
from storefront.db.seed import seed_roles
from storefront.main import app
from tests.utils.factories import create_admin, create_category, create_customer, create_product, headers_for


# ═══════════════════════════════════════════════════════
# FIXTURES - Database & client
# ═══════════════════════════════════════════════════════

@pytest.fixture(autouse=True)
async def db():
    """Fresh database with the default roles for every test."""
    client = AsyncMongoMockClient()
    database = client["storefront_test"]
    await init_models(database)
    await seed_roles()
    yield database


@pytest.fixture(autouse=True)
def no_llm(monkeypatch):
    """Tests never reach a real provider unless they patch one in."""
    monkeypatch.setattr(settings.llm, "gemini_api_key", None)
    monkeypatch.setattr(settings.llm, "openai_api_key", None)


@pytest.fixture
async def async_client():
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ═══════════════════════════════════════════════════════
# FIXTURES - Identities
# ═══════════════════════════════════════════════════════

@pytest.fixture
async def admin_user():
    # Inserted directly: seeding is skipped once any customer exists
    return await create_admin()


@pytest.fixture
async def admin_headers(admin_user):
    return await headers_for(admin_user)


@pytest.fixture
async def customer():
    return await create_customer()


@pytest.fixture
async def user_headers(customer):
    return await headers_for(customer)


# ═══════════════════════════════════════════════════════
# FIXTURES - Catalog
# ═══════════════════════════════════════════════════════

@pytest.fixture
async def category():
    return await create_category("Electronics")


@pytest.fixture
async def product(category):
    return await create_product(category, name="Mechanical Keyboard", price=50.0, stock=10, brand="Keychron")
