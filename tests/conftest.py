"""Root conftest: shared test configuration and fixtures."""

import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB_NAME", "storefront_test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_fake_key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.database import get_database
from app.main import app
from app.models.user import UserRole

from tests.factories import auth_headers, insert_category, insert_user


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    return AsyncMongoMockClient()["storefront_test"]


@pytest.fixture
async def client(db):
    """HTTP client driving the app against the in-memory database."""
    app.dependency_overrides[get_database] = lambda: db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def user(db):
    return await insert_user(db, "alice@mail.com")


@pytest.fixture
async def admin(db):
    return await insert_user(db, "admin@mail.com", UserRole.ADMIN, name="Store Admin")


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
async def category(db):
    return await insert_category(db, "Electronics")
