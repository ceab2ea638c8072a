"""
tests/conftest.py -- Shared test fixtures for AssetVault.

This module provides:
  - build_services(): wires stores, hasher and token service into the two
    services, the same graph the real lifespan builds
  - _patch_lifespan(): installs a prebuilt graph on app.state, bypassing
    real startup
  - api_client: TestClient against the real app with isolated stores
  - auth_service / asset_service: in-memory services for unit tests

Design: Named shared-memory SQLite URIs (not plain :memory:) are used for the
API client because TestClient runs route handlers in a thread pool. Plain
:memory: DBs are per-connection and would present a blank schema to each
worker thread. Unit tests run on one thread, so :memory: is fine there.

bcrypt rounds are set to the minimum (4) so the suite stays fast.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass

# Set DEBUG before any app import so get_settings() can auto-generate
# SECRET_KEY instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from assets.service import AssetService
from assets.store import AssetStore
from auth.service import AuthService
from auth.store import UserStore
from auth.tokens import PasswordHasher, TokenService

TEST_SECRET = "test-secret-key-that-is-at-least-32-characters-long"
TEST_PASSWORD = "password123"


@dataclass
class Services:
    user_store: UserStore
    asset_store: AssetStore
    tokens: TokenService
    auth: AuthService
    assets: AssetService

    def close(self) -> None:
        self.asset_store.close()
        self.user_store.close()


def build_services(db_url: str) -> Services:
    user_store = UserStore(db_url)
    asset_store = AssetStore(db_url)
    tokens = TokenService(TEST_SECRET, expire_seconds=3600)
    auth = AuthService(user_store, PasswordHasher(rounds=4), tokens)
    return Services(user_store, asset_store, tokens, auth, AssetService(asset_store))


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}@example.com"


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _patch_lifespan(services: Services):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = services.user_store
        app.state.asset_store = services.asset_store
        app.state.auth_service = services.auth
        app.state.asset_service = services.assets
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# API fixtures -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_services(request) -> Generator[Services, None, None]:
    suffix = request.module.__name__.rsplit(".", 1)[-1]
    services = build_services(f"sqlite:///file:test_{suffix}?mode=memory&cache=shared&uri=true")
    yield services
    services.close()


@pytest.fixture(scope="module")
def api_client(api_services: Services) -> Generator[TestClient, None, None]:
    """Yield a TestClient running the real app over isolated in-memory stores."""
    app.router.lifespan_context = _patch_lifespan(api_services)
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client


@pytest.fixture
def registered(api_client: TestClient) -> tuple[str, dict]:
    """Register a fresh user over HTTP and return (token, user json)."""
    resp = api_client.post(
        "/auth/register",
        json={"email": unique_email(), "password": TEST_PASSWORD, "name": "Test User"},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    return data["access_token"], data["user"]


# ---------------------------------------------------------------------------
# Unit fixtures -- fresh in-memory DB per test
# ---------------------------------------------------------------------------


@pytest.fixture
def services() -> Generator[Services, None, None]:
    s = build_services("sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture
def auth_service(services: Services) -> AuthService:
    return services.auth


@pytest.fixture
def asset_service(services: Services) -> AssetService:
    return services.assets
