"""Root conftest, shared fixtures for all tests.

Provides:
- A known auth secret so bearer tokens can be issued and verified
- A mocked AsyncSession for the database dependency
- API clients with dependency overrides (authenticated and anonymous)
- Autouse reset of the GitHub TTL caches
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from codeinsight.config import settings
from codeinsight.core.security import AuthContext
from codeinsight.services.github import clear_github_caches

from tests.helpers.mock_factories import make_user

TEST_AUTH_SECRET = "test-secret-not-for-production"


@pytest.fixture(autouse=True)
def auth_secret(monkeypatch):
    """Sign tokens with a fixed secret in every test."""
    monkeypatch.setattr(settings, "auth_secret", TEST_AUTH_SECRET)
    return TEST_AUTH_SECRET


@pytest.fixture(autouse=True)
def _clear_github_caches():
    """Clear GitHub TTL caches before and after each test."""
    clear_github_caches()
    yield
    clear_github_caches()


@pytest.fixture
def auth_context() -> AuthContext:
    return AuthContext(github_id=42, login="octocat", access_token="gho_test_token")


@pytest.fixture
def test_user():
    return make_user(github_id=42, login="octocat")


@pytest.fixture
def mock_db() -> AsyncMock:
    """AsyncSession stand-in; tests patch the domain operations they rely on."""
    db = AsyncMock()
    db.add = MagicMock()
    return db


# ─────────────────────────────────────────────────────────────────────────────
# API Clients
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
async def api_client(mock_db, auth_context, test_user):
    """HTTP client authenticated as test_user.

    Overrides: get_auth_context, get_current_user, get_db
    """
    from codeinsight.api.deps.auth import get_auth_context, get_current_user
    from codeinsight.core.database import get_db
    from codeinsight.main import app

    app.dependency_overrides[get_auth_context] = lambda: auth_context
    app.dependency_overrides[get_current_user] = lambda: test_user

    async def override_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def anonymous_client(mock_db):
    """HTTP client with real bearer-token auth and a mocked database."""
    from codeinsight.core.database import get_db
    from codeinsight.main import app

    async def override_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
