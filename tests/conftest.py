"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test -> in-memory repositories)
  - Reset cached Settings and container singletons between tests
  - Provide user / token / client factories

Collaborators:
  - pytest: Test framework
  - storefront.container: composition root (cached repositories)
  - fastapi.testclient.TestClient

Notes:
  - Fixtures are auto-discovered by pytest
  - Nothing here touches Postgres; pool tests mock ConnectionPool
"""

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "test-secret")

from storefront.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from storefront.container import get_user_repository, reset_container  # noqa: E402
from storefront.context import clear_context  # noqa: E402
from storefront.crosscutting.config import get_settings  # noqa: E402
from storefront.identity.passwords import hash_password  # noqa: E402
from storefront.identity.tokens import issue_token  # noqa: E402
from storefront.identity.users import Identity, User, UserRole  # noqa: E402
from storefront.infrastructure.db.pool import reset_pool  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _isolated_container():
    """Fresh Settings + repositories per test."""
    get_settings.cache_clear()
    reset_container()
    reset_pool()
    yield
    get_settings.cache_clear()
    reset_container()
    reset_pool()
    clear_context()


# ============================================================================
# Identity factories
# ============================================================================


@pytest.fixture
def make_user():
    """Creates a user in the container's user repository."""

    def create(
        *,
        email: str | None = None,
        password: str = "secret-password",
        role: UserRole = UserRole.CUSTOMER,
    ) -> User:
        user = User(
            id=uuid4(),
            email=email or f"user-{uuid4().hex[:8]}@example.com",
            password_hash=hash_password(password),
            role=role,
            created_at=datetime.now(timezone.utc),
        )
        return get_user_repository().create_user(user)

    return create


@pytest.fixture
def token_for():
    """Signs an access token for a stored user with the active Settings."""

    def create(user: User) -> str:
        token, _ = issue_token(Identity.from_user(user), get_settings())
        return token

    return create


@pytest.fixture
def auth_headers(token_for):
    def create(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(user)}"}

    return create


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from storefront.api.main import create_app

    return TestClient(create_app(), raise_server_exceptions=False)
