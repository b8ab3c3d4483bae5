import pytest

from storefront.application.dev_seed_admin import ensure_dev_admin
from storefront.crosscutting.config import Settings
from storefront.identity.users import UserRole
from storefront.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


def _hasher(password: str) -> str:
    return f"hashed:{password}"


def test_ensure_dev_admin_disabled():
    repo = InMemoryUserRepository()
    settings = Settings(dev_seed_admin=False)

    assert ensure_dev_admin(settings, user_repo=repo, password_hasher=_hasher) is None
    assert repo.list_users() == []


def test_ensure_dev_admin_fail_fast_outside_local():
    settings = Settings(dev_seed_admin=True, app_env="staging")

    with pytest.raises(RuntimeError, match="must be 'local' or 'development'"):
        ensure_dev_admin(
            settings, user_repo=InMemoryUserRepository(), password_hasher=_hasher
        )


def test_ensure_dev_admin_creates_admin_once():
    repo = InMemoryUserRepository()
    settings = Settings(
        dev_seed_admin=True,
        app_env="local",
        dev_seed_admin_email="Admin@Local",
        dev_seed_admin_password="pass",
    )

    created = ensure_dev_admin(settings, user_repo=repo, password_hasher=_hasher)
    again = ensure_dev_admin(settings, user_repo=repo, password_hasher=_hasher)

    assert created.email == "admin@local"
    assert created.role == UserRole.ADMIN
    assert created.password_hash == "hashed:pass"
    assert again is None
    assert len(repo.list_users()) == 1
