"""
Name: Settings Tests

Responsibilities:
  - Production guards (JWT secret strength, dev seed disabled)
  - Backend selection and CORS parsing
"""

import pytest
from pydantic import ValidationError

from storefront.crosscutting.config import Settings

pytestmark = pytest.mark.unit

STRONG_SECRET = "prod-secret-1234567890-1234567890-123456"


def test_production_rejects_default_secret():
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(app_env="production", jwt_secret="dev-secret")


def test_production_rejects_short_secret():
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(app_env="production", jwt_secret="short-but-not-default")


def test_production_rejects_dev_seed_admin():
    with pytest.raises(ValidationError, match="DEV_SEED_ADMIN"):
        Settings(app_env="production", jwt_secret=STRONG_SECRET, dev_seed_admin=True)


def test_production_with_strong_secret():
    settings = Settings(app_env="production", jwt_secret=STRONG_SECRET)

    assert settings.is_production()
    assert not settings.uses_memory_store()


def test_test_env_uses_memory_store():
    assert Settings(app_env="test").uses_memory_store()
    assert Settings(app_env="development", repository_backend="memory").uses_memory_store()
    assert not Settings(app_env="development").uses_memory_store()


def test_invalid_backend_rejected():
    with pytest.raises(ValidationError):
        Settings(repository_backend="mongo")


def test_allowed_origins_list():
    settings = Settings(allowed_origins=" http://a.test , ,http://b.test")

    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]


def test_env_vars_are_read(monkeypatch):
    monkeypatch.setenv("ENFORCE_ORDER_TOTAL", "true")
    monkeypatch.setenv("JWT_ACCESS_TTL_MINUTES", "15")

    settings = Settings()

    assert settings.enforce_order_total is True
    assert settings.jwt_access_ttl_minutes == 15
