"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Decide which persistence backend the container wires (postgres / memory)

Collaborators:
  - api/main.py: reads settings for CORS, pool sizing and startup validation
  - container.py: reads settings to pick repository implementations
  - identity/tokens.py: JWT secret, TTL and leeway

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, only configuration

Notes:
  - Singleton via lru_cache; tests call get_settings.cache_clear()
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_REPOSITORY_BACKENDS = {"postgres", "memory"}
_TEST_ENVS = {"test", "testing", "ci"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        database_url: PostgreSQL connection string (required for postgres backend)
        repository_backend: "postgres" or "memory"
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        jwt_secret: Secret for signing access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes (default: one day)
        jwt_leeway_seconds: Clock skew tolerated on expiry checks (default: 0)
        db_pool_min_size / db_pool_max_size: Connection pool bounds
        db_statement_timeout_ms: Per-connection statement timeout
        db_slow_query_seconds: Threshold for slow-query warnings
        db_healthcheck_on_acquire: SELECT 1 when a connection is acquired
        log_level: Root log level for the storefront logger
        log_json: Emit JSON logs (default: True)
        enforce_order_total: Reject orders whose total != sum of line items
        metrics_require_admin: Require an admin token for /metrics
        dev_seed_admin*: Seed an admin user on startup (local only)
    """

    # Environment
    app_env: str = "development"

    # Persistence
    database_url: str = ""
    repository_backend: str = "postgres"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 24 * 60
    jwt_leeway_seconds: int = 0

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds
    db_slow_query_seconds: float = 0.25
    db_healthcheck_on_acquire: bool = True

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Orders
    enforce_order_total: bool = False

    # Observability
    metrics_require_admin: bool = False

    # Dev Tools (Backend Safe)
    dev_seed_admin: bool = False
    dev_seed_admin_email: str = "admin@local"
    dev_seed_admin_password: str = "admin"

    @field_validator("repository_backend")
    @classmethod
    def repository_backend_valid(cls, v: str) -> str:
        backend = (v or "postgres").strip().lower()
        if backend not in _REPOSITORY_BACKENDS:
            raise ValueError("repository_backend must be postgres or memory")
        return backend

    @field_validator("jwt_access_ttl_minutes")
    @classmethod
    def ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_access_ttl_minutes must be greater than 0")
        return v

    @field_validator("jwt_leeway_seconds")
    @classmethod
    def leeway_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("jwt_leeway_seconds must be >= 0")
        return v

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if self.dev_seed_admin:
            raise ValueError("DEV_SEED_ADMIN must be false in production")

        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test_env(self) -> bool:
        return self.app_env.strip().lower() in _TEST_ENVS

    def uses_memory_store(self) -> bool:
        """In-memory repositories in test envs or when explicitly requested."""
        return self.is_test_env() or self.repository_backend == "memory"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
