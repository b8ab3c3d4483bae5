# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (local-only)
===============================================================================

Qué es:
    Asegura que exista un usuario admin para desarrollo cuando
    DEV_SEED_ADMIN=true. Los admins no se pueden crear por la API (signup
    siempre crea customers), así que en local este es el camino corto.

Seguridad:
    - Guard estricto: solo corre en app_env local/development.
    - Settings ya rechaza DEV_SEED_ADMIN en production.

CRC:
    Component: ensure_dev_admin
    Responsibilities:
      - Validar guard de ambiente
      - Crear el admin si no existe (idempotente)
    Collaborators:
      - UserRepository
      - password_hasher (identity.passwords.hash_password)
      - Settings
===============================================================================
"""

from __future__ import annotations

from typing import Callable, Final
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.users import User, UserRole

_ALLOWED_ENVS: Final[frozenset[str]] = frozenset({"local", "development"})


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env not in _ALLOWED_ENVS:
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but ENV is '{env}' "
            "(must be 'local' or 'development'). "
            "Safety guard prevents accidental overrides."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
) -> User | None:
    """
    Ensure a development admin user exists if configured.

    Returns the created user, or None when disabled or already present.
    """
    if not settings.dev_seed_admin:
        return None

    _assert_allowed_environment(settings)

    email = (settings.dev_seed_admin_email or "").strip().lower()
    password = settings.dev_seed_admin_password or ""
    if not email or not password:
        raise ValueError("Dev seed admin is enabled but email/password are empty")

    if user_repo.get_user_by_email(email) is not None:
        logger.info("Dev seed admin: user exists; skipping", extra={"email": email})
        return None

    created = user_repo.create_user(
        User(
            id=uuid4(),
            email=email,
            password_hash=password_hasher(password),
            role=UserRole.ADMIN,
        )
    )
    logger.info("Dev seed admin: user created", extra={"email": email})
    return created
