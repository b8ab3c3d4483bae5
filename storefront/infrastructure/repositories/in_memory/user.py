"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / local dev).
  - Unicidad de email (emula el UNIQUE de Postgres).
  - Ordering alineado con Postgres: created_at DESC.

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - User es inmutable (frozen): se puede devolver sin copia.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....identity.users import User


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, user: User) -> Optional[User]:
        with self._lock:
            if any(u.email == user.email for u in self._users.values()):
                return None
            stored = (
                user
                if user.created_at is not None
                else replace(user, created_at=datetime.now(timezone.utc))
            )
            self._users[stored.id] = stored
            return stored

    def list_users(self) -> List[User]:
        with self._lock:
            users = list(self._users.values())
        return sorted(
            users,
            key=lambda u: u.created_at or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )
