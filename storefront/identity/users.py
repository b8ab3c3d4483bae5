"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario / Identidad

Responsabilidades:
    - Definir el enum de roles (customer / admin).
    - Definir el dataclass User tal como vive en persistencia (incluye hash).
    - Definir Identity: vista recortada que viaja por el request (sin secretos).

Colaboradores:
    - identity/resolver.py: User -> Identity.
    - identity/gate.py: compara Identity.role contra el rol requerido.
    - infrastructure/repositories/*/user.py: mapean filas -> User.

Notas:
    - Este módulo NO contiene lógica de negocio: solo “shapes” de datos.
    - El rol es la única parte mutable del usuario y no se expone por la API.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles soportados. El chequeo es por igualdad estricta (sin jerarquía)."""

    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario persistido."""

    id: UUID
    email: str
    password_hash: str
    role: UserRole = UserRole.CUSTOMER
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Identity:
    """Identidad autenticada adjunta al request (sin password_hash)."""

    id: UUID
    email: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, email=user.email, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
