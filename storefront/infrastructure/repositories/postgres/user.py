"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios por id (Identity Resolver) y por email (login).
  - Crear usuarios (signup) sin pisar emails existentes.
  - Listar usuarios (herramienta admin).
  - Mapear filas -> `User` validando `UserRole`.

Collaborators:
  - postgres.base.PostgresRepositoryBase (pool + errores)
  - identity.users.User / UserRole

Constraints / Notes:
  - Retorna None cuando no existe el recurso (no exception por “not found”).
  - Rol inválido persistido -> StoreUnavailableError (drift de datos).
  - create_user usa ON CONFLICT (email) DO NOTHING: dos signups concurrentes
    con el mismo email no producen duplicados; el perdedor recibe None.
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ....crosscutting.exceptions import StoreUnavailableError
from ....identity.users import User, UserRole
from .base import PostgresRepositoryBase

_USER_COLUMNS = "id, email, password_hash, role, created_at"

# R: Ordering determinístico. Si created_at empata, id ordena estable.
_USER_ORDER_BY = "created_at DESC, id DESC"


def _row_to_user(row: tuple) -> User:
    try:
        role = UserRole(row[3])
    except ValueError as exc:
        raise StoreUnavailableError(
            f"Invalid user role in database: {row[3]}"
        ) from exc

    return User(
        id=row[0],
        email=row[1],
        password_hash=row[2],
        role=role,
        created_at=row[4],
    )


class PostgresUserRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            context_msg="PostgresUserRepository: get_user_by_id failed",
            extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        # R: El email se normaliza (trim/lower) en el caso de uso, no acá.
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
            params=(email,),
            context_msg="PostgresUserRepository: get_user_by_email failed",
            extra={"email": email},
        )
        return _row_to_user(row) if row else None

    def create_user(self, user: User) -> Optional[User]:
        row = self._fetchone(
            query=f"""
                INSERT INTO users (id, email, password_hash, role)
                VALUES (%s, %s, %s, %s)
                ON CONFLICT (email) DO NOTHING
                RETURNING {_USER_COLUMNS}
            """,
            params=(user.id, user.email, user.password_hash, user.role.value),
            context_msg="PostgresUserRepository: create_user failed",
            extra={"email": user.email},
        )
        return _row_to_user(row) if row else None

    def list_users(self) -> list[User]:
        rows = self._fetchall(
            query=f"SELECT {_USER_COLUMNS} FROM users ORDER BY {_USER_ORDER_BY}",
            context_msg="PostgresUserRepository: list_users failed",
            extra={},
        )
        return [_row_to_user(r) for r in rows]
