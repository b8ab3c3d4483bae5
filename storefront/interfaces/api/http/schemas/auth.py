"""
===============================================================================
TARJETA CRC — schemas/auth.py
===============================================================================

Módulo:
    Schemas HTTP para signup / login / usuarios

Notas:
    - email/password son opcionales a nivel schema: la ausencia se reporta
      desde el caso de uso con su mensaje ("Email and password are required").
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from storefront.identity.users import Identity, User, UserRole

from .base import CamelModel


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CredentialsReq(CamelModel):
    email: str | None = None
    password: str | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class UserRes(CamelModel):
    id: UUID
    email: str
    role: UserRole

    @classmethod
    def from_identity(cls, identity: Identity | User) -> "UserRes":
        return cls(id=identity.id, email=identity.email, role=identity.role)


class UserDetailRes(UserRes):
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserDetailRes":
        return cls(
            id=user.id, email=user.email, role=user.role, created_at=user.created_at
        )


class SignupRes(CamelModel):
    success: bool = True
    user: UserRes


class LoginRes(CamelModel):
    success: bool = True
    token: str
    expires_in: int
    user: UserRes


class MeRes(CamelModel):
    success: bool = True
    user: UserRes


class UsersListRes(CamelModel):
    success: bool = True
    data: List[UserDetailRes]
