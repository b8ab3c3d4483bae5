"""
===============================================================================
AUTH USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - AuthUseCaseErrorCode: VALIDATION_ERROR (400), CONFLICT (409),
      INVALID_CREDENTIALS (401).
    - Resultados: SignupResult, LoginResult, UserListResult.

Collaborators:
    - identity.users.User / Identity
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from ....identity.users import Identity, User


class AuthUseCaseErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


@dataclass(frozen=True)
class AuthUseCaseError:
    code: AuthUseCaseErrorCode
    message: str


@dataclass
class SignupResult:
    user: User | None = None
    error: AuthUseCaseError | None = None


@dataclass
class LoginResult:
    token: str | None = None
    expires_in: int = 0
    identity: Identity | None = None
    error: AuthUseCaseError | None = None


@dataclass
class UserListResult:
    users: List[User]
    error: AuthUseCaseError | None = None
