"""
===============================================================================
USE CASES: Signup / Login / List Users
===============================================================================

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    SignupUseCase, LoginUseCase, ListUsersUseCase

Responsibilities:
    - Signup: exigir email + password, rechazar email repetido (409), crear
      siempre con rol customer y password hasheado (Argon2).
    - Login: validar credenciales contra el hash; cualquier falla es el mismo
      "Invalid credentials" (no se distingue email inexistente de password
      incorrecto). Emitir access token.
    - ListUsers: listado admin, más nuevos primero.

Collaborators:
    - UserRepository
    - identity.passwords (hash/verify)
    - token_issuer: Identity -> (token, expires_in)  (identity.tokens.issue_token)

Notas:
    - Los emails se normalizan (trim + lower) tanto al crear como al buscar.
===============================================================================
"""

from __future__ import annotations

from typing import Callable
from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.passwords import hash_password, verify_password
from ....identity.users import Identity, User, UserRole
from .auth_results import (
    AuthUseCaseError,
    AuthUseCaseErrorCode,
    LoginResult,
    SignupResult,
    UserListResult,
)

MISSING_FIELDS_MESSAGE = "Email and password are required"
USER_EXISTS_MESSAGE = "User already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

TokenIssuer = Callable[[Identity], tuple[str, int]]


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class SignupUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self._users = user_repository
        self._hash = password_hasher

    def execute(self, email: str | None, password: str | None) -> SignupResult:
        normalized = normalize_email(email)
        if not normalized or not password:
            return SignupResult(
                error=AuthUseCaseError(
                    AuthUseCaseErrorCode.VALIDATION_ERROR, MISSING_FIELDS_MESSAGE
                )
            )

        if self._users.get_user_by_email(normalized) is not None:
            return self._conflict()

        created = self._users.create_user(
            User(
                id=uuid4(),
                email=normalized,
                password_hash=self._hash(password),
                role=UserRole.CUSTOMER,
            )
        )
        if created is None:
            # Otro signup con el mismo email ganó entre el lookup y el insert.
            return self._conflict()

        logger.info("User signed up", extra={"user_id": str(created.id)})
        return SignupResult(user=created)

    @staticmethod
    def _conflict() -> SignupResult:
        return SignupResult(
            error=AuthUseCaseError(AuthUseCaseErrorCode.CONFLICT, USER_EXISTS_MESSAGE)
        )


class LoginUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        token_issuer: TokenIssuer,
        password_verifier: Callable[[str, str], bool] = verify_password,
    ) -> None:
        self._users = user_repository
        self._issue = token_issuer
        self._verify = password_verifier

    def execute(self, email: str | None, password: str | None) -> LoginResult:
        normalized = normalize_email(email)
        user = self._users.get_user_by_email(normalized) if normalized else None

        if user is None or not password or not self._verify(password, user.password_hash):
            logger.info("Login failed", extra={"email": normalized})
            return LoginResult(
                error=AuthUseCaseError(
                    AuthUseCaseErrorCode.INVALID_CREDENTIALS,
                    INVALID_CREDENTIALS_MESSAGE,
                )
            )

        identity = Identity.from_user(user)
        token, expires_in = self._issue(identity)
        logger.info("Login succeeded", extra={"user_id": str(user.id)})
        return LoginResult(token=token, expires_in=expires_in, identity=identity)


class ListUsersUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self) -> UserListResult:
        return UserListResult(users=self._users.list_users())
