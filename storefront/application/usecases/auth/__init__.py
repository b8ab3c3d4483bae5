"""Identity use cases: signup, login y listado de usuarios (admin)."""

from .auth_results import (
    AuthUseCaseError,
    AuthUseCaseErrorCode,
    LoginResult,
    SignupResult,
    UserListResult,
)
from .signup_login import (
    ListUsersUseCase,
    LoginUseCase,
    SignupUseCase,
    normalize_email,
)

__all__ = [
    "AuthUseCaseError",
    "AuthUseCaseErrorCode",
    "ListUsersUseCase",
    "LoginResult",
    "LoginUseCase",
    "SignupResult",
    "SignupUseCase",
    "UserListResult",
    "normalize_email",
]
