"""
===============================================================================
TARJETA CRC — identity/resolver.py
===============================================================================

Módulo:
    Identity Resolver (subject del token -> Identity)

Responsabilidades:
    - Buscar el usuario por id en el store.
    - Fallar con IDENTITY_NOT_FOUND si ya no existe (cuenta borrada post-login).
    - Fallar con STORE_UNAVAILABLE ante errores de infraestructura (sin reintento).
    - Devolver una vista recortada (Identity, sin password_hash).

Colaboradores:
    - domain.repositories.UserRepository
    - identity.gate: lo invoca luego de verificar el token.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ..crosscutting.exceptions import StoreUnavailableError
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from .errors import AuthError, AuthErrorCode
from .users import Identity


class IdentityResolver:
    def __init__(self, user_repository: UserRepository):
        self._users = user_repository

    def resolve(self, subject_id: str) -> Identity:
        try:
            user_id = UUID(str(subject_id))
        except ValueError as exc:
            # Un subject que no es UUID nunca pudo ser emitido por este backend.
            raise AuthError(AuthErrorCode.MALFORMED_TOKEN) from exc

        try:
            user = self._users.get_user_by_id(user_id)
        except StoreUnavailableError as exc:
            logger.error(
                "Identity resolver: store no disponible",
                extra={"error_id": exc.error_id},
            )
            raise AuthError(AuthErrorCode.STORE_UNAVAILABLE) from exc

        if user is None:
            logger.info(
                "Identity resolver: usuario no encontrado",
                extra={"subject_id": str(user_id)},
            )
            raise AuthError(AuthErrorCode.IDENTITY_NOT_FOUND)

        return Identity.from_user(user)
