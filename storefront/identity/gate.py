"""
===============================================================================
TARJETA CRC — identity/gate.py
===============================================================================

Módulo:
    Authorization Gate

Responsabilidades:
    - Extraer la credencial del request (x-auth-token, luego Authorization: Bearer).
    - Encadenar TokenVerifier -> IdentityResolver; cualquier falla corta el flujo.
    - Aplicar el rol requerido (igualdad estricta, sin jerarquía).
    - Dejar la identidad en el contexto del request (logs).

Colaboradores:
    - identity.tokens.TokenVerifier
    - identity.resolver.IdentityResolver
    - identity.dependencies: adaptadores FastAPI (require_identity / require_role)
    - storefront.context: user_id para correlación de logs

Notas:
    - El gate no produce respuesta en el camino feliz: devuelve la Identity y
      el handler downstream corre sin modificaciones.
    - No hay fallback a cookies.
===============================================================================
"""

from __future__ import annotations

from typing import Mapping

from ..context import set_identity_context
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_failure
from .errors import AuthError, AuthErrorCode
from .resolver import IdentityResolver
from .tokens import TokenVerifier
from .users import Identity, UserRole

LEGACY_TOKEN_HEADER: str = "x-auth-token"
AUTHORIZATION_HEADER: str = "authorization"
BEARER_SCHEME: str = "bearer"


def extract_credential(headers: Mapping[str, str]) -> str | None:
    """
    Extrae el token del request.

    Orden:
      1) x-auth-token (header legacy)
      2) Authorization: Bearer <token>

    `headers` debe ser case-insensitive (Starlette Headers) o venir en minúsculas.
    """
    legacy = (headers.get(LEGACY_TOKEN_HEADER) or "").strip()
    if legacy:
        return legacy

    authorization = (headers.get(AUTHORIZATION_HEADER) or "").strip()
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    token = parts[1].strip()
    return token or None


class AuthorizationGate:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AuthorizationGate

    Responsabilidades:
      - authorize(headers, required_role) -> Identity | AuthError

    Colaboradores:
      - TokenVerifier, IdentityResolver
    ----------------------------------------------------------------------------
    """

    def __init__(self, verifier: TokenVerifier, resolver: IdentityResolver):
        self._verifier = verifier
        self._resolver = resolver

    def authorize(
        self,
        headers: Mapping[str, str],
        required_role: UserRole | None = None,
    ) -> Identity:
        try:
            identity = self._authorize(headers, required_role)
        except AuthError as exc:
            record_auth_failure(exc.code.value)
            logger.info(
                "Authorization gate: request rechazado",
                extra={"auth_error": exc.code.value, "status_code": exc.status_code},
            )
            raise

        set_identity_context(user_id=str(identity.id))
        return identity

    def _authorize(
        self, headers: Mapping[str, str], required_role: UserRole | None
    ) -> Identity:
        token = extract_credential(headers)
        if not token:
            raise AuthError(AuthErrorCode.MISSING_CREDENTIAL)

        claims = self._verifier.verify(token)
        identity = self._resolver.resolve(claims.subject_id)

        if required_role is not None and identity.role != required_role:
            raise AuthError(AuthErrorCode.INSUFFICIENT_PRIVILEGE)

        return identity
