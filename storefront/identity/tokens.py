"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Emisión y verificación de access tokens (JWT HS256)

Responsabilidades:
    - Emitir tokens firmados con sub, email, iat, exp y typ.
    - Verificar tokens: formato de 3 segmentos, firma, expiración.
    - Extraer claims mínimos (subject + email).

Colaboradores:
    - crosscutting.config: secreto, TTL y leeway.
    - identity.errors: AuthError / AuthErrorCode.
    - identity.gate: usa TokenVerifier antes de resolver la identidad.

Notas:
    - La verificación es una función pura de (token, secreto, ahora).
    - La expiración se evalúa contra `now` inyectable (tests deterministas).
    - Tokens legacy con el subject en `id` o `user.id` siguen siendo válidos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt

from ..crosscutting.config import Settings
from .errors import AuthError, AuthErrorCode
from .users import Identity

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

# Claims legacy (tokens emitidos antes de usar `sub`)
LEGACY_CLAIM_ID: str = "id"
LEGACY_CLAIM_USER: str = "user"

TOKEN_TYPE_ACCESS: str = "access"

_TOKEN_SEGMENTS = 3


@dataclass(frozen=True, slots=True)
class Claims:
    """Claims verificados de un access token."""

    subject_id: str
    email: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def issue_token(
    identity: Identity, settings: Settings, now: datetime | None = None
) -> tuple[str, int]:
    """Crea un JWT de acceso firmado.

    Retorna:
        (token, expires_in_seconds)
    """
    issued_at = now or _utcnow()
    expires_in = int(settings.jwt_access_ttl_minutes * 60)

    payload: dict[str, object] = {
        CLAIM_SUB: str(identity.id),
        CLAIM_EMAIL: identity.email,
        CLAIM_IAT: int(issued_at.timestamp()),
        CLAIM_EXP: int((issued_at + timedelta(seconds=expires_in)).timestamp()),
        CLAIM_TYP: TOKEN_TYPE_ACCESS,
    }

    token = jwt.encode(payload, settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def _subject_from(payload: dict[str, Any]) -> str | None:
    subject = payload.get(CLAIM_SUB) or payload.get(LEGACY_CLAIM_ID)
    if not subject:
        legacy_user = payload.get(LEGACY_CLAIM_USER)
        if isinstance(legacy_user, dict):
            subject = legacy_user.get(LEGACY_CLAIM_ID)
    return str(subject) if subject else None


class TokenVerifier:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      TokenVerifier

    Responsabilidades:
      - Rechazar tokens que no tengan 3 segmentos (MALFORMED_TOKEN)
      - Validar firma HS256 contra el secreto (INVALID_SIGNATURE)
      - Validar exp contra el reloj (EXPIRED)
      - Devolver Claims con subject y email

    Colaboradores:
      - PyJWT
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        secret: str,
        *,
        leeway_seconds: int = 0,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._secret = secret
        self._leeway = leeway_seconds
        self._clock = clock

    def verify(self, token: str, now: datetime | None = None) -> Claims:
        parts = (token or "").split(".")
        if len(parts) != _TOKEN_SEGMENTS or not all(parts):
            raise AuthError(AuthErrorCode.MALFORMED_TOKEN)

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={
                    # exp se evalúa abajo contra `now`
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": [CLAIM_EXP],
                },
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as exc:
            raise AuthError(AuthErrorCode.INVALID_SIGNATURE) from exc
        except jwt.InvalidTokenError as exc:
            raise AuthError(AuthErrorCode.MALFORMED_TOKEN) from exc

        try:
            exp = int(payload[CLAIM_EXP])
        except (TypeError, ValueError) as exc:
            raise AuthError(AuthErrorCode.MALFORMED_TOKEN) from exc

        current = now or self._clock()
        if int(current.timestamp()) >= exp + self._leeway:
            raise AuthError(AuthErrorCode.EXPIRED)

        subject_id = _subject_from(payload)
        email = payload.get(CLAIM_EMAIL)
        if not subject_id or not email:
            raise AuthError(AuthErrorCode.MALFORMED_TOKEN)

        token_type = payload.get(CLAIM_TYP)
        if token_type is not None and token_type != TOKEN_TYPE_ACCESS:
            raise AuthError(AuthErrorCode.MALFORMED_TOKEN)

        return Claims(
            subject_id=subject_id,
            email=str(email),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
