"""
===============================================================================
TARJETA CRC — identity/errors.py
===============================================================================

Módulo:
    Errores de autenticación / autorización

Responsabilidades:
    - Enumerar los motivos de rechazo del Authorization Gate.
    - Fijar el status HTTP y el mensaje por defecto de cada motivo.

Colaboradores:
    - identity/tokens.py, identity/resolver.py, identity/gate.py: lanzan AuthError.
    - api/exception_handlers.py: AuthError -> respuesta JSON.

Notas:
    - Todos los rechazos son terminales para el request (no hay reintentos).
===============================================================================
"""

from __future__ import annotations

from enum import Enum


class AuthErrorCode(str, Enum):
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    EXPIRED = "EXPIRED"
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    IDENTITY_NOT_FOUND = "IDENTITY_NOT_FOUND"
    INSUFFICIENT_PRIVILEGE = "INSUFFICIENT_PRIVILEGE"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


AUTH_ERROR_STATUS: dict[AuthErrorCode, int] = {
    AuthErrorCode.MALFORMED_TOKEN: 401,
    AuthErrorCode.INVALID_SIGNATURE: 401,
    AuthErrorCode.EXPIRED: 401,
    AuthErrorCode.MISSING_CREDENTIAL: 401,
    AuthErrorCode.IDENTITY_NOT_FOUND: 401,
    AuthErrorCode.INSUFFICIENT_PRIVILEGE: 403,
    AuthErrorCode.STORE_UNAVAILABLE: 500,
}

AUTH_ERROR_MESSAGES: dict[AuthErrorCode, str] = {
    AuthErrorCode.MALFORMED_TOKEN: "Invalid token format.",
    AuthErrorCode.INVALID_SIGNATURE: "Invalid token.",
    AuthErrorCode.EXPIRED: "Token expired. Please log in again.",
    AuthErrorCode.MISSING_CREDENTIAL: "Access denied. No token provided.",
    AuthErrorCode.IDENTITY_NOT_FOUND: "User not found.",
    AuthErrorCode.INSUFFICIENT_PRIVILEGE: (
        "Forbidden: You do not have admin privileges."
    ),
    AuthErrorCode.STORE_UNAVAILABLE: "Database error.",
}


class AuthError(Exception):
    """Rechazo de autenticación/autorización con código y status fijo."""

    def __init__(self, code: AuthErrorCode, message: str | None = None):
        self.code = code
        self.message = message or AUTH_ERROR_MESSAGES[code]
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return AUTH_ERROR_STATUS[self.code]
