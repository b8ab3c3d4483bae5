# storefront/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error estándar (JSON con "error" + "code")
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El frontend pueda mostrar siempre el string "error"
- Los clientes nuevos puedan manejar por "code"
- El backend pueda correlacionar por request_id

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handlers

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir payload de error (ErrorDetail)
  - Proveer factories de errores frecuentes
  - Proveer handlers (FastAPI) para devolver JSON

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (mapea errores internos)
  - interfaces/api/http/error_mapping.py (resultados de use cases -> HTTP)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_FAILED = "VALIDATION_FAILED"
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    EXPIRED = "EXPIRED"
    IDENTITY_NOT_FOUND = "IDENTITY_NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INSUFFICIENT_PRIVILEGE = "INSUFFICIENT_PRIVILEGE"
    OWNERSHIP_VIOLATION = "OWNERSHIP_VIOLATION"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # 5xx
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """
    Cuerpo de error de la API.

    Campos:
    - success: siempre False
    - error: mensaje legible (el único campo que el frontend lee)
    - code: error code estable para clientes
    - errors: lista opcional de detalles (ej: [{"field":"x","msg":"..."}])
    """

    success: bool = False
    error: str
    code: ErrorCode
    status: int
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


_OPENAPI_ERROR_CONTENT = {
    "application/json": {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
}


def _openapi_error(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    }


OPENAPI_ERROR_RESPONSES = {
    "400": _openapi_error("Bad Request"),
    "401": _openapi_error("Unauthorized"),
    "403": _openapi_error("Forbidden"),
    "404": _openapi_error("Not Found"),
    "409": _openapi_error("Conflict"),
    "default": _openapi_error("Error"),
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un ErrorCode estable
      - Transportar errores de validación (errors[])

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_failed(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_FAILED, detail, errors)


def invalid_credentials(detail: str = "Invalid credentials") -> AppHTTPException:
    return AppHTTPException(401, ErrorCode.INVALID_CREDENTIALS, detail)


def forbidden(
    detail: str = "Forbidden",
    code: ErrorCode = ErrorCode.INSUFFICIENT_PRIVILEGE,
) -> AppHTTPException:
    return AppHTTPException(403, code, detail)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(409, ErrorCode.CONFLICT, detail)


def invalid_transition(detail: str) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.INVALID_TRANSITION, detail)


def store_unavailable(detail: str = "Database error.") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.STORE_UNAVAILABLE, detail)


def internal_error(detail: str = "Internal server error") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
def _request_id_errors(
    request: Request, errors: list[dict[str, Any]] | None = None
) -> list[dict[str, Any]] | None:
    request_id = getattr(getattr(request, "state", None), "request_id", None)
    merged = list(errors or [])
    if request_id:
        merged.append({"request_id": request_id})
    return merged or None


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """
    Handler para AppHTTPException.

    Incluye instance (URL) y propaga headers opcionales.
    """
    error = ErrorDetail(
        error=str(exc.detail),
        code=exc.code,
        status=exc.status_code,
        instance=str(request.url),
        errors=_request_id_errors(request, exc.errors),
    )
    headers = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=error.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler de fallback para excepciones no manejadas.
    (No expone detalles internos al cliente.)
    """
    error = ErrorDetail(
        error="Internal server error",
        code=ErrorCode.INTERNAL_ERROR,
        status=500,
        instance=str(request.url),
        errors=_request_id_errors(request),
    )
    return JSONResponse(
        status_code=500,
        content=error.model_dump(mode="json", exclude_none=True),
    )
