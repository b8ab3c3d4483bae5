"""
===============================================================================
TARJETA CRC — storefront/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación a respuestas JSON {success, error, code}.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, handlers base
  - identity.errors.AuthError (gate de autorización)
  - crosscutting.exceptions.StorefrontError y derivadas
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    generic_exception_handler,
)
from ..crosscutting.exceptions import StorefrontError, StoreUnavailableError
from ..crosscutting.logger import logger
from ..identity.errors import AUTH_ERROR_MESSAGES, AuthError, AuthErrorCode

_STATUS_CODES: dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION_FAILED,
    401: ErrorCode.MISSING_CREDENTIAL,
    403: ErrorCode.INSUFFICIENT_PRIVILEGE,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
}


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    # El gate ya logueó y contó el rechazo; acá solo se da forma a la respuesta.
    app_exc = AppHTTPException(
        status_code=exc.status_code,
        code=ErrorCode[exc.code.name],
        detail=exc.message,
    )
    return await app_exception_handler(request, app_exc)


async def store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    request_id = _request_id_from(request)
    logger.error(
        "Store no disponible",
        extra={
            "error_id": exc.error_id,
            "error": exc.message,
            "request_id": request_id,
        },
    )
    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.STORE_UNAVAILABLE,
        detail=AUTH_ERROR_MESSAGES[AuthErrorCode.STORE_UNAVAILABLE],
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def storefront_error_handler(
    request: Request, exc: StorefrontError
) -> JSONResponse:
    logger.error(
        "Error de servicio",
        extra={
            "error_code": exc.error_code,
            "error_id": exc.error_id,
            "error": exc.message,
            "request_id": _request_id_from(request),
        },
    )
    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail="Internal server error",
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


def _validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    # ctx puede traer objetos no serializables (ValueError); solo se exponen
    # loc/msg/type.
    return [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    app_exc = AppHTTPException(
        status_code=400,
        code=ErrorCode.VALIDATION_FAILED,
        detail="Invalid request body",
        errors=_validation_errors(exc),
    )
    return await app_exception_handler(request, app_exc)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Rutas inexistentes (404), métodos no permitidos (405), etc."""
    code = _STATUS_CODES.get(exc.status_code)
    if code is None:
        code = (
            ErrorCode.INTERNAL_ERROR
            if exc.status_code >= 500
            else ErrorCode.VALIDATION_FAILED
        )
    app_exc = AppHTTPException(
        status_code=exc.status_code,
        code=code,
        detail=str(exc.detail),
    )
    app_exc.headers = getattr(exc, "headers", None)
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica; en desarrollo se incluye el detalle.
    """
    request_id = _request_id_from(request)
    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    if get_settings().is_production():
        return await generic_exception_handler(request, exc)

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=str(exc) or "Internal server error",
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - Starlette resuelve por MRO: AppHTTPException gana sobre HTTPException.
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
