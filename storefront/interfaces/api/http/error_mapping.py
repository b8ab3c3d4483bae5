"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a AppHTTPException.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message).
  - El mensaje del use case viaja tal cual en el campo "error".

Colaboradores:
  - application.usecases.{orders,products,auth}
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from storefront.application.usecases.auth import AuthUseCaseError, AuthUseCaseErrorCode
from storefront.application.usecases.orders import OrderError, OrderErrorCode
from storefront.application.usecases.products import ProductError, ProductErrorCode
from storefront.crosscutting.error_responses import (
    ErrorCode,
    conflict,
    forbidden,
    internal_error,
    invalid_credentials,
    invalid_transition,
    not_found,
    validation_failed,
)


def raise_order_error(error: OrderError) -> NoReturn:
    """Traduce OrderErrorCode -> HTTP."""
    if error.code == OrderErrorCode.VALIDATION_ERROR:
        raise validation_failed(error.message)
    if error.code == OrderErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if error.code == OrderErrorCode.OWNERSHIP_VIOLATION:
        raise forbidden(error.message, code=ErrorCode.OWNERSHIP_VIOLATION)
    if error.code == OrderErrorCode.INVALID_TRANSITION:
        raise invalid_transition(error.message)

    # Código nuevo sin mapeo explícito
    raise internal_error(error.message)


def raise_product_error(error: ProductError) -> NoReturn:
    """Traduce ProductErrorCode -> HTTP."""
    if error.code == ProductErrorCode.VALIDATION_ERROR:
        raise validation_failed(error.message)
    if error.code == ProductErrorCode.NOT_FOUND:
        raise not_found(error.message)

    raise internal_error(error.message)


def raise_auth_use_case_error(error: AuthUseCaseError) -> NoReturn:
    """Traduce AuthUseCaseErrorCode -> HTTP."""
    if error.code == AuthUseCaseErrorCode.VALIDATION_ERROR:
        raise validation_failed(error.message)
    if error.code == AuthUseCaseErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == AuthUseCaseErrorCode.INVALID_CREDENTIALS:
        raise invalid_credentials(error.message)

    raise internal_error(error.message)
