"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses de error para OpenAPI.
  - Componer routers por feature (auth/orders/products/users).

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por feature)

Notas:
  - Se incluye desde storefront/api/main.py bajo el prefijo "/api".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from storefront.crosscutting.error_responses import OPENAPI_ERROR_RESPONSES

from .routers import auth_router, orders_router, products_router, users_router


def build_router() -> APIRouter:
    """Construye el router raíz (testeable sin levantar la app)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(auth_router)
    api_router.include_router(orders_router)
    api_router.include_router(products_router)
    api_router.include_router(users_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
