"""
===============================================================================
TARJETA CRC — routers/__init__.py
===============================================================================

Responsabilidades:
    - Re-exportar los routers por feature (auth/orders/products/users).
    - Permitir imports estables: from .routers import orders_router
===============================================================================
"""

from .auth import router as auth_router
from .orders import router as orders_router
from .products import router as products_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "orders_router",
    "products_router",
    "users_router",
]
