"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el “surface area” del dominio.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import LineItem, Order, OrderStatus, Product
from .repositories import OrderRepository, ProductRepository, UserRepository

__all__ = [
    "LineItem",
    "Order",
    "OrderStatus",
    "Product",
    "OrderRepository",
    "ProductRepository",
    "UserRepository",
]
