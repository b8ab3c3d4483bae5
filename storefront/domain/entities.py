"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Order, LineItem, Product)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos (métodos) para mantener invariantes simples.
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.order_state: reglas de transición de OrderStatus.
    - application/usecases: construyen/consumen estas entidades.
    - interfaces/api: serializan/retornan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Los usuarios viven en identity/users.py (borde de identidad).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------


class OrderStatus(str, Enum):
    """
    Estados de una orden.

    - PENDING: inicial (checkout)
    - DELIVERED / CANCELLED: terminales
    """

    PENDING = "pending"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: str | None) -> Optional["OrderStatus"]:
        """Parsea case-insensitive; devuelve None si no es un estado conocido."""
        normalized = (value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            return None


@dataclass(frozen=True)
class LineItem:
    """Ítem de una orden: producto, cantidad y precio unitario al momento de compra."""

    product_id: UUID
    quantity: int
    unit_price: float

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price


@dataclass
class Order:
    """
    Orden de compra.

    Importante:
      - Se crea siempre en PENDING.
      - Solo muta vía transiciones guardadas (domain.order_state).
      - total_price es el informado por el cliente al hacer checkout.
    """

    id: UUID
    owner_id: UUID
    line_items: List[LineItem]
    total_price: float
    shipping_address: str
    phone: str
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------


@dataclass
class Product:
    """Producto publicado por un admin (owner_id = creador)."""

    id: UUID
    owner_id: UUID
    name: str
    description: str
    price: float
    category: str
    image: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.owner_id == user_id
