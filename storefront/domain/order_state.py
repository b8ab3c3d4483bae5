"""
===============================================================================
TARJETA CRC — domain/order_state.py
===============================================================================

Módulo:
    Máquina de estados de órdenes

Responsabilidades:
    - Declarar las transiciones permitidas (pending -> cancelled | delivered).
    - Responder si un estado es terminal o si una transición es válida.
    - Reglas de ownership y total de la orden (helpers puros).

Colaboradores:
    - application/usecases/orders: guardan cancel/deliver con estas reglas.
    - infrastructure/repositories: aplican la transición como compare-and-swap.

Invariantes:
    - delivered y cancelled son terminales (no hay vuelta atrás).
    - Ninguna regla de rol vive acá: deliver exige admin en el Authorization Gate.
===============================================================================
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping
from uuid import UUID

from .entities import LineItem, Order, OrderStatus

ALLOWED_TRANSITIONS: Mapping[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CANCELLED, OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

# Tolerancia para comparar totales en punto flotante (medio centavo).
TOTAL_TOLERANCE = 0.005


def is_terminal(status: OrderStatus) -> bool:
    return not ALLOWED_TRANSITIONS[status]


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def is_owner(order: Order, user_id: UUID) -> bool:
    return order.owner_id == user_id


def line_items_total(items: Iterable[LineItem]) -> float:
    """Suma quantity * unit_price de todos los ítems."""
    return sum(item.subtotal for item in items)


def total_matches(items: Iterable[LineItem], total_price: float) -> bool:
    return math.isclose(
        line_items_total(items), total_price, rel_tol=0.0, abs_tol=TOTAL_TOLERANCE
    )
