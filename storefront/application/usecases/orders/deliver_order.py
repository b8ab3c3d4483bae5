"""
===============================================================================
USE CASE: Deliver Order
===============================================================================

Business Goal:
    Marcar una orden pendiente como entregada (operación de admin).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    DeliverOrderUseCase

Responsibilities:
    - Validar existencia de la orden.
    - Aplicar pending -> delivered como compare-and-swap.

Collaborators:
    - OrderRepository
    - orders.transition.apply_transition

Notas:
    - El rol admin lo exige el Authorization Gate en la ruta; este caso de uso
      no conoce roles.
    - Entregar dos veces: la primera gana, la segunda es INVALID_TRANSITION.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable
from uuid import UUID

from ....domain.entities import OrderStatus
from ....domain.repositories import OrderRepository
from .order_results import OrderResult
from .transition import apply_transition, order_not_found


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def deliver_rejection_message(status: OrderStatus) -> str:
    return f"Cannot mark order as delivered. Order status is {status.value}."


class DeliverOrderUseCase:
    def __init__(
        self,
        order_repository: OrderRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._orders = order_repository
        self._clock = clock

    def execute(self, order_id: UUID) -> OrderResult:
        order = self._orders.get_order(order_id)
        if order is None:
            return order_not_found()

        return apply_transition(
            self._orders,
            order,
            OrderStatus.DELIVERED,
            at=self._clock(),
            rejection_message=deliver_rejection_message,
        )
