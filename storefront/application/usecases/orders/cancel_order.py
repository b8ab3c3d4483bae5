"""
===============================================================================
USE CASE: Cancel Order
===============================================================================

Business Goal:
    Permitir que un cliente cancele su propia orden mientras siga pendiente.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CancelOrderUseCase

Responsibilities:
    - Validar existencia de la orden.
    - Validar ownership ANTES que el estado (un extraño recibe 403 siempre).
    - Aplicar pending -> cancelled como compare-and-swap.

Collaborators:
    - OrderRepository
    - orders.transition.apply_transition

-------------------------------------------------------------------------------
BUSINESS RULES
-------------------------------------------------------------------------------
R1) La orden debe existir                    -> NOT_FOUND
R2) Solo el dueño puede cancelar             -> OWNERSHIP_VIOLATION
R3) Solo órdenes pending se cancelan         -> INVALID_TRANSITION (con estado)
R4) Dos cancelaciones concurrentes: una gana, la otra ve INVALID_TRANSITION.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable
from uuid import UUID

from ....domain.entities import OrderStatus
from ....domain.order_state import is_owner
from ....domain.repositories import OrderRepository
from .order_results import OrderError, OrderErrorCode, OrderResult
from .transition import apply_transition, order_not_found


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def cancel_rejection_message(status: OrderStatus) -> str:
    return (
        f"Cannot cancel order with status: {status.value}. "
        "Only pending orders can be cancelled."
    )


class CancelOrderUseCase:
    def __init__(
        self,
        order_repository: OrderRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._orders = order_repository
        self._clock = clock

    def execute(self, order_id: UUID, actor_id: UUID) -> OrderResult:
        order = self._orders.get_order(order_id)
        if order is None:
            return order_not_found()

        if not is_owner(order, actor_id):
            return OrderResult(
                error=OrderError(
                    code=OrderErrorCode.OWNERSHIP_VIOLATION,
                    message="You can only cancel your own orders",
                )
            )

        return apply_transition(
            self._orders,
            order,
            OrderStatus.CANCELLED,
            at=self._clock(),
            rejection_message=cancel_rejection_message,
        )
