"""
===============================================================================
ORDER TRANSITION (shared step for cancel / deliver)
===============================================================================

Responsibilities:
    - Validar la transición contra domain.order_state.
    - Persistirla como compare-and-swap (expected = estado leído).
    - Si el CAS pierde una carrera, releer y reportar el estado real:
        * la orden desapareció -> NOT_FOUND
        * otro request ya la movió -> INVALID_TRANSITION con el estado actual
    - Registrar métrica por resultado (applied / rejected / lost_race).

Collaborators:
    - domain.repositories.OrderRepository.transition_status
    - domain.order_state.can_transition
    - crosscutting.metrics.record_order_transition
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_order_transition
from ....domain.entities import Order, OrderStatus
from ....domain.order_state import can_transition
from ....domain.repositories import OrderRepository
from .order_results import OrderError, OrderErrorCode, OrderResult

ORDER_NOT_FOUND_MESSAGE = "Order not found"


def order_not_found() -> OrderResult:
    return OrderResult(
        error=OrderError(code=OrderErrorCode.NOT_FOUND, message=ORDER_NOT_FOUND_MESSAGE)
    )


def apply_transition(
    orders: OrderRepository,
    order: Order,
    target: OrderStatus,
    *,
    at: datetime,
    rejection_message: Callable[[OrderStatus], str],
) -> OrderResult:
    if not can_transition(order.status, target):
        record_order_transition(target.value, "rejected")
        return _invalid(rejection_message(order.status))

    updated = orders.transition_status(order.id, order.status, target, at)
    if updated is not None:
        record_order_transition(target.value, "applied")
        logger.info(
            "Order transition applied",
            extra={
                "order_id": str(order.id),
                "from_status": order.status.value,
                "to_status": target.value,
            },
        )
        return OrderResult(order=updated)

    # CAS perdido: otro request cambió (o borró) la orden entre lectura y escritura.
    record_order_transition(target.value, "lost_race")
    current = orders.get_order(order.id)
    if current is None:
        return order_not_found()

    logger.info(
        "Order transition lost race",
        extra={
            "order_id": str(order.id),
            "expected_status": order.status.value,
            "current_status": current.status.value,
            "to_status": target.value,
        },
    )
    return _invalid(rejection_message(current.status))


def _invalid(message: str) -> OrderResult:
    return OrderResult(
        error=OrderError(code=OrderErrorCode.INVALID_TRANSITION, message=message)
    )
