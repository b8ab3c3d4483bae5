"""
===============================================================================
USE CASE: Place Order (checkout)
===============================================================================

Business Goal:
    Registrar una orden nueva en estado pending a partir del carrito.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    PlaceOrderUseCase

Responsibilities:
    - Validar datos obligatorios (ítems, total, teléfono, dirección) antes de
      cualquier escritura.
    - Validar cada ítem (cantidad > 0, precio finito >= 0) y el total (finito > 0).
    - Comparar total informado vs suma de ítems:
        * por defecto: se conserva el total del cliente y se loguea warning
        * enforce_total=True: se rechaza con VALIDATION_ERROR
    - Persistir la orden con status=pending.

Collaborators:
    - OrderRepository
    - domain.order_state.line_items_total / total_matches
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import LineItem, Order, OrderStatus
from ....domain.order_state import line_items_total, total_matches
from ....domain.repositories import OrderRepository
from .order_results import OrderError, OrderErrorCode, OrderResult

MISSING_ORDER_INFO_MESSAGE = "Missing required order information"
INVALID_LINE_ITEM_MESSAGE = "Each cart item needs a positive quantity and a price"
INVALID_TOTAL_MESSAGE = "Total price must be a positive number"
TOTAL_MISMATCH_MESSAGE = "Order total does not match cart items"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PlaceOrderInput:
    owner_id: UUID
    line_items: List[LineItem] = field(default_factory=list)
    total_price: float | None = None
    phone: str | None = None
    shipping_address: str | None = None


class PlaceOrderUseCase:
    def __init__(
        self,
        order_repository: OrderRepository,
        *,
        enforce_total: bool = False,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._orders = order_repository
        self._enforce_total = enforce_total
        self._clock = clock

    def execute(self, input_data: PlaceOrderInput) -> OrderResult:
        phone = (input_data.phone or "").strip()
        address = (input_data.shipping_address or "").strip()

        if (
            not input_data.line_items
            or not input_data.total_price
            or not phone
            or not address
        ):
            return self._validation_error(MISSING_ORDER_INFO_MESSAGE)

        if any(
            i.quantity <= 0 or not math.isfinite(i.unit_price) or i.unit_price < 0
            for i in input_data.line_items
        ):
            return self._validation_error(INVALID_LINE_ITEM_MESSAGE)

        if not math.isfinite(input_data.total_price) or input_data.total_price <= 0:
            return self._validation_error(INVALID_TOTAL_MESSAGE)

        if not total_matches(input_data.line_items, input_data.total_price):
            logger.warning(
                "Order total does not match line items",
                extra={
                    "owner_id": str(input_data.owner_id),
                    "client_total": input_data.total_price,
                    "computed_total": line_items_total(input_data.line_items),
                    "enforced": self._enforce_total,
                },
            )
            if self._enforce_total:
                return self._validation_error(TOTAL_MISMATCH_MESSAGE)

        now = self._clock()
        order = Order(
            id=uuid4(),
            owner_id=input_data.owner_id,
            line_items=list(input_data.line_items),
            total_price=input_data.total_price,
            shipping_address=address,
            phone=phone,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

        stored = self._orders.create_order(order)
        logger.info(
            "Order placed",
            extra={"order_id": str(stored.id), "items": len(stored.line_items)},
        )
        return OrderResult(order=stored)

    @staticmethod
    def _validation_error(message: str) -> OrderResult:
        return OrderResult(
            error=OrderError(code=OrderErrorCode.VALIDATION_ERROR, message=message)
        )
