"""
===============================================================================
ORDER USE CASES PACKAGE (Public API / Exports)
===============================================================================

Checkout, listados y las dos transiciones guardadas del state machine
(pending -> cancelled por el dueño, pending -> delivered por un admin).
===============================================================================
"""

from .cancel_order import CancelOrderUseCase
from .deliver_order import DeliverOrderUseCase
from .list_orders import ListOrdersUseCase, ListUserOrdersUseCase
from .order_results import OrderError, OrderErrorCode, OrderListResult, OrderResult
from .place_order import PlaceOrderInput, PlaceOrderUseCase

__all__ = [
    "CancelOrderUseCase",
    "DeliverOrderUseCase",
    "ListOrdersUseCase",
    "ListUserOrdersUseCase",
    "PlaceOrderInput",
    "PlaceOrderUseCase",
    "OrderError",
    "OrderErrorCode",
    "OrderListResult",
    "OrderResult",
]
