"""
===============================================================================
TARJETA CRC — routers/orders.py
===============================================================================

Módulo:
    Router HTTP de Órdenes (checkout, listados, transiciones)

Responsabilidades:
    - Exponer endpoints de órdenes: checkout, historial propio, listado admin,
      cancelación por el dueño y entrega por un admin.
    - Delegar reglas (ownership + state machine) a los casos de uso.
    - Mapear errores tipados del caso de uso a HTTP (error_mapping).

Colaboradores:
    - identity.dependencies: require_identity / require_role
    - container: factories de casos de uso
    - schemas.orders: DTOs
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from storefront.application.usecases.orders import (
    CancelOrderUseCase,
    DeliverOrderUseCase,
    ListOrdersUseCase,
    ListUserOrdersUseCase,
    PlaceOrderInput,
    PlaceOrderUseCase,
)
from storefront.container import (
    get_cancel_order_use_case,
    get_deliver_order_use_case,
    get_list_orders_use_case,
    get_list_user_orders_use_case,
    get_place_order_use_case,
)
from storefront.crosscutting.error_responses import not_found
from storefront.domain.entities import Order
from storefront.identity.dependencies import require_identity, require_role
from storefront.identity.users import Identity, UserRole

from ..error_mapping import raise_order_error
from ..schemas.orders import (
    OrderRes,
    OrdersDataRes,
    OrderStatusRes,
    OrderTransitionRes,
    PlaceOrderReq,
    PlaceOrderRes,
    UserOrdersRes,
)

router = APIRouter()

ORDER_NOT_FOUND_MESSAGE = "Order not found"


def _parse_order_id(raw: str) -> UUID:
    # Un id mal formado nunca puede existir en el store: 404, no 400.
    try:
        return UUID(raw)
    except ValueError:
        raise not_found(ORDER_NOT_FOUND_MESSAGE)


def _to_status_res(order: Order) -> OrderStatusRes:
    return OrderStatusRes(id=order.id, status=order.status, updated_at=order.updated_at)


# =============================================================================
# Admin
# =============================================================================


@router.get("/orders", response_model=OrdersDataRes, tags=["orders"])
def list_orders(
    status: str | None = Query(default=None),
    use_case: ListOrdersUseCase = Depends(get_list_orders_use_case),
    _admin: Identity = Depends(require_role(UserRole.ADMIN)),
):
    result = use_case.execute(status=status)
    return OrdersDataRes(
        data=[
            OrderRes.from_order(
                o, owner=result.owners.get(o.owner_id), products=result.products
            )
            for o in result.orders
        ]
    )


@router.patch(
    "/orders/{order_id}/deliver", response_model=OrderTransitionRes, tags=["orders"]
)
def deliver_order(
    order_id: str,
    use_case: DeliverOrderUseCase = Depends(get_deliver_order_use_case),
    _admin: Identity = Depends(require_role(UserRole.ADMIN)),
):
    result = use_case.execute(_parse_order_id(order_id))
    if result.error is not None:
        raise_order_error(result.error)
    return OrderTransitionRes(
        message="Order marked as delivered", order=_to_status_res(result.order)
    )


# =============================================================================
# Cliente autenticado
# =============================================================================


@router.get("/orders/user", response_model=UserOrdersRes, tags=["orders"])
def list_user_orders(
    use_case: ListUserOrdersUseCase = Depends(get_list_user_orders_use_case),
    identity: Identity = Depends(require_identity()),
):
    result = use_case.execute(identity.id)
    return UserOrdersRes(
        orders=[
            OrderRes.from_order(o, products=result.products) for o in result.orders
        ]
    )


@router.post(
    "/orders/user",
    response_model=PlaceOrderRes,
    status_code=201,
    tags=["orders"],
)
def place_order(
    req: PlaceOrderReq,
    use_case: PlaceOrderUseCase = Depends(get_place_order_use_case),
    identity: Identity = Depends(require_identity()),
):
    result = use_case.execute(
        PlaceOrderInput(
            owner_id=identity.id,
            line_items=[item.to_line_item() for item in req.cart_items or []],
            total_price=req.total_price,
            phone=req.phone,
            shipping_address=req.shipping_address,
        )
    )
    if result.error is not None:
        raise_order_error(result.error)
    return PlaceOrderRes(order=OrderRes.from_order(result.order))


@router.patch(
    "/orders/{order_id}/cancel", response_model=OrderTransitionRes, tags=["orders"]
)
def cancel_order(
    order_id: str,
    use_case: CancelOrderUseCase = Depends(get_cancel_order_use_case),
    identity: Identity = Depends(require_identity()),
):
    result = use_case.execute(_parse_order_id(order_id), actor_id=identity.id)
    if result.error is not None:
        raise_order_error(result.error)
    return OrderTransitionRes(
        message="Order cancelled successfully", order=_to_status_res(result.order)
    )
