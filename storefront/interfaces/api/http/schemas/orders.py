"""
===============================================================================
TARJETA CRC — schemas/orders.py
===============================================================================

Módulo:
    Schemas HTTP para órdenes

Responsabilidades:
    - Request de checkout: acepta el shape del carrito del frontend
      (cartItems[{_id|product|productId, quantity, price}], totalPrice,
      phoneNo, address).
    - Responses: orden completa y vista corta post-transición.
    - Listados: `user` {id, email} y `product` {id, name, image, price} por
      ítem cuando el listado los pobló; null si fueron borrados.

Notas:
    - Los campos obligatorios del checkout son opcionales acá: la ausencia se
      reporta desde PlaceOrderUseCase ("Missing required order information").
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from storefront.domain.entities import LineItem, Order, OrderStatus, Product
from storefront.identity.users import User

from .base import CamelModel


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CartItemReq(CamelModel):
    product_id: UUID = Field(
        validation_alias=AliasChoices("productId", "_id", "product", "product_id")
    )
    quantity: int
    unit_price: float = Field(
        validation_alias=AliasChoices("unitPrice", "price", "unit_price")
    )

    def to_line_item(self) -> LineItem:
        return LineItem(
            product_id=self.product_id,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


class PlaceOrderReq(CamelModel):
    cart_items: List[CartItemReq] | None = Field(
        default=None,
        validation_alias=AliasChoices("cartItems", "lineItems", "cart_items"),
    )
    total_price: float | None = None
    phone: str | None = Field(
        default=None, validation_alias=AliasChoices("phoneNo", "phone")
    )
    shipping_address: str | None = Field(
        default=None,
        validation_alias=AliasChoices("address", "shippingAddress", "shipping_address"),
    )


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ProductSummaryRes(CamelModel):
    id: UUID
    name: str
    image: str
    price: float

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummaryRes":
        return cls(
            id=product.id, name=product.name, image=product.image, price=product.price
        )


class OrderOwnerRes(CamelModel):
    id: UUID
    email: str


class LineItemRes(CamelModel):
    product_id: UUID
    quantity: int
    unit_price: float
    product: Optional[ProductSummaryRes] = None


class OrderRes(CamelModel):
    id: UUID
    owner_id: UUID
    user: Optional[OrderOwnerRes] = None
    line_items: List[LineItemRes]
    total_price: float
    status: OrderStatus
    shipping_address: str
    phone: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_order(
        cls,
        order: Order,
        *,
        owner: User | None = None,
        products: Dict[UUID, Product] | None = None,
    ) -> "OrderRes":
        products = products or {}
        return cls(
            id=order.id,
            owner_id=order.owner_id,
            user=OrderOwnerRes(id=owner.id, email=owner.email) if owner else None,
            line_items=[
                LineItemRes(
                    product_id=i.product_id,
                    quantity=i.quantity,
                    unit_price=i.unit_price,
                    product=(
                        ProductSummaryRes.from_product(products[i.product_id])
                        if i.product_id in products
                        else None
                    ),
                )
                for i in order.line_items
            ],
            total_price=order.total_price,
            status=order.status,
            shipping_address=order.shipping_address,
            phone=order.phone,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderStatusRes(CamelModel):
    """Vista corta devuelta por cancel / deliver."""

    id: UUID
    status: OrderStatus
    updated_at: datetime


class OrderTransitionRes(CamelModel):
    success: bool = True
    message: str
    order: OrderStatusRes


class PlaceOrderRes(CamelModel):
    success: bool = True
    message: str = "Order placed successfully"
    order: OrderRes


class OrdersDataRes(CamelModel):
    """GET /orders (admin)."""

    success: bool = True
    data: List[OrderRes]


class UserOrdersRes(CamelModel):
    """GET /orders/user."""

    success: bool = True
    orders: List[OrderRes]
