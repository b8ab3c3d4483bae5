"""
===============================================================================
USE CASES: List Orders (admin) / List User Orders (own)
===============================================================================

Responsibilities:
    - ListOrdersUseCase: todas las órdenes, filtro opcional por estado.
      El filtro es case-insensitive; un valor desconocido se ignora y se
      devuelven todas las órdenes.
    - ListUserOrdersUseCase: órdenes del actor.
    - Ambos: más nuevas primero (lo garantiza el repositorio).
    - Poblar datos relacionados para la UI:
        * productos de cada ítem (name / image / price) en ambos listados
        * dueño de la orden (email) solo en el listado admin

Collaborators:
    - OrderRepository
    - ProductRepository / UserRepository (lookups por id)
    - domain.entities.OrderStatus.parse

Notes:
    - Un producto o usuario borrado no rompe el listado: simplemente no
      aparece en el mapa y la respuesta conserva solo el id.
===============================================================================
"""

from __future__ import annotations

from typing import Dict, Iterable
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Order, OrderStatus, Product
from ....domain.repositories import OrderRepository, ProductRepository, UserRepository
from ....identity.users import User
from .order_results import OrderListResult


def _products_for(
    products: ProductRepository, orders: Iterable[Order]
) -> Dict[UUID, Product]:
    found: Dict[UUID, Product] = {}
    product_ids = {item.product_id for order in orders for item in order.line_items}
    for product_id in product_ids:
        product = products.get_product(product_id)
        if product is not None:
            found[product_id] = product
    return found


def _owners_for(users: UserRepository, orders: Iterable[Order]) -> Dict[UUID, User]:
    found: Dict[UUID, User] = {}
    for owner_id in {order.owner_id for order in orders}:
        user = users.get_user_by_id(owner_id)
        if user is not None:
            found[owner_id] = user
    return found


class ListOrdersUseCase:
    def __init__(
        self,
        order_repository: OrderRepository,
        *,
        user_repository: UserRepository,
        product_repository: ProductRepository,
    ) -> None:
        self._orders = order_repository
        self._users = user_repository
        self._products = product_repository

    def execute(self, status: str | None = None) -> OrderListResult:
        status_filter = OrderStatus.parse(status)
        if status and status_filter is None:
            logger.info("Ignoring unknown order status filter", extra={"filter": status})

        orders = self._orders.list_orders(status_filter)
        return OrderListResult(
            orders=orders,
            owners=_owners_for(self._users, orders),
            products=_products_for(self._products, orders),
        )


class ListUserOrdersUseCase:
    def __init__(
        self,
        order_repository: OrderRepository,
        *,
        product_repository: ProductRepository,
    ) -> None:
        self._orders = order_repository
        self._products = product_repository

    def execute(self, owner_id: UUID) -> OrderListResult:
        orders = self._orders.list_orders_by_owner(owner_id)
        return OrderListResult(
            orders=orders, products=_products_for(self._products, orders)
        )
