"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/order.py
============================================================
Class: PostgresOrderRepository

Responsibilities:
  - Persistir órdenes (line items como JSONB).
  - Listados: todas (filtro opcional por estado) y por owner, más nuevas primero.
  - Transición de estado como compare-and-swap:
      UPDATE orders SET status = target WHERE id = %s AND status = expected
    Exactamente una transición concurrente gana; el resto ve 0 filas.

Collaborators:
  - postgres.base.PostgresRepositoryBase
  - domain.entities.Order, LineItem, OrderStatus
  - psycopg.types.json.Jsonb

Constraints:
  - Sin reglas de negocio: quién puede transicionar se decide en los use cases.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from psycopg.types.json import Jsonb

from ....domain.entities import LineItem, Order, OrderStatus
from .base import PostgresRepositoryBase

_ORDER_COLUMNS = """
    id, owner_id, line_items, total_price, status,
    shipping_address, phone, created_at, updated_at
"""

_ORDER_BY = "ORDER BY created_at DESC, id DESC"


def _line_items_to_json(items: list[LineItem]) -> list[dict[str, Any]]:
    return [
        {
            "product_id": str(item.product_id),
            "quantity": item.quantity,
            "unit_price": item.unit_price,
        }
        for item in items
    ]


def _line_items_from_json(raw: list[dict[str, Any]] | None) -> list[LineItem]:
    return [
        LineItem(
            product_id=UUID(str(item["product_id"])),
            quantity=int(item["quantity"]),
            unit_price=float(item["unit_price"]),
        )
        for item in (raw or [])
    ]


def _row_to_order(row: tuple) -> Order:
    (
        order_id,
        owner_id,
        line_items,
        total_price,
        status,
        shipping_address,
        phone,
        created_at,
        updated_at,
    ) = row

    return Order(
        id=order_id,
        owner_id=owner_id,
        line_items=_line_items_from_json(line_items),
        total_price=float(total_price),
        status=OrderStatus(status),
        shipping_address=shipping_address,
        phone=phone,
        created_at=created_at,
        updated_at=updated_at,
    )


class PostgresOrderRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de órdenes."""

    def create_order(self, order: Order) -> Order:
        row = self._fetchone(
            query=f"""
                INSERT INTO orders (
                    id, owner_id, line_items, total_price, status,
                    shipping_address, phone, created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {_ORDER_COLUMNS}
            """,
            params=(
                order.id,
                order.owner_id,
                Jsonb(_line_items_to_json(order.line_items)),
                order.total_price,
                order.status.value,
                order.shipping_address,
                order.phone,
                order.created_at,
                order.updated_at,
            ),
            context_msg="PostgresOrderRepository: create_order failed",
            extra={"order_id": str(order.id)},
        )
        return _row_to_order(row)

    def get_order(self, order_id: UUID) -> Optional[Order]:
        row = self._fetchone(
            query=f"SELECT {_ORDER_COLUMNS} FROM orders WHERE id = %s",
            params=(order_id,),
            context_msg="PostgresOrderRepository: get_order failed",
            extra={"order_id": str(order_id)},
        )
        return _row_to_order(row) if row else None

    def list_orders(self, status: Optional[OrderStatus] = None) -> list[Order]:
        where_sql = "WHERE status = %s" if status is not None else ""
        params: list[object] = [status.value] if status is not None else []

        rows = self._fetchall(
            query=f"SELECT {_ORDER_COLUMNS} FROM orders {where_sql} {_ORDER_BY}",
            params=params,
            context_msg="PostgresOrderRepository: list_orders failed",
            extra={"status": status.value if status else None},
        )
        return [_row_to_order(r) for r in rows]

    def list_orders_by_owner(self, owner_id: UUID) -> list[Order]:
        rows = self._fetchall(
            query=f"""
                SELECT {_ORDER_COLUMNS} FROM orders
                WHERE owner_id = %s
                {_ORDER_BY}
            """,
            params=(owner_id,),
            context_msg="PostgresOrderRepository: list_orders_by_owner failed",
            extra={"owner_id": str(owner_id)},
        )
        return [_row_to_order(r) for r in rows]

    def transition_status(
        self,
        order_id: UUID,
        expected: OrderStatus,
        target: OrderStatus,
        at: datetime,
    ) -> Optional[Order]:
        row = self._fetchone(
            query=f"""
                UPDATE orders
                SET status = %s, updated_at = %s
                WHERE id = %s AND status = %s
                RETURNING {_ORDER_COLUMNS}
            """,
            params=(target.value, at, order_id, expected.value),
            context_msg="PostgresOrderRepository: transition_status failed",
            extra={
                "order_id": str(order_id),
                "expected": expected.value,
                "target": target.value,
            },
        )
        return _row_to_order(row) if row else None

    def ping(self) -> bool:
        row = self._fetchone(
            query="SELECT 1",
            params=(),
            context_msg="PostgresOrderRepository: ping failed",
            extra={},
        )
        return bool(row)
