"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/order.py
============================================================
Class: InMemoryOrderRepository

Responsibilities:
  - Almacenar órdenes en memoria (tests / local dev).
  - Ordering alineado con Postgres: created_at DESC.
  - transition_status como compare-and-swap bajo lock (misma semántica que
    `UPDATE ... WHERE id = %s AND status = %s`).

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: los callers nunca comparten la instancia almacenada.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from threading import Lock
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ....domain.entities import Order, OrderStatus


def _copy(order: Order) -> Order:
    return replace(order, line_items=list(order.line_items))


def _newest_first(orders: Iterable[Order]) -> List[Order]:
    return sorted((_copy(o) for o in orders), key=lambda o: o.created_at, reverse=True)


class InMemoryOrderRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._orders: Dict[UUID, Order] = {}

    def create_order(self, order: Order) -> Order:
        with self._lock:
            self._orders[order.id] = _copy(order)
        return _copy(order)

    def get_order(self, order_id: UUID) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            return _copy(order) if order else None

    def list_orders(self, status: Optional[OrderStatus] = None) -> List[Order]:
        with self._lock:
            values = list(self._orders.values())
        return _newest_first(o for o in values if status is None or o.status == status)

    def list_orders_by_owner(self, owner_id: UUID) -> List[Order]:
        with self._lock:
            values = list(self._orders.values())
        return _newest_first(o for o in values if o.owner_id == owner_id)

    def transition_status(
        self,
        order_id: UUID,
        expected: OrderStatus,
        target: OrderStatus,
        at: datetime,
    ) -> Optional[Order]:
        with self._lock:
            current = self._orders.get(order_id)
            if current is None or current.status != expected:
                return None
            updated = replace(current, status=target, updated_at=at)
            self._orders[order_id] = updated
            return _copy(updated)

    def ping(self) -> bool:
        return True
