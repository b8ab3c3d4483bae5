"""
Name: Postgres Repository Tests

Responsibilities:
  - SQL shape of the compare-and-set transition
  - Row mapping (JSONB line items, NUMERIC totals)
  - Driver errors surfaced as StoreUnavailableError
  - Duplicate email insert returns None (ON CONFLICT DO NOTHING)

Notes:
  - Offline: the pool is a MagicMock; no real DB
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from storefront.crosscutting.exceptions import StoreUnavailableError
from storefront.domain.entities import OrderStatus
from storefront.identity.users import User, UserRole
from storefront.infrastructure.repositories import (
    PostgresOrderRepository,
    PostgresProductRepository,
    PostgresUserRepository,
)

pytestmark = pytest.mark.unit

NOW = datetime(2025, 5, 1, tzinfo=timezone.utc)


def _pool_with(conn: MagicMock) -> MagicMock:
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    pool.connection.return_value.__exit__.return_value = False
    return pool


def _order_row(order_id, owner_id, status="pending"):
    product_id = uuid4()
    return (
        order_id,
        owner_id,
        [{"product_id": str(product_id), "quantity": 2, "unit_price": 9.5}],
        Decimal("19.00"),
        status,
        "Street 1",
        "555",
        NOW,
        NOW,
    )


def test_transition_status_uses_expected_status_guard():
    order_id, owner_id = uuid4(), uuid4()
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = _order_row(
        order_id, owner_id, status="delivered"
    )
    repo = PostgresOrderRepository(pool=_pool_with(conn))

    order = repo.transition_status(
        order_id, OrderStatus.PENDING, OrderStatus.DELIVERED, NOW
    )

    sql, params = conn.execute.call_args.args
    assert "WHERE id = %s AND status = %s" in sql
    assert params == ("delivered", NOW, order_id, "pending")
    assert order.status == OrderStatus.DELIVERED
    assert order.total_price == 19.0
    assert order.line_items[0].quantity == 2


def test_transition_status_lost_race_returns_none():
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = None
    repo = PostgresOrderRepository(pool=_pool_with(conn))

    assert (
        repo.transition_status(uuid4(), OrderStatus.PENDING, OrderStatus.CANCELLED, NOW)
        is None
    )


def test_list_orders_filters_by_status():
    conn = MagicMock()
    conn.execute.return_value.fetchall.return_value = []
    repo = PostgresOrderRepository(pool=_pool_with(conn))

    repo.list_orders(OrderStatus.CANCELLED)

    sql, params = conn.execute.call_args.args
    assert "WHERE status = %s" in sql
    assert "ORDER BY created_at DESC" in sql
    assert params == ("cancelled",)


def test_driver_error_becomes_store_unavailable():
    conn = MagicMock()
    conn.execute.side_effect = RuntimeError("connection reset")
    repo = PostgresOrderRepository(pool=_pool_with(conn))

    with pytest.raises(StoreUnavailableError) as excinfo:
        repo.get_order(uuid4())

    assert isinstance(excinfo.value.original_error, RuntimeError)


def test_duplicate_email_insert_returns_none():
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = None
    repo = PostgresUserRepository(pool=_pool_with(conn))

    created = repo.create_user(
        User(id=uuid4(), email="dup@example.com", password_hash="h")
    )

    sql = conn.execute.call_args.args[0]
    assert "ON CONFLICT (email) DO NOTHING" in sql
    assert created is None


def test_user_row_mapping():
    user_id = uuid4()
    conn = MagicMock()
    conn.execute.return_value.fetchone.return_value = (
        user_id,
        "admin@example.com",
        "$argon2id$...",
        "admin",
        NOW,
    )
    repo = PostgresUserRepository(pool=_pool_with(conn))

    user = repo.get_user_by_id(user_id)

    assert user.role == UserRole.ADMIN
    assert user.created_at == NOW


def test_delete_product_scoped_by_owner():
    product_id, owner_id = uuid4(), uuid4()
    conn = MagicMock()
    conn.execute.return_value.rowcount = 0
    repo = PostgresProductRepository(pool=_pool_with(conn))

    deleted = repo.delete_product(product_id, owner_id)

    sql, params = conn.execute.call_args.args
    assert "WHERE id = %s AND owner_id = %s" in sql
    assert params == (product_id, owner_id)
    assert deleted is False
