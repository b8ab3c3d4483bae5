"""
Name: Order Use Case Tests

Responsibilities:
  - Cancel: ownership checked before status; only pending orders
  - Deliver: only pending orders; second deliver is rejected
  - Compare-and-set: a lost race is reported with the current status
  - Place order: validation messages and total mismatch policy
  - Admin listing with status filter
  - Listings populate owners and products; deleted ones are left out
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from storefront.application.usecases.orders import (
    CancelOrderUseCase,
    DeliverOrderUseCase,
    ListOrdersUseCase,
    ListUserOrdersUseCase,
    OrderErrorCode,
    PlaceOrderInput,
    PlaceOrderUseCase,
)
from storefront.domain.entities import LineItem, Order, OrderStatus, Product
from storefront.identity.users import User
from storefront.infrastructure.repositories import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit

T0 = datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc)


def _order(owner_id=None, status=OrderStatus.PENDING, created_at=T0) -> Order:
    return Order(
        id=uuid4(),
        owner_id=owner_id or uuid4(),
        line_items=[LineItem(product_id=uuid4(), quantity=1, unit_price=10.0)],
        total_price=10.0,
        shipping_address="Av. Siempre Viva 742",
        phone="5551234",
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture
def repo() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


# ============================================================================
# Cancel
# ============================================================================


def test_owner_cancels_pending_order(repo):
    order = repo.create_order(_order())
    later = T0 + timedelta(minutes=5)

    result = CancelOrderUseCase(repo, clock=lambda: later).execute(
        order.id, order.owner_id
    )

    assert result.error is None
    assert result.order.status == OrderStatus.CANCELLED
    assert result.order.updated_at == later
    assert repo.get_order(order.id).status == OrderStatus.CANCELLED


def test_cancel_by_non_owner_is_forbidden_even_if_terminal(repo):
    order = repo.create_order(_order(status=OrderStatus.DELIVERED))

    result = CancelOrderUseCase(repo).execute(order.id, uuid4())

    assert result.error.code == OrderErrorCode.OWNERSHIP_VIOLATION
    assert result.error.message == "You can only cancel your own orders"


def test_cancel_delivered_order_is_rejected(repo):
    order = repo.create_order(_order(status=OrderStatus.DELIVERED))

    result = CancelOrderUseCase(repo).execute(order.id, order.owner_id)

    assert result.error.code == OrderErrorCode.INVALID_TRANSITION
    assert result.error.message == (
        "Cannot cancel order with status: delivered. "
        "Only pending orders can be cancelled."
    )
    assert repo.get_order(order.id).status == OrderStatus.DELIVERED


def test_cancel_unknown_order_is_not_found(repo):
    result = CancelOrderUseCase(repo).execute(uuid4(), uuid4())

    assert result.error.code == OrderErrorCode.NOT_FOUND
    assert result.error.message == "Order not found"


# ============================================================================
# Deliver
# ============================================================================


def test_deliver_pending_then_second_deliver_rejected(repo):
    order = repo.create_order(_order())
    use_case = DeliverOrderUseCase(repo)

    first = use_case.execute(order.id)
    second = use_case.execute(order.id)

    assert first.order.status == OrderStatus.DELIVERED
    assert second.error.code == OrderErrorCode.INVALID_TRANSITION
    assert second.error.message == (
        "Cannot mark order as delivered. Order status is delivered."
    )


def test_deliver_cancelled_order_rejected(repo):
    order = repo.create_order(_order(status=OrderStatus.CANCELLED))

    result = DeliverOrderUseCase(repo).execute(order.id)

    assert result.error.code == OrderErrorCode.INVALID_TRANSITION
    assert "cancelled" in result.error.message


# ============================================================================
# Compare-and-set
# ============================================================================


def test_lost_race_reports_current_status():
    """Deliver reads pending, but a cancel lands before its write."""
    pending = _order()
    cancelled = replace(pending, status=OrderStatus.CANCELLED)

    orders = MagicMock()
    orders.get_order.side_effect = [pending, cancelled]
    orders.transition_status.return_value = None

    result = DeliverOrderUseCase(orders).execute(pending.id)

    orders.transition_status.assert_called_once()
    args = orders.transition_status.call_args[0]
    assert args[1] == OrderStatus.PENDING
    assert args[2] == OrderStatus.DELIVERED
    assert result.error.code == OrderErrorCode.INVALID_TRANSITION
    assert "cancelled" in result.error.message


def test_lost_race_on_deleted_order_is_not_found():
    pending = _order()
    orders = MagicMock()
    orders.get_order.side_effect = [pending, None]
    orders.transition_status.return_value = None

    result = CancelOrderUseCase(orders).execute(pending.id, pending.owner_id)

    assert result.error.code == OrderErrorCode.NOT_FOUND


def test_repository_cas_only_applies_from_expected_status(repo):
    order = repo.create_order(_order())

    applied = repo.transition_status(
        order.id, OrderStatus.PENDING, OrderStatus.DELIVERED, T0
    )
    lost = repo.transition_status(
        order.id, OrderStatus.PENDING, OrderStatus.CANCELLED, T0
    )

    assert applied.status == OrderStatus.DELIVERED
    assert lost is None
    assert repo.get_order(order.id).status == OrderStatus.DELIVERED


# ============================================================================
# Place order
# ============================================================================


def _input(**overrides) -> PlaceOrderInput:
    data = dict(
        owner_id=uuid4(),
        line_items=[
            LineItem(product_id=uuid4(), quantity=2, unit_price=15.0),
            LineItem(product_id=uuid4(), quantity=1, unit_price=5.0),
        ],
        total_price=35.0,
        phone="5551234",
        shipping_address="Calle Falsa 123",
    )
    data.update(overrides)
    return PlaceOrderInput(**data)


def test_place_order_creates_pending_order(repo):
    result = PlaceOrderUseCase(repo, clock=lambda: T0).execute(_input())

    assert result.error is None
    assert result.order.status == OrderStatus.PENDING
    assert result.order.created_at == T0
    assert repo.get_order(result.order.id) is not None


@pytest.mark.parametrize(
    "overrides",
    [
        {"line_items": []},
        {"total_price": None},
        {"phone": "  "},
        {"shipping_address": None},
    ],
)
def test_place_order_missing_information(repo, overrides):
    result = PlaceOrderUseCase(repo).execute(_input(**overrides))

    assert result.error.code == OrderErrorCode.VALIDATION_ERROR
    assert result.error.message == "Missing required order information"
    assert repo.list_orders() == []


def test_place_order_rejects_non_positive_quantity(repo):
    items = [LineItem(product_id=uuid4(), quantity=0, unit_price=15.0)]

    result = PlaceOrderUseCase(repo).execute(_input(line_items=items))

    assert result.error.code == OrderErrorCode.VALIDATION_ERROR


@pytest.mark.parametrize("price", [float("nan"), float("inf")])
def test_place_order_rejects_non_finite_unit_price(repo, price):
    items = [LineItem(product_id=uuid4(), quantity=1, unit_price=price)]

    result = PlaceOrderUseCase(repo).execute(_input(line_items=items))

    assert result.error.message == "Each cart item needs a positive quantity and a price"
    assert repo.list_orders() == []


@pytest.mark.parametrize("total", [float("nan"), float("inf"), -35.0])
def test_place_order_rejects_invalid_total(repo, total):
    result = PlaceOrderUseCase(repo).execute(_input(total_price=total))

    assert result.error.code == OrderErrorCode.VALIDATION_ERROR
    assert result.error.message == "Total price must be a positive number"
    assert repo.list_orders() == []


def test_total_mismatch_is_kept_when_not_enforced(repo):
    result = PlaceOrderUseCase(repo).execute(_input(total_price=1.0))

    assert result.error is None
    assert result.order.total_price == 1.0


def test_total_mismatch_rejected_when_enforced(repo):
    result = PlaceOrderUseCase(repo, enforce_total=True).execute(
        _input(total_price=1.0)
    )

    assert result.error.code == OrderErrorCode.VALIDATION_ERROR
    assert result.error.message == "Order total does not match cart items"


# ============================================================================
# Listings
# ============================================================================


def _admin_listing(repo, users=None, products=None) -> ListOrdersUseCase:
    return ListOrdersUseCase(
        repo,
        user_repository=users or InMemoryUserRepository(),
        product_repository=products or InMemoryProductRepository(),
    )


def test_admin_listing_filters_case_insensitively(repo):
    pending = repo.create_order(_order())
    delivered = repo.create_order(
        _order(status=OrderStatus.DELIVERED, created_at=T0 + timedelta(hours=1))
    )

    filtered = _admin_listing(repo).execute(status="DELIVERED")
    unknown = _admin_listing(repo).execute(status="shipped")

    assert [o.id for o in filtered.orders] == [delivered.id]
    assert [o.id for o in unknown.orders] == [delivered.id, pending.id]


def test_user_listing_only_returns_own_orders_newest_first(repo):
    owner = uuid4()
    older = repo.create_order(_order(owner_id=owner))
    newer = repo.create_order(_order(owner_id=owner, created_at=T0 + timedelta(days=1)))
    repo.create_order(_order())

    result = ListUserOrdersUseCase(
        repo, product_repository=InMemoryProductRepository()
    ).execute(owner)

    assert [o.id for o in result.orders] == [newer.id, older.id]


def test_listings_populate_owner_and_products(repo):
    users, products = InMemoryUserRepository(), InMemoryProductRepository()
    owner = users.create_user(
        User(id=uuid4(), email="buyer@example.com", password_hash="h")
    )
    mate = products.create_product(
        Product(
            id=uuid4(),
            owner_id=uuid4(),
            name="Mate",
            description="Calabaza",
            price=10.0,
            category="Kitchen",
            image="mate.png",
            created_at=T0,
            updated_at=T0,
        )
    )
    gone_id = uuid4()
    repo.create_order(
        replace(
            _order(owner_id=owner.id),
            line_items=[
                LineItem(product_id=mate.id, quantity=1, unit_price=10.0),
                LineItem(product_id=gone_id, quantity=1, unit_price=5.0),
            ],
        )
    )

    admin_view = _admin_listing(repo, users=users, products=products).execute()
    own_view = ListUserOrdersUseCase(repo, product_repository=products).execute(
        owner.id
    )

    assert admin_view.owners[owner.id].email == "buyer@example.com"
    assert admin_view.products == {mate.id: mate}
    assert own_view.products == {mate.id: mate}
    assert own_view.owners == {}
