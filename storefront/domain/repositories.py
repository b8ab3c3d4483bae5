"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for users, orders and products (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- domain.entities: Order, OrderStatus, Product
- identity.users: User
- infrastructure.repositories: postgres/* and in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.
- Infrastructure failures surface as StoreUnavailableError.

Notes
- `OrderRepository.transition_status` is a compare-and-swap: the update only
  applies when the stored status still equals `expected`. Among concurrent
  transitions on the same order exactly one wins.
"""

from datetime import datetime
from typing import List, Optional, Protocol
from uuid import UUID

from ..identity.users import User
from .entities import Order, OrderStatus, Product


class UserRepository(Protocol):
    """R: Interface for user persistence."""

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def create_user(self, user: User) -> Optional[User]:
        """
        R: Insert a new user.

        Returns:
            The stored user, or None when the email is already taken.
        """
        ...

    def list_users(self) -> List[User]:
        ...


class OrderRepository(Protocol):
    """R: Interface for order persistence."""

    def create_order(self, order: Order) -> Order:
        ...

    def get_order(self, order_id: UUID) -> Optional[Order]:
        ...

    def list_orders(self, status: Optional[OrderStatus] = None) -> List[Order]:
        """R: All orders (optionally filtered by status), newest first."""
        ...

    def list_orders_by_owner(self, owner_id: UUID) -> List[Order]:
        """R: Orders placed by `owner_id`, newest first."""
        ...

    def transition_status(
        self,
        order_id: UUID,
        expected: OrderStatus,
        target: OrderStatus,
        at: datetime,
    ) -> Optional[Order]:
        """
        R: Atomically set status=target, updated_at=at if status == expected.

        Returns:
            The updated order, or None if the order is missing or its status
            no longer equals `expected`.
        """
        ...

    def ping(self) -> bool:
        """R: Cheap store health check."""
        ...


class ProductRepository(Protocol):
    """R: Interface for product persistence."""

    def list_products(self) -> List[Product]:
        ...

    def list_products_by_owner(self, owner_id: UUID) -> List[Product]:
        ...

    def get_product(self, product_id: UUID) -> Optional[Product]:
        ...

    def create_product(self, product: Product) -> Product:
        ...

    def update_product(
        self,
        product_id: UUID,
        owner_id: UUID,
        *,
        name: str,
        description: str,
        price: float,
        category: str,
        image: Optional[str],
        at: datetime,
    ) -> Optional[Product]:
        """
        R: Update a product owned by `owner_id`.

        Returns:
            The updated product, or None if it does not exist or belongs to
            someone else. `image=None` keeps the current image.
        """
        ...

    def delete_product(self, product_id: UUID, owner_id: UUID) -> bool:
        """R: Delete a product owned by `owner_id`. False if not found/not owned."""
        ...
