"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/product.py
============================================================
Class: PostgresProductRepository

Responsibilities:
  - CRUD de productos (tabla `products`).
  - Update/Delete condicionados al owner en el mismo statement
    (WHERE id = %s AND owner_id = %s): "no existe" y "no es tuyo" son
    indistinguibles para el caller.

Collaborators:
  - postgres.base.PostgresRepositoryBase
  - domain.entities.Product
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from ....domain.entities import Product
from .base import PostgresRepositoryBase

_PRODUCT_COLUMNS = """
    id, owner_id, name, description, price, category, image,
    created_at, updated_at
"""

_ORDER_BY = "ORDER BY created_at DESC, id DESC"


def _row_to_product(row: tuple) -> Product:
    (
        product_id,
        owner_id,
        name,
        description,
        price,
        category,
        image,
        created_at,
        updated_at,
    ) = row

    return Product(
        id=product_id,
        owner_id=owner_id,
        name=name,
        description=description,
        price=float(price),
        category=category,
        image=image or "",
        created_at=created_at,
        updated_at=updated_at,
    )


class PostgresProductRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de productos."""

    def list_products(self) -> list[Product]:
        rows = self._fetchall(
            query=f"SELECT {_PRODUCT_COLUMNS} FROM products {_ORDER_BY}",
            context_msg="PostgresProductRepository: list_products failed",
            extra={},
        )
        return [_row_to_product(r) for r in rows]

    def list_products_by_owner(self, owner_id: UUID) -> list[Product]:
        rows = self._fetchall(
            query=f"""
                SELECT {_PRODUCT_COLUMNS} FROM products
                WHERE owner_id = %s
                {_ORDER_BY}
            """,
            params=(owner_id,),
            context_msg="PostgresProductRepository: list_products_by_owner failed",
            extra={"owner_id": str(owner_id)},
        )
        return [_row_to_product(r) for r in rows]

    def get_product(self, product_id: UUID) -> Optional[Product]:
        row = self._fetchone(
            query=f"SELECT {_PRODUCT_COLUMNS} FROM products WHERE id = %s",
            params=(product_id,),
            context_msg="PostgresProductRepository: get_product failed",
            extra={"product_id": str(product_id)},
        )
        return _row_to_product(row) if row else None

    def create_product(self, product: Product) -> Product:
        row = self._fetchone(
            query=f"""
                INSERT INTO products (
                    id, owner_id, name, description, price, category, image,
                    created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {_PRODUCT_COLUMNS}
            """,
            params=(
                product.id,
                product.owner_id,
                product.name,
                product.description,
                product.price,
                product.category,
                product.image,
                product.created_at,
                product.updated_at,
            ),
            context_msg="PostgresProductRepository: create_product failed",
            extra={"product_id": str(product.id)},
        )
        return _row_to_product(row)

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
        row = self._fetchone(
            query=f"""
                UPDATE products
                SET name = %s,
                    description = %s,
                    price = %s,
                    category = %s,
                    image = COALESCE(%s, image),
                    updated_at = %s
                WHERE id = %s AND owner_id = %s
                RETURNING {_PRODUCT_COLUMNS}
            """,
            params=(
                name,
                description,
                price,
                category,
                image,
                at,
                product_id,
                owner_id,
            ),
            context_msg="PostgresProductRepository: update_product failed",
            extra={"product_id": str(product_id)},
        )
        return _row_to_product(row) if row else None

    def delete_product(self, product_id: UUID, owner_id: UUID) -> bool:
        deleted = self._execute(
            query="DELETE FROM products WHERE id = %s AND owner_id = %s",
            params=(product_id, owner_id),
            context_msg="PostgresProductRepository: delete_product failed",
            extra={"product_id": str(product_id)},
        )
        return deleted > 0
