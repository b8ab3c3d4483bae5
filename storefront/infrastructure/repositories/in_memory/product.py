"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/product.py
============================================================
Class: InMemoryProductRepository

Responsibilities:
  - Almacenar productos en memoria (tests / local dev).
  - Update/Delete solo si el producto pertenece al owner indicado.

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas en todas las lecturas.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from threading import Lock
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ....domain.entities import Product


def _newest_first(products: Iterable[Product]) -> List[Product]:
    return sorted(
        (replace(p) for p in products), key=lambda p: p.created_at, reverse=True
    )


class InMemoryProductRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._products: Dict[UUID, Product] = {}

    def list_products(self) -> List[Product]:
        with self._lock:
            values = list(self._products.values())
        return _newest_first(values)

    def list_products_by_owner(self, owner_id: UUID) -> List[Product]:
        with self._lock:
            values = list(self._products.values())
        return _newest_first(p for p in values if p.owner_id == owner_id)

    def get_product(self, product_id: UUID) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            return replace(product) if product else None

    def create_product(self, product: Product) -> Product:
        with self._lock:
            self._products[product.id] = replace(product)
        return replace(product)

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
        with self._lock:
            current = self._products.get(product_id)
            if current is None or not current.is_owned_by(owner_id):
                return None
            updated = replace(
                current,
                name=name,
                description=description,
                price=price,
                category=category,
                image=current.image if image is None else image,
                updated_at=at,
            )
            self._products[product_id] = updated
            return replace(updated)

    def delete_product(self, product_id: UUID, owner_id: UUID) -> bool:
        with self._lock:
            current = self._products.get(product_id)
            if current is None or not current.is_owned_by(owner_id):
                return False
            del self._products[product_id]
            return True
