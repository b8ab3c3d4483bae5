"""
===============================================================================
USE CASES: Create / Update / Delete Product
===============================================================================

Business Goal:
    Permitir que un admin publique productos y que solo su creador los edite
    o borre.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Classes:
    CreateProductUseCase, UpdateProductUseCase, DeleteProductUseCase

Responsibilities:
    - Validar campos (nombre, descripción, precio > 0, categoría).
    - Asignar owner_id = actor al crear.
    - Update/Delete condicionados al owner: un producto ajeno se reporta
      igual que uno inexistente (NOT_FOUND).
    - Update sin imagen conserva la imagen actual.

Collaborators:
    - ProductRepository
    - product_results (validación + resultados)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Product
from ....domain.repositories import ProductRepository
from .product_results import (
    DeleteProductResult,
    ProductError,
    ProductErrorCode,
    ProductFields,
    ProductResult,
    validate_product_fields,
)

UPDATE_NOT_FOUND_MESSAGE = (
    "Product not found or you do not have permission to update it"
)
DELETE_NOT_FOUND_MESSAGE = (
    "Product not found or you do not have permission to delete it"
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CreateProductUseCase:
    def __init__(
        self,
        product_repository: ProductRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._products = product_repository
        self._clock = clock

    def execute(self, owner_id: UUID, fields: ProductFields) -> ProductResult:
        error = validate_product_fields(fields)
        if error is not None:
            return ProductResult(error=error)

        now = self._clock()
        product = self._products.create_product(
            Product(
                id=uuid4(),
                owner_id=owner_id,
                name=fields.name.strip(),
                description=fields.description.strip(),
                price=float(fields.price),
                category=fields.category.strip(),
                image=(fields.image or "").strip(),
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Product created", extra={"product_id": str(product.id)})
        return ProductResult(product=product)


class UpdateProductUseCase:
    def __init__(
        self,
        product_repository: ProductRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._products = product_repository
        self._clock = clock

    def execute(
        self, product_id: UUID, owner_id: UUID, fields: ProductFields
    ) -> ProductResult:
        error = validate_product_fields(fields)
        if error is not None:
            return ProductResult(error=error)

        updated = self._products.update_product(
            product_id,
            owner_id,
            name=fields.name.strip(),
            description=fields.description.strip(),
            price=float(fields.price),
            category=fields.category.strip(),
            image=(fields.image or "").strip() or None,
            at=self._clock(),
        )
        if updated is None:
            return ProductResult(
                error=ProductError(ProductErrorCode.NOT_FOUND, UPDATE_NOT_FOUND_MESSAGE)
            )
        return ProductResult(product=updated)


class DeleteProductUseCase:
    def __init__(self, product_repository: ProductRepository) -> None:
        self._products = product_repository

    def execute(self, product_id: UUID, owner_id: UUID) -> DeleteProductResult:
        if not self._products.delete_product(product_id, owner_id):
            return DeleteProductResult(
                deleted=False,
                error=ProductError(ProductErrorCode.NOT_FOUND, DELETE_NOT_FOUND_MESSAGE),
            )
        logger.info("Product deleted", extra={"product_id": str(product_id)})
        return DeleteProductResult(deleted=True)
