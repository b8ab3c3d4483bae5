"""
===============================================================================
TARJETA CRC — schemas/products.py
===============================================================================

Módulo:
    Schemas HTTP para productos

Notas:
    - Campos opcionales en el request: la validación con mensajes del
      contrato vive en product_results.validate_product_fields.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from storefront.application.usecases.products import ProductFields
from storefront.domain.entities import Product

from .base import CamelModel


class ProductReq(CamelModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    category: str | None = None
    image: str | None = None

    def to_fields(self) -> ProductFields:
        return ProductFields(
            name=self.name,
            description=self.description,
            price=self.price,
            category=self.category,
            image=self.image,
        )


class ProductRes(CamelModel):
    id: UUID
    owner_id: UUID
    name: str
    description: str
    price: float
    category: str
    image: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product: Product) -> "ProductRes":
        return cls(
            id=product.id,
            owner_id=product.owner_id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            image=product.image,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class CreateProductRes(CamelModel):
    success: bool = True
    data: ProductRes


class UpdateProductRes(CamelModel):
    success: bool = True
    message: str = "Product updated successfully"
    product: ProductRes


class DeleteProductRes(CamelModel):
    success: bool = True
    message: str = "Product deleted successfully"


ProductListRes = List[ProductRes]
