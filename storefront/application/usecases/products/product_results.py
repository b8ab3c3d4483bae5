"""
===============================================================================
PRODUCT USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Component:
    product_results models (module)

Responsibilities:
    - Definir ProductErrorCode (VALIDATION_ERROR / NOT_FOUND).
    - Representar resultados: ProductResult, ProductListResult, DeleteProductResult.
    - Validación compartida de campos de producto (create / update).
      El precio debe ser finito y > 0 (NaN / Infinity se rechazan).

Collaborators:
    - domain.entities.Product
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List

from ....domain.entities import Product

REQUIRED_FIELDS_MESSAGE = "Name, description, price, and category are required"
INVALID_PRICE_MESSAGE = "Price must be a positive number"


class ProductErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: campos faltantes o precio inválido (400).
      - NOT_FOUND: no existe o pertenece a otro admin (404, indistinguibles).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class ProductError:
    code: ProductErrorCode
    message: str


@dataclass
class ProductResult:
    product: Product | None = None
    error: ProductError | None = None


@dataclass
class ProductListResult:
    products: List[Product]
    error: ProductError | None = None


@dataclass
class DeleteProductResult:
    deleted: bool
    error: ProductError | None = None


@dataclass
class ProductFields:
    """Campos editables de un producto tal como llegan del cliente."""

    name: str | None = None
    description: str | None = None
    price: float | None = None
    category: str | None = None
    image: str | None = None


def validate_product_fields(fields: ProductFields) -> ProductError | None:
    """None si los campos son válidos; ProductError si no."""
    if (
        not (fields.name or "").strip()
        or not (fields.description or "").strip()
        or not fields.price
        or not (fields.category or "").strip()
    ):
        return ProductError(ProductErrorCode.VALIDATION_ERROR, REQUIRED_FIELDS_MESSAGE)

    if not math.isfinite(fields.price) or fields.price <= 0:
        return ProductError(ProductErrorCode.VALIDATION_ERROR, INVALID_PRICE_MESSAGE)

    return None
