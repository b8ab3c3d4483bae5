"""
===============================================================================
USE CASES: List Products (public) / List Own Products (admin)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import ProductRepository
from .product_results import ProductListResult


class ListProductsUseCase:
    """Catálogo público: todos los productos, más nuevos primero."""

    def __init__(self, product_repository: ProductRepository) -> None:
        self._products = product_repository

    def execute(self) -> ProductListResult:
        return ProductListResult(products=self._products.list_products())


class ListOwnProductsUseCase:
    """Productos creados por el admin autenticado."""

    def __init__(self, product_repository: ProductRepository) -> None:
        self._products = product_repository

    def execute(self, owner_id: UUID) -> ProductListResult:
        return ProductListResult(
            products=self._products.list_products_by_owner(owner_id)
        )
