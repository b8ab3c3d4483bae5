"""Product use cases (catálogo público + gestión por el admin dueño)."""

from .list_products import ListOwnProductsUseCase, ListProductsUseCase
from .manage_products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    UpdateProductUseCase,
)
from .product_results import (
    DeleteProductResult,
    ProductError,
    ProductErrorCode,
    ProductFields,
    ProductListResult,
    ProductResult,
)

__all__ = [
    "CreateProductUseCase",
    "DeleteProductUseCase",
    "ListOwnProductsUseCase",
    "ListProductsUseCase",
    "UpdateProductUseCase",
    "DeleteProductResult",
    "ProductError",
    "ProductErrorCode",
    "ProductFields",
    "ProductListResult",
    "ProductResult",
]
