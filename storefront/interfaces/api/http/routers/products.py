"""
===============================================================================
TARJETA CRC — routers/products.py
===============================================================================

Módulo:
    Router HTTP de Productos

Responsabilidades:
    - Catálogo público (GET /products).
    - Alta por admin; edición y baja solo por el dueño del producto.
    - Listado de productos propios del admin (GET /my-products).

Notas:
    - El scoping por dueño vive en el repositorio (WHERE id AND owner_id):
      un producto ajeno es indistinguible de uno inexistente (404).
===============================================================================
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from storefront.application.usecases.products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    ListOwnProductsUseCase,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from storefront.application.usecases.products.manage_products import (
    DELETE_NOT_FOUND_MESSAGE,
    UPDATE_NOT_FOUND_MESSAGE,
)
from storefront.container import (
    get_create_product_use_case,
    get_delete_product_use_case,
    get_list_own_products_use_case,
    get_list_products_use_case,
    get_update_product_use_case,
)
from storefront.crosscutting.error_responses import not_found
from storefront.identity.dependencies import require_identity, require_role
from storefront.identity.users import Identity, UserRole

from ..error_mapping import raise_product_error
from ..schemas.products import (
    CreateProductRes,
    DeleteProductRes,
    ProductReq,
    ProductRes,
    UpdateProductRes,
)

router = APIRouter()


def _parse_product_id(raw: str, message: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise not_found(message)


@router.get("/products", response_model=List[ProductRes], tags=["products"])
def list_products(
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
):
    result = use_case.execute()
    return [ProductRes.from_product(p) for p in result.products]


@router.get("/my-products", response_model=List[ProductRes], tags=["products"])
def list_my_products(
    use_case: ListOwnProductsUseCase = Depends(get_list_own_products_use_case),
    admin: Identity = Depends(require_role(UserRole.ADMIN)),
):
    result = use_case.execute(admin.id)
    return [ProductRes.from_product(p) for p in result.products]


@router.post(
    "/products",
    response_model=CreateProductRes,
    status_code=201,
    tags=["products"],
)
def create_product(
    req: ProductReq,
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
    admin: Identity = Depends(require_role(UserRole.ADMIN)),
):
    result = use_case.execute(admin.id, req.to_fields())
    if result.error is not None:
        raise_product_error(result.error)
    return CreateProductRes(data=ProductRes.from_product(result.product))


@router.put("/products/{product_id}", response_model=UpdateProductRes, tags=["products"])
def update_product(
    product_id: str,
    req: ProductReq,
    use_case: UpdateProductUseCase = Depends(get_update_product_use_case),
    identity: Identity = Depends(require_identity()),
):
    result = use_case.execute(
        _parse_product_id(product_id, UPDATE_NOT_FOUND_MESSAGE),
        identity.id,
        req.to_fields(),
    )
    if result.error is not None:
        raise_product_error(result.error)
    return UpdateProductRes(product=ProductRes.from_product(result.product))


@router.delete(
    "/products/{product_id}", response_model=DeleteProductRes, tags=["products"]
)
def delete_product(
    product_id: str,
    use_case: DeleteProductUseCase = Depends(get_delete_product_use_case),
    identity: Identity = Depends(require_identity()),
):
    result = use_case.execute(
        _parse_product_id(product_id, DELETE_NOT_FOUND_MESSAGE), identity.id
    )
    if result.error is not None:
        raise_product_error(result.error)
    return DeleteProductRes()
