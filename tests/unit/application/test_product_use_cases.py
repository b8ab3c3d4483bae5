"""
Name: Product Use Case Tests

Responsibilities:
  - Required fields and positive price validation
  - Owner-scoped update / delete (foreign products look missing)
"""

from uuid import uuid4

import pytest

from storefront.application.usecases.products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    ListOwnProductsUseCase,
    ListProductsUseCase,
    ProductErrorCode,
    ProductFields,
    UpdateProductUseCase,
)
from storefront.infrastructure.repositories import InMemoryProductRepository

pytestmark = pytest.mark.unit


def _fields(**overrides) -> ProductFields:
    data = dict(
        name="Mate",
        description="Calabaza curada",
        price=1200.0,
        category="Kitchen",
        image="https://img.example.com/mate.png",
    )
    data.update(overrides)
    return ProductFields(**data)


@pytest.fixture
def repo() -> InMemoryProductRepository:
    return InMemoryProductRepository()


def test_create_product(repo):
    owner = uuid4()

    result = CreateProductUseCase(repo).execute(owner, _fields(name="  Mate  "))

    assert result.error is None
    assert result.product.owner_id == owner
    assert result.product.name == "Mate"
    assert ListProductsUseCase(repo).execute().products == [result.product]


@pytest.mark.parametrize("missing", ["name", "description", "price", "category"])
def test_create_requires_fields(repo, missing):
    result = CreateProductUseCase(repo).execute(uuid4(), _fields(**{missing: None}))

    assert result.error.code == ProductErrorCode.VALIDATION_ERROR
    assert result.error.message == "Name, description, price, and category are required"


def test_create_rejects_negative_price(repo):
    result = CreateProductUseCase(repo).execute(uuid4(), _fields(price=-3))

    assert result.error.code == ProductErrorCode.VALIDATION_ERROR
    assert result.error.message == "Price must be a positive number"


@pytest.mark.parametrize("price", [float("nan"), float("inf"), float("-inf")])
def test_create_rejects_non_finite_price(repo, price):
    result = CreateProductUseCase(repo).execute(uuid4(), _fields(price=price))

    assert result.error.code == ProductErrorCode.VALIDATION_ERROR
    assert result.error.message == "Price must be a positive number"
    assert ListProductsUseCase(repo).execute().products == []


def test_update_by_owner_keeps_image_when_omitted(repo):
    owner = uuid4()
    created = CreateProductUseCase(repo).execute(owner, _fields()).product

    result = UpdateProductUseCase(repo).execute(
        created.id, owner, _fields(price=1500.0, image=None)
    )

    assert result.error is None
    assert result.product.price == 1500.0
    assert result.product.image == created.image


def test_update_by_other_user_is_not_found(repo):
    created = CreateProductUseCase(repo).execute(uuid4(), _fields()).product

    result = UpdateProductUseCase(repo).execute(created.id, uuid4(), _fields())

    assert result.error.code == ProductErrorCode.NOT_FOUND
    assert result.error.message == (
        "Product not found or you do not have permission to update it"
    )


def test_delete_scoped_to_owner(repo):
    owner = uuid4()
    created = CreateProductUseCase(repo).execute(owner, _fields()).product
    use_case = DeleteProductUseCase(repo)

    foreign = use_case.execute(created.id, uuid4())
    own = use_case.execute(created.id, owner)

    assert foreign.error.code == ProductErrorCode.NOT_FOUND
    assert own.deleted is True
    assert repo.get_product(created.id) is None


def test_list_own_products(repo):
    owner = uuid4()
    mine = CreateProductUseCase(repo).execute(owner, _fields()).product
    CreateProductUseCase(repo).execute(uuid4(), _fields(name="Other"))

    result = ListOwnProductsUseCase(repo).execute(owner)

    assert [p.id for p in result.products] == [mine.id]
