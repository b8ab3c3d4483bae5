"""
===============================================================================
TARJETA CRC — storefront/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, identidad, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends) y para scripts.
  - Mantener singletons con caching (lru_cache).
  - Elegir implementaciones según Settings (memory vs postgres).

Colaboradores:
  - storefront.crosscutting.config.get_settings
  - storefront.domain.repositories (puertos)
  - storefront.infrastructure.* (implementaciones)
  - storefront.identity.* (TokenVerifier, IdentityResolver, AuthorizationGate)
  - storefront.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
  - El pool de Postgres se inyecta a los repositorios desde acá; los
    repositorios no leen estado global.
  - Tests: `cache_clear()` en cada factory cacheada (ver reset_container()).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache, partial

from .application.usecases.auth import ListUsersUseCase, LoginUseCase, SignupUseCase
from .application.usecases.orders import (
    CancelOrderUseCase,
    DeliverOrderUseCase,
    ListOrdersUseCase,
    ListUserOrdersUseCase,
    PlaceOrderUseCase,
)
from .application.usecases.products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    ListOwnProductsUseCase,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import OrderRepository, ProductRepository, UserRepository
from .identity.gate import AuthorizationGate
from .identity.resolver import IdentityResolver
from .identity.tokens import TokenVerifier, issue_token
from .infrastructure.db.pool import get_pool
from .infrastructure.repositories import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
    PostgresOrderRepository,
    PostgresProductRepository,
    PostgresUserRepository,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test/memory; Postgres en runtime)."""
    if get_settings().uses_memory_store():
        return InMemoryUserRepository()
    return PostgresUserRepository(pool=get_pool())


@lru_cache(maxsize=1)
def get_order_repository() -> OrderRepository:
    """Repositorio de órdenes (in-memory en test/memory; Postgres en runtime)."""
    if get_settings().uses_memory_store():
        return InMemoryOrderRepository()
    return PostgresOrderRepository(pool=get_pool())


@lru_cache(maxsize=1)
def get_product_repository() -> ProductRepository:
    """Repositorio de productos (in-memory en test/memory; Postgres en runtime)."""
    if get_settings().uses_memory_store():
        return InMemoryProductRepository()
    return PostgresProductRepository(pool=get_pool())


# =============================================================================
# Identidad
# =============================================================================


@lru_cache(maxsize=1)
def get_token_verifier() -> TokenVerifier:
    settings = get_settings()
    return TokenVerifier(
        settings.jwt_secret, leeway_seconds=settings.jwt_leeway_seconds
    )


@lru_cache(maxsize=1)
def get_authorization_gate() -> AuthorizationGate:
    return AuthorizationGate(
        verifier=get_token_verifier(),
        resolver=IdentityResolver(get_user_repository()),
    )


# =============================================================================
# Casos de uso (baratos; se construyen por request)
# =============================================================================


def get_signup_use_case() -> SignupUseCase:
    return SignupUseCase(get_user_repository())


def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(
        get_user_repository(),
        token_issuer=partial(issue_token, settings=get_settings()),
    )


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


def get_place_order_use_case() -> PlaceOrderUseCase:
    return PlaceOrderUseCase(
        get_order_repository(),
        enforce_total=get_settings().enforce_order_total,
    )


def get_cancel_order_use_case() -> CancelOrderUseCase:
    return CancelOrderUseCase(get_order_repository())


def get_deliver_order_use_case() -> DeliverOrderUseCase:
    return DeliverOrderUseCase(get_order_repository())


def get_list_orders_use_case() -> ListOrdersUseCase:
    return ListOrdersUseCase(
        get_order_repository(),
        user_repository=get_user_repository(),
        product_repository=get_product_repository(),
    )


def get_list_user_orders_use_case() -> ListUserOrdersUseCase:
    return ListUserOrdersUseCase(
        get_order_repository(), product_repository=get_product_repository()
    )


def get_list_products_use_case() -> ListProductsUseCase:
    return ListProductsUseCase(get_product_repository())


def get_list_own_products_use_case() -> ListOwnProductsUseCase:
    return ListOwnProductsUseCase(get_product_repository())


def get_create_product_use_case() -> CreateProductUseCase:
    return CreateProductUseCase(get_product_repository())


def get_update_product_use_case() -> UpdateProductUseCase:
    return UpdateProductUseCase(get_product_repository())


def get_delete_product_use_case() -> DeleteProductUseCase:
    return DeleteProductUseCase(get_product_repository())


# =============================================================================
# Tests
# =============================================================================

_CACHED_FACTORIES = (
    get_user_repository,
    get_order_repository,
    get_product_repository,
    get_token_verifier,
    get_authorization_gate,
)


def reset_container() -> None:
    """Descarta los singletons (tests / cambio de Settings)."""
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()
