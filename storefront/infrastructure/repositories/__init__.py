"""
============================================================
TARJETA CRC
============================================================
Package: storefront.infrastructure.repositories

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo)
- Repositorios InMemory (testing / local dev)
============================================================
"""

from .in_memory import (
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresOrderRepository,
    PostgresProductRepository,
    PostgresUserRepository,
)

__all__ = [
    # Postgres
    "PostgresOrderRepository",
    "PostgresProductRepository",
    "PostgresUserRepository",
    # In-memory
    "InMemoryOrderRepository",
    "InMemoryProductRepository",
    "InMemoryUserRepository",
]
