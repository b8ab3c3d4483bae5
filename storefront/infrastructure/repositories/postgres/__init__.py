"""
PostgreSQL Repository Implementations.

Raw parameterized SQL over the process-wide psycopg pool.
"""

from .order import PostgresOrderRepository
from .product import PostgresProductRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresOrderRepository",
    "PostgresProductRepository",
    "PostgresUserRepository",
]
