"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
  - Resolver el pool (inyectado en tests; del container en producción).
  - Ejecutar SQL parametrizado con manejo de errores consistente:
    logger.exception + StoreUnavailableError.

Collaborators:
  - psycopg_pool.ConnectionPool / InstrumentedConnectionPool
  - crosscutting.exceptions.StoreUnavailableError
  - crosscutting.logger.logger

Constraints:
  - Queries siempre parametrizadas (nada de interpolación de input de usuario).
  - Un statement por conexión adquirida (autocommit al salir del context).
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import StoreUnavailableError
from ....crosscutting.logger import logger


class PostgresRepositoryBase:
    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Pool inyectable para tests; en producción lo provee el container.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except StoreUnavailableError:
            logger.exception(context_msg, extra=extra)
            raise
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise StoreUnavailableError(
                f"{context_msg}: {exc}", original_error=exc
            ) from exc

    def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        context_msg: str,
        extra: dict,
    ) -> list[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except StoreUnavailableError:
            logger.exception(context_msg, extra=extra)
            raise
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise StoreUnavailableError(
                f"{context_msg}: {exc}", original_error=exc
            ) from exc

    def _execute(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        """Ejecuta un statement sin resultado y devuelve rowcount."""
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                cursor = conn.execute(query, tuple(params))
                return cursor.rowcount or 0
        except StoreUnavailableError:
            logger.exception(context_msg, extra=extra)
            raise
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise StoreUnavailableError(
                f"{context_msg}: {exc}", original_error=exc
            ) from exc
