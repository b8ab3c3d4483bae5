"""
Name: Database Pool Tests

Responsibilities:
  - Test pool lifecycle (init, get, close, reset)
  - Test the instrumented connection facade (healthcheck, acquire errors)
  - Offline unit tests (no real DB)

Notes:
  - Uses mocking for ConnectionPool
"""

from unittest.mock import MagicMock, patch

import pytest

from storefront.crosscutting.exceptions import StoreUnavailableError
from storefront.infrastructure.db.errors import (
    DatabaseConnectionError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from storefront.infrastructure.db.instrumentation import (
    InstrumentedConnectionPool,
    TimedConnection,
)


@pytest.mark.unit
class TestPoolLifecycle:
    """Test pool initialization and cleanup."""

    def test_init_pool_wraps_connection_pool(self):
        from storefront.infrastructure.db.pool import get_pool, init_pool

        with patch("storefront.infrastructure.db.pool.ConnectionPool") as MockPool:
            result = init_pool("postgresql://test", min_size=2, max_size=10)

            MockPool.assert_called_once()
            kwargs = MockPool.call_args.kwargs
            assert kwargs["conninfo"] == "postgresql://test"
            assert kwargs["min_size"] == 2
            assert kwargs["max_size"] == 10
            assert isinstance(result, InstrumentedConnectionPool)
            assert get_pool() is result

    def test_init_pool_twice_raises_error(self):
        from storefront.infrastructure.db.pool import init_pool

        with patch("storefront.infrastructure.db.pool.ConnectionPool"):
            init_pool("postgresql://test", min_size=1, max_size=2)

            with pytest.raises(PoolAlreadyInitializedError):
                init_pool("postgresql://test", min_size=1, max_size=2)

    def test_get_pool_without_init_raises_error(self):
        from storefront.infrastructure.db.pool import get_pool

        with pytest.raises(PoolNotInitializedError):
            get_pool()

    def test_pool_errors_are_store_unavailable(self):
        assert issubclass(PoolNotInitializedError, StoreUnavailableError)

    def test_close_pool_is_idempotent(self):
        from storefront.infrastructure.db.pool import close_pool, get_pool, init_pool

        with patch("storefront.infrastructure.db.pool.ConnectionPool") as MockPool:
            mock_pool = MagicMock()
            MockPool.return_value = mock_pool

            init_pool("postgresql://test", min_size=2, max_size=10)
            close_pool()
            close_pool()

            mock_pool.close.assert_called_once()
            with pytest.raises(PoolNotInitializedError):
                get_pool()


@pytest.mark.unit
class TestInstrumentedPool:
    def _pool(self, conn, *, healthcheck=True):
        inner = MagicMock()
        inner.connection.return_value.__enter__.return_value = conn
        inner.connection.return_value.__exit__.return_value = False
        return inner, InstrumentedConnectionPool(
            inner, slow_query_seconds=10.0, healthcheck=healthcheck
        )

    def test_connection_is_timed_and_healthchecked(self):
        conn = MagicMock()
        _, pool = self._pool(conn)

        with pool.connection() as timed:
            assert isinstance(timed, TimedConnection)
            timed.execute("SELECT * FROM orders")

        calls = [c.args[0] for c in conn.execute.call_args_list]
        assert calls == ["SELECT 1", "SELECT * FROM orders"]

    def test_failed_healthcheck_raises_connection_error(self):
        conn = MagicMock()
        conn.execute.side_effect = RuntimeError("server closed the connection")
        inner, pool = self._pool(conn)

        with pytest.raises(DatabaseConnectionError):
            with pool.connection():
                pass

        inner.connection.return_value.__exit__.assert_called_once()

    def test_acquire_failure_raises_connection_error(self):
        inner = MagicMock()
        inner.connection.return_value.__enter__.side_effect = TimeoutError("pool")
        pool = InstrumentedConnectionPool(inner, slow_query_seconds=1.0, healthcheck=False)

        with pytest.raises(DatabaseConnectionError):
            with pool.connection():
                pass
