"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del Pool/Conectividad

Responsabilidades:
  - Dar semántica clara al ciclo de vida del pool: "no inicializado",
    "ya inicializado", "no se pudo adquirir conexión".
  - Ser StoreUnavailableError, así el borde HTTP los mapea a 500 genérico.
===============================================================================
"""

from ...crosscutting.exceptions import StoreUnavailableError


class DatabasePoolError(StoreUnavailableError):
    """Base de errores de pool de base de datos."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """Se intentó inicializar el pool más de una vez."""


class PoolNotInitializedError(DatabasePoolError):
    """Se intentó usar el pool sin init_pool()."""


class DatabaseConnectionError(DatabasePoolError):
    """Error al adquirir o validar una conexión del pool."""
