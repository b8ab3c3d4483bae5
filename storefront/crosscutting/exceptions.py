# storefront/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  StorefrontError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - infrastructure/repositories/postgres/* (lanzan StoreUnavailableError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class StorefrontError(Exception):
    """Base para errores internos del sistema (error_code + error_id + message)."""

    error_code: str = "STOREFRONT_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class StoreUnavailableError(StorefrontError):
    """Errores del store de persistencia (conexión, query, timeout, pool)."""

    error_code: str = "STORE_UNAVAILABLE"
