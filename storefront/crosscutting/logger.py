"""
===============================================================================
TARJETA CRC — crosscutting/logger.py (Logs JSON del Storefront)
===============================================================================

Responsabilidades:
  - Emitir una línea JSON por evento (parseable por el agregador de logs).
  - Sumar el contexto del request en curso: request_id, method, path, user_id.
  - Nunca volcar credenciales ni datos de entrega del comprador:
      * secretos: password*, *_token, authorization, x-auth-token, jwt_secret...
      * PII de checkout: phone, shipping_address
  - Acotar el tamaño de cada valor (strings largos, estructuras profundas).

Colaboradores:
  - storefront/context.py: ContextVars del request
  - crosscutting/config.py: LOG_LEVEL / LOG_JSON

Notas:
  - El stacktrace se loguea completo server-side; las respuestas HTTP no lo
    incluyen (ver api/exception_handlers.py).
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

SERVICE_NAME = "storefront"

REDACTED = "***REDACTADO***"
TRUNCATED = "***TRUNCADO***"

# Atributos estándar de LogRecord; el resto viene de `extra=`.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class LogRedactor:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      LogRedactor

    Responsabilidades:
      - Decidir por nombre de clave si un valor es sensible
      - Recortar valores grandes y normalizar a tipos serializables
    ----------------------------------------------------------------------------
    """

    SENSITIVE_KEYS = frozenset(
        {
            "authorization",
            "x-auth-token",
            "credential",
            "secret",
            "jwt_secret",
            "database_url",
            "phone",
            "phone_no",
            "shipping_address",
        }
    )
    SENSITIVE_PREFIXES = ("password", "passwd")
    SENSITIVE_SUFFIXES = ("token", "_secret")

    def __init__(self, max_str: int = 4_000, max_depth: int = 4):
        self._max_str = max_str
        self._max_depth = max_depth

    def is_sensitive(self, key: str) -> bool:
        lowered = key.lower()
        return (
            lowered in self.SENSITIVE_KEYS
            or lowered.startswith(self.SENSITIVE_PREFIXES)
            or lowered.endswith(self.SENSITIVE_SUFFIXES)
        )

    def sanitize(self, value: Any, *, key: str | None = None, depth: int = 0) -> Any:
        if key is not None and self.is_sensitive(key):
            return REDACTED
        if depth > self._max_depth:
            return TRUNCATED

        if isinstance(value, str):
            if len(value) > self._max_str:
                return value[: self._max_str] + "…(truncado)"
            return value
        if isinstance(value, (bytes, bytearray)):
            return f"<bytes {len(value)}B>"
        if isinstance(value, dict):
            return {
                str(k): self.sanitize(v, key=str(k), depth=depth + 1)
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.sanitize(v, key=key, depth=depth + 1) for v in value]
        if value is None or isinstance(value, (bool, int, float)):
            return value
        # UUID, Decimal, datetime, enums: a texto
        return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON con contexto del request y extras redactados."""

    def __init__(self, redactor: LogRedactor | None = None):
        super().__init__()
        self._redactor = redactor or LogRedactor()

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
            "pid": os.getpid(),
        }
        payload.update(get_context_dict())

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                payload[key] = self._redactor.sanitize(value, key=key)

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "stacktrace": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )


def setup_logger(name: str = SERVICE_NAME) -> logging.Logger:
    """
    Logger del servicio, configurado una sola vez por proceso.

    LOG_JSON=false cambia a un formato de texto para desarrollo local.
    """
    from .config import get_settings

    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if settings.log_json
            else logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
