"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus)

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO order_id, NO SQL completo).
    - Exponer helpers para generar la respuesta /metrics.

Colaboradores:
    - crosscutting.middleware: registra latencia y conteo HTTP.
    - identity.gate: registra rechazos de autorización por código.
    - application/usecases/orders: registra transiciones de estado.
    - infrastructure/db/instrumentation: observa duración de queries.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# -----------------------------------------------------------------------------
# HTTP
# -----------------------------------------------------------------------------
_requests_total = Counter(
    "storefront_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "storefront_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

# -----------------------------------------------------------------------------
# Autorización y órdenes
# -----------------------------------------------------------------------------
_auth_failures_total = Counter(
    "storefront_auth_failures_total",
    "Rechazos del Authorization Gate por código",
    ["code"],
    registry=_registry,
)

_order_transitions_total = Counter(
    "storefront_order_transitions_total",
    "Transiciones de estado de órdenes",
    ["target", "outcome"],
    registry=_registry,
)

# -----------------------------------------------------------------------------
# DB (baja cardinalidad)
# -----------------------------------------------------------------------------
_db_query_duration = Histogram(
    "storefront_db_query_duration_seconds",
    "Duración de queries a Postgres (segundos)",
    ["kind"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=_registry,
)


def record_request_metrics(
    endpoint: str, method: str, status_code: int, latency_seconds: float
) -> None:
    """Registra conteo y latencia de un request HTTP."""
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized, method=method, status=_status_bucket(status_code)
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_auth_failure(code: str) -> None:
    _auth_failures_total.labels(code=code).inc()


def record_order_transition(target: str, outcome: str) -> None:
    """outcome: "applied" | "rejected" | "lost_race"."""
    _order_transitions_total.labels(target=target, outcome=outcome).inc()


def observe_db_query_duration(kind: str, seconds: float) -> None:
    """kind: select | insert | update | delete | other."""
    _db_query_duration.labels(kind=kind).observe(seconds)


def _normalize_endpoint(path: str) -> str:
    """Normaliza paths para evitar cardinalidad alta.

    Reemplaza UUIDs e IDs numéricos por `{id}`.
    """
    path = re.sub(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        "{id}",
        path,
        flags=re.IGNORECASE,
    )
    path = re.sub(r"/\d+", "/{id}", path)
    return path


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


# -----------------------------------------------------------------------------
# Exposición del endpoint /metrics
# -----------------------------------------------------------------------------


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
