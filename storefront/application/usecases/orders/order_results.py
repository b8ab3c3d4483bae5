"""
===============================================================================
ORDER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Order Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados y errores para los casos de uso
    de órdenes, con un contrato estable para:
      - validaciones de checkout
      - ownership (solo el dueño cancela)
      - transiciones inválidas del state machine
      - recursos no encontrados

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    order_results models (module)

Responsibilities:
    - Definir OrderErrorCode (categorías estables, no mensajes).
    - Representar OrderError (code + message).
    - Representar resultados: OrderResult, OrderListResult.

Collaborators:
    - domain.entities.Order
    - interfaces/api/http/error_mapping (code -> status HTTP)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List
from uuid import UUID

from ....domain.entities import Order, Product
from ....identity.users import User


class OrderErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: datos de checkout faltantes o inválidos (400).
      - NOT_FOUND: la orden no existe (404).
      - OWNERSHIP_VIOLATION: el actor no es dueño de la orden (403).
      - INVALID_TRANSITION: el estado actual no admite la transición (400).
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    OWNERSHIP_VIOLATION = "OWNERSHIP_VIOLATION"
    INVALID_TRANSITION = "INVALID_TRANSITION"


@dataclass(frozen=True)
class OrderError:
    code: OrderErrorCode
    message: str


@dataclass
class OrderResult:
    """
    Contrato:
      - error is None => order presente (éxito)
      - error != None => order None (fallo)
    """

    order: Order | None = None
    error: OrderError | None = None


@dataclass
class OrderListResult:
    """owners / products: datos poblados por id (ausentes si fueron borrados)."""

    orders: List[Order]
    owners: Dict[UUID, User] = field(default_factory=dict)
    products: Dict[UUID, Product] = field(default_factory=dict)
    error: OrderError | None = None
