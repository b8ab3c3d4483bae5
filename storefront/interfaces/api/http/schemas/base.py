"""
===============================================================================
TARJETA CRC — schemas/base.py
===============================================================================

Responsabilidades:
    - Config común de DTOs: camelCase en el JSON, snake_case en Python.
    - Aceptar números donde el contrato es string (ej: phoneNo numérico).
===============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )
