"""
===============================================================================
TARJETA CRC — identity/dependencies.py
===============================================================================

Módulo:
    Dependencias FastAPI del Authorization Gate

Responsabilidades:
    - require_identity(): requiere credencial válida e identidad existente.
    - require_role(role): además exige el rol (igualdad estricta).
    - require_metrics_access(): admin en /metrics cuando está configurado.
    - Adjuntar la identidad a request.state.identity.

Colaboradores:
    - container.get_authorization_gate (gate singleton)
    - identity.gate.AuthorizationGate

Notas:
    - AuthError se propaga tal cual; api/exception_handlers lo mapea a JSON
      con el status del código (401 / 403 / 500).
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Request

from ..container import get_authorization_gate
from ..crosscutting.config import get_settings
from .gate import AuthorizationGate
from .users import Identity, UserRole


def require_identity() -> Callable:
    """Dependency FastAPI: requiere un usuario autenticado."""

    async def dependency(
        request: Request,
        gate: AuthorizationGate = Depends(get_authorization_gate),
    ) -> Identity:
        identity = gate.authorize(request.headers)
        request.state.identity = identity
        return identity

    return dependency


def require_role(role: UserRole | str) -> Callable:
    """Dependency FastAPI: requiere un rol específico."""
    required_role = UserRole(role)

    async def dependency(
        request: Request,
        gate: AuthorizationGate = Depends(get_authorization_gate),
    ) -> Identity:
        identity = gate.authorize(request.headers, required_role=required_role)
        request.state.identity = identity
        return identity

    return dependency


def require_metrics_access() -> Callable:
    """Dependency FastAPI: /metrics exige admin solo si METRICS_REQUIRE_ADMIN."""

    async def dependency(
        request: Request,
        gate: AuthorizationGate = Depends(get_authorization_gate),
    ) -> Identity | None:
        if not get_settings().metrics_require_admin:
            return None
        identity = gate.authorize(request.headers, required_role=UserRole.ADMIN)
        request.state.identity = identity
        return identity

    return dependency
