"""
===============================================================================
TARJETA CRC — routers/auth.py
===============================================================================

Módulo:
    Router HTTP de autenticación (signup / login / me)

Responsabilidades:
    - POST /auth/signup: alta de cliente (rol siempre customer).
    - POST /auth/login: emite un access token firmado.
    - GET /auth/me: devuelve la identidad resuelta por el gate.

Notas:
    - Login no distingue "usuario inexistente" de "password incorrecto".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.application.usecases.auth import LoginUseCase, SignupUseCase
from storefront.container import get_login_use_case, get_signup_use_case
from storefront.identity.dependencies import require_identity
from storefront.identity.users import Identity

from ..error_mapping import raise_auth_use_case_error
from ..schemas.auth import CredentialsReq, LoginRes, MeRes, SignupRes, UserRes

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupRes, status_code=201)
def signup(
    req: CredentialsReq,
    use_case: SignupUseCase = Depends(get_signup_use_case),
):
    result = use_case.execute(req.email, req.password)
    if result.error is not None:
        raise_auth_use_case_error(result.error)
    return SignupRes(user=UserRes.from_identity(result.user))


@router.post("/login", response_model=LoginRes)
def login(
    req: CredentialsReq,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    result = use_case.execute(req.email, req.password)
    if result.error is not None:
        raise_auth_use_case_error(result.error)
    return LoginRes(
        token=result.token,
        expires_in=result.expires_in,
        user=UserRes.from_identity(result.identity),
    )


@router.get("/me", response_model=MeRes)
def me(identity: Identity = Depends(require_identity())):
    return MeRes(user=UserRes.from_identity(identity))
