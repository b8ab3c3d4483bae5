"""Router HTTP de usuarios (listado admin)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.application.usecases.auth import ListUsersUseCase
from storefront.container import get_list_users_use_case
from storefront.identity.dependencies import require_role
from storefront.identity.users import Identity, UserRole

from ..schemas.auth import UserDetailRes, UsersListRes

router = APIRouter()


@router.get("/users", response_model=UsersListRes, tags=["users"])
def list_users(
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
    _admin: Identity = Depends(require_role(UserRole.ADMIN)),
):
    result = use_case.execute()
    return UsersListRes(data=[UserDetailRes.from_user(u) for u in result.users])
