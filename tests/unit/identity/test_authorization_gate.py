"""
Name: Authorization Gate Tests

Responsibilities:
  - Credential extraction (x-auth-token first, then Bearer)
  - Identity resolution failures (not found / store unavailable)
  - Role check by strict equality
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from storefront.context import get_context_dict
from storefront.crosscutting.exceptions import StoreUnavailableError
from storefront.identity.errors import AuthError, AuthErrorCode
from storefront.identity.gate import AuthorizationGate, extract_credential
from storefront.identity.resolver import IdentityResolver
from storefront.identity.tokens import TokenVerifier, issue_token
from storefront.identity.users import Identity, User, UserRole
from storefront.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit

SECRET = "gate-secret"


def _settings():
    return SimpleNamespace(jwt_secret=SECRET, jwt_access_ttl_minutes=30)


def _stored_user(repo: InMemoryUserRepository, role: UserRole) -> User:
    return repo.create_user(
        User(id=uuid4(), email=f"{role.value}@example.com", password_hash="x", role=role)
    )


def _token(user: User, now: datetime | None = None) -> str:
    token, _ = issue_token(Identity.from_user(user), _settings(), now=now)
    return token


@pytest.fixture
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def gate(repo) -> AuthorizationGate:
    return AuthorizationGate(TokenVerifier(SECRET), IdentityResolver(repo))


# ============================================================================
# extract_credential
# ============================================================================


def test_extract_prefers_legacy_header():
    headers = {"x-auth-token": "legacy", "authorization": "Bearer bearer-token"}
    assert extract_credential(headers) == "legacy"


def test_extract_bearer_case_insensitive_scheme():
    assert extract_credential({"authorization": "bearer abc.def.ghi"}) == "abc.def.ghi"


@pytest.mark.parametrize(
    "value", ["", "Bearer", "Bearer   ", "Basic dXNlcjpwYXNz", "Token abc"]
)
def test_extract_non_bearer_is_missing(value):
    assert extract_credential({"authorization": value}) is None


# ============================================================================
# authorize
# ============================================================================


def test_missing_credential(gate):
    with pytest.raises(AuthError) as excinfo:
        gate.authorize({})

    assert excinfo.value.code == AuthErrorCode.MISSING_CREDENTIAL
    assert excinfo.value.message == "Access denied. No token provided."


def test_authorize_returns_identity_and_sets_context(gate, repo):
    user = _stored_user(repo, UserRole.CUSTOMER)

    identity = gate.authorize({"authorization": f"Bearer {_token(user)}"})

    assert identity == Identity.from_user(user)
    assert get_context_dict()["user_id"] == str(user.id)


def test_deleted_user_is_identity_not_found(gate, repo):
    user = _stored_user(repo, UserRole.CUSTOMER)
    token = _token(user)
    # account removed after the token was issued
    del repo._users[user.id]

    with pytest.raises(AuthError) as excinfo:
        gate.authorize({"x-auth-token": token})

    assert excinfo.value.code == AuthErrorCode.IDENTITY_NOT_FOUND
    assert excinfo.value.status_code == 401


def test_role_mismatch_is_insufficient_privilege(gate, repo):
    user = _stored_user(repo, UserRole.CUSTOMER)

    with pytest.raises(AuthError) as excinfo:
        gate.authorize(
            {"authorization": f"Bearer {_token(user)}"},
            required_role=UserRole.ADMIN,
        )

    assert excinfo.value.code == AuthErrorCode.INSUFFICIENT_PRIVILEGE
    assert excinfo.value.status_code == 403


def test_admin_passes_admin_gate(gate, repo):
    admin = _stored_user(repo, UserRole.ADMIN)

    identity = gate.authorize(
        {"authorization": f"Bearer {_token(admin)}"}, required_role=UserRole.ADMIN
    )

    assert identity.is_admin


def test_expired_token_is_rejected_before_lookup(repo):
    user = _stored_user(repo, UserRole.CUSTOMER)
    token = _token(user, now=datetime.now(timezone.utc) - timedelta(hours=2))
    resolver = MagicMock()
    gate = AuthorizationGate(TokenVerifier(SECRET), resolver)

    with pytest.raises(AuthError) as excinfo:
        gate.authorize({"authorization": f"Bearer {token}"})

    assert excinfo.value.code == AuthErrorCode.EXPIRED
    resolver.resolve.assert_not_called()


# ============================================================================
# IdentityResolver
# ============================================================================


def test_resolver_store_unavailable():
    users = MagicMock()
    users.get_user_by_id.side_effect = StoreUnavailableError("connection refused")

    with pytest.raises(AuthError) as excinfo:
        IdentityResolver(users).resolve(str(uuid4()))

    assert excinfo.value.code == AuthErrorCode.STORE_UNAVAILABLE
    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Database error."


def test_resolver_non_uuid_subject_is_malformed():
    users = MagicMock()

    with pytest.raises(AuthError) as excinfo:
        IdentityResolver(users).resolve("64b7f0c2e4b0a1a2b3c4d5e6")

    assert excinfo.value.code == AuthErrorCode.MALFORMED_TOKEN
    users.get_user_by_id.assert_not_called()
