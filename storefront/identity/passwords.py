"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hashing de passwords (Argon2)

Responsabilidades:
    - Hashear passwords con sal (Argon2id).
    - Verificar password vs hash almacenado sin lanzar por mismatch.

Colaboradores:
    - application/usecases/auth: signup (hash) y login (verify).
    - scripts/create_admin.py, application/dev_seed_admin.py.

Notas:
    - Nunca se comparan passwords en texto plano.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False
