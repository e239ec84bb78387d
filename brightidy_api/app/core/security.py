"""
Security helpers for password hashing and bearer-token sessions.

Passwords are hashed with scrypt, a memory-hard key derivation
function, using a random per-user salt.  The stored string contains
the salt and the derived key separated by ``$`` (salt in hex, then
hash in hex).

Sessions are opaque random tokens kept in a ``SessionStore``.  The
store lives in process memory only: restarting the server logs every
user out.  One store is created per application by ``create_app`` and
reached from request handlers through the ``get_sessions`` dependency.
"""

import hashlib
import hmac
import os
import secrets
from typing import Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .db import JsonStore
from .errors import UnauthenticatedError

_SCRYPT_N = 2 ** 14
_SCRYPT_R = 8
_SCRYPT_P = 1


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        dklen=32,
    )


def hash_password(password: str) -> str:
    """Hash a password using scrypt with a 16-byte random salt.

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.
    """
    salt = os.urandom(16)
    return f"{salt.hex()}${_derive(password, salt).hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Returns ``False`` for a malformed stored value instead of raising.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(_derive(plain_password, salt), stored_hash)


def generate_token() -> str:
    """Return 256 bits of randomness as a 64 character hex string."""
    return secrets.token_hex(32)


class SessionStore:
    """In-memory mapping from session token to username."""

    def __init__(self) -> None:
        self._sessions: Dict[str, str] = {}

    def create(self, username: str) -> str:
        token = generate_token()
        self._sessions[token] = username
        return token

    def resolve(self, token: str) -> Optional[str]:
        return self._sessions.get(token)

    def revoke(self, token: str) -> None:
        self._sessions.pop(token, None)

    def __len__(self) -> int:
        return len(self._sessions)


security = HTTPBearer(auto_error=False)


def get_store(request: Request) -> JsonStore:
    return request.app.state.store


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> str:
    """Extract the bearer token from the ``Authorization`` header.

    The scheme is matched case-insensitively.  A missing header or a
    non-Bearer scheme raises ``UnauthenticatedError``.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_token),
    store: JsonStore = Depends(get_store),
    sessions: SessionStore = Depends(get_sessions),
) -> Dict[str, object]:
    """Dependency that resolves the bearer token to a stored user.

    Raises ``UnauthenticatedError`` if the token is unknown or the user
    it points to is no longer in the database.
    """
    username = sessions.resolve(token)
    if username is None:
        raise UnauthenticatedError()
    db = store.load()
    user = next((u for u in db["users"] if u["username"] == username), None)
    if user is None:
        raise UnauthenticatedError()
    return user
