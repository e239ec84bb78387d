"""
Business logic for users.

The ``UserService`` registers accounts, verifies credentials and
issues session tokens.  Accounts are immutable once created; there is
no profile editing or deletion.
"""

import logging
from typing import List

from ..core.db import JsonStore, next_id
from ..core.errors import AuthError, ConflictError, ValidationError
from ..core.security import SessionStore, hash_password, verify_password
from ..schemas.user import ROLES, LoginResponse, UserCreate, UserLogin, UserRead


def public_user(user: dict) -> UserRead:
    """Project a stored user onto its public view (no password hash)."""
    return UserRead(id=user["id"], username=user["username"], role=user["role"])


class UserService:
    """Service for registering and authenticating users."""

    @classmethod
    async def create_user(cls, store: JsonStore, data: UserCreate) -> UserRead:
        """Register a new account.

        Raises ``ValidationError`` if a field is missing or the role is
        unknown and ``ConflictError`` if the username is already taken.
        """
        logger = logging.getLogger(__name__)
        if not data.username or not data.password or not data.role:
            raise ValidationError("Missing username, password or role")
        if data.role not in ROLES:
            raise ValidationError("Invalid role")
        db = store.load()
        if any(u["username"] == data.username for u in db["users"]):
            raise ConflictError("Username already exists")
        user = {
            "id": next_id(db["users"]),
            "username": data.username,
            "passwordHash": hash_password(data.password),
            "role": data.role,
        }
        db["users"].append(user)
        store.save(db)
        logger.info("Registered %s %s (id %s)", data.role, data.username, user["id"])
        return public_user(user)

    @classmethod
    async def login(cls, store: JsonStore, sessions: SessionStore, data: UserLogin) -> LoginResponse:
        """Check credentials and open a session.

        Unknown usernames and wrong passwords are indistinguishable to
        the caller: both raise ``AuthError`` and issue no token.
        """
        logger = logging.getLogger(__name__)
        if not data.username or not data.password:
            raise ValidationError("Missing username or password")
        db = store.load()
        user = next((u for u in db["users"] if u["username"] == data.username), None)
        if user is None or not verify_password(data.password, user.get("passwordHash", "")):
            logger.warning("Rejected login for %s", data.username)
            raise AuthError("Invalid credentials")
        token = sessions.create(user["username"])
        logger.info("User %s logged in", user["username"])
        return LoginResponse(token=token, user=public_user(user))

    @classmethod
    async def logout(cls, sessions: SessionStore, token: str) -> None:
        sessions.revoke(token)

    @classmethod
    async def list_cleaners(cls, store: JsonStore) -> List[UserRead]:
        """Return every account with the cleaner role."""
        db = store.load()
        return [public_user(u) for u in db["users"] if u["role"] == "cleaner"]
