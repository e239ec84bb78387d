"""
Account endpoints.

Provide registration, login, logout and the public list of cleaners.
Only logout requires a bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from brightidy_api.app.core.db import JsonStore
from brightidy_api.app.core.security import SessionStore, get_current_user, get_sessions, get_store, get_token
from brightidy_api.app.schemas.user import CleanerList, LoginResponse, StatusMessage, UserCreate, UserLogin
from brightidy_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=StatusMessage, status_code=status.HTTP_201_CREATED)
async def register_user(user: Optional[UserCreate] = None, store: JsonStore = Depends(get_store)) -> StatusMessage:
    """Register a new client, cleaner or admin account."""
    await UserService.create_user(store, user or UserCreate())
    return StatusMessage(message="User created")


@router.post("/login", response_model=LoginResponse)
async def login_user(
    credentials: Optional[UserLogin] = None,
    store: JsonStore = Depends(get_store),
    sessions: SessionStore = Depends(get_sessions),
) -> LoginResponse:
    """Authenticate a user and return a session token.

    The token must be sent back as ``Authorization: Bearer <token>`` on
    protected routes.  It stays valid until logout or server restart.
    """
    return await UserService.login(store, sessions, credentials or UserLogin())


@router.post("/logout", response_model=StatusMessage)
async def logout_user(
    token: str = Depends(get_token),
    current_user: dict = Depends(get_current_user),
    sessions: SessionStore = Depends(get_sessions),
) -> StatusMessage:
    await UserService.logout(sessions, token)
    return StatusMessage(message="Logged out")


@router.get("/cleaners", response_model=CleanerList)
async def list_cleaners(store: JsonStore = Depends(get_store)) -> CleanerList:
    """List every registered cleaner.  Public."""
    return CleanerList(cleaners=await UserService.list_cleaners(store))
