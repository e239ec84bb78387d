"""
Pydantic models for user data.

Request models keep every field optional so that the service layer can
report missing values with its own messages, in the order the
operations define.  ``UserRead`` is the public view of an account; the
password hash never leaves the server.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

ROLES = ("client", "cleaner", "admin")


class UserCreate(BaseModel):
    """Schema for registering a user."""

    username: Optional[str] = Field(None, examples=["alice"])
    password: Optional[str] = Field(None, examples=["pw1"])
    role: Optional[str] = Field(None, examples=["client"], description="One of client, cleaner or admin")


class UserLogin(BaseModel):
    username: Optional[str] = Field(None, examples=["alice"])
    password: Optional[str] = Field(None, examples=["pw1"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    username: str
    role: str


class LoginResponse(BaseModel):
    token: str
    user: UserRead


class CleanerList(BaseModel):
    cleaners: List[UserRead]


class StatusMessage(BaseModel):
    message: str
