"""Pydantic models for auth domain."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class User(BaseModel):
    """A registered user of the dashboard."""

    id: UUID
    email: EmailStr
    password_hash: str = Field(..., repr=False)
    is_active: bool = True
    created_at: datetime
    last_login_at: datetime | None = None

    model_config = {"from_attributes": True}


class Session(BaseModel):
    """An active user session."""

    token: str = Field(..., description="Session token (opaque string)")
    user_id: UUID
    created_at: datetime
    expires_at: datetime
    last_activity_at: datetime


class Credentials(BaseModel):
    """Email/password pair submitted by the login form."""

    email: EmailStr
    password: str = Field(..., min_length=6, repr=False)


class AuthenticatedUser(BaseModel):
    """User info returned after successful authentication."""

    user: User
    session: Session
