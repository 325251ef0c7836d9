"""Pydantic schemas for authentication endpoints"""

from pydantic import BaseModel, EmailStr, Field
from uuid import UUID
from datetime import datetime
from typing import List, Optional


class LoginRequest(BaseModel):
    """Request schema for user login.

    Attributes:
        email: User's email address (unique across organizations)
        password: User's password (plain text, verified against hash)
    """
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Response schema for successful login."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = 3600


class UserResponse(BaseModel):
    """User information response (excludes password_hash)."""
    id: UUID
    organization_id: Optional[UUID]
    email: str
    name: str
    roles: List[str] = Field(validation_alias="role_names")
    status: str
    last_login_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MeResponse(BaseModel):
    """Response schema for GET /auth/me endpoint."""
    user: UserResponse
