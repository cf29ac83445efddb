"""Request/response schemas for /api/auth."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ugc_backend.schemas.user import UserResponse


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str = Field(min_length=1, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    # When set, a new organization is created with the user as OWNER
    organization_name: Optional[str] = Field(default=None, min_length=1, max_length=255)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class AuthResponse(BaseModel):
    """Returned by sign-up and sign-in: a bearer token plus the user."""
    token: str = Field(description="Bearer token for the Authorization header")
    user: UserResponse
    organization_id: Optional[str] = Field(
        default=None, description="First organization the user belongs to, if any"
    )


class MeResponse(BaseModel):
    user: UserResponse
    organization_id: Optional[str] = None
