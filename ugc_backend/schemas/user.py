"""
User-facing schemas: the public user shape plus profile and role changes.

The user shape is an explicit, fixed set of fields; there are no
role-dependent extra attributes.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ugc_backend.models.enums import UserRole
from ugc_backend.schemas.common import reject_null


class UserSummary(BaseModel):
    """Compact user reference embedded in other resources (sender, creator...)."""
    id: str
    name: str
    email: str
    image: Optional[str] = None

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    """
    Public representation of a user. Never includes the password hash.
    """
    id: str = Field(description="User ID")
    email: str = Field(description="Sign-in email")
    name: str = Field(description="Display name")
    role: UserRole = Field(description="Global role: ADMIN, STAFF, CREATOR, CLIENT")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    image: Optional[str] = None
    email_verified: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class ProfileUpdateRequest(BaseModel):
    """PATCH /api/users/profile. Only the fields sent are changed."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    bio: Optional[str] = Field(default=None, max_length=5000)
    image: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class SwitchRoleRequest(BaseModel):
    """
    POST /api/users/switch-role.

    `role` stays a plain string so an unknown value is answered with the
    400 "Invalid role" business error rather than a schema error.
    """
    role: str
    user_id: Optional[str] = Field(default=None, description="Target user; defaults to the caller")
