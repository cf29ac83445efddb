"""Schemas for /api/organizations."""

from datetime import datetime
from typing import List, Optional

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator

from ugc_backend.models.enums import MemberRole
from ugc_backend.schemas.common import PaginationMeta, reject_null
from ugc_backend.schemas.user import UserSummary

SLUG_PATTERN = r"^[a-z0-9-]+$"


class OrganizationCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=3, max_length=100, pattern=SLUG_PATTERN)
    logo: Optional[AnyHttpUrl] = None


class OrganizationUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, min_length=3, max_length=100, pattern=SLUG_PATTERN)
    logo: Optional[AnyHttpUrl] = None

    @field_validator("name", "slug")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class InviteMemberRequest(BaseModel):
    # Plain str: invited users must already exist, so no need to validate deliverability
    email: str = Field(min_length=3, max_length=255)
    role: MemberRole = MemberRole.MEMBER


class OrganizationResponse(BaseModel):
    id: str
    name: str
    slug: str
    logo: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrganizationCounts(BaseModel):
    members: int = 0
    campaigns: int = 0
    clients: int = 0


class OrganizationListItem(OrganizationResponse):
    user_role: MemberRole = Field(description="The caller's role in this organization")
    counts: OrganizationCounts


class OrganizationListResponse(BaseModel):
    organizations: List[OrganizationListItem]
    pagination: PaginationMeta


class CurrentOrganizationResponse(BaseModel):
    organization: OrganizationResponse
    user_role: MemberRole


class MemberResponse(BaseModel):
    id: str
    organization_id: str
    role: MemberRole
    joined_at: datetime
    user: UserSummary

    model_config = {"from_attributes": True}


class MemberListResponse(BaseModel):
    members: List[MemberResponse]
