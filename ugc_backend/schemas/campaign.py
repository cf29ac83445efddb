"""Schemas for /api/campaigns and the orders nested under a campaign."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ugc_backend.models.enums import CampaignStatus, MediaStatus, MediaType, OrderStatus
from ugc_backend.schemas.common import PaginationMeta, reject_null
from ugc_backend.schemas.user import UserSummary


class CampaignRequirements(BaseModel):
    content_type: List[str] = Field(default_factory=list)
    platform: List[str] = Field(default_factory=list)
    deliverables: List[str] = Field(default_factory=list)
    guidelines: Optional[str] = None


class CampaignCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    brief: str = Field(min_length=1)
    client_id: str
    requirements: Optional[CampaignRequirements] = None
    budget: Optional[float] = Field(default=None, ge=0)
    deadline: Optional[datetime] = None


class CampaignUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    brief: Optional[str] = Field(default=None, min_length=1)
    client_id: Optional[str] = None
    status: Optional[CampaignStatus] = None
    requirements: Optional[CampaignRequirements] = None
    budget: Optional[float] = Field(default=None, ge=0)
    deadline: Optional[datetime] = None

    @field_validator("title", "brief", "client_id", "status")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class AssignCreatorRequest(BaseModel):
    creator_id: str
    notes: Optional[str] = None


class OrderUpdateRequest(BaseModel):
    status: Optional[OrderStatus] = None
    notes: Optional[str] = None


class ClientRef(BaseModel):
    id: str
    name: str
    company: Optional[str] = None
    email: str

    model_config = {"from_attributes": True}


class CampaignResponse(BaseModel):
    id: str
    organization_id: str
    client_id: str
    created_by_id: Optional[str] = None
    title: str
    brief: str
    status: CampaignStatus
    budget: Optional[float] = None
    deadline: Optional[datetime] = None
    requirements: Optional[dict] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CampaignListItem(CampaignResponse):
    client: ClientRef
    order_count: int = 0


class CampaignListResponse(BaseModel):
    campaigns: List[CampaignListItem]
    pagination: PaginationMeta


class OrderResponse(BaseModel):
    id: str
    campaign_id: str
    creator_id: str
    status: OrderStatus
    notes: Optional[str] = None
    assigned_at: datetime
    submitted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CampaignOrderItem(OrderResponse):
    creator: UserSummary
    media_count: int = 0


class CampaignMediaItem(BaseModel):
    id: str
    url: str
    filename: str
    type: MediaType
    status: MediaStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class CampaignDetailResponse(CampaignResponse):
    client: ClientRef
    created_by: Optional[UserSummary] = None
    orders: List[CampaignOrderItem]
    media: List[CampaignMediaItem] = Field(description="10 most recent media items")
