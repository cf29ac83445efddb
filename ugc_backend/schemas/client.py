"""Schemas for /api/clients."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import AnyHttpUrl, BaseModel, EmailStr, Field, field_validator

from ugc_backend.models.enums import CampaignStatus, ClientStatus
from ugc_backend.schemas.common import PaginationMeta, reject_null


class ClientCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=50)
    company: Optional[str] = Field(default=None, max_length=255)
    website: Optional[AnyHttpUrl] = None
    notes: Optional[str] = None


class ClientUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    company: Optional[str] = Field(default=None, max_length=255)
    website: Optional[AnyHttpUrl] = None
    notes: Optional[str] = None
    status: Optional[ClientStatus] = None

    @field_validator("name", "email", "status")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class ClientResponse(BaseModel):
    id: str
    organization_id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    status: ClientStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientListItem(ClientResponse):
    campaign_count: int = 0


class ClientListResponse(BaseModel):
    clients: List[ClientListItem]
    pagination: PaginationMeta


class ClientCampaignItem(BaseModel):
    id: str
    title: str
    status: CampaignStatus
    budget: Optional[float] = None
    deadline: Optional[datetime] = None
    created_at: datetime
    order_count: int = 0


class ClientDetailResponse(ClientResponse):
    campaigns: List[ClientCampaignItem] = Field(description="10 most recent campaigns")


class ClientCreatorItem(BaseModel):
    id: str
    name: str
    email: str
    image: Optional[str] = None
    order_count: int = Field(description="Orders this creator holds on the client's campaigns")
    order_stats: Dict[str, int] = Field(description="Order count by status")


class ClientCreatorsResponse(BaseModel):
    creators: List[ClientCreatorItem]
