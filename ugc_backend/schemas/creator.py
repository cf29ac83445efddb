"""Schemas for /api/creators (users with role CREATOR)."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from ugc_backend.models.enums import OrderStatus
from ugc_backend.schemas.common import PaginationMeta, reject_null
from ugc_backend.schemas.user import UserResponse


class CreatorCreateRequest(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    bio: Optional[str] = Field(default=None, max_length=5000)


class CreatorUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    bio: Optional[str] = Field(default=None, max_length=5000)
    image: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class CreatorListItem(UserResponse):
    order_count: int = 0
    completed_orders: int = 0


class CreatorListResponse(BaseModel):
    creators: List[CreatorListItem]
    pagination: PaginationMeta


class CreatorOrderItem(BaseModel):
    id: str
    campaign_id: str
    campaign_title: str
    status: OrderStatus
    assigned_at: datetime
    submitted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class CreatorDetailResponse(UserResponse):
    orders: List[CreatorOrderItem] = Field(description="10 most recent orders")
    completed_orders: int
    active_orders: int = Field(description="Orders in NEW, IN_PROGRESS or SUBMITTED")


class AvailabilityResponse(BaseModel):
    creator_id: str
    days_per_week: int = 5
    hours_per_day: int = 8
    active_orders: List[CreatorOrderItem]


class CreatorStatsResponse(BaseModel):
    period: str
    since: datetime
    orders_by_status: Dict[str, int]
    media_by_status: Dict[str, int]
    total_orders: int
    total_earnings: float = 0
