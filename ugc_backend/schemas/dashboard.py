"""Schemas for /api/dashboard."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ugc_backend.models.enums import CampaignStatus, ClientStatus, OrderStatus


class CampaignCounts(BaseModel):
    total: int
    active: int


class ClientCounts(BaseModel):
    total: int
    active: int


class CreatorCounts(BaseModel):
    total: int


class OrderCounts(BaseModel):
    total: int
    in_progress: int
    completed: int


class RevenueSummary(BaseModel):
    total: float


class DashboardStatsResponse(BaseModel):
    organization_id: str
    campaigns: CampaignCounts
    clients: ClientCounts
    creators: CreatorCounts
    orders: OrderCounts
    revenue: RevenueSummary


class RecentCampaign(BaseModel):
    id: str
    title: str
    status: CampaignStatus
    client_name: str
    created_at: datetime


class RecentOrder(BaseModel):
    id: str
    status: OrderStatus
    campaign_id: str
    campaign_title: str
    creator_name: str
    created_at: datetime


class RecentClient(BaseModel):
    id: str
    name: str
    company: Optional[str] = None
    status: ClientStatus
    created_at: datetime


class DashboardActivitiesResponse(BaseModel):
    recent_campaigns: List[RecentCampaign]
    recent_orders: List[RecentOrder]
    recent_clients: List[RecentClient]
