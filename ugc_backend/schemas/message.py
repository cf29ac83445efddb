"""Schemas for /api/messages."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ugc_backend.models.enums import CampaignStatus
from ugc_backend.schemas.campaign import ClientRef
from ugc_backend.schemas.user import UserSummary


class Attachment(BaseModel):
    url: str
    filename: str
    size: int = Field(ge=0)
    type: str


class MessageCreateRequest(BaseModel):
    campaign_id: str
    content: str = Field(min_length=1, max_length=5000)
    attachments: Optional[List[Attachment]] = None


class MessageUpdateRequest(BaseModel):
    content: str = Field(min_length=1, max_length=5000)


class MessageResponse(BaseModel):
    id: str
    campaign_id: str
    sender_id: str
    content: str
    attachments: Optional[List[dict]] = None
    edited_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    sender: UserSummary

    model_config = {"from_attributes": True}


class ThreadCampaign(BaseModel):
    id: str
    title: str
    status: CampaignStatus

    model_config = {"from_attributes": True}


class CampaignMessagesResponse(BaseModel):
    messages: List[MessageResponse] = Field(description="Oldest first")
    campaign: ThreadCampaign


class MessageCampaignItem(ThreadCampaign):
    client: ClientRef
    message_count: int
    updated_at: datetime


class MessageCampaignListResponse(BaseModel):
    campaigns: List[MessageCampaignItem]
