"""Schemas for /api/media."""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from ugc_backend.models.enums import MediaStatus, MediaType
from ugc_backend.schemas.common import PaginationMeta
from ugc_backend.schemas.user import UserSummary


class MediaMetadata(BaseModel):
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    duration: Optional[float] = Field(default=None, ge=0, description="Seconds, for video")
    format: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    description: Optional[str] = None


class MediaUploadRequest(BaseModel):
    """
    POST /api/media/upload: register an asset by metadata.

    The bytes are expected to reach storage separately (direct-to-bucket
    upload); POST /api/media/upload/file accepts the bytes instead.
    """
    campaign_id: str
    order_id: Optional[str] = None
    type: MediaType
    filename: Optional[str] = Field(default=None, max_length=255)
    size: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = Field(default=None, max_length=100)
    metadata: Optional[MediaMetadata] = None


class MediaUpdateRequest(BaseModel):
    status: Optional[MediaStatus] = None
    metadata: Optional[MediaMetadata] = None


class MediaResponse(BaseModel):
    id: str
    campaign_id: str
    order_id: Optional[str] = None
    uploaded_by_id: Optional[str] = None
    url: str
    filename: str
    mime_type: str
    size: int
    type: MediaType
    status: MediaStatus
    metadata: Optional[dict] = Field(default=None, validation_alias=AliasChoices("meta", "metadata"))
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MediaListItem(MediaResponse):
    campaign_title: str
    uploader: Optional[UserSummary] = None


class MediaListResponse(BaseModel):
    media: List[MediaListItem]
    pagination: PaginationMeta
