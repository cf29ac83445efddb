"""
Schemas for the mocked email (/api/email) and Google Drive (/api/drive)
integrations. Request models validate exactly what a real provider would
need, so swapping the mocks for real clients does not change the API.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from ugc_backend.schemas.message import Attachment

# ══════════════════════════════════════════════════════════════════════════
# Email
# ══════════════════════════════════════════════════════════════════════════


class EmailSettings(BaseModel):
    provider: Literal["gmail", "outlook", "custom"] = "gmail"
    email_address: Optional[EmailStr] = None
    smtp_host: Optional[str] = None
    smtp_port: Optional[int] = Field(default=None, ge=1, le=65535)
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = Field(default=None, description="Write-only")
    enable_campaign_emails: bool = True
    auto_forward: bool = False


class EmailSettingsResponse(BaseModel):
    organization_id: str
    settings: EmailSettings
    connected: bool
    updated_at: datetime


class SendEmailRequest(BaseModel):
    campaign_id: str
    subject: str = Field(min_length=1, max_length=500)
    to: List[EmailStr] = Field(min_length=1)
    cc: Optional[List[EmailStr]] = None
    body: str = Field(min_length=1)
    attachments: Optional[List[Attachment]] = None


class SentEmailResponse(BaseModel):
    id: str
    message_id: str = Field(description="ID of the campaign message that records the email")
    campaign_id: str
    subject: str
    to: List[str]
    cc: List[str] = Field(default_factory=list)
    status: Literal["sent"] = "sent"
    sent_at: datetime


class EmailThread(BaseModel):
    id: str
    subject: str
    snippet: str
    sender: Dict[str, Optional[str]]
    attachments: List[Dict[str, Any]] = Field(default_factory=list)
    sent_at: datetime


class EmailThreadsResponse(BaseModel):
    campaign_id: str
    threads: List[EmailThread]


class EmailSyncResponse(BaseModel):
    synced: int = 0
    new: int = 0
    errors: List[str] = Field(default_factory=list)
    last_sync: datetime


class EmailTemplateResponse(BaseModel):
    campaign_id: str
    subject: str
    body: str
    signature: str


# ══════════════════════════════════════════════════════════════════════════
# Drive
# ══════════════════════════════════════════════════════════════════════════

FolderStructure = Literal["flat", "by-client", "by-campaign", "by-date"]


class DriveSettings(BaseModel):
    enabled: bool = False
    folder_id: Optional[str] = None
    folder_structure: FolderStructure = "by-campaign"
    auto_sync: bool = False
    sync_interval: int = Field(default=15, ge=5, le=60, description="Minutes")


class DriveQuota(BaseModel):
    used: int
    limit: int


class DriveSettingsResponse(BaseModel):
    organization_id: str
    settings: DriveSettings
    connected: bool
    quota: DriveQuota
    updated_at: datetime


class DriveConnectResponse(BaseModel):
    auth_url: str


class DriveFile(BaseModel):
    id: str
    name: str
    mime_type: str
    size: int
    folder_id: Optional[str] = None
    web_view_link: str
    modified_at: datetime


class DriveFileListResponse(BaseModel):
    files: List[DriveFile]


class CreateFolderRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    parent_id: Optional[str] = None
    campaign_id: Optional[str] = None
    client_id: Optional[str] = None


class DriveFolder(BaseModel):
    id: str
    name: str
    parent_id: Optional[str] = None
    web_view_link: str
    created_at: datetime


class DriveSyncResponse(BaseModel):
    campaign_id: str
    folder_id: str
    files_synced: int
    status: Literal["completed"] = "completed"
    synced_at: datetime


class FolderNode(BaseModel):
    id: str
    name: str
    children: List["FolderNode"] = Field(default_factory=list)


class FolderStructureResponse(BaseModel):
    campaign_id: str
    root: FolderNode


class ShareRequest(BaseModel):
    file_id: str
    email: EmailStr
    role: Literal["reader", "writer", "commenter"] = "reader"
    send_notification: bool = True


class SharePermission(BaseModel):
    id: str
    file_id: str
    email: str
    role: str
    notification_sent: bool
    created_at: datetime
