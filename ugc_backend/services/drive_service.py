"""
UGC Agency Backend — Google Drive Integration (mocked)
========================================================

What:  Drive settings, OAuth connect URL, file listing, folders, campaign
       sync, folder tree and sharing.
Why:   Same contract a real Drive client would honour; the OAuth URL is
       real (built from GOOGLE_CLIENT_ID), everything behind it is canned.

What is real:
    - Campaign access checks, and the campaign's media count on sync.
    - The auth URL, carrying the organization id as OAuth `state`.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.config import settings
from ugc_backend.dependencies import OrgContext
from ugc_backend.exceptions import PermissionDeniedError
from ugc_backend.models.enums import UserRole
from ugc_backend.models.media import Media
from ugc_backend.models.mixins import new_id, utcnow
from ugc_backend.schemas.integrations import (
    CreateFolderRequest,
    DriveConnectResponse,
    DriveFile,
    DriveFileListResponse,
    DriveFolder,
    DriveQuota,
    DriveSettings,
    DriveSettingsResponse,
    DriveSyncResponse,
    FolderNode,
    FolderStructureResponse,
    SharePermission,
    ShareRequest,
)
from ugc_backend.services.campaign_service import campaign_service
from ugc_backend.services.client_service import client_service

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"
QUOTA_LIMIT = 15 * 1024 ** 3  # 15 GB, the free Google account quota

_SAMPLE_FILES = (
    ("Campaign Brief.pdf", "application/pdf", 1_048_576),
    ("Product Video.mp4", "video/mp4", 52_428_800),
    ("Moodboard.png", "image/png", 2_097_152),
)


class DriveService:

    def _require_admin(self, ctx: OrgContext, action: str) -> None:
        if not ctx.has_role(UserRole.ADMIN):
            raise PermissionDeniedError(f"Only admins can {action}")

    def _settings_response(self, ctx: OrgContext, drive_settings: DriveSettings) -> DriveSettingsResponse:
        return DriveSettingsResponse(
            organization_id=ctx.org_id,
            settings=drive_settings,
            connected=drive_settings.enabled and drive_settings.folder_id is not None,
            quota=DriveQuota(used=0, limit=QUOTA_LIMIT),
            updated_at=utcnow(),
        )

    def get_settings(self, ctx: OrgContext) -> DriveSettingsResponse:
        return self._settings_response(ctx, DriveSettings())

    def update_settings(self, ctx: OrgContext, payload: DriveSettings) -> DriveSettingsResponse:
        self._require_admin(ctx, "configure Drive settings")
        logger.info("Drive settings updated for organization %s", ctx.org_id)
        return self._settings_response(ctx, payload)

    def connect(self, ctx: OrgContext) -> DriveConnectResponse:
        self._require_admin(ctx, "connect Google Drive")
        query = urlencode({
            "client_id": settings.google_client_id,
            "redirect_uri": settings.google_redirect_uri,
            "response_type": "code",
            "scope": DRIVE_SCOPE,
            "access_type": "offline",
            "prompt": "consent",
            "state": ctx.org_id,
        })
        return DriveConnectResponse(auth_url=f"{GOOGLE_AUTH_URL}?{query}")

    def list_files(self, folder_id: Optional[str] = None, search: Optional[str] = None) -> DriveFileListResponse:
        now = utcnow()
        files = [
            DriveFile(
                id=f"file-{index}",
                name=name,
                mime_type=mime_type,
                size=size,
                folder_id=folder_id,
                web_view_link=f"https://drive.google.com/file/d/file-{index}/view",
                modified_at=now,
            )
            for index, (name, mime_type, size) in enumerate(_SAMPLE_FILES, start=1)
        ]
        if search:
            files = [f for f in files if search.lower() in f.name.lower()]
        return DriveFileListResponse(files=files)

    async def create_folder(
        self, db: AsyncSession, ctx: OrgContext, payload: CreateFolderRequest
    ) -> DriveFolder:
        if payload.campaign_id:
            await campaign_service.get_campaign(db, ctx.org_id, payload.campaign_id)
        if payload.client_id:
            await client_service.get_client(db, ctx.org_id, payload.client_id)
        folder_id = f"folder-{new_id()}"
        logger.info("Mock Drive folder %r created for organization %s", payload.name, ctx.org_id)
        return DriveFolder(
            id=folder_id,
            name=payload.name,
            parent_id=payload.parent_id,
            web_view_link=f"https://drive.google.com/drive/folders/{folder_id}",
            created_at=utcnow(),
        )

    async def sync_campaign(self, db: AsyncSession, ctx: OrgContext, campaign_id: str) -> DriveSyncResponse:
        campaign = await campaign_service.get_campaign(db, ctx.org_id, campaign_id)
        media_count = (
            await db.execute(select(func.count(Media.id)).where(Media.campaign_id == campaign.id))
        ).scalar_one()
        return DriveSyncResponse(
            campaign_id=campaign.id,
            folder_id=f"folder-{campaign.id}",
            files_synced=media_count,
            synced_at=utcnow(),
        )

    async def folder_structure(
        self, db: AsyncSession, ctx: OrgContext, campaign_id: str
    ) -> FolderStructureResponse:
        campaign = await campaign_service.get_campaign(db, ctx.org_id, campaign_id)
        root_id = f"folder-{campaign.id}"
        return FolderStructureResponse(
            campaign_id=campaign.id,
            root=FolderNode(
                id=root_id,
                name=campaign.title,
                children=[
                    FolderNode(id=f"{root_id}-raw", name="Raw Files"),
                    FolderNode(id=f"{root_id}-edited", name="Edited Files"),
                    FolderNode(id=f"{root_id}-final", name="Final Deliverables"),
                ],
            ),
        )

    def share(self, ctx: OrgContext, payload: ShareRequest) -> SharePermission:
        logger.info("Mock Drive share of %s with %s (%s)", payload.file_id, payload.email, payload.role)
        return SharePermission(
            id=f"permission-{new_id()}",
            file_id=payload.file_id,
            email=str(payload.email),
            role=payload.role,
            notification_sent=payload.send_notification,
            created_at=utcnow(),
        )


drive_service = DriveService()
