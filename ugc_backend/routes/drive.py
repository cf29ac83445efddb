"""
/api/drive: the mocked Google Drive integration.

Gates: auth + organization. Settings and connect are ADMIN only
(checked in the service).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import OrgContext, require_organization
from ugc_backend.schemas.common import ErrorResponse
from ugc_backend.schemas.integrations import (
    CreateFolderRequest,
    DriveConnectResponse,
    DriveFileListResponse,
    DriveFolder,
    DriveSettings,
    DriveSettingsResponse,
    DriveSyncResponse,
    FolderStructureResponse,
    SharePermission,
    ShareRequest,
)
from ugc_backend.services.drive_service import drive_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/drive",
    tags=["Drive"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Insufficient permissions or not a member", "model": ErrorResponse},
    },
)


@router.get("/settings", response_model=DriveSettingsResponse, summary="Drive settings")
async def get_settings(ctx: OrgContext = Depends(require_organization)) -> DriveSettingsResponse:
    return drive_service.get_settings(ctx)


@router.post("/settings", response_model=DriveSettingsResponse, summary="Configure Drive (ADMIN)")
async def update_settings(
    payload: DriveSettings,
    ctx: OrgContext = Depends(require_organization),
) -> DriveSettingsResponse:
    return drive_service.update_settings(ctx, payload)


@router.get("/connect", response_model=DriveConnectResponse, summary="Google OAuth URL (ADMIN)")
async def connect(ctx: OrgContext = Depends(require_organization)) -> DriveConnectResponse:
    return drive_service.connect(ctx)


@router.get("/files", response_model=DriveFileListResponse, summary="List Drive files")
async def list_files(
    folder_id: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    ctx: OrgContext = Depends(require_organization),
) -> DriveFileListResponse:
    return drive_service.list_files(folder_id=folder_id, search=search)


@router.post(
    "/folders",
    response_model=DriveFolder,
    status_code=status.HTTP_201_CREATED,
    summary="Create a Drive folder",
)
async def create_folder(
    payload: CreateFolderRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> DriveFolder:
    return await drive_service.create_folder(db, ctx, payload)


@router.post("/sync/campaign/{campaign_id}", response_model=DriveSyncResponse, summary="Sync campaign media")
async def sync_campaign(
    campaign_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> DriveSyncResponse:
    return await drive_service.sync_campaign(db, ctx, campaign_id)


@router.get("/campaign/{campaign_id}/structure", response_model=FolderStructureResponse, summary="Campaign folder tree")
async def folder_structure(
    campaign_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> FolderStructureResponse:
    return await drive_service.folder_structure(db, ctx, campaign_id)


@router.post("/share", response_model=SharePermission, summary="Share a Drive file")
async def share(
    payload: ShareRequest,
    ctx: OrgContext = Depends(require_organization),
) -> SharePermission:
    return drive_service.share(ctx, payload)
