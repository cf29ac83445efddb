"""
UGC Agency Backend — Media Routes
===================================

What:  /api/media: register, upload, list, review and archive media, and
       serve the stored bytes.
Gates: auth + organization for everything except GET /files/{path}, which
       serves by unguessable UUID path (media URLs are embedded in <img>
       and <video> tags that cannot send headers).

Route order matters: the fixed paths (/campaign/..., /upload, /files/...)
are declared before /{media_id}.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import OrgContext, require_organization
from ugc_backend.models.enums import MediaStatus, MediaType
from ugc_backend.schemas.common import ErrorResponse, SuccessResponse
from ugc_backend.schemas.media import (
    MediaListItem,
    MediaListResponse,
    MediaResponse,
    MediaUpdateRequest,
    MediaUploadRequest,
)
from ugc_backend.services.media_service import media_service
from ugc_backend.services.storage_service import storage_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/media", tags=["Media"])


@router.get("", response_model=MediaListResponse, summary="List organization media")
async def list_media(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    status_filter: Optional[MediaStatus] = Query(default=None, alias="status"),
    type: Optional[MediaType] = Query(default=None),
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MediaListResponse:
    return await media_service.list_media(
        db, ctx.org_id, page=page, limit=limit, status=status_filter, type=type
    )


@router.get(
    "/campaign/{campaign_id}",
    response_model=MediaListResponse,
    responses={404: {"description": "Campaign not found", "model": ErrorResponse}},
    summary="List media of a campaign",
)
async def list_campaign_media(
    campaign_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    status_filter: Optional[MediaStatus] = Query(default=None, alias="status"),
    type: Optional[MediaType] = Query(default=None),
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MediaListResponse:
    return await media_service.list_for_campaign(
        db, ctx.org_id, campaign_id, page=page, limit=limit, status=status_filter, type=type
    )


@router.post(
    "/upload",
    response_model=MediaResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Campaign or order not found", "model": ErrorResponse}},
    summary="Register uploaded media",
)
async def register_media(
    payload: MediaUploadRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MediaResponse:
    return await media_service.register(db, ctx, payload)


@router.post(
    "/upload/file",
    response_model=MediaResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Unsupported type or file too large", "model": ErrorResponse},
        404: {"description": "Campaign or order not found", "model": ErrorResponse},
    },
    summary="Upload a media file",
)
async def upload_media_file(
    file: UploadFile = File(..., description="Image, video or document"),
    campaign_id: str = Form(...),
    type: MediaType = Form(...),
    order_id: Optional[str] = Form(default=None),
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MediaResponse:
    """Multipart upload: the bytes are stored on disk and a PENDING row created."""
    content = await file.read()
    return await media_service.upload_file(
        db,
        ctx,
        campaign_id=campaign_id,
        type=type,
        filename=file.filename or "upload",
        content=content,
        order_id=order_id,
    )


@router.get(
    "/files/{file_path:path}",
    summary="Serve a stored media file",
    responses={200: {"description": "File bytes"}, 404: {"description": "File not found"}},
)
async def serve_file(file_path: str) -> FileResponse:
    path = storage_service.resolve(file_path)
    return FileResponse(
        path=str(path),
        media_type=storage_service.mime_type_for(path.suffix.lower()),
        headers={"Cache-Control": "private, max-age=3600"},
    )


@router.get(
    "/{media_id}",
    response_model=MediaListItem,
    responses={404: {"description": "Media not found", "model": ErrorResponse}},
    summary="Get one media item",
)
async def get_media(
    media_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MediaListItem:
    return await media_service.get_media(db, ctx.org_id, media_id)


@router.patch(
    "/{media_id}",
    response_model=MediaResponse,
    responses={403: {"description": "Only staff can update media status", "model": ErrorResponse}},
    summary="Review or annotate media",
)
async def update_media(
    media_id: str,
    payload: MediaUpdateRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MediaResponse:
    return await media_service.update_media(db, ctx, media_id, payload)


@router.delete(
    "/{media_id}",
    response_model=SuccessResponse,
    responses={404: {"description": "Media not found or unauthorized", "model": ErrorResponse}},
    summary="Archive own media",
)
async def archive_media(
    media_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await media_service.archive_media(db, ctx, media_id)
    return SuccessResponse()
