"""
UGC Agency Backend — Media Service
====================================

What:  Media rows (creator deliverables) and their review workflow.
Who:   /api/media (organization gate).

Scoping:
    Media carries no organization id of its own; it belongs to the
    organization of its campaign. Every query joins Campaign and filters
    on Campaign.organization_id.

Workflow:
    PENDING ──(staff review)──▶ APPROVED / REJECTED
       └──(uploader deletes)──▶ ARCHIVED

Two ways in:
    register()        metadata only; the bytes live elsewhere, the URL is
                      generated under MEDIA_BASE_URL
    upload_file()     multipart bytes, validated and written by the storage
                      service, then registered exactly like register()
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ugc_backend.config import settings
from ugc_backend.dependencies import OrgContext
from ugc_backend.exceptions import NotFoundError, PermissionDeniedError
from ugc_backend.models.campaign import Campaign, Order
from ugc_backend.models.enums import STAFF_ROLES, MediaStatus, MediaType
from ugc_backend.models.media import Media
from ugc_backend.models.mixins import new_id
from ugc_backend.schemas.media import (
    MediaListItem,
    MediaListResponse,
    MediaResponse,
    MediaUpdateRequest,
    MediaUploadRequest,
)
from ugc_backend.schemas.user import UserSummary
from ugc_backend.services.campaign_service import campaign_service
from ugc_backend.services.pagination import paginate
from ugc_backend.services.storage_service import DEFAULT_MIME_TYPES, storage_service

logger = logging.getLogger(__name__)


def public_url(path: str) -> str:
    return f"{settings.media_base_url.rstrip('/')}/{path.lstrip('/')}"


def _list_item(media: Media, campaign_title: str) -> MediaListItem:
    return MediaListItem(
        **MediaResponse.model_validate(media).model_dump(),
        campaign_title=campaign_title,
        uploader=UserSummary.model_validate(media.uploader) if media.uploader else None,
    )


class MediaService:

    def _scoped(self, organization_id: str):
        return (
            select(Media, Campaign.title)
            .join(Campaign, Campaign.id == Media.campaign_id)
            .options(selectinload(Media.uploader))
            .where(Campaign.organization_id == organization_id)
        )

    async def list_media(
        self,
        db: AsyncSession,
        organization_id: str,
        page: int = 1,
        limit: int = 20,
        status: Optional[MediaStatus] = None,
        type: Optional[MediaType] = None,
        campaign_id: Optional[str] = None,
    ) -> MediaListResponse:
        """Organization media, newest first."""
        stmt = self._scoped(organization_id).order_by(Media.created_at.desc())
        if status is not None:
            stmt = stmt.where(Media.status == status)
        if type is not None:
            stmt = stmt.where(Media.type == type)
        if campaign_id:
            stmt = stmt.where(Media.campaign_id == campaign_id)

        rows, pagination = await paginate(db, stmt, page, limit)
        return MediaListResponse(
            media=[_list_item(media, title) for media, title in rows],
            pagination=pagination,
        )

    async def list_for_campaign(
        self,
        db: AsyncSession,
        organization_id: str,
        campaign_id: str,
        page: int = 1,
        limit: int = 20,
        status: Optional[MediaStatus] = None,
        type: Optional[MediaType] = None,
    ) -> MediaListResponse:
        # 404 before listing when the campaign is not in this organization
        await campaign_service.get_campaign(db, organization_id, campaign_id)
        return await self.list_media(
            db, organization_id, page=page, limit=limit, status=status, type=type, campaign_id=campaign_id
        )

    async def _get(self, db: AsyncSession, organization_id: str, media_id: str) -> Media:
        result = await db.execute(
            select(Media)
            .join(Campaign, Campaign.id == Media.campaign_id)
            .where(Media.id == media_id, Campaign.organization_id == organization_id)
        )
        media = result.scalar_one_or_none()
        if media is None:
            raise NotFoundError("Media", media_id)
        return media

    async def get_media(self, db: AsyncSession, organization_id: str, media_id: str) -> MediaListItem:
        result = await db.execute(self._scoped(organization_id).where(Media.id == media_id))
        row = result.first()
        if row is None:
            raise NotFoundError("Media", media_id)
        media, title = row
        return _list_item(media, title)

    async def _check_order(
        self, db: AsyncSession, ctx: OrgContext, campaign_id: str, order_id: str
    ) -> None:
        # The uploader must be the order's creator, and the order must be on this campaign
        result = await db.execute(
            select(Order.id).where(
                Order.id == order_id,
                Order.campaign_id == campaign_id,
                Order.creator_id == ctx.user_id,
            )
        )
        if result.first() is None:
            raise NotFoundError("Order", order_id, message="Order not found")

    async def register(
        self,
        db: AsyncSession,
        ctx: OrgContext,
        payload: MediaUploadRequest,
        storage_path: Optional[str] = None,
    ) -> MediaResponse:
        """
        Create a PENDING media row.

        Raises:
            NotFoundError: campaign not in the organization, or order not the
                caller's / not on this campaign
        """
        campaign = await campaign_service.get_campaign(db, ctx.org_id, payload.campaign_id)
        if payload.order_id:
            await self._check_order(db, ctx, campaign.id, payload.order_id)

        filename = payload.filename or (
            f"{payload.type.value.lower()}-{datetime.now(timezone.utc):%Y%m%d%H%M%S}"
        )
        url = public_url(storage_path or f"{new_id()}/{filename}")

        media = Media(
            campaign_id=campaign.id,
            order_id=payload.order_id,
            uploaded_by_id=ctx.user_id,
            url=url,
            filename=filename,
            mime_type=payload.mime_type or DEFAULT_MIME_TYPES[payload.type],
            size=payload.size or 0,
            type=payload.type,
            status=MediaStatus.PENDING,
            meta=payload.metadata.model_dump(exclude_none=True) if payload.metadata else None,
            storage_path=storage_path,
        )
        db.add(media)
        await db.flush()
        logger.info(
            "Media %s registered on campaign %s by %s (%s, %d bytes)",
            media.id, campaign.id, ctx.user_id, media.mime_type, media.size,
        )
        return MediaResponse.model_validate(media)

    async def upload_file(
        self,
        db: AsyncSession,
        ctx: OrgContext,
        campaign_id: str,
        type: MediaType,
        filename: str,
        content: bytes,
        order_id: Optional[str] = None,
    ) -> MediaResponse:
        """Validate and store the bytes, then register them; the file is removed if registration fails."""
        # Check access before touching the disk
        await campaign_service.get_campaign(db, ctx.org_id, campaign_id)
        if order_id:
            await self._check_order(db, ctx, campaign_id, order_id)

        relative_path, mime_type = await storage_service.validate_and_store(filename, content)
        payload = MediaUploadRequest(
            campaign_id=campaign_id,
            order_id=order_id,
            type=type,
            filename=filename,
            size=len(content),
            mime_type=mime_type,
        )
        try:
            return await self.register(db, ctx, payload, storage_path=relative_path)
        except Exception:
            await storage_service.cleanup_file(relative_path)
            raise

    async def update_media(
        self, db: AsyncSession, ctx: OrgContext, media_id: str, payload: MediaUpdateRequest
    ) -> MediaResponse:
        media = await self._get(db, ctx.org_id, media_id)
        changes = payload.model_dump(exclude_unset=True)

        if changes.get("status") is not None:
            if not ctx.has_role(*STAFF_ROLES):
                raise PermissionDeniedError("Only staff can update media status")
            logger.info("Media %s status %s → %s by %s", media.id, media.status.value, changes["status"].value, ctx.user_id)
            media.status = changes["status"]
        if "metadata" in changes:
            media.meta = payload.metadata.model_dump(exclude_none=True) if payload.metadata else None

        await db.flush()
        return MediaResponse.model_validate(media)

    async def archive_media(self, db: AsyncSession, ctx: OrgContext, media_id: str) -> None:
        """Soft-delete; only the uploader may do it."""
        result = await db.execute(
            select(Media)
            .join(Campaign, Campaign.id == Media.campaign_id)
            .where(
                Media.id == media_id,
                Media.uploaded_by_id == ctx.user_id,
                Campaign.organization_id == ctx.org_id,
            )
        )
        media = result.scalar_one_or_none()
        if media is None:
            raise NotFoundError("Media", media_id, message="Media not found or unauthorized")

        media.status = MediaStatus.ARCHIVED
        await db.flush()
        logger.info("Media %s archived", media.id)


media_service = MediaService()
