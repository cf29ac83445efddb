"""
UGC Agency Backend — Message Routes
=====================================

What:  /api/messages: campaign chat threads.
Gates: auth + organization.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import OrgContext, require_organization
from ugc_backend.schemas.common import ErrorResponse, SuccessResponse
from ugc_backend.schemas.message import (
    CampaignMessagesResponse,
    MessageCampaignListResponse,
    MessageCreateRequest,
    MessageResponse,
    MessageUpdateRequest,
)
from ugc_backend.services.message_service import message_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/messages", tags=["Messages"])


@router.get(
    "/campaign/{campaign_id}",
    response_model=CampaignMessagesResponse,
    responses={404: {"description": "Campaign not found", "model": ErrorResponse}},
    summary="Messages of a campaign",
)
async def list_campaign_messages(
    campaign_id: str,
    limit: int = Query(default=50, ge=1, le=200),
    before: Optional[datetime] = Query(default=None, description="Only messages older than this"),
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> CampaignMessagesResponse:
    """
    The most recent `limit` messages, returned oldest first.

    Scroll back by passing the oldest `created_at` seen as `before`.
    """
    return await message_service.list_for_campaign(db, ctx.org_id, campaign_id, limit=limit, before=before)


@router.get("/campaigns", response_model=MessageCampaignListResponse, summary="Campaign threads")
async def list_thread_campaigns(
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MessageCampaignListResponse:
    return await message_service.list_campaigns(db, ctx.org_id)


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a message",
)
async def send_message(
    payload: MessageCreateRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await message_service.send(db, ctx, payload)


@router.patch(
    "/{message_id}",
    response_model=MessageResponse,
    responses={403: {"description": "Not the sender", "model": ErrorResponse}},
    summary="Edit own message",
)
async def edit_message(
    message_id: str,
    payload: MessageUpdateRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await message_service.edit_message(db, ctx, message_id, payload)


@router.delete(
    "/{message_id}",
    response_model=SuccessResponse,
    responses={403: {"description": "Only message sender or admin can delete", "model": ErrorResponse}},
    summary="Delete a message",
)
async def delete_message(
    message_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await message_service.delete_message(db, ctx, message_id)
    return SuccessResponse()
