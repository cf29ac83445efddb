"""
UGC Agency Backend — Message Service
======================================

What:  Campaign chat threads.
Who:   /api/messages (organization gate) and the mocked email integration,
       which records outgoing emails as messages.

Rules:
    - A thread is reached through its campaign, which must be in the
      caller's organization.
    - Posting a message bumps the campaign's updated_at, so the thread
      list (ordered by updated_at desc) surfaces recent conversations.
    - Only the sender edits. The sender, a global ADMIN, or an organization
      OWNER/ADMIN deletes.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ugc_backend.dependencies import OrgContext
from ugc_backend.exceptions import NotFoundError, PermissionDeniedError
from ugc_backend.models.campaign import Campaign
from ugc_backend.models.client import Client
from ugc_backend.models.enums import UserRole
from ugc_backend.models.message import Message
from ugc_backend.models.mixins import utcnow
from ugc_backend.schemas.campaign import ClientRef
from ugc_backend.schemas.message import (
    Attachment,
    CampaignMessagesResponse,
    MessageCampaignItem,
    MessageCampaignListResponse,
    MessageCreateRequest,
    MessageResponse,
    MessageUpdateRequest,
    ThreadCampaign,
)
from ugc_backend.schemas.user import UserSummary
from ugc_backend.services.campaign_service import campaign_service

logger = logging.getLogger(__name__)


def _response(message: Message, sender) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        campaign_id=message.campaign_id,
        sender_id=message.sender_id,
        content=message.content,
        attachments=message.attachments,
        edited_at=message.edited_at,
        created_at=message.created_at,
        updated_at=message.updated_at,
        sender=UserSummary.model_validate(sender),
    )


class MessageService:

    async def list_for_campaign(
        self,
        db: AsyncSession,
        organization_id: str,
        campaign_id: str,
        limit: int = 50,
        before: Optional[datetime] = None,
    ) -> CampaignMessagesResponse:
        """The latest `limit` messages (older than `before` if given), oldest first."""
        campaign = await campaign_service.get_campaign(db, organization_id, campaign_id)

        stmt = (
            select(Message)
            .options(selectinload(Message.sender))
            .where(Message.campaign_id == campaign.id)
            .order_by(Message.created_at.desc())
            .limit(limit)
        )
        if before is not None:
            stmt = stmt.where(Message.created_at < before)
        result = await db.execute(stmt)
        messages = list(result.scalars().all())
        messages.reverse()

        return CampaignMessagesResponse(
            messages=[_response(m, m.sender) for m in messages],
            campaign=ThreadCampaign.model_validate(campaign),
        )

    async def list_campaigns(self, db: AsyncSession, organization_id: str) -> MessageCampaignListResponse:
        message_count = (
            select(func.count(Message.id))
            .where(Message.campaign_id == Campaign.id)
            .correlate(Campaign)
            .scalar_subquery()
        )
        result = await db.execute(
            select(Campaign, Client, message_count.label("message_count"))
            .join(Client, Client.id == Campaign.client_id)
            .where(Campaign.organization_id == organization_id)
            .order_by(Campaign.updated_at.desc())
        )
        campaigns = [
            MessageCampaignItem(
                id=campaign.id,
                title=campaign.title,
                status=campaign.status,
                client=ClientRef.model_validate(client),
                message_count=count,
                updated_at=campaign.updated_at,
            )
            for campaign, client, count in result.all()
        ]
        return MessageCampaignListResponse(campaigns=campaigns)

    async def post_message(
        self,
        db: AsyncSession,
        ctx: OrgContext,
        campaign_id: str,
        content: str,
        attachments: Optional[List[Attachment]] = None,
    ) -> MessageResponse:
        campaign = await campaign_service.get_campaign(db, ctx.org_id, campaign_id)

        message = Message(
            campaign_id=campaign.id,
            sender_id=ctx.user_id,
            content=content,
            attachments=[a.model_dump() for a in attachments] if attachments else None,
        )
        db.add(message)
        campaign.updated_at = utcnow()
        await db.flush()
        logger.debug("Message %s posted on campaign %s", message.id, campaign.id)
        return _response(message, ctx.user)

    async def send(self, db: AsyncSession, ctx: OrgContext, payload: MessageCreateRequest) -> MessageResponse:
        return await self.post_message(db, ctx, payload.campaign_id, payload.content, payload.attachments)

    async def _get(self, db: AsyncSession, organization_id: str, message_id: str) -> Message:
        result = await db.execute(
            select(Message)
            .options(selectinload(Message.sender))
            .join(Campaign, Campaign.id == Message.campaign_id)
            .where(Message.id == message_id, Campaign.organization_id == organization_id)
        )
        message = result.scalar_one_or_none()
        if message is None:
            raise NotFoundError("Message", message_id)
        return message

    async def edit_message(
        self, db: AsyncSession, ctx: OrgContext, message_id: str, payload: MessageUpdateRequest
    ) -> MessageResponse:
        message = await self._get(db, ctx.org_id, message_id)
        if message.sender_id != ctx.user_id:
            raise PermissionDeniedError("Only the sender can edit this message")

        message.content = payload.content
        message.edited_at = utcnow()
        await db.flush()
        return _response(message, message.sender)

    async def delete_message(self, db: AsyncSession, ctx: OrgContext, message_id: str) -> None:
        message = await self._get(db, ctx.org_id, message_id)
        allowed = (
            message.sender_id == ctx.user_id
            or ctx.has_role(UserRole.ADMIN)
            or ctx.is_org_manager()
        )
        if not allowed:
            raise PermissionDeniedError("Only message sender or admin can delete")

        await db.execute(delete(Message).where(Message.id == message.id))
        logger.info("Message %s deleted by %s", message_id, ctx.user_id)


message_service = MessageService()
