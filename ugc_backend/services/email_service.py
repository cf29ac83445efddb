"""
UGC Agency Backend — Email Integration (mocked)
=================================================

What:  The campaign email surface: settings, threads, send, sync, templates.
Why:   The frontend ships an email view; until a provider (Gmail / Outlook /
       SMTP) is wired in, these answers are shaped exactly like the real
       ones so the UI and its tests need no changes when it is.

What is real:
    - Campaign access is checked against the organization.
    - Sending records the email body as a campaign Message.
    - Threads are the campaign's messages, newest first.

What is mocked:
    - Settings are echoed, never stored; GET returns a default.
    - Nothing leaves the process; sync reports zero new mail.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ugc_backend.dependencies import OrgContext
from ugc_backend.exceptions import PermissionDeniedError
from ugc_backend.models.enums import STAFF_ROLES, UserRole
from ugc_backend.models.message import Message
from ugc_backend.models.mixins import new_id, utcnow
from ugc_backend.schemas.integrations import (
    EmailSettings,
    EmailSettingsResponse,
    EmailSyncResponse,
    EmailTemplateResponse,
    EmailThread,
    EmailThreadsResponse,
    SendEmailRequest,
    SentEmailResponse,
)
from ugc_backend.services.campaign_service import campaign_service
from ugc_backend.services.client_service import client_service
from ugc_backend.services.message_service import message_service

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 140


class EmailService:

    def get_settings(self, ctx: OrgContext) -> EmailSettingsResponse:
        return EmailSettingsResponse(
            organization_id=ctx.org_id,
            settings=EmailSettings(email_address=f"campaigns+{ctx.org_id}@ugc-agency.com"),
            connected=False,
            updated_at=utcnow(),
        )

    def update_settings(self, ctx: OrgContext, payload: EmailSettings) -> EmailSettingsResponse:
        if not ctx.has_role(UserRole.ADMIN):
            raise PermissionDeniedError("Only admins can configure email settings")

        logger.info("Email settings updated for organization %s (provider=%s)", ctx.org_id, payload.provider)
        return EmailSettingsResponse(
            organization_id=ctx.org_id,
            # The password is write-only
            settings=payload.model_copy(update={"smtp_password": None}),
            connected=payload.email_address is not None,
            updated_at=utcnow(),
        )

    async def threads(self, db: AsyncSession, ctx: OrgContext, campaign_id: str) -> EmailThreadsResponse:
        campaign = await campaign_service.get_campaign(db, ctx.org_id, campaign_id)
        result = await db.execute(
            select(Message)
            .options(selectinload(Message.sender))
            .where(Message.campaign_id == campaign.id)
            .order_by(Message.created_at.desc())
        )
        threads = [
            EmailThread(
                id=m.id,
                subject=f"Re: {campaign.title}",
                snippet=m.content[:SNIPPET_LENGTH],
                sender={"id": m.sender.id, "name": m.sender.name, "email": m.sender.email},
                attachments=m.attachments or [],
                sent_at=m.created_at,
            )
            for m in result.scalars().all()
        ]
        return EmailThreadsResponse(campaign_id=campaign.id, threads=threads)

    async def send(self, db: AsyncSession, ctx: OrgContext, payload: SendEmailRequest) -> SentEmailResponse:
        """Record the email as a campaign message and report it as sent."""
        message = await message_service.post_message(
            db, ctx, payload.campaign_id, payload.body, payload.attachments
        )
        logger.info(
            "Mock email for campaign %s to %d recipient(s) recorded as message %s",
            payload.campaign_id, len(payload.to), message.id,
        )
        return SentEmailResponse(
            id=new_id(),
            message_id=message.id,
            campaign_id=payload.campaign_id,
            subject=payload.subject,
            to=[str(a) for a in payload.to],
            cc=[str(a) for a in payload.cc or []],
            sent_at=message.created_at,
        )

    def sync(self, ctx: OrgContext) -> EmailSyncResponse:
        if not ctx.has_role(*STAFF_ROLES):
            raise PermissionDeniedError("Only admin/staff can sync emails")
        return EmailSyncResponse(last_sync=utcnow())

    async def template(self, db: AsyncSession, ctx: OrgContext, campaign_id: str) -> EmailTemplateResponse:
        campaign = await campaign_service.get_campaign(db, ctx.org_id, campaign_id)
        client = await client_service.get_client(db, ctx.org_id, campaign.client_id)
        organization_name = ctx.organization.name if ctx.organization else "Organization"
        return EmailTemplateResponse(
            campaign_id=campaign.id,
            subject=f"[{campaign.title}] Update",
            body=(
                f"Hi {client.name or 'there'},\n\n"
                f"Here's an update on your campaign \"{campaign.title}\".\n\n"
                f"[Your message here]\n\n"
                f"Best regards,\n{ctx.user.name}"
            ),
            signature=f"\n\n--\n{ctx.user.name}\n{organization_name}\n{ctx.user.email}",
        )


email_service = EmailService()
