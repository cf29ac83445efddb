"""
/api/email: the mocked campaign email integration.

Gates: auth + organization. Settings changes are ADMIN only and sync is
ADMIN/STAFF only; both are checked in the service.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import OrgContext, require_organization
from ugc_backend.schemas.common import ErrorResponse
from ugc_backend.schemas.integrations import (
    EmailSettings,
    EmailSettingsResponse,
    EmailSyncResponse,
    EmailTemplateResponse,
    EmailThreadsResponse,
    SendEmailRequest,
    SentEmailResponse,
)
from ugc_backend.services.email_service import email_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/email",
    tags=["Email"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Insufficient permissions or not a member", "model": ErrorResponse},
    },
)


@router.get("/settings", response_model=EmailSettingsResponse, summary="Email settings")
async def get_settings(ctx: OrgContext = Depends(require_organization)) -> EmailSettingsResponse:
    return email_service.get_settings(ctx)


@router.post("/settings", response_model=EmailSettingsResponse, summary="Configure email (ADMIN)")
async def update_settings(
    payload: EmailSettings,
    ctx: OrgContext = Depends(require_organization),
) -> EmailSettingsResponse:
    return email_service.update_settings(ctx, payload)


@router.get("/campaign/{campaign_id}/threads", response_model=EmailThreadsResponse, summary="Campaign email threads")
async def get_threads(
    campaign_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> EmailThreadsResponse:
    return await email_service.threads(db, ctx, campaign_id)


@router.post(
    "/send",
    response_model=SentEmailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a campaign email",
)
async def send_email(
    payload: SendEmailRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> SentEmailResponse:
    """Recorded as a campaign message; no mail leaves the server."""
    return await email_service.send(db, ctx, payload)


@router.post("/sync", response_model=EmailSyncResponse, summary="Sync the mailbox (ADMIN/STAFF)")
async def sync_email(ctx: OrgContext = Depends(require_organization)) -> EmailSyncResponse:
    return email_service.sync(ctx)


@router.get("/campaign/{campaign_id}/template", response_model=EmailTemplateResponse, summary="Email template")
async def get_template(
    campaign_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> EmailTemplateResponse:
    return await email_service.template(db, ctx, campaign_id)
