"""
UGC Agency Backend — Campaign Routes
======================================

What:  /api/campaigns CRUD plus the orders nested under a campaign.
Gates: auth + organization (X-Organization-ID, membership verified).

    GET    /                               list (status, client_id, search, page, limit)
    GET    /{id}                           detail with client, orders, latest media
    POST   /                               create (DRAFT)
    PATCH  /{id}                           partial update
    DELETE /{id}                           cancel
    POST   /{id}/assign                    assign a creator (new order)
    PATCH  /{id}/orders/{order_id}         update order status / notes
    DELETE /{id}/orders/{order_id}         delete an order without media
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import OrgContext, require_organization
from ugc_backend.models.enums import CampaignStatus
from ugc_backend.schemas.campaign import (
    AssignCreatorRequest,
    CampaignCreateRequest,
    CampaignDetailResponse,
    CampaignListResponse,
    CampaignResponse,
    CampaignUpdateRequest,
    OrderResponse,
    OrderUpdateRequest,
)
from ugc_backend.schemas.common import ErrorResponse, SuccessResponse
from ugc_backend.services.campaign_service import campaign_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/campaigns",
    tags=["Campaigns"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Not a member of this organization", "model": ErrorResponse},
    },
)


@router.get("", response_model=CampaignListResponse, summary="List campaigns")
async def list_campaigns(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    status_filter: Optional[CampaignStatus] = Query(default=None, alias="status"),
    client_id: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Matches title or brief"),
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> CampaignListResponse:
    return await campaign_service.list_campaigns(
        db, ctx.org_id, page=page, limit=limit, status=status_filter, client_id=client_id, search=search
    )


@router.get(
    "/{campaign_id}",
    response_model=CampaignDetailResponse,
    responses={404: {"description": "Campaign not found", "model": ErrorResponse}},
    summary="Campaign detail",
)
async def get_campaign(
    campaign_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> CampaignDetailResponse:
    return await campaign_service.get_detail(db, ctx.org_id, campaign_id)


@router.post(
    "",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Client not found", "model": ErrorResponse}},
    summary="Create a campaign",
)
async def create_campaign(
    payload: CampaignCreateRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> CampaignResponse:
    return await campaign_service.create_campaign(db, ctx.org_id, ctx.user, payload)


@router.patch("/{campaign_id}", response_model=CampaignResponse, summary="Update a campaign")
async def update_campaign(
    campaign_id: str,
    payload: CampaignUpdateRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> CampaignResponse:
    return await campaign_service.update_campaign(db, ctx.org_id, campaign_id, payload)


@router.delete("/{campaign_id}", response_model=SuccessResponse, summary="Cancel a campaign")
async def cancel_campaign(
    campaign_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    """Campaigns are never removed; DELETE moves them to CANCELLED."""
    await campaign_service.cancel_campaign(db, ctx.org_id, campaign_id)
    return SuccessResponse()


@router.post(
    "/{campaign_id}/assign",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Campaign or creator not found", "model": ErrorResponse}},
    summary="Assign a creator",
)
async def assign_creator(
    campaign_id: str,
    payload: AssignCreatorRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    return await campaign_service.assign_creator(db, ctx.org_id, campaign_id, payload)


@router.patch(
    "/{campaign_id}/orders/{order_id}",
    response_model=OrderResponse,
    summary="Update an order",
)
async def update_order(
    campaign_id: str,
    order_id: str,
    payload: OrderUpdateRequest,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    return await campaign_service.update_order(db, ctx.org_id, campaign_id, order_id, payload)


@router.delete(
    "/{campaign_id}/orders/{order_id}",
    response_model=SuccessResponse,
    responses={400: {"description": "Order has uploaded media", "model": ErrorResponse}},
    summary="Delete an order",
)
async def delete_order(
    campaign_id: str,
    order_id: str,
    ctx: OrgContext = Depends(require_organization),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await campaign_service.delete_order(db, ctx.org_id, campaign_id, order_id)
    return SuccessResponse()
