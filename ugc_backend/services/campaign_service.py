"""
UGC Agency Backend — Campaign Service
=======================================

What:  Campaign CRUD plus the orders (creator assignments) under a campaign.
Who:   /api/campaigns (organization gate).

Scoping:
    Campaign rows carry organization_id directly. Orders are reached through
    their campaign, so every order operation first loads the campaign within
    the organization and then the order within that campaign.

Deletion:
    Campaigns are cancelled (status → CANCELLED), not removed.
    Orders are hard-deleted, refused with 400 while media references them.
"""

import logging
from typing import Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ugc_backend.exceptions import ConflictError, NotFoundError
from ugc_backend.models.campaign import Campaign, Order
from ugc_backend.models.client import Client
from ugc_backend.models.enums import CampaignStatus, OrderStatus, UserRole
from ugc_backend.models.media import Media
from ugc_backend.models.mixins import utcnow
from ugc_backend.models.user import User
from ugc_backend.schemas.campaign import (
    AssignCreatorRequest,
    CampaignCreateRequest,
    CampaignDetailResponse,
    CampaignListItem,
    CampaignListResponse,
    CampaignMediaItem,
    CampaignOrderItem,
    CampaignResponse,
    CampaignUpdateRequest,
    ClientRef,
    OrderResponse,
    OrderUpdateRequest,
)
from ugc_backend.schemas.user import UserSummary
from ugc_backend.services.client_service import client_service
from ugc_backend.services.pagination import paginate

logger = logging.getLogger(__name__)


class CampaignService:
    """
    Business logic for campaigns and their orders.

    All methods take the gate-verified `organization_id` as the scope.
    """

    async def get_campaign(
        self, db: AsyncSession, organization_id: str, campaign_id: str
    ) -> Campaign:
        """Fetch a campaign within the organization, or raise NotFoundError (404)."""
        result = await db.execute(
            select(Campaign).where(
                Campaign.id == campaign_id,
                Campaign.organization_id == organization_id,
            )
        )
        campaign = result.scalar_one_or_none()
        if campaign is None:
            raise NotFoundError("Campaign", campaign_id)
        return campaign

    async def list_campaigns(
        self,
        db: AsyncSession,
        organization_id: str,
        page: int = 1,
        limit: int = 10,
        status: Optional[CampaignStatus] = None,
        client_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> CampaignListResponse:
        """
        List campaigns newest first, with their client and order count.

        Search is case-insensitive over title and brief.
        """
        order_count = (
            select(func.count(Order.id))
            .where(Order.campaign_id == Campaign.id)
            .correlate(Campaign)
            .scalar_subquery()
        )
        stmt = (
            select(Campaign, Client, order_count.label("order_count"))
            .join(Client, Client.id == Campaign.client_id)
            .where(Campaign.organization_id == organization_id)
            .order_by(Campaign.created_at.desc())
        )
        if status is not None:
            stmt = stmt.where(Campaign.status == status)
        if client_id:
            stmt = stmt.where(Campaign.client_id == client_id)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Campaign.title).like(pattern),
                func.lower(Campaign.brief).like(pattern),
            ))

        rows, pagination = await paginate(db, stmt, page, limit)
        campaigns = [
            CampaignListItem(
                **CampaignResponse.model_validate(campaign).model_dump(),
                client=ClientRef.model_validate(client),
                order_count=count,
            )
            for campaign, client, count in rows
        ]
        return CampaignListResponse(campaigns=campaigns, pagination=pagination)

    async def get_detail(
        self, db: AsyncSession, organization_id: str, campaign_id: str
    ) -> CampaignDetailResponse:
        result = await db.execute(
            select(Campaign)
            .options(selectinload(Campaign.client), selectinload(Campaign.created_by))
            .where(Campaign.id == campaign_id, Campaign.organization_id == organization_id)
        )
        campaign = result.scalar_one_or_none()
        if campaign is None:
            raise NotFoundError("Campaign", campaign_id)

        media_count = (
            select(func.count(Media.id))
            .where(Media.order_id == Order.id)
            .correlate(Order)
            .scalar_subquery()
        )
        orders = await db.execute(
            select(Order, media_count.label("media_count"))
            .options(selectinload(Order.creator))
            .where(Order.campaign_id == campaign.id)
            .order_by(Order.created_at.desc())
        )
        order_items = [
            CampaignOrderItem(
                **OrderResponse.model_validate(order).model_dump(),
                creator=UserSummary.model_validate(order.creator),
                media_count=count,
            )
            for order, count in orders.all()
        ]

        media = await db.execute(
            select(Media)
            .where(Media.campaign_id == campaign.id)
            .order_by(Media.created_at.desc())
            .limit(10)
        )

        return CampaignDetailResponse(
            **CampaignResponse.model_validate(campaign).model_dump(),
            client=ClientRef.model_validate(campaign.client),
            created_by=UserSummary.model_validate(campaign.created_by) if campaign.created_by else None,
            orders=order_items,
            media=[CampaignMediaItem.model_validate(m) for m in media.scalars().all()],
        )

    async def create_campaign(
        self,
        db: AsyncSession,
        organization_id: str,
        user: User,
        payload: CampaignCreateRequest,
    ) -> CampaignResponse:
        # The client must belong to the same organization
        await client_service.get_client(db, organization_id, payload.client_id)

        campaign = Campaign(
            organization_id=organization_id,
            client_id=payload.client_id,
            created_by_id=user.id,
            title=payload.title,
            brief=payload.brief,
            requirements=payload.requirements.model_dump() if payload.requirements else None,
            budget=payload.budget,
            deadline=payload.deadline,
            status=CampaignStatus.DRAFT,
        )
        db.add(campaign)
        await db.flush()
        logger.info("Campaign %s created in organization %s", campaign.id, organization_id)
        return CampaignResponse.model_validate(campaign)

    async def update_campaign(
        self,
        db: AsyncSession,
        organization_id: str,
        campaign_id: str,
        payload: CampaignUpdateRequest,
    ) -> CampaignResponse:
        campaign = await self.get_campaign(db, organization_id, campaign_id)
        changes = payload.model_dump(exclude_unset=True)

        if changes.get("client_id") and changes["client_id"] != campaign.client_id:
            await client_service.get_client(db, organization_id, changes["client_id"])

        for field, value in changes.items():
            setattr(campaign, field, value)
        await db.flush()
        return CampaignResponse.model_validate(campaign)

    async def cancel_campaign(self, db: AsyncSession, organization_id: str, campaign_id: str) -> None:
        campaign = await self.get_campaign(db, organization_id, campaign_id)
        campaign.status = CampaignStatus.CANCELLED
        await db.flush()
        logger.info("Campaign %s cancelled", campaign.id)

    # ── Orders ────────────────────────────────────────────────────────────

    async def assign_creator(
        self,
        db: AsyncSession,
        organization_id: str,
        campaign_id: str,
        payload: AssignCreatorRequest,
    ) -> OrderResponse:
        """Create a NEW order linking a creator to the campaign."""
        campaign = await self.get_campaign(db, organization_id, campaign_id)

        creator = await db.get(User, payload.creator_id)
        if creator is None or creator.role != UserRole.CREATOR:
            raise NotFoundError("Creator", payload.creator_id, message="Creator not found")

        order = Order(
            campaign_id=campaign.id,
            creator_id=creator.id,
            notes=payload.notes,
            status=OrderStatus.NEW,
        )
        db.add(order)
        await db.flush()
        logger.info("Creator %s assigned to campaign %s (order %s)", creator.id, campaign.id, order.id)
        return OrderResponse.model_validate(order)

    async def get_order(
        self, db: AsyncSession, organization_id: str, campaign_id: str, order_id: str
    ) -> Order:
        campaign = await self.get_campaign(db, organization_id, campaign_id)
        result = await db.execute(
            select(Order).where(Order.id == order_id, Order.campaign_id == campaign.id)
        )
        order = result.scalar_one_or_none()
        if order is None:
            raise NotFoundError("Order", order_id, message="Order not found")
        return order

    async def update_order(
        self,
        db: AsyncSession,
        organization_id: str,
        campaign_id: str,
        order_id: str,
        payload: OrderUpdateRequest,
    ) -> OrderResponse:
        order = await self.get_order(db, organization_id, campaign_id, order_id)
        changes = payload.model_dump(exclude_unset=True)

        status = changes.pop("status", None)
        if status is not None and status != order.status:
            order.status = status
            if status == OrderStatus.SUBMITTED:
                order.submitted_at = utcnow()
            elif status == OrderStatus.COMPLETED:
                order.completed_at = utcnow()
        if "notes" in changes:
            order.notes = changes["notes"]

        await db.flush()
        return OrderResponse.model_validate(order)

    async def delete_order(
        self, db: AsyncSession, organization_id: str, campaign_id: str, order_id: str
    ) -> None:
        order = await self.get_order(db, organization_id, campaign_id, order_id)

        media_count = (
            await db.execute(select(func.count(Media.id)).where(Media.order_id == order.id))
        ).scalar_one()
        if media_count:
            raise ConflictError(
                "Cannot delete order with uploaded media",
                context={"media": media_count},
            )

        await db.execute(delete(Order).where(Order.id == order.id))
        await db.flush()
        logger.info("Order %s deleted", order_id)


campaign_service = CampaignService()
