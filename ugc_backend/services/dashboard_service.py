"""
UGC Agency Backend — Dashboard Service
========================================

What:  Headline counts and recent activity for one organization.
Who:   /api/dashboard; the organization is resolved from X-Organization-ID
       or the caller's first membership.

Definitions:
    active campaigns     status ACTIVE or IN_PROGRESS
    creators             organization members whose global role is CREATOR
    in-progress orders   status ASSIGNED or IN_PROGRESS
    revenue              sum of budgets of campaigns that are not CANCELLED
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.models.campaign import Campaign, Order
from ugc_backend.models.client import Client
from ugc_backend.models.enums import CampaignStatus, ClientStatus, OrderStatus, UserRole
from ugc_backend.models.organization import OrganizationMember
from ugc_backend.models.user import User
from ugc_backend.schemas.dashboard import (
    CampaignCounts,
    ClientCounts,
    CreatorCounts,
    DashboardActivitiesResponse,
    DashboardStatsResponse,
    OrderCounts,
    RecentCampaign,
    RecentClient,
    RecentOrder,
    RevenueSummary,
)

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


class DashboardService:

    async def _scalar(self, db: AsyncSession, stmt) -> int:
        return (await db.execute(stmt)).scalar_one() or 0

    async def stats(self, db: AsyncSession, organization_id: str) -> DashboardStatsResponse:
        campaigns = select(func.count(Campaign.id)).where(Campaign.organization_id == organization_id)
        clients = select(func.count(Client.id)).where(Client.organization_id == organization_id)
        orders = (
            select(func.count(Order.id))
            .join(Campaign, Campaign.id == Order.campaign_id)
            .where(Campaign.organization_id == organization_id)
        )
        creators = (
            select(func.count(OrganizationMember.id))
            .join(User, User.id == OrganizationMember.user_id)
            .where(OrganizationMember.organization_id == organization_id, User.role == UserRole.CREATOR)
        )
        revenue = select(func.coalesce(func.sum(Campaign.budget), 0)).where(
            Campaign.organization_id == organization_id,
            Campaign.status != CampaignStatus.CANCELLED,
        )

        return DashboardStatsResponse(
            organization_id=organization_id,
            campaigns=CampaignCounts(
                total=await self._scalar(db, campaigns),
                active=await self._scalar(db, campaigns.where(
                    Campaign.status.in_((CampaignStatus.ACTIVE, CampaignStatus.IN_PROGRESS))
                )),
            ),
            clients=ClientCounts(
                total=await self._scalar(db, clients),
                active=await self._scalar(db, clients.where(Client.status == ClientStatus.ACTIVE)),
            ),
            creators=CreatorCounts(total=await self._scalar(db, creators)),
            orders=OrderCounts(
                total=await self._scalar(db, orders),
                in_progress=await self._scalar(db, orders.where(
                    Order.status.in_((OrderStatus.ASSIGNED, OrderStatus.IN_PROGRESS))
                )),
                completed=await self._scalar(db, orders.where(Order.status == OrderStatus.COMPLETED)),
            ),
            revenue=RevenueSummary(total=float((await db.execute(revenue)).scalar_one() or 0)),
        )

    async def activities(self, db: AsyncSession, organization_id: str) -> DashboardActivitiesResponse:
        campaigns = await db.execute(
            select(Campaign, Client.name)
            .join(Client, Client.id == Campaign.client_id)
            .where(Campaign.organization_id == organization_id)
            .order_by(Campaign.created_at.desc())
            .limit(RECENT_LIMIT)
        )
        orders = await db.execute(
            select(Order, Campaign.title, User.name)
            .join(Campaign, Campaign.id == Order.campaign_id)
            .join(User, User.id == Order.creator_id)
            .where(Campaign.organization_id == organization_id)
            .order_by(Order.assigned_at.desc())
            .limit(RECENT_LIMIT)
        )
        clients = await db.execute(
            select(Client)
            .where(Client.organization_id == organization_id)
            .order_by(Client.created_at.desc())
            .limit(RECENT_LIMIT)
        )

        return DashboardActivitiesResponse(
            recent_campaigns=[
                RecentCampaign(
                    id=c.id, title=c.title, status=c.status, client_name=client_name, created_at=c.created_at
                )
                for c, client_name in campaigns.all()
            ],
            recent_orders=[
                RecentOrder(
                    id=o.id,
                    status=o.status,
                    campaign_id=o.campaign_id,
                    campaign_title=title,
                    creator_name=creator_name,
                    created_at=o.created_at,
                )
                for o, title, creator_name in orders.all()
            ],
            recent_clients=[
                RecentClient(id=c.id, name=c.name, company=c.company, status=c.status, created_at=c.created_at)
                for c in clients.scalars().all()
            ],
        )


dashboard_service = DashboardService()
