"""
UGC Agency Backend — Client Service
=====================================

What:  CRUD for the brands an organization works for.
Who:   /api/clients (organization gate + ADMIN/STAFF role gate).

Rules:
    - Every query filters by the gate-verified organization id; a client of
      another organization is reported as not found.
    - Email is unique per organization (400 on duplicates).
    - Deleting archives: status → ARCHIVED, refused with 400 while any of the
      client's campaigns is still non-terminal (not COMPLETED/CANCELLED).
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.exceptions import ConflictError, NotFoundError
from ugc_backend.models.campaign import Campaign, Order
from ugc_backend.models.client import Client
from ugc_backend.models.enums import TERMINAL_CAMPAIGN_STATUSES, ClientStatus
from ugc_backend.models.user import User
from ugc_backend.schemas.client import (
    ClientCampaignItem,
    ClientCreateRequest,
    ClientCreatorItem,
    ClientCreatorsResponse,
    ClientDetailResponse,
    ClientListItem,
    ClientListResponse,
    ClientResponse,
    ClientUpdateRequest,
)
from ugc_backend.services.pagination import paginate

logger = logging.getLogger(__name__)


class ClientService:

    async def get_client(self, db: AsyncSession, organization_id: str, client_id: str) -> Client:
        """Fetch a client by id within the organization, or raise NotFoundError."""
        result = await db.execute(
            select(Client).where(Client.id == client_id, Client.organization_id == organization_id)
        )
        client = result.scalar_one_or_none()
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    async def _ensure_email_free(
        self, db: AsyncSession, organization_id: str, email: str, exclude_id: Optional[str] = None
    ) -> None:
        stmt = select(Client.id).where(Client.organization_id == organization_id, Client.email == email)
        if exclude_id:
            stmt = stmt.where(Client.id != exclude_id)
        if (await db.execute(stmt)).first() is not None:
            raise ConflictError("Client with this email already exists", context={"field": "email"})

    async def list_clients(
        self,
        db: AsyncSession,
        organization_id: str,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        status: Optional[ClientStatus] = None,
    ) -> ClientListResponse:
        campaign_count = (
            select(func.count(Campaign.id))
            .where(Campaign.client_id == Client.id)
            .correlate(Client)
            .scalar_subquery()
        )
        stmt = (
            select(Client, campaign_count.label("campaign_count"))
            .where(Client.organization_id == organization_id)
            .order_by(Client.created_at.desc())
        )
        if status is not None:
            stmt = stmt.where(Client.status == status)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Client.name).like(pattern),
                func.lower(Client.email).like(pattern),
                func.lower(Client.company).like(pattern),
            ))

        rows, pagination = await paginate(db, stmt, page, limit)
        clients = [
            ClientListItem(**ClientResponse.model_validate(client).model_dump(), campaign_count=count)
            for client, count in rows
        ]
        return ClientListResponse(clients=clients, pagination=pagination)

    async def get_detail(
        self, db: AsyncSession, organization_id: str, client_id: str
    ) -> ClientDetailResponse:
        client = await self.get_client(db, organization_id, client_id)

        order_count = (
            select(func.count(Order.id))
            .where(Order.campaign_id == Campaign.id)
            .correlate(Campaign)
            .scalar_subquery()
        )
        result = await db.execute(
            select(Campaign, order_count.label("order_count"))
            .where(Campaign.client_id == client.id, Campaign.organization_id == organization_id)
            .order_by(Campaign.created_at.desc())
            .limit(10)
        )
        campaigns = [
            ClientCampaignItem(
                id=c.id,
                title=c.title,
                status=c.status,
                budget=c.budget,
                deadline=c.deadline,
                created_at=c.created_at,
                order_count=count,
            )
            for c, count in result.all()
        ]
        return ClientDetailResponse(**ClientResponse.model_validate(client).model_dump(), campaigns=campaigns)

    async def create_client(
        self, db: AsyncSession, organization_id: str, payload: ClientCreateRequest
    ) -> ClientResponse:
        email = str(payload.email).lower()
        await self._ensure_email_free(db, organization_id, email)

        client = Client(
            organization_id=organization_id,
            name=payload.name,
            email=email,
            phone=payload.phone,
            company=payload.company,
            website=str(payload.website) if payload.website else None,
            notes=payload.notes,
            status=ClientStatus.ACTIVE,
        )
        db.add(client)
        await db.flush()
        logger.info("Client %s created in organization %s", client.id, organization_id)
        return ClientResponse.model_validate(client)

    async def update_client(
        self, db: AsyncSession, organization_id: str, client_id: str, payload: ClientUpdateRequest
    ) -> ClientResponse:
        client = await self.get_client(db, organization_id, client_id)
        changes = payload.model_dump(exclude_unset=True)

        if changes.get("email") is not None:
            changes["email"] = str(changes["email"]).lower()
            if changes["email"] != client.email:
                await self._ensure_email_free(db, organization_id, changes["email"], exclude_id=client.id)
        if changes.get("website") is not None:
            changes["website"] = str(changes["website"])

        for field, value in changes.items():
            setattr(client, field, value)
        await db.flush()
        return ClientResponse.model_validate(client)

    async def archive_client(self, db: AsyncSession, organization_id: str, client_id: str) -> None:
        """
        Soft-delete a client.

        Raises:
            NotFoundError: client not in this organization
            ConflictError: a campaign for this client is not COMPLETED/CANCELLED
        """
        client = await self.get_client(db, organization_id, client_id)

        active = await db.execute(
            select(func.count(Campaign.id)).where(
                Campaign.client_id == client.id,
                Campaign.status.not_in(TERMINAL_CAMPAIGN_STATUSES),
            )
        )
        active_count = active.scalar_one()
        if active_count:
            raise ConflictError(
                "Cannot delete client with active campaigns",
                context={"active_campaigns": active_count},
            )

        client.status = ClientStatus.ARCHIVED
        await db.flush()
        logger.info("Client %s archived", client.id)

    async def list_client_creators(
        self, db: AsyncSession, organization_id: str, client_id: str
    ) -> ClientCreatorsResponse:
        """Creators holding orders on this client's campaigns, with per-status counts."""
        client = await self.get_client(db, organization_id, client_id)

        result = await db.execute(
            select(Order.creator_id, Order.status, func.count(Order.id))
            .join(Campaign, Campaign.id == Order.campaign_id)
            .where(Campaign.client_id == client.id, Campaign.organization_id == organization_id)
            .group_by(Order.creator_id, Order.status)
        )
        stats: Dict[str, Dict[str, int]] = {}
        for creator_id, status, count in result.all():
            stats.setdefault(creator_id, {})[status.value] = count

        creators: List[ClientCreatorItem] = []
        if stats:
            users = await db.execute(select(User).where(User.id.in_(stats)).order_by(User.name))
            for user in users.scalars().all():
                creators.append(ClientCreatorItem(
                    id=user.id,
                    name=user.name,
                    email=user.email,
                    image=user.image,
                    order_count=sum(stats[user.id].values()),
                    order_stats=stats[user.id],
                ))
        return ClientCreatorsResponse(creators=creators)


client_service = ClientService()
