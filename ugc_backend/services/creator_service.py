"""
UGC Agency Backend — Creator Service
======================================

What:  Creators are Users with role CREATOR; this service lists, onboards,
       edits and removes them and reports on their orders.
Who:   /api/creators (auth only: creators are global users, not tenants).

Permission rules:
    create / delete     global ADMIN or STAFF
    update              the creator themself, or ADMIN / STAFF
    read                any authenticated user

Deletion:
    Hard delete, refused with 400 while any order references the creator.
    Orders keep the agency's history; there is no silent cascade.
"""

import logging
from datetime import timedelta
from typing import Dict, List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ugc_backend.config import settings
from ugc_backend.dependencies import AuthContext
from ugc_backend.exceptions import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from ugc_backend.models.campaign import Campaign, Order
from ugc_backend.models.enums import STAFF_ROLES, OrderStatus, UserRole
from ugc_backend.models.media import Media
from ugc_backend.models.mixins import utcnow
from ugc_backend.models.user import User
from ugc_backend.schemas.creator import (
    AvailabilityResponse,
    CreatorCreateRequest,
    CreatorDetailResponse,
    CreatorListItem,
    CreatorListResponse,
    CreatorOrderItem,
    CreatorStatsResponse,
    CreatorUpdateRequest,
)
from ugc_backend.schemas.user import UserResponse
from ugc_backend.security import hash_password
from ugc_backend.services.pagination import paginate

logger = logging.getLogger(__name__)

# Orders that still need work from the creator
ACTIVE_ORDER_STATUSES = (OrderStatus.NEW, OrderStatus.IN_PROGRESS, OrderStatus.SUBMITTED)
# Orders that block the creator's calendar
BUSY_ORDER_STATUSES = (OrderStatus.NEW, OrderStatus.IN_PROGRESS)

STATS_PERIODS = {"7d": 7, "30d": 30, "90d": 90}


class CreatorService:

    async def get_creator(self, db: AsyncSession, creator_id: str) -> User:
        result = await db.execute(
            select(User).where(User.id == creator_id, User.role == UserRole.CREATOR)
        )
        creator = result.scalar_one_or_none()
        if creator is None:
            raise NotFoundError("Creator", creator_id)
        return creator

    async def _orders(
        self, db: AsyncSession, creator_id: str, statuses=None, limit: Optional[int] = None
    ) -> List[CreatorOrderItem]:
        stmt = (
            select(Order, Campaign.title)
            .join(Campaign, Campaign.id == Order.campaign_id)
            .where(Order.creator_id == creator_id)
            .order_by(Order.assigned_at.desc())
        )
        if statuses:
            stmt = stmt.where(Order.status.in_(statuses))
        if limit:
            stmt = stmt.limit(limit)
        result = await db.execute(stmt)
        return [
            CreatorOrderItem(
                id=order.id,
                campaign_id=order.campaign_id,
                campaign_title=title,
                status=order.status,
                assigned_at=order.assigned_at,
                submitted_at=order.submitted_at,
                completed_at=order.completed_at,
            )
            for order, title in result.all()
        ]

    async def _count_orders(self, db: AsyncSession, creator_id: str, statuses=None) -> int:
        stmt = select(func.count(Order.id)).where(Order.creator_id == creator_id)
        if statuses:
            stmt = stmt.where(Order.status.in_(statuses))
        return (await db.execute(stmt)).scalar_one()

    async def list_creators(
        self, db: AsyncSession, page: int = 1, limit: int = 10, search: Optional[str] = None
    ) -> CreatorListResponse:
        order_count = (
            select(func.count(Order.id))
            .where(Order.creator_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        completed_count = (
            select(func.count(Order.id))
            .where(Order.creator_id == User.id, Order.status == OrderStatus.COMPLETED)
            .correlate(User)
            .scalar_subquery()
        )
        stmt = (
            select(User, order_count.label("order_count"), completed_count.label("completed_orders"))
            .where(User.role == UserRole.CREATOR)
            .order_by(User.created_at.desc())
        )
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(or_(
                func.lower(User.name).like(pattern),
                func.lower(User.email).like(pattern),
                func.lower(User.bio).like(pattern),
            ))

        rows, pagination = await paginate(db, stmt, page, limit)
        creators = [
            CreatorListItem(
                **UserResponse.model_validate(user).model_dump(),
                order_count=orders,
                completed_orders=completed,
            )
            for user, orders, completed in rows
        ]
        return CreatorListResponse(creators=creators, pagination=pagination)

    async def get_detail(self, db: AsyncSession, creator_id: str) -> CreatorDetailResponse:
        creator = await self.get_creator(db, creator_id)
        return CreatorDetailResponse(
            **UserResponse.model_validate(creator).model_dump(),
            orders=await self._orders(db, creator.id, limit=10),
            completed_orders=await self._count_orders(db, creator.id, (OrderStatus.COMPLETED,)),
            active_orders=await self._count_orders(db, creator.id, ACTIVE_ORDER_STATUSES),
        )

    async def create_creator(
        self, db: AsyncSession, auth: AuthContext, payload: CreatorCreateRequest
    ) -> UserResponse:
        """
        Onboard a creator account with the configured temporary password.

        The creator is expected to change it on first sign-in.
        """
        if not auth.has_role(*STAFF_ROLES):
            raise PermissionDeniedError()

        email = str(payload.email).lower()
        existing = await db.execute(select(User.id).where(User.email == email))
        if existing.first() is not None:
            raise ConflictError("User with this email already exists", context={"field": "email"})

        creator = User(
            email=email,
            name=payload.name,
            phone=payload.phone,
            bio=payload.bio,
            role=UserRole.CREATOR,
            email_verified=False,
            password_hash=await run_in_threadpool(hash_password, settings.creator_temp_password),
        )
        db.add(creator)
        await db.flush()
        logger.info("Creator %s onboarded by %s", creator.id, auth.user_id)
        return UserResponse.model_validate(creator)

    async def update_creator(
        self, db: AsyncSession, auth: AuthContext, creator_id: str, payload: CreatorUpdateRequest
    ) -> UserResponse:
        creator = await self.get_creator(db, creator_id)
        if creator.id != auth.user_id and not auth.has_role(*STAFF_ROLES):
            raise PermissionDeniedError()

        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(creator, field, value)
        await db.flush()
        return UserResponse.model_validate(creator)

    async def availability(self, db: AsyncSession, creator_id: str) -> AvailabilityResponse:
        creator = await self.get_creator(db, creator_id)
        return AvailabilityResponse(
            creator_id=creator.id,
            active_orders=await self._orders(db, creator.id, BUSY_ORDER_STATUSES),
        )

    async def stats(self, db: AsyncSession, creator_id: str, period: str = "30d") -> CreatorStatsResponse:
        """Orders and media grouped by status since the start of `period`."""
        if period not in STATS_PERIODS:
            raise ValidationError(
                "Invalid period",
                field="period",
                context={"allowed": list(STATS_PERIODS)},
            )
        creator = await self.get_creator(db, creator_id)
        since = utcnow() - timedelta(days=STATS_PERIODS[period])

        orders = await db.execute(
            select(Order.status, func.count(Order.id))
            .where(Order.creator_id == creator.id, Order.created_at >= since)
            .group_by(Order.status)
        )
        orders_by_status: Dict[str, int] = {status.value: count for status, count in orders.all()}

        media = await db.execute(
            select(Media.status, func.count(Media.id))
            .where(Media.uploaded_by_id == creator.id, Media.created_at >= since)
            .group_by(Media.status)
        )
        media_by_status: Dict[str, int] = {status.value: count for status, count in media.all()}

        return CreatorStatsResponse(
            period=period,
            since=since,
            orders_by_status=orders_by_status,
            media_by_status=media_by_status,
            total_orders=sum(orders_by_status.values()),
        )

    async def delete_creator(self, db: AsyncSession, auth: AuthContext, creator_id: str) -> None:
        if not auth.has_role(*STAFF_ROLES):
            raise PermissionDeniedError()

        creator = await self.get_creator(db, creator_id)
        if await self._count_orders(db, creator.id):
            raise ConflictError("Cannot delete creator with existing orders. Archive them instead.")

        await db.execute(delete(User).where(User.id == creator.id))
        logger.info("Creator %s deleted by %s", creator_id, auth.user_id)


creator_service = CreatorService()
