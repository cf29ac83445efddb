"""
UGC Agency Backend — Organization Service
===========================================

What:  Organization CRUD and membership management.
Why:   These routes sit outside the organization gate (a user needs them to
       *join* or *create* a tenant), so each operation checks membership
       itself against the OrganizationMember row for (org, caller).

Permission rules:
    list / create        any authenticated user (list is their own memberships)
    members              any member of the organization
    update / invite      members with org role OWNER or ADMIN
"""

import logging
from typing import Dict, List

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ugc_backend.dependencies import OrgContext, find_membership
from ugc_backend.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from ugc_backend.models.campaign import Campaign
from ugc_backend.models.client import Client
from ugc_backend.models.enums import ORG_MANAGER_ROLES, MemberRole
from ugc_backend.models.organization import Organization, OrganizationMember
from ugc_backend.models.user import User
from ugc_backend.schemas.organization import (
    CurrentOrganizationResponse,
    InviteMemberRequest,
    MemberListResponse,
    MemberResponse,
    OrganizationCounts,
    OrganizationCreateRequest,
    OrganizationListItem,
    OrganizationListResponse,
    OrganizationResponse,
    OrganizationUpdateRequest,
)
from ugc_backend.schemas.user import UserSummary
from ugc_backend.services.pagination import paginate

logger = logging.getLogger(__name__)


async def _grouped_counts(db: AsyncSession, column, ids: List[str]) -> Dict[str, int]:
    if not ids:
        return {}
    result = await db.execute(
        select(column, func.count()).where(column.in_(ids)).group_by(column)
    )
    return {key: count for key, count in result.all()}


class OrganizationService:

    async def list_for_user(
        self, db: AsyncSession, user: User, page: int = 1, limit: int = 10
    ) -> OrganizationListResponse:
        stmt = (
            select(Organization, OrganizationMember.role)
            .join(OrganizationMember, OrganizationMember.organization_id == Organization.id)
            .where(OrganizationMember.user_id == user.id)
            .order_by(OrganizationMember.joined_at.asc())
        )
        rows, pagination = await paginate(db, stmt, page, limit)

        ids = [org.id for org, _ in rows]
        members = await _grouped_counts(db, OrganizationMember.organization_id, ids)
        campaigns = await _grouped_counts(db, Campaign.organization_id, ids)
        clients = await _grouped_counts(db, Client.organization_id, ids)

        items = [
            OrganizationListItem(
                **OrganizationResponse.model_validate(org).model_dump(),
                user_role=role,
                counts=OrganizationCounts(
                    members=members.get(org.id, 0),
                    campaigns=campaigns.get(org.id, 0),
                    clients=clients.get(org.id, 0),
                ),
            )
            for org, role in rows
        ]
        return OrganizationListResponse(organizations=items, pagination=pagination)

    def current(self, ctx: OrgContext) -> CurrentOrganizationResponse:
        return CurrentOrganizationResponse(
            organization=OrganizationResponse.model_validate(ctx.organization),
            user_role=ctx.organization_role,
        )

    async def _ensure_slug_free(self, db: AsyncSession, slug: str) -> None:
        taken = await db.execute(select(Organization.id).where(Organization.slug == slug))
        if taken.first() is not None:
            raise ConflictError("Organization slug already taken", context={"field": "slug"})

    async def create(
        self, db: AsyncSession, user: User, payload: OrganizationCreateRequest
    ) -> OrganizationResponse:
        """Create an organization with the caller as its OWNER."""
        await self._ensure_slug_free(db, payload.slug)

        organization = Organization(
            name=payload.name,
            slug=payload.slug,
            logo=str(payload.logo) if payload.logo else None,
        )
        db.add(organization)
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError("Organization slug already taken", context={"field": "slug"})

        db.add(OrganizationMember(
            organization_id=organization.id,
            user_id=user.id,
            role=MemberRole.OWNER,
        ))
        await db.flush()
        logger.info("Organization %s (%s) created by %s", organization.id, organization.slug, user.id)
        return OrganizationResponse.model_validate(organization)

    async def _require_member(
        self, db: AsyncSession, organization_id: str, user: User, managers_only: bool = False
    ) -> OrganizationMember:
        membership = await find_membership(db, organization_id, user.id)
        if membership is None:
            raise PermissionDeniedError("Not a member of this organization")
        if managers_only and membership.role not in ORG_MANAGER_ROLES:
            raise PermissionDeniedError("Only organization owners and admins can do this")
        return membership

    async def _get(self, db: AsyncSession, organization_id: str) -> Organization:
        organization = await db.get(Organization, organization_id)
        if organization is None:
            raise NotFoundError("Organization", organization_id)
        return organization

    async def update(
        self,
        db: AsyncSession,
        user: User,
        organization_id: str,
        payload: OrganizationUpdateRequest,
    ) -> OrganizationResponse:
        organization = await self._get(db, organization_id)
        await self._require_member(db, organization_id, user, managers_only=True)

        changes = payload.model_dump(exclude_unset=True)
        if "slug" in changes and changes["slug"] != organization.slug:
            await self._ensure_slug_free(db, changes["slug"])
        if changes.get("logo") is not None:
            changes["logo"] = str(changes["logo"])

        for field, value in changes.items():
            setattr(organization, field, value)
        await db.flush()
        return OrganizationResponse.model_validate(organization)

    async def list_members(
        self, db: AsyncSession, user: User, organization_id: str
    ) -> MemberListResponse:
        await self._get(db, organization_id)
        await self._require_member(db, organization_id, user)

        result = await db.execute(
            select(OrganizationMember)
            .options(selectinload(OrganizationMember.user))
            .where(OrganizationMember.organization_id == organization_id)
            .order_by(OrganizationMember.joined_at.asc())
        )
        members = [MemberResponse.model_validate(m) for m in result.scalars().all()]
        return MemberListResponse(members=members)

    async def invite(
        self,
        db: AsyncSession,
        user: User,
        organization_id: str,
        payload: InviteMemberRequest,
    ) -> MemberResponse:
        """Add an existing user to the organization."""
        await self._get(db, organization_id)
        await self._require_member(db, organization_id, user, managers_only=True)

        invitee = (
            await db.execute(select(User).where(User.email == payload.email.lower()))
        ).scalar_one_or_none()
        if invitee is None:
            raise NotFoundError("User", message="User not found")

        if await find_membership(db, organization_id, invitee.id) is not None:
            raise ConflictError("User is already a member")

        membership = OrganizationMember(
            organization_id=organization_id,
            user_id=invitee.id,
            role=payload.role,
        )
        db.add(membership)
        await db.flush()
        logger.info("User %s added to organization %s as %s", invitee.id, organization_id, payload.role.value)

        return MemberResponse(
            id=membership.id,
            organization_id=organization_id,
            role=membership.role,
            joined_at=membership.joined_at,
            user=UserSummary.model_validate(invitee),
        )


organization_service = OrganizationService()
