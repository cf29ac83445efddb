"""
UGC Agency Backend — Organization Routes
==========================================

What:  /api/organizations: list, create and manage the caller's tenants.
Gates: auth only; membership is checked per operation because a caller
       needs these routes before they belong to any organization.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import AuthContext, OrgContext, get_current_user, resolve_organization
from ugc_backend.schemas.common import ErrorResponse
from ugc_backend.schemas.organization import (
    CurrentOrganizationResponse,
    InviteMemberRequest,
    MemberListResponse,
    MemberResponse,
    OrganizationCreateRequest,
    OrganizationListResponse,
    OrganizationResponse,
    OrganizationUpdateRequest,
)
from ugc_backend.services.organization_service import organization_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/organizations",
    tags=["Organizations"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get("", response_model=OrganizationListResponse, summary="Organizations the caller belongs to")
async def list_organizations(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> OrganizationListResponse:
    return await organization_service.list_for_user(db, auth.user, page=page, limit=limit)


@router.get(
    "/current",
    response_model=CurrentOrganizationResponse,
    responses={404: {"description": "No organization found", "model": ErrorResponse}},
    summary="The active organization",
)
async def current_organization(ctx: OrgContext = Depends(resolve_organization)) -> CurrentOrganizationResponse:
    """X-Organization-ID when sent (membership verified), else the first membership."""
    return organization_service.current(ctx)


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Slug already taken", "model": ErrorResponse}},
    summary="Create an organization",
)
async def create_organization(
    payload: OrganizationCreateRequest,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> OrganizationResponse:
    return await organization_service.create(db, auth.user, payload)


@router.patch(
    "/{organization_id}",
    response_model=OrganizationResponse,
    responses={403: {"description": "OWNER or ADMIN membership required", "model": ErrorResponse}},
    summary="Update an organization",
)
async def update_organization(
    organization_id: str,
    payload: OrganizationUpdateRequest,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> OrganizationResponse:
    return await organization_service.update(db, auth.user, organization_id, payload)


@router.get(
    "/{organization_id}/members",
    response_model=MemberListResponse,
    responses={403: {"description": "Not a member", "model": ErrorResponse}},
    summary="List members",
)
async def list_members(
    organization_id: str,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MemberListResponse:
    return await organization_service.list_members(db, auth.user, organization_id)


@router.post(
    "/{organization_id}/invite",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "User is already a member", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Add an existing user",
)
async def invite_member(
    organization_id: str,
    payload: InviteMemberRequest,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MemberResponse:
    return await organization_service.invite(db, auth.user, organization_id, payload)
