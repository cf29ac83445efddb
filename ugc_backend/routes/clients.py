"""
UGC Agency Backend — Client Routes
====================================

What:  /api/clients, the brands an organization produces content for.
Gates: auth + organization + global role ADMIN or STAFF, applied to the
       whole router.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import OrgContext, require_organization, require_roles
from ugc_backend.models.enums import ClientStatus, UserRole
from ugc_backend.schemas.client import (
    ClientCreateRequest,
    ClientCreatorsResponse,
    ClientDetailResponse,
    ClientListResponse,
    ClientResponse,
    ClientUpdateRequest,
)
from ugc_backend.schemas.common import ErrorResponse, SuccessResponse
from ugc_backend.services.client_service import client_service

logger = logging.getLogger(__name__)

staff_in_organization = require_roles(UserRole.ADMIN, UserRole.STAFF, base=require_organization)

router = APIRouter(
    prefix="/api/clients",
    tags=["Clients"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        403: {"description": "Insufficient permissions or not a member", "model": ErrorResponse},
    },
)


@router.get("", response_model=ClientListResponse, summary="List clients")
async def list_clients(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    search: Optional[str] = Query(default=None, description="Matches name, email or company"),
    status_filter: Optional[ClientStatus] = Query(default=None, alias="status"),
    ctx: OrgContext = Depends(staff_in_organization),
    db: AsyncSession = Depends(get_db_session),
) -> ClientListResponse:
    return await client_service.list_clients(
        db, ctx.org_id, page=page, limit=limit, search=search, status=status_filter
    )


@router.get(
    "/{client_id}",
    response_model=ClientDetailResponse,
    responses={404: {"description": "Client not found", "model": ErrorResponse}},
    summary="Client detail with recent campaigns",
)
async def get_client(
    client_id: str,
    ctx: OrgContext = Depends(staff_in_organization),
    db: AsyncSession = Depends(get_db_session),
) -> ClientDetailResponse:
    return await client_service.get_detail(db, ctx.org_id, client_id)


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Email already used in this organization", "model": ErrorResponse}},
    summary="Create a client",
)
async def create_client(
    payload: ClientCreateRequest,
    ctx: OrgContext = Depends(staff_in_organization),
    db: AsyncSession = Depends(get_db_session),
) -> ClientResponse:
    return await client_service.create_client(db, ctx.org_id, payload)


@router.patch("/{client_id}", response_model=ClientResponse, summary="Update a client")
async def update_client(
    client_id: str,
    payload: ClientUpdateRequest,
    ctx: OrgContext = Depends(staff_in_organization),
    db: AsyncSession = Depends(get_db_session),
) -> ClientResponse:
    return await client_service.update_client(db, ctx.org_id, client_id, payload)


@router.delete(
    "/{client_id}",
    response_model=SuccessResponse,
    responses={400: {"description": "Client has active campaigns", "model": ErrorResponse}},
    summary="Archive a client",
)
async def archive_client(
    client_id: str,
    ctx: OrgContext = Depends(staff_in_organization),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await client_service.archive_client(db, ctx.org_id, client_id)
    return SuccessResponse()


@router.get(
    "/{client_id}/creators",
    response_model=ClientCreatorsResponse,
    summary="Creators who worked for this client",
)
async def list_client_creators(
    client_id: str,
    ctx: OrgContext = Depends(staff_in_organization),
    db: AsyncSession = Depends(get_db_session),
) -> ClientCreatorsResponse:
    return await client_service.list_client_creators(db, ctx.org_id, client_id)
