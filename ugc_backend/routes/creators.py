"""
UGC Agency Backend — Creator Routes
=====================================

What:  /api/creators: users with the CREATOR role.
Gates: auth only; creators are global users, not organization rows.
       Create and delete additionally need ADMIN/STAFF, update needs the
       creator themself or ADMIN/STAFF (checked in the service).
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import AuthContext, get_current_user
from ugc_backend.schemas.common import ErrorResponse, SuccessResponse
from ugc_backend.schemas.creator import (
    AvailabilityResponse,
    CreatorCreateRequest,
    CreatorDetailResponse,
    CreatorListResponse,
    CreatorStatsResponse,
    CreatorUpdateRequest,
)
from ugc_backend.schemas.user import UserResponse
from ugc_backend.services.creator_service import creator_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/creators",
    tags=["Creators"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get("", response_model=CreatorListResponse, summary="List creators")
async def list_creators(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    search: Optional[str] = Query(default=None, description="Matches name, email or bio"),
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> CreatorListResponse:
    return await creator_service.list_creators(db, page=page, limit=limit, search=search)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Email already registered", "model": ErrorResponse},
        403: {"description": "ADMIN or STAFF only", "model": ErrorResponse},
    },
    summary="Onboard a creator",
)
async def create_creator(
    payload: CreatorCreateRequest,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await creator_service.create_creator(db, auth, payload)


@router.get(
    "/{creator_id}",
    response_model=CreatorDetailResponse,
    responses={404: {"description": "Creator not found", "model": ErrorResponse}},
    summary="Creator detail with recent orders",
)
async def get_creator(
    creator_id: str,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> CreatorDetailResponse:
    return await creator_service.get_detail(db, creator_id)


@router.patch(
    "/{creator_id}",
    response_model=UserResponse,
    responses={403: {"description": "Not the creator and not staff", "model": ErrorResponse}},
    summary="Update a creator profile",
)
async def update_creator(
    creator_id: str,
    payload: CreatorUpdateRequest,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await creator_service.update_creator(db, auth, creator_id, payload)


@router.get("/{creator_id}/availability", response_model=AvailabilityResponse, summary="Creator availability")
async def get_availability(
    creator_id: str,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> AvailabilityResponse:
    return await creator_service.availability(db, creator_id)


@router.get("/{creator_id}/stats", response_model=CreatorStatsResponse, summary="Creator statistics")
async def get_stats(
    creator_id: str,
    period: Literal["7d", "30d", "90d"] = Query(default="30d"),
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> CreatorStatsResponse:
    return await creator_service.stats(db, creator_id, period)


@router.delete(
    "/{creator_id}",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Creator has orders", "model": ErrorResponse},
        403: {"description": "ADMIN or STAFF only", "model": ErrorResponse},
    },
    summary="Delete a creator",
)
async def delete_creator(
    creator_id: str,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await creator_service.delete_creator(db, auth, creator_id)
    return SuccessResponse()
