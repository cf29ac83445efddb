"""/api/users: the caller's own profile, and the admin role switcher."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import AuthContext, get_current_user, require_roles
from ugc_backend.models.enums import UserRole
from ugc_backend.schemas.common import ErrorResponse
from ugc_backend.schemas.user import ProfileUpdateRequest, SwitchRoleRequest, UserResponse
from ugc_backend.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.patch("/profile", response_model=UserResponse, summary="Update own profile")
async def update_profile(
    payload: ProfileUpdateRequest,
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.update_profile(db, auth.user, payload)


@router.post(
    "/switch-role",
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid role", "model": ErrorResponse},
        403: {"description": "ADMIN only", "model": ErrorResponse},
    },
    summary="Change a user's global role",
)
async def switch_role(
    payload: SwitchRoleRequest,
    auth: AuthContext = Depends(require_roles(UserRole.ADMIN)),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.switch_role(db, auth.user, payload)
