"""
UGC Agency Backend — Auth Routes
==================================

What:  Sign-up, sign-in, sign-out and the current-user lookup.
Who:   The frontend login and registration screens; `/me` on every reload.

Tokens are stateless HS256 JWTs (7 days by default); sign-out is
acknowledged but there is nothing to revoke server-side.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import AuthContext, get_current_user
from ugc_backend.schemas.auth import AuthResponse, MeResponse, SignInRequest, SignUpRequest
from ugc_backend.schemas.common import ErrorResponse, SuccessResponse
from ugc_backend.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/sign-up",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid input or user already exists", "model": ErrorResponse}},
    summary="Register a new account",
)
async def sign_up(payload: SignUpRequest, db: AsyncSession = Depends(get_db_session)) -> AuthResponse:
    """
    Create a CLIENT account and return a bearer token for it.

    Passing `organization_name` also creates an organization owned by the
    new user.
    """
    return await auth_service.sign_up(db, payload)


@router.post(
    "/sign-in",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Exchange email and password for a token",
)
async def sign_in(payload: SignInRequest, db: AsyncSession = Depends(get_db_session)) -> AuthResponse:
    return await auth_service.sign_in(db, payload)


@router.post("/sign-out", response_model=SuccessResponse, summary="Sign out")
async def sign_out() -> SuccessResponse:
    # Stateless tokens; the client discards its copy
    return SuccessResponse()


@router.get(
    "/me",
    response_model=MeResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Current user and their first organization",
)
async def me(auth: AuthContext = Depends(get_current_user)) -> MeResponse:
    return auth_service.me(auth)
