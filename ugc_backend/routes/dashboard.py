"""/api/dashboard: headline counts and recent activity for the active organization."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.dependencies import OrgContext, resolve_organization
from ugc_backend.schemas.common import ErrorResponse
from ugc_backend.schemas.dashboard import DashboardActivitiesResponse, DashboardStatsResponse
from ugc_backend.services.dashboard_service import dashboard_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["Dashboard"],
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "No organization found", "model": ErrorResponse},
    },
)


@router.get("/stats", response_model=DashboardStatsResponse, summary="Organization statistics")
async def get_stats(
    ctx: OrgContext = Depends(resolve_organization),
    db: AsyncSession = Depends(get_db_session),
) -> DashboardStatsResponse:
    return await dashboard_service.stats(db, ctx.org_id)


@router.get("/activities", response_model=DashboardActivitiesResponse, summary="Recent activity")
async def get_activities(
    ctx: OrgContext = Depends(resolve_organization),
    db: AsyncSession = Depends(get_db_session),
) -> DashboardActivitiesResponse:
    return await dashboard_service.activities(db, ctx.org_id)
