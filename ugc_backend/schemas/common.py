"""
UGC Agency Backend — Shared Response Schemas
==============================================

What:  Response shapes used by many routes: errors, pagination metadata,
       `{success: true}` acknowledgements, and the health check.
Why:   One definition per contract keeps the OpenAPI docs consistent.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Fields:
        error:      Human-readable description (safe to show to users)
        code:       Machine-readable error code (e.g. "forbidden", "not_found")
        details:    Optional extra context (e.g. which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "Not a member of this organization",
            "code": "forbidden",
            "details": {},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
    stack: Optional[str] = Field(default=None, description="Traceback (development only)")


class PaginationMeta(BaseModel):
    """Offset pagination metadata returned by every list endpoint."""
    page: int = Field(description="Current page (1-based)")
    limit: int = Field(description="Page size")
    total: int = Field(description="Total rows matching the filters")
    pages: int = Field(description="Total number of pages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit) if limit else 0)


class SuccessResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    """
    What:  Liveness/readiness check body for GET /health.
    Why:   A backend that cannot reach its database is effectively down.
    """
    status: str = Field(description="ok or degraded")
    timestamp: str = Field(description="Server time (UTC ISO 8601)")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def reject_null(value: Any) -> Any:
    """
    Shared body for PATCH validators on NOT NULL columns.

    Such fields may be omitted but never cleared: an explicit `null` is a
    400 validation error instead of an IntegrityError at flush.
    """
    if value is None:
        raise ValueError("may not be null")
    return value
