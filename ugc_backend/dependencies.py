"""
UGC Agency Backend — Auth, Role and Organization Gates
========================================================

What:  FastAPI dependencies that identify the caller and fix the tenant.
Why:   Every organization-scoped query downstream filters by the
       organization id these gates resolve; handlers never trust an org id
       from the request body.
How:   Composed per router or per endpoint:

    get_current_user          → 401 if the bearer token is missing/invalid,
                                or names a user that no longer exists
    require_organization      → 400 without X-Organization-ID,
                                403 if the caller is not a member
    require_roles(*roles)     → 403 if the caller's global role is not allowed;
                                `base=` layers it on another gate
    resolve_organization      → header org if given (membership verified),
                                else the caller's first membership

    Request ─▶ get_current_user ─▶ require_organization ─▶ require_roles ─▶ handler
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ugc_backend.database import get_db_session
from ugc_backend.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from ugc_backend.models.enums import MemberRole, UserRole
from ugc_backend.models.organization import Organization, OrganizationMember
from ugc_backend.models.user import User
from ugc_backend.security import token_issuer

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must produce our 401 body, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)

ORGANIZATION_HEADER = "X-Organization-ID"


@dataclass
class AuthContext:
    """
    The resolved caller.

    organization_id starts as the caller's first membership (may be None).
    The organization gate replaces it with the header org and fills in
    `organization` and `organization_role`.
    """
    user: User
    organization_id: Optional[str] = None
    organization: Optional[Organization] = None
    organization_role: Optional[MemberRole] = None

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def role(self) -> Optional[UserRole]:
        return self.user.role

    def has_role(self, *roles: UserRole) -> bool:
        return self.user.role is not None and self.user.role in roles


@dataclass
class OrgContext(AuthContext):
    """An AuthContext that passed the organization gate; organization fields are set."""

    @property
    def org_id(self) -> str:
        # Always the gate-verified id, never a client-supplied one
        return self.organization_id  # type: ignore[return-value]

    def is_org_manager(self) -> bool:
        return self.organization_role in (MemberRole.OWNER, MemberRole.ADMIN)


async def first_membership(db: AsyncSession, user_id: str) -> Optional[OrganizationMember]:
    result = await db.execute(
        select(OrganizationMember)
        .where(OrganizationMember.user_id == user_id)
        .order_by(OrganizationMember.joined_at.asc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def find_membership(
    db: AsyncSession, organization_id: str, user_id: str
) -> Optional[OrganizationMember]:
    result = await db.execute(
        select(OrganizationMember).where(
            OrganizationMember.organization_id == organization_id,
            OrganizationMember.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> AuthContext:
    """
    Resolve the bearer token to a User row.

    The role in the token is informational only; the user is re-read so a
    role change or deletion takes effect immediately.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")

    payload = token_issuer.verify(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid token")

    user = await db.get(User, payload.user_id)
    if user is None:
        logger.info("Token for deleted user %s rejected", payload.user_id)
        raise AuthenticationError("User not found")

    membership = await first_membership(db, user.id)
    return AuthContext(
        user=user,
        organization_id=membership.organization_id if membership else None,
    )


async def require_organization(
    x_organization_id: Optional[str] = Header(default=None, alias=ORGANIZATION_HEADER),
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> OrgContext:
    """
    The tenancy boundary: the caller must be a member of the header org.

    A global ADMIN is not exempt; membership is the only way in.
    """
    if not x_organization_id:
        raise ValidationError("Organization ID required", field=ORGANIZATION_HEADER)

    membership = await find_membership(db, x_organization_id, auth.user.id)
    if membership is None:
        logger.warning(
            "User %s denied access to organization %s (not a member)",
            auth.user.id,
            x_organization_id,
        )
        raise PermissionDeniedError("Not a member of this organization")

    organization = await db.get(Organization, x_organization_id)
    return OrgContext(
        user=auth.user,
        organization_id=membership.organization_id,
        organization=organization,
        organization_role=membership.role,
    )


def require_roles(
    *roles: UserRole,
    base: Callable[..., object] = get_current_user,
) -> Callable[..., object]:
    """
    Build a dependency that allows only the given global roles.

    Example:
        staff_only = require_roles(UserRole.ADMIN, UserRole.STAFF)
        staff_in_org = require_roles(UserRole.ADMIN, UserRole.STAFF, base=require_organization)
    """
    allowed = frozenset(roles)

    async def role_gate(auth: AuthContext = Depends(base)) -> AuthContext:
        if auth.user.role is None or auth.user.role not in allowed:
            raise PermissionDeniedError("Insufficient permissions")
        return auth

    return role_gate


async def resolve_organization(
    x_organization_id: Optional[str] = Header(default=None, alias=ORGANIZATION_HEADER),
    auth: AuthContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> OrgContext:
    """
    Organization for routes that do not require the header (dashboard,
    /organizations/current): the header org when sent, else the first
    membership. 404 if the caller belongs to no organization.
    """
    if x_organization_id:
        return await require_organization(x_organization_id, auth, db)

    membership = await first_membership(db, auth.user.id)
    if membership is None:
        raise NotFoundError("Organization", message="No organization found")

    organization = await db.get(Organization, membership.organization_id)
    return OrgContext(
        user=auth.user,
        organization_id=membership.organization_id,
        organization=organization,
        organization_role=membership.role,
    )
