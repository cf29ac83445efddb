"""
UGC Agency Backend — Auth Service
====================================

What:  Sign-up and sign-in: password hashing, credential checks, token issue.
Why:   Keeps the credential rules out of the route handlers so they can be
       tested with a plain session.
How:   bcrypt runs in Starlette's threadpool (it is deliberately slow and
       would otherwise block the event loop for every other request).

Failure modes:
    sign_up  → ConflictError (400) "User already exists"
    sign_in  → AuthenticationError (401) "Invalid credentials", identical for
               unknown email, missing hash and wrong password
"""

import logging
import re
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ugc_backend.dependencies import AuthContext, first_membership
from ugc_backend.exceptions import AuthenticationError, ConflictError
from ugc_backend.models.enums import MemberRole, UserRole
from ugc_backend.models.organization import Organization, OrganizationMember
from ugc_backend.models.user import User
from ugc_backend.schemas.auth import AuthResponse, MeResponse, SignInRequest, SignUpRequest
from ugc_backend.schemas.user import UserResponse
from ugc_backend.security import hash_password, token_issuer, verify_password

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "organization"


class AuthService:
    """Stateless; every method receives the request's session."""

    async def find_user_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    def build_auth_response(self, user: User, organization_id: Optional[str]) -> AuthResponse:
        token = token_issuer.issue(user_id=user.id, email=user.email, role=user.role)
        return AuthResponse(
            token=token,
            user=UserResponse.model_validate(user),
            organization_id=organization_id,
        )

    async def sign_up(self, db: AsyncSession, payload: SignUpRequest) -> AuthResponse:
        """
        Create a CLIENT account (email unverified) and sign it in.

        With `organization_name`, the new user also gets a fresh organization
        as its OWNER; the slug is derived from the name and made unique.
        """
        email = str(payload.email).lower()
        if await self.find_user_by_email(db, email) is not None:
            raise ConflictError("User already exists", context={"field": "email"})

        password_hash = await run_in_threadpool(hash_password, payload.password)
        user = User(
            email=email,
            password_hash=password_hash,
            name=payload.name,
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone,
            role=UserRole.CLIENT,
            email_verified=False,
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same email
            raise ConflictError("User already exists", context={"field": "email"})

        organization_id = None
        if payload.organization_name:
            organization = await self._create_owned_organization(db, user, payload.organization_name)
            organization_id = organization.id

        logger.info("User signed up: %s", user.id)
        return self.build_auth_response(user, organization_id)

    async def _create_owned_organization(self, db: AsyncSession, user: User, name: str) -> Organization:
        slug = slugify(name)
        taken = await db.execute(select(Organization.id).where(Organization.slug == slug))
        if taken.first() is not None:
            slug = f"{slug}-{uuid.uuid4().hex[:6]}"

        organization = Organization(name=name, slug=slug)
        db.add(organization)
        await db.flush()
        db.add(OrganizationMember(organization_id=organization.id, user_id=user.id, role=MemberRole.OWNER))
        await db.flush()
        return organization

    async def sign_in(self, db: AsyncSession, payload: SignInRequest) -> AuthResponse:
        user = await self.find_user_by_email(db, str(payload.email))
        if user is None or not await run_in_threadpool(
            verify_password, payload.password, user.password_hash
        ):
            logger.info("Failed sign-in for %s", payload.email)
            raise AuthenticationError("Invalid credentials")

        membership = await first_membership(db, user.id)
        return self.build_auth_response(user, membership.organization_id if membership else None)

    def me(self, auth: AuthContext) -> MeResponse:
        return MeResponse(
            user=UserResponse.model_validate(auth.user),
            organization_id=auth.organization_id,
        )


# Singleton instance, stateless
auth_service = AuthService()
