"""
UGC Agency Backend — Organization and Membership Models
========================================================

What:  `organizations` (the tenant) and `organization_members` (who belongs).
Why:   Every client, campaign, order, media item and message traces back to
       exactly one organization id. Membership rows are the only source of a
       user's role *inside* an organization.

Invariant:
    (organization_id, user_id) is unique, so a user has one role per
    organization. The Organization Gate looks up exactly this pair.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ugc_backend.database import Base
from ugc_backend.models.enums import MemberRole, enum_column
from ugc_backend.models.mixins import IdMixin, TimestampMixin, utcnow
from ugc_backend.models.user import User


class Organization(IdMixin, TimestampMixin, Base):
    """An agency workspace; the root of multi-tenant scoping."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # URL-safe handle, lowercase letters, digits and dashes
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    logo: Mapped[Optional[str]] = mapped_column(String(500))

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, slug={self.slug!r})>"


class OrganizationMember(IdMixin, Base):
    """Join row: user X holds role R in organization O."""

    __tablename__ = "organization_members"

    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    role: Mapped[MemberRole] = mapped_column(
        enum_column(MemberRole), nullable=False, default=MemberRole.MEMBER
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # lazy="raise": async sessions cannot lazy-load; callers eager-load explicitly
    organization: Mapped[Organization] = relationship(lazy="raise")
    user: Mapped[User] = relationship(lazy="raise")

    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_organization_members_org_user"),
        Index("idx_organization_members_user", "user_id", "joined_at"),
    )
