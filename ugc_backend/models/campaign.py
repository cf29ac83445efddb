"""
UGC Agency Backend — Campaign and Order Models
================================================

What:  `campaigns` (a brief for a client) and `orders` (a creator assigned to
       a campaign).
Why:   The campaign is the unit most other resources hang off: orders, media
       and messages all carry a campaign_id, and reach their organization
       through it.

Campaign lifecycle:
    DRAFT → ACTIVE → IN_PROGRESS → COMPLETED
                 ↘ CANCELLED (also what DELETE does)

Order lifecycle:
    NEW → ASSIGNED → IN_PROGRESS → SUBMITTED → COMPLETED
    submitted_at / completed_at are stamped on the matching transitions.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ugc_backend.database import Base
from ugc_backend.models.client import Client
from ugc_backend.models.enums import CampaignStatus, OrderStatus, enum_column
from ugc_backend.models.mixins import IdMixin, TimestampMixin, utcnow
from ugc_backend.models.user import User


class Campaign(IdMixin, TimestampMixin, Base):
    """A content brief run by an organization for one of its clients."""

    __tablename__ = "campaigns"

    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    client_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False
    )
    created_by_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    brief: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[CampaignStatus] = mapped_column(
        enum_column(CampaignStatus), nullable=False, default=CampaignStatus.DRAFT
    )
    # asdecimal=False: budgets are summed into floats for the dashboard
    budget: Mapped[Optional[float]] = mapped_column(Numeric(12, 2, asdecimal=False))
    deadline: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    # {"content_type": [...], "platform": [...], "deliverables": [...], "guidelines": "..."}
    requirements: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON)

    client: Mapped[Client] = relationship(lazy="raise")
    created_by: Mapped[Optional[User]] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_campaigns_org_created", "organization_id", "created_at"),
        Index("idx_campaigns_client", "client_id"),
    )

    def __repr__(self) -> str:
        return f"<Campaign(id={self.id}, title={self.title!r}, status={self.status})>"


class Order(IdMixin, TimestampMixin, Base):
    """Assignment of a creator to a campaign."""

    __tablename__ = "orders"

    campaign_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False
    )
    # No cascade: a creator with orders cannot be deleted
    creator_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False
    )
    status: Mapped[OrderStatus] = mapped_column(
        enum_column(OrderStatus), nullable=False, default=OrderStatus.NEW
    )
    notes: Mapped[Optional[str]] = mapped_column(Text)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    submitted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    campaign: Mapped[Campaign] = relationship(lazy="raise")
    creator: Mapped[User] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_orders_campaign", "campaign_id"),
        Index("idx_orders_creator", "creator_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, campaign_id={self.campaign_id}, status={self.status})>"
