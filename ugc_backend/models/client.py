"""
Client model: a brand the agency runs campaigns for.

Clients are never physically deleted; DELETE flips status to ARCHIVED once
no campaign is still running for them. Email is unique per organization,
not globally, since two agencies may work for the same brand.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ugc_backend.database import Base
from ugc_backend.models.enums import ClientStatus, enum_column
from ugc_backend.models.mixins import IdMixin, TimestampMixin


class Client(IdMixin, TimestampMixin, Base):
    __tablename__ = "clients"

    organization_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    company: Mapped[Optional[str]] = mapped_column(String(255))
    website: Mapped[Optional[str]] = mapped_column(String(500))
    notes: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[ClientStatus] = mapped_column(
        enum_column(ClientStatus), nullable=False, default=ClientStatus.ACTIVE
    )

    __table_args__ = (
        UniqueConstraint("organization_id", "email", name="uq_clients_org_email"),
        Index("idx_clients_org_created", "organization_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name={self.name!r}, status={self.status})>"
