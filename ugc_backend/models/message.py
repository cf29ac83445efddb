"""Message model: campaign chat between agency staff, creators and clients."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ugc_backend.database import Base
from ugc_backend.models.mixins import IdMixin, TimestampMixin
from ugc_backend.models.user import User


class Message(IdMixin, TimestampMixin, Base):
    __tablename__ = "messages"

    campaign_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False
    )
    sender_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # [{"url", "filename", "size", "type"}]
    attachments: Mapped[Optional[List[Dict[str, Any]]]] = mapped_column(JSON)
    edited_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    sender: Mapped[User] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_messages_campaign_created", "campaign_id", "created_at"),
    )
