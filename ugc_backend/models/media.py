"""
Media model: metadata for an uploaded asset (the bytes live in storage).

`meta` is mapped to the `metadata` column; the attribute name `metadata`
is reserved by SQLAlchemy's declarative base.
"""

from typing import Any, Dict, Optional

from sqlalchemy import JSON, BigInteger, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ugc_backend.database import Base
from ugc_backend.models.enums import MediaStatus, MediaType, enum_column
from ugc_backend.models.mixins import IdMixin, TimestampMixin
from ugc_backend.models.user import User


class Media(IdMixin, TimestampMixin, Base):
    __tablename__ = "media"

    campaign_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False
    )
    order_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("orders.id"), nullable=True
    )
    uploaded_by_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    type: Mapped[MediaType] = mapped_column(enum_column(MediaType), nullable=False)
    status: Mapped[MediaStatus] = mapped_column(
        enum_column(MediaStatus), nullable=False, default=MediaStatus.PENDING
    )
    meta: Mapped[Optional[Dict[str, Any]]] = mapped_column("metadata", JSON)
    # Relative path under STORAGE_ROOT when the bytes were uploaded to us
    storage_path: Mapped[Optional[str]] = mapped_column(String(500))

    uploader: Mapped[Optional[User]] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_media_campaign_created", "campaign_id", "created_at"),
        Index("idx_media_order", "order_id"),
    )

    def __repr__(self) -> str:
        return f"<Media(id={self.id}, filename={self.filename!r}, status={self.status})>"
