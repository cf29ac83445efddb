"""
UGC Agency Backend — User Model
=================================

What:  ORM model for the `users` table: every person who can sign in.
Why:   Admins, staff, creators and client contacts share one identity table;
       `role` is the coarse global capability tag.
How:   Organization-scoped roles are NOT stored here; they live on
       OrganizationMember rows (see models/organization.py).

Table Design:
    - email is unique and indexed (sign-in lookup)
    - password_hash is nullable: creators invited by staff get a temporary
      password, users created by older tooling may have none and cannot sign
      in until `cli reset-passwords` runs
    - the profile fields are an explicit, fixed set
"""

from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ugc_backend.database import Base
from ugc_backend.models.enums import UserRole, enum_column
from ugc_backend.models.mixins import IdMixin, TimestampMixin


class User(IdMixin, TimestampMixin, Base):
    """A platform user. Creators are users with role CREATOR."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # ── Profile ───────────────────────────────────────────────────────────
    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    bio: Mapped[Optional[str]] = mapped_column(Text)
    image: Mapped[Optional[str]] = mapped_column(String(500))

    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole),
        nullable=False,
        default=UserRole.CLIENT,
        index=True,
    )
    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r}, role={self.role})>"
