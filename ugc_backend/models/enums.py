"""
Status and role enumerations shared by models and schemas.

Stored as plain strings (non-native enums) so the same schema works on
PostgreSQL and SQLite.
"""

import enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, enum.Enum):
    """Global capability tag on a user. Org-scoped roles live on OrganizationMember."""
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    CREATOR = "CREATOR"
    CLIENT = "CLIENT"


class MemberRole(str, enum.Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class ClientStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class CampaignStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class OrderStatus(str, enum.Enum):
    NEW = "NEW"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    COMPLETED = "COMPLETED"


class MediaType(str, enum.Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"
    OTHER = "OTHER"


class MediaStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ARCHIVED = "ARCHIVED"


# Campaigns in these states no longer block archiving their client
TERMINAL_CAMPAIGN_STATUSES = (CampaignStatus.COMPLETED, CampaignStatus.CANCELLED)

STAFF_ROLES = (UserRole.ADMIN, UserRole.STAFF)
ORG_MANAGER_ROLES = (MemberRole.OWNER, MemberRole.ADMIN)


def enum_column(enum_cls: type[enum.Enum]) -> SAEnum:
    """String-backed column type that round-trips `enum_cls` members by value."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=20,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )
