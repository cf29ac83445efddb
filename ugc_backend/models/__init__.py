"""
ORM models. Importing this package registers every table on `Base.metadata`
(Alembic's env.py and `Database.create_all` rely on that).
"""

from ugc_backend.models.campaign import Campaign, Order
from ugc_backend.models.client import Client
from ugc_backend.models.enums import (
    CampaignStatus,
    ClientStatus,
    MediaStatus,
    MediaType,
    MemberRole,
    OrderStatus,
    UserRole,
)
from ugc_backend.models.media import Media
from ugc_backend.models.message import Message
from ugc_backend.models.organization import Organization, OrganizationMember
from ugc_backend.models.user import User

__all__ = [
    "Campaign",
    "CampaignStatus",
    "Client",
    "ClientStatus",
    "Media",
    "MediaStatus",
    "MediaType",
    "MemberRole",
    "Message",
    "Order",
    "OrderStatus",
    "Organization",
    "OrganizationMember",
    "User",
    "UserRole",
]
