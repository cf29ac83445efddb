"""
UGC Agency Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every API test runs against a real schema in an in-memory SQLite
       database, so the organization filters are exercised for real.
How:   Environment overrides are set BEFORE ugc_backend is imported (the
       settings object is built at import time).

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db:       Database on sqlite+aiosqlite://, tables created
    ├── client:   HTTPX AsyncClient bound to create_app(database=db)
    ├── seed:     Seeder for users, organizations, clients, campaigns...
    ├── mock_db_session: AsyncMock session for service unit tests
    └── sample_image_bytes: Fake image content for upload tests
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STORAGE_ROOT"] = tempfile.mkdtemp(prefix="ugc_test_")
os.environ["MEDIA_BASE_URL"] = "http://testserver/api/media/files"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Dict, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from ugc_backend.database import Database
from ugc_backend.main import create_app
from ugc_backend.models import (
    Campaign,
    CampaignStatus,
    Client,
    ClientStatus,
    Media,
    MediaStatus,
    MediaType,
    MemberRole,
    Message,
    Order,
    OrderStatus,
    Organization,
    OrganizationMember,
    User,
    UserRole,
)
from ugc_backend.security import hash_password, token_issuer

TEST_PASSWORD = "secret123"


class Seeder:
    """
    Inserts rows directly, one committed session per call.

    Usage:
        admin = await seed.user(role=UserRole.ADMIN)
        org = await seed.organization(owner=admin)
        headers = seed.headers(admin, org)
    """

    def __init__(self, database: Database):
        self.database = database
        self._counter = 0
        self._password_hash = hash_password(TEST_PASSWORD)

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def _save(self, obj):
        async with self.database.session() as session:
            session.add(obj)
            await session.commit()
        return obj

    async def user(
        self,
        role: UserRole = UserRole.STAFF,
        email: Optional[str] = None,
        name: Optional[str] = None,
        with_password: bool = True,
    ) -> User:
        n = self._next()
        return await self._save(User(
            email=email or f"user{n}@example.com",
            name=name or f"User {n}",
            role=role,
            password_hash=self._password_hash if with_password else None,
        ))

    async def organization(self, owner: Optional[User] = None, name: Optional[str] = None) -> Organization:
        n = self._next()
        org = await self._save(Organization(name=name or f"Agency {n}", slug=f"agency-{n}"))
        if owner is not None:
            await self.member(org, owner, MemberRole.OWNER)
        return org

    async def member(
        self, organization: Organization, user: User, role: MemberRole = MemberRole.MEMBER
    ) -> OrganizationMember:
        return await self._save(
            OrganizationMember(organization_id=organization.id, user_id=user.id, role=role)
        )

    async def client(
        self, organization: Organization, status: ClientStatus = ClientStatus.ACTIVE, **fields
    ) -> Client:
        n = self._next()
        fields.setdefault("name", f"Brand {n}")
        fields.setdefault("email", f"brand{n}@example.com")
        return await self._save(Client(organization_id=organization.id, status=status, **fields))

    async def campaign(
        self,
        organization: Organization,
        client: Client,
        status: CampaignStatus = CampaignStatus.ACTIVE,
        **fields,
    ) -> Campaign:
        n = self._next()
        fields.setdefault("title", f"Campaign {n}")
        fields.setdefault("brief", "Short-form product videos")
        return await self._save(Campaign(
            organization_id=organization.id, client_id=client.id, status=status, **fields
        ))

    async def order(
        self, campaign: Campaign, creator: User, status: OrderStatus = OrderStatus.NEW
    ) -> Order:
        return await self._save(Order(campaign_id=campaign.id, creator_id=creator.id, status=status))

    async def media(
        self,
        campaign: Campaign,
        uploader: User,
        order: Optional[Order] = None,
        status: MediaStatus = MediaStatus.PENDING,
        type: MediaType = MediaType.VIDEO,
    ) -> Media:
        n = self._next()
        return await self._save(Media(
            campaign_id=campaign.id,
            order_id=order.id if order else None,
            uploaded_by_id=uploader.id,
            url=f"http://testserver/api/media/files/clip-{n}.mp4",
            filename=f"clip-{n}.mp4",
            mime_type="video/mp4",
            size=1024,
            type=type,
            status=status,
        ))

    async def message(self, campaign: Campaign, sender: User, content: str = "Hello") -> Message:
        return await self._save(Message(campaign_id=campaign.id, sender_id=sender.id, content=content))

    def token(self, user: User) -> str:
        return token_issuer.issue(user_id=user.id, email=user.email, role=user.role)

    def headers(self, user: User, organization: Optional[Organization] = None) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.token(user)}"}
        if organization is not None:
            headers["X-Organization-ID"] = organization.id
        return headers


@pytest_asyncio.fixture
async def db():
    """
    A fresh in-memory database per test.

    StaticPool keeps the single SQLite connection alive across sessions;
    without it every new connection would see an empty database.
    """
    database = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def client(db):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_health(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(database=db)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http


@pytest.fixture
def mock_db_session():
    """
    A mocked AsyncSession for service unit tests that need no schema.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = campaign
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.execute.return_value = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def seed(db) -> Seeder:
    return Seeder(db)


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )
