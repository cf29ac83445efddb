"""
UGC Agency Backend — Command-Line Tools
=========================================

Usage:
    python -m ugc_backend.cli seed [--create-tables]
    python -m ugc_backend.cli create-admin --email admin@agency.com --password ... --name "Ada Admin"
    python -m ugc_backend.cli reset-passwords [--password demo123456]

All commands use DATABASE_URL and exit 1 on failure.

seed:
    A demo organization with an admin owner, two creators, two clients,
    two campaigns and their orders. Every seeded account signs in with
    the demo password. Running it twice is a no-op.
"""

import argparse
import asyncio
import logging
import sys
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import select

from ugc_backend.database import Database
from ugc_backend.models.campaign import Campaign, Order
from ugc_backend.models.client import Client
from ugc_backend.models.enums import (
    CampaignStatus,
    ClientStatus,
    MemberRole,
    OrderStatus,
    UserRole,
)
from ugc_backend.models.mixins import utcnow
from ugc_backend.models.organization import Organization, OrganizationMember
from ugc_backend.models.user import User
from ugc_backend.security import hash_password

logger = logging.getLogger("ugc_backend.cli")

DEMO_PASSWORD = "demo123456"
DEMO_ORG_SLUG = "ugc-agency-demo"


async def seed(database: Database, create_tables: bool = False) -> None:
    if create_tables:
        await database.create_all()

    async with database.session() as session:
        existing = await session.execute(select(Organization.id).where(Organization.slug == DEMO_ORG_SLUG))
        if existing.first() is not None:
            logger.info("Demo organization already present; nothing to do")
            return

        password_hash = hash_password(DEMO_PASSWORD)
        organization = Organization(name="UGC Agency Demo", slug=DEMO_ORG_SLUG)
        admin = User(
            email="admin@demo.com", name="Demo Admin", first_name="Demo", last_name="Admin",
            role=UserRole.ADMIN, email_verified=True, password_hash=password_hash,
        )
        emma = User(
            email="emma@creators.com", name="Emma Rodriguez", role=UserRole.CREATOR,
            bio="Lifestyle and fitness creator", password_hash=password_hash,
        )
        marcus = User(
            email="marcus@creators.com", name="Marcus Chen", role=UserRole.CREATOR,
            bio="Beauty and product reviews", password_hash=password_hash,
        )
        session.add_all([organization, admin, emma, marcus])
        await session.flush()

        session.add_all([
            OrganizationMember(organization_id=organization.id, user_id=admin.id, role=MemberRole.OWNER),
            OrganizationMember(organization_id=organization.id, user_id=emma.id, role=MemberRole.MEMBER),
            OrganizationMember(organization_id=organization.id, user_id=marcus.id, role=MemberRole.MEMBER),
        ])

        nike = Client(
            organization_id=organization.id, name="Nike Running", email="marketing@nike.com",
            company="Nike", website="https://www.nike.com", status=ClientStatus.ACTIVE,
        )
        glossier = Client(
            organization_id=organization.id, name="Glossier Beauty", email="partnerships@glossier.com",
            company="Glossier", website="https://www.glossier.com", status=ClientStatus.ACTIVE,
        )
        session.add_all([nike, glossier])
        await session.flush()

        now = utcnow()
        air_max = Campaign(
            organization_id=organization.id, client_id=nike.id, created_by_id=admin.id,
            title="Nike Air Max Campaign", brief="Unboxing and first-run videos for the new Air Max.",
            status=CampaignStatus.ACTIVE, budget=5000.00, deadline=now + timedelta(days=30),
            requirements={"content_type": ["video"], "platform": ["tiktok", "instagram"], "deliverables": ["3x 30s video"]},
        )
        summer_glow = Campaign(
            organization_id=organization.id, client_id=glossier.id, created_by_id=admin.id,
            title="Glossier Summer Glow", brief="Get-ready-with-me content featuring the summer line.",
            status=CampaignStatus.IN_PROGRESS, budget=3500.00, deadline=now + timedelta(days=21),
            requirements={"content_type": ["video", "photo"], "platform": ["instagram"], "deliverables": ["2x reel", "5x photo"]},
        )
        session.add_all([air_max, summer_glow])
        await session.flush()

        session.add_all([
            Order(campaign_id=air_max.id, creator_id=emma.id, status=OrderStatus.IN_PROGRESS),
            Order(campaign_id=summer_glow.id, creator_id=marcus.id, status=OrderStatus.SUBMITTED, submitted_at=now),
        ])
        await session.commit()

    logger.info("Seeded demo organization %s; accounts sign in with %r", DEMO_ORG_SLUG, DEMO_PASSWORD)


async def create_admin(database: Database, email: str, password: str, name: str) -> None:
    """Create a global ADMIN, or promote and re-password an existing account."""
    email = email.lower()
    async with database.session() as session:
        user = (await session.execute(select(User).where(User.email == email))).scalar_one_or_none()
        if user is None:
            user = User(email=email, name=name, email_verified=True)
            session.add(user)
        user.role = UserRole.ADMIN
        user.password_hash = hash_password(password)
        await session.commit()
    logger.info("Admin ready: %s", email)


async def reset_passwords(database: Database, password: str) -> int:
    """Give every account without a password hash the given password; returns the count."""
    async with database.session() as session:
        result = await session.execute(select(User).where(User.password_hash.is_(None)))
        users = list(result.scalars().all())
        if users:
            password_hash = hash_password(password)
            for user in users:
                user.password_hash = password_hash
            await session.commit()
    logger.info("Set passwords for %d user(s)", len(users))
    return len(users)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ugc-backend", description="UGC Agency backend maintenance commands.")
    parser.add_argument("--database-url", type=str, default=None, help="Override DATABASE_URL.")
    subcommands = parser.add_subparsers(dest="command", required=True)

    seed_parser = subcommands.add_parser("seed", help="Load demo data.")
    seed_parser.add_argument("--create-tables", action="store_true", help="Create missing tables first (no Alembic).")

    admin_parser = subcommands.add_parser("create-admin", help="Create or promote an admin account.")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--name", default="Admin")

    reset_parser = subcommands.add_parser("reset-passwords", help="Set a password on accounts that have none.")
    reset_parser.add_argument("--password", default=DEMO_PASSWORD)
    return parser


async def run(args: argparse.Namespace) -> None:
    database = Database(args.database_url)
    try:
        if args.command == "seed":
            await seed(database, create_tables=args.create_tables)
        elif args.command == "create-admin":
            if len(args.password) < 6:
                raise ValueError("Password must be at least 6 characters")
            await create_admin(database, args.email, args.password, args.name)
        elif args.command == "reset-passwords":
            await reset_passwords(database, args.password)
    finally:
        await database.dispose()


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    try:
        asyncio.run(run(args))
    except Exception as e:
        logger.error("%s failed: %s", args.command, e, exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
