"""
UGC Agency Backend — Dashboard Endpoint Tests
===============================================

What we test:
    ✅ Headline counts only see the caller's organization
    ✅ Revenue ignores cancelled campaigns
    ✅ Recent activity lists, newest first
"""

import pytest

from ugc_backend.models.enums import CampaignStatus, ClientStatus, MemberRole, OrderStatus, UserRole


class TestDashboardStats:

    @pytest.mark.asyncio
    async def test_counts(self, client, seed):
        """Stats count only the caller's organization."""
        staff = await seed.user(role=UserRole.STAFF)
        creator = await seed.user(role=UserRole.CREATOR)
        org = await seed.organization(owner=staff)
        await seed.member(org, creator, MemberRole.MEMBER)

        brand = await seed.client(org)
        await seed.client(org, status=ClientStatus.ARCHIVED)
        active = await seed.campaign(org, brand, status=CampaignStatus.ACTIVE, budget=5000)
        await seed.campaign(org, brand, status=CampaignStatus.IN_PROGRESS, budget=3500)
        await seed.campaign(org, brand, status=CampaignStatus.CANCELLED, budget=1000)
        await seed.order(active, creator, status=OrderStatus.IN_PROGRESS)
        await seed.order(active, creator, status=OrderStatus.COMPLETED)

        # Noise in another organization
        other = await seed.organization(owner=await seed.user())
        await seed.campaign(other, await seed.client(other), budget=99999)

        response = await client.get("/api/dashboard/stats", headers=seed.headers(staff, org))

        assert response.status_code == 200
        body = response.json()
        assert body["campaigns"] == {"total": 3, "active": 2}
        assert body["clients"] == {"total": 2, "active": 1}
        assert body["creators"] == {"total": 1}
        assert body["orders"] == {"total": 2, "in_progress": 1, "completed": 1}
        assert body["revenue"]["total"] == 8500

    @pytest.mark.asyncio
    async def test_empty_organization(self, client, seed):
        """An empty organization reports zeros, not nulls."""
        staff = await seed.user()
        org = await seed.organization(owner=staff)

        response = await client.get("/api/dashboard/stats", headers=seed.headers(staff, org))

        body = response.json()
        assert body["campaigns"]["total"] == 0
        assert body["revenue"]["total"] == 0


class TestDashboardActivities:

    @pytest.mark.asyncio
    async def test_recent_items(self, client, seed):
        """Activities list the latest five of each kind, newest first."""
        staff = await seed.user()
        creator = await seed.user(role=UserRole.CREATOR, name="Emma")
        org = await seed.organization(owner=staff)
        brand = await seed.client(org, name="Nike Running")
        for i in range(6):
            campaign = await seed.campaign(org, brand, title=f"Campaign {i}")
        await seed.order(campaign, creator)

        response = await client.get("/api/dashboard/activities", headers=seed.headers(staff, org))

        body = response.json()
        assert len(body["recent_campaigns"]) == 5
        assert body["recent_campaigns"][0]["title"] == "Campaign 5"
        assert body["recent_campaigns"][0]["client_name"] == "Nike Running"
        assert body["recent_orders"][0]["creator_name"] == "Emma"
        assert body["recent_orders"][0]["campaign_title"] == "Campaign 5"
        assert body["recent_clients"][0]["name"] == "Nike Running"
