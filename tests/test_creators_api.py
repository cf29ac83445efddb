"""
UGC Agency Backend — Creator Endpoint Tests
=============================================

What we test:
    ✅ Staff onboard creators with the temporary password
    ✅ Non-staff cannot onboard or delete; creators edit only themselves
    ✅ Detail counts, availability and period stats
    ✅ Delete refused while the creator holds orders
"""

import pytest

from ugc_backend.config import settings
from ugc_backend.models.enums import MediaStatus, OrderStatus, UserRole


class TestCreateCreator:

    @pytest.mark.asyncio
    async def test_staff_onboards_creator_who_can_sign_in(self, client, seed):
        """Staff-created creators can sign in with the given password."""
        staff = await seed.user(role=UserRole.STAFF)

        response = await client.post(
            "/api/creators",
            headers=seed.headers(staff),
            json={"email": "Emma@Creators.com", "name": "Emma Rodriguez", "bio": "Fitness"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["role"] == "CREATOR"
        assert body["email"] == "emma@creators.com"

        sign_in = await client.post("/api/auth/sign-in", json={
            "email": "emma@creators.com",
            "password": settings.creator_temp_password,
        })
        assert sign_in.status_code == 200

    @pytest.mark.asyncio
    async def test_client_role_forbidden(self, client, seed):
        """CLIENT accounts cannot onboard creators."""
        user = await seed.user(role=UserRole.CLIENT)
        response = await client.post(
            "/api/creators",
            headers=seed.headers(user),
            json={"email": "someone@example.com", "name": "Someone"},
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client, seed):
        """Creator emails must be unused."""
        staff = await seed.user(role=UserRole.ADMIN)
        await seed.user(email="taken@example.com")

        response = await client.post(
            "/api/creators",
            headers=seed.headers(staff),
            json={"email": "taken@example.com", "name": "Dup"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "User with this email already exists"


class TestReadCreators:

    @pytest.mark.asyncio
    async def test_list_only_creators_with_counts(self, client, seed):
        """The directory lists CREATOR accounts only, with order counts."""
        staff = await seed.user(role=UserRole.STAFF)
        creator = await seed.user(role=UserRole.CREATOR, name="Emma")
        org = await seed.organization(owner=staff)
        campaign = await seed.campaign(org, await seed.client(org))
        await seed.order(campaign, creator, status=OrderStatus.COMPLETED)
        await seed.order(campaign, creator, status=OrderStatus.NEW)

        response = await client.get("/api/creators", headers=seed.headers(staff))

        creators = response.json()["creators"]
        assert [c["id"] for c in creators] == [creator.id]
        assert creators[0]["order_count"] == 2
        assert creators[0]["completed_orders"] == 1

    @pytest.mark.asyncio
    async def test_detail_counts(self, client, seed):
        """Detail should count completed and active orders."""
        staff = await seed.user(role=UserRole.STAFF)
        creator = await seed.user(role=UserRole.CREATOR)
        org = await seed.organization(owner=staff)
        campaign = await seed.campaign(org, await seed.client(org), title="Launch")
        await seed.order(campaign, creator, status=OrderStatus.SUBMITTED)
        await seed.order(campaign, creator, status=OrderStatus.COMPLETED)
        await seed.order(campaign, creator, status=OrderStatus.ASSIGNED)

        response = await client.get(f"/api/creators/{creator.id}", headers=seed.headers(staff))

        body = response.json()
        assert len(body["orders"]) == 3
        assert body["orders"][0]["campaign_title"] == "Launch"
        assert body["completed_orders"] == 1
        assert body["active_orders"] == 1

    @pytest.mark.asyncio
    async def test_non_creator_id_is_404(self, client, seed):
        """A non-creator user id is not a creator."""
        staff = await seed.user(role=UserRole.STAFF)
        response = await client.get(f"/api/creators/{staff.id}", headers=seed.headers(staff))
        assert response.status_code == 404
        assert response.json()["error"] == "Creator not found"

    @pytest.mark.asyncio
    async def test_availability_lists_busy_orders(self, client, seed):
        """Availability reports the creator's in-flight orders."""
        creator = await seed.user(role=UserRole.CREATOR)
        org = await seed.organization(owner=await seed.user())
        campaign = await seed.campaign(org, await seed.client(org))
        busy = await seed.order(campaign, creator, status=OrderStatus.IN_PROGRESS)
        await seed.order(campaign, creator, status=OrderStatus.COMPLETED)

        response = await client.get(f"/api/creators/{creator.id}/availability", headers=seed.headers(creator))

        body = response.json()
        assert body["days_per_week"] == 5
        assert body["hours_per_day"] == 8
        assert [o["id"] for o in body["active_orders"]] == [busy.id]

    @pytest.mark.asyncio
    async def test_stats_by_status(self, client, seed):
        """Stats group the period's orders by status."""
        creator = await seed.user(role=UserRole.CREATOR)
        org = await seed.organization(owner=await seed.user())
        campaign = await seed.campaign(org, await seed.client(org))
        await seed.order(campaign, creator, status=OrderStatus.COMPLETED)
        await seed.media(campaign, creator, status=MediaStatus.APPROVED)

        response = await client.get(f"/api/creators/{creator.id}/stats?period=7d", headers=seed.headers(creator))

        body = response.json()
        assert body["period"] == "7d"
        assert body["orders_by_status"] == {"COMPLETED": 1}
        assert body["media_by_status"] == {"APPROVED": 1}
        assert body["total_orders"] == 1

    @pytest.mark.asyncio
    async def test_stats_rejects_unknown_period(self, client, seed):
        """Only the known periods are accepted."""
        creator = await seed.user(role=UserRole.CREATOR)
        response = await client.get(f"/api/creators/{creator.id}/stats?period=1y", headers=seed.headers(creator))
        assert response.status_code == 400


class TestUpdateCreator:

    @pytest.mark.asyncio
    async def test_creator_updates_self(self, client, seed):
        """Creators may edit their own profile."""
        creator = await seed.user(role=UserRole.CREATOR)
        response = await client.patch(
            f"/api/creators/{creator.id}", headers=seed.headers(creator), json={"bio": "New bio"}
        )
        assert response.status_code == 200
        assert response.json()["bio"] == "New bio"

    @pytest.mark.asyncio
    async def test_null_name_is_400(self, client, seed):
        """A creator's name cannot be cleared."""
        creator = await seed.user(role=UserRole.CREATOR, name="Emma")
        headers = seed.headers(creator)

        response = await client.patch(f"/api/creators/{creator.id}", headers=headers, json={"name": None})

        assert response.status_code == 400
        detail = await client.get(f"/api/creators/{creator.id}", headers=headers)
        assert detail.json()["name"] == "Emma"

    @pytest.mark.asyncio
    async def test_creator_cannot_update_another(self, client, seed):
        """Creators cannot edit other creators."""
        creator = await seed.user(role=UserRole.CREATOR)
        other = await seed.user(role=UserRole.CREATOR)
        response = await client.patch(
            f"/api/creators/{other.id}", headers=seed.headers(creator), json={"bio": "Hacked"}
        )
        assert response.status_code == 403


class TestDeleteCreator:

    @pytest.mark.asyncio
    async def test_refused_with_orders(self, client, seed):
        """Creators with orders cannot be deleted."""
        staff = await seed.user(role=UserRole.STAFF)
        creator = await seed.user(role=UserRole.CREATOR)
        org = await seed.organization(owner=staff)
        await seed.order(await seed.campaign(org, await seed.client(org)), creator)

        response = await client.delete(f"/api/creators/{creator.id}", headers=seed.headers(staff))

        assert response.status_code == 400
        assert response.json()["error"] == "Cannot delete creator with existing orders. Archive them instead."

    @pytest.mark.asyncio
    async def test_deletes_creator_without_orders(self, client, seed):
        """Creators without orders are deleted."""
        staff = await seed.user(role=UserRole.STAFF)
        creator = await seed.user(role=UserRole.CREATOR)

        response = await client.delete(f"/api/creators/{creator.id}", headers=seed.headers(staff))
        assert response.status_code == 200

        gone = await client.get(f"/api/creators/{creator.id}", headers=seed.headers(staff))
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_creator_cannot_delete(self, client, seed):
        """Deleting creators is a staff action."""
        creator = await seed.user(role=UserRole.CREATOR)
        response = await client.delete(f"/api/creators/{creator.id}", headers=seed.headers(creator))
        assert response.status_code == 403
