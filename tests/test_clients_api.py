"""
UGC Agency Backend — Client Endpoint Tests
============================================

What we test:
    ✅ Create, duplicate email within an organization, same email elsewhere
    ✅ List with campaign_count and search; detail with campaigns
    ✅ DELETE archives, refused while a campaign is still running
    ✅ Creators who worked for the client, with per-status counts
"""

import pytest
import pytest_asyncio

from ugc_backend.models.enums import CampaignStatus, ClientStatus, OrderStatus, UserRole


@pytest_asyncio.fixture
async def staff_org(seed):
    staff = await seed.user(role=UserRole.STAFF)
    org = await seed.organization(owner=staff)
    return staff, org


class TestCreateClient:

    @pytest.mark.asyncio
    async def test_create(self, client, seed, staff_org):
        """Staff should create a client in their organization."""
        staff, org = staff_org
        response = await client.post(
            "/api/clients",
            headers=seed.headers(staff, org),
            json={
                "name": "Glossier Beauty",
                "email": "Partnerships@Glossier.com",
                "company": "Glossier",
                "website": "https://www.glossier.com",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "ACTIVE"
        assert body["email"] == "partnerships@glossier.com"
        assert body["organization_id"] == org.id
        assert body["website"].startswith("https://www.glossier.com")

    @pytest.mark.asyncio
    async def test_duplicate_email_in_same_org(self, client, seed, staff_org):
        """Client emails are unique within an organization."""
        staff, org = staff_org
        await seed.client(org, email="brand@example.com")

        response = await client.post(
            "/api/clients",
            headers=seed.headers(staff, org),
            json={"name": "Again", "email": "brand@example.com"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "conflict"

    @pytest.mark.asyncio
    async def test_same_email_in_other_org_allowed(self, client, seed, staff_org):
        """The same email may exist in two organizations."""
        staff, org = staff_org
        other = await seed.organization(owner=await seed.user())
        await seed.client(other, email="brand@example.com")

        response = await client.post(
            "/api/clients",
            headers=seed.headers(staff, org),
            json={"name": "Brand", "email": "brand@example.com"},
        )
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_invalid_email(self, client, seed, staff_org):
        """A malformed email fails validation."""
        staff, org = staff_org
        response = await client.post(
            "/api/clients",
            headers=seed.headers(staff, org),
            json={"name": "Brand", "email": "not-an-email"},
        )
        assert response.status_code == 400


class TestListAndDetail:

    @pytest.mark.asyncio
    async def test_list_with_campaign_count(self, client, seed, staff_org):
        """Listing should carry each client's campaign count."""
        staff, org = staff_org
        brand = await seed.client(org, name="Nike Running")
        await seed.campaign(org, brand)
        await seed.campaign(org, brand)

        response = await client.get("/api/clients", headers=seed.headers(staff, org))

        body = response.json()
        assert body["pagination"]["total"] == 1
        assert body["clients"][0]["campaign_count"] == 2

    @pytest.mark.asyncio
    async def test_search_and_status_filter(self, client, seed, staff_org):
        """Search and status filters combine."""
        staff, org = staff_org
        await seed.client(org, name="Nike Running", company="Nike")
        await seed.client(org, name="Old Brand", status=ClientStatus.ARCHIVED)

        found = await client.get("/api/clients?search=nike", headers=seed.headers(staff, org))
        assert [c["name"] for c in found.json()["clients"]] == ["Nike Running"]

        archived = await client.get("/api/clients?status=ARCHIVED", headers=seed.headers(staff, org))
        assert [c["name"] for c in archived.json()["clients"]] == ["Old Brand"]

    @pytest.mark.asyncio
    async def test_detail_lists_campaigns(self, client, seed, staff_org):
        """Detail should include the client's campaigns."""
        staff, org = staff_org
        brand = await seed.client(org)
        campaign = await seed.campaign(org, brand, title="Launch")

        response = await client.get(f"/api/clients/{brand.id}", headers=seed.headers(staff, org))

        assert response.status_code == 200
        assert response.json()["campaigns"][0]["id"] == campaign.id

    @pytest.mark.asyncio
    async def test_update(self, client, seed, staff_org):
        """PATCH should update the given fields."""
        staff, org = staff_org
        brand = await seed.client(org, name="Before")

        response = await client.patch(
            f"/api/clients/{brand.id}", headers=seed.headers(staff, org), json={"name": "After"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "After"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "email", "status"])
    async def test_null_for_required_field_is_400(self, client, seed, staff_org, field):
        """Name, email and status cannot be cleared."""
        staff, org = staff_org
        brand = await seed.client(org, name="Keep me")
        headers = seed.headers(staff, org)

        response = await client.patch(f"/api/clients/{brand.id}", headers=headers, json={field: None})

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"
        detail = await client.get(f"/api/clients/{brand.id}", headers=headers)
        assert detail.json()["name"] == "Keep me"
        assert detail.json()["status"] == "ACTIVE"


class TestArchiveClient:

    @pytest.mark.asyncio
    async def test_refused_with_running_campaign(self, client, seed, staff_org):
        """A client with a running campaign cannot be archived."""
        staff, org = staff_org
        brand = await seed.client(org)
        await seed.campaign(org, brand, status=CampaignStatus.IN_PROGRESS)

        response = await client.delete(f"/api/clients/{brand.id}", headers=seed.headers(staff, org))

        assert response.status_code == 400
        assert response.json()["error"] == "Cannot delete client with active campaigns"

        detail = await client.get(f"/api/clients/{brand.id}", headers=seed.headers(staff, org))
        assert detail.json()["status"] == "ACTIVE"

    @pytest.mark.asyncio
    async def test_archives_when_campaigns_finished(self, client, seed, staff_org):
        """Once campaigns are finished, DELETE archives the client."""
        staff, org = staff_org
        brand = await seed.client(org)
        await seed.campaign(org, brand, status=CampaignStatus.COMPLETED)
        await seed.campaign(org, brand, status=CampaignStatus.CANCELLED)
        headers = seed.headers(staff, org)

        response = await client.delete(f"/api/clients/{brand.id}", headers=headers)
        assert response.status_code == 200

        detail = await client.get(f"/api/clients/{brand.id}", headers=headers)
        assert detail.json()["status"] == "ARCHIVED"


class TestClientCreators:

    @pytest.mark.asyncio
    async def test_creators_with_order_stats(self, client, seed, staff_org):
        """Creators who worked for the client come with their order stats."""
        staff, org = staff_org
        brand = await seed.client(org)
        creator = await seed.user(role=UserRole.CREATOR, name="Marcus Chen")
        first = await seed.campaign(org, brand)
        second = await seed.campaign(org, brand)
        await seed.order(first, creator, status=OrderStatus.COMPLETED)
        await seed.order(second, creator, status=OrderStatus.IN_PROGRESS)

        response = await client.get(f"/api/clients/{brand.id}/creators", headers=seed.headers(staff, org))

        creators = response.json()["creators"]
        assert len(creators) == 1
        assert creators[0]["name"] == "Marcus Chen"
        assert creators[0]["order_count"] == 2
        assert creators[0]["order_stats"] == {"COMPLETED": 1, "IN_PROGRESS": 1}
