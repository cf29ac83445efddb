"""
UGC Agency Backend — Organization and User Endpoint Tests
===========================================================

What we test:
    ✅ Create makes the caller OWNER; slugs are unique
    ✅ List shows the caller's role and per-organization counts
    ✅ Update and invite need OWNER/ADMIN membership
    ✅ Members list; invite of unknown or existing members
    ✅ Profile update and the ADMIN-only role switch
"""

import pytest

from ugc_backend.models.enums import MemberRole, UserRole


class TestCreateOrganization:

    @pytest.mark.asyncio
    async def test_caller_becomes_owner(self, client, seed):
        """The creator of an organization becomes its OWNER."""
        user = await seed.user()
        response = await client.post(
            "/api/organizations", headers=seed.headers(user), json={"name": "Bright", "slug": "bright"}
        )
        assert response.status_code == 201
        org_id = response.json()["id"]

        members = await client.get(f"/api/organizations/{org_id}/members", headers=seed.headers(user))
        assert members.json()["members"][0]["user"]["id"] == user.id
        assert members.json()["members"][0]["role"] == "OWNER"

    @pytest.mark.asyncio
    async def test_slug_taken(self, client, seed):
        """Slugs are unique."""
        user = await seed.user()
        payload = {"name": "Bright", "slug": "bright"}
        await client.post("/api/organizations", headers=seed.headers(user), json=payload)

        response = await client.post("/api/organizations", headers=seed.headers(user), json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Organization slug already taken"

    @pytest.mark.asyncio
    async def test_slug_format(self, client, seed):
        """Slugs are lowercase letters, digits and hyphens."""
        user = await seed.user()
        response = await client.post(
            "/api/organizations", headers=seed.headers(user), json={"name": "Bad", "slug": "Not A Slug"}
        )
        assert response.status_code == 400


class TestListOrganizations:

    @pytest.mark.asyncio
    async def test_list_with_role_and_counts(self, client, seed):
        """Listing shows the caller's role and member counts."""
        user = await seed.user()
        owner = await seed.user()
        mine = await seed.organization(owner=user)
        theirs = await seed.organization(owner=owner)
        await seed.member(theirs, user, MemberRole.MEMBER)
        brand = await seed.client(mine)
        await seed.campaign(mine, brand)
        await seed.organization(owner=owner)

        response = await client.get("/api/organizations", headers=seed.headers(user))

        body = response.json()
        assert body["pagination"]["total"] == 2
        by_id = {o["id"]: o for o in body["organizations"]}
        assert by_id[mine.id]["user_role"] == "OWNER"
        assert by_id[mine.id]["counts"] == {"members": 1, "campaigns": 1, "clients": 1}
        assert by_id[theirs.id]["user_role"] == "MEMBER"
        assert by_id[theirs.id]["counts"]["members"] == 2

    @pytest.mark.asyncio
    async def test_current_with_header(self, client, seed):
        """/current resolves the header organization."""
        user = await seed.user()
        await seed.organization(owner=user)
        second = await seed.organization()
        await seed.member(second, user, MemberRole.ADMIN)

        response = await client.get("/api/organizations/current", headers=seed.headers(user, second))

        assert response.json()["organization"]["id"] == second.id
        assert response.json()["user_role"] == "ADMIN"


class TestManageOrganization:

    @pytest.mark.asyncio
    async def test_member_cannot_update(self, client, seed):
        """Plain members cannot rename the organization."""
        owner = await seed.user()
        member = await seed.user()
        org = await seed.organization(owner=owner)
        await seed.member(org, member)

        response = await client.patch(
            f"/api/organizations/{org.id}", headers=seed.headers(member), json={"name": "Mine now"}
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_owner_updates(self, client, seed):
        """Owners update organization details."""
        owner = await seed.user()
        org = await seed.organization(owner=owner)

        response = await client.patch(
            f"/api/organizations/{org.id}",
            headers=seed.headers(owner),
            json={"name": "Renamed", "logo": "https://cdn.example.com/logo.png"},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["logo"] == "https://cdn.example.com/logo.png"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "slug"])
    async def test_null_name_or_slug_is_400(self, client, seed, field):
        """Name and slug cannot be cleared."""
        owner = await seed.user()
        org = await seed.organization(owner=owner, name="Keep me")

        response = await client.patch(f"/api/organizations/{org.id}", headers=seed.headers(owner), json={field: None})

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"
        listing = await client.get("/api/organizations", headers=seed.headers(owner))
        assert listing.json()["organizations"][0]["name"] == "Keep me"
        assert listing.json()["organizations"][0]["slug"] == org.slug

    @pytest.mark.asyncio
    async def test_outsider_cannot_list_members(self, client, seed):
        """Member lists are for members only."""
        org = await seed.organization(owner=await seed.user())
        outsider = await seed.user()
        response = await client.get(f"/api/organizations/{org.id}/members", headers=seed.headers(outsider))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invite_existing_user(self, client, seed):
        """Inviting an existing account adds it as a member."""
        owner = await seed.user()
        org = await seed.organization(owner=owner)
        invitee = await seed.user(email="invitee@example.com")

        response = await client.post(
            f"/api/organizations/{org.id}/invite",
            headers=seed.headers(owner),
            json={"email": "Invitee@Example.com", "role": "ADMIN"},
        )

        assert response.status_code == 201
        assert response.json()["user"]["id"] == invitee.id
        assert response.json()["role"] == "ADMIN"

    @pytest.mark.asyncio
    async def test_invite_twice(self, client, seed):
        """Inviting an existing member is a conflict."""
        owner = await seed.user()
        org = await seed.organization(owner=owner)
        invitee = await seed.user()
        await seed.member(org, invitee)

        response = await client.post(
            f"/api/organizations/{org.id}/invite", headers=seed.headers(owner), json={"email": invitee.email}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "User is already a member"

    @pytest.mark.asyncio
    async def test_invite_unknown_user(self, client, seed):
        """Invites need an existing account."""
        owner = await seed.user()
        org = await seed.organization(owner=owner)

        response = await client.post(
            f"/api/organizations/{org.id}/invite", headers=seed.headers(owner), json={"email": "nobody@example.com"}
        )
        assert response.status_code == 404
        assert response.json()["error"] == "User not found"


class TestUsers:

    @pytest.mark.asyncio
    async def test_profile_update(self, client, seed):
        """Users edit their own profile."""
        user = await seed.user()
        response = await client.patch(
            "/api/users/profile", headers=seed.headers(user), json={"first_name": "Ada", "phone": "555-0100"}
        )
        assert response.status_code == 200
        assert response.json()["first_name"] == "Ada"
        assert response.json()["role"] == user.role.value

    @pytest.mark.asyncio
    async def test_profile_null_name_is_400(self, client, seed):
        """A profile name cannot be cleared; nullable fields can."""
        user = await seed.user(name="Ada Lovelace")
        headers = seed.headers(user)

        response = await client.patch("/api/users/profile", headers=headers, json={"name": None})
        assert response.status_code == 400

        cleared = await client.patch("/api/users/profile", headers=headers, json={"bio": None})
        assert cleared.status_code == 200
        assert cleared.json()["name"] == "Ada Lovelace"

    @pytest.mark.asyncio
    async def test_switch_role_admin_only(self, client, seed):
        """Only admins switch roles."""
        staff = await seed.user(role=UserRole.STAFF)
        response = await client.post("/api/users/switch-role", headers=seed.headers(staff), json={"role": "ADMIN"})
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_switches_other_user(self, client, seed):
        """Admins can change another user's role."""
        admin = await seed.user(role=UserRole.ADMIN)
        target = await seed.user(role=UserRole.CLIENT)

        response = await client.post(
            "/api/users/switch-role",
            headers=seed.headers(admin),
            json={"role": "CREATOR", "user_id": target.id},
        )
        assert response.status_code == 200
        assert response.json()["id"] == target.id
        assert response.json()["role"] == "CREATOR"

    @pytest.mark.asyncio
    async def test_invalid_role(self, client, seed):
        """Unknown roles fail validation."""
        admin = await seed.user(role=UserRole.ADMIN)
        response = await client.post("/api/users/switch-role", headers=seed.headers(admin), json={"role": "KING"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid role"
