"""
UGC Agency Backend — Media Endpoint Tests
===========================================

What we test:
    ✅ Registration creates a PENDING row with a default mime type
    ✅ order_id must be the caller's order on that campaign
    ✅ Multipart upload stores the bytes and the file is served back
    ✅ Listing: pagination, filters, campaign scope
    ✅ Only staff change status; only the uploader archives
"""

import pytest
import pytest_asyncio

from ugc_backend.models.enums import MediaStatus, MediaType, MemberRole, UserRole

FILES_PREFIX = "/api/media/files/"


@pytest_asyncio.fixture
async def studio(seed):
    staff = await seed.user(role=UserRole.STAFF)
    creator = await seed.user(role=UserRole.CREATOR)
    org = await seed.organization(owner=staff)
    await seed.member(org, creator, MemberRole.MEMBER)
    campaign = await seed.campaign(org, await seed.client(org), title="Air Max")
    order = await seed.order(campaign, creator)
    return staff, creator, org, campaign, order


class TestRegisterMedia:

    @pytest.mark.asyncio
    async def test_register_defaults(self, client, seed, studio):
        """Registration creates a PENDING row with a mime type from the media type."""
        staff, creator, org, campaign, order = studio

        response = await client.post(
            "/api/media/upload",
            headers=seed.headers(creator, org),
            json={
                "campaign_id": campaign.id,
                "order_id": order.id,
                "type": "VIDEO",
                "filename": "take-1.mp4",
                "size": 2048,
                "metadata": {"duration": 30.5, "tags": ["unboxing"]},
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["mime_type"] == "video/mp4"
        assert body["uploaded_by_id"] == creator.id
        assert body["order_id"] == order.id
        assert body["metadata"]["tags"] == ["unboxing"]
        assert body["url"].startswith("http://testserver/api/media/files/")

    @pytest.mark.asyncio
    async def test_someone_elses_order_is_404(self, client, seed, studio):
        """order_id must be one of the caller's orders."""
        staff, creator, org, campaign, order = studio

        response = await client.post(
            "/api/media/upload",
            headers=seed.headers(staff, org),
            json={"campaign_id": campaign.id, "order_id": order.id, "type": "IMAGE"},
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Order not found"

    @pytest.mark.asyncio
    async def test_invalid_type(self, client, seed, studio):
        """Unknown media types fail validation."""
        staff, creator, org, campaign, _ = studio
        response = await client.post(
            "/api/media/upload",
            headers=seed.headers(creator, org),
            json={"campaign_id": campaign.id, "type": "HOLOGRAM"},
        )
        assert response.status_code == 400


class TestUploadFile:

    @pytest.mark.asyncio
    async def test_upload_and_serve(self, client, seed, studio, sample_image_bytes):
        """Uploaded bytes are stored and served back at the returned URL."""
        staff, creator, org, campaign, order = studio

        response = await client.post(
            "/api/media/upload/file",
            headers=seed.headers(creator, org),
            data={"campaign_id": campaign.id, "type": "IMAGE", "order_id": order.id},
            files={"file": ("cover.jpg", sample_image_bytes, "image/jpeg")},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["mime_type"] == "image/jpeg"
        assert body["size"] == len(sample_image_bytes)
        assert body["filename"] == "cover.jpg"

        path = body["url"].split(FILES_PREFIX, 1)[1]
        served = await client.get(FILES_PREFIX + path)
        assert served.status_code == 200
        assert served.content == sample_image_bytes
        assert served.headers["content-type"] == "image/jpeg"

    @pytest.mark.asyncio
    async def test_unsupported_extension(self, client, seed, studio):
        """Disallowed extensions are refused."""
        staff, creator, org, campaign, _ = studio
        response = await client.post(
            "/api/media/upload/file",
            headers=seed.headers(creator, org),
            data={"campaign_id": campaign.id, "type": "OTHER"},
            files={"file": ("payload.exe", b"MZ...", "application/octet-stream")},
        )
        assert response.status_code == 400
        assert "not supported" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_missing_file_is_404(self, client):
        """A missing stored file is 404 "File not found"."""
        response = await client.get(FILES_PREFIX + "2026/01/01/missing.jpg")
        assert response.status_code == 404
        assert response.json()["error"] == "File not found"


class TestListMedia:

    @pytest.mark.asyncio
    async def test_paginated_newest_first(self, client, seed, studio):
        """Media list paginates, newest first, with campaign and uploader."""
        staff, creator, org, campaign, _ = studio
        for _ in range(3):
            last = await seed.media(campaign, creator)

        response = await client.get("/api/media?limit=2", headers=seed.headers(staff, org))

        body = response.json()
        assert body["pagination"]["total"] == 3
        assert body["pagination"]["pages"] == 2
        assert body["media"][0]["id"] == last.id
        assert body["media"][0]["campaign_title"] == "Air Max"
        assert body["media"][0]["uploader"]["id"] == creator.id

    @pytest.mark.asyncio
    async def test_filters(self, client, seed, studio):
        """Status and type filters narrow the list."""
        staff, creator, org, campaign, _ = studio
        await seed.media(campaign, creator, status=MediaStatus.APPROVED, type=MediaType.IMAGE)
        await seed.media(campaign, creator, status=MediaStatus.PENDING, type=MediaType.VIDEO)

        approved = await client.get("/api/media?status=APPROVED", headers=seed.headers(staff, org))
        assert [m["status"] for m in approved.json()["media"]] == ["APPROVED"]

        videos = await client.get("/api/media?type=VIDEO", headers=seed.headers(staff, org))
        assert [m["type"] for m in videos.json()["media"]] == ["VIDEO"]

    @pytest.mark.asyncio
    async def test_campaign_scope(self, client, seed, studio):
        """Campaign listing only returns that campaign's media."""
        staff, creator, org, campaign, _ = studio
        other = await seed.campaign(org, await seed.client(org))
        mine = await seed.media(campaign, creator)
        await seed.media(other, creator)

        response = await client.get(f"/api/media/campaign/{campaign.id}", headers=seed.headers(staff, org))
        assert [m["id"] for m in response.json()["media"]] == [mine.id]

        missing = await client.get("/api/media/campaign/nope", headers=seed.headers(staff, org))
        assert missing.status_code == 404


class TestReviewMedia:

    @pytest.mark.asyncio
    async def test_staff_approves(self, client, seed, studio):
        """Staff can approve media."""
        staff, creator, org, campaign, _ = studio
        media = await seed.media(campaign, creator)

        response = await client.patch(
            f"/api/media/{media.id}", headers=seed.headers(staff, org), json={"status": "APPROVED"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "APPROVED"

    @pytest.mark.asyncio
    async def test_creator_cannot_change_status(self, client, seed, studio):
        """Creators cannot review their own work."""
        staff, creator, org, campaign, _ = studio
        media = await seed.media(campaign, creator)

        response = await client.patch(
            f"/api/media/{media.id}", headers=seed.headers(creator, org), json={"status": "APPROVED"}
        )
        assert response.status_code == 403
        assert response.json()["error"] == "Only staff can update media status"

    @pytest.mark.asyncio
    async def test_creator_updates_metadata(self, client, seed, studio):
        """Metadata edits are allowed to the uploader."""
        staff, creator, org, campaign, _ = studio
        media = await seed.media(campaign, creator)

        response = await client.patch(
            f"/api/media/{media.id}",
            headers=seed.headers(creator, org),
            json={"metadata": {"width": 1080, "height": 1920}},
        )
        assert response.status_code == 200
        assert response.json()["metadata"] == {"width": 1080, "height": 1920, "tags": []}

    @pytest.mark.asyncio
    async def test_uploader_archives(self, client, seed, studio):
        """DELETE archives the uploader's media."""
        staff, creator, org, campaign, _ = studio
        media = await seed.media(campaign, creator)

        response = await client.delete(f"/api/media/{media.id}", headers=seed.headers(creator, org))
        assert response.status_code == 200

        detail = await client.get(f"/api/media/{media.id}", headers=seed.headers(creator, org))
        assert detail.json()["status"] == "ARCHIVED"

    @pytest.mark.asyncio
    async def test_non_uploader_cannot_archive(self, client, seed, studio):
        """Only the uploader can archive."""
        staff, creator, org, campaign, _ = studio
        media = await seed.media(campaign, creator)

        response = await client.delete(f"/api/media/{media.id}", headers=seed.headers(staff, org))
        assert response.status_code == 404
        assert response.json()["error"] == "Media not found or unauthorized"
