"""
UGC Agency Backend — Service Unit Tests
=========================================

What:  Service rules checked against a mocked AsyncSession.
Why:   Permission decisions should hold without a schema or HTTP; these
       tests pin the branches the API tests reach only indirectly.

Test Strategy:
    ✅ Lookups raise NotFoundError when the scoped query finds nothing
    ✅ Message edit/delete permission branches, and no writes when refused
    ✅ Integration guards decided before any provider work
"""

from datetime import datetime, timezone

import pytest

from ugc_backend.dependencies import OrgContext
from ugc_backend.exceptions import NotFoundError, PermissionDeniedError
from ugc_backend.models import Campaign, MemberRole, Message, User, UserRole
from ugc_backend.schemas.integrations import DriveSettings, EmailSettings
from ugc_backend.schemas.message import MessageUpdateRequest
from ugc_backend.services.campaign_service import campaign_service
from ugc_backend.services.drive_service import drive_service
from ugc_backend.services.email_service import email_service
from ugc_backend.services.message_service import message_service


def make_ctx(role=UserRole.STAFF, member_role=MemberRole.MEMBER, user_id="user-1") -> OrgContext:
    user = User(id=user_id, email=f"{user_id}@example.com", name="Test User", role=role)
    return OrgContext(user=user, organization_id="org-1", organization_role=member_role)


def message_from(sender_id: str) -> Message:
    sender = User(id=sender_id, email=f"{sender_id}@example.com", name="Sender", role=UserRole.CREATOR)
    message = Message(id="msg-1", campaign_id="camp-1", sender_id=sender_id, content="Original")
    message.sender = sender
    return message


class TestCampaignLookup:

    @pytest.mark.asyncio
    async def test_get_campaign_found(self, mock_db_session):
        """A row from the scoped query is returned as-is."""
        campaign = Campaign(id="camp-1", organization_id="org-1", client_id="cl-1", title="Air Max")
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = campaign

        result = await campaign_service.get_campaign(mock_db_session, "org-1", "camp-1")

        assert result is campaign

    @pytest.mark.asyncio
    async def test_get_campaign_not_found(self, mock_db_session):
        """No row means NotFoundError, whatever the reason."""
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = None

        with pytest.raises(NotFoundError):
            await campaign_service.get_campaign(mock_db_session, "org-1", "camp-other-org")


class TestMessagePermissions:

    @pytest.mark.asyncio
    async def test_edit_by_other_user_refused(self, mock_db_session):
        """Only the sender edits; a refused edit flushes nothing."""
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = message_from("user-2")

        with pytest.raises(PermissionDeniedError):
            await message_service.edit_message(
                mock_db_session, make_ctx(role=UserRole.ADMIN), "msg-1", MessageUpdateRequest(content="New")
            )
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_by_sender_stamps_edited_at(self, mock_db_session):
        """The sender's edit replaces the content and stamps edited_at."""
        message = message_from("user-1")
        message.created_at = message.updated_at = datetime.now(timezone.utc)
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = message

        result = await message_service.edit_message(
            mock_db_session, make_ctx(), "msg-1", MessageUpdateRequest(content="Fixed")
        )

        assert result.content == "Fixed"
        assert result.edited_at is not None
        assert result.sender.id == "user-1"
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_by_plain_member_refused(self, mock_db_session):
        """A plain member cannot delete someone else's message."""
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = message_from("user-2")

        with pytest.raises(PermissionDeniedError):
            await message_service.delete_message(mock_db_session, make_ctx(role=UserRole.CREATOR), "msg-1")
        assert mock_db_session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_delete_by_org_admin(self, mock_db_session):
        """An organization ADMIN deletes any message in the organization."""
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = message_from("user-2")

        await message_service.delete_message(
            mock_db_session, make_ctx(role=UserRole.CREATOR, member_role=MemberRole.ADMIN), "msg-1"
        )

        assert mock_db_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_delete_missing_message(self, mock_db_session):
        """Unknown or foreign message ids are NotFoundError."""
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = None

        with pytest.raises(NotFoundError):
            await message_service.delete_message(mock_db_session, make_ctx(), "msg-unknown")


class TestIntegrationGuards:

    def test_email_settings_admin_only(self):
        """Global STAFF cannot configure email."""
        with pytest.raises(PermissionDeniedError, match="Only admins can configure email settings"):
            email_service.update_settings(make_ctx(role=UserRole.STAFF), EmailSettings())

    def test_email_sync_allows_staff(self):
        """STAFF may sync; the mock reports nothing new."""
        result = email_service.sync(make_ctx(role=UserRole.STAFF))
        assert result.synced == 0
        assert result.errors == []

    def test_drive_settings_admin_only(self):
        """Drive configuration is ADMIN only."""
        with pytest.raises(PermissionDeniedError, match="Only admins can configure Drive settings"):
            drive_service.update_settings(make_ctx(role=UserRole.CREATOR), DriveSettings())

    def test_drive_connected_needs_folder(self):
        """Enabled without a folder is not connected."""
        result = drive_service.update_settings(make_ctx(role=UserRole.ADMIN), DriveSettings(enabled=True))
        assert result.connected is False
