"""
UGC Agency Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and models (persistence).
How:   Stateless classes with a module-level singleton each; every method
       takes the request's AsyncSession plus the gate-resolved organization
       id or context, and returns pydantic response schemas.

Service inventory:
    auth_service          sign-up, sign-in, token issue
    user_service          profile edits, role switching
    organization_service  organizations and memberships
    client_service        clients (archive on delete)
    campaign_service      campaigns and orders
    creator_service       creator accounts and their stats
    media_service         media rows and review workflow
    storage_service       bytes on disk under STORAGE_ROOT
    message_service       campaign chat
    dashboard_service     counts and recent activity
    email_service         mocked email integration
    drive_service         mocked Google Drive integration
    pagination            shared offset pagination helpers
"""
