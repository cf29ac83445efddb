"""
UGC Agency Backend — Application Package Initializer
=====================================================

What: Marks the `ugc_backend` directory as a Python package.
Why:  Enables module imports like `from ugc_backend.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Dependencies (Auth / Role / Org)  │  ← Who is calling, in which tenant
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Tenant-scoped queries, rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Explicit Database handle
    └─────────────────────────────────────┘

    - Routes handle HTTP details (status codes, headers) and delegate to services
    - Dependencies resolve the caller and the organization every query is scoped by
    - Services hold the business rules and can be tested without HTTP
    - Models represent database structure; Schemas represent API contracts
"""

__version__ = "1.0.0"
