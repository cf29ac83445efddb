"""
Pydantic request/response schemas, one module per resource.

Schemas are separate from SQLAlchemy models: they are the API contract,
decide exactly which fields are exposed (never password hashes), and
generate the OpenAPI docs.
"""
