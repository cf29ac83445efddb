"""
UGC Agency Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the expected failure modes.
Why:   Services raise typed exceptions; global handlers (registered in
       main.py) turn them into consistent JSON error responses.
How:   Each exception carries a message, a machine-readable code, and an
       optional context dict returned as `details`.

Exception Hierarchy:
    UGCPlatformError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── ConflictError            → 400 Bad Request (business rule violated)
    ├── AuthenticationError      → 401 Unauthorized
    ├── PermissionDeniedError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    └── FileStorageError         → 500 Internal Server Error

Conflicts (duplicate email, deleting a client that still has running
campaigns) answer 400 like validation errors; the distinct `code` lets
clients tell them apart.
"""

from typing import Any, Dict, Optional


class UGCPlatformError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Extra structured info returned as `details`
    """

    status_code: int = 500
    code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(UGCPlatformError):
    """
    Raised when client input fails a business validation.

    Schema-level problems are caught earlier by FastAPI's
    RequestValidationError, which is also answered with 400.
    """

    status_code = 400
    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(UGCPlatformError):
    """Duplicate unique value, or a delete blocked by dependent rows."""

    status_code = 400
    code = "conflict"


class AuthenticationError(UGCPlatformError):
    """
    Raised when the caller cannot be identified.

    When:    Missing bearer token, bad signature, expired token, wrong
             password, or a token naming a user that no longer exists.
    HTTP:    401 Unauthorized (with `WWW-Authenticate: Bearer`)
    """

    status_code = 401
    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class PermissionDeniedError(UGCPlatformError):
    """
    Raised when an identified caller is not allowed to do something.

    When:    Global role not in the allowed set, not a member of the
             organization, not the owner of the resource.
    HTTP:    403 Forbidden
    """

    status_code = 403
    code = "forbidden"

    def __init__(
        self,
        message: str = "Insufficient permissions",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(UGCPlatformError):
    """
    Raised when a requested resource does not exist (or is outside the
    caller's organization, which is indistinguishable on purpose).

    `message` overrides the generated "<Resource> not found" text for the
    few endpoints with a fixed wording.
    """

    status_code = 404
    code = "not_found"

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message or f"{resource} not found", context=ctx)


class FileStorageError(UGCPlatformError):
    """
    Raised when file system operations fail.

    The client gets a generic message; the OS error is logged server-side.
    """

    status_code = 500
    code = "server_error"

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

