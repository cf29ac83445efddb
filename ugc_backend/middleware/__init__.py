"""
UGC Agency Backend — Middleware Package
=========================================

Middleware chain (outermost first):
    Request → [Request ID] → [Access log] → [GZip] → [CORS] → Route handler

    - Request ID is outermost so every log line and error body carries it.
    - The access log measures everything inside it, compression included.
"""

from ugc_backend.middleware.logging import RequestLoggingMiddleware
from ugc_backend.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var

__all__ = ["RequestIDMiddleware", "RequestLoggingMiddleware", "REQUEST_ID_HEADER", "request_id_var"]
