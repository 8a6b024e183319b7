"""Response hardening and request body limits.

Uploads keep the client's file extension and are served from the same
origin as the timeline pages. Responses under /uploads/ are sandboxed, and
an upload that is not a raster image is sent as a download.
"""
import logging
from collections.abc import Callable

from fastapi import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from keepsake.domain.entities import UPLOAD_URI_PREFIX

logger = logging.getLogger(__name__)

# Sent with every response
COMMON_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

# Sent with every /uploads/ response
UPLOAD_HEADERS = {
    "Content-Security-Policy": "sandbox; default-src 'none'; img-src 'self'",
}

# Uploads of these types may render inline
INLINE_UPLOAD_TYPES = frozenset(
    {"image/png", "image/jpeg", "image/gif", "image/webp", "image/x-icon"}
)


def is_upload_path(path: str) -> bool:
    return path.startswith(UPLOAD_URI_PREFIX)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Harden responses, with extra rules for served uploads.

    Every response:
    - nosniff, same-origin framing, strict referrer policy
    - no `server` header

    /uploads/ responses:
    - a sandboxing Content-Security-Policy
    - `Content-Disposition: attachment` unless the type is a raster image
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers.update(COMMON_HEADERS)
        if "server" in response.headers:
            del response.headers["server"]

        if is_upload_path(request.url.path):
            response.headers.update(UPLOAD_HEADERS)
            media_type = response.headers.get("content-type", "").split(";")[0].strip()
            if response.status_code == 200 and media_type not in INLINE_UPLOAD_TYPES:
                response.headers["Content-Disposition"] = "attachment"

        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject request bodies above `max_request_size` before they are read.

    Uploads travel as base64 inside JSON, so the limit sits above the
    decoded upload limit by the ~4/3 encoding overhead.
    """

    def __init__(self, app, max_request_size: int = 16 * 1024 * 1024) -> None:
        super().__init__(app)
        self.max_request_size = max_request_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length")
        if not declared:
            return await call_next(request)

        try:
            size = int(declared)
        except ValueError:
            logger.warning(f"Rejected {request.method} {request.url.path}: bad Content-Length {declared!r}")
            return JSONResponse(
                status_code=400,
                content={
                    "error": "INVALID_CONTENT_LENGTH",
                    "message": "Invalid Content-Length header",
                    "details": {},
                },
            )

        if size > self.max_request_size:
            logger.warning(
                f"Rejected {request.method} {request.url.path}: "
                f"{size} bytes exceeds {self.max_request_size}"
            )
            return JSONResponse(
                status_code=413,
                content={
                    "error": "PAYLOAD_TOO_LARGE",
                    "message": f"Request body too large. Maximum size: {self.max_request_size} bytes",
                    "details": {
                        "max_size_bytes": self.max_request_size,
                        "received_size_bytes": size,
                    },
                },
            )

        return await call_next(request)
