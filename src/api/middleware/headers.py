"""Response header middleware.

API responses carry per-customer tracking data and one-off magic links,
so they must never be cached by browsers or intermediaries. The tracking
page itself (served from the static frontend) stays cacheable.
"""

from fastapi import Request
from fastapi.responses import Response

_API_PREFIX = "/api/"


async def apply_response_headers(request: Request, call_next) -> Response:
    """FastAPI middleware entrypoint adding cache and sniffing headers."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    if request.url.path.startswith(_API_PREFIX):
        response.headers["Cache-Control"] = "no-store"
    return response
