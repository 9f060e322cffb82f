"""Login throttling with SlowAPI.

The dashboard usually sits behind a reverse proxy, so the client address is
taken from the first X-Forwarded-For hop when present.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

LOGIN_LIMIT = "5/minute"


def client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    return first_hop or get_remote_address(request)


limiter = Limiter(key_func=client_address)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Too many login attempts from one address."""
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": "Too many login attempts. Please try again later.",
            "retry_after": exc.detail,
        },
    )
