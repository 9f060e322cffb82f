"""Dashboard session router - sign in and sign out."""

import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import get_settings
from middleware.rate_limit import LOGIN_LIMIT, limiter
from services.auth_service import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])
settings = get_settings()


class LoginRequest(BaseModel):
    username: str
    password: str


class SessionResponse(BaseModel):
    success: bool
    error: str | None = None


@router.post("", response_model=SessionResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,  # Required for rate limiting - must be named 'request'
    login_data: LoginRequest,
    response: Response,
):
    """Check the shared credentials and set the session cookie."""
    if not AuthService.verify_credentials(login_data.username, login_data.password):
        logger.info("Rejected dashboard login")
        return JSONResponse(
            status_code=401,
            content={"success": False, "error": "Invalid credentials"},
        )

    response.set_cookie(
        settings.session_cookie_name,
        AuthService.new_session_token(),
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
        path="/",
    )
    return SessionResponse(success=True)


@router.delete("", response_model=SessionResponse)
async def logout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(settings.session_cookie_name, path="/")
    return SessionResponse(success=True)
