"""Dashboard login - a single shared credential pair and opaque session tokens.

This only keeps casual visitors off the wall display; it is not a user system.
"""

import secrets

from config import get_settings

settings = get_settings()


class AuthService:
    """Credential check and session token issuance."""

    @staticmethod
    def verify_credentials(username: str, password: str) -> bool:
        """Exact match against the configured pair. Rejects everything when no
        password is configured."""
        if not settings.dashboard_password:
            return False
        username_ok = secrets.compare_digest(
            username.encode("utf-8"), settings.dashboard_username.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            password.encode("utf-8"), settings.dashboard_password.encode("utf-8")
        )
        return username_ok and password_ok

    @staticmethod
    def new_session_token() -> str:
        return secrets.token_urlsafe(32)
