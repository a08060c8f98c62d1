"""Authentication check for the image hub.

Identity is owned by the gateway in front of this service: it verifies the
session and forwards the user ID in a header. This module only reads it.
"""

from fastapi import Request

from .config import get_settings


def current_user_id(request: Request) -> str | None:
    """Return the authenticated user ID, or None for anonymous requests."""
    settings = get_settings()
    if not settings.require_auth:
        return "anonymous"
    user_id = request.headers.get(settings.user_header, "").strip()
    return user_id or None
