"""
Origin Check — CSRF Guard for State-Changing Requests

POST requests must come from the configured application origin
(DECISIONSUITE_APP_URL). The Origin header is preferred; the origin
of the Referer is used when Origin is absent.

In development, requests carrying neither header (curl, test
clients) and deployments without a configured origin are allowed.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from starlette.requests import Request

from decisionsuite.config import settings
from decisionsuite.errors import OriginRejected
from decisionsuite.logging import get_logger

logger = get_logger("security")

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def _origin_of(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def validate_origin(
    method: str,
    origin: Optional[str],
    referer: Optional[str],
    allowed_origin: str,
    development: bool,
) -> None:
    """
    Raises:
        OriginRejected (403) when a state-changing request fails the check.
    """
    if method.upper() in SAFE_METHODS:
        return

    if development and not origin and not referer:
        return

    if not allowed_origin:
        if development:
            return
        raise OriginRejected("Origin validation failed")

    request_origin = origin or _origin_of(referer)
    if not request_origin:
        raise OriginRejected("Missing origin header")

    if request_origin.rstrip("/") != allowed_origin.rstrip("/"):
        logger.warning(f"Rejected request from origin {request_origin}")
        raise OriginRejected("Invalid origin")


async def check_origin(request: Request) -> None:
    """FastAPI dependency wrapping validate_origin with app settings."""
    validate_origin(
        method=request.method,
        origin=request.headers.get("origin"),
        referer=request.headers.get("referer"),
        allowed_origin=settings.APP_URL,
        development=not settings.is_production,
    )
