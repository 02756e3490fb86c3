"""
Identity — API Key Resolution

Callers identify themselves with an X-API-Key header. Keys are
configured as a comma-separated environment variable and held as
SHA-256 hashes only.

Identity is optional for classification: an unknown or missing key
makes the caller anonymous, and anonymous results are not stored.
Listing stored artifacts requires an identity.
"""

from __future__ import annotations

import hashlib
import os
from typing import Optional

from fastapi import Security
from fastapi.security import APIKeyHeader

from decisionsuite.config import settings
from decisionsuite.errors import IdentityResolutionError
from decisionsuite.logging import describe_error, get_logger

logger = get_logger("auth")

API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=False)

# Format: DECISIONSUITE_API_KEYS=key1,key2,key3
_RAW_KEYS = os.getenv("DECISIONSUITE_API_KEYS", "")
_VALID_KEY_HASHES: set[str] = set()

for key in _RAW_KEYS.split(","):
    key = key.strip()
    if key:
        _VALID_KEY_HASHES.add(hashlib.sha256(key.encode()).hexdigest())


def _verify_key(api_key: str) -> bool:
    """Verify an API key against stored hashes."""
    if not api_key:
        return False
    key_hash = hashlib.sha256(api_key.encode()).hexdigest()
    return key_hash in _VALID_KEY_HASHES


def resolve_identity(api_key: Optional[str]) -> Optional[str]:
    """
    Resolve an API key to an opaque user id.

    Returns None for a missing key. The user id is a 12-character
    prefix of the key hash, never the key itself.

    Raises:
        IdentityResolutionError if a key was sent but is not valid.
    """
    if not api_key:
        return None
    if not _verify_key(api_key):
        raise IdentityResolutionError("Invalid API key.")
    return hashlib.sha256(api_key.encode()).hexdigest()[:12]


async def optional_identity(
    api_key: Optional[str] = Security(API_KEY_HEADER),
) -> Optional[str]:
    """FastAPI dependency — the caller's user id, or None when anonymous."""
    try:
        return resolve_identity(api_key)
    except IdentityResolutionError as e:
        logger.warning(
            "Identity resolution failed, continuing anonymously",
            extra={"error": describe_error(e, settings.is_production)},
        )
        return None


async def require_identity(
    api_key: Optional[str] = Security(API_KEY_HEADER),
) -> str:
    """FastAPI dependency — the caller's user id; anonymous callers are rejected."""
    user_id = await optional_identity(api_key)
    if user_id is None:
        raise IdentityResolutionError("Not authenticated")
    return user_id
