"""
Authentication dependency.

Resolves the ``X-CollegePath-API-Key`` header to a User. Successful bcrypt
checks are cached in memory per key so repeated requests skip hashing; the
User row itself is always reloaded from the request's session.
"""
import logging
import time
from typing import Dict, Optional, Tuple

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.auth.api_keys import extract_user_id, verify_api_key
from collegepath.config import get_settings
from collegepath.infra.db.models.user import User
from collegepath.infra.db.repositories.user import UserRepository
from collegepath.infra.db.session import get_db

logger = logging.getLogger(__name__)

# api_key -> (user_id, expiry_timestamp)
_auth_cache: Dict[str, Tuple[str, float]] = {}


def _get_cached_user_id(api_key: str) -> Optional[str]:
    """Get user id from cache if valid and not expired."""
    if api_key in _auth_cache:
        user_id, expiry = _auth_cache[api_key]
        if time.time() < expiry:
            return user_id
        del _auth_cache[api_key]
    return None


def _cache_user_id(api_key: str, user_id: str) -> None:
    _auth_cache[api_key] = (user_id, time.time() + get_settings().auth_cache_ttl_seconds)


def clear_auth_cache() -> None:
    """Clear the auth cache (call when API keys are revoked)."""
    _auth_cache.clear()


class AuthenticationError(HTTPException):
    """Authentication failed."""
    def __init__(self, detail: str = "Invalid or missing API key"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    x_collegepath_api_key: Optional[str] = Header(None, alias="X-CollegePath-API-Key"),
    db: AsyncSession = Depends(get_db),
) -> User:
    """FastAPI dependency returning the authenticated User.

    Raises:
        AuthenticationError: If the key is missing, malformed, unknown or revoked
    """
    if not x_collegepath_api_key:
        raise AuthenticationError("API key required")

    users = UserRepository(db)

    cached_user_id = _get_cached_user_id(x_collegepath_api_key)
    if cached_user_id:
        user = await users.get_by_id(cached_user_id)
        if user is not None:
            return user

    user_id = extract_user_id(x_collegepath_api_key)
    if user_id is None:
        logger.warning("[AUTH] Malformed API key")
        raise AuthenticationError("Invalid API key format")

    user = await users.get_by_id(user_id)
    if user is None or not user.api_key_hash:
        logger.warning(f"[AUTH] No active key for user {user_id}")
        raise AuthenticationError("Invalid API key")

    if not verify_api_key(x_collegepath_api_key, user.api_key_hash):
        logger.warning(f"[AUTH] Key hash mismatch for user {user_id}")
        raise AuthenticationError("Invalid API key")

    _cache_user_id(x_collegepath_api_key, user.id)
    return user
