"""
API Key Management

Generates and validates CollegePath API keys for user authentication.

KEY FORMAT: cp_{uuid}_{random}
Example: cp_550e8400-e29b-41d4-a716-446655440000_kKDHtSEDaGB

The user id is embedded in the key so lookup is a primary-key fetch followed
by one bcrypt check.
"""
import logging
import re
import secrets
from typing import Optional, Tuple

import bcrypt

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "cp_"
API_KEY_RANDOM_LENGTH = 16

# UUID format: 8-4-4-4-12 hex digits
API_KEY_PATTERN = re.compile(
    r"^cp_([0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})_([A-Za-z0-9_-]+)$",
    re.IGNORECASE,
)


def generate_api_key(user_id: str) -> Tuple[str, str, str]:
    """Generate a new API key for a specific user.

    Returns:
        Tuple of (full_key, key_hash, key_prefix)
        - full_key: The actual key to give to user (only shown once)
        - key_hash: bcrypt hash to store
        - key_prefix: Display prefix
    """
    random_part = secrets.token_urlsafe(API_KEY_RANDOM_LENGTH)[:API_KEY_RANDOM_LENGTH]
    full_key = f"{API_KEY_PREFIX}{user_id}_{random_part}"
    key_hash = bcrypt.hashpw(full_key.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
    key_prefix = full_key[:20]
    logger.info(f"[API_KEYS] Generated key {key_prefix}... for user {user_id}")
    return full_key, key_hash, key_prefix


def parse_api_key(key: str) -> Optional[Tuple[str, str]]:
    """Split a key into (user_id, random_part), or None if malformed."""
    match = API_KEY_PATTERN.match(key)
    if match:
        return match.group(1).lower(), match.group(2)
    return None


def extract_user_id(key: str) -> Optional[str]:
    result = parse_api_key(key)
    if result:
        return result[0]
    return None


def is_valid_key_format(key: str) -> bool:
    return API_KEY_PATTERN.match(key) is not None


def verify_api_key(provided_key: str, stored_hash: str) -> bool:
    """Validate an API key against its stored bcrypt hash."""
    try:
        return bcrypt.checkpw(provided_key.encode("utf-8"), stored_hash.encode("utf-8"))
    except ValueError as e:
        # Malformed stored hash
        logger.error(f"[API_KEYS] Could not verify key: {e}")
        return False
