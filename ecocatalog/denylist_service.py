# ecocatalog/denylist_service.py

import redis
from datetime import timedelta
from typing import Optional

from .core.config import settings
from .logging import logger

_redis_client: Optional[redis.Redis] = None
_redis_checked = False


def get_redis_client() -> Optional[redis.Redis]:
    """Connect to Redis on first use; ``None`` when the server is unreachable."""
    global _redis_client, _redis_checked
    if _redis_checked:
        return _redis_client

    _redis_checked = True
    try:
        client = redis.from_url(settings.REDIS_URL, decode_responses=True, socket_connect_timeout=2)
        # Ping the server to check the connection
        client.ping()
        logger.info("Successfully connected to Redis.")
        _redis_client = client
    except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
        logger.error(f"Could not connect to Redis, token denylist disabled: {e}")
        _redis_client = None
    return _redis_client


def add_token_to_denylist(jti: str, expires: timedelta):
    """
    Adds a token's JTI to the denylist with an expiration time.

    Args:
        jti (str): The JWT ID of the token to be denylisted.
        expires (timedelta): The remaining lifetime of the token, used as the
                             expiry for the Redis key.
    """
    client = get_redis_client()
    if client:
        client.setex(f"denylist:{jti}", expires, "denied")


def is_token_denylisted(jti: str) -> bool:
    """
    Checks if a token's JTI is in the denylist.

    Args:
        jti (str): The JWT ID to check.

    Returns:
        bool: True if the token is denylisted, False otherwise.
    """
    client = get_redis_client()
    if client:
        return bool(client.exists(f"denylist:{jti}"))
    # Without Redis, fail open so the app keeps serving
    return False
