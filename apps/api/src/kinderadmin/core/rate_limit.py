"""
Rate Limiting Module

Sliding-window rate limits for admin actions.

Uses the Redis client opened at startup (sorted set per key). When Redis
is not connected, or a Redis call fails, the window is kept in process
memory instead; that fallback is per-instance only.
"""

import logging
import time

from fastapi import HTTPException, status

from kinderadmin.core import redis as redis_module

logger = logging.getLogger(__name__)

# Fallback storage: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}


class RateLimitExceeded(HTTPException):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "failed": True,
                "error": "RATE_LIMIT_EXCEEDED",
                "message": (
                    f"Rate limit exceeded. Maximum {limit} requests "
                    f"per {window_seconds} seconds."
                ),
                "retry_after_seconds": window_seconds,
            },
            headers={"Retry-After": str(window_seconds)},
        )


async def _check_rate_limit_redis(client, key: str, limit: int, window_seconds: int) -> bool:
    now = time.time()
    window_start = now - window_seconds

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, window_start)
    pipe.zcard(key)
    pipe.zadd(key, {str(now): now})
    pipe.expire(key, window_seconds)

    results = await pipe.execute()
    current_count = results[1]

    return current_count < limit


def _check_rate_limit_memory(key: str, limit: int, window_seconds: int) -> bool:
    now = time.time()
    window_start = now - window_seconds

    hits = [ts for ts in _memory_store.get(key, []) if ts > window_start]
    if len(hits) >= limit:
        _memory_store[key] = hits
        return False

    hits.append(now)
    _memory_store[key] = hits
    return True


def reset_memory_store() -> None:
    """Forget every in-memory window."""
    _memory_store.clear()


async def check_rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """
    Record one request against key and report whether it is allowed.

    Args:
        key: Unique key for this limit (e.g., "admin:accept:user_123")
        limit: Maximum requests allowed in the window
        window_seconds: Window length in seconds

    Returns:
        True if the request is allowed, False if the limit is exceeded
    """
    client = redis_module.redis_client

    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except Exception as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


async def enforce_user_rate_limit(
    user_id: str,
    action: str,
    limit: int,
    window_seconds: int,
) -> None:
    """
    Apply a per-user limit to an action.

    Raises:
        RateLimitExceeded: If the user has used up the window
    """
    key = f"admin:{action}:{user_id}"
    allowed = await check_rate_limit(key, limit, window_seconds)

    if not allowed:
        logger.warning(
            f"Rate limit exceeded for user {user_id} on action '{action}': "
            f"{limit}/{window_seconds}s"
        )
        raise RateLimitExceeded(limit, window_seconds)


__all__ = [
    "check_rate_limit",
    "enforce_user_rate_limit",
    "reset_memory_store",
    "RateLimitExceeded",
]
