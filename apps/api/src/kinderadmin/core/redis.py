"""
Redis Configuration

Async Redis client shared by the rate limiter.
"""

import logging

from redis.asyncio import Redis, from_url

from kinderadmin.core.config import settings

logger = logging.getLogger(__name__)

# Set by init_redis on startup; None when Redis is unreachable
redis_client: Redis | None = None


async def init_redis() -> Redis | None:
    """
    Connect to Redis. Call this on application startup.

    Returns None, and leaves the client unset, if the server cannot be
    reached: rate limiting then runs in memory.
    """
    global redis_client
    client = from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
    try:
        await client.ping()
    except Exception as e:
        logger.warning(f"Redis unavailable ({e}); rate limiting will use memory")
        await client.aclose()
        return None

    redis_client = client
    logger.info("Redis connected")
    return redis_client


def get_redis() -> Redis | None:
    return redis_client


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
