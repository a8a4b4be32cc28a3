"""Redis client lifecycle for the shared venue cache."""

import logging

from redis.asyncio import ConnectionPool, Redis

from app.core.config import settings

logger = logging.getLogger(__name__)

redis_pool: ConnectionPool | None = None
redis_client: Redis | None = None


async def init_redis(url: str | None = None) -> Redis:
    """Open the pool and ping once; raises when Redis is unreachable."""
    global redis_pool, redis_client

    redis_pool = ConnectionPool.from_url(
        url or settings.REDIS_URL,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        decode_responses=True,
    )
    redis_client = Redis(connection_pool=redis_pool)
    try:
        await redis_client.ping()
    except Exception:
        await close_redis()
        raise

    logger.info(f"Redis ready (max {settings.REDIS_MAX_CONNECTIONS} connections)")
    return redis_client


async def close_redis() -> None:
    global redis_pool, redis_client

    if redis_client:
        await redis_client.aclose()
        redis_client = None

    if redis_pool:
        await redis_pool.disconnect()
        redis_pool = None
