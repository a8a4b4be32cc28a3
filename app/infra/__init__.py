"""Infrastructure module - Database, Redis and venue caches."""

from app.infra.cache import InMemoryTTLCache, RedisTTLCache, TTLCache
from app.infra.database import Base, close_db, db_manager, get_db, init_db
from app.infra.redis import close_redis, init_redis

__all__ = [
    # Database
    "Base",
    "db_manager",
    "get_db",
    "init_db",
    "close_db",
    # Redis
    "init_redis",
    "close_redis",
    # Caches
    "TTLCache",
    "InMemoryTTLCache",
    "RedisTTLCache",
]
