"""
Cache Service Singleton - Faculty Appraisal Dashboard
app/services/cache.py

Provides a singleton Redis cache instance with TTL constants.
Gracefully handles Redis unavailability.
"""
import redis
from typing import Optional
from app.services.redis_cache import RedisCache
from app.config import settings

# Cycles are reference data; appraisal views are never cached
TTL_CYCLES = settings.CACHE_TTL_CYCLES
CYCLES_CACHE_KEY = "cycles:all"

# Singleton instance
_cache: Optional[RedisCache] = None


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is available, None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
    """
    global _cache
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
        except (redis.RedisError, ConnectionError):
            _cache = None
    return _cache
