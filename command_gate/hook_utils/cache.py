"""
Cache abstraction layer.

Provides a unified interface for TTL caching, backed by cachetools.
"""
from cachetools import TTLCache


def create_ttl_cache(maxsize: int = 100, ttl: float = 300) -> TTLCache:
    """
    Create a TTL cache with automatic expiration.

    Args:
        maxsize: Maximum number of items in cache
        ttl: Time-to-live in seconds (default: 5 minutes)

    Returns:
        TTLCache instance

    Example:
        cache = create_ttl_cache(maxsize=50, ttl=60)
        cache["key"] = "value"
        value = cache.get("key")
    """
    return TTLCache(maxsize=maxsize, ttl=ttl)
