"""
Caching utilities for expensive dashboard aggregates
Uses Redis when configured (see settings.CACHES)
"""
from functools import wraps
import hashlib
import logging

from django.core.cache import cache

logger = logging.getLogger(__name__)

# Cache TTLs (in seconds)
DASHBOARD_STATS_CACHE_TTL = 300  # 5 minutes
ANALYTICS_DASHBOARD_CACHE_TTL = 600  # 10 minutes

DASHBOARD_STATS_CACHE_KEY = 'dashboard_stats'
ANALYTICS_DASHBOARD_CACHE_KEY = 'analytics_dashboard'

# Keys dropped whenever a research record changes
DASHBOARD_CACHE_KEYS = [DASHBOARD_STATS_CACHE_KEY, ANALYTICS_DASHBOARD_CACHE_KEY]


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    if not args and not kwargs:
        return prefix
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def cached_query(cache_ttl=60, key_prefix="query"):
    """
    Decorator to cache expensive queries

    Usage:
        @cached_query(cache_ttl=300, key_prefix=DASHBOARD_STATS_CACHE_KEY)
        def build_dashboard_stats():
            return data
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = make_cache_key(key_prefix, *args, **kwargs)

            cached_data = cache.get(cache_key)
            if cached_data is not None:
                logger.debug(f"Cache HIT for {key_prefix}: {cache_key}")
                return cached_data

            logger.debug(f"Cache MISS for {key_prefix}: {cache_key}")
            result = func(*args, **kwargs)
            cache.set(cache_key, result, cache_ttl)
            return result
        return wrapper
    return decorator


def invalidate_dashboard_cache():
    """Drop every cached dashboard aggregate"""
    try:
        cache.delete_many(DASHBOARD_CACHE_KEYS)
        logger.debug("Invalidated dashboard cache")
    except Exception as e:
        logger.warning(f"Could not invalidate dashboard cache: {str(e)}")
