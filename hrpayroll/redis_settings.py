"""
Cache configuration.

Uses django-redis when REDIS_URL is configured and falls back to the local
memory cache for development and test runs.
"""

from urllib.parse import urlparse

from decouple import config


def get_redis_cache_config(redis_url):
    """Build a django-redis cache configuration for a single Redis instance"""
    parsed = urlparse(redis_url)
    host = parsed.hostname or "localhost"
    port = parsed.port or 6379
    db = int(parsed.path.lstrip("/") or 0)

    cache_config = {
        "default": {
            "BACKEND": "django_redis.cache.RedisCache",
            "LOCATION": f"redis://{host}:{port}/{db}",
            "OPTIONS": {
                "CLIENT_CLASS": "django_redis.client.DefaultClient",
                "CONNECTION_POOL_KWARGS": {
                    "max_connections": 20,
                    "retry_on_timeout": True,
                    "socket_connect_timeout": 5,
                    "socket_timeout": 5,
                },
            },
            "TIMEOUT": 300,
            "KEY_PREFIX": "hrpayroll",
        }
    }

    if parsed.password:
        cache_config["default"]["OPTIONS"]["CONNECTION_POOL_KWARGS"][
            "password"
        ] = parsed.password

    return cache_config


def get_cache_config(testing=False):
    """
    Get cache configuration with fallback to LocMem for testing/development
    """
    redis_url = config("REDIS_URL", default="")
    use_locmem = config("USE_LOCMEM_CACHE", default=False, cast=bool)

    if testing or use_locmem or not redis_url:
        return {
            "default": {
                "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
                "LOCATION": "hrpayroll-cache",
                "TIMEOUT": 300,
            }
        }

    return get_redis_cache_config(redis_url)
