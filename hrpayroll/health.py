"""
Health check endpoint for load balancers and uptime monitors
"""

import logging

from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.utils import timezone

logger = logging.getLogger(__name__)

CACHE_PROBE_KEY = "hrpayroll:health"


def _check_database():
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")


def _check_cache():
    cache.set(CACHE_PROBE_KEY, "ok", 10)
    if cache.get(CACHE_PROBE_KEY) != "ok":
        raise RuntimeError("cache probe value was not stored")


CHECKS = (
    ("database", _check_database, "Database connection failed"),
    ("cache", _check_cache, "Cache service unavailable"),
)


def health_check(request):
    """200 when every backend answers, 503 with per-service status otherwise"""
    services = {}
    for name, check, failure_message in CHECKS:
        try:
            check()
        except Exception:
            logger.exception(
                f"{name} health check failed", extra={"action": "health_check_failed"}
            )
            services[name] = {"status": "unhealthy", "error": failure_message}
        else:
            services[name] = {"status": "healthy"}

    healthy = all(service["status"] == "healthy" for service in services.values())
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": timezone.now().isoformat(),
        "services": services,
    }
    return JsonResponse(body, status=200 if healthy else 503)
