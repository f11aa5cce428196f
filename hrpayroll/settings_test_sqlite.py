"""
Test settings: in-memory SQLite, no migrations, local memory cache
"""

import logging

from .settings import *  # noqa

DATABASES = {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


# Tables are created straight from the models
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "hrpayroll-tests",
    }
}

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
    "PAGE_SIZE": 5,
}

# Small pool and a generous timeout keep bulk tests deterministic
PAYROLL = {
    **PAYROLL,  # noqa: F405
    "BULK_TIMEOUT_SECONDS": 30,
    "BULK_MAX_WORKERS": 2,
}

logging.disable(logging.CRITICAL)
