import pytest

from django.core.cache import caches


@pytest.fixture(autouse=True)
def clear_caches():
    """Every test starts and ends with empty cache backends"""
    for backend in caches.all():
        backend.clear()
    yield
    for backend in caches.all():
        backend.clear()
