from rest_framework.routers import DefaultRouter

from django.urls import include, path

from .views import AttendanceViewSet, ShiftViewSet

router = DefaultRouter()
router.register(r"shifts", ShiftViewSet)
router.register(r"attendance", AttendanceViewSet)

urlpatterns = [
    path("", include(router.urls)),
]
