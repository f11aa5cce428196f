from rest_framework.routers import DefaultRouter

from django.urls import include, path

from .views import LeaveViewSet

router = DefaultRouter()
router.register(r"applications", LeaveViewSet)

urlpatterns = [
    path("", include(router.urls)),
]
