# hrpayroll/urls.py
from rest_framework.decorators import (
    api_view,
    authentication_classes,
    permission_classes,
)
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

from .health import health_check


@api_view(["GET"])
@permission_classes([AllowAny])
@authentication_classes([])
def api_root(request):
    """API root endpoint showing available endpoints"""
    return Response(
        {
            "message": "HR Payroll API",
            "version": "1.0",
            "api_versions": {"current": "v1", "supported": ["v1"], "deprecated": []},
            "endpoints": {
                "admin": request.build_absolute_uri("/admin/"),
                "v1_users": request.build_absolute_uri("/api/v1/users/"),
                "v1_worktime": request.build_absolute_uri("/api/v1/worktime/"),
                "v1_leaves": request.build_absolute_uri("/api/v1/leaves/"),
                "v1_payroll": request.build_absolute_uri("/api/v1/payroll/"),
            },
        }
    )


urlpatterns = [
    path("", RedirectView.as_view(url="/api/", permanent=False)),
    path("admin/", admin.site.urls),
    path("health/", health_check, name="health-check"),
    path("api/", api_root, name="api-root"),
    path("api/v1/", api_root, name="api-v1-root"),
    path("api/v1/users/", include("users.urls")),
    path("api/v1/worktime/", include("worktime.urls")),
    path("api/v1/leaves/", include("leaves.urls")),
    path("api/v1/payroll/", include("payroll.urls")),
]
