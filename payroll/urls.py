from rest_framework.routers import DefaultRouter

from django.urls import include, path

from .views import AllowanceDeductionViewSet, ComponentTemplateViewSet, PayrollViewSet

router = DefaultRouter()
router.register(r"components", AllowanceDeductionViewSet, basename="component")
router.register(r"templates", ComponentTemplateViewSet, basename="component-template")
router.register(r"payrolls", PayrollViewSet, basename="payroll")

urlpatterns = [
    path("", include(router.urls)),
]
