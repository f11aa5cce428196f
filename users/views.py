import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets
from rest_framework.filters import OrderingFilter, SearchFilter

from core.exceptions import ValidationAPIError
from core.logging_utils import hash_user_id, safe_log_employee

from .filters import EmployeeFilter
from .models import Department, Designation, Employee
from .permissions import ReadOnlyOrHR
from .serializers import DepartmentSerializer, DesignationSerializer, EmployeeSerializer

logger = logging.getLogger(__name__)


class DepartmentViewSet(viewsets.ModelViewSet):
    """Department master data with live employee counts"""

    queryset = Department.objects.with_employee_count().order_by("name")
    serializer_class = DepartmentSerializer
    permission_classes = [ReadOnlyOrHR]
    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    search_fields = ["code", "name", "head_of_department"]
    filterset_fields = ["status"]
    ordering_fields = ["name", "code", "employee_count"]

    def perform_destroy(self, instance):
        if instance.employees.exists() or instance.designations.exists():
            raise ValidationAPIError(
                "Department still has employees or designations assigned",
                code="DEPARTMENT_IN_USE",
            )
        instance.delete()


class DesignationViewSet(viewsets.ModelViewSet):
    queryset = (
        Designation.objects.select_related("department")
        .with_employee_count()
        .order_by("department__name", "title")
    )
    serializer_class = DesignationSerializer
    permission_classes = [ReadOnlyOrHR]
    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    search_fields = ["code", "title", "level"]
    filterset_fields = ["department", "status"]
    ordering_fields = ["title", "code", "employee_count"]

    def perform_destroy(self, instance):
        if instance.employees.exists():
            raise ValidationAPIError(
                "Designation still has employees assigned",
                code="DESIGNATION_IN_USE",
            )
        instance.delete()


class EmployeeViewSet(viewsets.ModelViewSet):
    """Endpoints for employee master data"""

    queryset = Employee.objects.select_related(
        "department", "designation", "shift"
    ).order_by("last_name", "first_name")
    serializer_class = EmployeeSerializer
    permission_classes = [ReadOnlyOrHR]
    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    search_fields = ["employee_code", "first_name", "last_name", "email"]
    filterset_class = EmployeeFilter
    ordering_fields = ["employee_code", "last_name", "joining_date", "basic_salary"]

    def perform_create(self, serializer):
        employee = serializer.save()
        logger.info(
            "New employee created",
            extra={
                **safe_log_employee(employee, "employee_created"),
                "created_by": hash_user_id(self.request.user.pk),
            },
        )

    def perform_update(self, serializer):
        employee = serializer.save()
        logger.info(
            "Employee updated",
            extra={
                **safe_log_employee(employee, "employee_updated"),
                "fields": sorted(serializer.validated_data.keys()),
            },
        )

    def perform_destroy(self, instance):
        """Soft delete: employees with history are marked inactive"""
        instance.status = Employee.Status.INACTIVE
        instance.save(update_fields=["status", "updated_at"])
        logger.info(
            "Employee deactivated",
            extra=safe_log_employee(instance, "employee_deactivated"),
        )
