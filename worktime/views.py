import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.response import Response

from core.exceptions import ValidationAPIError
from users.permissions import ReadOnlyOrHR

from .filters import AttendanceFilter
from .models import Attendance, Shift
from .serializers import AttendanceSerializer, BulkAttendanceSerializer, ShiftSerializer
from .services import bulk_mark_attendance, recalculate_attendance

logger = logging.getLogger(__name__)


class ShiftViewSet(viewsets.ModelViewSet):
    """Shift configuration with the number of assigned employees"""

    queryset = Shift.objects.with_assigned_employees().order_by("start_time", "name")
    serializer_class = ShiftSerializer
    permission_classes = [ReadOnlyOrHR]
    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    search_fields = ["code", "name"]
    filterset_fields = ["status", "is_night_shift"]

    def perform_destroy(self, instance):
        if instance.employees.exists():
            raise ValidationAPIError(
                "Shift still has employees assigned",
                code="SHIFT_IN_USE",
                details={"assigned_employees": instance.employees.count()},
            )
        instance.delete()


class AttendanceViewSet(viewsets.ModelViewSet):
    """Attendance capture; metrics are computed on create and update"""

    queryset = Attendance.objects.select_related(
        "employee", "employee__shift"
    ).order_by("-date", "employee__last_name")
    serializer_class = AttendanceSerializer
    permission_classes = [ReadOnlyOrHR]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = AttendanceFilter
    ordering_fields = ["date", "total_hours", "late_by_minutes"]

    def perform_create(self, serializer):
        attendance = serializer.save()
        logger.info(
            "Attendance recorded",
            extra={
                "attendance_id": attendance.pk,
                "status": attendance.status,
                "action": "attendance_created",
            },
        )

    @action(detail=False, methods=["post"])
    def bulk_mark(self, request):
        """Mark attendance for several employees on one date"""
        serializer = BulkAttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = bulk_mark_attendance(
            date=data["date"],
            employee_ids=data["employee_ids"],
            status=data["status"],
            check_in_time=data.get("check_in_time"),
            check_out_time=data.get("check_out_time"),
            remarks=data.get("remarks", ""),
        )
        return Response(result, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def recalculate(self, request, pk=None):
        """Recompute metrics, e.g. after the employee's shift changed"""
        attendance = recalculate_attendance(self.get_object())
        return Response(self.get_serializer(attendance).data)
