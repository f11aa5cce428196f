import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response

from django.shortcuts import get_object_or_404
from django.utils import timezone

from core.exceptions import LeaveStateError
from users.models import Employee
from users.permissions import IsEmployeeOrAbove, IsHROrAbove

from .filters import LeaveFilter
from .models import Leave, LeaveBalance, leave_day_count
from .serializers import LeaveBalanceSerializer, LeaveDecisionSerializer, LeaveSerializer
from .services import apply_for_leave, approve_leave, cancel_leave, reject_leave

logger = logging.getLogger(__name__)


class LeaveViewSet(viewsets.ModelViewSet):
    """Leave applications and their approval workflow"""

    queryset = Leave.objects.select_related("employee").order_by("-applied_on")
    serializer_class = LeaveSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = LeaveFilter
    ordering_fields = ["applied_on", "start_date"]

    def get_permissions(self):
        if self.action in ["approve", "reject", "destroy"]:
            return [IsHROrAbove()]
        return [IsEmployeeOrAbove()]

    def _own_employee(self):
        """Employee record of a plain employee user, None for staff roles"""
        user = self.request.user
        if user.is_superuser:
            return None
        employee = user.employees.first()
        if employee is not None and employee.role == "employee":
            return employee
        return None

    def get_queryset(self):
        queryset = super().get_queryset()
        own = self._own_employee()
        if own is not None:
            queryset = queryset.filter(employee=own)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        own = self._own_employee()
        if own is not None and data["employee"] != own:
            raise PermissionDenied("Employees can only apply for their own leave.")
        leave = apply_for_leave(
            employee=data["employee"],
            leave_type=data["leave_type"],
            start_date=data["start_date"],
            end_date=data["end_date"],
            is_half_day=data.get("is_half_day", False),
            reason=data.get("reason", ""),
        )
        return Response(self.get_serializer(leave).data, status=status.HTTP_201_CREATED)

    def perform_update(self, serializer):
        if serializer.instance.status != Leave.Status.PENDING:
            raise LeaveStateError("Cannot edit leave that has been approved/rejected.")
        data = serializer.validated_data
        instance = serializer.instance
        start = data.get("start_date", instance.start_date)
        end = data.get("end_date", instance.end_date)
        half_day = data.get("is_half_day", instance.is_half_day)
        leave_type = data.get("leave_type", instance.leave_type)
        balance, _ = LeaveBalance.objects.get_or_create_for(instance.employee, start.year)
        if LeaveBalance.tracks(leave_type):
            days = leave_day_count(start, end, half_day)
            if balance.remaining(leave_type) < days:
                raise ValidationError({"leave_type": f"Insufficient {leave_type} balance."})
        serializer.save()

    def _decision_remarks(self, request):
        serializer = LeaveDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data["admin_remarks"]

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        leave = approve_leave(
            self.get_object().pk,
            approver=request.user.get_username() or "Admin",
            remarks=self._decision_remarks(request),
        )
        return Response(self.get_serializer(leave).data)

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        leave = reject_leave(
            self.get_object().pk,
            approver=request.user.get_username() or "Admin",
            remarks=self._decision_remarks(request),
        )
        return Response(self.get_serializer(leave).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        leave = cancel_leave(self.get_object().pk)
        return Response(self.get_serializer(leave).data)

    @action(detail=False, methods=["get"])
    def balance(self, request):
        """Leave balance for ?employee=<id>&year=<yyyy> (year defaults to current)"""
        employee_id = request.query_params.get("employee")
        if not employee_id:
            raise ValidationError({"employee": "This query parameter is required."})
        try:
            year = int(request.query_params.get("year") or timezone.now().year)
        except ValueError:
            raise ValidationError({"year": "Must be an integer."})

        employee = get_object_or_404(Employee, pk=employee_id)
        balance, _ = LeaveBalance.objects.get_or_create_for(employee, year)
        return Response(LeaveBalanceSerializer(balance).data)
