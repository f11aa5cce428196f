import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.response import Response

from core.exceptions import ValidationAPIError
from core.logging_utils import hash_user_id, safe_log_employee
from users.permissions import IsAccountantOrAdmin, IsEmployeeOrAbove, ReadOnlyOrAccountant

from .filters import AllowanceDeductionFilter, ComponentTemplateFilter, PayrollFilter
from .models import AllowanceDeduction, ComponentTemplate, Payroll
from .serializers import (
    AllowanceDeductionSerializer,
    ApplyTemplateSerializer,
    BulkGeneratePayrollSerializer,
    CalculatePreviewSerializer,
    CancelPayrollSerializer,
    ComponentTemplateSerializer,
    GeneratePayrollSerializer,
    PayrollListSerializer,
    PayrollSerializer,
)
from .services.bulk import generate_bulk_payroll
from .services.cost_analysis import (
    analyse_component_costs,
    calculate_preview,
    calculate_single_amount,
    component_statistics,
)
from .services.enums import ComponentStatus
from .services.payroll_service import (
    approve_payroll,
    cancel_payroll,
    delete_payroll,
    generate_payroll,
    mark_paid as mark_payroll_paid,
)
from .services.templates import apply_template, clone_template

logger = logging.getLogger(__name__)


class AllowanceDeductionViewSet(viewsets.ModelViewSet):
    """Allowance and deduction components used by payroll generation"""

    queryset = AllowanceDeduction.objects.all()
    serializer_class = AllowanceDeductionSerializer
    permission_classes = [ReadOnlyOrAccountant]
    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    search_fields = ["code", "name", "description"]
    filterset_class = AllowanceDeductionFilter
    ordering_fields = ["display_order", "name", "code", "value"]

    def perform_create(self, serializer):
        component = serializer.save()
        logger.info(
            "Payroll component created",
            extra={
                "component_code": component.code,
                "created_by": hash_user_id(self.request.user.pk),
                "action": "component_created",
            },
        )

    def perform_destroy(self, instance):
        if instance.is_mandatory:
            raise ValidationAPIError(
                "Mandatory components cannot be deleted; deactivate them instead",
                code="COMPONENT_MANDATORY",
            )
        instance.delete()

    @action(detail=True, methods=["post"], permission_classes=[IsAccountantOrAdmin])
    def toggle_status(self, request, pk=None):
        component = self.get_object()
        component.status = (
            ComponentStatus.INACTIVE.value
            if component.is_active
            else ComponentStatus.ACTIVE.value
        )
        component.save(update_fields=["status", "updated_at"])
        logger.info(
            "Payroll component status toggled",
            extra={
                "component_code": component.code,
                "status": component.status,
                "action": "component_status_toggled",
            },
        )
        return Response(self.get_serializer(component).data)

    @action(detail=False, methods=["get"])
    def cost_analysis(self, request):
        return Response(analyse_component_costs())

    @action(detail=False, methods=["get"])
    def analytics(self, request):
        return Response(component_statistics())

    @action(detail=False, methods=["post"])
    def calculate_preview(self, request):
        serializer = CalculatePreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if "calculation_method" in data:
            amount = calculate_single_amount(
                data["basic_salary"], data["calculation_method"], data["value"]
            )
            return Response({"calculated_amount": amount})

        return Response(calculate_preview(data["basic_salary"]))


class ComponentTemplateViewSet(viewsets.ModelViewSet):
    """Reusable component packages for an industry and employee level"""

    queryset = ComponentTemplate.objects.prefetch_related("items__component")
    serializer_class = ComponentTemplateSerializer
    permission_classes = [ReadOnlyOrAccountant]
    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    search_fields = ["name", "description"]
    filterset_class = ComponentTemplateFilter
    ordering_fields = ["created_at", "name", "usage_count"]

    @action(detail=True, methods=["post"], permission_classes=[IsAccountantOrAdmin])
    def clone(self, request, pk=None):
        clone = clone_template(self.get_object())
        return Response(self.get_serializer(clone).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], permission_classes=[IsAccountantOrAdmin])
    def apply(self, request, pk=None):
        """Apply the template to the posted employee and return the salary breakdown"""
        serializer = ApplyTemplateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = serializer.validated_data["employee"]
        result = apply_template(self.get_object().pk, employee)
        logger.info(
            "Component template applied via API",
            extra={
                **safe_log_employee(employee, "component_template_applied_api"),
                "requested_by": hash_user_id(request.user.pk),
            },
        )
        return Response(result)


class PayrollViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Payroll records. Records are created through generate/generate_bulk and
    change only through the status actions.
    """

    queryset = (
        Payroll.objects.select_related("employee")
        .prefetch_related("details")
        .order_by("-year", "-month", "employee__employee_code")
    )
    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    search_fields = ["payroll_number", "employee__employee_code", "employee__last_name"]
    filterset_class = PayrollFilter
    ordering_fields = ["year", "month", "net_salary", "gross_salary", "created_at"]

    def get_serializer_class(self):
        if self.action == "list":
            return PayrollListSerializer
        return PayrollSerializer

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [IsEmployeeOrAbove()]
        return [IsAccountantOrAdmin()]

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        # Plain employees only see their own payslips
        if not user.is_superuser:
            employee = user.employees.first()
            if employee is not None and employee.role == "employee":
                queryset = queryset.filter(employee=employee)
        return queryset

    def destroy(self, request, *args, **kwargs):
        payroll = self.get_object()
        delete_payroll(payroll.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["post"])
    def generate(self, request):
        serializer = GeneratePayrollSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        employee = data["employee"]

        payroll = generate_payroll(
            employee, data["month"], data["year"], created_by=request.user.username
        )
        logger.info(
            "Payroll generated via API",
            extra={
                **safe_log_employee(employee, "payroll_generated_api"),
                "requested_by": hash_user_id(request.user.pk),
            },
        )
        return Response(PayrollSerializer(payroll).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def generate_bulk(self, request):
        serializer = BulkGeneratePayrollSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = generate_bulk_payroll(
            data["month"],
            data["year"],
            employee_ids=data.get("employee_ids"),
            created_by=request.user.username,
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        payroll = approve_payroll(self.get_object().pk, request.user.username)
        return Response(PayrollSerializer(payroll).data)

    @action(detail=True, methods=["post"])
    def mark_paid(self, request, pk=None):
        payroll = mark_payroll_paid(self.get_object().pk, paid_by=request.user.username)
        return Response(PayrollSerializer(payroll).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        serializer = CancelPayrollSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payroll = cancel_payroll(
            self.get_object().pk,
            cancelled_by=request.user.username,
            reason=serializer.validated_data["reason"],
        )
        return Response(PayrollSerializer(payroll).data)
