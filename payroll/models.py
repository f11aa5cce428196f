import logging
import re
from dataclasses import replace
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from users.models import Employee

from .services.contracts import ComponentDefinition
from .services.enums import (
    CalculationMethod,
    ComponentStatus,
    ComponentType,
    EmployeeLevel,
    IndustryType,
    PayrollStatus,
)

logger = logging.getLogger(__name__)

MONEY = {"max_digits": 12, "decimal_places": 2}

COMPONENT_CODE_PREFIX = "COMP"


class AllowanceDeductionQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=ComponentStatus.ACTIVE.value)

    def in_evaluation_order(self):
        return self.order_by("display_order", "name")


class AllowanceDeduction(models.Model):
    """
    Configurable salary component.

    Allowances add to gross salary, deductions subtract from it. Inactive
    components are left out of every new payroll run.
    """

    objects = AllowanceDeductionQuerySet.as_manager()

    code = models.CharField(max_length=20, unique=True, blank=True)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    component_type = models.CharField(
        max_length=10, choices=ComponentType.choices()
    )
    calculation_method = models.CharField(
        max_length=25,
        choices=CalculationMethod.choices(),
        default=CalculationMethod.FIXED_AMOUNT.value,
    )
    value = models.DecimalField(
        **MONEY,
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Currency amount, or a percentage where 10 means 10%",
    )
    is_taxable = models.BooleanField(default=True)
    is_mandatory = models.BooleanField(default=False)
    applies_to_all = models.BooleanField(default=True)
    minimum_salary_threshold = models.DecimalField(**MONEY, null=True, blank=True)
    maximum_cap = models.DecimalField(**MONEY, null=True, blank=True)
    status = models.CharField(
        max_length=10,
        choices=ComponentStatus.choices(),
        default=ComponentStatus.ACTIVE.value,
    )
    display_order = models.PositiveIntegerField(default=0)
    effective_from = models.DateField(null=True, blank=True)
    effective_until = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["display_order", "name"]
        verbose_name = "Allowance / Deduction"
        verbose_name_plural = "Allowances / Deductions"
        indexes = [models.Index(fields=["status", "component_type"], name="payroll_all_status_7e21bd_idx")]

    def clean(self):
        super().clean()
        errors = {}

        if (
            self.effective_from
            and self.effective_until
            and self.effective_until < self.effective_from
        ):
            errors["effective_until"] = "Effective until cannot be before effective from"

        if (
            self.calculation_method
            and CalculationMethod(self.calculation_method).is_percentage
            and self.value is not None
            and self.value > 100
        ):
            errors["value"] = "Percentage cannot exceed 100"

        for field_name in ("minimum_salary_threshold", "maximum_cap"):
            amount = getattr(self, field_name)
            if amount is not None and amount < 0:
                errors[field_name] = "Must not be negative"

        if errors:
            raise ValidationError(errors)

    @classmethod
    def next_code(cls):
        """Next free COMPnnn code"""
        highest = 0
        for code in cls.objects.filter(code__startswith=COMPONENT_CODE_PREFIX).values_list(
            "code", flat=True
        ):
            match = re.fullmatch(rf"{COMPONENT_CODE_PREFIX}(\d+)", code)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"{COMPONENT_CODE_PREFIX}{highest + 1:03d}"

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = self.next_code()
        super().save(*args, **kwargs)

    @property
    def is_active(self):
        return self.status == ComponentStatus.ACTIVE.value

    def to_definition(self) -> ComponentDefinition:
        return ComponentDefinition(
            component_id=self.pk,
            name=self.name,
            component_type=ComponentType(self.component_type),
            calculation_method=CalculationMethod(self.calculation_method),
            value=Decimal(self.value),
            is_taxable=self.is_taxable,
            minimum_salary_threshold=self.minimum_salary_threshold,
            maximum_cap=self.maximum_cap,
            display_order=self.display_order,
        )

    def __str__(self):
        return f"{self.code} - {self.name} ({self.get_component_type_display()})"


class Payroll(models.Model):
    """Monthly payroll record of one employee"""

    employee = models.ForeignKey(
        Employee, on_delete=models.CASCADE, related_name="payrolls"
    )
    payroll_number = models.CharField(max_length=40, unique=True)
    month = models.PositiveSmallIntegerField()
    year = models.PositiveSmallIntegerField()

    basic_salary = models.DecimalField(**MONEY)
    total_allowances = models.DecimalField(**MONEY, default=Decimal("0"))
    total_deductions = models.DecimalField(**MONEY, default=Decimal("0"))
    gross_salary = models.DecimalField(**MONEY, default=Decimal("0"))
    net_salary = models.DecimalField(**MONEY, default=Decimal("0"))

    # Attendance and leave counters for the period
    total_working_days = models.PositiveSmallIntegerField(default=0)
    present_days = models.PositiveSmallIntegerField(default=0)
    absent_days = models.PositiveSmallIntegerField(default=0)
    late_days = models.PositiveSmallIntegerField(default=0)
    half_days = models.PositiveSmallIntegerField(default=0)
    leave_days = models.DecimalField(max_digits=5, decimal_places=1, default=Decimal("0"))
    paid_leaves = models.DecimalField(max_digits=5, decimal_places=1, default=Decimal("0"))
    unpaid_leaves = models.DecimalField(max_digits=5, decimal_places=1, default=Decimal("0"))

    leave_deduction_amount = models.DecimalField(**MONEY, default=Decimal("0"))
    overtime_hours = models.DecimalField(max_digits=7, decimal_places=2, default=Decimal("0"))
    overtime_amount = models.DecimalField(**MONEY, default=Decimal("0"))

    status = models.CharField(
        max_length=10,
        choices=PayrollStatus.choices(),
        default=PayrollStatus.PENDING.value,
    )
    payment_date = models.DateField(null=True, blank=True)
    remarks = models.TextField(blank=True, default="")

    created_by = models.CharField(max_length=150, blank=True, default="")
    approved_by = models.CharField(max_length=150, blank=True, default="")
    approved_at = models.DateTimeField(null=True, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-year", "-month", "employee__employee_code"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "month", "year"], name="uniq_payroll_employee_period"
            ),
            models.CheckConstraint(
                condition=Q(month__gte=1) & Q(month__lte=12),
                name="payroll_month_range",
            ),
        ]
        indexes = [
            models.Index(fields=["year", "month"], name="payroll_pay_year_0c5f18_idx"),
            models.Index(fields=["status"], name="payroll_pay_status_9b6e3a_idx"),
        ]

    @property
    def payroll_status(self) -> PayrollStatus:
        return PayrollStatus(self.status)

    @property
    def period_display(self):
        return f"{self.year}-{self.month:02d}"

    def __str__(self):
        return f"{self.payroll_number} ({self.get_status_display()})"


class PayrollDetail(models.Model):
    """
    Point-in-time snapshot of one component on a payroll record.

    Later edits to the component definition never change a detail row.
    """

    payroll = models.ForeignKey(Payroll, on_delete=models.CASCADE, related_name="details")
    component = models.ForeignKey(
        AllowanceDeduction,
        on_delete=models.SET_NULL,
        related_name="payroll_details",
        null=True,
        blank=True,
    )
    component_name = models.CharField(max_length=100)
    component_type = models.CharField(max_length=10, choices=ComponentType.choices())
    calculation_method = models.CharField(
        max_length=25, choices=CalculationMethod.choices()
    )
    value = models.DecimalField(**MONEY)
    amount = models.DecimalField(**MONEY)
    is_taxable = models.BooleanField(default=True)
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        ordering = ["payroll", "position"]

    def __str__(self):
        return f"{self.component_name}: {self.amount}"


class ComponentTemplate(models.Model):
    """
    Named package of components for an industry and employee level.

    Items may override the value of their component; everything else
    (type, method, cap, taxability) comes from the component itself.
    """

    name = models.CharField(max_length=100, unique=True)
    description = models.CharField(max_length=500, blank=True, default="")
    industry_type = models.CharField(max_length=30, choices=IndustryType.choices())
    employee_level = models.CharField(max_length=20, choices=EmployeeLevel.choices())
    is_active = models.BooleanField(default=True)
    usage_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "name"]

    def definitions(self, active_only=True):
        """Component definitions with item overrides, in item order"""
        items = self.items.select_related("component").order_by("display_order", "pk")
        if active_only:
            items = items.filter(component__status=ComponentStatus.ACTIVE.value)
        result = []
        for item in items:
            base = item.component.to_definition()
            result.append(
                replace(
                    base,
                    value=base.value if item.custom_value is None else Decimal(item.custom_value),
                    display_order=item.display_order,
                )
            )
        return result

    def __str__(self):
        return self.name


class ComponentTemplateItem(models.Model):
    template = models.ForeignKey(
        ComponentTemplate, on_delete=models.CASCADE, related_name="items"
    )
    component = models.ForeignKey(
        AllowanceDeduction, on_delete=models.CASCADE, related_name="template_items"
    )
    custom_value = models.DecimalField(
        **MONEY,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text="Overrides the component value when set",
    )
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["template", "display_order"]
        constraints = [
            models.UniqueConstraint(
                fields=["template", "component"], name="uniq_template_component"
            ),
        ]

    def clean(self):
        super().clean()
        if (
            self.custom_value is not None
            and self.component_id
            and CalculationMethod(self.component.calculation_method).is_percentage
            and self.custom_value > 100
        ):
            raise ValidationError({"custom_value": "Percentage cannot exceed 100"})

    @property
    def effective_value(self):
        return self.component.value if self.custom_value is None else self.custom_value

    def __str__(self):
        return f"{self.template.name}: {self.component.name}"
