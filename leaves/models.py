from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from payroll.conf import payroll_setting

# Half-day leave weighs half a day in balances and payroll
HALF_DAY_LEAVE_WEIGHT = Decimal("0.5")


class LeaveType(models.TextChoices):
    CASUAL = "casual", "Casual"
    SICK = "sick", "Sick"
    ANNUAL = "annual", "Annual"
    MATERNITY = "maternity", "Maternity"
    UNPAID = "unpaid", "Unpaid"


# Leave types that are paid out in payroll
PAID_LEAVE_TYPES = frozenset({LeaveType.CASUAL, LeaveType.SICK, LeaveType.ANNUAL})

# Leave types tracked in LeaveBalance
BALANCE_LEAVE_TYPES = (
    LeaveType.CASUAL,
    LeaveType.SICK,
    LeaveType.ANNUAL,
    LeaveType.MATERNITY,
)


def leave_day_count(start_date, end_date, is_half_day):
    if is_half_day:
        return HALF_DAY_LEAVE_WEIGHT
    return Decimal((end_date - start_date).days + 1)


class Leave(models.Model):
    """Leave application moving Pending -> Approved/Rejected/Cancelled"""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"
        CANCELLED = "cancelled", "Cancelled"

    employee = models.ForeignKey(
        "users.Employee", on_delete=models.CASCADE, related_name="leaves"
    )
    leave_type = models.CharField(max_length=10, choices=LeaveType.choices)
    start_date = models.DateField()
    end_date = models.DateField()
    is_half_day = models.BooleanField(default=False)
    number_of_days = models.DecimalField(max_digits=5, decimal_places=1, editable=False)
    reason = models.CharField(max_length=500, blank=True, default="")

    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.PENDING
    )
    admin_remarks = models.CharField(max_length=500, blank=True, default="")
    approved_by = models.CharField(max_length=150, blank=True, default="")
    action_date = models.DateTimeField(null=True, blank=True)
    applied_on = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-applied_on"]
        indexes = [
            models.Index(fields=["employee", "status", "start_date"], name="leaves_leav_employe_5a0d93_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(end_date__gte=models.F("start_date")),
                name="leave_end_not_before_start",
            )
        ]

    def clean(self):
        super().clean()
        errors = {}
        if self.start_date and self.end_date:
            if self.end_date < self.start_date:
                errors["end_date"] = "End date must be after or equal to start date."
            elif self.is_half_day and self.end_date != self.start_date:
                errors["is_half_day"] = "A half-day leave must start and end on the same day."
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        self.number_of_days = leave_day_count(
            self.start_date, self.end_date, self.is_half_day
        )
        super().save(*args, **kwargs)

    @property
    def is_paid(self):
        return self.leave_type in PAID_LEAVE_TYPES

    def __str__(self):
        return f"{self.employee} {self.get_leave_type_display()} {self.start_date}..{self.end_date}"


class LeaveBalanceQuerySet(models.QuerySet):
    def get_or_create_for(self, employee, year):
        allowances = payroll_setting("DEFAULT_LEAVE_ALLOWANCES")
        return self.get_or_create(
            employee=employee,
            year=year,
            defaults={
                f"{leave_type}_allowance": Decimal(allowances.get(leave_type, 0))
                for leave_type in BALANCE_LEAVE_TYPES
            },
        )


class LeaveBalance(models.Model):
    """Yearly leave entitlement and usage per employee"""

    objects = LeaveBalanceQuerySet.as_manager()

    employee = models.ForeignKey(
        "users.Employee", on_delete=models.CASCADE, related_name="leave_balances"
    )
    year = models.PositiveSmallIntegerField()

    casual_allowance = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    casual_used = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    sick_allowance = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    sick_used = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    annual_allowance = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    annual_used = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    maternity_allowance = models.DecimalField(max_digits=5, decimal_places=1, default=0)
    maternity_used = models.DecimalField(max_digits=5, decimal_places=1, default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-year"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "year"], name="uniq_leave_balance_employee_year"
            )
        ]

    @staticmethod
    def tracks(leave_type):
        return leave_type in BALANCE_LEAVE_TYPES

    def remaining(self, leave_type):
        allowance = getattr(self, f"{leave_type}_allowance")
        used = getattr(self, f"{leave_type}_used")
        return Decimal(allowance) - Decimal(used)

    def consume(self, leave_type, days):
        field = f"{leave_type}_used"
        setattr(self, field, Decimal(getattr(self, field)) + Decimal(days))
        return field

    def as_dict(self):
        return {
            leave_type.value: {
                "allowance": getattr(self, f"{leave_type}_allowance"),
                "used": getattr(self, f"{leave_type}_used"),
                "remaining": self.remaining(leave_type),
            }
            for leave_type in BALANCE_LEAVE_TYPES
        }

    def __str__(self):
        return f"{self.employee} {self.year}"
