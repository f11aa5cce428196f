import logging
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Count, Q

from core.logging_utils import public_emp_id

from .metrics import ShiftRules, base_status, compute_attendance_metrics

logger = logging.getLogger(__name__)


class ShiftQuerySet(models.QuerySet):
    def with_assigned_employees(self):
        """Number of active employees on each shift, computed per query"""
        return self.annotate(
            assigned_employees=Count(
                "employees", filter=Q(employees__status="active"), distinct=True
            )
        )


class Shift(models.Model):
    """Working-time rules applied to attendance of the employees on the shift"""

    STATUS_CHOICES = [
        ("active", "Active"),
        ("inactive", "Inactive"),
    ]

    objects = ShiftQuerySet.as_manager()

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")

    start_time = models.TimeField()
    end_time = models.TimeField()
    break_duration_minutes = models.PositiveSmallIntegerField(
        default=60, validators=[MaxValueValidator(480)]
    )
    grace_period_minutes = models.PositiveSmallIntegerField(
        default=10,
        validators=[MaxValueValidator(60)],
        help_text="Minutes after start before a check-in counts as late",
    )
    late_mark_after_minutes = models.PositiveSmallIntegerField(
        default=15,
        validators=[MaxValueValidator(120)],
        help_text="Informational; lateness uses the grace period",
    )
    half_day_hours = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        default=Decimal("4.00"),
        validators=[MinValueValidator(0), MaxValueValidator(12)],
    )
    full_day_hours = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        default=Decimal("8.00"),
        validators=[MinValueValidator(0), MaxValueValidator(24)],
    )
    is_night_shift = models.BooleanField(
        default=False, help_text="Shift ends on the following calendar day"
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="active")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_time", "name"]

    def clean(self):
        super().clean()
        errors = {}

        if (
            self.start_time
            and self.end_time
            and not self.is_night_shift
            and self.end_time <= self.start_time
        ):
            errors["end_time"] = (
                "End time must be after start time unless it is a night shift"
            )

        if (
            self.half_day_hours is not None
            and self.full_day_hours is not None
            and self.half_day_hours > self.full_day_hours
        ):
            errors["half_day_hours"] = "Half-day hours cannot exceed full-day hours"

        if errors:
            raise ValidationError(errors)

    def to_rules(self):
        return ShiftRules.from_shift(self)

    def __str__(self):
        return f"{self.name} ({self.start_time:%H:%M}-{self.end_time:%H:%M})"


class Attendance(models.Model):
    """
    Daily attendance of one employee.

    Derived fields (is_late, late_by_minutes, is_half_day, total_hours,
    overtime_hours and the Late/HalfDay statuses) are recomputed on every
    save from the punches and the employee's shift.
    """

    class Status(models.TextChoices):
        PRESENT = "present", "Present"
        ABSENT = "absent", "Absent"
        LATE = "late", "Late"
        ON_LEAVE = "on_leave", "On Leave"
        HALF_DAY = "half_day", "Half Day"
        HOLIDAY = "holiday", "Holiday"

    # Statuses that require a check-in punch
    PUNCHED_STATUSES = {Status.PRESENT, Status.LATE, Status.HALF_DAY}

    employee = models.ForeignKey(
        "users.Employee", on_delete=models.CASCADE, related_name="attendances"
    )
    date = models.DateField()
    check_in_time = models.TimeField(null=True, blank=True)
    check_out_time = models.TimeField(null=True, blank=True)
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.PRESENT
    )

    is_late = models.BooleanField(default=False)
    late_by_minutes = models.PositiveIntegerField(null=True, blank=True)
    is_half_day = models.BooleanField(default=False)
    total_hours = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True
    )
    overtime_hours = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True
    )
    remarks = models.CharField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date", "employee__last_name"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "date"], name="uniq_attendance_employee_date"
            ),
            models.CheckConstraint(
                condition=Q(total_hours__isnull=True) | Q(total_hours__gte=0),
                name="attendance_total_hours_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["employee", "date"], name="worktime_at_employe_3c1f0e_idx"),
            models.Index(fields=["date", "status"], name="worktime_at_date_8d2b41_idx"),
        ]

    def clean(self):
        super().clean()
        errors = {}

        if self.check_out_time and not self.check_in_time:
            errors["check_out_time"] = "Check-out requires a check-in time"

        if base_status(self.status) in self.PUNCHED_STATUSES and not self.check_in_time:
            errors["check_in_time"] = "Check-in time is required for present employees"

        if errors:
            raise ValidationError(errors)

    def apply_metrics(self):
        """
        Recompute derived fields from the employee's shift.

        Employees without a shift keep the values as recorded.
        """
        shift = self.employee.shift if self.employee_id else None
        if shift is None:
            if self.check_out_time is None:
                self.total_hours = None
            return False

        metrics = compute_attendance_metrics(
            self.check_in_time,
            self.check_out_time,
            shift.to_rules(),
            status=self.status,
        )
        self.status = metrics.status
        self.is_late = metrics.is_late
        self.late_by_minutes = metrics.late_by_minutes
        self.is_half_day = metrics.is_half_day
        self.total_hours = metrics.total_hours
        self.overtime_hours = metrics.overtime_hours

        logger.debug(
            "Attendance metrics computed",
            extra={
                "employee_ref": public_emp_id(self.employee_id),
                "date": str(self.date),
                "status": self.status,
                "action": "attendance_metrics_computed",
            },
        )
        return True

    def save(self, *args, **kwargs):
        self.apply_metrics()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.employee} {self.date} {self.get_status_display()}"
