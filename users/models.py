# users/models.py
import re

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Count, Q


class MasterDataStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"


class DepartmentQuerySet(models.QuerySet):
    def with_employee_count(self):
        """Count employees at query time instead of keeping a stored counter"""
        return self.annotate(
            employee_count=Count(
                "employees",
                filter=Q(employees__status=Employee.Status.ACTIVE),
                distinct=True,
            )
        )


class Department(models.Model):
    """Organisational unit employees and designations belong to"""

    objects = DepartmentQuerySet.as_manager()

    code = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default="")
    head_of_department = models.CharField(max_length=100, blank=True, default="")
    contact_number = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    status = models.CharField(
        max_length=10,
        choices=MasterDataStatus.choices,
        default=MasterDataStatus.ACTIVE,
    )
    established_date = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [models.Index(fields=["status"], name="users_depar_status_6f7a2c_idx")]

    def __str__(self):
        return f"{self.code} - {self.name}"


class DesignationQuerySet(models.QuerySet):
    def with_employee_count(self):
        return self.annotate(
            employee_count=Count(
                "employees",
                filter=Q(employees__status=Employee.Status.ACTIVE),
                distinct=True,
            )
        )


class Designation(models.Model):
    """Job title within a department with an optional salary band"""

    objects = DesignationQuerySet.as_manager()

    code = models.CharField(max_length=20, unique=True)
    title = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    department = models.ForeignKey(
        Department, on_delete=models.PROTECT, related_name="designations"
    )
    level = models.CharField(
        max_length=30, blank=True, default="", help_text="e.g. Entry, Mid, Senior"
    )
    minimum_salary = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    maximum_salary = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    status = models.CharField(
        max_length=10,
        choices=MasterDataStatus.choices,
        default=MasterDataStatus.ACTIVE,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["department__name", "title"]
        constraints = [
            models.UniqueConstraint(
                fields=["department", "title"], name="uniq_designation_title_per_department"
            )
        ]

    def clean(self):
        super().clean()
        if (
            self.minimum_salary is not None
            and self.maximum_salary is not None
            and self.minimum_salary > self.maximum_salary
        ):
            raise ValidationError(
                {"maximum_salary": "Maximum salary must not be below minimum salary"}
            )

    def __str__(self):
        return self.title


class EmployeeQuerySet(models.QuerySet):
    def active(self):
        """Employees eligible for attendance and payroll runs"""
        return self.filter(status=Employee.Status.ACTIVE)


class EmployeeManager(models.Manager):
    """Custom manager for Employee model"""

    def get_queryset(self):
        return EmployeeQuerySet(self.model, using=self._db)

    def active(self):
        return self.get_queryset().active()


class Employee(models.Model):
    """Employee master record used by attendance, leave and payroll"""

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"
        RESIGNED = "resigned", "Resigned"

    ROLE_CHOICES = [
        ("employee", "Employee"),
        ("hr", "HR"),
        ("accountant", "Accountant"),
        ("admin", "Administrator"),
    ]

    objects = EmployeeManager()

    # Link to Django user (optional, employees without portal access have none)
    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        related_name="employees",
        null=True,
        blank=True,
    )

    employee_code = models.CharField(max_length=20, unique=True)
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    phone = models.CharField(
        max_length=20, blank=True, default="", help_text="International format"
    )

    department = models.ForeignKey(
        Department,
        on_delete=models.PROTECT,
        related_name="employees",
        null=True,
        blank=True,
    )
    designation = models.ForeignKey(
        Designation,
        on_delete=models.PROTECT,
        related_name="employees",
        null=True,
        blank=True,
    )
    shift = models.ForeignKey(
        "worktime.Shift",
        on_delete=models.SET_NULL,
        related_name="employees",
        null=True,
        blank=True,
        help_text="Shift used for lateness, half-day and overtime rules",
    )

    basic_salary = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        help_text="Monthly basic salary",
    )
    joining_date = models.DateField()
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.ACTIVE
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="employee")

    address = models.CharField(max_length=200, blank=True, default="")
    city = models.CharField(max_length=50, blank=True, default="")
    postal_code = models.CharField(max_length=10, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["last_name", "first_name"]
        indexes = [
            models.Index(fields=["status"], name="users_emplo_status_1b9e4d_idx"),
            models.Index(fields=["role"], name="users_emplo_role_c04a7e_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(basic_salary__gte=0), name="employee_basic_salary_non_negative"
            )
        ]

    def clean(self):
        """Custom validation"""
        super().clean()
        errors = {}

        if self.phone and not self._is_valid_phone(self.phone):
            errors["phone"] = "Phone number must be in international format (+...)"

        if (
            self.designation_id
            and self.department_id
            and self.designation.department_id != self.department_id
        ):
            errors["designation"] = "Designation belongs to a different department"

        if errors:
            raise ValidationError(errors)

    def _is_valid_phone(self, phone):
        phone_pattern = r"^\+\d{8,15}$"
        cleaned_phone = phone.replace(" ", "").replace("-", "")
        return re.match(phone_pattern, cleaned_phone) is not None

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self):
        return self.status == self.Status.ACTIVE

    def __str__(self):
        return f"{self.employee_code} - {self.get_full_name()}"
