from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

COMPONENT_TYPES = [("allowance", "Allowance"), ("deduction", "Deduction")]
CALCULATION_METHODS = [
    ("fixed_amount", "Fixed Amount"),
    ("percentage_of_basic", "Percentage Of Basic"),
    ("percentage_of_gross", "Percentage Of Gross"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="AllowanceDeduction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(blank=True, max_length=20, unique=True)),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("component_type", models.CharField(choices=COMPONENT_TYPES, max_length=10)),
                ("calculation_method", models.CharField(choices=CALCULATION_METHODS, default="fixed_amount", max_length=25)),
                ("value", models.DecimalField(decimal_places=2, help_text="Currency amount, or a percentage where 10 means 10%", max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("is_taxable", models.BooleanField(default=True)),
                ("is_mandatory", models.BooleanField(default=False)),
                ("applies_to_all", models.BooleanField(default=True)),
                ("minimum_salary_threshold", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("maximum_cap", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive")], default="active", max_length=10)),
                ("display_order", models.PositiveIntegerField(default=0)),
                ("effective_from", models.DateField(blank=True, null=True)),
                ("effective_until", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Allowance / Deduction",
                "verbose_name_plural": "Allowances / Deductions",
                "ordering": ["display_order", "name"],
                "indexes": [models.Index(fields=["status", "component_type"], name="payroll_all_status_7e21bd_idx")],
            },
        ),
        migrations.CreateModel(
            name="Payroll",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payroll_number", models.CharField(max_length=40, unique=True)),
                ("month", models.PositiveSmallIntegerField()),
                ("year", models.PositiveSmallIntegerField()),
                ("basic_salary", models.DecimalField(decimal_places=2, max_digits=12)),
                ("total_allowances", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("total_deductions", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("gross_salary", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("net_salary", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("total_working_days", models.PositiveSmallIntegerField(default=0)),
                ("present_days", models.PositiveSmallIntegerField(default=0)),
                ("absent_days", models.PositiveSmallIntegerField(default=0)),
                ("late_days", models.PositiveSmallIntegerField(default=0)),
                ("half_days", models.PositiveSmallIntegerField(default=0)),
                ("leave_days", models.DecimalField(decimal_places=1, default=Decimal("0"), max_digits=5)),
                ("paid_leaves", models.DecimalField(decimal_places=1, default=Decimal("0"), max_digits=5)),
                ("unpaid_leaves", models.DecimalField(decimal_places=1, default=Decimal("0"), max_digits=5)),
                ("leave_deduction_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("overtime_hours", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=7)),
                ("overtime_amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("pending", "Pending"), ("approved", "Approved"), ("paid", "Paid"), ("cancelled", "Cancelled")], default="pending", max_length=10)),
                ("payment_date", models.DateField(blank=True, null=True)),
                ("remarks", models.TextField(blank=True, default="")),
                ("created_by", models.CharField(blank=True, default="", max_length=150)),
                ("approved_by", models.CharField(blank=True, default="", max_length=150)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payrolls", to="users.employee")),
            ],
            options={
                "ordering": ["-year", "-month", "employee__employee_code"],
                "indexes": [
                    models.Index(fields=["year", "month"], name="payroll_pay_year_0c5f18_idx"),
                    models.Index(fields=["status"], name="payroll_pay_status_9b6e3a_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("employee", "month", "year"), name="uniq_payroll_employee_period"),
                    models.CheckConstraint(condition=models.Q(("month__gte", 1), ("month__lte", 12)), name="payroll_month_range"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PayrollDetail",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("component_name", models.CharField(max_length=100)),
                ("component_type", models.CharField(choices=COMPONENT_TYPES, max_length=10)),
                ("calculation_method", models.CharField(choices=CALCULATION_METHODS, max_length=25)),
                ("value", models.DecimalField(decimal_places=2, max_digits=12)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("is_taxable", models.BooleanField(default=True)),
                ("position", models.PositiveSmallIntegerField(default=0)),
                ("payroll", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="details", to="payroll.payroll")),
                ("component", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="payroll_details", to="payroll.allowancededuction")),
            ],
            options={
                "ordering": ["payroll", "position"],
            },
        ),
    ]
