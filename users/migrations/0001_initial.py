import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("worktime", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Department",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("head_of_department", models.CharField(blank=True, default="", max_length=100)),
                ("contact_number", models.CharField(blank=True, default="", max_length=20)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive")], default="active", max_length=10)),
                ("established_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["status"], name="users_depar_status_6f7a2c_idx")],
            },
        ),
        migrations.CreateModel(
            name="Designation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True)),
                ("title", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("level", models.CharField(blank=True, default="", help_text="e.g. Entry, Mid, Senior", max_length=30)),
                ("minimum_salary", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("maximum_salary", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive")], default="active", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("department", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="designations", to="users.department")),
            ],
            options={
                "ordering": ["department__name", "title"],
                "constraints": [
                    models.UniqueConstraint(fields=("department", "title"), name="uniq_designation_title_per_department"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("employee_code", models.CharField(max_length=20, unique=True)),
                ("first_name", models.CharField(max_length=50)),
                ("last_name", models.CharField(max_length=50)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("phone", models.CharField(blank=True, default="", help_text="International format", max_length=20)),
                ("basic_salary", models.DecimalField(decimal_places=2, help_text="Monthly basic salary", max_digits=12, validators=[django.core.validators.MinValueValidator(0)])),
                ("joining_date", models.DateField()),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive"), ("resigned", "Resigned")], default="active", max_length=10)),
                ("role", models.CharField(choices=[("employee", "Employee"), ("hr", "HR"), ("accountant", "Accountant"), ("admin", "Administrator")], default="employee", max_length=20)),
                ("address", models.CharField(blank=True, default="", max_length=200)),
                ("city", models.CharField(blank=True, default="", max_length=50)),
                ("postal_code", models.CharField(blank=True, default="", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employees", to=settings.AUTH_USER_MODEL)),
                ("department", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="employees", to="users.department")),
                ("designation", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="employees", to="users.designation")),
                ("shift", models.ForeignKey(blank=True, help_text="Shift used for lateness, half-day and overtime rules", null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employees", to="worktime.shift")),
            ],
            options={
                "ordering": ["last_name", "first_name"],
                "indexes": [
                    models.Index(fields=["status"], name="users_emplo_status_1b9e4d_idx"),
                    models.Index(fields=["role"], name="users_emplo_role_c04a7e_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("basic_salary__gte", 0)), name="employee_basic_salary_non_negative"),
                ],
            },
        ),
    ]
