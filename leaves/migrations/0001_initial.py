import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Leave",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("leave_type", models.CharField(choices=[("casual", "Casual"), ("sick", "Sick"), ("annual", "Annual"), ("maternity", "Maternity"), ("unpaid", "Unpaid")], max_length=10)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("is_half_day", models.BooleanField(default=False)),
                ("number_of_days", models.DecimalField(decimal_places=1, editable=False, max_digits=5)),
                ("reason", models.CharField(blank=True, default="", max_length=500)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected"), ("cancelled", "Cancelled")], default="pending", max_length=10)),
                ("admin_remarks", models.CharField(blank=True, default="", max_length=500)),
                ("approved_by", models.CharField(blank=True, default="", max_length=150)),
                ("action_date", models.DateTimeField(blank=True, null=True)),
                ("applied_on", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="leaves", to="users.employee")),
            ],
            options={
                "ordering": ["-applied_on"],
                "indexes": [
                    models.Index(fields=["employee", "status", "start_date"], name="leaves_leav_employe_5a0d93_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("end_date__gte", models.F("start_date"))), name="leave_end_not_before_start"),
                ],
            },
        ),
        migrations.CreateModel(
            name="LeaveBalance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("year", models.PositiveSmallIntegerField()),
                ("casual_allowance", models.DecimalField(decimal_places=1, default=0, max_digits=5)),
                ("casual_used", models.DecimalField(decimal_places=1, default=0, max_digits=5)),
                ("sick_allowance", models.DecimalField(decimal_places=1, default=0, max_digits=5)),
                ("sick_used", models.DecimalField(decimal_places=1, default=0, max_digits=5)),
                ("annual_allowance", models.DecimalField(decimal_places=1, default=0, max_digits=5)),
                ("annual_used", models.DecimalField(decimal_places=1, default=0, max_digits=5)),
                ("maternity_allowance", models.DecimalField(decimal_places=1, default=0, max_digits=5)),
                ("maternity_used", models.DecimalField(decimal_places=1, default=0, max_digits=5)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="leave_balances", to="users.employee")),
            ],
            options={
                "ordering": ["-year"],
                "constraints": [
                    models.UniqueConstraint(fields=("employee", "year"), name="uniq_leave_balance_employee_year"),
                ],
            },
        ),
    ]
