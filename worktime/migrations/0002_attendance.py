import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("worktime", "0001_initial"),
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Attendance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("check_in_time", models.TimeField(blank=True, null=True)),
                ("check_out_time", models.TimeField(blank=True, null=True)),
                ("status", models.CharField(choices=[("present", "Present"), ("absent", "Absent"), ("late", "Late"), ("on_leave", "On Leave"), ("half_day", "Half Day"), ("holiday", "Holiday")], default="present", max_length=10)),
                ("is_late", models.BooleanField(default=False)),
                ("late_by_minutes", models.PositiveIntegerField(blank=True, null=True)),
                ("is_half_day", models.BooleanField(default=False)),
                ("total_hours", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("overtime_hours", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("remarks", models.CharField(blank=True, default="", max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="attendances", to="users.employee")),
            ],
            options={
                "ordering": ["-date", "employee__last_name"],
                "indexes": [
                    models.Index(fields=["employee", "date"], name="worktime_at_employe_3c1f0e_idx"),
                    models.Index(fields=["date", "status"], name="worktime_at_date_8d2b41_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("employee", "date"), name="uniq_attendance_employee_date"),
                    models.CheckConstraint(condition=models.Q(("total_hours__isnull", True), ("total_hours__gte", 0), _connector="OR"), name="attendance_total_hours_non_negative"),
                ],
            },
        ),
    ]
