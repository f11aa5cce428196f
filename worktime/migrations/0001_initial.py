from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Shift",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=20, unique=True)),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("break_duration_minutes", models.PositiveSmallIntegerField(default=60, validators=[django.core.validators.MaxValueValidator(480)])),
                ("grace_period_minutes", models.PositiveSmallIntegerField(default=10, help_text="Minutes after start before a check-in counts as late", validators=[django.core.validators.MaxValueValidator(60)])),
                ("late_mark_after_minutes", models.PositiveSmallIntegerField(default=15, help_text="Informational; lateness uses the grace period", validators=[django.core.validators.MaxValueValidator(120)])),
                ("half_day_hours", models.DecimalField(decimal_places=2, default=Decimal("4.00"), max_digits=4, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(12)])),
                ("full_day_hours", models.DecimalField(decimal_places=2, default=Decimal("8.00"), max_digits=4, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(24)])),
                ("is_night_shift", models.BooleanField(default=False, help_text="Shift ends on the following calendar day")),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive")], default="active", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["start_time", "name"],
            },
        ),
    ]
