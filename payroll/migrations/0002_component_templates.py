from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

INDUSTRY_TYPES = [
    ("information_technology", "Information Technology"),
    ("manufacturing", "Manufacturing"),
    ("healthcare", "Healthcare"),
    ("finance", "Finance"),
    ("retail", "Retail"),
    ("education", "Education"),
    ("government", "Government"),
    ("startup", "Startup"),
    ("other", "Other"),
]
EMPLOYEE_LEVELS = [
    ("entry_level", "Entry Level"),
    ("junior", "Junior"),
    ("mid_level", "Mid Level"),
    ("senior", "Senior"),
    ("lead", "Lead"),
    ("manager", "Manager"),
    ("senior_manager", "Senior Manager"),
    ("director", "Director"),
    ("executive", "Executive"),
]


class Migration(migrations.Migration):

    dependencies = [
        ("payroll", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ComponentTemplate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                ("description", models.CharField(blank=True, default="", max_length=500)),
                ("industry_type", models.CharField(choices=INDUSTRY_TYPES, max_length=30)),
                ("employee_level", models.CharField(choices=EMPLOYEE_LEVELS, max_length=20)),
                ("is_active", models.BooleanField(default=True)),
                ("usage_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at", "name"],
            },
        ),
        migrations.CreateModel(
            name="ComponentTemplateItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("custom_value", models.DecimalField(blank=True, decimal_places=2, help_text="Overrides the component value when set", max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(Decimal("0"))])),
                ("display_order", models.PositiveIntegerField(default=0)),
                ("template", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="payroll.componenttemplate")),
                ("component", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="template_items", to="payroll.allowancededuction")),
            ],
            options={
                "ordering": ["template", "display_order"],
                "constraints": [
                    models.UniqueConstraint(fields=("template", "component"), name="uniq_template_component"),
                ],
            },
        ),
    ]
