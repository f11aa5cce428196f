"""
Component templates: creation, cloning and application to an employee.
"""

import logging

from django.db import transaction
from django.db.models import F
from django.shortcuts import get_object_or_404
from django.utils import timezone

from core.exceptions import ValidationAPIError
from core.logging_utils import public_emp_id
from payroll.models import ComponentTemplate, ComponentTemplateItem

from .cost_analysis import calculate_preview

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"
NAME_MAX_LENGTH = 100


def _replace_items(template, items):
    template.items.all().delete()
    ComponentTemplateItem.objects.bulk_create(
        [
            ComponentTemplateItem(
                template=template,
                component=item["component"],
                custom_value=item.get("custom_value"),
                display_order=item.get("display_order", position),
            )
            for position, item in enumerate(items)
        ]
    )


def create_template(name, industry_type, employee_level, items, description="", is_active=True):
    """
    Create a template with its items in one transaction.

    Args:
        items: dicts with ``component`` and optional ``custom_value`` and
            ``display_order``; list position is the default order

    Raises:
        ValidationAPIError: no items were given
    """
    if not items:
        raise ValidationAPIError(
            "Select at least one component for this template.", code="TEMPLATE_EMPTY"
        )

    with transaction.atomic():
        template = ComponentTemplate.objects.create(
            name=name,
            description=description,
            industry_type=industry_type,
            employee_level=employee_level,
            is_active=is_active,
        )
        _replace_items(template, items)

    logger.info(
        "Component template created",
        extra={
            "template_id": template.pk,
            "item_count": len(items),
            "action": "component_template_created",
        },
    )
    return template


def update_template(template, items=None, **fields):
    """Update template fields; a given item list replaces the current one"""
    if items is not None and not items:
        raise ValidationAPIError(
            "Select at least one component for this template.", code="TEMPLATE_EMPTY"
        )

    with transaction.atomic():
        for name, value in fields.items():
            setattr(template, name, value)
        template.save()
        if items is not None:
            _replace_items(template, items)
    return template


def _copy_name(name):
    suffix = COPY_SUFFIX
    number = 1
    while True:
        candidate = name[: NAME_MAX_LENGTH - len(suffix)] + suffix
        if not ComponentTemplate.objects.filter(name=candidate).exists():
            return candidate
        number += 1
        suffix = f" (Copy {number})"


def clone_template(template):
    """Inactive copy of a template and its items"""
    with transaction.atomic():
        clone = ComponentTemplate.objects.create(
            name=_copy_name(template.name),
            description=template.description,
            industry_type=template.industry_type,
            employee_level=template.employee_level,
            is_active=False,
        )
        ComponentTemplateItem.objects.bulk_create(
            [
                ComponentTemplateItem(
                    template=clone,
                    component_id=item.component_id,
                    custom_value=item.custom_value,
                    display_order=item.display_order,
                )
                for item in template.items.all()
            ]
        )

    logger.info(
        "Component template cloned",
        extra={
            "template_id": template.pk,
            "clone_id": clone.pk,
            "action": "component_template_cloned",
        },
    )
    return clone


def apply_template(template_id, employee):
    """
    Apply a template to an employee.

    Counts the use on the template and returns the employee's salary
    breakdown under the template's active components.

    Raises:
        ValidationAPIError: the template is inactive
    """
    with transaction.atomic():
        template = get_object_or_404(
            ComponentTemplate.objects.select_for_update(), pk=template_id
        )
        if not template.is_active:
            raise ValidationAPIError(
                "Inactive templates cannot be applied.",
                code="TEMPLATE_INACTIVE",
                details={"template_id": template.pk},
            )
        ComponentTemplate.objects.filter(pk=template.pk).update(
            usage_count=F("usage_count") + 1, updated_at=timezone.now()
        )
        template.refresh_from_db()

    breakdown = calculate_preview(employee.basic_salary, template.definitions())

    logger.info(
        "Component template applied",
        extra={
            "template_id": template.pk,
            "employee_ref": public_emp_id(employee.pk),
            "usage_count": template.usage_count,
            "action": "component_template_applied",
        },
    )
    return {
        "template_id": template.pk,
        "template_name": template.name,
        "usage_count": template.usage_count,
        "employee": employee.pk,
        "employee_code": employee.employee_code,
        "component_count": len(breakdown["lines"]),
        **breakdown,
    }
