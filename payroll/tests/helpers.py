"""
Shared builders for payroll tests.
"""

from decimal import Decimal

from payroll.models import AllowanceDeduction
from payroll.services.contracts import ComponentDefinition
from payroll.services.enums import CalculationMethod, ComponentType


def definition(
    name="Component",
    component_type=ComponentType.ALLOWANCE,
    method=CalculationMethod.FIXED_AMOUNT,
    value="0",
    **kwargs,
):
    return ComponentDefinition(
        component_id=kwargs.pop("component_id", None),
        name=name,
        component_type=component_type,
        calculation_method=method,
        value=Decimal(value),
        **kwargs,
    )


def make_component(
    name,
    component_type=ComponentType.ALLOWANCE,
    method=CalculationMethod.FIXED_AMOUNT,
    value="0",
    **kwargs,
):
    return AllowanceDeduction.objects.create(
        name=name,
        component_type=component_type.value,
        calculation_method=method.value,
        value=Decimal(value),
        **kwargs,
    )
