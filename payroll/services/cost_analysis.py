"""
Component cost analysis and salary previews.

Both value components against basic salary alone, so percentage-of-gross
components are approximated with basic salary as their base.
"""

import logging
from collections import Counter
from decimal import Decimal
from typing import Iterable, Optional

from payroll.models import AllowanceDeduction
from users.models import Employee

from .contracts import ComponentDefinition
from .enums import CalculationMethod, ComponentType
from .valuation import quantize_money, valuate_component, valuate_components

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
ZERO = Decimal("0.00")


def _component_cost(component, definition, basic_salaries):
    total = ZERO
    employee_count = 0
    for basic_salary in basic_salaries:
        amount = valuate_component(
            definition, basic_salary, basic_salary, apply_threshold=True
        )
        if amount:
            employee_count += 1
        total += amount

    average = quantize_money(total / len(basic_salaries)) if basic_salaries else ZERO
    return {
        "component_id": component.pk,
        "code": component.code,
        "name": component.name,
        "component_type": component.component_type,
        "calculation_method": component.calculation_method,
        "value": component.value,
        "is_taxable": component.is_taxable,
        "total_monthly_cost": total,
        "total_annual_cost": total * MONTHS_PER_YEAR,
        "average_per_employee": average,
        "employee_count": employee_count,
    }


def analyse_component_costs():
    """
    Estimated monthly and annual cost of every active component across
    all active employees, with minimum salary thresholds applied.
    """
    basic_salaries = [
        Decimal(salary)
        for salary in Employee.objects.active().values_list("basic_salary", flat=True)
    ]
    components = list(AllowanceDeduction.objects.active().in_evaluation_order())

    rows = [
        _component_cost(component, component.to_definition(), basic_salaries)
        for component in components
    ]

    allowances = [r for r in rows if r["component_type"] == ComponentType.ALLOWANCE]
    deductions = [r for r in rows if r["component_type"] == ComponentType.DEDUCTION]
    total_allowances = sum((r["total_monthly_cost"] for r in allowances), ZERO)
    total_deductions = sum((r["total_monthly_cost"] for r in deductions), ZERO)
    taxable = sum((r["total_monthly_cost"] for r in allowances if r["is_taxable"]), ZERO)
    total_basic = sum(basic_salaries, ZERO)
    net_monthly = total_allowances - total_deductions

    logger.info(
        "Component cost analysis computed",
        extra={
            "employee_count": len(basic_salaries),
            "component_count": len(rows),
            "action": "component_cost_analysis",
        },
    )

    return {
        "components": rows,
        "summary": {
            "employee_count": len(basic_salaries),
            "total_basic_salary": total_basic,
            "average_basic_salary": (
                quantize_money(total_basic / len(basic_salaries)) if basic_salaries else ZERO
            ),
            "total_monthly_allowances": total_allowances,
            "total_monthly_deductions": total_deductions,
            "taxable_allowances": taxable,
            "non_taxable_allowances": total_allowances - taxable,
            "net_monthly_impact": net_monthly,
            "net_annual_impact": net_monthly * MONTHS_PER_YEAR,
        },
    }


def component_statistics():
    """Counts of configured components by status, type, taxability and method"""
    components = list(AllowanceDeduction.objects.all())
    methods = Counter(c.calculation_method for c in components)
    return {
        "total": len(components),
        "active": sum(1 for c in components if c.is_active),
        "inactive": sum(1 for c in components if not c.is_active),
        "allowances": sum(1 for c in components if c.component_type == ComponentType.ALLOWANCE),
        "deductions": sum(1 for c in components if c.component_type == ComponentType.DEDUCTION),
        "taxable": sum(1 for c in components if c.is_taxable),
        "non_taxable": sum(1 for c in components if not c.is_taxable),
        "mandatory": sum(1 for c in components if c.is_mandatory),
        "by_calculation_method": {
            method.value: methods.get(method.value, 0) for method in CalculationMethod
        },
    }


def calculate_single_amount(basic_salary, calculation_method, value) -> Decimal:
    """Amount of an unsaved component definition for a basic salary"""
    definition = ComponentDefinition(
        component_id=None,
        name="preview",
        component_type=ComponentType.ALLOWANCE,
        calculation_method=CalculationMethod(calculation_method),
        value=Decimal(value),
    )
    return valuate_component(definition, Decimal(basic_salary), Decimal(basic_salary))


def calculate_preview(
    basic_salary, components: Optional[Iterable[ComponentDefinition]] = None
):
    """
    Salary breakdown for a hypothetical basic salary.

    Args:
        basic_salary: Monthly basic salary to preview
        components: Definitions to value; defaults to all active components

    Returns:
        Dict with line items, totals, gross, net and the taxable amount
        (basic plus taxable allowances)
    """
    basic_salary = Decimal(basic_salary)
    if components is None:
        components = [
            component.to_definition()
            for component in AllowanceDeduction.objects.active().in_evaluation_order()
        ]

    lines, total_allowances, total_deductions = valuate_components(
        components, basic_salary, gross_base_is_basic=True
    )
    gross_salary = basic_salary + total_allowances
    taxable_allowances = sum(
        (
            line.amount
            for line in lines
            if line.is_taxable and line.component_type == ComponentType.ALLOWANCE
        ),
        ZERO,
    )

    return {
        "basic_salary": basic_salary,
        "lines": [
            {
                "component_id": line.component_id,
                "component_name": line.component_name,
                "component_type": line.component_type.value,
                "calculation_method": line.calculation_method.value,
                "value": line.value,
                "amount": line.amount,
                "is_taxable": line.is_taxable,
            }
            for line in lines
        ],
        "total_allowances": total_allowances,
        "total_deductions": total_deductions,
        "gross_salary": gross_salary,
        "net_salary": gross_salary - total_deductions,
        "taxable_amount": basic_salary + taxable_allowances,
    }
