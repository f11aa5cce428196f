"""
Component valuation engine.

Turns an allowance/deduction definition into a currency amount for one
employee. All arithmetic is Decimal; percentages are whole-number scaled,
so a value of 10 means 10%.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Tuple

from .contracts import ComponentDefinition, ComponentLine
from .enums import CalculationMethod, ComponentType

MONEY_QUANTUM = Decimal("0.01")
HUNDRED = Decimal("100")


def quantize_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def valuate_component(
    component: ComponentDefinition,
    basic_salary: Decimal,
    gross_so_far: Decimal,
    apply_threshold: bool = False,
) -> Decimal:
    """
    Amount contributed by one component.

    Args:
        component: Component definition
        basic_salary: Monthly basic salary of the employee
        gross_so_far: Basic plus allowances valued before this component
        apply_threshold: Zero the amount when basic salary is below the
            component's minimum salary threshold (cost analysis only)

    Returns:
        Decimal amount rounded to cents, capped by maximum_cap
    """
    method = component.calculation_method
    value = Decimal(component.value)

    if method == CalculationMethod.FIXED_AMOUNT:
        amount = value
    elif method == CalculationMethod.PERCENTAGE_OF_BASIC:
        amount = Decimal(basic_salary) * value / HUNDRED
    elif method == CalculationMethod.PERCENTAGE_OF_GROSS:
        amount = Decimal(gross_so_far) * value / HUNDRED
    else:
        raise ValueError(f"Unknown calculation method: {method}")

    if (
        apply_threshold
        and component.minimum_salary_threshold is not None
        and Decimal(basic_salary) < component.minimum_salary_threshold
    ):
        amount = Decimal("0")

    if component.maximum_cap is not None and amount > component.maximum_cap:
        amount = Decimal(component.maximum_cap)

    return quantize_money(amount)


def order_components(
    components: Iterable[ComponentDefinition],
) -> List[ComponentDefinition]:
    """Evaluation order: display order, then name"""
    return sorted(components, key=lambda c: c.sort_key)


def valuate_components(
    components: Iterable[ComponentDefinition],
    basic_salary: Decimal,
    apply_threshold: bool = False,
    gross_base_is_basic: bool = False,
) -> Tuple[List[ComponentLine], Decimal, Decimal]:
    """
    Value every component in evaluation order.

    Percentage-of-gross components see basic plus the allowances valued
    before them. With ``gross_base_is_basic`` the gross base stays at basic
    salary, which is how cost analysis and previews approximate it.

    Returns:
        (lines, total_allowances, total_deductions)
    """
    basic_salary = Decimal(basic_salary)
    lines: List[ComponentLine] = []
    total_allowances = Decimal("0.00")
    total_deductions = Decimal("0.00")

    for component in order_components(components):
        gross_so_far = basic_salary if gross_base_is_basic else basic_salary + total_allowances
        amount = valuate_component(
            component, basic_salary, gross_so_far, apply_threshold=apply_threshold
        )
        if component.component_type == ComponentType.ALLOWANCE:
            total_allowances += amount
        else:
            total_deductions += amount

        lines.append(
            ComponentLine(
                component_id=component.component_id,
                component_name=component.name,
                component_type=component.component_type,
                calculation_method=component.calculation_method,
                value=Decimal(component.value),
                amount=amount,
                is_taxable=component.is_taxable,
            )
        )

    return lines, total_allowances, total_deductions
