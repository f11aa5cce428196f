"""
Enumerations for the payroll engine.

Models store the enum values; services compare against the enum members so
no module depends on magic strings.
"""

from enum import Enum


class ChoicesEnum(str, Enum):
    """String enum usable directly as Django model field choices"""

    @classmethod
    def choices(cls):
        return [(member.value, member.label) for member in cls]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    def __str__(self):
        return self.value


class ComponentType(ChoicesEnum):
    """Whether a component adds to or subtracts from pay"""

    ALLOWANCE = "allowance"
    DEDUCTION = "deduction"


class CalculationMethod(ChoicesEnum):
    """How a component's value turns into an amount"""

    FIXED_AMOUNT = "fixed_amount"
    """value is a currency amount"""

    PERCENTAGE_OF_BASIC = "percentage_of_basic"
    """value is a percentage of basic salary"""

    PERCENTAGE_OF_GROSS = "percentage_of_gross"
    """value is a percentage of basic plus allowances accumulated so far"""

    @property
    def is_percentage(self) -> bool:
        return self is not CalculationMethod.FIXED_AMOUNT


class ComponentStatus(ChoicesEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PayrollStatus(ChoicesEnum):
    """
    Payroll record lifecycle.

    Draft -> Pending -> Approved -> Paid, with Cancelled reachable from any
    state before Paid.
    """

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"
    CANCELLED = "cancelled"

    @property
    def can_approve(self) -> bool:
        return self in (PayrollStatus.DRAFT, PayrollStatus.PENDING)

    @property
    def can_delete(self) -> bool:
        return self not in (PayrollStatus.APPROVED, PayrollStatus.PAID)

    @property
    def can_mark_paid(self) -> bool:
        return self is PayrollStatus.APPROVED

    @property
    def can_cancel(self) -> bool:
        return self in (
            PayrollStatus.DRAFT,
            PayrollStatus.PENDING,
            PayrollStatus.APPROVED,
        )


class IndustryType(ChoicesEnum):
    """Industry a component template is tailored to"""

    INFORMATION_TECHNOLOGY = "information_technology"
    MANUFACTURING = "manufacturing"
    HEALTHCARE = "healthcare"
    FINANCE = "finance"
    RETAIL = "retail"
    EDUCATION = "education"
    GOVERNMENT = "government"
    STARTUP = "startup"
    OTHER = "other"


class EmployeeLevel(ChoicesEnum):
    ENTRY_LEVEL = "entry_level"
    JUNIOR = "junior"
    MID_LEVEL = "mid_level"
    SENIOR = "senior"
    LEAD = "lead"
    MANAGER = "manager"
    SENIOR_MANAGER = "senior_manager"
    DIRECTOR = "director"
    EXECUTIVE = "executive"
