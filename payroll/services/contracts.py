"""
Data contracts for payroll calculations.

Plain typed structures passed between the pure calculation functions and
the persistence layer. None of them reference Django models, so they can
cross thread boundaries in bulk runs.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional, TypedDict

from .enums import CalculationMethod, ComponentType


@dataclass(frozen=True)
class ComponentDefinition:
    """Snapshot of an AllowanceDeduction row"""

    component_id: Optional[int]
    name: str
    component_type: ComponentType
    calculation_method: CalculationMethod
    value: Decimal
    is_taxable: bool = True
    minimum_salary_threshold: Optional[Decimal] = None
    maximum_cap: Optional[Decimal] = None
    display_order: int = 0

    @property
    def sort_key(self):
        return (self.display_order, self.name)


@dataclass(frozen=True)
class LeaveRecordData:
    """Approved leave as seen by the aggregator"""

    leave_type: str
    start_date: date
    end_date: date
    is_half_day: bool = False


@dataclass(frozen=True)
class AttendanceSummary:
    present_days: int = 0
    absent_days: int = 0
    late_days: int = 0
    half_days: int = 0
    overtime_hours: Decimal = Decimal("0")


@dataclass(frozen=True)
class LeaveSummary:
    paid_leave_days: Decimal = Decimal("0")
    unpaid_leave_days: Decimal = Decimal("0")

    @property
    def total_days(self) -> Decimal:
        return self.paid_leave_days + self.unpaid_leave_days


@dataclass(frozen=True)
class ComponentLine:
    """Computed amount of one component, snapshotted into PayrollDetail"""

    component_id: Optional[int]
    component_name: str
    component_type: ComponentType
    calculation_method: CalculationMethod
    value: Decimal
    amount: Decimal
    is_taxable: bool


@dataclass
class PayrollComputation:
    """Everything needed to persist one payroll record"""

    employee_id: int
    employee_code: str
    month: int
    year: int
    basic_salary: Decimal
    total_working_days: int
    attendance: AttendanceSummary
    leave: LeaveSummary
    per_day_salary: Decimal
    leave_deduction_amount: Decimal
    total_allowances: Decimal
    total_deductions: Decimal
    gross_salary: Decimal
    net_salary: Decimal
    payment_date: date
    lines: List[ComponentLine] = field(default_factory=list)


class BulkFailure(TypedDict):
    employee_id: int
    error: str


class BulkGenerationResult(TypedDict):
    success_count: int
    skipped_count: int
    failures: List[BulkFailure]
