"""
Type definitions for bulk payroll operations.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List

from core.logging_utils import err_tag
from payroll.services.contracts import (
    AttendanceSummary,
    BulkFailure,
    BulkGenerationResult,
    ComponentDefinition,
    LeaveRecordData,
    PayrollComputation,
)


@dataclass(frozen=True)
class EmployeeData:
    """
    Employee fields the computation needs, detached from the ORM so the
    worker threads never touch the database.
    """

    employee_id: int
    employee_code: str
    basic_salary: Decimal


@dataclass
class BulkLoadedData:
    month: int
    year: int
    employees: Dict[int, EmployeeData] = field(default_factory=dict)
    attendance: Dict[int, AttendanceSummary] = field(default_factory=dict)
    leaves: Dict[int, List[LeaveRecordData]] = field(default_factory=dict)
    components: List[ComponentDefinition] = field(default_factory=list)
    skipped_employee_ids: List[int] = field(default_factory=list)


@dataclass
class BulkRunReport:
    """Outcome of one bulk run"""

    computations: Dict[int, PayrollComputation] = field(default_factory=dict)
    persisted_employee_ids: List[int] = field(default_factory=list)
    skipped_employee_ids: List[int] = field(default_factory=list)
    failures: List[BulkFailure] = field(default_factory=list)
    duration_seconds: float = 0.0
    dry_run: bool = False

    def add_failure(self, employee_id: int, error: Exception):
        self.failures.append({"employee_id": employee_id, "error": err_tag(error)})

    @property
    def success_count(self) -> int:
        if self.dry_run:
            return len(self.computations)
        return len(self.persisted_employee_ids)

    def as_result(self) -> BulkGenerationResult:
        return {
            "success_count": self.success_count,
            "skipped_count": len(self.skipped_employee_ids),
            "failures": list(self.failures),
        }
