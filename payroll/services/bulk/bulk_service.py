"""
Bulk payroll service: load, compute in parallel, persist.
"""

import logging
import time
from typing import List, Optional

from core.logging_utils import err_tag, public_emp_id
from payroll.services.contracts import BulkGenerationResult
from payroll.services.leave_aggregator import aggregate_leave
from payroll.services.payroll_service import compute_payroll, period_bounds, validate_period

from .data_loader import BulkDataLoader
from .parallel_executor import ParallelExecutor
from .persister import BulkPersister
from .types import BulkLoadedData, BulkRunReport

logger = logging.getLogger(__name__)


class BulkPayrollService:
    """
    Generates payroll for every eligible employee of a period.

    Employees that already have a record are skipped. Errors of one
    employee are reported in the result and never abort the others.
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        timeout: Optional[float] = None,
        created_by: str = "",
    ):
        self.loader = BulkDataLoader()
        self.executor = ParallelExecutor(max_workers=max_workers, timeout=timeout)
        self.persister = BulkPersister(created_by=created_by)

    def _compute_one(self, data: BulkLoadedData, employee_id: int):
        employee = data.employees[employee_id]
        period_start, period_end = period_bounds(data.month, data.year)
        return compute_payroll(
            employee_id=employee.employee_id,
            employee_code=employee.employee_code,
            basic_salary=employee.basic_salary,
            month=data.month,
            year=data.year,
            attendance=data.attendance[employee_id],
            leave=aggregate_leave(data.leaves[employee_id], period_start, period_end),
            components=data.components,
        )

    def run(
        self,
        month: int,
        year: int,
        employee_ids: Optional[List[int]] = None,
        dry_run: bool = False,
    ) -> BulkRunReport:
        validate_period(month, year)
        started = time.monotonic()

        logger.info(
            f"Bulk payroll generation started for {year}-{month:02d}",
            extra={
                "period": f"{year}-{month:02d}",
                "dry_run": dry_run,
                "action": "payroll_bulk_start",
            },
        )

        data = self.loader.load_all_data(month, year, employee_ids=employee_ids)
        report = BulkRunReport(
            skipped_employee_ids=list(data.skipped_employee_ids), dry_run=dry_run
        )

        results = self.executor.map(
            lambda employee_id: self._compute_one(data, employee_id), data.employees
        )
        for employee_id, result in sorted(results.items()):
            if isinstance(result, Exception):
                report.add_failure(employee_id, result)
                logger.error(
                    "Bulk payroll computation failed for employee",
                    extra={
                        "employee_ref": public_emp_id(employee_id),
                        "error_type": type(result).__name__,
                        "error": err_tag(result),
                        "action": "payroll_bulk_employee_failed",
                    },
                )
            else:
                report.computations[employee_id] = result

        if not dry_run:
            self.persister.save_all(report)

        report.duration_seconds = time.monotonic() - started
        logger.info(
            "Bulk payroll generation completed",
            extra={
                "success_count": report.success_count,
                "skipped_count": len(report.skipped_employee_ids),
                "failure_count": len(report.failures),
                "duration_seconds": round(report.duration_seconds, 2),
                "action": "payroll_bulk_complete",
            },
        )
        return report


def generate_bulk_payroll(
    month: int,
    year: int,
    employee_ids: Optional[List[int]] = None,
    created_by: str = "",
) -> BulkGenerationResult:
    """Generate payroll for all eligible employees; see BulkPayrollService"""
    service = BulkPayrollService(created_by=created_by)
    return service.run(month, year, employee_ids=employee_ids).as_result()
