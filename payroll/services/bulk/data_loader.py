"""
Bulk data loader for payroll generation.

One query per input kind regardless of the number of employees:
employees, existing payrolls, attendance counters, approved leave and
active components.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from payroll.models import Payroll
from payroll.services.attendance_summary import load_attendance_summaries
from payroll.services.leave_aggregator import load_approved_leave
from payroll.services.payroll_service import active_component_definitions, period_bounds
from users.models import Employee

from .types import BulkLoadedData, EmployeeData

logger = logging.getLogger(__name__)


class BulkDataLoader:
    """Loads every input of a bulk run into plain data structures"""

    def load_all_data(
        self, month: int, year: int, employee_ids: Optional[List[int]] = None
    ) -> BulkLoadedData:
        """
        Args:
            month: Payroll month
            year: Payroll year
            employee_ids: Restrict the run to these employees; None means
                every active employee

        Returns:
            BulkLoadedData with employees already holding a payroll for the
            period moved to skipped_employee_ids
        """
        data = BulkLoadedData(month=month, year=year)
        period_start, period_end = period_bounds(month, year)

        employees = Employee.objects.active()
        if employee_ids is not None:
            employees = employees.filter(pk__in=employee_ids)
        rows = list(employees.values_list("pk", "employee_code", "basic_salary"))

        existing = set(
            Payroll.objects.filter(
                month=month, year=year, employee_id__in=[row[0] for row in rows]
            ).values_list("employee_id", flat=True)
        )

        for employee_id, employee_code, basic_salary in rows:
            if employee_id in existing:
                data.skipped_employee_ids.append(employee_id)
                continue
            data.employees[employee_id] = EmployeeData(
                employee_id=employee_id,
                employee_code=employee_code,
                basic_salary=Decimal(basic_salary),
            )

        eligible = list(data.employees)
        data.attendance = load_attendance_summaries(eligible, period_start, period_end)
        data.leaves = load_approved_leave(eligible, period_start, period_end)
        data.components = active_component_definitions()

        logger.info(
            f"Bulk data loaded for {len(eligible)} employees ({year}-{month:02d})",
            extra={
                "employee_count": len(eligible),
                "skipped_count": len(data.skipped_employee_ids),
                "component_count": len(data.components),
                "action": "payroll_bulk_data_loaded",
            },
        )
        return data
