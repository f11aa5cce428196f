"""
Bulk persister for payroll results.

Each employee is written in its own transaction. A failure is recorded on
the report and the remaining employees are still written.
"""

import logging

from django.db import IntegrityError, transaction

from core.logging_utils import err_tag, public_emp_id
from payroll.services.payroll_service import persist_computation

from .types import BulkRunReport

logger = logging.getLogger(__name__)


class BulkPersister:
    def __init__(self, created_by: str = ""):
        self.created_by = created_by

    def save_all(self, report: BulkRunReport) -> BulkRunReport:
        for employee_id, computation in sorted(report.computations.items()):
            try:
                with transaction.atomic():
                    persist_computation(computation, created_by=self.created_by)
            except IntegrityError:
                # Someone generated this period after the loader ran
                report.skipped_employee_ids.append(employee_id)
                logger.warning(
                    "Payroll already exists, skipped during bulk save",
                    extra={
                        "employee_ref": public_emp_id(employee_id),
                        "action": "payroll_bulk_employee_skipped",
                    },
                )
            except Exception as e:
                report.add_failure(employee_id, e)
                logger.error(
                    "Bulk payroll save failed for employee",
                    extra={
                        "employee_ref": public_emp_id(employee_id),
                        "error_type": type(e).__name__,
                        "error": err_tag(e),
                        "action": "payroll_bulk_employee_failed",
                    },
                    exc_info=True,
                )
            else:
                report.persisted_employee_ids.append(employee_id)

        return report
