"""
Parallel executor for bulk payroll computation.

Runs the pure per-employee computation on a thread pool. The whole batch
shares one deadline: employees whose computation has not finished when it
expires are reported as timed out, while finished ones are kept.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError, as_completed
from typing import Callable, Dict, Iterable, Optional, Union

from core.exceptions import BulkTimeoutError
from core.logging_utils import public_emp_id
from payroll.conf import payroll_setting
from payroll.services.contracts import PayrollComputation

logger = logging.getLogger(__name__)

TaskResult = Union[PayrollComputation, Exception]


class ParallelExecutor:
    def __init__(
        self, max_workers: Optional[int] = None, timeout: Optional[float] = None
    ):
        """
        Args:
            max_workers: Thread pool size, defaults to PAYROLL["BULK_MAX_WORKERS"]
            timeout: Seconds for the whole batch, defaults to
                PAYROLL["BULK_TIMEOUT_SECONDS"]
        """
        self.max_workers = max_workers or payroll_setting("BULK_MAX_WORKERS")
        self.timeout = timeout if timeout is not None else payroll_setting(
            "BULK_TIMEOUT_SECONDS"
        )

    def map(
        self, func: Callable[[int], PayrollComputation], employee_ids: Iterable[int]
    ) -> Dict[int, TaskResult]:
        """
        Call ``func(employee_id)`` for every id.

        Returns:
            Dict mapping employee_id to the computation or the exception it
            raised; unfinished employees map to BulkTimeoutError
        """
        employee_ids = list(employee_ids)
        if not employee_ids:
            return {}

        started = time.monotonic()
        results: Dict[int, TaskResult] = {}
        executor = ThreadPoolExecutor(max_workers=self.max_workers)

        try:
            future_to_employee = {
                executor.submit(func, employee_id): employee_id
                for employee_id in employee_ids
            }
            try:
                for future in as_completed(future_to_employee, timeout=self.timeout):
                    employee_id = future_to_employee[future]
                    try:
                        results[employee_id] = future.result()
                    except Exception as e:
                        results[employee_id] = e
                        logger.error(
                            "Payroll computation raised",
                            extra={
                                "employee_ref": public_emp_id(employee_id),
                                "error_type": type(e).__name__,
                                "action": "payroll_bulk_compute_error",
                            },
                        )
            except TimeoutError:
                pending = [eid for eid in employee_ids if eid not in results]
                logger.error(
                    f"Bulk computation timed out after {self.timeout}s",
                    extra={
                        "timeout": self.timeout,
                        "pending_count": len(pending),
                        "action": "payroll_bulk_timeout",
                    },
                )
                for employee_id in pending:
                    results[employee_id] = BulkTimeoutError(
                        f"Computation did not finish within {self.timeout} seconds"
                    )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        logger.info(
            f"Bulk computation finished in {time.monotonic() - started:.2f}s",
            extra={
                "total": len(employee_ids),
                "error_count": sum(1 for r in results.values() if isinstance(r, Exception)),
                "max_workers": self.max_workers,
                "action": "payroll_bulk_compute_complete",
            },
        )
        return results
