"""
Bulk payroll generation.

Loading, computation and persistence are separate stages:

- BulkDataLoader reads every input for the period in a handful of queries
- ParallelExecutor runs the pure computation on a thread pool under an
  overall timeout
- BulkPersister writes each employee in its own transaction so one
  failure never rolls back its siblings
"""

from .bulk_service import BulkPayrollService, generate_bulk_payroll
from .types import BulkLoadedData, BulkRunReport, EmployeeData

__all__ = [
    "BulkLoadedData",
    "BulkPayrollService",
    "BulkRunReport",
    "EmployeeData",
    "generate_bulk_payroll",
]
