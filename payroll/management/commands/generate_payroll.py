"""
Management command to generate monthly payroll for active employees
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import APIError
from payroll.services.bulk import BulkPayrollService

logger = logging.getLogger(__name__)


def _employee_ids(value):
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise CommandError(f"Invalid employee id list: {value}")


class Command(BaseCommand):
    help = "Generate payroll records for a month (skips employees that already have one)"

    def add_arguments(self, parser):
        parser.add_argument("--year", type=int, required=True, help="Payroll year (e.g., 2025)")
        parser.add_argument("--month", type=int, required=True, help="Payroll month (1-12)")
        parser.add_argument(
            "--employees",
            type=_employee_ids,
            help="Comma separated employee IDs; defaults to all active employees",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Compute and show results without saving records",
        )
        parser.add_argument(
            "--username",
            default="system",
            help="Name recorded as created_by on generated records",
        )

    def handle(self, *args, **options):
        year = options["year"]
        month = options["month"]
        dry_run = options["dry_run"]

        self.stdout.write(f"Generating payroll for {year}-{month:02d}")
        if dry_run:
            self.stdout.write("   DRY RUN MODE - No changes will be saved")

        service = BulkPayrollService(created_by=options["username"])
        try:
            report = service.run(
                month, year, employee_ids=options.get("employees"), dry_run=dry_run
            )
        except APIError as e:
            raise CommandError(e.message)

        if dry_run:
            for employee_id, computation in sorted(report.computations.items()):
                self.stdout.write(
                    f"  {computation.employee_code}: gross {computation.gross_salary} "
                    f"deductions {computation.total_deductions} net {computation.net_salary}"
                )

        for failure in report.failures:
            self.stdout.write(
                self.style.ERROR(f"  ERROR: employee {failure['employee_id']}: {failure['error']}")
            )

        result = report.as_result()
        self.stdout.write("\nSummary:")
        self.stdout.write(f"   Generated: {result['success_count']}")
        self.stdout.write(f"   Skipped (already exist): {result['skipped_count']}")
        self.stdout.write(f"   Failed: {len(result['failures'])}")

        if result["failures"]:
            self.stdout.write(self.style.WARNING("Finished with errors"))
        else:
            self.stdout.write(self.style.SUCCESS("Done"))
