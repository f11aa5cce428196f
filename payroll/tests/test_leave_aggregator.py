"""
Tests for leave aggregation over a payroll month.
"""

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from leaves.models import Leave
from payroll.services.contracts import LeaveRecordData
from payroll.services.leave_aggregator import aggregate_employee_leave, aggregate_leave
from tests.base import BaseTestCase

JUNE_START = date(2025, 6, 1)
JUNE_END = date(2025, 6, 30)


class AggregateLeaveTest(SimpleTestCase):
    def test_paid_and_unpaid_split(self):
        summary = aggregate_leave(
            [
                LeaveRecordData("casual", date(2025, 6, 2), date(2025, 6, 3)),
                LeaveRecordData("sick", date(2025, 6, 10), date(2025, 6, 10)),
                LeaveRecordData("unpaid", date(2025, 6, 16), date(2025, 6, 18)),
                LeaveRecordData("maternity", date(2025, 6, 20), date(2025, 6, 21)),
            ],
            JUNE_START,
            JUNE_END,
        )
        self.assertEqual(summary.paid_leave_days, Decimal("3"))
        self.assertEqual(summary.unpaid_leave_days, Decimal("5"))
        self.assertEqual(summary.total_days, Decimal("8"))

    def test_leave_spanning_month_boundaries_is_clamped(self):
        summary = aggregate_leave(
            [
                LeaveRecordData("annual", date(2025, 5, 28), date(2025, 6, 2)),
                LeaveRecordData("unpaid", date(2025, 6, 29), date(2025, 7, 5)),
            ],
            JUNE_START,
            JUNE_END,
        )
        self.assertEqual(summary.paid_leave_days, Decimal("2"))
        self.assertEqual(summary.unpaid_leave_days, Decimal("2"))

    def test_leave_outside_period_is_ignored(self):
        summary = aggregate_leave(
            [LeaveRecordData("annual", date(2025, 7, 1), date(2025, 7, 4))],
            JUNE_START,
            JUNE_END,
        )
        self.assertEqual(summary.total_days, Decimal("0"))

    def test_half_day_leave_counts_half(self):
        summary = aggregate_leave(
            [LeaveRecordData("unpaid", date(2025, 6, 5), date(2025, 6, 5), is_half_day=True)],
            JUNE_START,
            JUNE_END,
        )
        self.assertEqual(summary.unpaid_leave_days, Decimal("0.5"))


class AggregateEmployeeLeaveTest(BaseTestCase):
    def _leave(self, leave_type, start, end, status=Leave.Status.APPROVED):
        leave = Leave(
            employee=self.employee,
            leave_type=leave_type,
            start_date=start,
            end_date=end,
            status=status,
        )
        leave.save()
        return leave

    def test_only_approved_leave_is_counted(self):
        self._leave("casual", date(2025, 6, 2), date(2025, 6, 3))
        self._leave("unpaid", date(2025, 6, 9), date(2025, 6, 9), status=Leave.Status.PENDING)
        self._leave("unpaid", date(2025, 6, 10), date(2025, 6, 10), status=Leave.Status.REJECTED)
        self._leave("unpaid", date(2025, 6, 11), date(2025, 6, 11))

        summary = aggregate_employee_leave(self.employee.pk, JUNE_START, JUNE_END)

        self.assertEqual(summary.paid_leave_days, Decimal("2"))
        self.assertEqual(summary.unpaid_leave_days, Decimal("1"))
