"""
Leave aggregation over a payroll period.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable

from leaves.models import HALF_DAY_LEAVE_WEIGHT, PAID_LEAVE_TYPES, Leave

from .contracts import LeaveRecordData, LeaveSummary


def overlap_days(leave: LeaveRecordData, period_start: date, period_end: date) -> Decimal:
    """Days of the leave inside [period_start, period_end]; 0 when disjoint"""
    start = max(leave.start_date, period_start)
    end = min(leave.end_date, period_end)
    if end < start:
        return Decimal("0")
    if leave.is_half_day:
        return HALF_DAY_LEAVE_WEIGHT
    return Decimal((end - start).days + 1)


def aggregate_leave(
    leaves: Iterable[LeaveRecordData], period_start: date, period_end: date
) -> LeaveSummary:
    """
    Split approved leave overlapping the period into paid and unpaid days.

    Casual, sick and annual leave is paid; everything else is unpaid.
    Callers pass approved records only.
    """
    paid = Decimal("0")
    unpaid = Decimal("0")
    for leave in leaves:
        days = overlap_days(leave, period_start, period_end)
        if not days:
            continue
        if leave.leave_type in PAID_LEAVE_TYPES:
            paid += days
        else:
            unpaid += days
    return LeaveSummary(paid_leave_days=paid, unpaid_leave_days=unpaid)


def load_approved_leave(employee_ids, period_start: date, period_end: date):
    """
    Approved leave intersecting the period, grouped by employee id.
    """
    grouped = {employee_id: [] for employee_id in employee_ids}
    rows = Leave.objects.filter(
        employee_id__in=employee_ids,
        status=Leave.Status.APPROVED,
        start_date__lte=period_end,
        end_date__gte=period_start,
    ).values_list("employee_id", "leave_type", "start_date", "end_date", "is_half_day")

    for employee_id, leave_type, start_date, end_date, is_half_day in rows:
        grouped[employee_id].append(
            LeaveRecordData(
                leave_type=leave_type,
                start_date=start_date,
                end_date=end_date,
                is_half_day=is_half_day,
            )
        )
    return grouped


def aggregate_employee_leave(employee_id: int, period_start: date, period_end: date) -> LeaveSummary:
    leaves = load_approved_leave([employee_id], period_start, period_end)[employee_id]
    return aggregate_leave(leaves, period_start, period_end)
