"""
Attendance counters for a payroll period.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable

from django.db.models import Count, Q, Sum

from worktime.models import Attendance

from .contracts import AttendanceSummary

Status = Attendance.Status


def load_attendance_summaries(
    employee_ids: Iterable[int], period_start: date, period_end: date
) -> Dict[int, AttendanceSummary]:
    """
    Count attendance by status for every employee in one query.

    Present days include late arrivals; half days are counted separately.
    Employees without attendance get an empty summary.
    """
    employee_ids = list(employee_ids)
    summaries = {employee_id: AttendanceSummary() for employee_id in employee_ids}

    rows = (
        Attendance.objects.filter(
            employee_id__in=employee_ids, date__range=(period_start, period_end)
        )
        .values("employee_id")
        .annotate(
            present=Count("id", filter=Q(status__in=[Status.PRESENT, Status.LATE])),
            absent=Count("id", filter=Q(status=Status.ABSENT)),
            late=Count("id", filter=Q(status=Status.LATE)),
            half=Count("id", filter=Q(status=Status.HALF_DAY)),
            overtime=Sum("overtime_hours"),
        )
        .order_by()
    )

    for row in rows:
        summaries[row["employee_id"]] = AttendanceSummary(
            present_days=row["present"],
            absent_days=row["absent"],
            late_days=row["late"],
            half_days=row["half"],
            overtime_hours=Decimal(row["overtime"] or 0),
        )
    return summaries
