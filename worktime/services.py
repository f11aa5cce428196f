"""
Attendance services shared by the API and management tooling.
"""

import logging

from django.db import transaction

from users.models import Employee

from .models import Attendance

logger = logging.getLogger(__name__)


def bulk_mark_attendance(
    date,
    employee_ids,
    status=Attendance.Status.PRESENT,
    check_in_time=None,
    check_out_time=None,
    remarks="",
):
    """
    Create one attendance record per employee for a date.

    Employees that already have a record for the date are skipped. Ids
    that are unknown or inactive are reported as unavailable.

    Returns:
        dict with created, skipped and unavailable counts and the skipped
        and unavailable employee ids
    """
    existing = set(
        Attendance.objects.filter(date=date, employee_id__in=employee_ids).values_list(
            "employee_id", flat=True
        )
    )
    employees = list(
        Employee.objects.active()
        .filter(pk__in=employee_ids)
        .exclude(pk__in=existing)
        .select_related("shift")
    )
    available = existing | {employee.pk for employee in employees}
    unavailable = sorted(set(employee_ids) - available)

    created = 0
    with transaction.atomic():
        for employee in employees:
            # save() runs per record so the shift rules apply to each employee
            Attendance.objects.create(
                employee=employee,
                date=date,
                status=status,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                remarks=remarks,
            )
            created += 1

    skipped = sorted(existing)
    logger.info(
        "Bulk attendance marked",
        extra={
            "date": str(date),
            "created_count": created,
            "skipped_count": len(skipped),
            "unavailable_count": len(unavailable),
            "action": "attendance_bulk_marked",
        },
    )
    return {
        "created_count": created,
        "skipped_count": len(skipped),
        "skipped_employee_ids": skipped,
        "unavailable_count": len(unavailable),
        "unavailable_employee_ids": unavailable,
    }


def recalculate_attendance(attendance):
    """Re-run the metrics calculator on a stored record and persist it"""
    attendance.save()
    return attendance
