"""
Leave workflow: application, approval, rejection and cancellation.

Approval is the only transition that touches the leave balance. It locks
the balance row so concurrent approvals for the same employee and year
cannot both consume the same remaining days.
"""

import logging

from django.db import transaction
from django.utils import timezone

from core.exceptions import InsufficientLeaveBalanceError, LeaveStateError
from core.logging_utils import public_emp_id

from .models import Leave, LeaveBalance, leave_day_count

logger = logging.getLogger(__name__)


def _check_balance(balance, leave_type, days):
    if not LeaveBalance.tracks(leave_type):
        return
    remaining = balance.remaining(leave_type)
    if remaining < days:
        raise InsufficientLeaveBalanceError(
            f"Insufficient {leave_type} balance. Please check your leave balance.",
            details={"requested": str(days), "remaining": str(remaining)},
        )


def apply_for_leave(employee, leave_type, start_date, end_date, is_half_day=False, reason=""):
    """
    Create a Pending leave after checking the yearly balance.

    Raises:
        InsufficientLeaveBalanceError: requested days exceed the remaining balance
    """
    days = leave_day_count(start_date, end_date, is_half_day)
    balance, _ = LeaveBalance.objects.get_or_create_for(employee, start_date.year)
    _check_balance(balance, leave_type, days)

    leave = Leave(
        employee=employee,
        leave_type=leave_type,
        start_date=start_date,
        end_date=end_date,
        is_half_day=is_half_day,
        reason=reason,
    )
    leave.full_clean(exclude=["number_of_days"])
    leave.save()

    logger.info(
        "Leave application submitted",
        extra={
            "employee_ref": public_emp_id(employee.pk),
            "leave_id": leave.pk,
            "leave_type": leave_type,
            "days": str(days),
            "action": "leave_applied",
        },
    )
    return leave


def _require_pending(leave, message):
    if leave.status != Leave.Status.PENDING:
        raise LeaveStateError(message, details={"status": leave.status})


def approve_leave(leave_id, approver, remarks=""):
    """Approve a pending leave and consume the matching balance"""
    with transaction.atomic():
        leave = Leave.objects.select_for_update().get(pk=leave_id)
        _require_pending(leave, "Leave has already been processed.")

        balance, _ = LeaveBalance.objects.get_or_create_for(
            leave.employee, leave.start_date.year
        )
        if LeaveBalance.tracks(leave.leave_type):
            balance = LeaveBalance.objects.select_for_update().get(pk=balance.pk)
            _check_balance(balance, leave.leave_type, leave.number_of_days)
            field = balance.consume(leave.leave_type, leave.number_of_days)
            balance.save(update_fields=[field, "updated_at"])

        leave.status = Leave.Status.APPROVED
        leave.admin_remarks = remarks or ""
        leave.approved_by = approver
        leave.action_date = timezone.now()
        leave.save()

    logger.info(
        "Leave approved",
        extra={
            "employee_ref": public_emp_id(leave.employee_id),
            "leave_id": leave.pk,
            "days": str(leave.number_of_days),
            "action": "leave_approved",
        },
    )
    return leave


def reject_leave(leave_id, approver, remarks=""):
    with transaction.atomic():
        leave = Leave.objects.select_for_update().get(pk=leave_id)
        _require_pending(leave, "Leave has already been processed.")
        leave.status = Leave.Status.REJECTED
        leave.admin_remarks = remarks or ""
        leave.approved_by = approver
        leave.action_date = timezone.now()
        leave.save()

    logger.info(
        "Leave rejected",
        extra={"leave_id": leave.pk, "action": "leave_rejected"},
    )
    return leave


def cancel_leave(leave_id):
    with transaction.atomic():
        leave = Leave.objects.select_for_update().get(pk=leave_id)
        _require_pending(leave, "Can only cancel pending leave applications.")
        leave.status = Leave.Status.CANCELLED
        leave.save()

    logger.info(
        "Leave cancelled",
        extra={"leave_id": leave.pk, "action": "leave_cancelled"},
    )
    return leave
