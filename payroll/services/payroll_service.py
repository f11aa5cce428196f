"""
Payroll generator and record state machine.

``compute_payroll`` is a pure function over already loaded inputs, shared
by single and bulk generation. The remaining functions load inputs,
persist results and move records through their lifecycle:

    Draft -> Pending -> Approved -> Paid
    Cancelled from Draft, Pending or Approved

Only Draft, Pending and Cancelled records may be deleted.
"""

import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Tuple

from django.db import IntegrityError, transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone

from core.exceptions import (
    PayrollConflictError,
    PayrollStateError,
    ValidationAPIError,
)
from core.logging_utils import public_emp_id
from payroll.conf import payroll_setting
from payroll.models import AllowanceDeduction, Payroll, PayrollDetail

from .attendance_summary import load_attendance_summaries
from .contracts import (
    AttendanceSummary,
    ComponentDefinition,
    LeaveSummary,
    PayrollComputation,
)
from .enums import PayrollStatus
from .leave_aggregator import aggregate_employee_leave
from .valuation import quantize_money, valuate_components

logger = logging.getLogger(__name__)

MIN_PAYROLL_YEAR = 2000
MAX_PAYROLL_YEAR = 2100


def validate_period(month, year):
    errors = {}
    if not isinstance(month, int) or not 1 <= month <= 12:
        errors["month"] = "Month must be between 1 and 12"
    if not isinstance(year, int) or not MIN_PAYROLL_YEAR <= year <= MAX_PAYROLL_YEAR:
        errors["year"] = f"Year must be between {MIN_PAYROLL_YEAR} and {MAX_PAYROLL_YEAR}"
    if errors:
        raise ValidationAPIError("Invalid payroll period", details=errors)


def period_bounds(month: int, year: int) -> Tuple[date, date]:
    """First and last calendar day of the month"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def build_payroll_number(employee_code: str, month: int, year: int) -> str:
    prefix = payroll_setting("PAYROLL_NUMBER_PREFIX")
    return f"{prefix}-{year}{month:02d}-{employee_code}"


def active_component_definitions() -> List[ComponentDefinition]:
    return [
        component.to_definition()
        for component in AllowanceDeduction.objects.active().in_evaluation_order()
    ]


def compute_payroll(
    employee_id: int,
    employee_code: str,
    basic_salary: Decimal,
    month: int,
    year: int,
    attendance: AttendanceSummary,
    leave: LeaveSummary,
    components: Iterable[ComponentDefinition],
) -> PayrollComputation:
    """
    Compute one employee's payroll for a calendar month.

    Working days are calendar days. Absent days and unpaid leave are
    deducted at basic salary divided by working days; the deduction joins
    the component deductions in total_deductions.
    """
    basic_salary = Decimal(basic_salary)
    period_start, period_end = period_bounds(month, year)
    total_working_days = (period_end - period_start).days + 1

    per_day_salary = basic_salary / total_working_days
    deductible_days = Decimal(attendance.absent_days) + leave.unpaid_leave_days
    leave_deduction = quantize_money(deductible_days * per_day_salary)

    lines, total_allowances, component_deductions = valuate_components(
        components, basic_salary
    )
    total_deductions = component_deductions + leave_deduction

    gross_salary = basic_salary + total_allowances
    net_salary = gross_salary - total_deductions

    return PayrollComputation(
        employee_id=employee_id,
        employee_code=employee_code,
        month=month,
        year=year,
        basic_salary=basic_salary,
        total_working_days=total_working_days,
        attendance=attendance,
        leave=leave,
        per_day_salary=quantize_money(per_day_salary),
        leave_deduction_amount=leave_deduction,
        total_allowances=total_allowances,
        total_deductions=total_deductions,
        gross_salary=gross_salary,
        net_salary=net_salary,
        payment_date=period_end,
        lines=lines,
    )


def persist_computation(
    computation: PayrollComputation,
    created_by: str = "",
    status: PayrollStatus = PayrollStatus.PENDING,
) -> Payroll:
    """
    Insert the payroll header and its detail snapshots.

    Callers wrap this in a transaction; a duplicate period raises
    IntegrityError from the unique constraint.
    """
    attendance = computation.attendance
    leave = computation.leave

    payroll = Payroll.objects.create(
        employee_id=computation.employee_id,
        payroll_number=build_payroll_number(
            computation.employee_code, computation.month, computation.year
        ),
        month=computation.month,
        year=computation.year,
        basic_salary=computation.basic_salary,
        total_allowances=computation.total_allowances,
        total_deductions=computation.total_deductions,
        gross_salary=computation.gross_salary,
        net_salary=computation.net_salary,
        total_working_days=computation.total_working_days,
        present_days=attendance.present_days,
        absent_days=attendance.absent_days,
        late_days=attendance.late_days,
        half_days=attendance.half_days,
        leave_days=leave.total_days,
        paid_leaves=leave.paid_leave_days,
        unpaid_leaves=leave.unpaid_leave_days,
        leave_deduction_amount=computation.leave_deduction_amount,
        overtime_hours=attendance.overtime_hours,
        # No overtime rate is configured, hours are recorded for reference
        overtime_amount=Decimal("0"),
        status=status.value,
        payment_date=computation.payment_date,
        created_by=created_by,
    )

    PayrollDetail.objects.bulk_create(
        [
            PayrollDetail(
                payroll=payroll,
                component_id=line.component_id,
                component_name=line.component_name,
                component_type=line.component_type.value,
                calculation_method=line.calculation_method.value,
                value=line.value,
                amount=line.amount,
                is_taxable=line.is_taxable,
                position=position,
            )
            for position, line in enumerate(computation.lines)
        ]
    )
    return payroll


def payroll_exists(employee, month, year):
    return Payroll.objects.filter(employee=employee, month=month, year=year).exists()


def _conflict(employee, month, year):
    return PayrollConflictError(
        f"Payroll for {month:02d}/{year} already exists for this employee.",
        details={"employee": employee.pk, "month": month, "year": year},
    )


def generate_payroll(employee, month, year, created_by=""):
    """
    Generate and store one employee's payroll as a single transaction.

    Raises:
        ValidationAPIError: month or year out of range
        PayrollConflictError: a record already exists for the period
    """
    validate_period(month, year)
    employee_ref = public_emp_id(employee.pk)

    logger.info(
        "Payroll generation started",
        extra={
            "employee_ref": employee_ref,
            "period": f"{year}-{month:02d}",
            "action": "payroll_generate_start",
        },
    )

    if payroll_exists(employee, month, year):
        raise _conflict(employee, month, year)

    period_start, period_end = period_bounds(month, year)
    try:
        with transaction.atomic():
            attendance = load_attendance_summaries([employee.pk], period_start, period_end)[
                employee.pk
            ]
            leave = aggregate_employee_leave(employee.pk, period_start, period_end)
            computation = compute_payroll(
                employee_id=employee.pk,
                employee_code=employee.employee_code,
                basic_salary=employee.basic_salary,
                month=month,
                year=year,
                attendance=attendance,
                leave=leave,
                components=active_component_definitions(),
            )
            payroll = persist_computation(computation, created_by=created_by)
    except IntegrityError as exc:
        # Lost a race with a concurrent generate for the same period
        logger.warning(
            "Payroll insert hit the period unique constraint",
            extra={"employee_ref": employee_ref, "action": "payroll_generate_conflict"},
        )
        raise _conflict(employee, month, year) from exc

    logger.info(
        "Payroll generated",
        extra={
            "employee_ref": employee_ref,
            "payroll_id": payroll.pk,
            "period": f"{year}-{month:02d}",
            "component_count": len(computation.lines),
            "action": "payroll_generated",
        },
    )
    return payroll


def _locked(payroll_id):
    return get_object_or_404(Payroll.objects.select_for_update(), pk=payroll_id)


def _state_error(payroll, message):
    return PayrollStateError(
        message, details={"payroll_id": payroll.pk, "status": payroll.status}
    )


def approve_payroll(payroll_id, approver):
    """Draft or Pending -> Approved, stamping approver and time"""
    with transaction.atomic():
        payroll = _locked(payroll_id)
        if not payroll.payroll_status.can_approve:
            raise _state_error(payroll, "Only pending or draft payrolls can be approved.")

        payroll.status = PayrollStatus.APPROVED.value
        payroll.approved_by = approver
        payroll.approved_at = timezone.now()
        payroll.save(update_fields=["status", "approved_by", "approved_at", "updated_at"])

    logger.info(
        "Payroll approved",
        extra={"payroll_id": payroll.pk, "action": "payroll_approved"},
    )
    return payroll


def mark_paid(payroll_id, paid_by=""):
    """Approved -> Paid"""
    with transaction.atomic():
        payroll = _locked(payroll_id)
        if not payroll.payroll_status.can_mark_paid:
            raise _state_error(payroll, "Only approved payrolls can be marked as paid.")

        payroll.status = PayrollStatus.PAID.value
        payroll.paid_at = timezone.now()
        payroll.save(update_fields=["status", "paid_at", "updated_at"])

    logger.info(
        "Payroll marked as paid",
        extra={"payroll_id": payroll.pk, "paid_by": paid_by, "action": "payroll_paid"},
    )
    return payroll


def cancel_payroll(payroll_id, cancelled_by="", reason=""):
    with transaction.atomic():
        payroll = _locked(payroll_id)
        if not payroll.payroll_status.can_cancel:
            raise _state_error(payroll, "Paid or cancelled payrolls cannot be cancelled.")

        payroll.status = PayrollStatus.CANCELLED.value
        if reason:
            payroll.remarks = f"{payroll.remarks}\n{reason}".strip()
        payroll.save(update_fields=["status", "remarks", "updated_at"])

    logger.info(
        "Payroll cancelled",
        extra={
            "payroll_id": payroll.pk,
            "cancelled_by": cancelled_by,
            "action": "payroll_cancelled",
        },
    )
    return payroll


def delete_payroll(payroll_id):
    """
    Delete a record together with its details.

    Raises:
        PayrollStateError: the record is Approved or Paid
    """
    with transaction.atomic():
        payroll = _locked(payroll_id)
        if not payroll.payroll_status.can_delete:
            raise _state_error(payroll, "Approved or paid payrolls cannot be deleted.")
        payroll_number = payroll.payroll_number
        payroll.delete()

    logger.info(
        "Payroll deleted",
        extra={"payroll_number": payroll_number, "action": "payroll_deleted"},
    )
