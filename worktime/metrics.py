"""
Attendance metrics calculator.

Derives lateness, worked hours, half-day and overtime from a check-in /
check-out pair and the employee's shift rules. The calculation is a pure
function of its inputs: it reads no database state and keeps no state
between calls, so recomputing an unchanged record always yields the same
result.

Policies:
    * Late cutoff is ``shift start + grace_period_minutes``.
      ``late_mark_after_minutes`` is stored on the shift for reference
      only and does not take part in the calculation.
    * Worked hours are ``check_out - check_in - break``. A checkout
      that is numerically before check-in is treated as the next day.
    * Overtime is measured against ``full_day_hours``. Set
      ``OVERTIME_BASELINE_SUBTRACTS_BREAK`` to measure against
      ``full_day_hours - break`` instead.
    * A short day turns into HalfDay only while the status is still
      Present. A late arrival with a short day stays Late.
"""

from dataclasses import dataclass
from datetime import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

OVERTIME_BASELINE_SUBTRACTS_BREAK = False

MINUTES_PER_DAY = 24 * 60
HOURS_QUANTUM = Decimal("0.01")

# Attendance status values shared with worktime.models.Attendance.Status
STATUS_PRESENT = "present"
STATUS_LATE = "late"
STATUS_HALF_DAY = "half_day"

# Statuses the calculator derives itself; recomputation starts from Present
DERIVED_STATUSES = frozenset({STATUS_LATE, STATUS_HALF_DAY})


@dataclass(frozen=True)
class ShiftRules:
    """Shift configuration needed by the calculator"""

    start_time: time
    end_time: time
    break_duration_minutes: int = 0
    grace_period_minutes: int = 0
    half_day_hours: Decimal = Decimal("4")
    full_day_hours: Decimal = Decimal("8")
    is_night_shift: bool = False

    @classmethod
    def from_shift(cls, shift) -> "ShiftRules":
        return cls(
            start_time=shift.start_time,
            end_time=shift.end_time,
            break_duration_minutes=shift.break_duration_minutes,
            grace_period_minutes=shift.grace_period_minutes,
            half_day_hours=Decimal(str(shift.half_day_hours)),
            full_day_hours=Decimal(str(shift.full_day_hours)),
            is_night_shift=shift.is_night_shift,
        )

    @property
    def expected_hours(self) -> Decimal:
        if OVERTIME_BASELINE_SUBTRACTS_BREAK:
            return self.full_day_hours - Decimal(self.break_duration_minutes) / 60
        return self.full_day_hours


@dataclass(frozen=True)
class AttendanceMetrics:
    status: str
    is_late: bool = False
    late_by_minutes: Optional[int] = None
    is_half_day: bool = False
    total_hours: Optional[Decimal] = None
    overtime_hours: Optional[Decimal] = None


def base_status(status: str) -> str:
    """Undo statuses derived by a previous calculation"""
    return STATUS_PRESENT if status in DERIVED_STATUSES else status


def _minutes_of_day(value: time) -> Decimal:
    return Decimal(value.hour * 3600 + value.minute * 60 + value.second) / 60


def minutes_late(check_in: time, rules: ShiftRules) -> Decimal:
    """
    Signed minutes between shift start and check-in.

    For night shifts a check-in after midnight belongs to the shift that
    started the previous evening, so a difference of more than half a day
    in the negative direction wraps forward by one day.
    """
    diff = _minutes_of_day(check_in) - _minutes_of_day(rules.start_time)
    if rules.is_night_shift and diff < -(MINUTES_PER_DAY // 2):
        diff += MINUTES_PER_DAY
    return diff


def worked_hours(check_in: time, check_out: time, break_minutes: int) -> Decimal:
    """Elapsed hours minus break, wrapping checkouts past midnight"""
    elapsed = _minutes_of_day(check_out) - _minutes_of_day(check_in)
    if elapsed < 0:
        elapsed += MINUTES_PER_DAY
    worked = max(elapsed - break_minutes, Decimal("0"))
    return (worked / 60).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def compute_attendance_metrics(
    check_in: Optional[time],
    check_out: Optional[time],
    rules: ShiftRules,
    status: str = STATUS_PRESENT,
) -> AttendanceMetrics:
    """
    Compute derived attendance fields from scratch.

    Args:
        check_in: Check-in time of day, None for records without a punch
        check_out: Check-out time of day, None while the employee is in
        rules: Shift rules of the employee
        status: Recorded status; Late and HalfDay are treated as Present

    Returns:
        AttendanceMetrics with the possibly upgraded status
    """
    status = base_status(status)
    if check_in is None:
        return AttendanceMetrics(status=status)

    is_late = False
    late_by = None
    late_minutes = minutes_late(check_in, rules)
    if late_minutes > rules.grace_period_minutes:
        is_late = True
        late_by = int(late_minutes)
        if status == STATUS_PRESENT:
            status = STATUS_LATE

    total_hours = None
    overtime = None
    is_half_day = False
    if check_out is not None:
        total_hours = worked_hours(check_in, check_out, rules.break_duration_minutes)

        # Only a record still Present after the late check becomes a half day
        if total_hours < rules.half_day_hours and status == STATUS_PRESENT:
            is_half_day = True
            status = STATUS_HALF_DAY

        expected = rules.expected_hours
        if total_hours > expected:
            overtime = (total_hours - expected).quantize(
                HOURS_QUANTUM, rounding=ROUND_HALF_UP
            )

    return AttendanceMetrics(
        status=status,
        is_late=is_late,
        late_by_minutes=late_by,
        is_half_day=is_half_day,
        total_hours=total_hours,
        overtime_hours=overtime,
    )

