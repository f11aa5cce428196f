"""
Tests for the attendance metrics calculator.
Pure function tests, no database access.
"""

from datetime import time
from decimal import Decimal

from django.test import SimpleTestCase

from worktime.metrics import (
    STATUS_HALF_DAY,
    STATUS_LATE,
    STATUS_PRESENT,
    ShiftRules,
    compute_attendance_metrics,
    minutes_late,
    worked_hours,
)

DAY_SHIFT = ShiftRules(
    start_time=time(9, 0),
    end_time=time(17, 0),
    break_duration_minutes=60,
    grace_period_minutes=10,
    half_day_hours=Decimal("4"),
    full_day_hours=Decimal("8"),
)

NIGHT_SHIFT = ShiftRules(
    start_time=time(22, 0),
    end_time=time(6, 0),
    break_duration_minutes=30,
    grace_period_minutes=10,
    half_day_hours=Decimal("4"),
    full_day_hours=Decimal("8"),
    is_night_shift=True,
)


class LatenessTest(SimpleTestCase):
    def test_check_in_within_grace_period_is_on_time(self):
        metrics = compute_attendance_metrics(time(9, 5), None, DAY_SHIFT)
        self.assertFalse(metrics.is_late)
        self.assertIsNone(metrics.late_by_minutes)
        self.assertEqual(metrics.status, STATUS_PRESENT)

    def test_check_in_after_grace_period_is_late(self):
        metrics = compute_attendance_metrics(time(9, 20), None, DAY_SHIFT)
        self.assertTrue(metrics.is_late)
        self.assertEqual(metrics.late_by_minutes, 20)
        self.assertEqual(metrics.status, STATUS_LATE)

    def test_check_in_exactly_at_cutoff_is_on_time(self):
        metrics = compute_attendance_metrics(time(9, 10), None, DAY_SHIFT)
        self.assertFalse(metrics.is_late)

    def test_lateness_does_not_upgrade_non_present_status(self):
        metrics = compute_attendance_metrics(time(9, 30), None, DAY_SHIFT, status="holiday")
        self.assertTrue(metrics.is_late)
        self.assertEqual(metrics.status, "holiday")

    def test_night_shift_check_in_after_midnight_is_late(self):
        self.assertEqual(minutes_late(time(0, 30), NIGHT_SHIFT), Decimal("150"))
        metrics = compute_attendance_metrics(time(0, 30), None, NIGHT_SHIFT)
        self.assertTrue(metrics.is_late)
        self.assertEqual(metrics.late_by_minutes, 150)

    def test_night_shift_early_check_in_is_on_time(self):
        metrics = compute_attendance_metrics(time(21, 50), None, NIGHT_SHIFT)
        self.assertFalse(metrics.is_late)


class WorkedHoursTest(SimpleTestCase):
    def test_total_hours_is_null_without_checkout(self):
        metrics = compute_attendance_metrics(time(9, 0), None, DAY_SHIFT)
        self.assertIsNone(metrics.total_hours)
        self.assertIsNone(metrics.overtime_hours)

    def test_day_shift_subtracts_break(self):
        metrics = compute_attendance_metrics(time(9, 0), time(17, 0), DAY_SHIFT)
        self.assertEqual(metrics.total_hours, Decimal("7.00"))
        self.assertIsNone(metrics.overtime_hours)
        self.assertEqual(metrics.status, STATUS_PRESENT)

    def test_fractional_minutes(self):
        self.assertEqual(worked_hours(time(9, 0), time(17, 45), 60), Decimal("7.75"))

    def test_night_shift_wraps_past_midnight(self):
        metrics = compute_attendance_metrics(time(22, 0), time(6, 0), NIGHT_SHIFT)
        # 8h elapsed minus 30 min break
        self.assertEqual(metrics.total_hours, Decimal("7.50"))

    def test_checkout_before_check_in_on_day_shift_also_wraps(self):
        self.assertEqual(worked_hours(time(20, 0), time(2, 0), 0), Decimal("6.00"))

    def test_break_longer_than_shift_clamps_at_zero(self):
        self.assertEqual(worked_hours(time(9, 0), time(9, 30), 60), Decimal("0.00"))


class HalfDayTest(SimpleTestCase):
    def test_short_day_becomes_half_day(self):
        metrics = compute_attendance_metrics(time(9, 0), time(13, 0), DAY_SHIFT)
        self.assertEqual(metrics.total_hours, Decimal("3.00"))
        self.assertTrue(metrics.is_half_day)
        self.assertEqual(metrics.status, STATUS_HALF_DAY)

    def test_late_short_day_stays_late(self):
        metrics = compute_attendance_metrics(time(9, 30), time(12, 0), DAY_SHIFT)
        self.assertTrue(metrics.is_late)
        self.assertEqual(metrics.total_hours, Decimal("1.50"))
        self.assertFalse(metrics.is_half_day)
        self.assertEqual(metrics.status, STATUS_LATE)

    def test_on_leave_record_is_not_marked_half_day(self):
        metrics = compute_attendance_metrics(
            time(9, 0), time(11, 0), DAY_SHIFT, status="on_leave"
        )
        self.assertFalse(metrics.is_half_day)
        self.assertEqual(metrics.status, "on_leave")


class OvertimeTest(SimpleTestCase):
    def test_hours_above_full_day_are_overtime(self):
        metrics = compute_attendance_metrics(time(8, 0), time(19, 0), DAY_SHIFT)
        self.assertEqual(metrics.total_hours, Decimal("10.00"))
        self.assertEqual(metrics.overtime_hours, Decimal("2.00"))

    def test_exactly_full_day_has_no_overtime(self):
        metrics = compute_attendance_metrics(time(9, 0), time(18, 0), DAY_SHIFT)
        self.assertEqual(metrics.total_hours, Decimal("8.00"))
        self.assertIsNone(metrics.overtime_hours)


class RecomputeTest(SimpleTestCase):
    def test_computation_is_idempotent(self):
        first = compute_attendance_metrics(time(9, 20), time(13, 0), DAY_SHIFT)
        second = compute_attendance_metrics(
            time(9, 20), time(13, 0), DAY_SHIFT, status=first.status
        )
        self.assertEqual(first, second)

    def test_derived_status_is_reset_when_punches_change(self):
        late = compute_attendance_metrics(time(9, 30), time(18, 0), DAY_SHIFT)
        self.assertEqual(late.status, STATUS_LATE)

        corrected = compute_attendance_metrics(
            time(9, 0), time(18, 0), DAY_SHIFT, status=late.status
        )
        self.assertEqual(corrected.status, STATUS_PRESENT)
        self.assertFalse(corrected.is_late)
