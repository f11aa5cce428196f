"""
Tests for bulk payroll generation.
"""

import threading
from datetime import date
from decimal import Decimal
from unittest.mock import patch

from core.exceptions import BulkTimeoutError
from payroll.models import Payroll
from payroll.services.bulk import BulkPayrollService, generate_bulk_payroll
from payroll.services.bulk.parallel_executor import ParallelExecutor
from payroll.services.payroll_service import compute_payroll, generate_payroll
from tests.base import BaseTestCase
from users.models import Employee

from ..helpers import make_component


class BulkPayrollServiceTest(BaseTestCase):
    def setUp(self):
        super().setUp()
        self.second = self.make_employee(basic_salary=Decimal("45000"))
        self.third = self.make_employee(basic_salary=Decimal("20000"))
        self.inactive = self.make_employee(status=Employee.Status.INACTIVE)
        make_component("Housing", value="2000")

    def test_generates_for_all_active_employees(self):
        result = generate_bulk_payroll(6, 2025, created_by="payroll-bot")

        self.assertEqual(result, {"success_count": 3, "skipped_count": 0, "failures": []})
        self.assertFalse(Payroll.objects.filter(employee=self.inactive).exists())
        payroll = Payroll.objects.get(employee=self.second)
        self.assertEqual(payroll.gross_salary, Decimal("47000.00"))
        self.assertEqual(payroll.created_by, "payroll-bot")
        self.assertEqual(payroll.details.count(), 1)

    def test_employees_with_existing_payroll_are_skipped(self):
        generate_payroll(self.employee, 6, 2025)

        result = generate_bulk_payroll(6, 2025)

        self.assertEqual(result["success_count"], 2)
        self.assertEqual(result["skipped_count"], 1)
        self.assertEqual(Payroll.objects.filter(month=6, year=2025).count(), 3)

    def test_one_failure_does_not_abort_the_batch(self):
        failing_id = self.second.pk

        def flaky_compute(**kwargs):
            if kwargs["employee_id"] == failing_id:
                raise ValueError("corrupt salary data")
            return compute_payroll(**kwargs)

        with patch(
            "payroll.services.bulk.bulk_service.compute_payroll", side_effect=flaky_compute
        ):
            result = generate_bulk_payroll(6, 2025)

        self.assertEqual(result["success_count"], 2)
        self.assertEqual(
            result["failures"], [{"employee_id": failing_id, "error": "corrupt salary data"}]
        )
        self.assertFalse(Payroll.objects.filter(employee=self.second).exists())
        self.assertTrue(Payroll.objects.filter(employee=self.third).exists())

    def test_persistence_failure_is_reported_per_employee(self):
        from payroll.services.bulk import persister

        original = persister.persist_computation

        def flaky_persist(computation, **kwargs):
            if computation.employee_id == self.third.pk:
                raise RuntimeError("write failed")
            return original(computation, **kwargs)

        with patch.object(persister, "persist_computation", side_effect=flaky_persist):
            result = generate_bulk_payroll(6, 2025)

        self.assertEqual(result["success_count"], 2)
        self.assertEqual(result["failures"][0]["employee_id"], self.third.pk)
        self.assertFalse(Payroll.objects.filter(employee=self.third).exists())

    def test_restricting_to_employee_ids(self):
        result = generate_bulk_payroll(6, 2025, employee_ids=[self.third.pk])
        self.assertEqual(result["success_count"], 1)
        self.assertEqual(Payroll.objects.get().employee, self.third)

    def test_dry_run_persists_nothing(self):
        report = BulkPayrollService().run(6, 2025, dry_run=True)

        self.assertEqual(report.success_count, 3)
        self.assertEqual(
            report.computations[self.employee.pk].payment_date, date(2025, 6, 30)
        )
        self.assertFalse(Payroll.objects.exists())


class ParallelExecutorTest(BaseTestCase):
    def test_results_are_keyed_by_employee(self):
        executor = ParallelExecutor(max_workers=2, timeout=5)
        results = executor.map(lambda employee_id: employee_id * 10, [1, 2, 3])
        self.assertEqual(results, {1: 10, 2: 20, 3: 30})

    def test_exceptions_are_returned_not_raised(self):
        def compute(employee_id):
            if employee_id == 2:
                raise KeyError("missing")
            return employee_id

        results = ParallelExecutor(max_workers=2, timeout=5).map(compute, [1, 2])
        self.assertEqual(results[1], 1)
        self.assertIsInstance(results[2], KeyError)

    def test_unfinished_work_times_out(self):
        release = threading.Event()

        def compute(employee_id):
            if employee_id == 2:
                release.wait(5)
            return employee_id

        try:
            results = ParallelExecutor(max_workers=2, timeout=0.2).map(compute, [1, 2])
        finally:
            release.set()

        self.assertEqual(results[1], 1)
        self.assertIsInstance(results[2], BulkTimeoutError)
