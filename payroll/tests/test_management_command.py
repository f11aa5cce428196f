from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError

from payroll.models import Payroll
from payroll.services.payroll_service import generate_payroll
from tests.base import BaseTestCase

from .helpers import make_component


class GeneratePayrollCommandTest(BaseTestCase):
    def setUp(self):
        super().setUp()
        make_component("Housing", value="500")
        self.second = self.make_employee(basic_salary=Decimal("45000"))

    def _call(self, *args):
        out = StringIO()
        call_command("generate_payroll", "--year", "2025", "--month", "6", *args, stdout=out)
        return out.getvalue()

    def test_generates_for_all_active_employees(self):
        output = self._call("--username", "cron")

        self.assertIn("Generated: 2", output)
        self.assertIn("Skipped (already exist): 0", output)
        self.assertEqual(Payroll.objects.count(), 2)
        self.assertEqual(set(Payroll.objects.values_list("created_by", flat=True)), {"cron"})

    def test_skips_existing_records(self):
        generate_payroll(self.employee, 6, 2025)

        output = self._call()

        self.assertIn("Generated: 1", output)
        self.assertIn("Skipped (already exist): 1", output)
        self.assertEqual(Payroll.objects.count(), 2)

    def test_dry_run_saves_nothing(self):
        output = self._call("--dry-run")

        self.assertIn("DRY RUN MODE", output)
        self.assertIn(self.second.employee_code, output)
        self.assertIn("net 45500", output)
        self.assertFalse(Payroll.objects.exists())

    def test_employee_selection(self):
        output = self._call("--employees", str(self.second.pk))

        self.assertIn("Generated: 1", output)
        self.assertEqual(Payroll.objects.get().employee, self.second)

    def test_invalid_month_raises_command_error(self):
        with self.assertRaises(CommandError):
            call_command("generate_payroll", "--year", "2025", "--month", "13", stdout=StringIO())

    def test_invalid_employee_list(self):
        with self.assertRaises(CommandError):
            self._call("--employees", "1,abc")
