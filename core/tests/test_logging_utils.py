import logging
from types import SimpleNamespace

from django.test import SimpleTestCase

from core.logging_utils import (
    err_tag,
    hash_user_id,
    mask_email,
    mask_name,
    public_emp_id,
    safe_log_employee,
)
from hrpayroll.logging_filters import PIIRedactorFilter


class LoggingUtilsTest(SimpleTestCase):
    def test_mask_email(self):
        self.assertEqual(mask_email("john.doe@example.com"), "j***@example.com")
        self.assertEqual(mask_email("not-an-email"), "[invalid_email]")

    def test_mask_name(self):
        self.assertEqual(mask_name("John Doe"), "J.D.")
        self.assertEqual(mask_name(""), "[no_name]")

    def test_hashes_are_stable_and_opaque(self):
        self.assertEqual(hash_user_id(5), hash_user_id(5))
        self.assertNotEqual(hash_user_id(5), hash_user_id(6))
        self.assertTrue(public_emp_id(12).startswith("emp_"))
        self.assertEqual(public_emp_id(None), "emp_anon")

    def test_safe_log_employee_has_no_raw_pii(self):
        employee = SimpleNamespace(
            pk=3, role="accountant", email="mary.smith@example.com",
            first_name="Mary", last_name="Smith",
        )
        data = safe_log_employee(employee, "employee_updated")

        self.assertEqual(data["action"], "employee_updated")
        self.assertEqual(data["email_masked"], "m***@example.com")
        self.assertEqual(data["name_initials"], "M.S.")
        self.assertNotIn("mary.smith@example.com", str(data))

    def test_err_tag_strips_emails(self):
        tag = err_tag(ValueError("duplicate user a.b@example.com"))
        self.assertNotIn("a.b@example.com", tag)


class PIIRedactorFilterTest(SimpleTestCase):
    def _record(self, msg, args):
        return logging.LogRecord("test.pii", logging.INFO, __file__, 1, msg, args, None)

    def test_email_and_token_are_redacted(self):
        record = self._record(
            "email=%s auth=%s",
            ("john.doe@example.com", "Token abcdefghijklmnopqrstuvwxyz123456"),
        )

        self.assertTrue(PIIRedactorFilter().filter(record))

        value = record.getMessage()
        self.assertIn("***@example.com", value)
        self.assertNotIn("john.doe", value)
        self.assertNotIn("abcdefghijklmnopqrstuvwxyz123456", value)

    def test_salary_keys_are_redacted(self):
        record = self._record("payload %(net_salary)s %(month)s", ({"net_salary": "41000.00", "month": 6},))

        PIIRedactorFilter().filter(record)

        self.assertEqual(record.getMessage(), "payload **** 6")
