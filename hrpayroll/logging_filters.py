# hrpayroll/logging_filters.py
import logging
import re
from typing import Any, Mapping

REDACTION = "****"

# Keys whose values never reach a log line, whatever their content
SENSITIVE_KEYS = frozenset({
    "password", "token", "authorization",
    "email", "phone", "address", "postal_code",
    "basic_salary", "gross_salary", "net_salary",
    "total_allowances", "total_deductions", "leave_deduction_amount",
})

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})")
AUTH_PATTERN = re.compile(r"(?:Token|Bearer)\s+[A-Za-z0-9\-_.]{20,}")


class PIIRedactorFilter(logging.Filter):
    """
    Mask emails and auth headers in messages and arguments, and drop the
    values of salary and contact keys from mapping arguments.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.scrub_text(record.msg)

        if isinstance(record.args, Mapping):
            record.args = self.scrub(record.args)
        elif isinstance(record.args, tuple) and record.args:
            record.args = tuple(self.scrub(arg) for arg in record.args)
        return True

    @staticmethod
    def scrub_text(text: str) -> str:
        text = EMAIL_PATTERN.sub(r"***@\1", text)
        return AUTH_PATTERN.sub(REDACTION, text)

    def scrub(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {
                key: REDACTION if str(key).lower() in SENSITIVE_KEYS else self.scrub(item)
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple, set)):
            return type(value)(self.scrub(item) for item in value)
        if value is None or isinstance(value, (bool, int, float)):
            return value
        return self.scrub_text(str(value))
