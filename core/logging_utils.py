"""
Helpers that keep personal data out of log records.

Employees are referenced by a salted hash of their primary key, users by a
salted hash of their user id. Names and emails only appear masked.
"""

import hashlib
import re
from typing import Any, Dict, Optional, Union

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
SECRET_RE = re.compile(r"\b(?:Bearer\s+|Token\s+)?[A-Za-z0-9._-]{32,}\b")
ERR_TAG_MAX_LENGTH = 120


def mask_email(email: str) -> str:
    """john.doe@example.com -> j***@example.com"""
    if not email or "@" not in email:
        return "[invalid_email]"

    local, domain = email.split("@", 1)
    if len(local) <= 1:
        return f"*@{domain}"
    return f"{local[0]}***@{domain}"


def mask_name(full_name: str) -> str:
    """Initials of the first two name parts"""
    parts = (full_name or "").split()
    if not parts:
        return "[no_name]"
    return "".join(f"{part[0]}." for part in parts[:2])


def _digest(salt: str, value: Union[int, str], size: int) -> str:
    return hashlib.blake2b(f"{salt}:{value}".encode(), digest_size=size).hexdigest()


def hash_user_id(user_id: Optional[Union[int, str]], salt: str = "hrpayroll_user") -> str:
    if not user_id:
        return "[no_id]"
    return f"usr_{_digest(salt, user_id, 4)}"


def public_emp_id(employee_id: Optional[int], salt: str = "hrpayroll_emp") -> str:
    """
    Stable public reference for an employee in logs and error reports.

    The salt prevents mapping references back to primary keys by brute force.
    """
    if not employee_id:
        return "emp_anon"
    return f"emp_{_digest(salt, employee_id, 6)}"


def safe_log_employee(employee, action: str = "action") -> Dict[str, Any]:
    """
    ``extra`` payload describing an employee without raw PII.

    Args:
        employee: Employee instance or None
        action: Event name stored under ``action``

    Returns:
        Dict with action, employee_ref and role, plus masked email and
        initials when the employee has them
    """
    if employee is None:
        return {"action": action, "employee": "none"}

    data = {
        "action": action,
        "employee_ref": public_emp_id(employee.pk),
        "role": getattr(employee, "role", "unknown"),
    }

    email = getattr(employee, "email", None)
    if email:
        data["email_masked"] = mask_email(email)

    name = " ".join(
        part for part in (getattr(employee, "first_name", ""), getattr(employee, "last_name", "")) if part
    )
    if name:
        data["name_initials"] = mask_name(name)

    return data


def err_tag(exc: BaseException) -> str:
    """Exception text with emails and token-like strings masked, truncated"""
    text = str(getattr(exc, "message", None) or exc)
    text = EMAIL_RE.sub("***@***", text)
    text = SECRET_RE.sub("****", text)
    return text[:ERR_TAG_MAX_LENGTH] if text.strip() else exc.__class__.__name__
