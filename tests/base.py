# tests/base.py
import uuid
from datetime import date, time
from decimal import Decimal

from django.contrib.auth.models import User
from django.test import TestCase
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient, APITestCase

from users.models import Department, Employee
from worktime.models import Shift


class PayrollFixturesMixin:
    """Factories for the master data most tests need"""

    def make_department(self, **kwargs):
        suffix = str(uuid.uuid4())[:6]
        defaults = {"code": f"D{suffix}", "name": f"Department {suffix}"}
        defaults.update(kwargs)
        return Department.objects.create(**defaults)

    def make_shift(self, **kwargs):
        suffix = str(uuid.uuid4())[:6]
        defaults = {
            "code": f"S{suffix}",
            "name": "General",
            "start_time": time(9, 0),
            "end_time": time(17, 0),
            "break_duration_minutes": 60,
            "grace_period_minutes": 10,
            "half_day_hours": Decimal("4"),
            "full_day_hours": Decimal("8"),
        }
        defaults.update(kwargs)
        return Shift.objects.create(**defaults)

    def make_employee(self, user=None, role="employee", **kwargs):
        suffix = str(uuid.uuid4())[:8]
        defaults = {
            "user": user,
            "employee_code": f"E{suffix}",
            "first_name": "John",
            "last_name": "Doe",
            "email": f"employee_{suffix}@example.com",
            "basic_salary": Decimal("30000.00"),
            "joining_date": date(2024, 1, 1),
            "role": role,
        }
        defaults.update(kwargs)
        return Employee.objects.create(**defaults)

    def make_user(self, role, username=None):
        """User linked to an employee with the given role"""
        suffix = str(uuid.uuid4())[:8]
        user = User.objects.create_user(
            username=username or f"{role}_{suffix}",
            email=f"{role}_{suffix}@example.com",
            password="testpass123",
        )
        employee = self.make_employee(user=user, role=role, email=user.email)
        return user, employee


class BaseTestCase(PayrollFixturesMixin, TestCase):
    """Base test case with common setup"""

    def setUp(self):
        self.department = self.make_department()
        self.shift = self.make_shift()
        self.employee = self.make_employee(
            department=self.department, shift=self.shift
        )


class BaseAPITestCase(PayrollFixturesMixin, APITestCase):
    """Base API test case with one authenticated client per role"""

    def setUp(self):
        self.employee_user, self.employee = self.make_user("employee")
        self.hr_user, self.hr_employee = self.make_user("hr")
        self.accountant_user, self.accountant = self.make_user("accountant")
        self.admin_user, self.admin_employee = self.make_user("admin")

        # Default client acts as accountant
        self.client = self.get_authenticated_client(self.accountant_user)

    def get_authenticated_client(self, user):
        token, _ = Token.objects.get_or_create(user=user)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION="Token " + token.key)
        return client


class UnauthenticatedAPITestCase(PayrollFixturesMixin, APITestCase):
    """Base API test case without authentication for testing unauthorized access"""

    def setUp(self):
        self.client = APIClient()
