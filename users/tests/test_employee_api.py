"""
API tests for employee master data and role permissions.
"""

from rest_framework import status

from django.contrib.auth.models import User

from tests.base import BaseAPITestCase
from users.models import Designation, Employee
from users.permissions import get_user_role

EMPLOYEES_URL = "/api/v1/users/employees/"
DEPARTMENTS_URL = "/api/v1/users/departments/"
DESIGNATIONS_URL = "/api/v1/users/designations/"


class EmployeeAPITest(BaseAPITestCase):
    def setUp(self):
        super().setUp()
        self.hr_client = self.get_authenticated_client(self.hr_user)
        self.department = self.make_department()

    def _payload(self, **overrides):
        payload = {
            "employee_code": "EMP900",
            "first_name": "Dana",
            "last_name": "Levi",
            "email": "dana.levi@example.com",
            "department": self.department.pk,
            "basic_salary": "32000.00",
            "joining_date": "2025-01-15",
        }
        payload.update(overrides)
        return payload

    def test_hr_creates_employee(self):
        response = self.hr_client.post(EMPLOYEES_URL, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["full_name"], "Dana Levi")
        self.assertEqual(response.data["status"], "active")

    def test_negative_salary_rejected(self):
        response = self.hr_client.post(
            EMPLOYEES_URL, self._payload(basic_salary="-1"), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_designation_from_other_department_rejected(self):
        designation = Designation.objects.create(
            code="QA", title="Tester", department=self.make_department()
        )
        response = self.hr_client.post(
            EMPLOYEES_URL, self._payload(designation=designation.pk), format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("designation", response.data["details"])

    def test_employee_role_is_read_only(self):
        client = self.get_authenticated_client(self.employee_user)

        self.assertEqual(client.get(EMPLOYEES_URL).status_code, status.HTTP_200_OK)
        response = client.post(EMPLOYEES_URL, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_deactivates(self):
        target = self.make_employee(department=self.department)

        response = self.hr_client.delete(f"{EMPLOYEES_URL}{target.pk}/")

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        target.refresh_from_db()
        self.assertEqual(target.status, Employee.Status.INACTIVE)

    def test_filter_by_role(self):
        response = self.hr_client.get(EMPLOYEES_URL, {"role": "accountant"})
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["id"], self.accountant.pk)


class DepartmentAPITest(BaseAPITestCase):
    def setUp(self):
        super().setUp()
        self.hr_client = self.get_authenticated_client(self.hr_user)

    def test_department_in_use_cannot_be_deleted(self):
        department = self.make_department()
        self.make_employee(department=department)

        response = self.hr_client.delete(f"{DEPARTMENTS_URL}{department.pk}/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "DEPARTMENT_IN_USE")

    def test_employee_count_in_listing(self):
        department = self.make_department(name="AAA Finance")
        self.make_employee(department=department)

        response = self.hr_client.get(f"{DEPARTMENTS_URL}{department.pk}/")

        self.assertEqual(response.data["employee_count"], 1)

    def test_designation_in_use_cannot_be_deleted(self):
        department = self.make_department()
        designation = Designation.objects.create(
            code="MGR", title="Manager", department=department
        )
        self.make_employee(department=department, designation=designation)

        response = self.hr_client.delete(f"{DESIGNATIONS_URL}{designation.pk}/")

        self.assertEqual(response.data["code"], "DESIGNATION_IN_USE")


class RoleResolutionTest(BaseAPITestCase):
    def test_roles(self):
        self.assertEqual(get_user_role(self.accountant_user), "accountant")
        self.assertEqual(get_user_role(self.employee_user), "employee")

    def test_superuser_is_admin(self):
        root = User.objects.create_superuser("root", "root@example.com", "pw")
        self.assertEqual(get_user_role(root), "admin")
