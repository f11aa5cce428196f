from django.core.exceptions import ValidationError

from tests.base import BaseTestCase
from users.models import Department, Designation, Employee


class DepartmentModelTest(BaseTestCase):
    def test_employee_count_counts_active_employees(self):
        self.make_employee(department=self.department)
        self.make_employee(department=self.department, status=Employee.Status.RESIGNED)

        department = Department.objects.with_employee_count().get(pk=self.department.pk)

        # self.employee plus one more active employee
        self.assertEqual(department.employee_count, 2)


class DesignationModelTest(BaseTestCase):
    def test_salary_band_must_be_ordered(self):
        designation = Designation(
            code="DEV",
            title="Developer",
            department=self.department,
            minimum_salary=50000,
            maximum_salary=40000,
        )
        with self.assertRaises(ValidationError) as ctx:
            designation.full_clean()
        self.assertIn("maximum_salary", ctx.exception.message_dict)


class EmployeeModelTest(BaseTestCase):
    def test_phone_must_be_international(self):
        self.employee.phone = "0501234567"
        with self.assertRaises(ValidationError) as ctx:
            self.employee.full_clean()
        self.assertIn("phone", ctx.exception.message_dict)

        self.employee.phone = "+972 50-123-4567"
        self.employee.full_clean()

    def test_designation_must_match_department(self):
        other = self.make_department()
        designation = Designation.objects.create(
            code="ACC", title="Accountant", department=other
        )
        self.employee.designation = designation

        with self.assertRaises(ValidationError) as ctx:
            self.employee.full_clean()
        self.assertIn("designation", ctx.exception.message_dict)

    def test_active_manager(self):
        self.make_employee(status=Employee.Status.INACTIVE)
        self.assertEqual(list(Employee.objects.active()), [self.employee])
        self.assertTrue(self.employee.is_active)
        self.assertEqual(self.employee.get_full_name(), "John Doe")
