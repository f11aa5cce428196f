"""
API tests for payroll components and payroll records.
"""

from decimal import Decimal

from rest_framework import status

from payroll.models import AllowanceDeduction, Payroll
from payroll.services.enums import CalculationMethod, ComponentType
from payroll.services.payroll_service import approve_payroll, generate_payroll
from tests.base import BaseAPITestCase, UnauthenticatedAPITestCase

from .helpers import make_component

COMPONENTS_URL = "/api/v1/payroll/components/"
PAYROLLS_URL = "/api/v1/payroll/payrolls/"


class ComponentAPITest(BaseAPITestCase):
    def _payload(self, **overrides):
        payload = {
            "name": "Housing",
            "component_type": "allowance",
            "calculation_method": "fixed_amount",
            "value": "1500.00",
        }
        payload.update(overrides)
        return payload

    def test_create_assigns_code(self):
        response = self.client.post(COMPONENTS_URL, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["code"], "COMP001")
        self.assertTrue(AllowanceDeduction.objects.filter(code="COMP001").exists())

    def test_percentage_over_hundred_rejected(self):
        response = self.client.post(
            COMPONENTS_URL,
            self._payload(calculation_method="percentage_of_basic", value="120"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "VALIDATION_ERROR")

    def test_employee_can_read_but_not_write(self):
        client = self.get_authenticated_client(self.employee_user)
        make_component("Transport", value="300")

        self.assertEqual(client.get(COMPONENTS_URL).status_code, status.HTTP_200_OK)
        response = client.post(COMPONENTS_URL, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_mandatory_component_cannot_be_deleted(self):
        component = make_component("Provident fund", value="100", is_mandatory=True)

        response = self.client.delete(f"{COMPONENTS_URL}{component.pk}/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "COMPONENT_MANDATORY")
        self.assertTrue(AllowanceDeduction.objects.filter(pk=component.pk).exists())

    def test_toggle_status(self):
        component = make_component("Meal", value="200")
        url = f"{COMPONENTS_URL}{component.pk}/toggle_status/"

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "inactive")

        response = self.client.post(url)
        self.assertEqual(response.data["status"], "active")

    def test_cost_analysis(self):
        make_component("Housing", value="1000")

        response = self.client.get(f"{COMPONENTS_URL}cost_analysis/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data["summary"]
        self.assertEqual(summary["employee_count"], 4)
        self.assertEqual(Decimal(summary["total_monthly_allowances"]), Decimal("4000"))
        self.assertEqual(len(response.data["components"]), 1)

    def test_analytics(self):
        make_component("Housing", value="1000")
        make_component(
            "Tax",
            component_type=ComponentType.DEDUCTION,
            method=CalculationMethod.PERCENTAGE_OF_BASIC,
            value="5",
        )

        response = self.client.get(f"{COMPONENTS_URL}analytics/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 2)
        self.assertEqual(response.data["allowances"], 1)
        self.assertEqual(response.data["deductions"], 1)

    def test_calculate_preview(self):
        make_component("Housing", value="1000")
        make_component(
            "Tax",
            component_type=ComponentType.DEDUCTION,
            method=CalculationMethod.PERCENTAGE_OF_BASIC,
            value="10",
        )

        response = self.client.post(
            f"{COMPONENTS_URL}calculate_preview/",
            {"basic_salary": "20000"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["gross_salary"]), Decimal("21000"))
        self.assertEqual(Decimal(response.data["net_salary"]), Decimal("19000"))
        self.assertEqual(len(response.data["lines"]), 2)

    def test_calculate_preview_single_definition(self):
        response = self.client.post(
            f"{COMPONENTS_URL}calculate_preview/",
            {
                "basic_salary": "20000",
                "calculation_method": "percentage_of_basic",
                "value": "12.5",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Decimal(response.data["calculated_amount"]), Decimal("2500"))

    def test_calculate_preview_requires_value_with_method(self):
        response = self.client.post(
            f"{COMPONENTS_URL}calculate_preview/",
            {"basic_salary": "20000", "calculation_method": "fixed_amount"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class PayrollAPITest(BaseAPITestCase):
    def setUp(self):
        super().setUp()
        make_component("Housing", value="1000")
        self.target = self.make_employee(basic_salary=Decimal("40000"))

    def _generate(self, client=None, employee=None):
        client = client or self.client
        return client.post(
            f"{PAYROLLS_URL}generate/",
            {"employee": (employee or self.target).pk, "month": 6, "year": 2025},
            format="json",
        )

    def test_generate_creates_payroll(self):
        response = self._generate()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(Decimal(response.data["gross_salary"]), Decimal("41000"))
        self.assertEqual(Decimal(response.data["net_salary"]), Decimal("41000"))
        self.assertEqual(len(response.data["details"]), 1)
        self.assertEqual(response.data["created_by"], self.accountant_user.username)

    def test_generate_twice_conflicts(self):
        self._generate()
        response = self._generate()

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "PAYROLL_ALREADY_EXISTS")
        self.assertEqual(Payroll.objects.filter(employee=self.target).count(), 1)

    def test_generate_rejects_invalid_month(self):
        response = self.client.post(
            f"{PAYROLLS_URL}generate/",
            {"employee": self.target.pk, "month": 13, "year": 2025},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Payroll.objects.exists())

    def test_generate_requires_accountant(self):
        for user in (self.employee_user, self.hr_user):
            response = self._generate(client=self.get_authenticated_client(user))
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Payroll.objects.exists())

    def test_admin_can_generate(self):
        response = self._generate(client=self.get_authenticated_client(self.admin_user))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_generate_bulk(self):
        generate_payroll(self.target, 6, 2025)

        response = self.client.post(
            f"{PAYROLLS_URL}generate_bulk/", {"month": 6, "year": 2025}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        # Four role users plus the target, one of which already has a record
        self.assertEqual(response.data["success_count"], 4)
        self.assertEqual(response.data["skipped_count"], 1)
        self.assertEqual(response.data["failures"], [])
        self.assertEqual(Payroll.objects.filter(month=6, year=2025).count(), 5)

    def test_generate_bulk_for_selected_employees(self):
        response = self.client.post(
            f"{PAYROLLS_URL}generate_bulk/",
            {"month": 6, "year": 2025, "employee_ids": [self.target.pk]},
            format="json",
        )

        self.assertEqual(response.data["success_count"], 1)
        self.assertEqual(Payroll.objects.get().employee, self.target)

    def test_status_actions(self):
        payroll = generate_payroll(self.target, 6, 2025)
        detail_url = f"{PAYROLLS_URL}{payroll.pk}/"

        response = self.client.post(f"{detail_url}mark_paid/")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "INVALID_PAYROLL_STATE")

        response = self.client.post(f"{detail_url}approve/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "approved")
        self.assertEqual(response.data["approved_by"], self.accountant_user.username)

        response = self.client.post(f"{detail_url}mark_paid/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "paid")

        response = self.client.post(f"{detail_url}cancel/", {"reason": "late"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_cancel_and_delete(self):
        payroll = generate_payroll(self.target, 6, 2025)
        detail_url = f"{PAYROLLS_URL}{payroll.pk}/"

        response = self.client.post(
            f"{detail_url}cancel/", {"reason": "Wrong month"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "cancelled")

        response = self.client.delete(detail_url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Payroll.objects.filter(pk=payroll.pk).exists())

    def test_approved_payroll_cannot_be_deleted(self):
        payroll = generate_payroll(self.target, 6, 2025)
        approve_payroll(payroll.pk, "boss")

        response = self.client.delete(f"{PAYROLLS_URL}{payroll.pk}/")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Payroll.objects.filter(pk=payroll.pk).exists())

    def test_employee_sees_only_own_payslips(self):
        own = generate_payroll(self.employee, 6, 2025)
        other = generate_payroll(self.target, 6, 2025)
        client = self.get_authenticated_client(self.employee_user)

        response = client.get(PAYROLLS_URL)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [row["id"] for row in response.data["results"]]
        self.assertEqual(ids, [own.pk])

        response = client.get(f"{PAYROLLS_URL}{other.pk}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "RESOURCE_NOT_FOUND")

    def test_approve_unknown_payroll_returns_not_found_code(self):
        response = self.client.post(f"{PAYROLLS_URL}999999/approve/")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "RESOURCE_NOT_FOUND")

    def test_filter_by_period(self):
        generate_payroll(self.target, 5, 2025)
        generate_payroll(self.target, 6, 2025)

        response = self.client.get(PAYROLLS_URL, {"month": 5, "year": 2025})

        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["month"], 5)


class PayrollUnauthenticatedTest(UnauthenticatedAPITestCase):
    def test_requires_authentication(self):
        response = self.client.get(PAYROLLS_URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
