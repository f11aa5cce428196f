"""
Tests for the API error format produced by custom_exception_handler.
"""

from unittest.mock import patch

from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, PermissionDenied
from rest_framework.exceptions import ValidationError as DRFValidationError

from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.http import Http404
from django.test import RequestFactory, TestCase

from core.exceptions import (
    APIError,
    BulkTimeoutError,
    PayrollConflictError,
    PayrollStateError,
    custom_exception_handler,
    format_error_details,
    get_error_code,
    get_error_message,
)


class CustomExceptionHandlerTest(TestCase):
    """Tests for custom_exception_handler function"""

    def setUp(self):
        self.factory = RequestFactory()
        self.user = User.objects.create_user(username="testuser", password="test123")

    def create_context(self, path="/api/v1/payroll/payrolls/", method="POST"):
        request = self.factory.generic(method, path)
        request.user = self.user
        return {"request": request}

    @patch("core.exceptions.logger")
    def test_business_error_keeps_status_and_code(self, mock_logger):
        exc = PayrollConflictError("Payroll exists", details={"employee": 7})

        response = custom_exception_handler(exc, self.create_context())

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(response.data["error"])
        self.assertEqual(response.data["code"], "PAYROLL_ALREADY_EXISTS")
        self.assertEqual(response.data["message"], "Payroll exists")
        self.assertEqual(response.data["details"], {"employee": 7})
        self.assertEqual(len(response.data["error_id"]), 8)
        mock_logger.warning.assert_called_once()

    def test_business_error_subclasses(self):
        self.assertEqual(PayrollStateError("x").status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(BulkTimeoutError("x").status_code, status.HTTP_504_GATEWAY_TIMEOUT)
        self.assertEqual(APIError("x").code, "API_ERROR")

    @patch("core.exceptions.logger")
    def test_drf_validation_error(self, mock_logger):
        exc = DRFValidationError({"month": ["Ensure this value is less than or equal to 12."]})

        response = custom_exception_handler(exc, self.create_context())

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "VALIDATION_ERROR")
        self.assertIn("less than or equal to 12", response.data["message"])
        self.assertIn("month", response.data["details"])

    @patch("core.exceptions.logger")
    def test_permission_errors(self, mock_logger):
        response = custom_exception_handler(PermissionDenied(), self.create_context())
        self.assertEqual(response.data["code"], "PERMISSION_DENIED")

        response = custom_exception_handler(NotAuthenticated(), self.create_context())
        self.assertEqual(response.data["code"], "AUTHENTICATION_REQUIRED")

    @patch("core.exceptions.logger")
    def test_http404(self, mock_logger):
        response = custom_exception_handler(Http404(), self.create_context())

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "RESOURCE_NOT_FOUND")

    @patch("core.exceptions.logger")
    def test_django_validation_error(self, mock_logger):
        exc = ValidationError({"value": ["Percentage cannot exceed 100"]})

        response = custom_exception_handler(exc, self.create_context())

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["details"], {"value": ["Percentage cannot exceed 100"]})

    @patch("core.exceptions.logger")
    def test_unexpected_exception_is_hidden(self, mock_logger):
        response = custom_exception_handler(RuntimeError("db password leaked"), self.create_context())

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["code"], "INTERNAL_SERVER_ERROR")
        self.assertNotIn("password", response.data["message"])
        mock_logger.error.assert_called_once()


class ErrorHelpersTest(TestCase):
    def test_get_error_code_unknown(self):
        self.assertEqual(get_error_code(KeyError()), "UNKNOWN_ERROR")

    def test_get_error_message(self):
        self.assertEqual(get_error_message({"detail": "Not found."}), "Not found.")
        self.assertEqual(get_error_message({"non_field_errors": ["Bad"]}), "Bad")
        self.assertEqual(get_error_message({"name": ["Required"]}), "Required")
        self.assertEqual(get_error_message(["First", "Second"]), "First")

    def test_format_error_details(self):
        self.assertIsNone(format_error_details({"detail": "x"}))
        self.assertEqual(format_error_details({"name": ["Required"]}), {"name": ["Required"]})
        self.assertIsNone(format_error_details("text"))
