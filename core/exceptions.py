# core/exceptions.py
import logging
import uuid

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from django.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

DRF_ERROR_CODES = {
    "ValidationError": "VALIDATION_ERROR",
    "PermissionDenied": "PERMISSION_DENIED",
    "NotAuthenticated": "AUTHENTICATION_REQUIRED",
    "AuthenticationFailed": "AUTHENTICATION_FAILED",
    "NotFound": "RESOURCE_NOT_FOUND",
    "Http404": "RESOURCE_NOT_FOUND",
    "MethodNotAllowed": "METHOD_NOT_ALLOWED",
    "ParseError": "PARSE_ERROR",
    "UnsupportedMediaType": "UNSUPPORTED_MEDIA_TYPE",
    "Throttled": "RATE_LIMIT_EXCEEDED",
}


class APIError(Exception):
    """
    Custom API exception class for business logic errors
    """

    def __init__(
        self, message, code=None, status_code=status.HTTP_400_BAD_REQUEST, details=None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "API_ERROR"
        self.status_code = status_code
        self.details = details


class ValidationAPIError(APIError):
    """Request data that passed parsing but breaks a business rule"""

    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class PayrollConflictError(APIError):
    """
    A payroll record already exists for the employee and period
    """

    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "PAYROLL_ALREADY_EXISTS",
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class PayrollStateError(APIError):
    """
    Payroll status does not allow the requested transition
    """

    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "INVALID_PAYROLL_STATE",
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class LeaveStateError(APIError):
    """
    Leave application has already been processed
    """

    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "INVALID_LEAVE_STATE",
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class InsufficientLeaveBalanceError(APIError):
    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "INSUFFICIENT_LEAVE_BALANCE",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class BulkTimeoutError(APIError):
    """
    Bulk payroll computation did not finish within the configured timeout
    """

    def __init__(self, message, code=None, details=None):
        super().__init__(
            message=message,
            code=code or "BULK_TIMEOUT",
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            details=details,
        )


def error_response(code, message, details=None, status_code=status.HTTP_400_BAD_REQUEST, error_id=None):
    """
    Response in the API error format. The timestamp is filled in by
    APIResponseMiddleware.
    """
    return Response(
        {
            "error": True,
            "code": code,
            "message": message,
            "details": details,
            "error_id": error_id or new_error_id(),
            "timestamp": None,
        },
        status=status_code,
    )


def new_error_id():
    return uuid.uuid4().hex[:8]


def _request_info(context):
    request = context.get("request")
    return (
        getattr(request, "method", "unknown"),
        getattr(request, "path", "unknown"),
        getattr(request, "user", None),
    )


def custom_exception_handler(exc, context):
    """
    DRF exception handler rendering every error in one format:
    ``{error, code, message, details, error_id, timestamp}``
    """
    error_id = new_error_id()
    method, path, user = _request_info(context)

    # Business errors raised by services carry their own status and code
    if isinstance(exc, APIError):
        logger.warning(
            f"Business rule violation [{error_id}]: {exc.code}",
            extra={
                "error_id": error_id,
                "code": exc.code,
                "path": path,
                "method": method,
                "action": "api_business_error",
            },
        )
        return error_response(exc.code, exc.message, exc.details, exc.status_code, error_id)

    response = exception_handler(exc, context)
    if response is not None:
        logger.error(
            f"API Error [{error_id}]: {exc.__class__.__name__} - "
            f"{method} {path} - User: {user} - Status: {response.status_code}"
        )
        # Keep DRF headers such as WWW-Authenticate and Retry-After
        response.data = error_response(
            get_error_code(exc),
            get_error_message(response.data),
            format_error_details(response.data),
            response.status_code,
            error_id,
        ).data
        return response

    if isinstance(exc, ValidationError):
        details = exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        return error_response("VALIDATION_ERROR", "Validation failed.", details, error_id=error_id)

    logger.error(
        f"Unhandled Exception [{error_id}]: {exc.__class__.__name__} - "
        f"{method} {path} - User: {user}",
        exc_info=True,
    )
    return error_response(
        "INTERNAL_SERVER_ERROR",
        "An internal server error occurred.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_id=error_id,
    )


def get_error_code(exc):
    return DRF_ERROR_CODES.get(exc.__class__.__name__, "UNKNOWN_ERROR")


def get_error_message(data):
    """First human-readable message in DRF error data"""
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        for value in data.values():
            if isinstance(value, list) and value:
                return str(value[0])
            if isinstance(value, str):
                return value
        return "Validation error"
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def format_error_details(data):
    """Field errors without the top-level 'detail' message"""
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if k != "detail"} or None
    if isinstance(data, list):
        return data
    return None
