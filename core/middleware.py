# core/middleware.py
import logging
import time

from django.utils import timezone
from django.utils.deprecation import MiddlewareMixin

from core.logging_utils import hash_user_id

logger = logging.getLogger(__name__)

# Query strings on these paths may carry salary figures or personal data
QUERY_LOG_EXCLUDED_PREFIXES = ("/api/v1/payroll/", "/api/v1/users/employees/")


def _user_hash(request):
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return hash_user_id(user.id)
    return "anonymous"


class APIResponseMiddleware(MiddlewareMixin):
    """
    Middleware to enhance API responses with metadata
    """

    def process_request(self, request):
        request._start_time = time.monotonic()
        return None

    def process_response(self, request, response):
        """
        Stamp error bodies with a timestamp and paginated bodies with timing
        """
        if not (hasattr(response, "data") and request.path.startswith("/api/")):
            return response

        processing_time = None
        if hasattr(request, "_start_time"):
            processing_time = round((time.monotonic() - request._start_time) * 1000, 2)

        data = response.data
        if isinstance(data, dict) and data.get("error"):
            data["timestamp"] = timezone.now().isoformat()
        elif isinstance(data, dict) and "results" in data and processing_time is not None:
            data.setdefault("meta", {})["processing_time_ms"] = processing_time

        # The handler has already rendered the response; re-render from data
        if getattr(response, "is_rendered", False):
            response.content = response.rendered_content

        return response


class APILoggingMiddleware(MiddlewareMixin):
    """
    Middleware for API request/response logging without PII
    """

    def process_request(self, request):
        if not request.path.startswith("/api/"):
            return None

        extra = {
            "method": request.method,
            "path": request.path,
            "user_hash": _user_hash(request),
            "ip": self.get_client_ip(request),
            "action": "api_request",
        }
        if not request.path.startswith(QUERY_LOG_EXCLUDED_PREFIXES):
            extra["query_params"] = dict(request.GET)

        logger.info(f"API Request: {request.method} {request.path}", extra=extra)
        return None

    def process_response(self, request, response):
        if not request.path.startswith("/api/") or response.status_code < 400:
            return response

        extra = {
            "method": request.method,
            "path": request.path,
            "status_code": response.status_code,
            "user_hash": _user_hash(request),
            "ip": self.get_client_ip(request),
            "action": "api_error_response",
        }

        if response.status_code >= 500:
            logger.error(f"API Server Error: {request.method} {request.path}", extra=extra)
        else:
            logger.warning(f"API Client Error: {request.method} {request.path}", extra=extra)

        return response

    def get_client_ip(self, request):
        """Extract client IP from request"""
        x_forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
        if x_forwarded_for:
            return x_forwarded_for.split(",")[0].strip()
        return request.META.get("REMOTE_ADDR")


class APIVersionMiddleware(MiddlewareMixin):
    """
    Middleware to handle API versioning headers
    """

    def process_request(self, request):
        if request.path.startswith("/api/"):
            request.api_version = "v1"

            accept_version = request.META.get("HTTP_ACCEPT_VERSION")
            if accept_version and accept_version != request.api_version:
                logger.warning(
                    f"Version mismatch: URL has {request.api_version}, "
                    f"Header requests {accept_version}"
                )

        return None

    def process_response(self, request, response):
        if hasattr(request, "api_version"):
            response["X-API-Version"] = request.api_version
            response["X-API-Supported-Versions"] = "v1"

        return response
