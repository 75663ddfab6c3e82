"""
Catch-all translation of errors into a JSON error envelope.

Exceptions raised by views go through ErrorEnvelopeMiddleware; routes that
do not resolve and failures outside views go through the handler404 and
handler500 views wired in config.urls.
"""
import json
import logging

from django.http import Http404, JsonResponse
from django.utils import timezone

from core.errors import BadRequestError, ServiceError

logger = logging.getLogger(__name__)


def error_response(request, status: int, message: str, errors: dict | None = None, exc_info=False):
    """Log and return {"status_code", "timestamp", "path", "message"} with this status."""
    body = {
        "status_code": status,
        "timestamp": timezone.now().isoformat(),
        "path": request.path,
        "message": message,
    }
    if errors:
        body["errors"] = errors

    logger.error("%s %s %s", request.method, request.path, json.dumps(body), exc_info=exc_info)
    return JsonResponse(body, status=status)


def not_found(request, exception=None):
    """handler404: unknown routes and path converters that reject the URL."""
    return error_response(request, 404, "Not found")


def server_error(request):
    """handler500: failures that escape the middleware."""
    return error_response(request, 500, "Internal server error")


class ErrorEnvelopeMiddleware:
    """
    Turn any exception escaping a view into the error envelope.

    ServiceError subclasses keep their status and message, Http404 maps to
    404, anything else becomes a 500 with a static message.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        errors = None
        if isinstance(exception, ServiceError):
            status, message = exception.status_code, exception.message
            if isinstance(exception, BadRequestError):
                errors = exception.errors
        elif isinstance(exception, Http404):
            status, message = 404, str(exception) or "Not found"
        else:
            status, message = 500, "Internal server error"

        return error_response(request, status, message, errors=errors, exc_info=status >= 500)
