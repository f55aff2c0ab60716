import logging

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)


class GlobalExceptionMiddleware(MiddlewareMixin):
    """
    Last line of defense for non-DRF views.
    """
    def process_exception(self, request, exception):
        logger.exception("Unhandled middleware exception on %s: %s", request.path, exception)
        if request.path.startswith("/api/"):
            return JsonResponse(
                {"error": "Internal System Error", "code": "server_error"},
                status=500,
            )
        return None  # HTML ke liye Django ka default 500 handler
