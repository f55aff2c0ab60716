import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BusinessLogicException(Exception):
    """
    Raised when a domain rule is violated (e.g. 'Cart is empty').
    """
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message, code="business_error", status_code=None):
        self.message = message
        self.code = code
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


def custom_exception_handler(exc, context):
    # DRF ka default handler pehle
    response = exception_handler(exc, context)

    if isinstance(exc, BusinessLogicException):
        return Response(
            {"error": exc.message, "code": exc.code},
            status=exc.status_code,
        )

    # response None matlab unhandled server error (500)
    if response is None:
        view = context.get("view")
        logger.error(
            "Unhandled exception in %s: %s",
            view.__class__.__name__ if view else "unknown view",
            exc,
            exc_info=True,
        )
        return Response(
            {"error": "Internal Server Error", "code": "server_error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
