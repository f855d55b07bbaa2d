from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException, PermissionDenied
from rest_framework.response import Response
from rest_framework import status
import logging

from core.constants import VIEW_DASHBOARD

logger = logging.getLogger("ffpoints")


class RoleRedirect(PermissionDenied):
    """
    Raised by role gates. Carries the view the client should go to instead.
    """
    default_detail = "You do not have access to this view."

    def __init__(self, to=VIEW_DASHBOARD, detail=None):
        super().__init__(detail=detail)
        self.redirect_to = to


class StoreUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Could not save changes. Please try again."
    default_code = "store_unavailable"


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        body = {
            "success": False,
            "status_code": response.status_code,
            "errors": response.data,
        }
        if isinstance(exc, RoleRedirect):
            body["redirect"] = exc.redirect_to
        return Response(body, status=response.status_code, headers=_passthrough_headers(response))

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "errors": {"detail": "Internal server error."},
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _passthrough_headers(response):
    # Keep WWW-Authenticate / Retry-After set by DRF
    return {
        key: response[key]
        for key in ("WWW-Authenticate", "Retry-After")
        if response.has_header(key)
    }
