from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from prepwise.api.utils.common_utils import get_logger

log = get_logger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


def api_exception_handler(exc, context):
    """DRF handler that turns anything it does not know into a JSON 500."""
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    log.error(f"Unhandled error in {type(view).__name__ if view else '-'}: {type(exc).__name__}: {exc}")
    return Response({"detail": "Internal server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
