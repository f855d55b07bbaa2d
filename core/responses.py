from rest_framework import status
from rest_framework.response import Response


def api_error(message: str, status_code=status.HTTP_400_BAD_REQUEST, **extra):
    """
    Small helper to standardize inline error responses.
    Always returns: {"error": "<message>", **extra} with the given status code.
    """
    return Response({"error": message, **extra}, status=status_code)
