# backend/api_errors.py

"""
API ERROR NORMALIZATION

Every handled domain failure is returned as:
    {"error": {"code": "<machine_code>", "message": "<human text>"}}

DRF validation errors keep DRF's default field-error shape.
"""

from rest_framework.response import Response


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )
