"""
DRF exception handler producing the application's error envelope.

Configured in settings:
    REST_FRAMEWORK["EXCEPTION_HANDLER"] = "core.exception_handler.api_exception_handler"

DRF exceptions (authentication, permission, parse errors) and
BaseApplicationError subclasses are rendered as:

    {"success": false, "error": "...", "error_code": "...", "errors"?: {...}}

Anything else is left to Django, which turns it into a 500.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    if isinstance(exc, BaseApplicationError):
        logger.warning(f"Application error in {context.get('view')}: {exc}")
        return Response(exc.to_dict(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    body: dict[str, Any] = {"success": False}
    if isinstance(exc, exceptions.ValidationError):
        body["error"] = "Validation failed"
        body["error_code"] = "VALIDATION_ERROR"
        body["errors"] = (
            response.data if isinstance(response.data, dict) else {"non_field_errors": response.data}
        )
    else:
        detail = response.data.get("detail", "") if isinstance(response.data, dict) else response.data
        body["error"] = str(detail)
        codes = exc.get_codes() if isinstance(exc, exceptions.APIException) else None
        body["error_code"] = (codes if isinstance(codes, str) else "ERROR").upper()

    response.data = body
    return response
