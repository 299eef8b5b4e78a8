"""
Helpers turning ServiceResult objects into DRF responses.

Usage:
    result = CreateGroupHandler.handle(command)
    return result_response(result, success_status=status.HTTP_201_CREATED)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import status
from rest_framework.response import Response

from core.error_codes import http_status_for

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from core.services import ServiceResult


def result_response(
    result: ServiceResult,
    success_status: int = status.HTTP_200_OK,
    serialize: Callable[[Any], Any] | None = None,
) -> Response:
    """
    Build the response envelope for a handler result.

    Args:
        result: Handler result
        success_status: Status used when the result succeeded
        serialize: Optional function applied to ``result.data`` on success

    Returns:
        Response with ``{"success": ..., "data"/"error": ...}`` body
    """
    if result.success:
        if serialize is not None:
            result = result.map(serialize)
        return Response(result.to_response(), status=success_status)

    return Response(result.to_response(), status=http_status_for(result.error_code))
