"""
Infrastructure endpoints outside the chat API.
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Liveness probe for Docker, Kubernetes and load balancers.

    The database is required. The cache (Redis) is reported, but an
    outage there does not make the service unhealthy since the API
    never depends on it.

    Returns:
        200 ``{"status": "healthy", "database": "connected", "cache": ...}``
        503 when the database does not answer
    """
    body = {"status": "healthy", "database": "connected", "cache": "connected"}

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        logger.exception("Health check: database unreachable")
        body["database"] = "disconnected"
        body["status"] = "unhealthy"

    try:
        cache.set("health_check", "ok", timeout=1)
        if cache.get("health_check") != "ok":
            body["cache"] = "disconnected"
    except Exception:
        logger.warning("Health check: cache unreachable", exc_info=True)
        body["cache"] = "disconnected"

    return JsonResponse(body, status=200 if body["status"] == "healthy" else 503)
