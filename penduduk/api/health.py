"""Liveness and readiness endpoints for the registry."""

import logging

from django.conf import settings
from django.db import DatabaseError, connection
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from penduduk.models import Penduduk

logger = logging.getLogger(__name__)


def _report(checks, ready_status):
    healthy = all(value == "ok" for value in checks.values())
    body = {"status": ready_status if healthy else "unhealthy", "checks": checks}
    code = status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return Response(body, status=code)


@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """
    Liveness probe.

    Returns:
        200 OK: the database connection can be opened
        503 Service Unavailable: it cannot
    """
    checks = {}
    try:
        connection.ensure_connection()
        checks["database"] = "ok"
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        checks["database"] = "error"

    return _report(checks, "healthy")


@api_view(["GET"])
@permission_classes([AllowAny])
def readiness_check(request):
    """
    Readiness probe.

    The penduduk table must be queryable (migrations applied). When lifecycle
    events are enabled the broker must also accept a connection.
    """
    checks = {}
    try:
        Penduduk.objects.exists()
        checks["registry"] = "ok"
    except DatabaseError as e:
        logger.error(f"Registry readiness check failed: {str(e)}")
        checks["registry"] = "error"

    if settings.PENDUDUK_EVENTS_ENABLED:
        from penduduk.rabbitmq.publisher import get_publisher

        checks["rabbitmq"] = "ok" if get_publisher().channel is not None else "error"

    return _report(checks, "ready")
