"""
Operations views:
  - Health check (database round-trip)
Prometheus metrics are served by django_prometheus at /metrics.
"""

import logging

from django.db import DatabaseError, connection
from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

logger = logging.getLogger("mooncargo.ops")


# ── GET /health ───────────────────────────────────────────────────────────────
@extend_schema(tags=["Ops"], summary="Liveness and database check")
class HealthView(APIView):

    def get(self, request):
        checks = {}
        try:
            with connection.cursor() as cur:
                cur.execute("SELECT 1")
            checks["database"] = "ok"
        except DatabaseError as exc:
            logger.error("Health check: database unreachable: %s", exc)
            checks["database"] = f"error: {exc}"

        ok = checks["database"] == "ok"
        return Response(
            {"ok": ok, "checks": checks},
            status=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
