"""
Analytics views.

One aggregate pass over shipments for the admin dashboard header.
"""

from decimal import Decimal

from django.db.models import Count, Sum
from rest_framework import serializers
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.shipments.models import Shipment


class StatsSummarySerializer(serializers.Serializer):
    total_shipments = serializers.IntegerField()
    total_price     = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_balance   = serializers.DecimalField(max_digits=14, decimal_places=2)
    by_status       = serializers.DictField(child=serializers.IntegerField())


# ── GET /api/stats/summary ────────────────────────────────────────────────────
class StatsSummaryView(APIView):

    @extend_schema(tags=["Analytics"], summary="Shipment count, money totals and status breakdown",
                   responses=StatsSummarySerializer)
    def get(self, request):
        totals = Shipment.objects.aggregate(
            total_shipments=Count("id"),
            total_price=Sum("price"),
            total_balance=Sum("balance"),
        )
        by_status = {
            row["status"]: row["n"]
            for row in Shipment.objects.values("status").annotate(n=Count("id")).order_by()
        }
        summary = {
            "total_shipments": totals["total_shipments"],
            "total_price":     totals["total_price"] or Decimal("0"),
            "total_balance":   totals["total_balance"] or Decimal("0"),
            "by_status":       by_status,
        }
        return Response(StatsSummarySerializer(summary).data)
