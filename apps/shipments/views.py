"""Shipment API views."""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiExample

from apps.common.config import CargoConfig
from apps.common.permissions import is_trusted_caller
from apps.pins.service import PinService
from .service import ShipmentLedger
from . import serializers as sz

config = CargoConfig.from_settings()
ledger = ShipmentLedger(pin_service=PinService(config), config=config)

LIST_PARAMS = [
    OpenApiParameter("phone",    str, description="Partial phone match (digits)"),
    OpenApiParameter("barcode",  str, description="Partial tracking code match"),
    OpenApiParameter("status",   str),
    OpenApiParameter("location", str, enum=["warehouse", "delivery"]),
    OpenApiParameter("dateFrom", str, description="Arrival date from (YYYY-MM-DD, inclusive)"),
    OpenApiParameter("dateTo",   str, description="Arrival date to (YYYY-MM-DD, inclusive)"),
    OpenApiParameter("search",   str, description="Phone, tracking code or address"),
    OpenApiParameter("page",     int),
    OpenApiParameter("limit",    int, description="1-200, default 20"),
]


# ── GET/POST /api/shipments ───────────────────────────────────────────────────
class ShipmentListCreateView(APIView):

    @extend_schema(tags=["Shipments"], summary="List shipments", parameters=LIST_PARAMS,
                   responses=sz.ShipmentListSerializer)
    def get(self, request):
        params = request.query_params
        page = ledger.list(params, page=params.get("page"), limit=params.get("limit"))
        return Response({
            "data": sz.ShipmentSerializer(page.rows, many=True).data,
            "meta": {"page": page.page, "limit": page.limit, "total": page.total},
        })

    @extend_schema(
        tags=["Shipments"], summary="Register a shipment",
        request=sz.ShipmentWriteSerializer, responses={201: sz.ShipmentSerializer},
        examples=[OpenApiExample(
            "Parcel",
            value={"barcode": "MC-1", "phone": "9920 5050", "price": 10000, "weight": 2.5},
        )],
    )
    def post(self, request):
        ser = sz.ShipmentWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        shipment = ledger.create(ser.validated_data)
        return Response(sz.ShipmentSerializer(shipment).data, status=status.HTTP_201_CREATED)


# ── GET/PUT /api/shipments/{id} ───────────────────────────────────────────────
class ShipmentDetailView(APIView):

    @extend_schema(tags=["Shipments"], summary="Retrieve a shipment", responses=sz.ShipmentSerializer)
    def get(self, request, pk):
        return Response(sz.ShipmentSerializer(ledger.get(pk)).data)

    @extend_schema(
        tags=["Shipments"],
        summary="Edit a shipment (moving into delivery needs the customer's PIN)",
        request=sz.ShipmentUpdateSerializer, responses=sz.ShipmentSerializer,
    )
    def put(self, request, pk):
        ser = sz.ShipmentUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        patch, pin = ser.patch_and_pin()
        bypass = is_trusted_caller(
            request, config, header="X-Admin-Bypass-Pin", flags=("admin", "adminBypass"),
        )
        shipment = ledger.update(pk, patch, pin=pin, bypass=bypass)
        return Response(sz.ShipmentSerializer(shipment).data)


# ── PATCH /api/shipments/{id}/status ──────────────────────────────────────────
@extend_schema(
    tags=["Shipments"],
    summary="Change status / location only (trusted staff path, no PIN check)",
    request=sz.ShipmentStatusSerializer, responses=sz.ShipmentSerializer,
)
class ShipmentStatusView(APIView):

    def patch(self, request, pk):
        ser = sz.ShipmentStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        d = ser.validated_data
        shipment = ledger.patch_status(
            pk,
            status=d.get("status"),
            location=d.get("location"),
            delivery_status=d.get("delivery_status"),
        )
        return Response(sz.ShipmentSerializer(shipment).data)
