"""Payment views — record money received, list a shipment's payments."""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiExample

from apps.common.config import CargoConfig
from apps.pins.service import PinService
from apps.shipments.service import ShipmentLedger
from .serializers import PaymentCreateSerializer, PaymentReceiptSerializer, PaymentSerializer
from .service import PaymentJournal

config = CargoConfig.from_settings()
journal = PaymentJournal(ShipmentLedger(pin_service=PinService(config), config=config))


# ── GET/POST /api/shipments/{id}/payments ─────────────────────────────────────
class ShipmentPaymentsView(APIView):

    @extend_schema(tags=["Payments"], summary="Payments for a shipment, newest first",
                   responses=PaymentSerializer(many=True))
    def get(self, request, pk):
        return Response(PaymentSerializer(journal.list_for(pk), many=True).data)

    @extend_schema(
        tags=["Payments"],
        summary="Record a payment against a shipment",
        request=PaymentCreateSerializer,
        responses={201: PaymentReceiptSerializer},
        examples=[OpenApiExample("Cash", value={"amount": 4000, "method": "cash"})],
    )
    def post(self, request, pk):
        ser = PaymentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        shipment, payments = journal.record(
            pk, ser.validated_data.get("amount"), ser.validated_data.get("method"),
        )
        out = PaymentReceiptSerializer({"shipment": shipment, "payments": payments})
        return Response(out.data, status=status.HTTP_201_CREATED)
