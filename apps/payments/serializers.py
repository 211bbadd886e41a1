"""Payment serializers."""
from rest_framework import serializers

from apps.common.fields import LenientDecimalField
from apps.shipments.serializers import ShipmentSerializer
from .models import Payment


class PaymentCreateSerializer(serializers.Serializer):
    # negative or garbage amounts are rejected by the journal, not here
    amount = LenientDecimalField(allow_negative=True)
    method = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=30)


class PaymentSerializer(serializers.ModelSerializer):
    shipment_id = serializers.IntegerField(read_only=True)

    class Meta:
        model  = Payment
        fields = ["id", "shipment_id", "amount", "method", "created_at"]


class PaymentReceiptSerializer(serializers.Serializer):
    shipment = ShipmentSerializer()
    payments = PaymentSerializer(many=True)
