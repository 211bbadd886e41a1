"""Shipment serializers."""

from rest_framework import serializers

from apps.common.fields import LenientDecimalField, LenientIntegerField
from .models import Shipment


class ShipmentSerializer(serializers.ModelSerializer):
    """Outbound shape, including the customer PIN attached by the ledger."""
    pin = serializers.SerializerMethodField()

    class Meta:
        model  = Shipment
        fields = [
            "id", "barcode", "phone", "customer_name", "pin",
            "quantity", "weight", "price", "paid_amount", "balance",
            "status", "delivery_status", "location",
            "arrival_date", "notes", "delivery_note", "courier",
            "delivered_at", "created_at", "updated_at",
        ]

    def get_pin(self, obj) -> str:
        return getattr(obj, "pin", "")


class ShipmentWriteSerializer(serializers.Serializer):
    """
    Fields a client may set. balance and the timestamps are computed by the
    ledger and are not accepted from input.
    """
    barcode         = serializers.CharField(required=False, allow_blank=True, default="")
    phone           = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    customer_name   = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    quantity        = LenientIntegerField()
    weight          = LenientDecimalField(max_value="1e8")
    price           = LenientDecimalField()
    paid_amount     = LenientDecimalField()
    status          = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    delivery_status = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    location        = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    arrival_date    = serializers.DateField(required=False, allow_null=True)
    notes           = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    delivery_note   = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    courier         = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=120)
    delivered_at    = serializers.DateTimeField(required=False, allow_null=True)

    def validate_location(self, value):
        value = (value or "").strip().lower()
        if value and value not in Shipment.Location.values:
            raise serializers.ValidationError(
                f"Unknown location '{value}'. Use one of: {', '.join(Shipment.Location.values)}."
            )
        return value

    def validate_delivery_status(self, value):
        return (value or "").strip().lower()


class ShipmentUpdateSerializer(ShipmentWriteSerializer):
    """Full edit (PUT). Validated with partial=True: absent fields keep their stored value."""
    delivered_at = None
    pin          = serializers.CharField(required=False, allow_blank=True, allow_null=True, write_only=True)
    delivery_pin = serializers.CharField(required=False, allow_blank=True, allow_null=True, write_only=True)
    admin        = serializers.BooleanField(required=False, write_only=True)
    adminBypass  = serializers.BooleanField(required=False, write_only=True)

    def patch_and_pin(self):
        """Split validated data into the field patch and the supplied PIN."""
        data = dict(self.validated_data)
        pin = data.pop("pin", None) or data.pop("delivery_pin", None) or ""
        for key in ("delivery_pin", "admin", "adminBypass"):
            data.pop(key, None)
        return data, str(pin).strip()


class ShipmentStatusSerializer(serializers.Serializer):
    status          = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    location        = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    delivery_status = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)

    validate_location        = ShipmentWriteSerializer.validate_location
    validate_delivery_status = ShipmentWriteSerializer.validate_delivery_status


class ShipmentListMetaSerializer(serializers.Serializer):
    page  = serializers.IntegerField()
    limit = serializers.IntegerField()
    total = serializers.IntegerField()


class ShipmentListSerializer(serializers.Serializer):
    data = ShipmentSerializer(many=True)
    meta = ShipmentListMetaSerializer()
