"""PIN serializers."""
from rest_framework import serializers


class PinRequestSerializer(serializers.Serializer):
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    admin = serializers.BooleanField(required=False, default=False)


class PinResponseSerializer(serializers.Serializer):
    created = serializers.BooleanField()
    phone   = serializers.CharField()
    pin     = serializers.CharField(required=False)
