"""
Forgiving numeric serializer fields.

The admin UI posts whatever is in its form inputs. A value that is not a
non-negative number becomes None and the service falls back to the prior
value (or its default), instead of rejecting the whole request.
"""

from decimal import Decimal, InvalidOperation

from rest_framework import serializers

CENT = Decimal("0.01")


class LenientDecimalField(serializers.Field):

    def __init__(self, max_value=Decimal("1e10"), allow_negative=False, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        self.max_value = Decimal(max_value)
        self.allow_negative = allow_negative
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return None
        try:
            value = Decimal(str(data).strip())
        except (InvalidOperation, ValueError):
            return None
        if not value.is_finite() or abs(value) >= self.max_value:
            return None
        if value < 0 and not self.allow_negative:
            return None
        value = value.quantize(CENT)
        if abs(value) >= self.max_value:
            return None
        return value

    def to_representation(self, value):
        return value


class LenientIntegerField(LenientDecimalField):
    """Whole numbers >= 1 (quantities); anything else becomes None."""

    def __init__(self, **kwargs):
        kwargs.setdefault("max_value", Decimal("1e9"))
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value is None or value < 1:
            return None
        return int(value)
