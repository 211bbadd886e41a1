import django_filters as df
from django.db.models import Q

from apps.common.phones import normalize_phone
from .models import Shipment


class ShipmentFilter(df.FilterSet):
    # Query parameter names are the ones the admin UI sends.
    phone    = df.CharFilter(method="filter_phone")
    barcode  = df.CharFilter(field_name="barcode", lookup_expr="icontains")
    dateFrom = df.DateFilter(field_name="arrival_date", lookup_expr="gte")
    dateTo   = df.DateFilter(field_name="arrival_date", lookup_expr="lte")
    search   = df.CharFilter(method="filter_search")

    class Meta:
        model  = Shipment
        fields = ["status", "location"]

    def filter_phone(self, qs, name, value):
        # phones are stored as digits; "99-20" should still match
        return qs.filter(phone__contains=normalize_phone(value) or value)

    def filter_search(self, qs, name, value):
        return qs.filter(
            Q(phone__icontains=value) | Q(barcode__icontains=value) | Q(notes__icontains=value)
        )
