from django.contrib import admin
from .models import Shipment


@admin.register(Shipment)
class ShipmentAdmin(admin.ModelAdmin):
    list_display    = ("barcode", "phone", "customer_name", "status", "location", "delivery_status",
                       "price", "paid_amount", "balance", "arrival_date")
    list_filter     = ("status", "location", "delivery_status")
    search_fields   = ("barcode", "phone", "customer_name", "notes")
    readonly_fields = ("balance", "delivered_at", "created_at", "updated_at")
    date_hierarchy  = "arrival_date"
    ordering        = ("-arrival_date", "-id")
