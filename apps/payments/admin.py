from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display    = ("shipment", "amount", "method", "created_at")
    list_filter     = ("method",)
    search_fields   = ("shipment__barcode", "shipment__phone")
    readonly_fields = ("shipment", "amount", "method", "created_at")

    def has_delete_permission(self, request, obj=None):
        return False
