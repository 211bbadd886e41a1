from django.contrib import admin
from .models import CustomerPin


@admin.register(CustomerPin)
class CustomerPinAdmin(admin.ModelAdmin):
    list_display    = ("phone", "pin_plain", "created_at", "updated_at")
    search_fields   = ("phone",)
    readonly_fields = ("pin_hash", "created_at", "updated_at")
