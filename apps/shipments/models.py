"""
Shipment model — one parcel registered at the warehouse.
Money fields are kept consistent by the ledger: balance = price - paid_amount.
"""

from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone


class Shipment(models.Model):
    """A tracked parcel: declared price, payments received, custody and delivery state."""

    class Status(models.TextChoices):
        PENDING   = "pending",   "Pending"
        PAID      = "paid",      "Paid"
        DELIVERED = "delivered", "Delivered"
        DELAYED   = "delayed",   "Delayed"
        CANCELED  = "canceled",  "Canceled"

    class Location(models.TextChoices):
        WAREHOUSE = "warehouse", "Warehouse"
        DELIVERY  = "delivery",  "Delivery"

    class DeliveryStatus(models.TextChoices):
        WAREHOUSE = "warehouse", "In warehouse"
        DELIVERY  = "delivery",  "Out for delivery"
        DELIVERED = "delivered", "Delivered"
        CANCELED  = "canceled",  "Canceled"
        PENDING   = "pending",   "Pending"

    barcode       = models.CharField(max_length=64, db_index=True)
    phone         = models.CharField(max_length=32, blank=True, db_index=True)   # digits only
    customer_name = models.CharField(max_length=120, blank=True)

    quantity      = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    weight        = models.DecimalField(max_digits=10, decimal_places=2, default=0,
                                        validators=[MinValueValidator(0)])
    price         = models.DecimalField(max_digits=12, decimal_places=2, default=0,
                                        validators=[MinValueValidator(0)])
    paid_amount   = models.DecimalField(max_digits=12, decimal_places=2, default=0,
                                        validators=[MinValueValidator(0)])
    balance       = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    # Status choices are what the UI offers; storage accepts any label.
    status          = models.CharField(max_length=20, default=Status.PENDING)
    delivery_status = models.CharField(max_length=20, default=DeliveryStatus.WAREHOUSE)
    location        = models.CharField(max_length=20, choices=Location.choices,
                                       default=Location.WAREHOUSE)

    arrival_date  = models.DateField(null=True, blank=True, default=timezone.localdate)
    notes         = models.TextField(blank=True)   # delivery address
    delivery_note = models.TextField(blank=True)
    courier       = models.CharField(max_length=120, blank=True)

    delivered_at  = models.DateTimeField(null=True, blank=True)
    created_at    = models.DateTimeField(auto_now_add=True)
    updated_at    = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-arrival_date", "-id"]
        indexes  = [
            models.Index(fields=["status"],       name="ship_status_idx"),
            models.Index(fields=["location"],     name="ship_location_idx"),
            models.Index(fields=["arrival_date"], name="ship_arrival_idx"),
        ]

    def __str__(self):
        return f"{self.barcode} [{self.status}/{self.location}]"

    def recompute_balance(self):
        self.balance = self.price - self.paid_amount
        return self.balance
