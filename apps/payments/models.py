"""
Payment journal — money received against a shipment.
Rows are append-only: the API never edits or deletes a payment.
"""

from decimal import Decimal

from django.db import models
from django.core.validators import MinValueValidator


class Payment(models.Model):
    shipment   = models.ForeignKey(
        "shipments.Shipment", on_delete=models.CASCADE, related_name="payments"
    )
    amount     = models.DecimalField(max_digits=12, decimal_places=2,
                                     validators=[MinValueValidator(Decimal("0.01"))])
    method     = models.CharField(max_length=30, default="cash")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes  = [models.Index(fields=["shipment", "created_at"], name="pay_shipment_created_idx")]

    def __str__(self):
        return f"{self.shipment.barcode} – {self.amount} ({self.method})"
