"""
Customer delivery PINs.
One row per normalized phone number; shipments join to it by phone equality.
"""

from django.db import models


class CustomerPin(models.Model):
    """4-digit delivery PIN for a phone. The plaintext is kept for staff to read out."""

    phone      = models.CharField(max_length=32, unique=True)   # digits only
    pin_hash   = models.CharField(max_length=64)
    pin_plain  = models.CharField(max_length=4, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Customer PIN"
        ordering     = ["phone"]

    def __str__(self):
        return self.phone
