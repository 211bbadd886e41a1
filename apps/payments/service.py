"""
PaymentJournal — applies money received to a shipment.

record():  lock shipment  →  append payment  →  paid += amount,
           balance = price - paid  →  balance <= 0 marks the shipment "paid"
All in one transaction: the payment row and the shipment totals move together.
"""

import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction

from apps.common.exceptions import InvalidAmount, NotFound
from apps.payments.models import Payment
from apps.shipments.models import Shipment
from apps.shipments.service import ShipmentLedger

logger = logging.getLogger("mooncargo.payments")

DEFAULT_METHOD = "cash"

# Shipment.paid_amount is DecimalField(max_digits=12, decimal_places=2)
MAX_PAID = Decimal("9999999999.99")


class PaymentJournal:

    def __init__(self, ledger: Optional[ShipmentLedger] = None):
        self.ledger = ledger or ShipmentLedger()

    def record(self, shipment_id, amount: Optional[Decimal], method: Optional[str] = DEFAULT_METHOD):
        """Append a payment and return (shipment, payments newest first)."""
        with transaction.atomic():
            shipment = Shipment.objects.select_for_update().filter(pk=shipment_id).first()
            if shipment is None:
                raise NotFound("Shipment not found.")
            if amount is None or amount <= 0:
                raise InvalidAmount()
            if shipment.paid_amount + amount > MAX_PAID:
                raise InvalidAmount(f"Payments for one shipment cannot exceed {MAX_PAID}.")

            Payment.objects.create(
                shipment=shipment,
                amount=amount,
                method=(method or "").strip() or DEFAULT_METHOD,
            )
            shipment.paid_amount = shipment.paid_amount + amount
            shipment.recompute_balance()
            if shipment.balance <= 0:
                shipment.status = Shipment.Status.PAID
            shipment.save(update_fields=["paid_amount", "balance", "status", "updated_at"])

        logger.info(
            "Payment of %s recorded for %s; balance now %s (%s)",
            amount, shipment.barcode, shipment.balance, shipment.status,
        )
        return self.ledger.attach_pins([shipment])[0], self.list_for(shipment.pk)

    def list_for(self, shipment_id):
        return list(Payment.objects.filter(shipment_id=shipment_id).order_by("-created_at", "-id"))
