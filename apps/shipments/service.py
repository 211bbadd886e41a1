"""
ShipmentLedger — the shipment state machine and its money fields.

Flow:  create ──▶ update (full edit, PIN-gated into delivery)
                  patch_status (custody / status only, trusted fast path)
                  PaymentJournal.record (apps.payments)

Every read attaches the customer's plaintext PIN to the rows it returns and
mints one for phones that have none yet, so staff always have a PIN to relay.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.common.config import CargoConfig
from apps.common.exceptions import NotFound, ValidationError
from apps.common.phones import normalize_phone
from apps.pins.service import PinService
from apps.shipments.delivery import DeliveryGate, derive_delivery_status
from apps.shipments.filters import ShipmentFilter
from apps.shipments.models import Shipment

logger = logging.getLogger("mooncargo.shipments")

TEXT_FIELDS    = ("customer_name", "notes", "delivery_note", "courier")
MONEY_FIELDS   = ("weight", "price", "paid_amount")
IN_DELIVERY_STATUSES = (
    Shipment.DeliveryStatus.DELIVERY,
    Shipment.DeliveryStatus.DELIVERED,
    Shipment.DeliveryStatus.PENDING,
)


@dataclass
class ShipmentPage:
    rows:  List[Shipment] = field(default_factory=list)
    total: int = 0
    page:  int = 1
    limit: int = 20


def _to_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number or default


def _clean_location(value, fallback=Shipment.Location.WAREHOUSE) -> str:
    return (value or "").strip().lower() or fallback


def stamp_delivery(shipment: Shipment) -> None:
    """delivered_at follows delivery_status: set once on delivered, cleared on canceled/pending."""
    if shipment.delivery_status == Shipment.DeliveryStatus.DELIVERED:
        shipment.delivered_at = shipment.delivered_at or timezone.now()
    elif shipment.delivery_status in (Shipment.DeliveryStatus.CANCELED, Shipment.DeliveryStatus.PENDING):
        shipment.delivered_at = None


class ShipmentLedger:
    """
    Unified shipment orchestration.
    Dependencies are injected so they can be swapped in tests.
    """

    def __init__(
        self,
        pin_service: Optional[PinService] = None,
        delivery_gate: Optional[DeliveryGate] = None,
        config: Optional[CargoConfig] = None,
    ):
        self.config = config or CargoConfig.from_settings()
        self.pins   = pin_service   or PinService(self.config)
        self.gate   = delivery_gate or DeliveryGate(self.pins, self.config)

    # ── Reads ─────────────────────────────────────────────────────────────────
    def get(self, pk) -> Shipment:
        return self.attach_pins([self._get(pk)])[0]

    def list(self, params, page=None, limit=None) -> ShipmentPage:
        """
        Filtered, paginated listing.
        Ordering: arrival date newest first (undated last), then id newest first.
        """
        filterset = ShipmentFilter(params, queryset=Shipment.objects.all())
        if not filterset.is_valid():
            raise ValidationError("Invalid filter.", errors=filterset.errors.get_json_data())

        qs = filterset.qs.order_by(F("arrival_date").desc(nulls_last=True), "-id")
        total = qs.count()

        limit = max(1, min(_to_int(limit, self.config.default_page_size), self.config.max_page_size))
        page  = max(1, _to_int(page, 1))
        offset = (page - 1) * limit
        rows = list(qs[offset:offset + limit])

        return ShipmentPage(rows=self.attach_pins(rows), total=total, page=page, limit=limit)

    def attach_pins(self, shipments: List[Shipment]) -> List[Shipment]:
        known = self.pins.plain_pins_for(s.phone for s in shipments)
        for shipment in shipments:
            phone = normalize_phone(shipment.phone)
            if phone and phone not in known:
                issued = self.pins.ensure(phone, expose=True)
                if issued.pin:
                    known[phone] = issued.pin
            shipment.pin = known.get(phone, "")
        return shipments

    # ── Step 1: register ──────────────────────────────────────────────────────
    def create(self, data: dict) -> Shipment:
        barcode = (data.get("barcode") or "").strip()
        if not barcode:
            raise ValidationError("Barcode is required.", field="barcode")

        location = _clean_location(data.get("location"))
        shipment = Shipment(
            barcode         = barcode,
            phone           = normalize_phone(data.get("phone")),
            quantity        = data.get("quantity") or 1,
            status          = (data.get("status") or "").strip() or Shipment.Status.PENDING,
            location        = location,
            delivery_status = (data.get("delivery_status") or "").strip() or derive_delivery_status(location),
            arrival_date    = data.get("arrival_date") or timezone.localdate(),
            delivered_at    = data.get("delivered_at"),
        )
        for name in TEXT_FIELDS:
            setattr(shipment, name, (data.get(name) or "").strip())
        for name in MONEY_FIELDS:
            setattr(shipment, name, data.get(name) or 0)
        shipment.recompute_balance()
        shipment.save()

        logger.info("Shipment %s registered (id=%s)", shipment.barcode, shipment.pk)
        return self.attach_pins([shipment])[0]

    # ── Step 2: full edit ─────────────────────────────────────────────────────
    def update(self, pk, patch: dict, pin="", bypass=False) -> Shipment:
        """
        Merge `patch` over the stored shipment and save it.

        Fields absent from the patch keep their value; numbers that arrived
        invalid (None) keep their value too. Moving into delivery goes through
        the DeliveryGate first. A rejection leaves the shipment untouched
        but keeps any PIN the gate minted.
        """
        current = self._get(pk)
        previous_location, previous_status = current.location, current.delivery_status
        self._merge(current, patch)
        self.gate.admit(
            current_location=previous_location,
            target_location=current.location,
            phone=current.phone,
            pin=pin,
            bypass=bypass,
            current_delivery_status=previous_status,
            target_delivery_status=current.delivery_status,
        )

        with transaction.atomic():
            shipment = self._get(pk, lock=True)
            self._merge(shipment, patch)
            shipment.save()

        logger.info(
            "Shipment %s updated: location=%s delivery_status=%s balance=%s",
            shipment.barcode, shipment.location, shipment.delivery_status, shipment.balance,
        )
        return self.attach_pins([shipment])[0]

    # ── Step 3: status / custody only ─────────────────────────────────────────
    def patch_status(self, pk, status=None, location=None, delivery_status=None) -> Shipment:
        """
        Change status, location and delivery status without the PIN gate.

        Balance is not recomputed here, except that going back to "pending"
        voids the payments: paid_amount = 0, balance = price.
        """
        with transaction.atomic():
            shipment = self._get(pk, lock=True)
            new_location = _clean_location(location, fallback=shipment.location or Shipment.Location.WAREHOUSE)

            if delivery_status:
                shipment.delivery_status = delivery_status
            elif new_location != shipment.location or not shipment.delivery_status:
                shipment.delivery_status = derive_delivery_status(new_location)

            shipment.location = new_location
            shipment.status   = status or shipment.status
            stamp_delivery(shipment)

            if shipment.status == Shipment.Status.PENDING:
                shipment.paid_amount = 0
                shipment.balance     = shipment.price

            shipment.save(update_fields=[
                "status", "location", "delivery_status", "delivered_at",
                "paid_amount", "balance", "updated_at",
            ])

        logger.info(
            "Shipment %s status=%s location=%s delivery_status=%s",
            shipment.barcode, shipment.status, shipment.location, shipment.delivery_status,
        )
        return self.attach_pins([shipment])[0]

    # ── helpers ───────────────────────────────────────────────────────────────
    def _get(self, pk, lock=False) -> Shipment:
        qs = Shipment.objects.select_for_update() if lock else Shipment.objects.all()
        shipment = qs.filter(pk=pk).first()
        if shipment is None:
            raise NotFound("Shipment not found.")
        return shipment

    def _merge(self, shipment: Shipment, patch: dict) -> Shipment:
        if "barcode" in patch:
            barcode = (patch["barcode"] or "").strip()
            if not barcode:
                raise ValidationError("Barcode is required.", field="barcode")
            shipment.barcode = barcode
        if "phone" in patch:
            shipment.phone = normalize_phone(patch["phone"])
        for name in TEXT_FIELDS:
            if name in patch:
                setattr(shipment, name, (patch[name] or "").strip())
        for name in MONEY_FIELDS + ("quantity",):
            if patch.get(name) is not None:
                setattr(shipment, name, patch[name])
        if patch.get("status"):
            shipment.status = patch["status"]
        if patch.get("arrival_date"):
            shipment.arrival_date = patch["arrival_date"]

        shipment.location = _clean_location(patch.get("location"), fallback=shipment.location)
        requested = patch.get("delivery_status")
        if shipment.location != Shipment.Location.DELIVERY:
            shipment.delivery_status = Shipment.DeliveryStatus.WAREHOUSE
        elif requested:
            shipment.delivery_status = requested
        elif shipment.delivery_status not in IN_DELIVERY_STATUSES:
            shipment.delivery_status = Shipment.DeliveryStatus.DELIVERY

        stamp_delivery(shipment)
        shipment.recompute_balance()
        return shipment
