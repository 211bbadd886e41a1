"""
DeliveryGate — who may hand a shipment to the couriers.

Custody states over (location, delivery_status):

    warehouse ──(phone + valid PIN, or trusted caller)──▶ in_delivery ──▶ delivered
        ▲                                                     │
        └──────────────────── always allowed ─────────────────┘

    canceled: delivery_status == "canceled", whatever the location.
              Re-dispatching a canceled shipment goes through the PIN check again.

Only the full-update path runs the gate. The status patch endpoint is the
trusted staff fast path and moves custody without it.
"""

import logging
from typing import Optional

from apps.common.config import CargoConfig
from apps.common.exceptions import MissingPhone, PinRequired
from apps.common.phones import normalize_phone
from apps.pins.service import PinService
from apps.shipments.models import Shipment

logger = logging.getLogger("mooncargo.delivery")

WAREHOUSE   = "warehouse"
IN_DELIVERY = "in_delivery"
DELIVERED   = "delivered"
CANCELED    = "canceled"

DISPATCHED  = (IN_DELIVERY, DELIVERED)

Location       = Shipment.Location
DeliveryStatus = Shipment.DeliveryStatus


def derive_delivery_status(location: str) -> str:
    if location == Location.DELIVERY:
        return DeliveryStatus.DELIVERY
    return DeliveryStatus.WAREHOUSE


def custody_state(location: str, delivery_status: str) -> str:
    if delivery_status == DeliveryStatus.CANCELED:
        return CANCELED
    if location == Location.DELIVERY:
        return DELIVERED if delivery_status == DeliveryStatus.DELIVERED else IN_DELIVERY
    return WAREHOUSE


class DeliveryGate:
    """Checks a move into delivery custody."""

    def __init__(self, pin_service: Optional[PinService] = None, config: Optional[CargoConfig] = None):
        self.config = config or CargoConfig.from_settings()
        self.pins   = pin_service or PinService(self.config)

    def admit(self, current_location: str, target_location: str, phone, pin="", bypass=False,
              current_delivery_status="", target_delivery_status="") -> None:
        """
        Raise MissingPhone / PinRequired unless the move is allowed.

        Dispatching a shipment (from warehouse or canceled custody) needs a
        phone and, unless `bypass`, a PIN that verifies for it. A missing PIN
        is minted first so the customer can fetch it; the rejection says
        whether that just happened.
        """
        if custody_state(target_location, target_delivery_status) not in DISPATCHED:
            return
        if custody_state(current_location, current_delivery_status) in DISPATCHED:
            return

        normalized = normalize_phone(phone)
        if not normalized:
            raise MissingPhone()

        issued = self.pins.ensure(normalized)
        if bypass:
            logger.info("Delivery PIN check bypassed by trusted caller")
            return
        if self.pins.verify(normalized, pin):
            return

        raise PinRequired(self._rejection_message(issued.created), pin_created=issued.created)

    def _rejection_message(self, created: bool) -> str:
        call = f"Call {self.config.pin_hotline} to get it" if self.config.pin_hotline else "Ask staff for it"
        if created:
            return f"A 4-digit delivery PIN has been created. {call} and submit again."
        return f"A delivery PIN is required. {call} and submit again."
