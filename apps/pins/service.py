"""
PinService — issues and verifies delivery PINs.

A PIN is a 4-digit code (10,000 values) a customer can read out over the
phone. It is a low-assurance, human-verifiable check on delivery dispatch,
not a credential, and the plaintext is kept so staff can relay it.

    ensure(phone)       mint-if-absent, never changes an existing PIN
    verify(phone, pin)  sha256(secret:phone:pin) compared in constant time
"""

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Iterable, Optional

from django.db import IntegrityError, transaction

from apps.common.config import CargoConfig
from apps.common.phones import normalize_phone
from apps.pins.models import CustomerPin

logger = logging.getLogger("mooncargo.pins")

PIN_DIGITS = 4


@dataclass(frozen=True)
class PinResult:
    created: bool
    pin: Optional[str] = None


def generate_pin() -> str:
    return f"{secrets.randbelow(10 ** PIN_DIGITS):0{PIN_DIGITS}d}"


def _tail(phone: str) -> str:
    return f"…{phone[-4:]}"


class PinService:

    def __init__(self, config: Optional[CargoConfig] = None):
        self.config = config or CargoConfig.from_settings()

    def hash_pin(self, phone: str, pin: str) -> str:
        raw = f"{self.config.pin_secret}:{phone}:{pin}"
        return hashlib.sha256(raw.encode()).hexdigest()

    def ensure(self, phone, expose: bool = False) -> PinResult:
        """
        Make sure `phone` has a PIN.
        The PIN is only returned when `expose` is set (trusted callers).
        """
        normalized = normalize_phone(phone)
        if not normalized:
            return PinResult(created=False)

        with transaction.atomic():
            record = CustomerPin.objects.select_for_update().filter(phone=normalized).first()
            if record and record.pin_plain:
                return PinResult(created=False, pin=record.pin_plain if expose else None)

            pin = generate_pin()
            if record is not None:
                # Legacy row with a hash but no plaintext: staff could never read it out.
                record.pin_hash  = self.hash_pin(normalized, pin)
                record.pin_plain = pin
                record.save(update_fields=["pin_hash", "pin_plain", "updated_at"])
                logger.warning("PIN regenerated for %s (plaintext missing)", _tail(normalized))
                return PinResult(created=True, pin=pin if expose else None)

        try:
            with transaction.atomic():
                CustomerPin.objects.create(
                    phone=normalized, pin_hash=self.hash_pin(normalized, pin), pin_plain=pin,
                )
        except IntegrityError:
            # A concurrent request issued one first; theirs stands.
            existing = CustomerPin.objects.get(phone=normalized)
            return PinResult(created=False, pin=existing.pin_plain if expose else None)

        logger.info("PIN issued for %s", _tail(normalized))
        return PinResult(created=True, pin=pin if expose else None)

    def verify(self, phone, pin) -> bool:
        normalized = normalize_phone(phone)
        supplied = str(pin or "").strip()
        if not normalized or not supplied:
            return False
        stored = (
            CustomerPin.objects.filter(phone=normalized)
            .values_list("pin_hash", flat=True)
            .first()
        )
        if not stored:
            return False
        return hmac.compare_digest(stored, self.hash_pin(normalized, supplied))

    def lookup(self, phone) -> PinResult:
        return self.ensure(phone, expose=True)

    def plain_pins_for(self, phones: Iterable[str]) -> dict:
        """Plaintext PINs keyed by normalized phone, for the phones that have one."""
        wanted = {normalize_phone(p) for p in phones} - {""}
        if not wanted:
            return {}
        rows = (
            CustomerPin.objects.filter(phone__in=wanted)
            .exclude(pin_plain="")
            .values_list("phone", "pin_plain")
        )
        return dict(rows)
