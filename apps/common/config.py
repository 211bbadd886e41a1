"""
Runtime configuration for the cargo services.

Built once from Django settings when a service is constructed and passed down
to its collaborators (PinService, DeliveryGate, the trusted-caller check).
"""

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class CargoConfig:
    pin_secret: str
    admin_secret: str
    pin_hotline: str = ""
    default_page_size: int = 20
    max_page_size: int = 200

    @classmethod
    def from_settings(cls) -> "CargoConfig":
        pin_secret = getattr(settings, "PIN_SECRET", "")
        return cls(
            pin_secret        = pin_secret,
            admin_secret      = getattr(settings, "ADMIN_PIN_SECRET", "") or pin_secret,
            pin_hotline       = getattr(settings, "PIN_HOTLINE", ""),
            default_page_size = getattr(settings, "SHIPMENTS_PAGE_SIZE", 20),
            max_page_size     = getattr(settings, "SHIPMENTS_MAX_PAGE_SIZE", 200),
        )
