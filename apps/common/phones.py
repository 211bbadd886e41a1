"""Phone number normalization shared by shipments and PINs."""

import re

NON_DIGITS = re.compile(r"\D+")


def normalize_phone(value) -> str:
    """Strip everything but digits: '+976 9920-5050' -> '97699205050'."""
    if value is None:
        return ""
    return NON_DIGITS.sub("", str(value))
