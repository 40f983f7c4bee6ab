"""Reference numbers quoted to citizens for follow-up by phone or email."""

import enum
import secrets
import string
import time
from typing import Optional

ALPHABET = string.digits + string.ascii_uppercase

# Random characters appended to the timestamp so that codes minted in the
# same millisecond still differ
RANDOM_SUFFIX_LENGTH = 6


class ReferencePrefix(str, enum.Enum):
    """Prefix identifying the kind of tracked submission."""
    SERVICE_REQUEST = "SR"
    OUTAGE = "OUT"
    STREETLIGHT = "SL"


def to_base36(value: int) -> str:
    """Encode a non-negative integer with digits 0-9A-Z."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    chars = []
    while value:
        value, rem = divmod(value, 36)
        chars.append(ALPHABET[rem])
    return "".join(reversed(chars))


def generate_reference_number(prefix: ReferencePrefix, timestamp_ms: Optional[int] = None) -> str:
    """Build ``PREFIX-<base36 millis><random>``, e.g. ``SR-MGX3K2A1B7QZ9P``."""
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(ALPHABET) for _ in range(RANDOM_SUFFIX_LENGTH))
    return f"{ReferencePrefix(prefix).value}-{to_base36(timestamp_ms)}{suffix}"
