"""
Palette Studio ID Utilities
Generate unique ids for requests and saved palettes.
"""
import secrets
import time
import uuid
from datetime import datetime

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_request_id(prefix: str = "req") -> str:
    """
    Generate a unique request ID for tracking.

    Args:
        prefix: Short tag naming the kind of request (e.g. "color")

    Returns:
        Unique request ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


def to_base36(value: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_palette_id() -> str:
    """
    Generate a palette id: millisecond timestamp in base 36 plus a random suffix.

    Returns:
        Compact, roughly time-ordered id string
    """
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(8))
    return to_base36(millis) + suffix
