"""Identity generation for stored entities."""

import secrets
import time
import uuid

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Generate an opaque entity id.

    Millisecond clock in base 36 followed by a random base 36 suffix, so ids
    sort roughly by creation time and two ids minted in the same millisecond
    still differ.
    """
    return to_base36(time.time_ns() // 1_000_000) + to_base36(secrets.randbits(52))


def generate_image_id() -> str:
    """Generate a collision-resistant gallery image id."""
    return uuid.uuid4().hex


def now_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
