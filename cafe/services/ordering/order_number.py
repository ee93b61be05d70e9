"""Order number generation."""
import secrets
import time
from typing import Optional

from cafe.core.config import settings


def generate_order_number(prefix: Optional[str] = None) -> str:
    """
    Generate a human-readable order number.

    Format is prefix + millisecond timestamp + 8 random hex characters,
    e.g. ``YC17031234567890A3F2C1B``. The random suffix keeps orders placed in
    the same millisecond apart; the unique index on ``orders.order_number``
    catches anything that still collides.
    """
    if prefix is None:
        prefix = settings.order_number_prefix
    timestamp_ms = time.time_ns() // 1_000_000
    suffix = secrets.token_hex(4).upper()
    return f"{prefix}{timestamp_ms}{suffix}"
