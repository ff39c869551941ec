from __future__ import annotations

import math

from .constants import SCALE


def to_chain_units(amount: float) -> int:
    """Scale a human-readable amount to u64 chain units.

    Args:
        amount: Amount with up to 8 meaningful decimal places.

    Returns:
        ``floor(amount * 10**8)``.

    Notes:
        - Fractional residue is truncated, never rounded. The truncated
          value is what the contract enforces for slippage.
    """
    return math.floor(amount * SCALE)


def from_chain_units(value: int | str) -> float:
    """Convert a u64 chain amount (int or decimal string) to human units."""
    return int(value) / SCALE


def format_amount(value: float) -> str:
    """Render an amount with at most 8 decimals and no trailing zeros ("1", "19.76")."""
    return f"{value:.8f}".rstrip("0").rstrip(".")
