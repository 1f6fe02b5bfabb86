"""
Display Formatting

String helpers for the transaction table: shortened hashes and addresses,
wei to ether conversion, and local timestamps.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Union

WEI_PER_ETH = Decimal(10) ** 18
ETH_DISPLAY_PLACES = Decimal("0.0001")


def shorten_hash(tx_hash: str) -> str:
    """First 10 + "..." + last 10 characters."""
    return f"{tx_hash[:10]}...{tx_hash[-10:]}"


def shorten_address(address: str) -> str:
    """First 6 + "..." + last 4 characters."""
    return f"{address[:6]}...{address[-4:]}"


def convert_wei_to_eth(value: Union[str, int, float, Decimal]) -> str:
    """
    Convert a wei amount to ether with exactly 4 decimal places.

    Uses exact decimal arithmetic, rounding half up.

    Raises:
        ValueError: value is not a finite number or is too large to display.
    """
    try:
        wei = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid wei value: {value!r}") from e

    if not wei.is_finite():
        raise ValueError(f"Invalid wei value: {value!r}")

    with localcontext() as ctx:
        ctx.prec = 80
        try:
            eth = (wei / WEI_PER_ETH).quantize(ETH_DISPLAY_PLACES, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise ValueError(f"Wei value out of range: {value!r}") from e
    return f"{eth:.4f}"


def format_timestamp(timestamp: Union[str, int, float]) -> str:
    """Format Unix epoch seconds as local date and time in the locale's default representation."""
    try:
        seconds = float(timestamp)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid timestamp: {timestamp!r}") from e
    try:
        return datetime.fromtimestamp(seconds).strftime("%c")
    except (OverflowError, OSError) as e:
        raise ValueError(f"Timestamp out of range: {timestamp!r}") from e
