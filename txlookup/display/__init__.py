"""Transaction table display module."""

from .formatting import (
    shorten_hash,
    shorten_address,
    convert_wei_to_eth,
    format_timestamp,
)
from .renderer import (
    COLUMNS,
    EXPLORER_TX_URL,
    LOADING_MESSAGE,
    NO_TRANSACTIONS_MESSAGE,
    DisplayStatus,
    DisplayState,
    TableCell,
    TableRow,
    render_rows,
    render_text,
)

__all__ = [
    "shorten_hash",
    "shorten_address",
    "convert_wei_to_eth",
    "format_timestamp",
    "COLUMNS",
    "EXPLORER_TX_URL",
    "LOADING_MESSAGE",
    "NO_TRANSACTIONS_MESSAGE",
    "DisplayStatus",
    "DisplayState",
    "TableCell",
    "TableRow",
    "render_rows",
    "render_text",
]
