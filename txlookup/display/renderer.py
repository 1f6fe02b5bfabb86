"""
Transaction Table Rendering

Maps a DisplayState to the rows of the five-column transaction table.
Rows are plain data; the HTML template and the CLI decide how to draw them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from txlookup.display.formatting import (
    convert_wei_to_eth,
    format_timestamp,
    shorten_address,
    shorten_hash,
)
from txlookup.wallet import Transaction

COLUMNS = ("Hash", "From", "To", "Value", "Timestamp")

EXPLORER_TX_URL = "https://basescan.org/tx/"

LOADING_MESSAGE = "Loading transactions..."
NO_TRANSACTIONS_MESSAGE = "No transactions found for this wallet address."


# =============================================================================
# Display State
# =============================================================================

class DisplayStatus(str, Enum):
    """What the transaction table is currently showing."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    POPULATED = "POPULATED"
    EMPTY = "EMPTY"
    ERROR = "ERROR"


@dataclass(frozen=True)
class DisplayState:
    """Transient view state. Never persisted."""

    status: DisplayStatus
    transactions: tuple[Transaction, ...] = ()
    message: str = ""

    @classmethod
    def idle(cls) -> DisplayState:
        return cls(DisplayStatus.IDLE)

    @classmethod
    def loading(cls) -> DisplayState:
        return cls(DisplayStatus.LOADING)

    @classmethod
    def populated(cls, transactions: list[Transaction]) -> DisplayState:
        return cls(DisplayStatus.POPULATED, transactions=tuple(transactions))

    @classmethod
    def empty(cls) -> DisplayState:
        return cls(DisplayStatus.EMPTY)

    @classmethod
    def error(cls, message: str) -> DisplayState:
        return cls(DisplayStatus.ERROR, message=message)


# =============================================================================
# Table Rows
# =============================================================================

@dataclass(frozen=True)
class TableCell:
    text: str
    href: Optional[str] = None
    colspan: int = 1


@dataclass(frozen=True)
class TableRow:
    cells: tuple[TableCell, ...]

    @property
    def texts(self) -> list[str]:
        return [cell.text for cell in self.cells]


def message_row(message: str) -> TableRow:
    """A single cell spanning every column."""
    return TableRow(cells=(TableCell(text=message, colspan=len(COLUMNS)),))


def render_transaction_row(tx: Transaction, explorer_tx_url: str = EXPLORER_TX_URL) -> TableRow:
    """
    Render one transaction.

    Raises:
        ValueError: value or timestamp is not numeric.
    """
    return TableRow(cells=(
        TableCell(text=shorten_hash(tx.hash), href=f"{explorer_tx_url}{tx.hash}"),
        TableCell(text=shorten_address(tx.from_address)),
        TableCell(text=shorten_address(tx.to_address)),
        TableCell(text=f"{convert_wei_to_eth(tx.value)} ETH"),
        TableCell(text=format_timestamp(tx.time_stamp)),
    ))


def render_rows(state: DisplayState, explorer_tx_url: str = EXPLORER_TX_URL) -> list[TableRow]:
    """Produce the table body for a display state."""
    if state.status == DisplayStatus.LOADING:
        return [message_row(LOADING_MESSAGE)]
    if state.status == DisplayStatus.POPULATED:
        return [render_transaction_row(tx, explorer_tx_url) for tx in state.transactions]
    if state.status == DisplayStatus.EMPTY:
        return [message_row(NO_TRANSACTIONS_MESSAGE)]
    if state.status == DisplayStatus.ERROR:
        return [message_row(state.message)]
    return []


def render_text(rows: list[TableRow]) -> str:
    """Plain-text table for terminal output."""
    lines = ["\t".join(COLUMNS)]
    for row in rows:
        lines.append("\t".join(row.texts))
    return "\n".join(lines)
