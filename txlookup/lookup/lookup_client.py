"""
Transaction Lookup Client

Drives the transaction table through its states for each user submission:

    Idle -> submit -> validate
        invalid: state unchanged, InvalidAddressError for the caller to alert
        valid:   Loading -> Populated | Empty   (fetch resolved)
                 Loading -> Error               (fetch failed)

Every submission takes a new request id. Only the latest submission may
update the view; responses for older ids are discarded.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from txlookup.display import DisplayState, TableRow, EXPLORER_TX_URL, render_rows
from txlookup.errors import FetchError, InvalidAddressError
from txlookup.wallet import BlockchainFetcher, normalize_address, validate_ethereum_address

logger = logging.getLogger(__name__)

INVALID_ADDRESS_MESSAGE = "Please enter a valid wallet address."
FETCH_ERROR_MESSAGE = "Error fetching transactions. Please try again later."

StateListener = Callable[[DisplayState, list[TableRow]], None]


class TransactionLookup:
    """
    Validates an address, fetches its history and holds the rendered view.

    Usage:
        lookup = TransactionLookup(TransactionFetcher("http://127.0.0.1:5000"))
        lookup.subscribe(lambda state, rows: ...)
        lookup.submit("0x...")
    """

    def __init__(self, fetcher: BlockchainFetcher, explorer_tx_url: str = EXPLORER_TX_URL):
        self.fetcher = fetcher
        self.explorer_tx_url = explorer_tx_url
        self._lock = threading.RLock()
        self._request_id = 0
        self._state = DisplayState.idle()
        self._rows: list[TableRow] = []
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def rows(self) -> list[TableRow]:
        return list(self._rows)

    def subscribe(self, listener: StateListener) -> None:
        """
        Call listener with (state, rows) on every state change.

        Listeners run while the lookup lock is held, so they see changes in
        order and may read state or submit again from the same thread.
        """
        self._listeners.append(listener)

    def submit(self, raw_address: Optional[str]) -> Optional[DisplayState]:
        """
        Run one lookup.

        Returns the resulting state, or None when a newer submission superseded
        this one before its response arrived.

        Raises:
            InvalidAddressError: input is not a wallet address. No request is made
                and the view is left as it was.
        """
        address = normalize_address(raw_address)
        if not validate_ethereum_address(address):
            raise InvalidAddressError(address, INVALID_ADDRESS_MESSAGE)

        request_id = self._begin()

        try:
            transactions = self.fetcher.fetch_transactions(address)
        except FetchError as e:
            logger.error(f"Error fetching transactions: {e} (status={e.status_code}, cause={e.cause!r})")
            return self._resolve(request_id, DisplayState.error(FETCH_ERROR_MESSAGE))

        if transactions:
            return self._resolve(request_id, DisplayState.populated(transactions))
        return self._resolve(request_id, DisplayState.empty())

    def _begin(self) -> int:
        with self._lock:
            self._request_id += 1
            request_id = self._request_id
            state = DisplayState.loading()
            rows = render_rows(state, self.explorer_tx_url)
            self._state, self._rows = state, rows
            self._notify(state, rows)

        return request_id

    def _resolve(self, request_id: int, state: DisplayState) -> Optional[DisplayState]:
        with self._lock:
            if request_id != self._request_id:
                logger.debug(f"Discarding stale response for request {request_id} (latest is {self._request_id})")
                return None

            try:
                rows = render_rows(state, self.explorer_tx_url)
            except ValueError as e:
                logger.error(f"Error rendering transactions: {e}")
                state = DisplayState.error(FETCH_ERROR_MESSAGE)
                rows = render_rows(state, self.explorer_tx_url)

            self._state, self._rows = state, rows
            self._notify(state, rows)

        return state

    def _notify(self, state: DisplayState, rows: list[TableRow]) -> None:
        for listener in self._listeners:
            listener(state, list(rows))
