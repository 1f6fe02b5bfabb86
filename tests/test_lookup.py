"""
Tests for the TransactionLookup state machine.
"""

from __future__ import annotations

import threading

import httpx
import pytest

from txlookup.display import LOADING_MESSAGE, NO_TRANSACTIONS_MESSAGE, DisplayStatus
from txlookup.errors import FetchError, InvalidAddressError
from txlookup.lookup import FETCH_ERROR_MESSAGE, INVALID_ADDRESS_MESSAGE, TransactionLookup
from txlookup.wallet import BlockchainFetcher, Transaction, TransactionFetcher

from conftest import LOOKUP_HOST, OTHER_ADDRESS, VALID_ADDRESS, make_tx


class StubFetcher(BlockchainFetcher):
    """Returns canned results; a callable result is invoked with the address."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def fetch_transactions(self, wallet_address):
        self.calls.append(wallet_address)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(wallet_address)
        return result

    def close(self):
        pass


def record_states(lookup):
    seen = []
    lookup.subscribe(lambda state, rows: seen.append((state.status, [r.texts for r in rows])))
    return seen


def test_starts_idle():
    lookup = TransactionLookup(StubFetcher())
    assert lookup.state.status == DisplayStatus.IDLE
    assert lookup.rows == []


def test_populated_goes_through_loading():
    tx = Transaction.from_dict(make_tx())
    lookup = TransactionLookup(StubFetcher([tx]))
    seen = record_states(lookup)

    state = lookup.submit(VALID_ADDRESS)

    assert state.status == DisplayStatus.POPULATED
    assert state.transactions == (tx,)
    assert [status for status, _ in seen] == [DisplayStatus.LOADING, DisplayStatus.POPULATED]
    assert seen[0][1] == [[LOADING_MESSAGE]]
    assert len(lookup.rows) == 1
    assert lookup.rows[0].texts[3] == "1.0000 ETH"


def test_empty_list_renders_single_row():
    lookup = TransactionLookup(StubFetcher([]))
    state = lookup.submit(VALID_ADDRESS)

    assert state.status == DisplayStatus.EMPTY
    assert [row.texts for row in lookup.rows] == [[NO_TRANSACTIONS_MESSAGE]]


def test_fetch_error_renders_generic_message():
    lookup = TransactionLookup(StubFetcher(FetchError("Failed to fetch data. Status: 500", status_code=500)))
    seen = record_states(lookup)

    state = lookup.submit(VALID_ADDRESS)

    assert state.status == DisplayStatus.ERROR
    assert [row.texts for row in lookup.rows] == [[FETCH_ERROR_MESSAGE]]
    assert [status for status, _ in seen] == [DisplayStatus.LOADING, DisplayStatus.ERROR]


def test_non_2xx_over_http_renders_one_error_row(mock_client):
    client = mock_client(lambda request: httpx.Response(500))
    lookup = TransactionLookup(TransactionFetcher(f"http://{LOOKUP_HOST}", client=client))

    state = lookup.submit(VALID_ADDRESS)

    assert state.status == DisplayStatus.ERROR
    assert [row.texts for row in lookup.rows] == [[FETCH_ERROR_MESSAGE]]


def test_unrenderable_record_becomes_error():
    bad = Transaction.from_dict(make_tx(timeStamp="soon"))
    lookup = TransactionLookup(StubFetcher([bad]))

    state = lookup.submit(VALID_ADDRESS)

    assert state.status == DisplayStatus.ERROR
    assert [row.texts for row in lookup.rows] == [[FETCH_ERROR_MESSAGE]]


@pytest.mark.parametrize("raw", ["", "   ", "0x123", "hello", VALID_ADDRESS[2:]])
def test_invalid_address_blocks_submission(raw):
    fetcher = StubFetcher()
    lookup = TransactionLookup(fetcher)
    seen = record_states(lookup)

    with pytest.raises(InvalidAddressError) as exc_info:
        lookup.submit(raw)

    assert str(exc_info.value) == INVALID_ADDRESS_MESSAGE
    assert fetcher.calls == []
    assert seen == []
    assert lookup.state.status == DisplayStatus.IDLE


def test_input_is_trimmed():
    fetcher = StubFetcher([])
    TransactionLookup(fetcher).submit(f"  {VALID_ADDRESS}\n")
    assert fetcher.calls == [VALID_ADDRESS]


def test_resubmission_restarts_at_loading():
    tx = Transaction.from_dict(make_tx())
    lookup = TransactionLookup(StubFetcher(FetchError("boom"), [], [tx]))
    seen = record_states(lookup)

    assert lookup.submit(VALID_ADDRESS).status == DisplayStatus.ERROR
    assert lookup.submit(VALID_ADDRESS).status == DisplayStatus.EMPTY
    assert lookup.submit(VALID_ADDRESS).status == DisplayStatus.POPULATED

    assert [status for status, _ in seen] == [
        DisplayStatus.LOADING, DisplayStatus.ERROR,
        DisplayStatus.LOADING, DisplayStatus.EMPTY,
        DisplayStatus.LOADING, DisplayStatus.POPULATED,
    ]


def test_invalid_after_result_keeps_view():
    lookup = TransactionLookup(StubFetcher([]))
    lookup.submit(VALID_ADDRESS)

    with pytest.raises(InvalidAddressError):
        lookup.submit("bad")

    assert lookup.state.status == DisplayStatus.EMPTY


def test_stale_response_is_discarded():
    newer = Transaction.from_dict(make_tx(**{"from": OTHER_ADDRESS}))
    lookup = TransactionLookup(None)

    def slow_first(address):
        # A second submission lands while the first is still in flight
        lookup.submit(OTHER_ADDRESS)
        return [Transaction.from_dict(make_tx())]

    lookup.fetcher = StubFetcher(slow_first, [newer])

    result = lookup.submit(VALID_ADDRESS)

    assert result is None
    assert lookup.state.status == DisplayStatus.POPULATED
    assert lookup.state.transactions == (newer,)
    assert lookup.rows[0].texts[1] == "0xabcd...abcd"


def record_without(field):
    record = make_tx()
    del record[field]
    return record


@pytest.mark.parametrize("record", [
    make_tx(timeStamp="1e20"),
    make_tx(timeStamp="inf"),
    make_tx(value="1e100"),
    make_tx(value="9" * 100),
    record_without("timeStamp"),
    record_without("value"),
], ids=["huge-timestamp", "inf-timestamp", "huge-exponent-value", "100-digit-value", "no-timestamp", "no-value"])
def test_unformattable_record_becomes_error(record):
    lookup = TransactionLookup(StubFetcher([Transaction.from_dict(record)]))

    state = lookup.submit(VALID_ADDRESS)

    assert state.status == DisplayStatus.ERROR
    assert [row.texts for row in lookup.rows] == [[FETCH_ERROR_MESSAGE]]


def test_listener_may_resubmit():
    tx = Transaction.from_dict(make_tx())
    lookup = TransactionLookup(StubFetcher(FetchError("boom"), [tx]))
    seen = []

    def retry_once(state, rows):
        seen.append(state.status)
        if state.status == DisplayStatus.ERROR and len(seen) == 2:
            lookup.submit(VALID_ADDRESS)

    lookup.subscribe(retry_once)
    lookup.submit(VALID_ADDRESS)

    assert seen == [DisplayStatus.LOADING, DisplayStatus.ERROR, DisplayStatus.LOADING, DisplayStatus.POPULATED]
    assert lookup.state.status == DisplayStatus.POPULATED


def test_shared_lookup_notifies_in_order_across_threads():
    tx = Transaction.from_dict(make_tx())
    submissions = 40
    lookup = TransactionLookup(StubFetcher(*[[tx] for _ in range(submissions)]))
    mismatches = []

    def check_current(state, rows):
        if state is not lookup.state:
            mismatches.append(state.status)

    lookup.subscribe(check_current)

    threads = [threading.Thread(target=lookup.submit, args=(VALID_ADDRESS,)) for _ in range(submissions)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert mismatches == []
    assert lookup.state.status == DisplayStatus.POPULATED
