"""
Pytest fixtures for TxLookup tests. Outbound HTTP goes through httpx.MockTransport.
"""

from __future__ import annotations

import httpx
import pytest

from txlookup.config import Settings

VALID_ADDRESS = "0x1234567890123456789012345678901234567890"
OTHER_ADDRESS = "0xabcdefabcdefabcdefabcdefabcdefabcdefabcd"
TX_HASH = "0x" + "a" * 64

LOOKUP_HOST = "lookup.test"
BASESCAN_HOST = "api.basescan.test"


def make_tx(**overrides) -> dict:
    tx = {
        "hash": TX_HASH,
        "from": VALID_ADDRESS,
        "to": OTHER_ADDRESS,
        "value": "1000000000000000000",
        "timeStamp": "1700000000",
    }
    tx.update(overrides)
    return tx


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        transactions_api_url=f"http://{LOOKUP_HOST}",
        basescan_api_url=f"https://{BASESCAN_HOST}/api",
        basescan_api_key="TESTKEY",
    )


@pytest.fixture
def mock_client():
    """
    Factory for an httpx.Client whose requests are answered by handler.
    Every request is recorded on client.requests.
    """
    clients = []

    def factory(handler):
        requests = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        client.requests = requests
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
