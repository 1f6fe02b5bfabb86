"""
Wallet Transaction Fetching

Fetches wallet transaction history over HTTP:
- TransactionFetcher calls the lookup backend (GET /api/transactions/{address})
- BasescanFetcher queries the Basescan txlist API that backs that endpoint

Both produce read-only Transaction records for display.
"""

from __future__ import annotations

import re
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from txlookup.errors import FetchError, InvalidAddressError

logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class Transaction:
    """A single transaction as reported by the block explorer."""

    hash: str
    from_address: str
    to_address: str  # Empty for contract creation
    value: Optional[str]  # Amount in wei; None when the explorer omitted it
    time_stamp: Union[int, str, None]  # Unix epoch seconds; None when omitted

    @classmethod
    def from_dict(cls, data: dict) -> Transaction:
        """Build from an explorer record (keys: hash, from, to, value, timeStamp)."""
        return cls(
            hash=str(data.get("hash") or ""),
            from_address=str(data.get("from") or ""),
            to_address=str(data.get("to") or ""),
            value=None if data.get("value") is None else str(data["value"]),
            time_stamp=data.get("timeStamp"),
        )

    def to_dict(self) -> dict:
        return {
            "hash": self.hash,
            "from": self.from_address,
            "to": self.to_address,
            "value": self.value,
            "timeStamp": self.time_stamp,
        }


# =============================================================================
# Address Validation
# =============================================================================

ETH_ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")


def normalize_address(address: Optional[str]) -> str:
    """Strip surrounding whitespace from user input."""
    return (address or "").strip()


def validate_ethereum_address(address: Optional[str]) -> bool:
    """Validate Ethereum address format (0x + 40 hex characters)."""
    if not address or not isinstance(address, str):
        return False
    return ETH_ADDRESS_PATTERN.fullmatch(address) is not None


def _parse_records(records: list) -> list[Transaction]:
    transactions = []
    for record in records:
        if not isinstance(record, dict):
            raise FetchError(f"Malformed transaction record: {record!r}")
        transactions.append(Transaction.from_dict(record))
    return transactions


# =============================================================================
# Abstract Fetcher
# =============================================================================

class BlockchainFetcher(ABC):
    """Abstract base class for transaction history fetchers."""

    @abstractmethod
    def fetch_transactions(self, wallet_address: str) -> list[Transaction]:
        """Fetch transactions for a wallet address."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Clean up resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# =============================================================================
# Lookup Backend Fetcher
# =============================================================================

class TransactionFetcher(BlockchainFetcher):
    """Fetch a wallet's history from the lookup backend."""

    PATH_TEMPLATE = "/api/transactions/{address}"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize with the backend base URL; an injected client is not closed."""
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def fetch_transactions(self, wallet_address: str) -> list[Transaction]:
        """
        Issue one GET for the wallet and return its transactions.

        A JSON body that is not an array yields an empty list.

        Raises:
            InvalidAddressError: address failed validation; nothing was sent.
            FetchError: non-2xx status, transport failure, or malformed JSON.
        """
        if not validate_ethereum_address(wallet_address):
            raise InvalidAddressError(wallet_address)

        url = self.base_url + self.PATH_TEMPLATE.format(address=wallet_address)
        try:
            response = self.client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch data: {e}", cause=e) from e

        if not response.is_success:
            raise FetchError(
                f"Failed to fetch data. Status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(
                "Failed to parse response body",
                status_code=response.status_code,
                cause=e,
            ) from e

        if not isinstance(data, list):
            logger.warning(f"Expected a JSON array for {wallet_address}, got {type(data).__name__}")
            return []

        return _parse_records(data)

    def close(self) -> None:
        """Close HTTP client."""
        if self._owns_client:
            self.client.close()


# =============================================================================
# Basescan Fetcher
# =============================================================================

class BasescanFetcher(BlockchainFetcher):
    """Fetch normal transactions via the Basescan (Etherscan-compatible) API."""

    BASE_URL = "https://api.basescan.org/api"
    NO_TRANSACTIONS = "No transactions found"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize with optional API key (unauthenticated calls are rate limited)."""
        self.api_key = api_key
        self.base_url = base_url
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def fetch_transactions(self, wallet_address: str) -> list[Transaction]:
        """Fetch the wallet's transactions, newest first."""
        if not validate_ethereum_address(wallet_address):
            raise InvalidAddressError(wallet_address)

        params = {
            "module": "account",
            "action": "txlist",
            "address": wallet_address,
            "startblock": 0,
            "endblock": 99999999,
            "sort": "desc",
        }
        if self.api_key:
            params["apikey"] = self.api_key

        try:
            response = self.client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"Explorer request failed. Status: {e.response.status_code}",
                status_code=e.response.status_code,
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Explorer request failed: {e}", cause=e) from e
        except ValueError as e:
            raise FetchError("Explorer returned malformed JSON", cause=e) from e

        if not isinstance(data, dict):
            raise FetchError(f"Unexpected explorer response: {data!r}")

        status = str(data.get("status", ""))
        message = str(data.get("message", ""))
        result = data.get("result")

        if status == "1" and isinstance(result, list):
            return _parse_records(result)

        # Etherscan-style APIs report an empty history as status "0"
        if message.startswith(self.NO_TRANSACTIONS):
            return []

        raise FetchError(f"Explorer error: {result or message}")

    def close(self) -> None:
        """Close HTTP client."""
        if self._owns_client:
            self.client.close()
