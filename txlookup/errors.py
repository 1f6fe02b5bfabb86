"""Custom error classes."""

from __future__ import annotations

from typing import Optional


class TxLookupError(Exception):
    """Base exception for transaction lookup."""
    pass


class InvalidAddressError(TxLookupError, ValueError):
    """Wallet address is not 0x followed by 40 hex characters."""

    def __init__(self, address: str, message: Optional[str] = None):
        self.address = address
        super().__init__(message or f"Invalid wallet address: {address!r}")


class FetchError(TxLookupError):
    """
    Transaction fetch failed.

    Carries the HTTP status code for non-2xx responses, or the underlying
    exception for transport and decoding failures.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause
