"""Transaction lookup module."""

from .lookup_client import (
    TransactionLookup,
    INVALID_ADDRESS_MESSAGE,
    FETCH_ERROR_MESSAGE,
)

__all__ = [
    "TransactionLookup",
    "INVALID_ADDRESS_MESSAGE",
    "FETCH_ERROR_MESSAGE",
]
