"""Wallet transaction fetching module."""

from .fetch_transactions import (
    Transaction,
    BlockchainFetcher,
    TransactionFetcher,
    BasescanFetcher,
    normalize_address,
    validate_ethereum_address,
)

__all__ = [
    "Transaction",
    "BlockchainFetcher",
    "TransactionFetcher",
    "BasescanFetcher",
    "normalize_address",
    "validate_ethereum_address",
]
