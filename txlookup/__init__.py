"""TxLookup - wallet transaction history lookup."""

__version__ = "0.1.0"
