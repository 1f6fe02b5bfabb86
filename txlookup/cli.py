"""
TxLookup command line.

    txlookup serve [--host HOST] [--port PORT] [--debug]
    txlookup lookup 0x... [--api-url URL]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from txlookup.config import get_settings
from txlookup.display import DisplayStatus, render_text
from txlookup.errors import InvalidAddressError
from txlookup.lookup import TransactionLookup
from txlookup.ui.app import create_app
from txlookup.wallet import TransactionFetcher

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="txlookup", description="TxLookup - Wallet transaction history")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the web UI and transactions API")
    serve.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve.add_argument("--port", type=int, default=5000, help="Port to bind to")
    serve.add_argument("--debug", action="store_true", help="Enable debug mode")

    lookup = subparsers.add_parser("lookup", help="Print a wallet's transactions")
    lookup.add_argument("address", help="Wallet address (0x + 40 hex characters)")
    lookup.add_argument("--api-url", default=None, help="Lookup backend base URL")

    return parser


WILDCARD_HOSTS = ("", "0.0.0.0", "::")


def local_api_url(host: str, port: int) -> str:
    """Base URL at which the served app reaches its own transactions API."""
    if host in WILDCARD_HOSTS:
        host = "127.0.0.1"
    elif ":" in host:
        host = f"[{host}]"
    return f"http://{host}:{port}"


def serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    if "transactions_api_url" not in settings.model_fields_set:
        settings = settings.model_copy(
            update={"transactions_api_url": local_api_url(args.host, args.port)}
        )

    print()
    print("   TxLookup - Wallet Transactions")
    print(f"   Running at: http://{args.host}:{args.port}")
    print()
    print("   Press Ctrl+C to stop")
    print()

    app = create_app(settings=settings)
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


def lookup(args: argparse.Namespace) -> int:
    settings = get_settings()
    api_url = args.api_url or settings.transactions_api_url

    def show_loading(state, rows):
        if state.status == DisplayStatus.LOADING:
            print(render_text(rows))

    with TransactionFetcher(api_url, timeout=settings.request_timeout) as fetcher:
        client = TransactionLookup(fetcher, explorer_tx_url=settings.explorer_tx_url)
        client.subscribe(show_loading)
        try:
            state = client.submit(args.address)
        except InvalidAddressError as e:
            print(str(e), file=sys.stderr)
            return 2

    print()
    print(render_text(client.rows))
    return 1 if state is not None and state.status == DisplayStatus.ERROR else 0


def main(argv: Optional[list[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        return serve(args)
    return lookup(args)


if __name__ == "__main__":
    sys.exit(main())
