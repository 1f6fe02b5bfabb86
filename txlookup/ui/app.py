"""
TxLookup Web UI

Flask application for wallet transaction lookup.
Provides endpoints for:
- Lookup page with the transaction table
- Transaction history JSON API (backed by Basescan)
- Health check
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx
from flask import Flask, render_template, jsonify, request
from flask_cors import CORS

from txlookup.config import Settings, get_settings
from txlookup.display import COLUMNS, DisplayState, render_rows
from txlookup.errors import FetchError, InvalidAddressError
from txlookup.lookup import TransactionLookup, INVALID_ADDRESS_MESSAGE
from txlookup.wallet import BasescanFetcher, TransactionFetcher, validate_ethereum_address

logger = logging.getLogger(__name__)


# =============================================================================
# Flask App Factory
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.Client] = None,
) -> Flask:
    """
    Create and configure the Flask application.

    An injected http_client is shared by every outbound request and is not
    closed by the app.
    """

    if settings is None:
        settings = get_settings()

    app = Flask(
        __name__,
        template_folder=str(Path(__file__).parent / "templates"),
    )

    CORS(app)

    app.config["settings"] = settings

    def page(address: str = "", rows=None, alert: Optional[str] = None):
        return render_template(
            "index.html",
            columns=COLUMNS,
            rows=rows or [],
            loading_rows=render_rows(DisplayState.loading()),
            address=address,
            alert=alert,
        )

    # -------------------------------------------------------------------------
    # Lookup Page
    # -------------------------------------------------------------------------

    @app.route("/")
    def index():
        raw_address = request.args.get("address")
        if raw_address is None:
            return page()

        with TransactionFetcher(
            settings.transactions_api_url,
            timeout=settings.request_timeout,
            client=http_client,
        ) as fetcher:
            lookup = TransactionLookup(fetcher, explorer_tx_url=settings.explorer_tx_url)
            try:
                lookup.submit(raw_address)
            except InvalidAddressError:
                return page(address=raw_address, alert=INVALID_ADDRESS_MESSAGE), 400

        return page(address=raw_address.strip(), rows=lookup.rows)

    # -------------------------------------------------------------------------
    # Transactions API
    # -------------------------------------------------------------------------

    @app.route("/api/transactions/<address>")
    def get_transactions(address: str):
        if not validate_ethereum_address(address):
            return jsonify({"error": "Invalid address"}), 400

        try:
            with BasescanFetcher(
                api_key=settings.basescan_api_key,
                base_url=settings.basescan_api_url,
                timeout=settings.request_timeout,
                client=http_client,
            ) as fetcher:
                transactions = fetcher.fetch_transactions(address)
        except FetchError as e:
            logger.exception(f"Transaction fetch failed for {address}")
            return jsonify({"error": str(e)}), 502

        logger.info(f"Fetched {len(transactions)} transactions for {address}")
        return jsonify([tx.to_dict() for tx in transactions])

    # Health check
    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    logger.info("TxLookup initialized")
    return app
