"""The Flask application serving the inventory HTTP API."""

from __future__ import annotations

import logging

from flask import Flask, request

from .database import InventoryDB
from .inventory_routes import inventory_blueprint
from .record_routes import records_blueprint

CORS_MAX_AGE = 3600

_log = logging.getLogger(__name__)


def _add_cors_headers(response):
    """Allow any origin, method and header, as a permissive CORS policy does."""
    headers = response.headers
    headers["Access-Control-Allow-Origin"] = request.headers.get("Origin", "*")
    headers.add("Vary", "Origin")
    if request.method == "OPTIONS":
        headers["Access-Control-Allow-Methods"] = request.headers.get(
            "Access-Control-Request-Method", "GET, POST, PUT, DELETE, OPTIONS"
        )
        requested_headers = request.headers.get("Access-Control-Request-Headers")
        if requested_headers:
            headers["Access-Control-Allow-Headers"] = requested_headers
        headers["Access-Control-Max-Age"] = str(CORS_MAX_AGE)
    return response


def _log_request(response):
    _log.info(
        '%s "%s %s" %s',
        request.remote_addr,
        request.method,
        request.full_path.rstrip("?"),
        response.status_code,
    )
    return response


def create_app(db: InventoryDB) -> Flask:
    """Return a Flask app exposing every inventory route backed by ``db``."""
    app = Flask(__name__)
    app.json.sort_keys = False
    app.register_blueprint(inventory_blueprint(db))
    app.register_blueprint(records_blueprint(db))
    app.after_request(_add_cors_headers)
    app.after_request(_log_request)
    return app