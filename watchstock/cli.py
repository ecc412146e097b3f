"""Command line entry point: seed the store, report on it and serve the API."""

from __future__ import annotations

import argparse
import sys

from .api import create_app
from .database import DatabaseError, InventoryDB
from .sample import initialize_sample_data, inventory_summary

DEFAULT_DB_PATH = "./inventory_db"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
REPORT_PRODUCT_ID = "PROD-001"
REPORT_LOCATION = "CN"


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the server command."""
    parser = argparse.ArgumentParser(
        prog="watchstock",
        description="Seed the watch inventory store with sample data and serve its HTTP API.",
    )
    parser.add_argument("--db", default=DEFAULT_DB_PATH, help="directory of the LMDB store")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to bind")
    return parser


def startup_report(db: InventoryDB) -> str:
    """Return the summary, sample product and CN stock levels shown at startup."""
    parts = [inventory_summary(db)]
    product = db.get_product(REPORT_PRODUCT_ID)
    if product is not None:
        parts.append(f"\nRetrieved product: {product.product_name}\n")
    parts.append(f"\n{REPORT_LOCATION} Inventory Levels:\n")
    parts.extend(
        f"{name}: {quantity}\n"
        for name, quantity in db.get_inventory_levels(REPORT_LOCATION).items()
    )
    return "".join(parts)


def _display_host(host: str) -> str:
    return "localhost" if host in ("127.0.0.1", "localhost") else host


def main(argv=None) -> int:
    """Seed the store, print the startup report and run the HTTP server."""
    args = build_parser().parse_args(argv)
    try:
        db = InventoryDB(args.db)
    except (DatabaseError, OSError) as exc:
        print(f"Failed to create database: {exc}", file=sys.stderr)
        return 1

    with db:
        try:
            initialize_sample_data(db)
            print("Database initialized with sample data")
            sys.stdout.write(startup_report(db))
        except DatabaseError as exc:
            print(f"Failed to initialize sample data: {exc}", file=sys.stderr)
            return 1

        app = create_app(db)
        print(f"Starting server at http://{_display_host(args.host)}:{args.port}")
        app.run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())