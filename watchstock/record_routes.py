"""HTTP routes for supplier orders, procurements, assembly timelines and reference data."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from flask import Blueprint, request

from .database import DatabaseError, InventoryDB, Table
from .inventory_routes import error, success
from .models import Record


class _BadBody(Exception):
    """Raised when a request body cannot be read as the expected record."""


@dataclass(frozen=True)
class _Resource:
    """One record collection exposed under ``/api/<path>``."""

    path: str
    table: Table
    id_field: str
    label: str

    @property
    def endpoint(self) -> str:
        return self.path.replace("-", "_")


_RESOURCES = (
    _Resource("supplier-orders", Table.SUPPLIERS_ORDERS, "order_id", "Supplier order"),
    _Resource("procurements", Table.PROCUREMENTS, "procurement_id", "Procurement"),
    _Resource("assembly-timeline", Table.ASSEMBLY_TIMELINE, "assembly_id", "Assembly timeline"),
    _Resource("production-rates", Table.PRODUCTION_RATE, "prodction_rate_id", "Production rate"),
    _Resource("reorder-points", Table.RECORDER_POINT, "recorder_point_id", "Reorder point"),
    _Resource("watches", Table.WATCHES, "watch_id", "Watch"),
)


def _read_body(record_type: type[Record]) -> Record:
    payload = request.get_json(silent=True)
    if payload is None:
        raise _BadBody("request body must be JSON")
    try:
        return record_type.from_dict(payload)
    except ValueError as exc:
        raise _BadBody(str(exc)) from exc


def _register(bp: Blueprint, db: InventoryDB, resource: _Resource) -> None:
    collection = f"/api/{resource.path}"
    item = f"{collection}/<key>"
    missing = f"{resource.label} not found"
    record_type = resource.table.record_type

    def list_all():
        return success(db.all(resource.table)), 200

    def get_one(key: str):
        record = db.get(resource.table, key)
        if record is None:
            return error(missing), 404
        return success(record), 200

    def create():
        record = _read_body(record_type)
        db.put(resource.table, getattr(record, resource.id_field), record)
        return success(f"{resource.label} created"), 201

    def update(key: str):
        record = dataclasses.replace(_read_body(record_type), **{resource.id_field: key})
        db.put(resource.table, key, record)
        return success(f"{resource.label} updated"), 200

    def delete(key: str):
        if db.delete(resource.table, key):
            return success(f"{resource.label} deleted"), 200
        return error(missing), 404

    name = resource.endpoint
    bp.add_url_rule(collection, f"{name}_list", list_all, methods=["GET"])
    bp.add_url_rule(collection, f"{name}_create", create, methods=["POST"])
    bp.add_url_rule(item, f"{name}_get", get_one, methods=["GET"])
    bp.add_url_rule(item, f"{name}_update", update, methods=["PUT"])
    bp.add_url_rule(item, f"{name}_delete", delete, methods=["DELETE"])


def records_blueprint(db: InventoryDB) -> Blueprint:
    """Return a blueprint serving CRUD routes for the secondary record tables."""
    bp = Blueprint("records", __name__)

    @bp.errorhandler(DatabaseError)
    def _database_failed(exc: DatabaseError):
        return error(str(exc)), 500

    @bp.errorhandler(_BadBody)
    def _bad_body(exc: _BadBody):
        return error(str(exc)), 400

    for resource in _RESOURCES:
        _register(bp, db, resource)

    return bp