"""HTTP routes for products, components, movements, orders and stock levels."""

from __future__ import annotations

import dataclasses
from typing import Any

from flask import Blueprint, request

from .database import DatabaseError, InventoryDB
from .models import Component, Movement, Order, Product, Record


class _BadBody(Exception):
    """Raised when a request body cannot be read as the expected record."""


def _plain(data: Any) -> Any:
    if isinstance(data, Record):
        return data.to_dict()
    if isinstance(data, list):
        return [_plain(item) for item in data]
    if isinstance(data, dict):
        return {key: _plain(value) for key, value in data.items()}
    return data


def success(data: Any) -> dict[str, Any]:
    """Return the response envelope for a successful call carrying ``data``."""
    return {"success": True, "data": _plain(data), "message": None}


def error(message: str) -> dict[str, Any]:
    """Return the response envelope for a failed call."""
    return {"success": False, "data": None, "message": message}


def _read_body(record_type: type[Record]) -> Record:
    payload = request.get_json(silent=True)
    if payload is None:
        raise _BadBody("request body must be JSON")
    try:
        return record_type.from_dict(payload)
    except ValueError as exc:
        raise _BadBody(str(exc)) from exc


def inventory_blueprint(db: InventoryDB) -> Blueprint:
    """Return a blueprint serving the core inventory API backed by ``db``."""
    bp = Blueprint("inventory", __name__)

    @bp.errorhandler(DatabaseError)
    def _database_failed(exc: DatabaseError):
        return error(str(exc)), 500

    @bp.errorhandler(_BadBody)
    def _bad_body(exc: _BadBody):
        return error(str(exc)), 400

    def _found(record: Record | None, missing: str):
        if record is None:
            return error(missing), 404
        return success(record), 200

    def _deleted(deleted: bool, done: str, missing: str):
        if deleted:
            return success(done), 200
        return error(missing), 404

    # Products

    @bp.get("/api/products")
    def get_all_products():
        return success(db.get_all_products()), 200

    @bp.get("/api/products/<product_id>")
    def get_product(product_id: str):
        return _found(db.get_product(product_id), "Product not found")

    @bp.post("/api/products")
    def create_product():
        db.create_product(_read_body(Product))
        return success("Product created"), 201

    @bp.put("/api/products/<product_id>")
    def update_product(product_id: str):
        product = dataclasses.replace(_read_body(Product), product_id=product_id)
        db.update_product(product)
        return success("Product updated"), 200

    @bp.delete("/api/products/<product_id>")
    def delete_product(product_id: str):
        return _deleted(db.delete_product(product_id), "Product deleted", "Product not found")

    # Components

    @bp.get("/api/components")
    def get_all_components():
        return success(db.get_all_components()), 200

    @bp.get("/api/components/<component_id>")
    def get_component(component_id: str):
        return _found(db.get_component(component_id), "Component not found")

    @bp.post("/api/components")
    def create_component():
        db.create_component(_read_body(Component))
        return success("Component created"), 201

    @bp.put("/api/components/<component_id>")
    def update_component(component_id: str):
        component = dataclasses.replace(_read_body(Component), component_id=component_id)
        db.update_component(component)
        return success("Component updated"), 200

    @bp.delete("/api/components/<component_id>")
    def delete_component(component_id: str):
        return _deleted(
            db.delete_component(component_id), "Component deleted", "Component not found"
        )

    # Movements

    @bp.get("/api/movements")
    def get_all_movements():
        return success(db.get_all_movements()), 200

    @bp.get("/api/movements/<movement_id>")
    def get_movement(movement_id: str):
        return _found(db.get_movement(movement_id), "Movement not found")

    @bp.post("/api/movements")
    def record_movement():
        db.record_movement(_read_body(Movement))
        return success("Movement recorded"), 201

    # Orders

    @bp.get("/api/orders")
    def get_all_orders():
        return success(db.get_all_orders()), 200

    @bp.get("/api/orders/<order_id>")
    def get_order(order_id: str):
        return _found(db.get_order(order_id), "Order not found")

    @bp.post("/api/orders")
    def create_order():
        db.create_order(_read_body(Order))
        return success("Order created"), 201

    @bp.put("/api/orders/<order_id>")
    def update_order(order_id: str):
        order = dataclasses.replace(_read_body(Order), order_id=order_id)
        db.update_order(order)
        return success("Order updated"), 200

    @bp.delete("/api/orders/<order_id>")
    def delete_order(order_id: str):
        return _deleted(db.delete_order(order_id), "Order deleted", "Order not found")

    # Inventory queries and relationships

    @bp.get("/api/inventory/<location>")
    def get_inventory_levels(location: str):
        return success(db.get_inventory_levels(location)), 200

    @bp.get("/api/products/<product_id>/components")
    def get_product_components(product_id: str):
        return success(db.get_product_components(product_id)), 200

    @bp.post("/api/products/<product_id>/components/<component_id>")
    def add_component_to_product(product_id: str, component_id: str):
        db.add_component_to_product(product_id, component_id)
        return success("Component added to product"), 200

    return bp