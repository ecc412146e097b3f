"""Inventory records and their JSON-compatible dictionary form."""

import re
import types
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Mapping, Union, get_args, get_origin

U64_MAX = 2**64 - 1

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_date(value: Any) -> date:
    """Return a calendar date from a ``date`` or a ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _DATE_PATTERN.fullmatch(value):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"invalid date: {value!r}") from exc
    raise ValueError(f"invalid date: {value!r}")


def _is_optional(hint: Any) -> bool:
    return get_origin(hint) in (Union, types.UnionType) and type(None) in get_args(hint)


def _convert(hint: Any, value: Any, name: str) -> Any:
    origin = get_origin(hint)
    if origin in (Union, types.UnionType):
        if value is None:
            return None
        (inner,) = [arg for arg in get_args(hint) if arg is not type(None)]
        return _convert(inner, value, name)
    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"field `{name}` must be a list")
        (item,) = get_args(hint)
        return [_convert(item, element, name) for element in value]
    if hint is str:
        if not isinstance(value, str):
            raise ValueError(f"field `{name}` must be a string")
        return value
    if hint is bool:
        if not isinstance(value, bool):
            raise ValueError(f"field `{name}` must be a boolean")
        return value
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"field `{name}` must be an unsigned integer")
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"field `{name}` is out of range: {value}")
        return value
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"field `{name}` must be a number")
        return float(value)
    if hint is date:
        return parse_date(value)
    if isinstance(hint, type) and issubclass(hint, Record):
        if isinstance(value, hint):
            return value
        return hint.from_dict(value)
    raise TypeError(f"unsupported field type for `{name}`: {hint!r}")


def _dump(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, list):
        return [_dump(element) for element in value]
    return value


class Record:
    """Base for stored records: conversion to and from plain dictionaries."""

    def to_dict(self) -> dict:
        """Return the record as a JSON-compatible dictionary."""
        return {f.name: _dump(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, data):
        """Build a record from a dictionary, validating every field."""
        if not isinstance(data, Mapping):
            raise ValueError(f"{cls.__name__} expects an object")
        values = {}
        for f in fields(cls):
            hint = f.type
            if f.name not in data:
                if _is_optional(hint):
                    values[f.name] = None
                    continue
                raise ValueError(f"missing field `{f.name}`")
            values[f.name] = _convert(hint, data[f.name], f.name)
        return cls(**values)


@dataclass(kw_only=True)
class Product(Record):
    product_name: str
    product_id: str
    components: list[str] | None = None
    cn: int
    kling: int
    st_jacob: int
    wurenlos: int
    wurenlos_sold: int
    flf: int
    in_transit: int
    total_available: int
    reserver_for_orders: int
    waste: int
    customer: int


@dataclass(kw_only=True)
class Component(Record):
    product_id: str
    product_name: str
    component_name: str
    component_id: str
    cn: int
    kling: int
    st_jacob: int
    wurenlos: int
    wurenlos_sold: int
    flf: int
    in_transit: int
    total_available: int
    ordered_surplus: float
    reserver_for_orders: int
    waste: int
    customer: int
    assembly_line: int


@dataclass(kw_only=True)
class Movement(Record):
    movement_id: str
    transaction_id: str
    date: date
    movement_type: str
    component_name: str | None = None
    product_name: str | None = None
    source_location: str
    destination_location: str
    quantity: int
    notes: str | None = None
    status: str
    supplier_order_id: str | None = None


@dataclass(kw_only=True)
class SupplierOrder(Record):
    supplier_id: str
    component_name: str
    procurement_id: str
    order_id: str
    total_components_required: int
    components_roundof: int
    status: str
    order_date: date
    expected_delivery_date: date


@dataclass(kw_only=True)
class Order(Record):
    order_id: str
    procurements: list[str] | None = None
    supplier_orders: list[str] | None = None
    quanity_ordered: int
    product_id: str
    product: str
    quantity_required: int
    expected_delivery_date: date
    production_start_date: date
    expected_ship_date: date
    recid: str
    order_status: str
    total_components_booked: int
    components_notes: str | None = None
    components_required: int
    total_gap_components: list[int] | None = None
    components: list[str] | None = None


@dataclass(kw_only=True)
class Procurement(Record):
    procurement_id: str
    order_id: str
    components: list[str] | None = None
    quantity: int
    status: str
    product: str


@dataclass(kw_only=True)
class Procurements(Record):
    procurement_id: str
    order_id: str
    procurements: list[Procurement]


@dataclass(kw_only=True)
class AssemblyTimeline(Record):
    assembly_id: str
    order: str
    product: str
    movements: list[str]
    components_required: int
    total_components_booked: int
    components: list[str]
    total_gap_components: list[int] | None = None
    assembly_location: str
    components_received_date: date
    assembly_start_date: date
    assembly_end_date: date
    assembly_status: str
    total_duration: int
    assembly_notes: str | None = None


@dataclass(kw_only=True)
class ProductionRate(Record):
    prodction_rate_id: str
    watch_model_id: str
    assembly_time_per_watch: int
    daily_production_capacity: int


@dataclass(kw_only=True)
class ReorderPoint(Record):
    recorder_point_id: str
    component_name: str
    supplier_lead_time: int
    assumed_daily_usage: float
    lead_time_demand: float
    safety_stock: float
    reorder_point: int
    need_to_order: bool


@dataclass(kw_only=True)
class Watch(Record):
    watch_id: str
    watch_model_id: str
    brand: str
    component_id: str
    required_quantity: int