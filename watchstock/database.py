"""LMDB-backed storage for the watch inventory."""

from __future__ import annotations

import json
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator

import lmdb

from .models import (
    AssemblyTimeline,
    Component,
    Movement,
    Order,
    Procurements,
    Product,
    ProductionRate,
    Record,
    ReorderPoint,
    SupplierOrder,
    U64_MAX,
    Watch,
)

MAP_SIZE = 1024 * 1024 * 1024
MAX_DBS = 10

LOCATION_FIELDS = {
    "CN": "cn",
    "Kling": "kling",
    "St Jakob": "st_jacob",
    "Wurenlos": "wurenlos",
    "FLF": "flf",
}


class DatabaseError(Exception):
    """Raised when the store cannot complete an operation."""


class Table(Enum):
    """The named sub-databases and the record type each holds."""

    PRODUCTS = "products"
    COMPONENTS = "components"
    MOVEMENTS = "movements"
    SUPPLIERS_ORDERS = "suppliers_orders"
    ORDERS = "orders"
    PROCUREMENTS = "procurements"
    ASSEMBLY_TIMELINE = "assembly_timeline"
    PRODUCTION_RATE = "production_rate"
    RECORDER_POINT = "recorder_point"
    WATCHES = "watches"

    @property
    def record_type(self) -> type[Record]:
        return _RECORD_TYPES[self]


_RECORD_TYPES: dict[Table, type[Record]] = {
    Table.PRODUCTS: Product,
    Table.COMPONENTS: Component,
    Table.MOVEMENTS: Movement,
    Table.SUPPLIERS_ORDERS: SupplierOrder,
    Table.ORDERS: Order,
    Table.PROCUREMENTS: Procurements,
    Table.ASSEMBLY_TIMELINE: AssemblyTimeline,
    Table.PRODUCTION_RATE: ProductionRate,
    Table.RECORDER_POINT: ReorderPoint,
    Table.WATCHES: Watch,
}


@contextmanager
def _lmdb_errors() -> Iterator[None]:
    try:
        yield
    except lmdb.Error as exc:
        raise DatabaseError(str(exc)) from exc


def _key(key: str) -> bytes:
    if not isinstance(key, str):
        raise TypeError(f"keys must be strings, not {type(key).__name__}")
    return key.encode("utf-8")


def _decode(table: Table, raw: bytes) -> Record:
    try:
        return table.record_type.from_dict(json.loads(raw))
    except ValueError as exc:
        raise DatabaseError(f"corrupt record in {table.value}: {exc}") from exc


class _Transaction:
    """Record-level operations inside one LMDB transaction."""

    def __init__(self, txn: lmdb.Transaction, handles: dict[Table, object]):
        self._txn = txn
        self._handles = handles

    def get(self, table: Table, key: str) -> Record | None:
        with _lmdb_errors():
            raw = self._txn.get(_key(key), db=self._handles[table])
        return None if raw is None else _decode(table, raw)

    def put(self, table: Table, key: str, record: Record) -> None:
        if not isinstance(record, table.record_type):
            raise TypeError(
                f"{table.value} holds {table.record_type.__name__}, "
                f"not {type(record).__name__}"
            )
        payload = json.dumps(record.to_dict()).encode("utf-8")
        with _lmdb_errors():
            self._txn.put(_key(key), payload, db=self._handles[table])

    def delete(self, table: Table, key: str) -> bool:
        with _lmdb_errors():
            return bool(self._txn.delete(_key(key), db=self._handles[table]))

    def all(self, table: Table) -> list[Record]:
        with _lmdb_errors():
            raw_values = [value for _, value in self._txn.cursor(db=self._handles[table])]
        return [_decode(table, raw) for raw in raw_values]

    def clear(self, table: Table) -> None:
        with _lmdb_errors():
            self._txn.drop(self._handles[table], delete=False)


class InventoryDB:
    """The inventory store: one LMDB environment with a table per record type."""

    def __init__(self, path):
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        with _lmdb_errors():
            self._env = lmdb.open(str(path), map_size=MAP_SIZE, max_dbs=MAX_DBS)
            with self._env.begin(write=True) as txn:
                self._handles = {
                    table: self._env.open_db(table.value.encode("utf-8"), txn=txn, create=True)
                    for table in Table
                }

    def close(self) -> None:
        if self._env is not None:
            self._env.close()
            self._env = None

    def __enter__(self) -> InventoryDB:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _open_env(self) -> lmdb.Environment:
        if self._env is None:
            raise DatabaseError("database is closed")
        return self._env

    @contextmanager
    def write_txn(self) -> Iterator[_Transaction]:
        """Run a block in a write transaction; commit on success, abort on error."""
        env = self._open_env()
        with _lmdb_errors():
            txn = env.begin(write=True)
        try:
            yield _Transaction(txn, self._handles)
        except BaseException:
            txn.abort()
            raise
        with _lmdb_errors():
            txn.commit()

    @contextmanager
    def read_txn(self) -> Iterator[_Transaction]:
        """Run a block in a read-only transaction."""
        env = self._open_env()
        with _lmdb_errors():
            txn = env.begin()
        try:
            yield _Transaction(txn, self._handles)
        finally:
            txn.abort()

    # Generic table access

    def put(self, table: Table, key: str, record: Record) -> None:
        with self.write_txn() as txn:
            txn.put(table, key, record)

    def get(self, table: Table, key: str) -> Record | None:
        with self.read_txn() as txn:
            return txn.get(table, key)

    def delete(self, table: Table, key: str) -> bool:
        with self.write_txn() as txn:
            return txn.delete(table, key)

    def all(self, table: Table) -> list[Record]:
        with self.read_txn() as txn:
            return txn.all(table)

    def clear_all(self) -> None:
        with self.write_txn() as txn:
            for table in Table:
                txn.clear(table)

    # Products

    def create_product(self, product: Product) -> None:
        self.put(Table.PRODUCTS, product.product_id, product)

    def get_product(self, product_id: str) -> Product | None:
        return self.get(Table.PRODUCTS, product_id)

    def update_product(self, product: Product) -> None:
        self.create_product(product)

    def delete_product(self, product_id: str) -> bool:
        return self.delete(Table.PRODUCTS, product_id)

    def get_all_products(self) -> list[Product]:
        return self.all(Table.PRODUCTS)

    # Components

    def create_component(self, component: Component) -> None:
        self.put(Table.COMPONENTS, component.component_id, component)

    def get_component(self, component_id: str) -> Component | None:
        return self.get(Table.COMPONENTS, component_id)

    def update_component(self, component: Component) -> None:
        self.create_component(component)

    def delete_component(self, component_id: str) -> bool:
        return self.delete(Table.COMPONENTS, component_id)

    def get_all_components(self) -> list[Component]:
        return self.all(Table.COMPONENTS)

    # Relationships

    def add_component_to_product(self, product_id: str, component_id: str) -> None:
        """Link a component to a product; a missing product is left alone."""
        with self.write_txn() as txn:
            product = txn.get(Table.PRODUCTS, product_id)
            if product is None:
                return
            if product.components is None:
                product.components = [component_id]
            elif component_id not in product.components:
                product.components.append(component_id)
            txn.put(Table.PRODUCTS, product_id, product)

    def get_product_components(self, product_id: str) -> list[Component]:
        """Return the stored components a product lists, skipping unknown ids."""
        with self.read_txn() as txn:
            product = txn.get(Table.PRODUCTS, product_id)
            if product is None:
                return []
            found = (txn.get(Table.COMPONENTS, cid) for cid in product.components or [])
            return [component for component in found if component is not None]

    # Movements

    @staticmethod
    def _shift_stock(txn: _Transaction, key: str, location: str, delta: int) -> None:
        component = txn.get(Table.COMPONENTS, key)
        if component is None:
            return
        attribute = LOCATION_FIELDS.get(location)
        if attribute is not None:
            level = getattr(component, attribute) + delta
            if not 0 <= level <= U64_MAX:
                raise DatabaseError(
                    f"stock of {key!r} at {location} would be out of range: {level}"
                )
            setattr(component, attribute, level)
        txn.put(Table.COMPONENTS, key, component)

    def record_movement(self, movement: Movement) -> None:
        """Move component stock between locations and store the movement.

        The component is looked up under its component name as the key.
        """
        with self.write_txn() as txn:
            name = movement.component_name
            if name is not None:
                self._shift_stock(txn, name, movement.source_location, -movement.quantity)
                self._shift_stock(txn, name, movement.destination_location, movement.quantity)
            txn.put(Table.MOVEMENTS, movement.movement_id, movement)

    def get_movement(self, movement_id: str) -> Movement | None:
        return self.get(Table.MOVEMENTS, movement_id)

    def get_all_movements(self) -> list[Movement]:
        return self.all(Table.MOVEMENTS)

    # Orders

    def create_order(self, order: Order) -> None:
        self.put(Table.ORDERS, order.order_id, order)

    def get_order(self, order_id: str) -> Order | None:
        return self.get(Table.ORDERS, order_id)

    def update_order(self, order: Order) -> None:
        self.create_order(order)

    def delete_order(self, order_id: str) -> bool:
        return self.delete(Table.ORDERS, order_id)

    def get_all_orders(self) -> list[Order]:
        return self.all(Table.ORDERS)

    # Queries

    def get_inventory_levels(self, location: str) -> dict[str, int]:
        """Map each component name to its stock at a location (0 if unknown)."""
        attribute = LOCATION_FIELDS.get(location)
        return {
            component.component_name: getattr(component, attribute) if attribute else 0
            for component in self.get_all_components()
        }