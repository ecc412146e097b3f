"""Sample inventory data and a plain-text summary of the store."""

from __future__ import annotations

import math
import sys
from datetime import date
from decimal import Decimal
from typing import TextIO

from .database import InventoryDB, Table
from .models import (
    AssemblyTimeline,
    Component,
    Movement,
    Order,
    Procurement,
    Procurements,
    Product,
    ProductionRate,
    Record,
    ReorderPoint,
    SupplierOrder,
    Watch,
)

_SAMPLE_DATE = date(2023, 5, 15)


def sample_records() -> list[tuple[Table, str, Record]]:
    """Return the sample records as (table, key, record) triples."""
    product = Product(
        product_name="BP Watch",
        product_id="PROD-001",
        components=["COMP-001", "COMP-002"],
        cn=100,
        kling=50,
        st_jacob=75,
        wurenlos=200,
        wurenlos_sold=25,
        flf=150,
        in_transit=30,
        total_available=600,
        reserver_for_orders=150,
        waste=5,
        customer=0,
    )
    components = [
        Component(
            product_id="PROD-001",
            product_name="BP Watch",
            component_name="Premium Dial",
            component_id="COMP-001",
            cn=40,
            kling=20,
            st_jacob=30,
            wurenlos=80,
            wurenlos_sold=10,
            flf=60,
            in_transit=15,
            total_available=245,
            ordered_surplus=25.5,
            reserver_for_orders=60,
            waste=2,
            customer=0,
            assembly_line=0,
        ),
        Component(
            product_id="PROD-001",
            product_name="BP Watch",
            component_name="Luminous Hands",
            component_id="COMP-002",
            cn=35,
            kling=15,
            st_jacob=25,
            wurenlos=70,
            wurenlos_sold=8,
            flf=50,
            in_transit=12,
            total_available=215,
            ordered_surplus=18.0,
            reserver_for_orders=45,
            waste=1,
            customer=0,
            assembly_line=0,
        ),
    ]
    movement = Movement(
        movement_id="MOVE-001",
        transaction_id="TRANS-001",
        date=_SAMPLE_DATE,
        movement_type="Component",
        component_name="Premium Dial",
        product_name=None,
        source_location="CN",
        destination_location="Wurenlos",
        quantity=10,
        notes="Regular stock transfer",
        status="Completed",
        supplier_order_id=None,
    )
    supplier_order = SupplierOrder(
        supplier_id="SUPP-001",
        component_name="Sapphire Crystal",
        procurement_id="PROC-001",
        order_id="SUPP-ORD-001",
        total_components_required=50,
        components_roundof=50,
        status="Pending",
        order_date=_SAMPLE_DATE,
        expected_delivery_date=_SAMPLE_DATE,
    )
    order = Order(
        order_id="ORD-001",
        procurements=["PROC-001"],
        supplier_orders=["SUPP-ORD-001"],
        quanity_ordered=50,
        product_id="PROD-001",
        product="BP Watch",
        quantity_required=50,
        expected_delivery_date=_SAMPLE_DATE,
        production_start_date=_SAMPLE_DATE,
        expected_ship_date=_SAMPLE_DATE,
        recid="REC-001",
        order_status="Processing",
        total_components_booked=100,
        components_notes="Need expedited shipping",
        components_required=100,
        total_gap_components=[20, 30],
        components=["COMP-001", "COMP-002"],
    )
    procurements = Procurements(
        procurement_id="PROC-GROUP-001",
        order_id="ORD-001",
        procurements=[
            Procurement(
                procurement_id="PROC-001",
                order_id="ORD-001",
                components=["COMP-001"],
                quantity=20,
                status="Pending",
                product="BP Watch",
            )
        ],
    )
    assembly = AssemblyTimeline(
        assembly_id="ASSEM-001",
        order="ORD-001",
        product="BP Watch",
        movements=["MOVE-001"],
        components_required=100,
        total_components_booked=80,
        components=["COMP-001", "COMP-002"],
        total_gap_components=[20],
        assembly_location="Wurenlos",
        components_received_date=_SAMPLE_DATE,
        assembly_start_date=_SAMPLE_DATE,
        assembly_end_date=_SAMPLE_DATE,
        assembly_status="Scheduled",
        total_duration=5,
        assembly_notes="Priority order",
    )
    production_rate = ProductionRate(
        prodction_rate_id="RATE-001",
        watch_model_id="BP-2023",
        assembly_time_per_watch=30,
        daily_production_capacity=40,
    )
    reorder_point = ReorderPoint(
        recorder_point_id="REORD-001",
        component_name="Premium Dial",
        supplier_lead_time=14,
        assumed_daily_usage=5.2,
        lead_time_demand=72.8,
        safety_stock=36.4,
        reorder_point=110,
        need_to_order=True,
    )
    watch = Watch(
        watch_id="WATCH-001",
        watch_model_id="BP-2023-001",
        brand="BrandX",
        component_id="COMP-001",
        required_quantity=1,
    )

    return [
        (Table.PRODUCTS, product.product_id, product),
        *((Table.COMPONENTS, c.component_id, c) for c in components),
        (Table.MOVEMENTS, movement.movement_id, movement),
        (Table.SUPPLIERS_ORDERS, supplier_order.order_id, supplier_order),
        (Table.ORDERS, order.order_id, order),
        (Table.PROCUREMENTS, procurements.procurement_id, procurements),
        (Table.ASSEMBLY_TIMELINE, assembly.assembly_id, assembly),
        (Table.PRODUCTION_RATE, production_rate.prodction_rate_id, production_rate),
        (Table.RECORDER_POINT, reorder_point.recorder_point_id, reorder_point),
        (Table.WATCHES, watch.watch_id, watch),
    ]


def initialize_sample_data(db: InventoryDB) -> None:
    """Empty every table and fill the store with the sample records, atomically."""
    with db.write_txn() as txn:
        for table in Table:
            txn.clear(table)
        for table, key, record in sample_records():
            txn.put(table, key, record)


def _format_float(value: float) -> str:
    """Format a float the way a plain display of a number reads: 18 not 18.0."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def inventory_summary(db: InventoryDB) -> str:
    """Return a text report of products, components and orders not yet completed."""
    lines = ["=== PRODUCTS INVENTORY ==="]
    with db.read_txn() as txn:
        products = txn.all(Table.PRODUCTS)
        components = txn.all(Table.COMPONENTS)
        orders = txn.all(Table.ORDERS)

    for product in products:
        lines += [
            f"{product.product_name} (ID: {product.product_id})",
            f"  Total Available: {product.total_available}",
            f"  Reserved: {product.reserver_for_orders}",
            f"  Locations - CN: {product.cn}, Kling: {product.kling}, "
            f"Wurenlos: {product.wurenlos}",
        ]

    lines += ["", "=== COMPONENTS INVENTORY ==="]
    for component in components:
        lines += [
            f"{component.component_name} (ID: {component.component_id})",
            f"  Total Available: {component.total_available}",
            f"  Ordered Surplus: {_format_float(component.ordered_surplus)}",
        ]

    lines += ["", "=== PENDING ORDERS ==="]
    for order in orders:
        if order.order_status != "Completed":
            lines += [
                f"Order {order.order_id} - Status: {order.order_status}",
                f"  Product: {order.product}, Quantity: {order.quanity_ordered}",
            ]

    return "\n".join(lines) + "\n"


def print_inventory_summary(db: InventoryDB, out: TextIO | None = None) -> None:
    """Write the inventory summary to ``out`` (standard output by default)."""
    stream = sys.stdout if out is None else out
    stream.write(inventory_summary(db))