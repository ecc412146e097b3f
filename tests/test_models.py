import json
from datetime import date, datetime

import pytest

from watchstock.models import (
    AssemblyTimeline,
    Component,
    Movement,
    Order,
    Procurement,
    Procurements,
    Product,
    ReorderPoint,
    Watch,
    parse_date,
)


def make_product(**overrides):
    values = dict(
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
    values.update(overrides)
    return Product(**values)


def make_movement(**overrides):
    values = dict(
        movement_id="MOVE-001",
        transaction_id="TRANS-001",
        date=date(2023, 5, 15),
        movement_type="Component",
        component_name="Premium Dial",
        source_location="CN",
        destination_location="Wurenlos",
        quantity=10,
        notes="Regular stock transfer",
        status="Completed",
    )
    values.update(overrides)
    return Movement(**values)


def test_product_round_trip():
    product = make_product()
    assert Product.from_dict(product.to_dict()) == product


def test_product_wire_names_follow_source():
    data = make_product().to_dict()
    assert "reserver_for_orders" in data
    assert "st_jacob" in data
    assert data["product_id"] == "PROD-001"


def test_movement_date_serialised_as_iso_string():
    movement = make_movement()
    data = movement.to_dict()
    assert data["date"] == "2023-05-15"
    assert Movement.from_dict(data).date == date(2023, 5, 15)


def test_round_trip_through_json_text():
    movement = make_movement()
    text = json.dumps(movement.to_dict())
    assert Movement.from_dict(json.loads(text)) == movement


def test_missing_optional_fields_become_none():
    data = make_movement().to_dict()
    del data["notes"]
    del data["supplier_order_id"]
    movement = Movement.from_dict(data)
    assert movement.notes is None
    assert movement.supplier_order_id is None


def test_missing_required_field_raises():
    data = make_product().to_dict()
    del data["cn"]
    with pytest.raises(ValueError, match="cn"):
        Product.from_dict(data)


def test_negative_unsigned_field_raises():
    data = make_product().to_dict()
    data["waste"] = -1
    with pytest.raises(ValueError):
        Product.from_dict(data)


def test_unsigned_field_above_range_raises():
    data = make_product().to_dict()
    data["cn"] = 2**64
    with pytest.raises(ValueError):
        Product.from_dict(data)


def test_bool_is_not_accepted_as_integer():
    data = make_product().to_dict()
    data["customer"] = True
    with pytest.raises(ValueError):
        Product.from_dict(data)


def test_string_field_rejects_number():
    data = make_product().to_dict()
    data["product_name"] = 5
    with pytest.raises(ValueError):
        Product.from_dict(data)


def test_float_field_accepts_integer():
    data = Component(
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
    ).to_dict()
    data["ordered_surplus"] = 18
    component = Component.from_dict(data)
    assert isinstance(component.ordered_surplus, float)
    assert component.ordered_surplus == 18


def test_unknown_fields_are_ignored():
    watch = Watch(
        watch_id="WATCH-001",
        watch_model_id="BP-2023-001",
        brand="BrandX",
        component_id="COMP-001",
        required_quantity=1,
    )
    data = watch.to_dict()
    data["unexpected"] = "value"
    assert Watch.from_dict(data) == watch


def test_non_mapping_rejected():
    with pytest.raises(ValueError):
        Watch.from_dict(["WATCH-001"])


def test_nested_procurements_round_trip():
    group = Procurements(
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
    data = group.to_dict()
    assert isinstance(data["procurements"][0], dict)
    restored = Procurements.from_dict(data)
    assert isinstance(restored.procurements[0], Procurement)
    assert restored == group


def test_list_of_integers_validated():
    order = Order(
        order_id="ORD-001",
        procurements=["PROC-001"],
        supplier_orders=["SUPP-ORD-001"],
        quanity_ordered=50,
        product_id="PROD-001",
        product="BP Watch",
        quantity_required=50,
        expected_delivery_date=date(2023, 5, 15),
        production_start_date=date(2023, 5, 15),
        expected_ship_date=date(2023, 5, 15),
        recid="REC-001",
        order_status="Processing",
        total_components_booked=100,
        components_notes="Need expedited shipping",
        components_required=100,
        total_gap_components=[20, 30],
        components=["COMP-001", "COMP-002"],
    )
    data = order.to_dict()
    assert Order.from_dict(data) == order
    data["total_gap_components"] = [20, "thirty"]
    with pytest.raises(ValueError):
        Order.from_dict(data)


def test_assembly_timeline_requires_lists():
    timeline = AssemblyTimeline(
        assembly_id="ASSEM-001",
        order="ORD-001",
        product="BP Watch",
        movements=["MOVE-001"],
        components_required=100,
        total_components_booked=80,
        components=["COMP-001", "COMP-002"],
        total_gap_components=[20],
        assembly_location="Wurenlos",
        components_received_date=date(2023, 5, 15),
        assembly_start_date=date(2023, 5, 15),
        assembly_end_date=date(2023, 5, 15),
        assembly_status="Scheduled",
        total_duration=5,
        assembly_notes="Priority order",
    )
    data = timeline.to_dict()
    assert AssemblyTimeline.from_dict(data) == timeline
    data["movements"] = "MOVE-001"
    with pytest.raises(ValueError):
        AssemblyTimeline.from_dict(data)


def test_bool_field_requires_bool():
    point = ReorderPoint(
        recorder_point_id="REORD-001",
        component_name="Premium Dial",
        supplier_lead_time=14,
        assumed_daily_usage=5.2,
        lead_time_demand=72.8,
        safety_stock=36.4,
        reorder_point=110,
        need_to_order=True,
    )
    data = point.to_dict()
    assert ReorderPoint.from_dict(data).need_to_order is True
    data["need_to_order"] = 1
    with pytest.raises(ValueError):
        ReorderPoint.from_dict(data)


def test_parse_date_accepts_iso_string():
    assert parse_date("2023-05-15") == date(2023, 5, 15)


def test_parse_date_passes_dates_through():
    day = date(2023, 5, 15)
    assert parse_date(day) == day
    assert parse_date(datetime(2023, 5, 15, 8, 30)) == day


@pytest.mark.parametrize("value", ["not a date", "2023-02-30", "", None, 20230515])
def test_parse_date_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_date(value)