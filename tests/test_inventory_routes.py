import pytest
from flask import Flask

from watchstock.database import InventoryDB, Table
from watchstock.inventory_routes import error, inventory_blueprint, success
from watchstock.models import Product
from watchstock.sample import initialize_sample_data, sample_records


@pytest.fixture
def db(tmp_path):
    with InventoryDB(tmp_path / "store") as store:
        initialize_sample_data(store)
        yield store


@pytest.fixture
def client(db):
    app = Flask(__name__)
    app.register_blueprint(inventory_blueprint(db))
    return app.test_client()


def _sample(table):
    return next(record for t, _, record in sample_records() if t is table)


def test_success_envelope_converts_records():
    product = _sample(Table.PRODUCTS)
    body = success([product])
    assert body["success"] is True
    assert body["message"] is None
    assert body["data"] == [product.to_dict()]


def test_error_envelope():
    assert error("Product not found") == {
        "success": False,
        "data": None,
        "message": "Product not found",
    }


def test_get_all_products(client):
    response = client.get("/api/products")
    assert response.status_code == 200
    assert response.get_json()["data"] == [_sample(Table.PRODUCTS).to_dict()]


def test_get_product_and_missing(client):
    response = client.get("/api/products/PROD-001")
    assert response.status_code == 200
    assert response.get_json()["data"]["product_name"] == "BP Watch"

    missing = client.get("/api/products/NOPE")
    assert missing.status_code == 404
    assert missing.get_json() == error("Product not found")


def test_create_product_round_trip(client, db):
    payload = _sample(Table.PRODUCTS).to_dict()
    payload["product_id"] = "PROD-NEW"
    response = client.post("/api/products", json=payload)
    assert response.status_code == 201
    assert response.get_json()["data"] == "Product created"
    assert db.get_product("PROD-NEW") == Product.from_dict(payload)


def test_update_product_takes_id_from_path(client, db):
    payload = _sample(Table.PRODUCTS).to_dict()
    payload["product_id"] = "IGNORED"
    payload["waste"] = 9
    response = client.put("/api/products/PROD-001", json=payload)
    assert response.status_code == 200
    assert db.get_product("PROD-001").waste == 9
    assert db.get_product("IGNORED") is None


def test_delete_product_then_not_found(client):
    first = client.delete("/api/products/PROD-001")
    assert first.status_code == 200
    assert first.get_json()["data"] == "Product deleted"
    second = client.delete("/api/products/PROD-001")
    assert second.status_code == 404
    assert second.get_json()["message"] == "Product not found"


def test_bad_body_is_rejected(client, db):
    response = client.post("/api/products", json={"product_name": "x"})
    assert response.status_code == 400
    assert response.get_json()["success"] is False
    not_json = client.post("/api/products", data="nonsense")
    assert not_json.status_code == 400
    assert len(db.get_all_products()) == 1


def test_components_crud(client, db):
    assert client.get("/api/components/COMP-002").get_json()["data"]["component_name"] == (
        "Luminous Hands"
    )
    payload = _sample(Table.COMPONENTS).to_dict()
    response = client.put("/api/components/COMP-NEW", json=payload)
    assert response.status_code == 200
    assert db.get_component("COMP-NEW").component_id == "COMP-NEW"
    assert client.delete("/api/components/COMP-NEW").status_code == 200
    missing = client.get("/api/components/COMP-NEW")
    assert missing.status_code == 404
    assert missing.get_json()["message"] == "Component not found"


def test_record_movement_shifts_stock(client, db):
    component = _sample(Table.COMPONENTS).to_dict()
    component["component_id"] = "Dial"
    component["component_name"] = "Dial"
    assert client.post("/api/components", json=component).status_code == 201

    movement = _sample(Table.MOVEMENTS).to_dict()
    movement.update(movement_id="MOVE-XYZ", component_name="Dial",
                    source_location="CN", destination_location="Kling", quantity=5)
    response = client.post("/api/movements", json=movement)
    assert response.status_code == 201

    stored = db.get_component("Dial")
    assert stored.cn == component["cn"] - 5
    assert stored.kling == component["kling"] + 5
    fetched = client.get("/api/movements/MOVE-XYZ").get_json()["data"]
    assert fetched == movement


def test_movement_not_found(client):
    response = client.get("/api/movements/NONE")
    assert response.status_code == 404
    assert response.get_json()["message"] == "Movement not found"


def test_orders_crud(client, db):
    listing = client.get("/api/orders").get_json()["data"]
    assert listing == [_sample(Table.ORDERS).to_dict()]
    payload = _sample(Table.ORDERS).to_dict()
    payload["order_status"] = "Completed"
    assert client.put("/api/orders/ORD-001", json=payload).status_code == 200
    assert db.get_order("ORD-001").order_status == "Completed"
    assert client.delete("/api/orders/ORD-001").status_code == 200
    assert client.get("/api/orders/ORD-001").get_json()["message"] == "Order not found"


def test_inventory_levels(client):
    data = client.get("/api/inventory/CN").get_json()["data"]
    assert data == {"Premium Dial": 40, "Luminous Hands": 35}
    unknown = client.get("/api/inventory/Mars").get_json()["data"]
    assert set(unknown.values()) == {0}


def test_product_components_and_linking(client, db):
    data = client.get("/api/products/PROD-001/components").get_json()["data"]
    assert [c["component_id"] for c in data] == ["COMP-001", "COMP-002"]

    response = client.post("/api/products/PROD-001/components/COMP-009")
    assert response.status_code == 200
    assert response.get_json()["data"] == "Component added to product"
    assert db.get_product("PROD-001").components[-1] == "COMP-009"

    assert client.get("/api/products/NOPE/components").get_json()["data"] == []