# watchstock

Inventory tracking for a watch maker: finished products, their components,
stock movements between locations, customer and supplier orders,
procurements, assembly timelines, production rates, reorder points and
watch bills of materials. Records are kept in an LMDB environment on disk,
one named table per record type, and served as JSON over HTTP with Flask.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Running the server

    watchstock

The command opens (or creates) the database directory, empties every table
and fills the store with a small set of sample records, prints an inventory
summary, the sample product `PROD-001` and the component stock levels at the
`CN` location, and then serves the API.

Options:

- `--db PATH`: directory of the LMDB store (default `./inventory_db`)
- `--host HOST`: address to bind (default `127.0.0.1`)
- `--port PORT`: port to bind (default `8080`)

Note that every start replaces the contents of the store with the sample
data. The server is Flask's built-in development server (`app.run`); for
other deployments build the application yourself with
`watchstock.api.create_app`. There is no authentication.

## Stock locations

Component quantities are tracked per location: `CN`, `Kling`, `St Jakob`,
`Wurenlos` and `FLF`.

Recording a movement takes its quantity away from the source location and
adds it to the destination location. The component is looked up under the
key equal to the movement's `component_name`, so stock changes only when a
component is stored under that key; otherwise only the movement itself is
stored. Other location names leave the counts unchanged. A movement that
would bring a count below zero fails with `DatabaseError` and nothing is
written.

Asking for stock levels at an unknown location gives 0 for every component.

## HTTP API

Every response is a JSON object of the form

    {"success": true, "data": ..., "message": null}

or, on failure,

    {"success": false, "data": null, "message": "Product not found"}

Creating returns 201, a missing record 404, a body that is not JSON or not
a valid record 400, and a storage failure 500. Responses carry permissive
CORS headers, and each request is logged through the `watchstock.api`
logger.

| Resource           | Path                                  |
|--------------------|---------------------------------------|
| Products           | `/api/products`                       |
| Components         | `/api/components`                     |
| Movements          | `/api/movements` (list, get, record)  |
| Orders             | `/api/orders`                         |
| Supplier orders    | `/api/supplier-orders`                |
| Procurements       | `/api/procurements`                   |
| Assembly timelines | `/api/assembly-timeline`              |
| Production rates   | `/api/production-rates`               |
| Reorder points     | `/api/reorder-points`                 |
| Watches            | `/api/watches`                        |

Each collection answers `GET` on the collection and `POST` to create, and
`GET`, `PUT` and `DELETE` on `<path>/<id>` (movements: `GET` only). A `PUT`
stores the record under the id in the path, whatever id the body carries.

Also available:

- `GET /api/inventory/<location>`: component name to quantity at a location
- `GET /api/products/<id>/components`: the stored components a product lists
- `POST /api/products/<product_id>/components/<component_id>`: add a
  component id to a product's list (a missing product is left alone)

Dates are written as `YYYY-MM-DD`. Integer fields must be unsigned 64-bit
values.

## Using it from Python

    from watchstock.database import InventoryDB, Table
    from watchstock.sample import initialize_sample_data, print_inventory_summary
    from watchstock.api import create_app

    with InventoryDB("./inventory_db") as db:
        initialize_sample_data(db)
        print_inventory_summary(db)
        print(db.get_inventory_levels("Wurenlos"))
        print(db.get(Table.WATCHES, "WATCH-001"))
        app = create_app(db)

- `watchstock.models`: the record dataclasses (`Product`, `Component`,
  `Movement`, `SupplierOrder`, `Order`, `Procurement`, `Procurements`,
  `AssemblyTimeline`, `ProductionRate`, `ReorderPoint`, `Watch`), each with
  `to_dict()` and `from_dict()`, and `parse_date()`.
- `watchstock.database`: `InventoryDB` with typed helpers for products,
  components, movements and orders, generic `put`, `get`, `delete`, `all`
  and `clear_all` over a `Table`, and the `write_txn()` / `read_txn()`
  context managers for several operations in one transaction. Storage
  failures raise `DatabaseError`.
- `watchstock.sample`: `sample_records()`, `initialize_sample_data()`,
  `inventory_summary()` and `print_inventory_summary()`.
- `watchstock.inventory_routes` and `watchstock.record_routes`: the Flask
  blueprints; `watchstock.api.create_app()` registers both.
- `watchstock.cli`: the `watchstock` command.