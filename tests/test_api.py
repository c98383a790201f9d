from sqlalchemy.exc import OperationalError

from bodega.modules.sales.repository import SalesRepository


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_cancel_order_flow(client, make_order):
    order = make_order()

    response = client.post("/api/v1/bodega/cancelar-pedido", json={"pedido_id": order.id, "motivo": "Sin stock"})
    assert response.status_code == 200
    body = response.json()
    assert body["pedido_id"] == order.id
    assert body["estado"] == "cancelado"
    assert body["motivo"] == "Sin stock"

    response = client.post("/api/v1/bodega/cancelar-pedido", json={"pedido_id": order.id, "motivo": "Otra vez"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "STATE_CONFLICT"

    response = client.get(f"/api/v1/bodega/pedidos/{order.id}")
    assert response.status_code == 200
    assert response.json()["notes"] == "Cancelado por bodega: Sin stock"


def test_cancel_without_reason_is_400(client, make_order):
    order = make_order()

    response = client.post("/api/v1/farmacias/cancelar-pedido", json={"pedido_id": order.id})

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_confirm_missing_order_is_404(client):
    response = client.post("/api/v1/bodega/confirmar-pedido", json={"pedido_id": 12345})

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


def test_record_sale_returns_201(client, make_item):
    item = make_item("Paracetamol", stock=10)

    response = client.post("/api/v1/ventas-bodega", json={"detalles": [
        {"IDMedicamento": item.id, "Stock": 2, "PrecioUnitario": 10, "PrecioSubtotal": 20},
    ]})

    assert response.status_code == 201
    assert response.json()["IDVenta"] > 0

    inventory = client.get("/api/v1/inventarioBodega").json()
    assert inventory[0]["stock"] == 8


def test_sale_with_malformed_line_is_400(client, make_item):
    item = make_item("Paracetamol", stock=10)

    response = client.post("/api/v1/ventas-bodega", json={"detalles": [
        {"IDMedicamento": item.id, "Stock": 0, "PrecioUnitario": 10, "PrecioSubtotal": 0},
    ]})

    assert response.status_code == 400
    assert response.json()["message"] == "Datos de entrada inválidos"


def test_storage_failure_is_500(client, make_item, monkeypatch):
    item = make_item("Paracetamol", stock=10)

    def broken_decrement(self, item_id, quantity):
        raise OperationalError("UPDATE medicamentos_bodega", {}, Exception("connection lost"))

    monkeypatch.setattr(SalesRepository, "decrement_stock", broken_decrement)

    response = client.post("/api/v1/ventas-bodega", json={"detalles": [
        {"IDMedicamento": item.id, "Stock": 1, "PrecioUnitario": 10, "PrecioSubtotal": 10},
    ]})

    assert response.status_code == 500
    body = response.json()
    assert body["error_code"] == "TRANSACTION_FAILED"
    assert body["message"] == "Error al registrar la venta"


def test_replenish_endpoints(client, make_item):
    a = make_item("Paracetamol", stock=1)
    b = make_item("Ibuprofeno", stock=1)

    response = client.put(f"/api/v1/medicamentos-bodega/{a.id}/reabastecer", json={"cantidad": 4})
    assert response.status_code == 200

    response = client.put(f"/api/v1/medicamentos-bodega/{a.id}/reabastecer", json={"cantidad": 0})
    assert response.status_code == 400

    response = client.put("/api/v1/medicamentos-bodega/reabastecer-multiple", json=[
        {"id": a.id, "cantidad": 5},
        {"id": b.id, "cantidad": "x"},
    ])
    assert response.status_code == 200
    assert response.json()["summary"] == {"total": 2, "succeeded": 1, "failed": 1}

    stocks = {i["generic_name"]: i["stock"] for i in client.get("/api/v1/inventarioBodega").json()}
    assert stocks == {"Paracetamol": 10, "Ibuprofeno": 1}

    low = client.get("/api/v1/inventarioBodega/bajoStock", params={"threshold": 5}).json()
    assert [i["generic_name"] for i in low] == ["Ibuprofeno"]


def test_sync_stock_endpoint(client, pharmacy_table):
    response = client.post("/api/v1/bodega/actualizar-stock", json={
        "tablaFarmacia": pharmacy_table.name,
        "productos": [{"nombreProducto": "Ibuprofeno", "cantidadProducto": 2}],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["tabla_farmacia"] == pharmacy_table.name
    assert body["results"][0]["updated_stock"] == 2

    response = client.post("/api/v1/bodega/actualizar-stock", json={
        "tablaFarmacia": "no_existe",
        "productos": [],
    })
    assert response.status_code == 404


def test_ledger_endpoints(client):
    response = client.post("/api/v1/transacciones-bodega", json={"descripcion": "Venta", "monto": 100, "tipo": "ingreso"})
    assert response.status_code == 201
    assert response.json()["movement"]["tipo"] == "ingreso"

    response = client.post("/api/v1/transacciones-bodega", json={"descripcion": "Luz", "monto": 30, "tipo": "egreso"})
    assert response.status_code == 201

    response = client.post("/api/v1/transacciones-bodega", json={"descripcion": "Luz", "monto": 30, "tipo": "otro"})
    assert response.status_code == 400

    assert client.get("/api/v1/saldo-bodega").json() == {"saldo": 70.0, "ingresos": 100.0, "egresos": 30.0}

    movements = client.get("/api/v1/movimientos-bodega").json()["movimientos"]
    assert [m["descripcion"] for m in movements] == ["Luz", "Venta"]


def test_sync_stock_with_unhashable_name_is_not_500(client, pharmacy_table, pharmacy_stock):
    response = client.post("/api/v1/bodega/actualizar-stock", json={
        "tablaFarmacia": pharmacy_table.name,
        "productos": [
            {"nombreProducto": ["Paracetamol"], "cantidadProducto": 1},
            {"nombreProducto": "Ibuprofeno", "cantidadProducto": 2},
        ],
    })

    assert response.status_code == 200
    assert [r["status"] for r in response.json()["results"]] == ["error", "success"]
    assert pharmacy_stock("Ibuprofeno") == 2


def test_movements_legacy_path(client):
    client.post("/api/v1/transacciones-bodega", json={"descripcion": "Venta", "monto": 10, "tipo": "ingreso"})

    response = client.get("/api/v1/movimientosGet")

    assert response.status_code == 200
    assert [m["descripcion"] for m in response.json()["movimientos"]] == ["Venta"]


def test_items_summary_listing(client, make_item):
    item = make_item("Paracetamol", stock=7)

    response = client.get("/api/v1/medicamentos-bodega")

    assert response.status_code == 200
    assert response.json() == [
        {"ID": item.id, "NombreGenerico": "Paracetamol", "Stock": 7, "FechaFabricacion": None}
    ]


def test_keepalive(client):
    response = client.get("/api/v1/keepalive")

    assert response.status_code == 200
    assert response.text == "Server is alive!"
