# tests/test_api.py
from datetime import date


def test_root(client):
    assert client.get("/").json() == {"message": "Stockdesk API is running"}


# === Products ===

def test_list_and_filter_products(client):
    assert [p["sku"] for p in client.get("/products").json()] == ["APL-001", "MLK-001", "CHS-001"]
    assert [p["name"] for p in client.get("/products", params={"stock_level": "low"}).json()] == ["Cheese"]
    assert [p["name"] for p in client.get("/products", params={"search": "milk"}).json()] == ["Milk"]
    assert client.get("/products", params={"stock_level": "empty"}).status_code == 422


def test_categories_low_stock_and_expiring(client):
    assert client.get("/products/categories").json() == {"categories": ["Dairy", "Produce"]}
    assert [p["id"] for p in client.get("/products/low-stock").json()] == [2, 3]
    assert client.get("/products/expiring", params={"days": 30}).json() == []


def test_expired_products(client):
    assert client.get("/products/expired").json() == []

    client.patch("/products/3", json={"expiration_date": "2020-01-01"})
    assert [p["id"] for p in client.get("/products/expired").json()] == [3]
    assert client.get("/reports/dashboard").json()["expired_products"][0]["sku"] == "CHS-001"


def test_get_missing_product(client):
    r = client.get("/products/999")
    assert r.status_code == 404
    assert r.json()["detail"] == "Product not found"


def test_create_product(client):
    r = client.post("/products", json={
        "sku": " brd-001 ", "name": "Bread", "category": "Bakery",
        "current_stock": 12, "reorder_level": 4, "unit_cost": 1.2, "selling_price": 2.5,
    })
    assert r.status_code == 201
    body = r.json()
    assert body["id"] == 4
    assert body["sku"] == "BRD-001"
    assert body["created_at"] == date.today().isoformat()


def test_create_product_with_duplicate_sku(client):
    r = client.post("/products", json={"sku": "apl-001", "name": "More apples"})
    assert r.status_code == 400
    assert r.json()["detail"] == "SKU already exists"


def test_create_product_rejects_negative_stock(client):
    r = client.post("/products", json={"sku": "X-1", "name": "X", "current_stock": -3})
    assert r.status_code == 422


def test_patch_product_stock_logs_adjustment(client):
    r = client.patch("/products/3", json={"current_stock": 9})
    assert r.status_code == 200
    assert r.json()["current_stock"] == 9

    history = client.get("/stock/product/3").json()
    assert history[0]["reason"] == "Stock Adjustment"
    assert history[0]["type"] == "IN"
    assert history[0]["quantity"] == 4


def test_overwrite_stock_logs_nothing(client):
    r = client.patch("/products/3/stock", json={"current_stock": 1})
    assert r.json()["current_stock"] == 1
    assert len(client.get("/stock").json()) == 2


def test_patch_missing_product(client):
    r = client.patch("/products/404", json={"name": "Nope"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Product not found"


def test_delete_product_keeps_history(client):
    assert client.delete("/products/1").json() == {"ok": True}
    assert client.get("/products/1").status_code == 404
    assert client.delete("/products/1").status_code == 404

    movement = next(m for m in client.get("/stock").json() if m["id"] == 1)
    assert movement["product_name"] == "Unknown Product"
    assert movement["product_sku"] == "N/A"


# === Suppliers ===

def test_supplier_crud(client):
    r = client.post("/suppliers", json={"name": "Bakehouse", "payment_terms": "Net 45"})
    assert r.status_code == 201
    supplier_id = r.json()["id"]

    r = client.patch(f"/suppliers/{supplier_id}", json={"phone": "555-3000"})
    assert r.json()["phone"] == "555-3000"
    assert r.json()["payment_terms"] == "Net 45"

    assert [s["id"] for s in client.get("/suppliers", params={"search": "bake"}).json()] == [supplier_id]
    assert client.delete(f"/suppliers/{supplier_id}").json() == {"ok": True}
    assert client.get(f"/suppliers/{supplier_id}").status_code == 404


def test_supplier_rejects_unknown_terms(client):
    assert client.post("/suppliers", json={"name": "X", "payment_terms": "Net 90"}).status_code == 422


# === Stock movements ===

def test_movements_newest_first(client):
    movements = client.get("/stock").json()
    assert [m["id"] for m in movements] == [2, 1]
    assert movements[0]["product_name"] == "Cheese"


def test_movement_filters(client):
    assert [m["id"] for m in client.get("/stock", params={"type": "IN"}).json()] == [1]
    assert [m["id"] for m in client.get("/stock", params={"search": "dmg"}).json()] == [2]
    assert client.get("/stock", params={"reason": "Lost"}).status_code == 422


def test_reasons(client):
    reasons = client.get("/stock/reasons").json()
    assert reasons[0] == "Purchase Order"
    assert "Expiry Adjustment" in reasons


def test_record_movement(client):
    r = client.post("/stock", json={"product_id": 2, "type": "IN", "quantity": 24, "reason": "Purchase Order"})
    assert r.status_code == 201
    assert r.json()["reference_id"].startswith("MAN-")
    assert client.get("/products/2").json()["current_stock"] == 24


def test_record_movement_rejects_zero_quantity(client):
    r = client.post("/stock", json={"product_id": 2, "type": "IN", "quantity": 0, "reason": "Return"})
    assert r.status_code == 422


def test_get_and_delete_movement(client):
    assert client.get("/stock/1").json()["reference_id"] == "PO-2024-001"
    assert client.delete("/stock/1").json() == {"ok": True}
    assert client.get("/stock/1").status_code == 404
    # Stock is not rolled back
    assert client.get("/products/1").json()["current_stock"] == 50


def test_recent_movements(client):
    assert [m["id"] for m in client.get("/stock/recent", params={"limit": 1}).json()] == [2]


# === Sales orders ===

def test_sales_orders_newest_first(client):
    assert [o["order_number"] for o in client.get("/sales-orders").json()] == ["SO-2024-002", "SO-2024-001"]
    assert [o["id"] for o in client.get("/sales-orders", params={"status": "Fulfilled"}).json()] == [1]
    assert [o["id"] for o in client.get("/sales-orders", params={"search": "deli"}).json()] == [2]


def test_sales_order_detail(client):
    detail = client.get("/sales-orders/1").json()
    assert detail["lines"][0]["product_name"] == "Apples"
    assert detail["lines"][0]["line_total"] == 20.0

    r = client.get("/sales-orders/99")
    assert r.status_code == 404
    assert r.json()["detail"] == "Sales order not found"


def test_create_sales_order(client):
    r = client.post("/sales-orders", json={
        "customer_name": "  Corner Bistro ",
        "items": [{"product_id": 1, "quantity": 4, "unit_price": 2.0}, {"product_id": None}],
    })
    assert r.status_code == 201
    body = r.json()
    assert body["customer_name"] == "Corner Bistro"
    assert body["order_number"] == f"SO-{date.today().year}-003"
    assert body["total_amount"] == 8.0
    assert len(body["items"]) == 1


def test_create_sales_order_without_items(client):
    r = client.post("/sales-orders", json={"customer_name": "Corner Bistro", "items": []})
    assert r.status_code == 400
    assert r.json()["detail"] == "Please add at least one item to the order"


def test_fulfil_sales_order(client):
    r = client.patch("/sales-orders/2/status", json={"status": "Fulfilled"})
    assert r.status_code == 200
    assert r.json()["fulfillment_date"] == date.today().isoformat()
    assert client.get("/products/3").json()["current_stock"] == 3

    r = client.patch("/sales-orders/2/status", json={"status": "Lost"})
    assert r.status_code == 422


def test_rename_and_delete_sales_order(client):
    assert client.patch("/sales-orders/2", json={"customer_name": "Harbour Deli"}).json()["customer_name"] == "Harbour Deli"
    assert client.delete("/sales-orders/2").json() == {"ok": True}
    assert client.delete("/sales-orders/2").status_code == 404


# === Purchase orders ===

def test_purchase_orders(client):
    r = client.post("/purchase-orders", json={
        "supplier_id": 2,
        "items": [{"product_id": 2, "quantity": 30, "unit_price": 0.5}],
        "expected_delivery": "2024-04-01",
    })
    assert r.status_code == 201
    po = r.json()
    assert po["po_number"] == f"PO-{date.today().year}-002"
    assert po["status"] == "Ordered"

    assert [o["id"] for o in client.get("/purchase-orders", params={"supplier_id": 2}).json()] == [po["id"]]
    r = client.patch(f"/purchase-orders/{po['id']}/status", json={"status": "Shipped"})
    assert r.json()["status"] == "Shipped"


def test_purchase_order_for_unknown_supplier(client):
    r = client.post("/purchase-orders", json={
        "supplier_id": 42, "items": [{"product_id": 2, "quantity": 1, "unit_price": 1.0}],
    })
    assert r.status_code == 404
    assert r.json()["detail"] == "Supplier not found"


# === Reports ===

def test_dashboard(client):
    body = client.get("/reports/dashboard").json()
    assert body["stock_health"]["total_products"] == 3
    assert body["stock_health"]["out_of_stock_count"] == 1
    assert body["supplier_count"] == 2
    assert [p["name"] for p in body["low_stock_items"]] == ["Cheese"]
    assert [m["id"] for m in body["recent_movements"]] == [2, 1]


def test_report_summary(client):
    r = client.get("/reports/summary", params={"start_date": "2024-03-01", "end_date": "2024-03-31"})
    assert r.status_code == 200
    body = r.json()
    assert body["date_range"] == {"start_date": "2024-03-01", "end_date": "2024-03-31"}
    assert body["sales_stats"]["total_revenue"] == 20.0
    assert body["movement_series"]["dates"] == ["2024-03-01", "2024-03-05"]


def test_report_summary_rejects_bad_dates(client):
    assert client.get("/reports/summary", params={"start_date": "03/01/2024"}).status_code == 400
    r = client.get("/reports/summary", params={"start_date": "2024-04-01", "end_date": "2024-03-01"})
    assert r.status_code == 400


def test_report_export(client):
    r = client.get("/reports/export", params={"start_date": "2024-03-01", "end_date": "2024-03-31"})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert f'inventory-report-{date.today().isoformat()}.json' in r.headers["content-disposition"]
    assert "movement_series" not in r.json()
