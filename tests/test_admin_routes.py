from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront_admin.interfaces import admin_routes


def test_dashboard_endpoint(client):
    response = client.get("/api/dashboard")
    assert response.status_code == 200
    body = response.json()
    assert body["total_orders"] == 3
    assert body["total_revenue_display"] == "Rp 102.000"
    assert body["notice"] is None


def test_orders_endpoints(client):
    assert len(client.get("/api/orders").json()["orders"]) == 3
    detail = client.get("/api/orders/order-cccccccc-3").json()
    assert detail["total_items"] == 3
    assert client.get("/api/orders/missing").status_code == 404


def test_complete_order_endpoint(client):
    response = client.post("/api/orders/order-bbbbbbbb-2/complete")
    assert response.status_code == 200
    assert response.json()["status_text"] == "Selesai"
    assert client.post("/api/orders/order-bbbbbbbb-2/complete").status_code == 409
    assert client.post("/api/orders/missing/complete").status_code == 404


def test_admin_form_completes_and_redirects(client):
    response = client.post("/admin/orders/order-bbbbbbbb-2/complete", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/admin?section=orders"
    assert client.get("/api/orders/order-bbbbbbbb-2").json()["status"] == "completed"
    assert client.post("/admin/orders/missing/complete", follow_redirects=False).status_code == 404


def test_oversized_total_renders(client, seeded_store):
    seeded_store.add("orders", {"status": "pending", "totalAmount": "1e30", "createdAt": "2024-06-01T00:00:00Z"}, doc_id="order-huge")
    assert client.get("/api/orders").status_code == 200
    assert client.get("/admin", params={"section": "orders"}).status_code == 200


def test_customers_reports_products(client):
    customers = client.get("/api/customers").json()["customers"]
    assert {c["id"] for c in customers} == {"cust-1", "cust-2"}
    report = client.get("/api/reports").json()
    assert set(report) >= {"today", "week", "month", "year", "today_display"}
    assert len(client.get("/api/products").json()["products"]) == 2


def test_delete_product_endpoint(client):
    assert client.delete("/api/products/prod-2").json() == {"deleted": True}
    assert client.delete("/api/products/prod-2").status_code == 404


def test_admin_page_renders_sections(client):
    page = client.get("/admin")
    assert page.status_code == 200
    assert "Rp 102.000" in page.text
    assert "#order-aa" in page.text

    orders = client.get("/admin", params={"section": "orders"}).text
    assert "Manajemen Pesanan" in orders
    assert "Tandai Selesai" in orders

    customers = client.get("/admin", params={"section": "customers"}).text
    assert "2 pesanan" in customers

    assert "Pashmina Silk" in client.get("/admin", params={"section": "products"}).text
    assert 'id="yearSales"' in client.get("/admin", params={"section": "reports"}).text


def test_unknown_section_falls_back_to_dashboard(client):
    assert 'id="totalOrders"' in client.get("/admin", params={"section": "nope"}).text


def test_store_failure(broken_service):
    app = FastAPI()
    app.state.dashboard = broken_service
    app.include_router(admin_routes.router)
    client = TestClient(app)

    body = client.get("/api/dashboard").json()
    assert body["notice"] is not None
    assert client.get("/admin").status_code == 200
    assert client.get("/api/orders/o1").status_code == 503
    assert client.delete("/api/products/p1").status_code == 503
