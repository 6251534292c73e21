"""
HTTP surface: routing, status codes and error mapping.
"""
import pytest
from fastapi.testclient import TestClient

from wholesale_store.api import state
from wholesale_store.api.main import app


@pytest.fixture
def client(settings):
    # Fresh seed catalog per test
    state.reload_data(settings)
    return TestClient(app)


def test_root(client):
    assert client.get("/").json() == {"status": "online", "message": "Wholesale Store API Active"}


def test_system_status(client):
    body = client.get("/system/status").json()
    assert body["products_count"] == 6
    assert body["customers_count"] == 4
    assert body["active_rules_count"] == 2
    assert body["orders_count"] == 0
    assert body["atomic_stock_reservation"] is False


# Search

def test_search(client):
    body = client.get("/api/search", params={"query": "laptop"}).json()
    assert body["result_count"] == 2
    assert body["max_results"] == 20
    assert [p["id"] for p in body["products"]] == [3, 6]


@pytest.mark.parametrize("max_results", [0, 101])
def test_search_bounds(client, max_results):
    response = client.get("/api/search", params={"query": "laptop", "maxResults": max_results})
    assert response.status_code == 400
    assert response.json()["detail"] == "maxResults must be between 1 and 100"


def test_search_max_results_upper_bound_is_inclusive(client):
    assert client.get("/api/search", params={"query": "cable", "maxResults": 100}).status_code == 200


def test_suggestions(client):
    body = client.get("/api/search/suggestions", params={"partial": "wi"}).json()
    assert body == {"partial_query": "wi", "suggestions": ["wireless", "with", "wire"], "suggestion_count": 3}


def test_suggestions_bounds(client):
    response = client.get("/api/search/suggestions", params={"partial": "wi", "maxSuggestions": 21})
    assert response.status_code == 400


def test_categories(client):
    body = client.get("/api/search/categories").json()
    assert body["category_count"] == 5


def test_related_requires_query(client):
    response = client.get("/api/search/related", params={"query": "  "})
    assert response.status_code == 400
    assert response.json()["error_type"] == "InvalidArgumentError"


def test_related(client):
    body = client.get("/api/search/related", params={"query": "laptop"}).json()
    assert body["related_terms"] == ["notebook", "computer", "pc", "stand"]
    assert body["related_count"] == 4


def test_comprehensive(client):
    body = client.get("/api/search/comprehensive", params={"query": "laptop"}).json()
    assert body["search_results"]["count"] == 2
    assert body["categories"][0] == "Audio"


# Pricing

def test_quote(client):
    response = client.post("/api/pricing/quote", json={"customer_id": 3, "items": [{"product_id": 1, "quantity": 6}]})
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == pytest.approx(433.45)
    assert body["items"][0]["discounted_price"] == pytest.approx(84.99)
    assert body["customer_type"] == "Wholesale"


def test_quote_merges_repeated_products(client):
    body = client.post("/api/pricing/quote", json={
        "customer_id": 3,
        "items": [{"product_id": 1, "quantity": 3}, {"product_id": 1, "quantity": 3}],
    }).json()
    assert len(body["items"]) == 1
    assert body["items"][0]["quantity"] == 6


def test_quote_unknown_customer(client):
    response = client.post("/api/pricing/quote", json={"customer_id": 99, "items": [{"product_id": 1, "quantity": 1}]})
    assert response.status_code == 404
    assert response.json()["error_type"] == "NotFoundError"


def test_quote_insufficient_stock(client):
    response = client.post("/api/pricing/quote", json={"customer_id": 3, "items": [{"product_id": 1, "quantity": 51}]})
    assert response.status_code == 400
    assert "insufficient stock" in response.json()["detail"]


@pytest.mark.parametrize("payload", [
    {"customer_id": 3, "items": []},
    {"customer_id": 3, "items": [{"product_id": 1, "quantity": 0}]},
])
def test_quote_rejects_malformed_body(client, payload):
    assert client.post("/api/pricing/quote", json=payload).status_code == 422


def test_rules(client):
    rules = client.get("/api/pricing/rules").json()
    assert [r["id"] for r in rules] == [1, 2]
    assert rules[0]["discount_factor"] == pytest.approx(0.9)


def test_price_list(client):
    body = client.get("/api/pricing/products/1").json()
    assert body["customer_type"] == "Retail"
    assert body["products"][0]["calculated_price"] == pytest.approx(99.99)


def test_quote_from_query_parameters(client):
    response = client.get("/api/pricing/quote/3", params=[
        ("productId", 1), ("quantity", 2), ("productId", 4), ("quantity", 0),
    ])
    assert response.status_code == 200
    body = response.json()
    # The zero-quantity line is dropped
    assert [i["product_id"] for i in body["items"]] == [1]
    assert body["items"][0]["quantity"] == 2
    assert body["total"] == pytest.approx(179.98)


def test_quote_from_query_mismatched_counts(client):
    response = client.get("/api/pricing/quote/3", params=[("productId", 1), ("productId", 2), ("quantity", 1)])
    assert response.status_code == 400
    assert response.json()["detail"] == "Product IDs and quantities must be provided and have the same count"


def test_quote_from_query_without_positive_quantities(client):
    response = client.get("/api/pricing/quote/3", params=[("productId", 1), ("quantity", 0)])
    assert response.status_code == 400
    assert response.json()["detail"] == "At least one product with quantity greater than 0 must be specified"


def test_quote_from_query_unknown_customer(client):
    response = client.get("/api/pricing/quote/99", params=[("productId", 1), ("quantity", 1)])
    assert response.status_code == 404


def test_compare(client):
    body = client.post("/api/pricing/compare", json={"product_ids": [2]}).json()
    assert body["comparison"][0]["wholesale_price"] == pytest.approx(179.99)


# Orders

def test_order_lifecycle(client):
    response = client.post("/api/orders", json={"customer_id": 3, "items": [{"product_id": 1, "quantity": 2}]})
    assert response.status_code == 201
    order = response.json()
    assert order["status"] == "Confirmed"
    assert order["items"][0]["total_price"] == pytest.approx(179.98)

    stock = client.get("/api/products/stock/1").json()
    assert stock["stock"] == 48
    assert stock["stock_status"] == "In Stock"

    assert client.get(f"/api/orders/{order['id']}").json()["id"] == order["id"]
    assert len(client.get("/api/orders").json()) == 1

    response = client.put(f"/api/orders/{order['id']}/status", json={"status": "shipped"})
    assert response.json() == {"message": "Order status updated successfully", "status": "Shipped"}


def test_order_insufficient_stock(client):
    response = client.post("/api/orders", json={"customer_id": 3, "items": [{"product_id": 2, "quantity": 31}]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient stock for one or more products."


def test_order_bad_status(client):
    order = client.post("/api/orders", json={"customer_id": 3, "items": [{"product_id": 1, "quantity": 1}]}).json()
    response = client.put(f"/api/orders/{order['id']}/status", json={"status": "Lost"})
    assert response.status_code == 400


def test_order_status_missing_field(client):
    # Unknown order is reported before the blank status
    assert client.put("/api/orders/42/status", json={}).status_code == 404

    order = client.post("/api/orders", json={"customer_id": 3, "items": [{"product_id": 1, "quantity": 1}]}).json()
    response = client.put(f"/api/orders/{order['id']}/status", json={})
    assert response.status_code == 400
    assert response.json()["error_type"] == "InvalidArgumentError"


def test_unknown_order(client):
    assert client.get("/api/orders/42").status_code == 404


# Catalog

def test_customer_crud(client):
    response = client.post("/api/customers", json={
        "name": "Corner Shop", "email": "owner@corner.shop", "customer_type": "Retail",
    })
    assert response.status_code == 201
    customer_id = response.json()["id"]

    response = client.put(f"/api/customers/{customer_id}", json={
        "name": "Corner Shop Ltd", "email": "owner@corner.shop", "customer_type": "Wholesale",
    })
    assert response.json()["customer_type"] == "Wholesale"

    assert client.delete(f"/api/customers/{customer_id}").status_code == 204
    assert client.get(f"/api/customers/{customer_id}").status_code == 404


def test_customer_type_any_casing(client):
    response = client.post("/api/customers", json={
        "name": "Lower Case", "email": "lower@case.com", "customer_type": "wholesale",
    })
    assert response.status_code == 201
    assert response.json()["customer_type"] == "Wholesale"

    response = client.post("/api/customers", json={
        "name": "Vip", "email": "vip@case.com", "customer_type": "vip",
    })
    assert response.status_code == 422


def test_duplicate_customer_email(client):
    response = client.post("/api/customers", json={
        "name": "Copy", "email": "john.smith@email.com", "customer_type": "Retail",
    })
    assert response.status_code == 400


def test_products(client):
    assert len(client.get("/api/products").json()) == 6
    assert client.get("/api/products/4").json()["name"] == "USB-C Cable"
    assert client.get("/api/products/999").status_code == 404
    assert client.get("/api/products/stock/999").status_code == 404
