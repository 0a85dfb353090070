"""
API tests for /api/v1/sale-items and /api/v1/purchase-items
"""

import pytest_asyncio

from conftest import BOB_TOKEN, TODAY, auth

SALE_ITEMS = "/api/v1/sale-items/"
PURCHASE_ITEMS = "/api/v1/purchase-items/"


@pytest_asyncio.fixture
async def sale_id(client):
    response = await client.post("/api/v1/sales/", json={
        "customer_name": "Acme", "subtotal": 1, "sale_date": TODAY.isoformat(),
    }, headers=auth())
    return response.json()["id"]


@pytest_asyncio.fixture
async def widget(client):
    response = await client.post("/api/v1/products/", json={
        "name": "Widget", "category": "Tools", "quantity": 4, "price": 2.5, "min_stock": 10,
    }, headers=auth())
    return response.json()


class TestLineTotal:
    async def test_quantity_times_price(self, client, sale_id):
        response = await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_name": "Widget", "quantity": 3, "price": 25.00,
        }, headers=auth())
        assert response.status_code == 200
        assert response.json()["total"] == 75.0

    async def test_update_recomputes_total(self, client, sale_id):
        created = (await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_name": "Widget", "quantity": 3, "price": 25,
        }, headers=auth())).json()
        response = await client.put(f"{SALE_ITEMS}{created['id']}", json={"quantity": 4}, headers=auth())
        assert response.json()["total"] == 100.0
        assert response.json()["price"] == 25.0

    async def test_quantity_must_be_positive(self, client, sale_id):
        response = await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_name": "Widget", "quantity": 0, "price": 25,
        }, headers=auth())
        assert response.status_code == 422
        assert response.json() == {"detail": "Quantity must be greater than zero.", "field": "quantity"}

    async def test_parent_required(self, client):
        response = await client.post(PURCHASE_ITEMS, json={"product_name": "Widget", "price": 1}, headers=auth())
        assert response.status_code == 422
        assert response.json()["detail"] == "Purchase selection is required."


class TestProductSelection:
    async def test_fills_name_and_price(self, client, sale_id, widget):
        response = await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_id": widget["id"], "quantity": 4,
        }, headers=auth())
        body = response.json()
        assert body["product_name"] == "Widget"
        assert body["price"] == 2.5
        assert body["total"] == 10.0

    async def test_explicit_price_wins(self, client, sale_id, widget):
        response = await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_id": widget["id"], "quantity": 2, "price": 3,
        }, headers=auth())
        assert response.json()["price"] == 3.0
        assert response.json()["total"] == 6.0

    async def test_deleting_product_keeps_item(self, client, sale_id, widget):
        created = (await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_id": widget["id"], "quantity": 1,
        }, headers=auth())).json()
        await client.delete(f"/api/v1/products/{widget['id']}", headers=auth())
        stored = (await client.get(f"{SALE_ITEMS}{created['id']}", headers=auth())).json()
        assert stored["product_id"] is None
        assert stored["product_name"] == "Widget"


class TestListLineItems:
    async def test_filter_by_parent_and_stats(self, client, sale_id):
        other = (await client.post("/api/v1/sales/", json={
            "customer_name": "Beta", "subtotal": 1, "sale_date": TODAY.isoformat(),
        }, headers=auth())).json()["id"]
        for parent, quantity, price in ((sale_id, 3, 25), (sale_id, 1, 5), (other, 2, 10)):
            await client.post(SALE_ITEMS, json={
                "sale_id": parent, "product_name": "Widget", "quantity": quantity, "price": price,
            }, headers=auth())

        body = (await client.get(SALE_ITEMS, params={"sale_id": sale_id}, headers=auth())).json()
        assert sorted(item["total"] for item in body["data"]) == [5.0, 75.0]
        assert body["stats"] == {"total_items": 3, "total_value": 100.0, "avg_price": 100 / 3}

    async def test_deleting_sale_removes_items(self, client, sale_id):
        await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_name": "Widget", "quantity": 1, "price": 1,
        }, headers=auth())
        await client.delete(f"/api/v1/sales/{sale_id}", headers=auth())
        body = (await client.get(SALE_ITEMS, headers=auth())).json()
        assert body["total"] == 0


class TestLineItemIsolation:
    async def test_cannot_attach_to_other_users_sale(self, client, sale_id):
        response = await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_name": "Widget", "quantity": 1, "price": 1,
        }, headers=auth(BOB_TOKEN))
        assert response.status_code == 404
        assert response.json()["detail"] == f"Sale {sale_id} not found."


class TestMoneyRounding:
    async def test_total_matches_stored_price(self, client, sale_id):
        response = await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_name": "Widget", "quantity": 3, "price": "0.335",
        }, headers=auth())
        body = response.json()
        assert body["price"] == 0.34
        assert body["total"] == 1.02

        stored = (await client.get(f"{SALE_ITEMS}{body['id']}", headers=auth())).json()
        assert stored["total"] == round(stored["quantity"] * stored["price"], 2)

    async def test_strict_numbers_still_rounds(self, client, sale_id, strict_numbers):
        response = await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_name": "Widget", "quantity": 3, "price": "0.335",
        }, headers=auth())
        assert response.status_code == 200
        assert response.json()["total"] == 1.02

    async def test_null_quantity_on_update_keeps_stored_value(self, client, sale_id):
        created = (await client.post(SALE_ITEMS, json={
            "sale_id": sale_id, "product_name": "Widget", "quantity": 2, "price": 5,
        }, headers=auth())).json()
        response = await client.put(f"{SALE_ITEMS}{created['id']}", json={"quantity": None}, headers=auth())
        assert response.status_code == 200
        assert response.json()["quantity"] == 2
        assert response.json()["total"] == 10.0
