"""
API tests for /api/v1/sales and /api/v1/purchases
"""

from datetime import timedelta

from conftest import BOB_TOKEN, TODAY, auth

SALES = "/api/v1/sales/"
PURCHASES = "/api/v1/purchases/"


def sale(**overrides):
    data = {
        "customer_name": "Acme",
        "subtotal": 75.00,
        "tax": 7.50,
        "status": "pending",
        "sale_date": TODAY.isoformat(),
    }
    data.update(overrides)
    return data


async def create_sale(client, token=None, **overrides):
    response = await client.post(SALES, json=sale(**overrides), headers=auth(token) if token else auth())
    assert response.status_code == 200, response.text
    return response.json()


class TestInvoiceTotals:
    async def test_total_is_subtotal_plus_tax(self, client):
        body = await create_sale(client)
        assert body["subtotal"] == 75.0
        assert body["tax"] == 7.5
        assert body["total"] == 82.5
        assert body["status_display"] == "Pending"

    async def test_caller_total_is_ignored(self, client):
        body = await create_sale(client, total=999)
        assert body["total"] == 82.5

    async def test_missing_tax_is_zero(self, client):
        body = await create_sale(client, tax=None)
        assert body["tax"] == 0
        assert body["total"] == 75.0

    async def test_update_recomputes_total(self, client):
        created = await create_sale(client)
        response = await client.put(f"{SALES}{created['id']}", json={"tax": 10}, headers=auth())
        assert response.json()["total"] == 85.0
        assert response.json()["customer_name"] == "Acme"

    async def test_purchase_total(self, client):
        response = await client.post(PURCHASES, json={
            "vendor_name": "Northwind", "subtotal": "100.10", "tax": "0.20",
            "status": "paid", "purchase_date": TODAY.isoformat(),
        }, headers=auth())
        assert response.status_code == 200
        assert response.json()["total"] == 100.3
        assert response.json()["status_display"] == "Paid"


class TestInvoiceValidation:
    async def test_subtotal_required(self, client):
        response = await client.post(SALES, json=sale(subtotal=0), headers=auth())
        assert response.status_code == 422
        assert response.json() == {"detail": "Subtotal must be greater than zero.", "field": "subtotal"}

    async def test_counterparty_required(self, client):
        response = await client.post(PURCHASES, json={"subtotal": 5}, headers=auth())
        assert response.json()["detail"] == "Vendor name is required."

    async def test_status_values(self, client):
        response = await client.post(SALES, json=sale(status="overdue"), headers=auth())
        assert response.json()["field"] == "status"

    async def test_invalid_update_keeps_record(self, client):
        created = await create_sale(client)
        response = await client.put(f"{SALES}{created['id']}", json={"subtotal": 0}, headers=auth())
        assert response.status_code == 422
        stored = (await client.get(f"{SALES}{created['id']}", headers=auth())).json()
        assert stored["total"] == 82.5


class TestCounterpartySelection:
    async def test_customer_fills_name(self, client):
        customer = (await client.post("/api/v1/customers/", json={"name": "Blue Harbor"}, headers=auth())).json()
        body = await create_sale(client, customer_name="", customer_id=customer["id"])
        assert body["customer_id"] == customer["id"]
        assert body["customer_name"] == "Blue Harbor"

    async def test_explicit_name_wins(self, client):
        customer = (await client.post("/api/v1/customers/", json={"name": "Blue Harbor"}, headers=auth())).json()
        body = await create_sale(client, customer_name="BH Cafe", customer_id=customer["id"])
        assert body["customer_name"] == "BH Cafe"

    async def test_other_users_customer_is_not_found(self, client):
        customer = (await client.post(
            "/api/v1/customers/", json={"name": "Bob's Client"}, headers=auth(BOB_TOKEN)
        )).json()
        response = await client.post(SALES, json=sale(customer_id=customer["id"]), headers=auth())
        assert response.status_code == 404

    async def test_deleting_customer_keeps_sale(self, client):
        customer = (await client.post("/api/v1/customers/", json={"name": "Acme"}, headers=auth())).json()
        created = await create_sale(client, customer_id=customer["id"])
        await client.delete(f"/api/v1/customers/{customer['id']}", headers=auth())
        stored = (await client.get(f"{SALES}{created['id']}", headers=auth())).json()
        assert stored["customer_id"] is None
        assert stored["customer_name"] == "Acme"


class TestInvoiceList:
    async def test_date_range_and_stats(self, client):
        await create_sale(client, subtotal=10, tax=0, status="paid")
        await create_sale(client, subtotal=20, tax=0, sale_date=(TODAY - timedelta(days=3)).isoformat())
        await create_sale(client, subtotal=30, tax=0, status="paid",
                          sale_date=(TODAY - timedelta(days=20)).isoformat())
        await create_sale(client, subtotal=40, tax=0, sale_date=(TODAY - timedelta(days=45)).isoformat())

        async def totals(**params):
            body = (await client.get(SALES, params=params, headers=auth())).json()
            return sorted(s["total"] for s in body["data"]), body["stats"]

        assert (await totals(date_range="today"))[0] == [10]
        assert (await totals(date_range="week"))[0] == [10, 20]
        assert (await totals(date_range="month"))[0] == [10, 20, 30]
        assert (await totals(date_range="month", status="paid"))[0] == [10, 30]

        rows, stats = await totals(status="pending")
        assert rows == [20, 40]
        assert stats == {"total_value": 100, "today_value": 10, "pending_amount": 60, "total_count": 4}

    async def test_search_by_customer(self, client):
        await create_sale(client, customer_name="Acme")
        await create_sale(client, customer_name="Blue Harbor")
        body = (await client.get(SALES, params={"search": "harb"}, headers=auth())).json()
        assert [s["customer_name"] for s in body["data"]] == ["Blue Harbor"]


class TestRecalculate:
    async def test_subtotal_from_line_items(self, client):
        created = await create_sale(client, subtotal=1, tax=7.5)
        for quantity, price in ((3, 25), (2, 10)):
            response = await client.post("/api/v1/sale-items/", json={
                "sale_id": created["id"], "product_name": "Widget", "quantity": quantity, "price": price,
            }, headers=auth())
            assert response.status_code == 200

        response = await client.post(f"{SALES}{created['id']}/recalculate", headers=auth())
        assert response.status_code == 200
        assert response.json()["subtotal"] == 95.0
        assert response.json()["total"] == 102.5

    async def test_purchase_without_items(self, client):
        created = (await client.post(PURCHASES, json={
            "vendor_name": "Northwind", "subtotal": 50, "tax": 5, "purchase_date": TODAY.isoformat(),
        }, headers=auth())).json()
        response = await client.post(f"{PURCHASES}{created['id']}/recalculate", headers=auth())
        assert response.json()["subtotal"] == 0
        assert response.json()["total"] == 5.0

    async def test_other_user(self, client):
        created = await create_sale(client)
        response = await client.post(f"{SALES}{created['id']}/recalculate", headers=auth(BOB_TOKEN))
        assert response.status_code == 404


class TestInvoiceRounding:
    async def test_amounts_rounded_to_cents_before_total(self, client):
        body = await create_sale(client, subtotal="10.005", tax="0.555")
        assert body["subtotal"] == 10.01
        assert body["tax"] == 0.56
        assert body["total"] == 10.57
        assert body["total"] == round(body["subtotal"] + body["tax"], 2)

    async def test_null_subtotal_on_update_keeps_stored_value(self, client):
        created = await create_sale(client)
        response = await client.put(f"{SALES}{created['id']}", json={"subtotal": None}, headers=auth())
        assert response.status_code == 200
        assert response.json()["total"] == 82.5
