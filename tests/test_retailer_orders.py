def bulk_payload(retailer_id, *items, **extra):
    payload = {
        "retailerId": retailer_id,
        "items": list(items),
        "deliveryAddress": "12 Market Road",
        "paymentMethod": "bank_transfer",
    }
    payload.update(extra)
    return payload


def test_verified_retailer_places_bulk_order(client, verified_retailer, milk_item):
    response = client.post("/retailer-orders", json=bulk_payload(
        verified_retailer["id"], dict(milk_item, quantity=20), bulkOrderDiscount=50,
    ))
    assert response.status_code == 201
    order = response.json()
    assert order["bulkOrderDiscount"] == 50
    assert order["totalAmount"] == 850
    assert order["status"] == "pending"
    assert order["paymentStatus"] == "pending"
    assert client.get("/products/1").json()["stock"] == 30


def test_pending_retailer_is_forbidden(client, retailer_payload, milk_item):
    retailer = client.post("/retailers/register", json=retailer_payload).json()
    response = client.post("/retailer-orders", json=bulk_payload(retailer["id"], milk_item))
    assert response.status_code == 403
    assert response.json()["message"] == "Retailer account is not verified. Current status: pending"
    assert client.get("/products/1").json()["stock"] == 50


def test_rejected_retailer_is_forbidden(client, retailer_payload, milk_item):
    retailer = client.post("/retailers/register", json=retailer_payload).json()
    client.patch(f"/retailers/{retailer['id']}/verification", json={"status": "rejected"})
    response = client.post("/retailer-orders", json=bulk_payload(retailer["id"], milk_item))
    assert response.status_code == 403
    assert client.get(f"/retailers/{retailer['id']}/orders").json() == []


def test_unknown_retailer_is_404(client, milk_item):
    assert client.post("/retailer-orders", json=bulk_payload(5, milk_item)).status_code == 404


def test_bulk_order_short_of_stock(client, verified_retailer, milk_item, banana_item):
    response = client.post("/retailer-orders", json=bulk_payload(
        verified_retailer["id"], dict(milk_item, quantity=10), dict(banana_item, quantity=10),
    ))
    assert response.status_code == 400
    assert client.get("/products/1").json()["stock"] == 50
    assert client.get("/products/4").json()["stock"] == 2


def test_discount_larger_than_subtotal_is_rejected(client, verified_retailer, milk_item):
    response = client.post("/retailer-orders", json=bulk_payload(
        verified_retailer["id"], milk_item, bulkOrderDiscount=100,
    ))
    assert response.status_code == 400
    assert client.get("/products/1").json()["stock"] == 50


def test_retailer_order_history(client, verified_retailer, milk_item):
    client.post("/retailer-orders", json=bulk_payload(verified_retailer["id"], milk_item))
    client.post("/retailer-orders", json=bulk_payload(verified_retailer["id"], milk_item, notes="weekly"))
    orders = client.get(f"/retailers/{verified_retailer['id']}/orders").json()
    assert [o["id"] for o in orders] == [1, 2]
    assert orders[1]["notes"] == "weekly"
    assert client.get("/retailer-orders/2").json()["notes"] == "weekly"
    assert client.get("/retailer-orders/3").status_code == 404


def test_payment_status_moves_independently(client, verified_retailer, milk_item):
    order = client.post("/retailer-orders", json=bulk_payload(verified_retailer["id"], milk_item)).json()

    paid = client.patch(f"/retailer-orders/{order['id']}/payment-status", json={"status": "paid"}).json()
    assert paid["paymentStatus"] == "paid"
    assert paid["status"] == "pending"

    shipped = client.patch(f"/retailer-orders/{order['id']}/status", json={"status": "processing"}).json()
    assert shipped["status"] == "processing"
    assert shipped["paymentStatus"] == "paid"


def test_refunded_payment_is_final(client, verified_retailer, milk_item):
    order = client.post("/retailer-orders", json=bulk_payload(verified_retailer["id"], milk_item)).json()
    url = f"/retailer-orders/{order['id']}/payment-status"
    client.patch(url, json={"status": "paid"})
    client.patch(url, json={"status": "refunded"})
    response = client.patch(url, json={"status": "paid"})
    assert response.status_code == 409
    assert response.json()["errors"][0]["field"] == "paymentStatus"


def test_unverified_retailer_is_refused_before_discount_is_checked(client, retailer_payload, milk_item):
    retailer = client.post("/retailers/register", json=retailer_payload).json()
    response = client.post("/retailer-orders", json=bulk_payload(retailer["id"], milk_item, bulkOrderDiscount=100))
    assert response.status_code == 403
    assert response.json()["message"] == "Retailer account is not verified. Current status: pending"


def test_unknown_retailer_is_404_even_with_bad_discount(client, milk_item):
    response = client.post("/retailer-orders", json=bulk_payload(77, milk_item, bulkOrderDiscount=100))
    assert response.status_code == 404
