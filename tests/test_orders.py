import re
import threading
from datetime import datetime, timedelta

from config import DELIVERY_WINDOW_MINUTES
from models import OrderItem
from routers.orders.helpers import OrderHelpers, default_expected_delivery
from utils.errors import InsufficientStock


def order_payload(*items, **extra):
    payload = {
        "userId": 1,
        "items": list(items),
        "address": "221B Baker Street",
        "paymentMethod": "cod",
    }
    payload.update(extra)
    return payload


def test_order_reserves_stock_and_totals_with_fees(client, milk_item):
    response = client.post("/orders", json=order_payload(dict(milk_item, quantity=5)))
    assert response.status_code == 201
    order = response.json()
    assert order["status"] == "pending"
    assert order["totalAmount"] == 260
    assert (order["deliveryFee"], order["platformFee"]) == (30, 5)
    assert re.fullmatch(r"\d{2}:\d{2}", order["expectedDelivery"])
    assert client.get("/products/1").json()["stock"] == 45


def test_short_stock_rejects_order_and_keeps_stock(client, banana_item):
    response = client.post("/orders", json=order_payload(dict(banana_item, quantity=3)))
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Not enough stock for Fresh Bananas. Available: 2"
    assert body["errors"] == [{"productId": 4, "available": 2, "requested": 3}]
    assert client.get("/products/4").json()["stock"] == 2
    assert client.get("/users/1/orders").json() == []


def test_failed_multi_item_order_touches_no_stock(client, milk_item, banana_item):
    response = client.post("/orders", json=order_payload(
        dict(milk_item, quantity=2), dict(banana_item, quantity=5),
    ))
    assert response.status_code == 400
    assert client.get("/products/1").json()["stock"] == 50
    assert client.get("/products/4").json()["stock"] == 2


def test_repeated_product_lines_are_summed(client, banana_item):
    response = client.post("/orders", json=order_payload(banana_item, banana_item, banana_item))
    assert response.status_code == 400
    assert client.get("/products/4").json()["stock"] == 2

    response = client.post("/orders", json=order_payload(banana_item, banana_item))
    assert response.status_code == 201
    assert client.get("/products/4").json()["stock"] == 0


def test_unknown_product_is_404(client, milk_item):
    response = client.post("/orders", json=order_payload(dict(milk_item, productId=99)))
    assert response.status_code == 404
    assert client.get("/products/1").json()["stock"] == 50


def test_empty_order_is_rejected(client):
    assert client.post("/orders", json=order_payload()).status_code == 400


def test_zero_quantity_is_rejected(client, milk_item):
    assert client.post("/orders", json=order_payload(dict(milk_item, quantity=0))).status_code == 400


def test_client_status_and_total_are_ignored(client, milk_item):
    order = client.post("/orders", json=order_payload(
        milk_item, status="delivered", totalAmount=1, deliveryFee=0, platformFee=0,
    )).json()
    assert order["status"] == "pending"
    assert order["totalAmount"] == 45


def test_price_is_taken_from_the_item(client, milk_item):
    order = client.post("/orders", json=order_payload(dict(milk_item, price=40, quantity=2))).json()
    assert order["totalAmount"] == 115


def test_orders_by_user(client, milk_item):
    client.post("/orders", json=order_payload(milk_item))
    client.post("/orders", json=order_payload(milk_item, userId=2))
    client.post("/orders", json=order_payload(milk_item))
    orders = client.get("/users/1/orders").json()
    assert [o["id"] for o in orders] == [1, 3]
    assert client.get("/orders/2").json()["userId"] == 2
    assert client.get("/orders/9").status_code == 404


def test_status_lifecycle(client, milk_item):
    order = client.post("/orders", json=order_payload(milk_item)).json()
    for next_status in ("processing", "shipped", "delivered"):
        response = client.patch(f"/orders/{order['id']}/status", json={"status": next_status})
        assert response.status_code == 200
        assert response.json()["status"] == next_status


def test_illegal_status_move_is_conflict(client, milk_item):
    order = client.post("/orders", json=order_payload(milk_item)).json()
    response = client.patch(f"/orders/{order['id']}/status", json={"status": "delivered"})
    assert response.status_code == 409
    assert response.json()["errors"][0]["allowed"] == ["cancelled", "processing"]
    assert client.get(f"/orders/{order['id']}").json()["status"] == "pending"


def test_unknown_status_value_is_400(client, milk_item):
    order = client.post("/orders", json=order_payload(milk_item)).json()
    assert client.patch(f"/orders/{order['id']}/status", json={"status": "lost"}).status_code == 400


def test_default_expected_delivery():
    assert default_expected_delivery(datetime(2024, 1, 1, 23, 50)) == "00:05"


def banana_line(quantity=1):
    return OrderItem(
        product_id=4, quantity=quantity, price=70, name="Fresh Bananas",
        image="bananas.jpg", unit_value=12, unit_type="pcs",
    )


def test_expected_delivery_follows_order_date(store):
    order = OrderHelpers(store).place_order(1, [banana_line()], "221B Baker Street", "cod")
    assert order.order_date.tzinfo is not None
    expected = order.order_date + timedelta(minutes=DELIVERY_WINDOW_MINUTES)
    assert order.expected_delivery == expected.strftime("%H:%M")


def test_concurrent_placements_never_oversell(store):
    orders = OrderHelpers(store)
    start = threading.Barrier(8)
    placed, refused, unexpected = [], [], []

    def buy_one_banana():
        start.wait()
        try:
            placed.append(orders.place_order(1, [banana_line()], "221B Baker Street", "cod"))
        except InsufficientStock as e:
            refused.append(e)
        except Exception as e:
            unexpected.append(e)

    threads = [threading.Thread(target=buy_one_banana) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert unexpected == []
    assert len(placed) == 2
    assert len(refused) == 6
    assert store.products.get(4).stock == 0
    assert len(store.orders) == 2
