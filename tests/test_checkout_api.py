"""Checkout: cart -> order, all or nothing."""

from sqlalchemy.exc import OperationalError

from storefront.repos.order_repo import OrderRepo


def _add(client, headers, **body):
    response = client.post("/cart/add", json=body, headers=headers)
    assert response.status_code == 200, response.text


def _checkout(client, headers, **body):
    return client.post("/checkout", json=body, headers=headers)


def test_checkout_example_order(client, ada, notifications):
    _add(client, ada, modelId=7, quantity=2)

    response = _checkout(client, ada, userId=1)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "order_placed"
    order_id = body["orderId"]

    order = client.get(f"/orders/{order_id}", headers=ada).json()["order"]
    assert order["totalAmount"] == 99.98
    assert order["status"] == "order_placed"
    assert order["paymentStatus"] == "pending"
    assert len(order["items"]) == 1
    item = order["items"][0]
    assert (item["modelId"], item["quantity"], item["unitPrice"], item["lineTotal"]) == (7, 2, 49.99, 99.98)

    cart = client.get("/cart/1", headers=ada).json()["cart"]
    assert cart["items"] == []

    assert notifications == [(1, order_id, "order_placed")]


def test_order_total_is_sum_of_line_totals(client, ada, notifications):
    _add(client, ada, modelId=7, quantity=3, unitPrice="19.999")
    _add(client, ada, modelId=8, quantity=1)
    _add(client, ada, modelId=9, quantity=4)

    order_id = _checkout(client, ada).json()["orderId"]
    order = client.get(f"/orders/{order_id}", headers=ada).json()["order"]

    line_totals = [item["lineTotal"] for item in order["items"]]
    for item in order["items"]:
        assert item["lineTotal"] == round(item["quantity"] * item["unitPrice"], 2)
    assert order["totalAmount"] == round(sum(line_totals), 2)
    assert order["totalAmount"] == 409.50


def test_initial_history_row(client, ada, notifications):
    _add(client, ada, modelId=7)
    order_id = _checkout(client, ada).json()["orderId"]

    timeline = client.get(f"/orders/{order_id}", headers=ada).json()["timeline"]

    placed = timeline[0]
    assert placed["status"] == "order_placed"
    assert placed["completed"] is True
    assert placed["details"] == "Order created successfully."
    assert placed["timestamp"] is not None
    assert [step["completed"] for step in timeline[1:]] == [False] * 4


def test_empty_cart_checkout_fails_without_orders(client, ada, notifications):
    response = _checkout(client, ada)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cart is empty."
    assert client.get("/orders/user/1", headers=ada).json()["orders"] == []
    assert notifications == []


def test_checkout_for_another_user_is_forbidden(client, ada, ben, notifications):
    _add(client, ben, modelId=7)

    response = _checkout(client, ada, userId=2)

    assert response.status_code == 403
    assert len(client.get("/cart/2", headers=ben).json()["cart"]["items"]) == 1


def test_persistence_failure_rolls_back_everything(client, ada, monkeypatch, notifications):
    _add(client, ada, modelId=7, quantity=2)
    _add(client, ada, modelId=8, quantity=1)

    async def broken_history(self, entry):
        raise OperationalError("INSERT INTO order_status_history", {}, Exception("disk I/O error"))

    monkeypatch.setattr(OrderRepo, "add_status_entry", broken_history)

    response = _checkout(client, ada)

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["message"] == "Checkout failed."
    assert "disk I/O error" in detail["error"]

    cart = client.get("/cart/1", headers=ada).json()["cart"]
    assert cart["totals"]["itemCount"] == 2
    assert cart["totals"]["totalQuantity"] == 3
    assert client.get("/orders/user/1", headers=ada).json()["orders"] == []
    assert notifications == []


def test_shipping_address_text_and_structured(client, ada, notifications):
    _add(client, ada, modelId=7)
    first = _checkout(client, ada, shippingAddress="  12 Fjord Road  ", paymentMethod=" card ", notes=" ring twice ")
    _add(client, ada, modelId=8)
    second = _checkout(client, ada, shippingAddress={"street": "1 Main", "city": "Oslo"})

    order = client.get(f"/orders/{first.json()['orderId']}", headers=ada).json()["order"]
    assert order["shippingAddress"] == {"text": "12 Fjord Road"}
    assert order["paymentMethod"] == "card"
    assert order["notes"] == "ring twice"

    order = client.get(f"/orders/{second.json()['orderId']}", headers=ada).json()["order"]
    assert order["shippingAddress"] == {"street": "1 Main", "city": "Oslo"}
    assert order["paymentMethod"] is None


def test_checkout_succeeds_when_broker_is_down(client, ada, monkeypatch):
    from kombu.exceptions import OperationalError as BrokerError

    from storefront.services.notification_service import NotificationService

    def broken_publish(user_id, order_id, status):
        raise BrokerError("connection refused")

    monkeypatch.setattr(NotificationService, "_publish", staticmethod(broken_publish))
    _add(client, ada, modelId=7)

    response = _checkout(client, ada)

    assert response.status_code == 201
    assert client.get("/cart/1", headers=ada).json()["cart"]["items"] == []
