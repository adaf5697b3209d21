"""End-to-end tests through the HTTP surface."""

from storefront.utils.settings import CART_COOKIE_NAME

ADDRESS = {
    "name": "Mona Hassan",
    "email": "mona@example.com",
    "phone": "01000000000",
    "address": "12 Tahrir St",
    "buildingNumber": 12,
    "floorNumber": 3,
    "flatNumber": 7,
    "city": "Cairo",
    "district": "Downtown",
}


def add(client, product_id="P1", color="red", **extra):
    return client.post("/cart/items", json={"productId": product_id, "selectedColor": color, **extra})


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestCartApi:
    def test_read_without_token_is_empty(self, client):
        response = client.get("/cart")
        assert response.status_code == 200
        assert response.json()["items"] == []
        assert CART_COOKIE_NAME not in response.cookies

    def test_add_issues_session_cookie(self, client):
        response = add(client)

        assert response.status_code == 200
        assert CART_COOKIE_NAME in response.cookies
        body = response.json()
        assert body["success"] is True
        assert body["items"][0]["productId"] == "P1"
        assert body["items"][0]["quantity"] == 1

    def test_cart_persists_across_requests(self, client):
        add(client)
        add(client)
        items = client.get("/cart").json()["items"]
        assert [(i["selectedColor"], i["quantity"]) for i in items] == [("red", 2)]

    def test_limit_reached_is_a_warning(self, client):
        for _ in range(5):
            add(client)
        body = add(client).json()

        assert body["success"] is True
        assert body["warning"] == "limit_reached"
        assert body["items"][0]["quantity"] == 5

    def test_adjusted_payload(self, client):
        add(client)
        body = client.patch("/cart/items", json={"productId": "P1", "selectedColor": "red", "quantity": 50}).json()

        assert body["adjusted"] is True
        assert (body["max"], body["existing"], body["added"]) == (5, 1, 4)

    def test_invalid_quantity(self, client):
        response = add(client, quantity=0)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Quantity must be greater than 0"}

    def test_malformed_body(self, client):
        response = client.post("/cart/items", json={"selectedColor": "red"})
        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_unknown_product(self, client):
        response = add(client, product_id="nope")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_remove_and_clear(self, client):
        add(client)
        add(client, "P2", "green")

        after_remove = client.delete("/cart/items/P1/red").json()
        assert [i["productId"] for i in after_remove["items"]] == ["P2"]

        assert client.delete("/cart").json()["items"] == []
        assert client.get("/cart").json()["items"] == []

    def test_totals(self, client):
        add(client)
        add(client)
        body = client.get("/cart/totals", params={"city": "Aswan"}).json()
        assert float(body["subtotal"]) == 200
        assert float(body["total"]) == 300


class TestShippingAndInventoryApi:
    def test_estimate(self, client):
        body = client.get("/shipping/estimate", params={"city": "Cairo"}).json()
        assert body["zone"] == "capital"
        assert float(body["rate"]) == 50

    def test_unknown_city(self, client):
        assert client.get("/shipping/estimate", params={"city": "Atlantis"}).status_code == 422

    def test_stock(self, client):
        assert client.get("/inventory/P1/red").json()["inventory"] == 5
        assert client.get("/inventory/P1/purple").status_code == 404


class TestCheckoutApi:
    def test_walk_through_steps(self, client):
        state = client.post("/checkout/advance", json={"currentStep": "cart"}).json()["state"]
        assert state["activeStep"] == "shipping"

        state = client.post("/checkout/advance", json={"state": state, "currentStep": "shipping"}).json()["state"]
        rejected = client.post("/checkout/advance", json={"state": state, "currentStep": "payment"}).json()
        assert rejected["accepted"] is False
        assert rejected["state"]["activeStep"] == "payment"

        state = client.post("/checkout/payment", json={"state": state, "method": "cash"}).json()["state"]
        summary = client.post("/checkout/advance", json={"state": state, "currentStep": "payment"}).json()
        assert summary["state"]["activeStep"] == "summary"

        edited = client.post("/checkout/edit", json={"state": summary["state"]}).json()["state"]
        assert edited["activeStep"] == "payment"
        assert set(edited["completedSteps"]) == {"cart", "shipping", "payment"}

    def test_back_clears_payment(self, client):
        state = {
            "activeStep": "payment",
            "completedSteps": ["cart", "shipping"],
            "selectedPaymentMethod": "card",
        }
        body = client.post("/checkout/back", json={"state": state, "currentStep": "payment"}).json()
        assert body["state"]["selectedPaymentMethod"] is None
        assert body["state"]["activeStep"] == "shipping"

    def test_can_enter(self, client):
        body = client.post("/checkout/can-enter", json={"currentStep": "payment"}).json()
        assert body["canEnter"] is False


class TestOrderApi:
    def test_place_order_end_to_end(self, client):
        add(client)
        add(client)
        assert client.put("/address", json=ADDRESS).status_code == 200

        response = client.post("/orders", json={"paymentMethod": "cash"})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert float(body["total"]) == 250

        assert client.get("/cart").json()["items"] == []
        assert client.get("/inventory/P1/red").json()["inventory"] == 3

        order = client.get(f"/orders/{body['orderId']}").json()
        assert order["orderNumber"] == body["orderNumber"]
        assert [s["storeId"] for s in order["storeSummaries"]] == ["store-a"]
        assert client.sent_tasks == []

    def test_place_order_requires_address(self, client):
        add(client)
        response = client.post("/orders", json={"paymentMethod": "cash"})
        assert response.status_code == 409
        assert response.json() == {"success": False, "error": "Shipping address is required"}

    def test_place_order_requires_payment_method(self, client):
        add(client)
        client.put("/address", json=ADDRESS)
        assert client.post("/orders", json={}).status_code == 409

    def test_address_is_updated_in_place(self, client):
        add(client)
        first = client.put("/address", json=ADDRESS).json()
        second = client.put("/address", json={**ADDRESS, "city": "Aswan"}).json()

        assert first["addressId"] == second["addressId"]
        assert client.get("/address").json()["city"] == "Aswan"

    def test_invalid_address(self, client):
        response = client.put("/address", json={**ADDRESS, "email": "not-an-email"})
        assert response.status_code == 422

    def test_unknown_order_is_404(self, client):
        add(client)
        response = client.get("/orders/does-not-exist")
        assert response.status_code == 404
        assert response.json()["error"] == "Order not found"

    def test_payment_and_store_status(self, client):
        add(client)
        client.put("/address", json=ADDRESS)
        order_id = client.post("/orders", json={"paymentMethod": "card"}).json()["orderId"]

        paid = client.post(f"/orders/{order_id}/payment", json={"paymentStatus": "paid"}).json()
        assert paid["paymentStatus"] == "paid"

        delivered = client.patch(f"/orders/{order_id}/stores/store-a", json={"status": "delivered"}).json()
        assert delivered["orderStatus"] == "delivered"

        listed = client.get("/orders").json()
        assert [o["orderId"] for o in listed] == [order_id]
