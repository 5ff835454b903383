from datetime import UTC, datetime, timedelta

import pytest

LUNCHTIME = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.fixture()
def placed(api, frozen_now):
    """An owner, a customer and one pending order between them."""
    owner, truck_id, item_id = api.owner_with_item(item_name="Tacos", price=6.0)
    customer = api.signup(name="Nour", email="nour@campus.edu")
    customer.post("/api/v1/cart/new", json={"itemId": item_id, "quantity": 2})
    response = customer.post(
        "/api/v1/order/new",
        json={"scheduledPickupTime": (LUNCHTIME + timedelta(minutes=30)).isoformat()},
    )
    assert response.status_code == 200, response.text
    return owner, customer, response.json()["orderId"]


class TestPlaceOrderEndpoint:
    def test_place_order(self, placed):
        _, customer, order_id = placed
        assert isinstance(order_id, int)
        assert customer.get("/api/v1/cart/view").json()["items"] == []

    def test_message(self, api, frozen_now):
        _, _, item_id = api.owner_with_item()
        customer = api.signup()
        customer.post("/api/v1/cart/new", json={"itemId": item_id, "quantity": 1})
        response = customer.post("/api/v1/order/new", json={"scheduledPickupTime": "2026-10-19T12:30:00Z"})
        assert response.json()["message"] == "order placed successfully"

    def test_pickup_time_required(self, api, frozen_now):
        customer = api.signup()
        response = customer.post("/api/v1/order/new", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "scheduledPickupTime is required"

    def test_empty_cart(self, api, frozen_now):
        customer = api.signup()
        response = customer.post("/api/v1/order/new", json={"scheduledPickupTime": "2026-10-19T12:30:00Z"})
        assert response.status_code == 400
        assert response.json()["error"] == "Cart is empty"

    def test_rejected_pickup_keeps_cart(self, api, frozen_now):
        _, _, item_id = api.owner_with_item()
        customer = api.signup()
        customer.post("/api/v1/cart/new", json={"itemId": item_id, "quantity": 1})

        response = customer.post("/api/v1/order/new", json={"scheduledPickupTime": "2026-10-19T18:00:00Z"})
        assert response.status_code == 400
        assert len(customer.get("/api/v1/cart/view").json()["items"]) == 1


class TestCustomerOrderEndpoints:
    def test_my_orders(self, placed):
        _, customer, order_id = placed
        orders = customer.get("/api/v1/order/myOrders").json()
        assert [o["orderId"] for o in orders] == [order_id]
        assert orders[0]["truckName"] == "Rosa's Food Truck"
        assert orders[0]["orderStatus"] == "pending"
        assert orders[0]["totalPrice"] == 12.0

    def test_details(self, placed):
        _, customer, order_id = placed
        details = customer.get(f"/api/v1/order/details/{order_id}").json()
        assert details["items"] == [
            {
                "orderItemId": details["items"][0]["orderItemId"],
                "itemId": details["items"][0]["itemId"],
                "itemName": "Tacos",
                "quantity": 2,
                "price": 6.0,
            }
        ]

    def test_details_of_unknown_order(self, placed):
        _, customer, _ = placed
        response = customer.get("/api/v1/order/details/999")
        assert response.status_code == 404

    def test_cancel_pending(self, placed):
        _, customer, order_id = placed
        response = customer.put(f"/api/v1/order/cancel/{order_id}")
        assert response.status_code == 200
        assert customer.get(f"/api/v1/order/details/{order_id}").json()["orderStatus"] == "cancelled"

    def test_owner_cannot_view_my_orders(self, placed):
        owner, _, _ = placed
        response = owner.get("/api/v1/order/myOrders")
        assert response.status_code == 403
        assert response.json()["error"] == "Only customers can view their orders"


class TestOwnerOrderEndpoints:
    def test_truck_orders(self, placed):
        owner, _, order_id = placed
        orders = owner.get("/api/v1/order/truckOrders").json()
        assert [o["orderId"] for o in orders] == [order_id]
        assert orders[0]["customerName"] == "Nour"

    def test_truck_order_details(self, placed):
        owner, _, order_id = placed
        details = owner.get(f"/api/v1/order/truckOwner/{order_id}").json()
        assert details["customerName"] == "Nour"
        assert details["items"][0]["itemName"] == "Tacos"

    def test_update_status(self, placed):
        owner, customer, order_id = placed
        response = owner.put(f"/api/v1/order/updateStatus/{order_id}", json={"orderStatus": "preparing"})
        assert response.status_code == 200
        assert response.json()["message"] == "order status updated successfully"
        assert customer.get(f"/api/v1/order/details/{order_id}").json()["orderStatus"] == "preparing"

    def test_illegal_transition(self, placed):
        owner, _, order_id = placed
        response = owner.put(f"/api/v1/order/updateStatus/{order_id}", json={"orderStatus": "ready"})
        assert response.status_code == 400
        assert response.json()["error"] == "Cannot change order status from pending to ready"

    def test_missing_status(self, placed):
        owner, _, order_id = placed
        response = owner.put(f"/api/v1/order/updateStatus/{order_id}", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "Valid orderStatus is required"

    def test_customer_cannot_cancel_after_preparing(self, placed):
        owner, customer, order_id = placed
        owner.put(f"/api/v1/order/updateStatus/{order_id}", json={"orderStatus": "preparing"})
        response = customer.put(f"/api/v1/order/cancel/{order_id}")
        assert response.status_code == 400
        assert response.json()["error"] == "Only pending orders can be cancelled"

    def test_other_owner_cannot_update(self, placed, api):
        _, _, order_id = placed
        intruder = api.signup("truckOwner", name="Omar", email="omar@campus.edu")
        response = intruder.put(f"/api/v1/order/updateStatus/{order_id}", json={"orderStatus": "preparing"})
        assert response.status_code == 404
        assert response.json()["error"] == "Order not found or you do not have permission to update it"

    def test_estimate_with_offset(self, placed):
        owner, customer, order_id = placed
        response = owner.put(
            f"/api/v1/order/updateStatus/{order_id}",
            json={"orderStatus": "preparing", "estimatedEarliestPickup": "2026-10-19T16:00:00+03:00"},
        )
        assert response.status_code == 200

        details = customer.get(f"/api/v1/order/details/{order_id}").json()
        estimate = datetime.fromisoformat(details["estimatedEarliestPickup"])
        assert estimate == datetime(2026, 10, 19, 13, 0, tzinfo=UTC)


class TestDelayPickupEndpoint:
    def test_delay(self, placed):
        _, customer, order_id = placed
        response = customer.put(
            f"/api/v1/order/delay/{order_id}",
            json={"scheduledPickupTime": "2026-10-19T13:15:00Z"},
        )
        assert response.status_code == 200
        assert response.json()["message"] == "order pickup time updated successfully"

        details = customer.get(f"/api/v1/order/details/{order_id}").json()
        assert datetime.fromisoformat(details["scheduledPickupTime"]) == LUNCHTIME + timedelta(minutes=75)
        assert datetime.fromisoformat(details["estimatedEarliestPickup"]) == LUNCHTIME + timedelta(minutes=75)

    def test_earlier_time_rejected(self, placed):
        _, customer, order_id = placed
        response = customer.put(
            f"/api/v1/order/delay/{order_id}",
            json={"scheduledPickupTime": "2026-10-19T12:15:00Z"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "New pickup time must be later than the current one"

    def test_not_after_preparing(self, placed):
        owner, customer, order_id = placed
        owner.put(f"/api/v1/order/updateStatus/{order_id}", json={"orderStatus": "preparing"})
        response = customer.put(
            f"/api/v1/order/delay/{order_id}",
            json={"scheduledPickupTime": "2026-10-19T13:15:00Z"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Only pending orders can be delayed"

    def test_owner_cannot_delay(self, placed):
        owner, _, order_id = placed
        response = owner.put(
            f"/api/v1/order/delay/{order_id}",
            json={"scheduledPickupTime": "2026-10-19T13:15:00Z"},
        )
        assert response.status_code == 403
        assert response.json()["error"] == "Only customers can delay their orders"


class TestCampusTimezone:
    def test_pickup_times_are_returned_in_utc(self, api, frozen_now, campus_timezone):
        campus_timezone("Asia/Dubai")
        _, _, item_id = api.owner_with_item()
        customer = api.signup(name="Nour", email="nour@campus.edu")
        customer.post("/api/v1/cart/new", json={"itemId": item_id, "quantity": 1})

        # 16:30 on the campus clock, four hours ahead of UTC
        response = customer.post("/api/v1/order/new", json={"scheduledPickupTime": "2026-10-19T16:30:00"})
        assert response.status_code == 200, response.text

        order = customer.get("/api/v1/order/myOrders").json()[0]
        pickup = datetime.fromisoformat(order["scheduledPickupTime"])
        assert pickup.utcoffset() == timedelta(0)
        assert pickup == datetime(2026, 10, 19, 12, 30, tzinfo=UTC)

        # Sending the value back unchanged names the same moment
        response = customer.put(
            f"/api/v1/order/delay/{order['orderId']}",
            json={"scheduledPickupTime": order["scheduledPickupTime"]},
        )
        assert response.json()["error"] == "New pickup time must be later than the current one"
