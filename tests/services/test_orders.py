"""Order routes: derived totals, car claims and reconciliation.

Invariants:
    - totalPrice == sum of member car prices after create and update
    - A car ordered in A cannot join B until A drops it (409)
    - Deleting an order unlinks its cars; the cars survive
"""

from datetime import datetime, timedelta, timezone


async def _cars(make_dealer, make_car, *prices):
    dealer_id = (await make_dealer())["id"]
    return [await make_car(dealer_id, price=p) for p in prices]


async def test_create_order_derives_total_and_links_cars(
    client, make_dealer, make_car, make_user,
):
    user = await make_user()
    a, b = await _cars(make_dealer, make_car, 15000.0, 22500.5)
    res = await client.post(
        "/api/orders",
        json={"userId": user["id"], "carIds": [a["id"], b["id"]], "totalPrice": 1},
    )
    assert res.status_code == 201
    order = res.json()
    assert order["totalPrice"] == 37500.5
    assert order["carIds"] == [a["id"], b["id"]]
    assert order["userId"] == user["id"]

    car = (await client.get(f"/api/cars/{a['id']}")).json()
    assert car["orderId"] == order["id"]
    owner = (await client.get(f"/api/users/{user['id']}")).json()
    assert owner["orderIds"] == [order["id"]]


async def test_car_in_one_order_cannot_join_another(
    client, make_dealer, make_car, make_user, make_order,
):
    user = await make_user()
    a, b = await _cars(make_dealer, make_car, 1000.0, 2000.0)
    first = await make_order(user["id"], [a["id"]])

    res = await client.post(
        "/api/orders", json={"userId": user["id"], "carIds": [b["id"], a["id"]]},
    )
    assert res.status_code == 409
    assert res.json()["message"] == f"Car with ID {a['id']} is already ordered"

    # Once the first order drops the car it becomes available
    res = await client.put(f"/api/orders/{first['id']}", json={"carIds": [b["id"]]})
    assert res.status_code == 200
    second = await make_order(user["id"], [a["id"]])
    assert second["carIds"] == [a["id"]]


async def test_update_rejects_car_owned_by_another_order(
    client, make_dealer, make_car, make_user, make_order,
):
    user = await make_user()
    a, b = await _cars(make_dealer, make_car, 1000.0, 2000.0)
    first = await make_order(user["id"], [a["id"]])
    second = await make_order(user["id"], [b["id"]])

    res = await client.put(
        f"/api/orders/{second['id']}", json={"carIds": [a["id"], b["id"]]},
    )
    assert res.status_code == 409
    assert res.json()["message"] == f"Car with ID {a['id']} is already ordered"

    stored_a = (await client.get(f"/api/cars/{a['id']}")).json()
    assert stored_a["orderId"] == first["id"]
    stored_second = (await client.get(f"/api/orders/{second['id']}")).json()
    assert stored_second["carIds"] == [b["id"]]
    assert stored_second["totalPrice"] == 2000.0


async def test_update_keeps_own_cars_without_conflict(
    client, make_dealer, make_car, make_user, make_order,
):
    user = await make_user()
    a, b = await _cars(make_dealer, make_car, 1000.0, 2000.0)
    order = await make_order(user["id"], [a["id"]])

    res = await client.put(
        f"/api/orders/{order['id']}", json={"carIds": [a["id"], b["id"]]},
    )
    assert res.status_code == 200
    assert res.json()["totalPrice"] == 3000.0


async def test_update_reconciles_members_and_total(
    client, make_dealer, make_car, make_user, make_order,
):
    user = await make_user()
    a, b, c = await _cars(make_dealer, make_car, 100.0, 200.0, 400.0)
    order = await make_order(user["id"], [a["id"], b["id"]])

    res = await client.put(
        f"/api/orders/{order['id']}", json={"carIds": [b["id"], c["id"]]},
    )
    assert res.status_code == 200
    updated = res.json()
    assert updated["totalPrice"] == 600.0
    assert updated["carIds"] == [b["id"], c["id"]]

    dropped = (await client.get(f"/api/cars/{a['id']}")).json()
    added = (await client.get(f"/api/cars/{c['id']}")).json()
    assert dropped["orderId"] is None
    assert added["orderId"] == order["id"]


async def test_update_without_car_ids_keeps_members(
    client, make_dealer, make_car, make_user, make_order,
):
    user = await make_user()
    other = await make_user()
    (a,) = await _cars(make_dealer, make_car, 500.0)
    order = await make_order(user["id"], [a["id"]])

    res = await client.put(f"/api/orders/{order['id']}", json={"userId": other["id"]})
    assert res.status_code == 200
    assert res.json()["carIds"] == [a["id"]]
    assert res.json()["userId"] == other["id"]
    assert res.json()["totalPrice"] == 500.0


async def test_update_to_missing_user_returns_404(
    client, make_dealer, make_car, make_user, make_order,
):
    user = await make_user()
    (a,) = await _cars(make_dealer, make_car, 500.0)
    order = await make_order(user["id"], [a["id"]])
    res = await client.put(f"/api/orders/{order['id']}", json={"userId": 999})
    assert res.status_code == 404
    assert res.json()["message"] == "User not found with id: 999"


async def test_create_order_missing_car_returns_404(client, make_user):
    user = await make_user()
    res = await client.post("/api/orders", json={"userId": user["id"], "carIds": [321]})
    assert res.status_code == 404
    assert res.json()["message"] == "Car not found with id: 321"


async def test_create_order_missing_user_returns_404(client, make_car):
    car = await make_car()
    res = await client.post("/api/orders", json={"userId": 999, "carIds": [car["id"]]})
    assert res.status_code == 404


async def test_create_order_duplicate_car_ids_rejected(client, make_car, make_user):
    user = await make_user()
    car = await make_car()
    res = await client.post(
        "/api/orders", json={"userId": user["id"], "carIds": [car["id"], car["id"]]},
    )
    assert res.status_code == 400
    assert res.json()["message"] == f"Order contains duplicate car ID: {car['id']}"


async def test_create_order_with_eleven_cars_rejected(client, make_user):
    user = await make_user()
    res = await client.post(
        "/api/orders", json={"userId": user["id"], "carIds": list(range(1, 12))},
    )
    assert res.status_code == 400
    assert "carIds" in res.json()


async def test_create_order_future_date_rejected(client, make_car, make_user):
    user = await make_user()
    car = await make_car()
    future = (datetime.now(timezone.utc) + timedelta(days=2)).isoformat()
    res = await client.post(
        "/api/orders",
        json={"userId": user["id"], "carIds": [car["id"]], "orderDate": future},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Order date cannot be in the future"


async def test_delete_order_unlinks_cars(
    client, make_dealer, make_car, make_user, make_order,
):
    user = await make_user()
    a, b = await _cars(make_dealer, make_car, 1.0, 2.0)
    order = await make_order(user["id"], [a["id"], b["id"]])

    res = await client.delete(f"/api/orders/{order['id']}")
    assert res.status_code == 204

    assert (await client.get(f"/api/orders/{order['id']}")).status_code == 404
    for car in (a, b):
        stored = (await client.get(f"/api/cars/{car['id']}")).json()
        assert stored["orderId"] is None
    assert (await client.get(f"/api/users/{user['id']}")).json()["orderIds"] == []


async def test_get_order_zero_id_returns_400(client):
    res = await client.get("/api/orders/0")
    assert res.status_code == 400
    assert res.json()["message"] == "Order ID must be positive"


async def test_list_orders(client, make_car, make_user, make_order):
    user = await make_user()
    car = await make_car()
    order = await make_order(user["id"], [car["id"]])
    res = await client.get("/api/orders")
    assert [o["id"] for o in res.json()] == [order["id"]]
