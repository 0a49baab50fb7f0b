"""Dealer routes: uniqueness, embedded inventory and brand lookup.

Invariants:
    - name, phone number and address are each unique (409)
    - by-brand and by-brand-native return identical dealer sets, any letter case
"""

import pytest


async def test_create_dealer_returns_embedded_empty_inventory(client, dealer_payload):
    body = dealer_payload()
    res = await client.post("/api/dealers", json=body)
    assert res.status_code == 201
    dealer = res.json()
    assert dealer["phoneNumber"] == body["phoneNumber"]
    assert dealer["cars"] == []


@pytest.mark.parametrize("field, message", [
    ("name", "Dealer with this name already exists"),
    ("phoneNumber", "Dealer with this phone number already exists"),
    ("address", "Dealer with this address already exists"),
])
async def test_duplicate_unique_field_returns_409(
    client, make_dealer, dealer_payload, field, message,
):
    existing = await make_dealer()
    body = dealer_payload()
    body[field] = existing[field]
    res = await client.post("/api/dealers", json=body)
    assert res.status_code == 409
    assert res.json()["message"] == message


async def test_invalid_phone_rejected_by_service(client, dealer_payload):
    res = await client.post(
        "/api/dealers", json={**dealer_payload(), "phoneNumber": "555 0100"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid phone number format"


async def test_update_dealer_keeps_own_values(client, make_dealer):
    dealer = await make_dealer()
    res = await client.put(
        f"/api/dealers/{dealer['id']}",
        json={"name": dealer["name"], "address": "99 Harbour Road"},
    )
    assert res.status_code == 200
    assert res.json()["address"] == "99 Harbour Road"
    assert res.json()["name"] == dealer["name"]


async def test_update_dealer_to_taken_name_conflicts(client, make_dealer):
    first = await make_dealer()
    second = await make_dealer()
    res = await client.put(f"/api/dealers/{second['id']}", json={"name": first["name"]})
    assert res.status_code == 409


async def test_get_dealer_embeds_cars(client, make_dealer, make_car):
    dealer = await make_dealer()
    car = await make_car(dealer["id"])
    res = await client.get(f"/api/dealers/{dealer['id']}")
    assert [c["id"] for c in res.json()["cars"]] == [car["id"]]


async def test_get_dealer_zero_id_returns_400(client):
    res = await client.get("/api/dealers/0")
    assert res.status_code == 400
    assert res.json()["message"] == "Dealer ID must be positive"


async def test_list_dealer_cars(client, make_dealer, make_car):
    dealer = await make_dealer()
    other = await make_dealer()
    mine = await make_car(dealer["id"])
    await make_car(other["id"])
    res = await client.get(f"/api/dealers/{dealer['id']}/cars")
    assert res.status_code == 200
    assert [c["id"] for c in res.json()] == [mine["id"]]


async def test_list_cars_of_missing_dealer_returns_404(client):
    res = await client.get("/api/dealers/404/cars")
    assert res.status_code == 404


# ─── Brand lookup ───────────────────────────────────────────────

async def test_brand_lookups_agree_case_insensitively(client, make_dealer, make_car):
    honda = await make_dealer()
    both = await make_dealer()
    toyota = await make_dealer()
    await make_car(honda["id"], brand="Honda")
    await make_car(both["id"], brand="HONDA")
    await make_car(both["id"], brand="Toyota")
    await make_car(toyota["id"], brand="Toyota")

    by_brand = await client.get("/api/dealers/by-brand", params={"brand": "honda"})
    native = await client.get("/api/dealers/by-brand-native", params={"brand": "hOnDa"})
    assert by_brand.status_code == native.status_code == 200
    ids = {d["id"] for d in by_brand.json()}
    assert ids == {honda["id"], both["id"]}
    assert {d["id"] for d in native.json()} == ids


async def test_brand_lookup_unknown_brand_is_empty(client, make_car):
    await make_car(brand="Honda")
    res = await client.get("/api/dealers/by-brand", params={"brand": "Lada"})
    assert res.json() == []


async def test_brand_lookup_short_brand_rejected(client):
    res = await client.get("/api/dealers/by-brand", params={"brand": "H"})
    assert res.status_code == 400
    assert res.json()["message"] == "Brand must be between 2 and 50 characters"


async def test_brand_lookup_requires_brand(client):
    res = await client.get("/api/dealers/by-brand-native")
    assert res.status_code == 400
    assert "brand" in res.json()
