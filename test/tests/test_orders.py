import pytest


@pytest.fixture
def order(admin_client, rid, seated):
    r = admin_client.post(f"/api/restaurant/{rid}/orders", json={
        "session_id": seated["session_id"],
        "customer_name": "Ada",
        "total_amount": 21.0,
        "items": [
            {"menu_item_id": seated["burger_id"], "quantity": 1, "price": 10.0},
            {"menu_item_id": seated["salad_id"], "quantity": 2, "price": 5.5,
             "selected_options": [{"name": "Dressing", "option": "Ranch"}]},
        ],
    })
    assert r.status_code == 201
    return dict(seated, order=r.get_json())


def test_create_order(admin_client, rid, order):
    data = order["order"]
    assert data["status"] == "PENDING"
    assert data["order_number"].startswith("ORD-")
    assert data["table_id"] == order["table_id"]
    assert data["session_id"] == order["session_id"]
    assert len(data["items"]) == 2
    assert data["items"][1]["selections"] == [{"name": "Dressing", "option": "Ranch"}]

    session = admin_client.get(f"/api/restaurant/{rid}/sessions/{order['session_id']}").get_json()
    assert session["status"] == "ORDERED"

    listed = admin_client.get(f"/api/restaurant/{rid}/orders").get_json()
    assert [o["id"] for o in listed] == [data["id"]]


def test_create_order_validation(admin_client, rid, menu):
    url = f"/api/restaurant/{rid}/orders"
    item = {"menu_item_id": menu["burger_id"]}

    r = admin_client.post(url, json={"items": [], "total_amount": 5})
    assert r.get_json()["error"] == "Order must have at least one item"

    r = admin_client.post(url, json={"items": [item], "total_amount": 0})
    assert r.get_json()["error"] == "Invalid total amount"

    r = admin_client.post(url, json={"items": [item], "total_amount": 5, "session_id": 9999})
    assert r.status_code == 404

    r = admin_client.post(url, json={"items": [item], "total_amount": 5, "table_id": 9999})
    assert r.get_json()["error"] == "Invalid table"

    r = admin_client.post(url, json={"items": [{"menu_item_id": 9999}], "total_amount": 5})
    assert r.get_json()["error"] == "Invalid menu item"

    r = admin_client.post(url, json={"items": [dict(item, quantity=0)], "total_amount": 5})
    assert r.get_json()["error"] == "Invalid item quantity"

    assert admin_client.get(url).get_json() == []


def test_item_price_defaults_to_menu_price(admin_client, rid, menu):
    r = admin_client.post(f"/api/restaurant/{rid}/orders", json={
        "items": [{"menu_item_id": menu["salad_id"], "quantity": 3}], "total_amount": 16.5,
    })
    assert r.get_json()["items"][0]["price"] == 5.5


def test_remove_item_recomputes_total(admin_client, rid, order):
    data = order["order"]
    salad = next(i for i in data["items"] if i["menu_item_id"] == order["salad_id"])
    r = admin_client.delete(f"/api/restaurant/{rid}/orders/{data['id']}/items/{salad['id']}")
    assert r.status_code == 200
    updated = r.get_json()["order"]
    assert updated["total_amount"] == 10.0
    assert updated["status"] == "PENDING"
    assert len(updated["items"]) == 1


def test_removing_last_item_cancels_order(admin_client, rid, order):
    data = order["order"]
    for item in data["items"]:
        r = admin_client.delete(f"/api/restaurant/{rid}/orders/{data['id']}/items/{item['id']}")
        assert r.status_code == 200
    final = r.get_json()["order"]
    assert final["status"] == "CANCELLED"
    assert final["total_amount"] == 0
    assert final["items"] == []


def test_remove_item_total_never_negative(admin_client, rid, menu):
    r = admin_client.post(f"/api/restaurant/{rid}/orders", json={
        "items": [{"menu_item_id": menu["burger_id"], "quantity": 2}], "total_amount": 5,
    })
    data = r.get_json()
    r = admin_client.delete(f"/api/restaurant/{rid}/orders/{data['id']}/items/{data['items'][0]['id']}")
    assert r.get_json()["order"]["total_amount"] == 0


def test_remove_item_errors(admin_client, rid, order, menu):
    data = order["order"]
    base = f"/api/restaurant/{rid}/orders"

    r = admin_client.delete(f"{base}/{data['id']}/items/9999")
    assert r.status_code == 404
    assert r.get_json()["error"] == "Order item not found"

    other = admin_client.post(base, json={
        "items": [{"menu_item_id": menu["burger_id"]}], "total_amount": 10,
    }).get_json()
    r = admin_client.delete(f"{base}/{other['id']}/items/{data['items'][0]['id']}")
    assert r.status_code == 400
    assert r.get_json()["error"] == "Order item does not belong to this order"

    admin_client.put(f"/api/restaurant/orders/{other['id']}", json={"status": "CANCELLED"})
    r = admin_client.delete(f"{base}/{other['id']}/items/{other['items'][0]['id']}")
    assert r.status_code == 400
    assert "cancelled" in r.get_json()["error"]


def test_status_updates_stamp_times(staff_client, order):
    url = f"/api/restaurant/orders/{order['order']['id']}"
    r = staff_client.put(url, json={"status": "FLYING"})
    assert r.status_code == 400

    r = staff_client.put(url, json={"status": "preparing", "notes": "no onions"})
    assert r.status_code == 200
    data = r.get_json()
    assert data["status"] == "PREPARING"
    assert data["preparing_at"] is not None
    assert data["notes"] == "no onions"

    staff_client.put(url, json={"status": "READY"})
    data = staff_client.put(url, json={"status": "DELIVERED"}).get_json()
    assert data["ready_at"] is not None
    assert data["served_at"] is not None


def test_delete_order_only_when_pending_or_cancelled(admin_client, order):
    url = f"/api/restaurant/orders/{order['order']['id']}"
    admin_client.put(url, json={"status": "CONFIRMED"})
    r = admin_client.delete(url)
    assert r.status_code == 400
    assert r.get_json()["error"] == "Can only delete pending or cancelled orders"

    admin_client.put(url, json={"status": "CANCELLED"})
    assert admin_client.delete(url).status_code == 200
    assert admin_client.get(url).status_code == 404


def test_order_of_other_restaurant_is_hidden(outsider_client, order):
    assert outsider_client.get(f"/api/restaurant/orders/{order['order']['id']}").status_code == 404
