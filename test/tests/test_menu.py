def test_create_menu_item_validation(admin_client, menu):
    r = admin_client.post("/api/restaurant/menu-items", json={"price": 3, "category_id": menu["category_id"]})
    assert r.get_json()["error"] == "Menu item name is required"

    r = admin_client.post("/api/restaurant/menu-items", json={"name": "Tea", "price": "abc",
                                                              "category_id": menu["category_id"]})
    assert r.get_json()["error"] == "Valid price is required"

    r = admin_client.post("/api/restaurant/menu-items", json={"name": "Tea", "price": 3})
    assert r.status_code == 400
    assert r.get_json()["error"] == "Category is required"

    r = admin_client.post("/api/restaurant/menu-items", json={"name": "Tea", "price": 3, "category_id": 9999})
    assert r.get_json()["error"] == "Invalid category"


def test_menu_item_with_selections(admin_client, rid, menu):
    r = admin_client.post("/api/restaurant/menu-items", json={
        "name": "Pizza", "price": 12, "category_id": menu["category_id"],
        "selections": [{
            "name": "Size", "is_required": True,
            "options": [{"name": "Small"}, {"name": "Large", "price_add": 3.5},
                        {"name": "Family", "price_add": 6, "is_available": False}],
        }],
    })
    assert r.status_code == 201
    item = r.get_json()
    assert item["selections"][0]["is_required"] is True
    assert [o["name"] for o in item["selections"][0]["options"]] == ["Small", "Large", "Family"]

    public = admin_client.get(f"/api/menu/{rid}").get_json()
    pizza = next(m for m in public["menu_items"] if m["name"] == "Pizza")
    assert [o["name"] for o in pizza["selections"][0]["options"]] == ["Small", "Large"]

    r = admin_client.post("/api/restaurant/menu-items", json={
        "name": "Bad", "price": 1, "category_id": menu["category_id"],
        "selections": [{"name": "Extra", "options": [{"name": "x", "price_add": -1}]}],
    })
    assert r.status_code == 400


def test_grouped_menu(staff_client, menu):
    data = staff_client.get("/api/restaurant/menu").get_json()
    assert len(data["categories"]) == 1
    group = data["categories"][0]
    assert group["name"] == "Mains"
    assert {i["name"] for i in group["items"]} == {"Burger", "Salad"}


def test_update_menu_item(admin_client, rid, menu):
    url = f"/api/restaurant/{rid}/menu-items/{menu['burger_id']}"
    r = admin_client.put(url, json={"name": "Burger", "price": 0, "category_id": menu["category_id"]})
    assert r.status_code == 400

    r = admin_client.put(url, json={"name": "Cheeseburger", "price": 11.5,
                                    "category_id": menu["category_id"],
                                    "is_active": True, "is_available": False})
    assert r.status_code == 200
    data = r.get_json()
    assert data["name"] == "Cheeseburger"
    assert data["is_available"] is False

    public = admin_client.get(f"/api/menu/{rid}").get_json()
    assert "Cheeseburger" not in [m["name"] for m in public["menu_items"]]
    staff_view = admin_client.get(f"/api/restaurant/{rid}/menu").get_json()
    cheese = next(m for m in staff_view if m["name"] == "Cheeseburger")
    assert cheese["available"] is False


def test_delete_menu_item(admin_client, rid, menu):
    r = admin_client.delete(f"/api/restaurant/{rid}/menu-items/{menu['salad_id']}")
    assert r.status_code == 200
    assert admin_client.get(f"/api/restaurant/{rid}/menu-items/{menu['salad_id']}").status_code == 404


def test_ordered_menu_item_cannot_be_deleted(admin_client, rid, menu):
    admin_client.post(f"/api/restaurant/{rid}/orders", json={
        "items": [{"menu_item_id": menu["burger_id"], "quantity": 1}], "total_amount": 10,
    })
    r = admin_client.delete(f"/api/restaurant/{rid}/menu-items/{menu['burger_id']}")
    assert r.status_code == 400


def test_public_menu(client, rid, menu):
    r = client.get(f"/api/menu/{rid}")
    assert r.status_code == 200
    data = r.get_json()
    assert data["restaurant"]["name"] == "Demo Bistro"
    assert {m["name"] for m in data["menu_items"]} == {"Burger", "Salad"}

    cats = client.get(f"/api/menu/{rid}/categories").get_json()
    assert [c["name"] for c in cats] == ["Mains"]
    assert cats[0]["display_order"] == cats[0]["sort_order"]

    assert client.get("/api/menu/9999").status_code == 404


def test_public_menu_of_inactive_restaurant(admin_client, client, rid):
    admin_client.put(f"/api/restaurant/{rid}", json={"name": "Demo Bistro", "is_active": False})
    r = client.get(f"/api/menu/{rid}")
    assert r.status_code == 403
    assert r.get_json()["error"] == "Restaurant is not active"
