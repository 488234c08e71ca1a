def test_create_table_defaults_and_validation(admin_client, rid):
    r = admin_client.post("/api/restaurant/tables", json={"number": "A1"})
    assert r.status_code == 201
    t = r.get_json()
    assert (t["capacity"], t["grid_x"], t["grid_y"], t["grid_width"], t["grid_height"]) == (4, 0, 0, 2, 2)

    r = admin_client.post("/api/restaurant/tables", json={"number": "A1"})
    assert r.get_json()["error"] == "A table with this number already exists"

    r = admin_client.post(f"/api/restaurant/{rid}/tables", json={"number": "B1", "capacity": 0})
    assert r.get_json()["error"] == "Valid capacity is required"

    r = admin_client.post(f"/api/restaurant/{rid}/tables", json={"number": "A1", "capacity": 2})
    assert r.get_json()["error"] == "Table number already exists"

    r = admin_client.post(f"/api/restaurant/{rid}/tables", json={"capacity": 2})
    assert r.get_json()["error"] == "Table number is required"


def test_sort_order_appends(admin_client, rid, menu):
    tables = admin_client.get(f"/api/restaurant/{rid}/tables").get_json()
    assert [t["number"] for t in tables] == ["T1", "T2"]
    assert tables[1]["sort_order"] == tables[0]["sort_order"] + 1


def test_own_list_hides_inactive_tables(admin_client, rid, menu):
    admin_client.put(f"/api/restaurant/{rid}/tables/{menu['table2_id']}",
                     json={"number": "T2", "capacity": 2, "is_active": False})
    numbers = [t["number"] for t in admin_client.get("/api/restaurant/tables").get_json()]
    assert numbers == ["T1"]
    numbers = [t["number"] for t in admin_client.get(f"/api/restaurant/{rid}/tables").get_json()]
    assert numbers == ["T1", "T2"]


def test_reorder_tables(admin_client, outsider_client, rid, ids, menu):
    url = f"/api/restaurant/{rid}/tables/reorder"
    r = admin_client.put(url, json={"table_ids": [menu["table2_id"], menu["table_id"]]})
    assert r.status_code == 200
    assert [t["number"] for t in r.get_json()["tables"]] == ["T2", "T1"]

    r = admin_client.put(url, json={"table_ids": []})
    assert r.get_json()["error"] == "Table IDs array is required"

    other = ids["other_restaurant_id"]
    foreign = outsider_client.post(f"/api/restaurant/{other}/tables",
                                   json={"number": "X1", "capacity": 2}).get_json()["id"]
    r = admin_client.put(url, json={"table_ids": [menu["table_id"], foreign]})
    assert r.status_code == 400
    assert r.get_json()["error"] == "One or more tables do not belong to this restaurant"


def test_get_table_with_session(admin_client, rid, seated):
    data = admin_client.get(f"/api/restaurant/{rid}/tables/{seated['table_id']}").get_json()
    assert data["restaurant"]["name"] == "Demo Bistro"
    assert data["session"]["id"] == seated["session_id"]
    assert data["session"]["waiter"]["email"] == "admin@example.com"

    data = admin_client.get(f"/api/restaurant/{rid}/tables/{seated['table2_id']}").get_json()
    assert data["session"] is None


def test_update_table_position(admin_client, rid, menu):
    url = f"/api/restaurant/{rid}/tables/{menu['table_id']}/position"
    r = admin_client.put(url, json={"grid_x": 3, "grid_y": 4, "grid_width": 2, "grid_height": 1})
    assert r.status_code == 200
    assert (r.get_json()["grid_x"], r.get_json()["grid_y"]) == (3, 4)

    for bad in ({"grid_x": -1, "grid_y": 0, "grid_width": 1, "grid_height": 1},
                {"grid_x": 0, "grid_y": 0, "grid_width": 0, "grid_height": 1},
                {"grid_x": "1", "grid_y": 0, "grid_width": 1, "grid_height": 1}):
        r = admin_client.put(url, json=bad)
        assert r.status_code == 400
        assert r.get_json()["error"] == "Invalid grid position values"


def test_delete_table_rules(admin_client, rid, seated):
    r = admin_client.delete(f"/api/restaurant/{rid}/tables/{seated['table_id']}")
    assert r.status_code == 400
    assert r.get_json()["error"] == "Cannot delete a table that is currently occupied"

    admin_client.post(f"/api/restaurant/{rid}/orders", json={
        "items": [{"menu_item_id": seated["burger_id"]}], "total_amount": 10,
        "table_id": seated["table2_id"],
    })
    r = admin_client.delete(f"/api/restaurant/{rid}/tables/{seated['table2_id']}")
    assert r.status_code == 400
    assert r.get_json()["error"] == "Cannot delete table with existing orders. Set it to inactive instead."


def test_delete_free_table(admin_client, rid, menu):
    r = admin_client.delete(f"/api/restaurant/{rid}/tables/{menu['table2_id']}")
    assert r.status_code == 200
    assert r.get_json()["success"] is True
    assert admin_client.get(f"/api/restaurant/{rid}/tables/{menu['table2_id']}").status_code == 404


def test_out_of_range_grid_values_are_rejected(admin_client, rid, menu):
    url = f"/api/restaurant/{rid}/tables/{menu['table_id']}/position"
    for body in ('{"grid_x": 1e400, "grid_y": 0, "grid_width": 1, "grid_height": 1}',
                 '{"grid_x": 0, "grid_y": 0, "grid_width": 1' + "0" * 400 + ', "grid_height": 1}'):
        r = admin_client.put(url, data=body, content_type="application/json")
        assert r.status_code == 400
        assert r.get_json()["error"] == "Invalid grid position values"

    r = admin_client.post(f"/api/restaurant/{rid}/tables", data='{"number": "T9", "capacity": 1e400}',
                          content_type="application/json")
    assert r.status_code == 400
    assert r.get_json()["error"] == "Valid capacity is required"
