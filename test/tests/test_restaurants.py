from werkzeug.security import generate_password_hash

from srms.models import db, User


def test_list_and_get_own_restaurant(admin_client, rid):
    data = admin_client.get("/api/restaurant").get_json()
    assert [r["id"] for r in data] == [rid]

    r = admin_client.get(f"/api/restaurant/{rid}")
    assert r.status_code == 200
    assert r.get_json()["name"] == "Demo Bistro"


def test_create_restaurant_when_one_exists(admin_client):
    r = admin_client.post("/api/restaurant", json={"name": "Second"})
    assert r.status_code == 409


def test_create_restaurant_for_user_without_one(app, client):
    with app.app_context():
        db.session.add(User(email="solo@example.com", name="Solo",
                            password_hash=generate_password_hash("password")))
        db.session.commit()
    client.post("/api/auth/login", json={"email": "solo@example.com", "password": "password"})

    assert client.get("/api/restaurant").get_json() == []
    r = client.post("/api/restaurant", json={"name": "  "})
    assert r.status_code == 400

    r = client.post("/api/restaurant", json={"name": " Solo Cafe ", "phone": "555-0111"})
    assert r.status_code == 201
    created = r.get_json()
    assert created["name"] == "Solo Cafe"
    assert created["is_active"] is True
    assert client.get("/api/auth/session").get_json()["restaurant_id"] == created["id"]


def test_update_restaurant(admin_client, rid):
    r = admin_client.put(f"/api/restaurant/{rid}", json={"name": "Renamed", "is_active": True})
    assert r.status_code == 200
    assert r.get_json()["name"] == "Renamed"

    r = admin_client.put(f"/api/restaurant/{rid}", json={"name": ""})
    assert r.status_code == 400
