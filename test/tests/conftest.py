"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong , David White Jr
Date: October 2025

Description:
Shared pytest fixtures: an in-memory app seeded with two restaurants,
an admin and a staff member, plus logged-in test clients.
"""

import os, sys
import pytest
from werkzeug.security import generate_password_hash

# --- Make sure project root is importable ---
TESTS_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(TESTS_DIR, os.pardir, os.pardir))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from srms.app import create_app  # noqa: E402
from srms.models import db, Restaurant, User, ROLE_ADMIN, ROLE_STAFF  # noqa: E402

PASSWORD = "password"


def _seed():
    home = Restaurant(name="Demo Bistro", address="1 Main St", phone="555-0100", is_active=True)
    other = Restaurant(name="Other Place", is_active=True)
    db.session.add_all([home, other])
    db.session.flush()
    admin = User(name="Admin", email="admin@example.com", role=ROLE_ADMIN,
                 password_hash=generate_password_hash(PASSWORD), restaurant_id=home.id)
    staff = User(name="Sam Staff", email="staff@example.com", role=ROLE_STAFF,
                 password_hash=generate_password_hash(PASSWORD), restaurant_id=home.id)
    outsider = User(name="Olive Owner", email="other@example.com", role=ROLE_ADMIN,
                    password_hash=generate_password_hash(PASSWORD), restaurant_id=other.id)
    db.session.add_all([admin, staff, outsider])
    db.session.commit()
    return {
        "restaurant_id": home.id,
        "other_restaurant_id": other.id,
        "admin_id": admin.id,
        "staff_id": staff.id,
        "outsider_id": outsider.id,
    }


def login(client, email, password=PASSWORD):
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def app():
    app = create_app(testing=True)
    with app.app_context():
        db.drop_all()
        db.create_all()
        app.config["SEED_IDS"] = _seed()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ids(app):
    return app.config["SEED_IDS"]


@pytest.fixture
def rid(ids):
    return ids["restaurant_id"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    return login(app.test_client(), "admin@example.com")


@pytest.fixture
def staff_client(app):
    return login(app.test_client(), "staff@example.com")


@pytest.fixture
def outsider_client(app):
    return login(app.test_client(), "other@example.com")


@pytest.fixture
def menu(admin_client, rid):
    """A category with two menu items and two tables, created through the API."""
    cat = admin_client.post("/api/restaurant/categories", json={"name": "Mains", "sort_order": 1})
    assert cat.status_code == 201
    category_id = cat.get_json()["id"]

    burger = admin_client.post("/api/restaurant/menu-items", json={
        "name": "Burger", "price": 10.0, "category_id": category_id,
    })
    salad = admin_client.post("/api/restaurant/menu-items", json={
        "name": "Salad", "price": 5.5, "category_id": category_id,
    })
    assert burger.status_code == 201 and salad.status_code == 201

    t1 = admin_client.post(f"/api/restaurant/{rid}/tables", json={"number": "T1", "capacity": 4})
    t2 = admin_client.post(f"/api/restaurant/{rid}/tables", json={"number": "T2", "capacity": 2})
    assert t1.status_code == 201 and t2.status_code == 201

    return {
        "category_id": category_id,
        "burger_id": burger.get_json()["id"],
        "salad_id": salad.get_json()["id"],
        "table_id": t1.get_json()["id"],
        "table2_id": t2.get_json()["id"],
    }


@pytest.fixture
def seated(admin_client, rid, menu):
    """A walk-in party of two seated at table T1."""
    resp = admin_client.post(f"/api/restaurant/{rid}/sessions",
                             json={"customer_name": "Ada", "party_size": 2})
    assert resp.status_code == 201
    session_id = resp.get_json()["id"]
    resp = admin_client.put(f"/api/restaurant/{rid}/sessions/{session_id}/seat",
                            json={"table_id": menu["table_id"]})
    assert resp.status_code == 200
    return dict(menu, session_id=session_id)
