"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
First-run setup wizard: database checks, schema creation and the first
admin account. Every mutating step is refused once an admin exists.
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError

from srms.auth import hash_password, password_too_short
from srms.models import db, Restaurant, User, ROLE_ADMIN
from srms.utils import json_body, clean

logger = logging.getLogger(__name__)

bp = Blueprint("setup", __name__)


def check_setup_status():
    status = {
        "database_connected": False,
        "tables_exist": False,
        "has_admin_user": False,
        "has_restaurant": False,
        "needs_setup": True,
    }
    try:
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        status["database_connected"] = True

        inspector = inspect(db.engine)
        if not all(inspector.has_table(m.__tablename__) for m in (User, Restaurant)):
            return status
        status["tables_exist"] = True
        status["has_admin_user"] = User.query.count() > 0
        status["has_restaurant"] = Restaurant.query.count() > 0
        status["needs_setup"] = not status["has_admin_user"]
    except SQLAlchemyError as ex:
        db.session.rollback()
        status["error"] = str(ex)
    return status


def can_access_setup():
    status = check_setup_status()
    return not status["database_connected"] or not status["tables_exist"] or not status["has_admin_user"]


def _setup_closed():
    return jsonify({"error": "Setup already completed"}), 403


@bp.get("/api/setup/status")
def setup_status():
    return jsonify(check_setup_status())


@bp.post("/api/setup/test-connection")
def test_connection():
    if not can_access_setup():
        return _setup_closed()
    connection_string = clean(json_body().get("connection_string"))
    if not connection_string:
        return jsonify({"error": "Connection string is required"}), 400

    engine = None
    try:
        engine = create_engine(connection_string)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as ex:
        logger.info("Setup connection test failed: %s", ex)
        return jsonify({"success": False, "error": str(ex)})
    finally:
        if engine is not None:
            engine.dispose()
    return jsonify({"success": True, "message": "Database connection successful"})


@bp.post("/api/setup/migrate")
def migrate():
    if not can_access_setup():
        return _setup_closed()
    try:
        db.create_all()
    except SQLAlchemyError as ex:
        logger.error("Schema creation failed: %s", ex)
        return jsonify({"success": False, "error": "Failed to create database tables", "details": str(ex)}), 500

    if not check_setup_status()["tables_exist"]:
        return jsonify({"success": False, "error": "Failed to create database tables"}), 500
    logger.info("Database tables created")
    return jsonify({"success": True, "message": "Database tables created successfully"})


@bp.post("/api/setup/create-admin")
def create_admin():
    if not can_access_setup():
        return jsonify({"error": "Setup already completed. Admin user already exists."}), 403

    data = json_body()
    admin_name = clean(data.get("admin_name"))
    admin_email = clean(data.get("admin_email"))
    admin_password = data.get("admin_password")
    restaurant_name = clean(data.get("restaurant_name"))
    if not admin_name or not admin_email or not admin_password:
        return jsonify({"error": "Admin name, email, and password are required"}), 400
    if not restaurant_name:
        return jsonify({"error": "Restaurant name is required"}), 400
    if password_too_short(admin_password):
        return jsonify({"error": "Password must be at least 6 characters"}), 400
    admin_email = admin_email.lower()
    if User.query.filter_by(email=admin_email).first():
        return jsonify({"error": "An account with this email already exists"}), 400

    restaurant = Restaurant(
        name=restaurant_name,
        description=clean(data.get("restaurant_description")),
        address=clean(data.get("restaurant_address")),
        phone=clean(data.get("restaurant_phone")),
        is_active=True,
    )
    db.session.add(restaurant)
    db.session.flush()
    user = User(name=admin_name, email=admin_email, password_hash=hash_password(admin_password),
                role=ROLE_ADMIN, restaurant_id=restaurant.id)
    db.session.add(user)
    db.session.commit()

    logger.info("Setup created admin %s for restaurant %s", user.id, restaurant.id)
    return jsonify({
        "success": True,
        "message": "Admin user and restaurant created successfully",
        "data": {"user_id": user.id, "restaurant_id": restaurant.id, "restaurant_name": restaurant.name},
    })
