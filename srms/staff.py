"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Staff management for restaurant admins. Staff users share the admin's
restaurant and get the STAFF role.
"""

import logging

from flask import Blueprint, jsonify

from srms.auth import admin_required, hash_password, own_restaurant_id, password_too_short
from srms.errors import ApiError
from srms.models import db, CustomerSession, Order, User, ROLE_STAFF
from srms.utils import json_body, clean

logger = logging.getLogger(__name__)

bp = Blueprint("staff", __name__)


def _staff_dict(user):
    data = user.to_dict()
    data["owner_name"] = user.name
    return data


def _find_staff(restaurant_id, staff_id):
    staff = User.query.filter_by(id=staff_id, restaurant_id=restaurant_id, role=ROLE_STAFF).first()
    if staff is None:
        raise ApiError("Staff member not found", 404)
    return staff


@bp.get("/api/restaurant/staff")
@admin_required
def list_staff():
    restaurant_id = own_restaurant_id()
    members = (User.query.filter_by(restaurant_id=restaurant_id, role=ROLE_STAFF)
               .order_by(User.created_at.desc(), User.id.desc())
               .all())
    return jsonify([_staff_dict(u) for u in members])


@bp.post("/api/restaurant/staff")
@admin_required
def create_staff():
    restaurant_id = own_restaurant_id("Please create your restaurant first", 400)
    data = json_body()
    email = clean(data.get("email"))
    password = data.get("password")
    if not email:
        return jsonify({"error": "Email is required"}), 400
    if password_too_short(password):
        return jsonify({"error": "Password must be at least 6 characters"}), 400
    email = email.lower()
    if User.query.filter_by(email=email).first():
        return jsonify({"error": "Email already in use"}), 400

    staff = User(
        email=email,
        password_hash=hash_password(password),
        name=clean(data.get("owner_name")),
        role=ROLE_STAFF,
        restaurant_id=restaurant_id,
    )
    db.session.add(staff)
    db.session.commit()
    logger.info("Staff member %s added to restaurant %s", staff.id, restaurant_id)
    return jsonify(_staff_dict(staff)), 201


@bp.get("/api/restaurant/staff/<int:staff_id>")
@admin_required
def get_staff(staff_id):
    return jsonify(_staff_dict(_find_staff(own_restaurant_id(), staff_id)))


@bp.put("/api/restaurant/staff/<int:staff_id>")
@admin_required
def update_staff(staff_id):
    staff = _find_staff(own_restaurant_id(), staff_id)
    data = json_body()
    email = clean(data.get("email"))
    if not email:
        return jsonify({"error": "Email is required"}), 400
    email = email.lower()
    if User.query.filter(User.email == email, User.id != staff.id).first():
        return jsonify({"error": "Email already in use"}), 400

    password = data.get("password")
    if password:
        if password_too_short(password):
            return jsonify({"error": "Password must be at least 6 characters"}), 400
        staff.password_hash = hash_password(password)
    staff.email = email
    staff.name = clean(data.get("owner_name"))
    db.session.commit()
    return jsonify(_staff_dict(staff))


@bp.delete("/api/restaurant/staff/<int:staff_id>")
@admin_required
def delete_staff(staff_id):
    restaurant_id = own_restaurant_id()
    staff = _find_staff(restaurant_id, staff_id)
    CustomerSession.query.filter_by(waiter_id=staff.id).update({"waiter_id": None})
    Order.query.filter_by(waiter_id=staff.id).update({"waiter_id": None})
    db.session.delete(staff)
    db.session.commit()
    logger.info("Staff member %s removed from restaurant %s", staff_id, restaurant_id)
    return jsonify({"message": "Staff member deleted successfully"})
