"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Restaurant (tenant) routes: create, list, read and update the caller's
restaurant.
"""

import logging

from flask import Blueprint, jsonify

from srms.auth import current_user, login_required, restaurant_access
from srms.models import db, Restaurant
from srms.realtime import broadcast
from srms.utils import json_body, clean, is_blank

logger = logging.getLogger(__name__)

bp = Blueprint("restaurants", __name__)


@bp.post("/api/restaurant")
@login_required
def create_restaurant():
    user = current_user()
    if user.restaurant is not None:
        return jsonify({"error": "User already has a restaurant configured"}), 409

    data = json_body()
    if is_blank(data.get("name")):
        return jsonify({"error": "Restaurant name is required"}), 400

    is_active = data.get("is_active")
    restaurant = Restaurant(
        name=data["name"].strip(),
        description=clean(data.get("description")),
        address=clean(data.get("address")),
        phone=clean(data.get("phone")),
        email=clean(data.get("email")),
        is_active=is_active if isinstance(is_active, bool) else True,
    )
    db.session.add(restaurant)
    db.session.flush()
    user.restaurant_id = restaurant.id
    db.session.commit()
    logger.info("User %s created restaurant %s", user.id, restaurant.id)
    return jsonify(restaurant.to_dict()), 201


@bp.get("/api/restaurant")
@login_required
def list_restaurants():
    user = current_user()
    if user.restaurant is None:
        return jsonify([])
    return jsonify([user.restaurant.to_dict()])


@bp.get("/api/restaurant/<int:restaurant_id>")
@login_required
def get_restaurant(restaurant_id):
    restaurant_access(restaurant_id)
    restaurant = db.session.get(Restaurant, restaurant_id)
    if restaurant is None:
        return jsonify({"error": "Restaurant not found"}), 404
    return jsonify(restaurant.to_dict())


@bp.put("/api/restaurant/<int:restaurant_id>")
@login_required
def update_restaurant(restaurant_id):
    restaurant_access(restaurant_id)
    data = json_body()
    if is_blank(data.get("name")):
        return jsonify({"error": "Restaurant name is required"}), 400

    restaurant = db.session.get(Restaurant, restaurant_id)
    if restaurant is None:
        return jsonify({"error": "Restaurant not found"}), 404
    restaurant.name = data["name"].strip()
    restaurant.description = clean(data.get("description"))
    restaurant.address = clean(data.get("address"))
    restaurant.phone = clean(data.get("phone"))
    restaurant.email = clean(data.get("email"))
    restaurant.is_active = bool(data.get("is_active"))
    db.session.commit()
    broadcast(restaurant.id, "restaurant.updated", restaurant=restaurant.to_dict())
    return jsonify(restaurant.to_dict())
