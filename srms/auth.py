"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Authentication routes (signup, login, logout, profile) and the access
helpers every other blueprint uses to scope requests to a tenant.
"""

import logging
from functools import wraps

from flask import Blueprint, current_app, jsonify, session
from werkzeug.security import check_password_hash, generate_password_hash

from srms.errors import ApiError
from srms.models import db, User, Restaurant, ROLE_ADMIN
from srms.utils import json_body, clean

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)


# --------- helpers ---------
def current_user():
    user_id = session.get("user_id")
    return db.session.get(User, user_id) if user_id else None


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if current_user() is None:
            raise ApiError("Unauthorized", 401)
        return view(*args, **kwargs)
    return wrapped


def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        user = current_user()
        if user is None:
            raise ApiError("Unauthorized", 401)
        if not user.is_admin:
            raise ApiError("Access denied", 403)
        return view(*args, **kwargs)
    return wrapped


def restaurant_access(restaurant_id):
    """Caller must belong to the restaurant named in the URL."""
    user = current_user()
    if user.restaurant_id is None or user.restaurant_id != restaurant_id:
        raise ApiError("Access denied", 403)
    return user


def own_restaurant_id(message="Restaurant not found", status_code=404):
    """Restaurant of the caller for routes that do not carry it in the URL."""
    user = current_user()
    if user.restaurant_id is None:
        raise ApiError(message, status_code)
    return user.restaurant_id


def hash_password(password):
    return generate_password_hash(password)


def password_too_short(password):
    return not isinstance(password, str) or len(password) < current_app.config["PASSWORD_MIN_LENGTH"]


def _session_payload(user):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "image": user.image,
        "role": user.role,
        "restaurant_id": user.restaurant_id,
        "restaurant_name": user.restaurant.name if user.restaurant else None,
    }


def _profile_payload(user):
    restaurant = user.restaurant
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "image": user.image,
        "role": user.role,
        "restaurant_id": user.restaurant_id,
        "restaurant_name": restaurant.name if restaurant else None,
        "restaurant_description": restaurant.description if restaurant else None,
        "restaurant_address": restaurant.address if restaurant else None,
        "restaurant_phone": restaurant.phone if restaurant else None,
        "restaurant_email": restaurant.email if restaurant else None,
        "is_restaurant_active": restaurant.is_active if restaurant else True,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "updated_at": user.updated_at.isoformat() if user.updated_at else None,
    }


# --------- routes ---------
@bp.post("/api/auth/signup")
def signup():
    data = json_body()
    owner_name = clean(data.get("owner_name"))
    email = clean(data.get("email"))
    password = data.get("password") or ""
    restaurant_name = clean(data.get("restaurant_name"))
    if not owner_name or not email or not password or not restaurant_name:
        return jsonify({"error": "Missing required fields"}), 400

    email = email.lower()
    if User.query.filter_by(email=email).first():
        return jsonify({"error": "User already exists"}), 400

    restaurant = Restaurant(name=restaurant_name, email=email, is_active=True)
    db.session.add(restaurant)
    db.session.flush()
    user = User(name=owner_name, email=email, password_hash=hash_password(password),
                role=ROLE_ADMIN, restaurant_id=restaurant.id)
    db.session.add(user)
    db.session.commit()
    logger.info("New restaurant %s created by %s", restaurant.id, email)
    return jsonify({"message": "User and restaurant created successfully", "user_id": user.id}), 201


@bp.post("/api/auth/login")
def login():
    data = json_body()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    user = User.query.filter_by(email=email).first()
    if user and check_password_hash(user.password_hash, password):
        session.clear()
        session["user_id"] = user.id
        return jsonify({"ok": True, "user": _session_payload(user)})
    logger.info("Failed login for %s", email)
    return jsonify({"ok": False, "error": "Invalid credentials"}), 401


@bp.post("/api/auth/logout")
def logout():
    session.clear()
    return jsonify({"ok": True})


@bp.get("/api/auth/session")
@login_required
def session_info():
    return jsonify(_session_payload(current_user()))


@bp.get("/api/check-user-exists")
def check_user_exists():
    user = User.query.order_by(User.id).first()
    return jsonify({
        "user_exists": user is not None,
        "restaurant_name": user.restaurant.name if user and user.restaurant else None,
    })


@bp.get("/api/user/profile")
@login_required
def get_profile():
    return jsonify(_profile_payload(current_user()))


@bp.put("/api/user/profile")
@login_required
def update_profile():
    user = current_user()
    if not user.is_admin:
        return jsonify({"error": "Only admins can update restaurant information"}), 403

    data = json_body()
    restaurant_name = clean(data.get("restaurant_name")) or clean(data.get("name"))
    if not restaurant_name:
        return jsonify({"error": "Restaurant name is required"}), 400

    if "name" in data:
        user.name = clean(data.get("name"))

    restaurant = user.restaurant
    if restaurant is None:
        restaurant = Restaurant(name=restaurant_name)
        db.session.add(restaurant)
        db.session.flush()
        user.restaurant_id = restaurant.id
    restaurant.name = restaurant_name
    restaurant.description = clean(data.get("restaurant_description"))
    restaurant.address = clean(data.get("restaurant_address"))
    restaurant.phone = clean(data.get("restaurant_phone"))
    restaurant.email = clean(data.get("restaurant_email"))
    is_active = data.get("is_restaurant_active")
    restaurant.is_active = True if is_active is None else bool(is_active)
    db.session.commit()
    db.session.refresh(user)
    return jsonify(_profile_payload(user))
