"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Menu category routes. Two families: /api/restaurant/categories works on the
caller's own restaurant, /api/restaurant/<id>/categories on the restaurant
named in the URL after an access check.
"""

from flask import Blueprint, jsonify
from sqlalchemy import func

from srms.auth import admin_required, current_user, login_required, own_restaurant_id, restaurant_access
from srms.errors import ApiError
from srms.models import db, Category
from srms.realtime import broadcast
from srms.utils import json_body, clean, is_blank, to_int

bp = Blueprint("categories", __name__)


# --------- helpers ---------
def _categories_of(restaurant_id):
    return (Category.query.filter_by(restaurant_id=restaurant_id)
            .order_by(Category.sort_order.asc(), Category.name.asc())
            .all())


def _find_category(restaurant_id, category_id):
    category = Category.query.filter_by(id=category_id, restaurant_id=restaurant_id).first()
    if category is None:
        raise ApiError("Category not found", 404)
    return category


def _name_taken(restaurant_id, name, exclude_id=None):
    query = Category.query.filter_by(restaurant_id=restaurant_id, name=name)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _delete(category, message):
    if category.menu_items:
        return jsonify({"error": message}), 400
    restaurant_id, category_id = category.restaurant_id, category.id
    db.session.delete(category)
    db.session.commit()
    broadcast(restaurant_id, "category.deleted", id=category_id)
    return jsonify({"message": "Category deleted successfully"})


# --------- caller's restaurant ---------
@bp.get("/api/restaurant/categories")
@login_required
def list_own_categories():
    restaurant_id = current_user().restaurant_id
    if restaurant_id is None:
        return jsonify([])
    return jsonify([c.to_dict() for c in _categories_of(restaurant_id)])


@bp.post("/api/restaurant/categories")
@admin_required
def create_own_category():
    restaurant_id = own_restaurant_id("Please create your restaurant first", 400)
    data = json_body()
    if is_blank(data.get("name")):
        return jsonify({"error": "Category name is required"}), 400
    name = data["name"].strip()
    if _name_taken(restaurant_id, name):
        return jsonify({"error": "A category with this name already exists"}), 400

    is_active = data.get("is_active")
    category = Category(
        name=name,
        description=clean(data.get("description")),
        is_active=True if is_active is None else bool(is_active),
        sort_order=to_int(data.get("sort_order"), 0),
        restaurant_id=restaurant_id,
    )
    db.session.add(category)
    db.session.commit()
    broadcast(restaurant_id, "category.created", category=category.to_dict())
    return jsonify(category.to_dict()), 201


@bp.get("/api/restaurant/categories/<int:category_id>")
@login_required
def get_own_category(category_id):
    category = _find_category(own_restaurant_id(), category_id)
    return jsonify(category.to_dict())


@bp.put("/api/restaurant/categories/<int:category_id>")
@login_required
def update_own_category(category_id):
    restaurant_id = own_restaurant_id()
    category = _find_category(restaurant_id, category_id)
    data = json_body()
    if is_blank(data.get("name")):
        return jsonify({"error": "Category name is required"}), 400
    name = data["name"].strip()
    if _name_taken(restaurant_id, name, exclude_id=category.id):
        return jsonify({"error": "A category with this name already exists"}), 400

    is_active = data.get("is_active")
    category.name = name
    category.description = clean(data.get("description"))
    category.is_active = True if is_active is None else bool(is_active)
    category.sort_order = to_int(data.get("sort_order"), 0)
    db.session.commit()
    broadcast(restaurant_id, "category.updated", category=category.to_dict())
    return jsonify(category.to_dict())


@bp.delete("/api/restaurant/categories/<int:category_id>")
@login_required
def delete_own_category(category_id):
    category = _find_category(own_restaurant_id(), category_id)
    return _delete(category, "Cannot delete category that contains menu items")


# --------- restaurant in the URL ---------
@bp.get("/api/restaurant/<int:restaurant_id>/categories")
@login_required
def list_categories(restaurant_id):
    restaurant_access(restaurant_id)
    return jsonify([c.to_dict() for c in _categories_of(restaurant_id)])


@bp.post("/api/restaurant/<int:restaurant_id>/categories")
@login_required
def create_category(restaurant_id):
    restaurant_access(restaurant_id)
    data = json_body()
    if is_blank(data.get("name")):
        return jsonify({"error": "Category name is required"}), 400
    name = data["name"].strip()
    if _name_taken(restaurant_id, name):
        return jsonify({"error": "Category name already exists"}), 400

    last_sort = (db.session.query(func.max(Category.sort_order))
                 .filter(Category.restaurant_id == restaurant_id)
                 .scalar())
    category = Category(
        name=name,
        description=clean(data.get("description")),
        is_active=bool(data.get("is_active")),
        sort_order=(last_sort or 0) + 1,
        restaurant_id=restaurant_id,
    )
    db.session.add(category)
    db.session.commit()
    broadcast(restaurant_id, "category.created", category=category.to_dict())
    return jsonify(category.to_dict()), 201


@bp.put("/api/restaurant/<int:restaurant_id>/categories/<int:category_id>")
@login_required
def update_category(restaurant_id, category_id):
    restaurant_access(restaurant_id)
    data = json_body()
    if is_blank(data.get("name")):
        return jsonify({"error": "Category name is required"}), 400
    name = data["name"].strip()
    if _name_taken(restaurant_id, name, exclude_id=category_id):
        return jsonify({"error": "Category name already exists"}), 400

    category = _find_category(restaurant_id, category_id)
    category.name = name
    category.description = clean(data.get("description"))
    category.is_active = bool(data.get("is_active"))
    db.session.commit()
    broadcast(restaurant_id, "category.updated", category=category.to_dict())
    return jsonify(category.to_dict())


@bp.delete("/api/restaurant/<int:restaurant_id>/categories/<int:category_id>")
@login_required
def delete_category(restaurant_id, category_id):
    restaurant_access(restaurant_id)
    category = _find_category(restaurant_id, category_id)
    return _delete(category, "Cannot delete category with menu items")
