"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Menu routes: staff-facing menu and menu item management, plus the public
(unauthenticated) menu of an active restaurant.
"""

from flask import Blueprint, jsonify
from sqlalchemy import and_

from srms.auth import login_required, own_restaurant_id, restaurant_access
from srms.errors import ApiError
from srms.models import db, Category, MenuItem, MenuItemSelection, OrderItem, Restaurant, SelectionOption
from srms.realtime import broadcast
from srms.utils import json_body, clean, is_blank, to_float, to_int

bp = Blueprint("menu", __name__)


# --------- helpers ---------
def _menu_query(restaurant_id):
    return (MenuItem.query.join(Category, MenuItem.category_id == Category.id)
            .filter(MenuItem.restaurant_id == restaurant_id, MenuItem.is_active.is_(True))
            .order_by(Category.sort_order.asc(), MenuItem.sort_order.asc(), MenuItem.name.asc()))


def _display_item(item):
    data = item.to_dict(available_options_only=True)
    data["image_url"] = item.image
    data["available"] = item.is_available
    return data


def _find_item(restaurant_id, item_id):
    item = MenuItem.query.filter_by(id=item_id, restaurant_id=restaurant_id).first()
    if item is None:
        raise ApiError("Menu item not found", 404)
    return item


def _build_selections(raw):
    """Selections with their options from a request body list."""
    if not isinstance(raw, list):
        raise ApiError("Selections must be a list", 400)
    selections = []
    for s_index, entry in enumerate(raw):
        if not isinstance(entry, dict) or is_blank(entry.get("name")):
            raise ApiError("Selection name is required", 400)
        selection = MenuItemSelection(
            name=entry["name"].strip(),
            description=clean(entry.get("description")),
            is_required=bool(entry.get("is_required", False)),
            allow_multiple=bool(entry.get("allow_multiple", False)),
            sort_order=to_int(entry.get("sort_order"), s_index),
        )
        for o_index, opt in enumerate(entry.get("options") or []):
            if not isinstance(opt, dict) or is_blank(opt.get("name")):
                raise ApiError("Option name is required", 400)
            price_add = to_float(opt.get("price_add", 0))
            if price_add is None or price_add < 0:
                raise ApiError("Option price must be a non-negative number", 400)
            selection.options.append(SelectionOption(
                name=opt["name"].strip(),
                description=clean(opt.get("description")),
                price_add=price_add,
                is_available=bool(opt.get("is_available", True)),
                sort_order=to_int(opt.get("sort_order"), o_index),
            ))
        selections.append(selection)
    return selections


def _valid_category(restaurant_id, category_id):
    if not category_id:
        raise ApiError("Category is required", 400)
    category = Category.query.filter_by(id=to_int(category_id), restaurant_id=restaurant_id).first()
    if category is None:
        raise ApiError("Invalid category", 400)
    return category


# --------- caller's restaurant ---------
@bp.get("/api/restaurant/menu")
@login_required
def grouped_menu():
    restaurant_id = own_restaurant_id()
    grouped = {}
    for item in _menu_query(restaurant_id).all():
        group = grouped.setdefault(item.category.name, {
            "id": item.category.id,
            "name": item.category.name,
            "items": [],
        })
        group["items"].append({
            "id": item.id,
            "name": item.name,
            "description": item.description,
            "price": item.price,
            "image": item.image,
            "is_available": item.is_available,
        })
    return jsonify({"categories": list(grouped.values())})


@bp.get("/api/restaurant/menu-items")
@login_required
def list_menu_items():
    restaurant_id = own_restaurant_id()
    items = (MenuItem.query.filter_by(restaurant_id=restaurant_id)
             .order_by(MenuItem.sort_order.asc(), MenuItem.name.asc())
             .all())
    return jsonify([m.to_dict() for m in items])


@bp.post("/api/restaurant/menu-items")
@login_required
def create_menu_item():
    restaurant_id = own_restaurant_id()
    data = json_body()
    if is_blank(data.get("name")):
        return jsonify({"error": "Menu item name is required"}), 400
    price = to_float(data.get("price"))
    if not data.get("price") or price is None:
        return jsonify({"error": "Valid price is required"}), 400
    category = _valid_category(restaurant_id, data.get("category_id"))

    is_active = data.get("is_active")
    is_available = data.get("is_available")
    item = MenuItem(
        name=data["name"].strip(),
        description=clean(data.get("description")),
        price=price,
        category_id=category.id,
        image=clean(data.get("image")),
        is_active=True if is_active is None else bool(is_active),
        is_available=True if is_available is None else bool(is_available),
        sort_order=to_int(data.get("sort_order"), 0),
        restaurant_id=restaurant_id,
    )
    if "selections" in data:
        item.selections = _build_selections(data["selections"])
    db.session.add(item)
    db.session.commit()
    broadcast(restaurant_id, "menu.created", item=item.to_dict())
    return jsonify(item.to_dict()), 201


# --------- restaurant in the URL ---------
@bp.get("/api/restaurant/<int:restaurant_id>/menu")
@login_required
def restaurant_menu(restaurant_id):
    restaurant_access(restaurant_id)
    return jsonify([_display_item(m) for m in _menu_query(restaurant_id).all()])


@bp.get("/api/restaurant/<int:restaurant_id>/menu-items/<int:item_id>")
@login_required
def get_menu_item(restaurant_id, item_id):
    restaurant_access(restaurant_id)
    return jsonify(_find_item(restaurant_id, item_id).to_dict())


@bp.put("/api/restaurant/<int:restaurant_id>/menu-items/<int:item_id>")
@login_required
def update_menu_item(restaurant_id, item_id):
    restaurant_access(restaurant_id)
    data = json_body()
    if is_blank(data.get("name")):
        return jsonify({"error": "Menu item name is required"}), 400
    price = to_float(data.get("price"))
    if price is None or price <= 0:
        return jsonify({"error": "Valid price is required"}), 400
    category = _valid_category(restaurant_id, data.get("category_id"))

    item = _find_item(restaurant_id, item_id)
    item.name = data["name"].strip()
    item.description = clean(data.get("description"))
    item.price = price
    item.category_id = category.id
    item.is_active = bool(data.get("is_active"))
    item.is_available = bool(data.get("is_available"))
    if "image" in data:
        item.image = clean(data.get("image"))
    if "sort_order" in data:
        item.sort_order = to_int(data.get("sort_order"), item.sort_order)
    if "selections" in data:
        item.selections = _build_selections(data["selections"])
    db.session.commit()
    broadcast(restaurant_id, "menu.updated", item=item.to_dict())
    return jsonify(item.to_dict())


@bp.delete("/api/restaurant/<int:restaurant_id>/menu-items/<int:item_id>")
@login_required
def delete_menu_item(restaurant_id, item_id):
    restaurant_access(restaurant_id)
    item = _find_item(restaurant_id, item_id)
    if OrderItem.query.filter_by(menu_item_id=item.id).count() > 0:
        return jsonify({"error": "Cannot delete a menu item that has been ordered. Set it to inactive instead."}), 400
    db.session.delete(item)
    db.session.commit()
    broadcast(restaurant_id, "menu.deleted", id=item_id)
    return jsonify({"message": "Menu item deleted successfully"})


# --------- public ---------
def _public_restaurant(restaurant_id):
    restaurant = db.session.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise ApiError("Restaurant not found", 404)
    if not restaurant.is_active:
        raise ApiError("Restaurant is not active", 403)
    return restaurant


@bp.get("/api/menu/<int:restaurant_id>")
def public_menu(restaurant_id):
    restaurant = _public_restaurant(restaurant_id)
    items = _menu_query(restaurant_id).filter(MenuItem.is_available.is_(True)).all()
    info = restaurant.to_dict()
    info.pop("created_at")
    info.pop("updated_at")
    return jsonify({"restaurant": info, "menu_items": [_display_item(m) for m in items]})


@bp.get("/api/menu/<int:restaurant_id>/categories")
def public_categories(restaurant_id):
    _public_restaurant(restaurant_id)
    categories = (Category.query
                  .filter(Category.restaurant_id == restaurant_id,
                          Category.is_active.is_(True),
                          Category.menu_items.any(and_(MenuItem.is_active.is_(True),
                                                       MenuItem.is_available.is_(True))))
                  .order_by(Category.sort_order.asc())
                  .all())
    return jsonify([{
        "id": c.id,
        "name": c.name,
        "description": c.description,
        "sort_order": c.sort_order,
        "display_order": c.sort_order,
    } for c in categories])
