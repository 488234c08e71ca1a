"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Table layout routes: table CRUD, grid positions on the floor plan and
manual ordering of the table list.
"""

from flask import Blueprint, jsonify
from sqlalchemy import func

from srms.auth import login_required, own_restaurant_id, restaurant_access
from srms.errors import ApiError
from srms.models import db, CustomerSession, Order, Table
from srms.realtime import broadcast
from srms.utils import json_body, clean, is_number, to_int

bp = Blueprint("tables", __name__)


# --------- helpers ---------
def _find_table(restaurant_id, table_id):
    table = Table.query.filter_by(id=table_id, restaurant_id=restaurant_id).first()
    if table is None:
        raise ApiError("Table not found", 404)
    return table


def _number_taken(restaurant_id, number):
    return Table.query.filter_by(restaurant_id=restaurant_id, number=number).first() is not None


def _ordered_tables(restaurant_id):
    return (Table.query.filter_by(restaurant_id=restaurant_id)
            .order_by(Table.sort_order.asc(), Table.number.asc())
            .all())


def _or_default(value, default):
    return default if value is None else value


# --------- caller's restaurant ---------
@bp.get("/api/restaurant/tables")
@login_required
def list_own_tables():
    restaurant_id = own_restaurant_id()
    tables = (Table.query.filter_by(restaurant_id=restaurant_id, is_active=True)
              .order_by(Table.sort_order.asc())
              .all())
    return jsonify([t.to_dict() for t in tables])


@bp.post("/api/restaurant/tables")
@login_required
def create_own_table():
    restaurant_id = own_restaurant_id()
    data = json_body()
    number = clean(data.get("number"))
    if not number:
        return jsonify({"error": "Table number is required"}), 400
    if _number_taken(restaurant_id, number):
        return jsonify({"error": "A table with this number already exists"}), 400

    is_active = data.get("is_active")
    table = Table(
        number=number,
        name=clean(data.get("name")),
        capacity=to_int(data.get("capacity")) or 4,
        is_active=True if is_active is None else bool(is_active),
        sort_order=to_int(data.get("sort_order")) or 0,
        grid_x=to_int(data.get("grid_x")) or 0,
        grid_y=to_int(data.get("grid_y")) or 0,
        grid_width=to_int(data.get("grid_width")) or 2,
        grid_height=to_int(data.get("grid_height")) or 2,
        restaurant_id=restaurant_id,
    )
    db.session.add(table)
    db.session.commit()
    broadcast(restaurant_id, "table.created", table=table.to_dict())
    return jsonify(table.to_dict()), 201


# --------- restaurant in the URL ---------
@bp.get("/api/restaurant/<int:restaurant_id>/tables")
@login_required
def list_tables(restaurant_id):
    restaurant_access(restaurant_id)
    return jsonify([t.to_dict() for t in _ordered_tables(restaurant_id)])


@bp.post("/api/restaurant/<int:restaurant_id>/tables")
@login_required
def create_table(restaurant_id):
    restaurant_access(restaurant_id)
    data = json_body()
    number = clean(data.get("number"))
    if not number:
        return jsonify({"error": "Table number is required"}), 400
    capacity = to_int(data.get("capacity"))
    if not capacity or capacity < 1:
        return jsonify({"error": "Valid capacity is required"}), 400
    if _number_taken(restaurant_id, number):
        return jsonify({"error": "Table number already exists"}), 400

    sort_order = to_int(data.get("sort_order"))
    if sort_order is None:
        max_sort = (db.session.query(func.max(Table.sort_order))
                    .filter(Table.restaurant_id == restaurant_id)
                    .scalar())
        sort_order = (max_sort or 0) + 1

    table = Table(
        number=number,
        name=clean(data.get("name")),
        capacity=capacity,
        is_active=data.get("is_active") is not False,
        sort_order=sort_order,
        grid_x=_or_default(to_int(data.get("grid_x")), 0),
        grid_y=_or_default(to_int(data.get("grid_y")), 0),
        grid_width=_or_default(to_int(data.get("grid_width")), 2),
        grid_height=_or_default(to_int(data.get("grid_height")), 2),
        restaurant_id=restaurant_id,
    )
    db.session.add(table)
    db.session.commit()
    broadcast(restaurant_id, "table.created", table=table.to_dict())
    return jsonify(table.to_dict()), 201


@bp.put("/api/restaurant/<int:restaurant_id>/tables/reorder")
@login_required
def reorder_tables(restaurant_id):
    restaurant_access(restaurant_id)
    table_ids = json_body().get("table_ids")
    if not isinstance(table_ids, list) or not table_ids:
        return jsonify({"error": "Table IDs array is required"}), 400

    ids = [to_int(t) for t in table_ids]
    tables = {t.id: t for t in Table.query.filter(Table.restaurant_id == restaurant_id,
                                                   Table.id.in_([i for i in ids if i is not None])).all()}
    if len(tables) != len(set(ids)) or None in ids:
        return jsonify({"error": "One or more tables do not belong to this restaurant"}), 400

    for index, table_id in enumerate(ids):
        tables[table_id].sort_order = index
    db.session.commit()
    ordered = [t.to_dict() for t in _ordered_tables(restaurant_id)]
    broadcast(restaurant_id, "tables.reordered", tables=ordered)
    return jsonify({"message": "Tables reordered successfully", "tables": ordered})


@bp.get("/api/restaurant/<int:restaurant_id>/tables/<int:table_id>")
@login_required
def get_table(restaurant_id, table_id):
    restaurant_access(restaurant_id)
    table = _find_table(restaurant_id, table_id)
    active = table.active_session()
    data = table.to_dict()
    data["restaurant"] = table.restaurant.summary()
    data["session"] = active.to_dict(include_waiter=True) if active else None
    return jsonify(data)


@bp.put("/api/restaurant/<int:restaurant_id>/tables/<int:table_id>")
@login_required
def update_table(restaurant_id, table_id):
    restaurant_access(restaurant_id)
    table = _find_table(restaurant_id, table_id)
    data = json_body()
    number = clean(data.get("number"))
    if not number:
        return jsonify({"error": "Table number is required"}), 400
    capacity = to_int(data.get("capacity"))
    if not capacity or capacity < 1:
        return jsonify({"error": "Valid capacity is required"}), 400
    if number != table.number and _number_taken(restaurant_id, number):
        return jsonify({"error": "Table number already exists"}), 400

    table.number = number
    table.name = clean(data.get("name"))
    table.capacity = capacity
    table.is_active = data.get("is_active") is not False
    db.session.commit()
    broadcast(restaurant_id, "table.updated", table=table.to_dict())
    return jsonify(table.to_dict())


@bp.delete("/api/restaurant/<int:restaurant_id>/tables/<int:table_id>")
@login_required
def delete_table(restaurant_id, table_id):
    restaurant_access(restaurant_id)
    table = _find_table(restaurant_id, table_id)
    if Order.query.filter_by(table_id=table.id).count() > 0:
        return jsonify({"error": "Cannot delete table with existing orders. Set it to inactive instead."}), 400
    if table.active_session() is not None:
        return jsonify({"error": "Cannot delete a table that is currently occupied"}), 400

    CustomerSession.query.filter_by(table_id=table.id).update({"table_id": None})
    db.session.delete(table)
    db.session.commit()
    broadcast(restaurant_id, "table.deleted", id=table_id)
    return jsonify({"success": True, "message": "Table deleted successfully"})


@bp.put("/api/restaurant/<int:restaurant_id>/tables/<int:table_id>/position")
@login_required
def update_table_position(restaurant_id, table_id):
    restaurant_access(restaurant_id)
    table = _find_table(restaurant_id, table_id)
    data = json_body()
    grid_x, grid_y = data.get("grid_x"), data.get("grid_y")
    grid_width, grid_height = data.get("grid_width"), data.get("grid_height")
    if not (is_number(grid_x) and grid_x >= 0 and is_number(grid_y) and grid_y >= 0
            and is_number(grid_width) and grid_width >= 1
            and is_number(grid_height) and grid_height >= 1):
        return jsonify({"error": "Invalid grid position values"}), 400

    table.grid_x = int(grid_x)
    table.grid_y = int(grid_y)
    table.grid_width = int(grid_width)
    table.grid_height = int(grid_height)
    db.session.commit()
    broadcast(restaurant_id, "table.moved", table=table.to_dict())
    return jsonify(table.to_dict())
