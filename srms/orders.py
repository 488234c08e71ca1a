"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Order routes: taking orders for a session or table, kitchen status
updates, removing items (with total recomputation) and deleting orders.

    PENDING -> CONFIRMED -> PREPARING -> READY -> SERVING -> DELIVERED
                                                         \-> CANCELLED
"""

import logging
import time

from flask import Blueprint, jsonify

from srms.auth import login_required, own_restaurant_id, restaurant_access
from srms.errors import ApiError
from srms.models import (
    db, CustomerSession, MenuItem, Order, OrderItem, Table,
    ORDER_STATUSES, MODIFIABLE_ORDER_STATUSES, DELETABLE_ORDER_STATUSES, utcnow,
)
from srms.realtime import broadcast
from srms.utils import json_body, clean, to_float, to_int

logger = logging.getLogger(__name__)

bp = Blueprint("orders", __name__)

# first transition into these statuses stamps the matching column
STATUS_TIMESTAMPS = {
    "PREPARING": "preparing_at",
    "READY": "ready_at",
    "DELIVERED": "served_at",
}


def _find_order(restaurant_id, order_id):
    order = Order.query.filter_by(id=order_id, restaurant_id=restaurant_id).first()
    if order is None:
        raise ApiError("Order not found", 404)
    return order


def _next_order_number(restaurant_id):
    count = Order.query.filter_by(restaurant_id=restaurant_id).count()
    return f"ORD-{int(time.time() * 1000)}-{count + 1:03d}"


def _order_item(restaurant_id, raw):
    if not isinstance(raw, dict):
        raise ApiError("Invalid order item", 400)
    menu_item = MenuItem.query.filter_by(id=to_int(raw.get("menu_item_id")), restaurant_id=restaurant_id).first()
    if menu_item is None:
        raise ApiError("Invalid menu item", 400)
    quantity = to_int(raw.get("quantity"), 1)
    if quantity < 1:
        raise ApiError("Invalid item quantity", 400)
    price = to_float(raw.get("price"))
    if price is None:
        price = menu_item.price
    return OrderItem(
        menu_item_id=menu_item.id,
        quantity=quantity,
        price=price,
        notes=clean(raw.get("notes")),
        selections=raw.get("selected_options") or None,
    )


@bp.get("/api/restaurant/<int:restaurant_id>/orders")
@login_required
def list_orders(restaurant_id):
    restaurant_access(restaurant_id)
    orders = (Order.query.filter_by(restaurant_id=restaurant_id)
              .order_by(Order.ordered_at.desc(), Order.id.desc())
              .all())
    return jsonify([o.to_dict() for o in orders])


@bp.post("/api/restaurant/<int:restaurant_id>/orders")
@login_required
def create_order(restaurant_id):
    user = restaurant_access(restaurant_id)
    data = json_body()
    items = data.get("items")
    if not isinstance(items, list) or not items:
        return jsonify({"error": "Order must have at least one item"}), 400
    total_amount = to_float(data.get("total_amount"))
    if not total_amount or total_amount <= 0:
        return jsonify({"error": "Invalid total amount"}), 400

    customer_session = None
    if data.get("session_id"):
        customer_session = CustomerSession.query.filter_by(
            id=to_int(data["session_id"]), restaurant_id=restaurant_id).first()
        if customer_session is None:
            return jsonify({"error": "Customer session not found"}), 404

    table_id = to_int(data.get("table_id"))
    if table_id:
        if Table.query.filter_by(id=table_id, restaurant_id=restaurant_id).first() is None:
            return jsonify({"error": "Invalid table"}), 400
    elif customer_session is not None:
        table_id = customer_session.table_id

    order = Order(
        order_number=_next_order_number(restaurant_id),
        restaurant_id=restaurant_id,
        session_id=customer_session.id if customer_session else None,
        table_id=table_id or None,
        customer_name=clean(data.get("customer_name")),
        total_amount=total_amount,
        notes=clean(data.get("notes")),
        waiter_id=user.id,
        status="PENDING",
    )
    order.items = [_order_item(restaurant_id, raw) for raw in items]
    db.session.add(order)
    if customer_session is not None:
        customer_session.status = "ORDERED"
    db.session.commit()

    logger.info("Order %s created for restaurant %s", order.order_number, restaurant_id)
    broadcast(restaurant_id, "order.created", order=order.to_dict())
    return jsonify(order.to_dict()), 201


@bp.delete("/api/restaurant/<int:restaurant_id>/orders/<int:order_id>/items/<int:item_id>")
@login_required
def remove_order_item(restaurant_id, order_id, item_id):
    restaurant_access(restaurant_id)
    order_item = (OrderItem.query.join(Order, OrderItem.order_id == Order.id)
                  .filter(OrderItem.id == item_id, Order.restaurant_id == restaurant_id)
                  .first())
    if order_item is None:
        return jsonify({"error": "Order item not found"}), 404
    if order_item.order_id != order_id:
        return jsonify({"error": "Order item does not belong to this order"}), 400

    order = order_item.order
    if order.status not in MODIFIABLE_ORDER_STATUSES:
        return jsonify({
            "error": f"Cannot delete items from {order.status.lower()} orders. Items can only be "
                     f"deleted from orders with status: {', '.join(MODIFIABLE_ORDER_STATUSES)}"
        }), 400

    item_total = order_item.price * order_item.quantity
    order.items.remove(order_item)
    order.total_amount = max(0.0, round(order.total_amount - item_total, 2))
    if not order.items:
        order.status = "CANCELLED"
    db.session.commit()

    broadcast(restaurant_id, "order.updated", order=order.to_dict())
    return jsonify({"message": "Order item removed successfully", "order": order.to_dict()})


# --------- caller's restaurant ---------
@bp.get("/api/restaurant/orders/<int:order_id>")
@login_required
def get_order(order_id):
    order = _find_order(own_restaurant_id(), order_id)
    return jsonify(order.to_dict())


@bp.put("/api/restaurant/orders/<int:order_id>")
@login_required
def update_order(order_id):
    restaurant_id = own_restaurant_id()
    order = _find_order(restaurant_id, order_id)
    data = json_body()

    status = str(data["status"]).upper() if data.get("status") else None
    if status and status not in ORDER_STATUSES:
        return jsonify({"error": f"Invalid status. Valid options: {', '.join(ORDER_STATUSES)}"}), 400
    total_amount = to_float(data.get("total_amount")) if "total_amount" in data else None
    if "total_amount" in data and (total_amount is None or total_amount < 0):
        return jsonify({"error": "Invalid total amount"}), 400

    if status:
        order.status = status
        stamp = STATUS_TIMESTAMPS.get(status)
        if stamp and getattr(order, stamp) is None:
            setattr(order, stamp, utcnow())
    for field in ("notes", "customer_name", "customer_phone", "customer_email"):
        if field in data:
            setattr(order, field, clean(data.get(field)))
    if total_amount is not None:
        order.total_amount = total_amount
    db.session.commit()

    broadcast(restaurant_id, "order.updated", order=order.to_dict())
    return jsonify(order.to_dict())


@bp.delete("/api/restaurant/orders/<int:order_id>")
@login_required
def delete_order(order_id):
    restaurant_id = own_restaurant_id()
    order = _find_order(restaurant_id, order_id)
    if order.status not in DELETABLE_ORDER_STATUSES:
        return jsonify({"error": "Can only delete pending or cancelled orders"}), 400
    db.session.delete(order)
    db.session.commit()
    broadcast(restaurant_id, "order.deleted", id=order_id)
    return jsonify({"message": "Order deleted successfully"})
