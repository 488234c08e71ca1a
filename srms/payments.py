"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Payment recording for customer sessions and revenue statistics. A payment
stores a snapshot of the session, table, restaurant and billed items so
receipts survive later menu or table edits. A session may be paid in
several payments (split billing).
"""

import logging

from flask import Blueprint, jsonify
from sqlalchemy import func

from srms.auth import current_user, login_required, own_restaurant_id, restaurant_access
from srms.models import db, CustomerSession, Payment, PaymentItem, PAYMENT_METHODS, utcnow
from srms.realtime import broadcast
from srms.utils import json_body, clean, to_float, to_int

logger = logging.getLogger(__name__)

bp = Blueprint("payments", __name__)


def _amount(value):
    return to_float(value) or 0.0


def _optional_amount(value):
    return to_float(value) if value else None


def _snapshot_items(customer_session, order_ids):
    items = []
    for order in customer_session.orders:
        if order_ids and order.id not in order_ids:
            continue
        for item in order.items:
            menu_item = item.menu_item
            items.append(PaymentItem(
                menu_item_name=menu_item.name,
                menu_item_description=menu_item.description,
                menu_item_price=menu_item.price,
                category_name=menu_item.category.name,
                quantity=item.quantity,
                unit_price=item.price,
                total_price=round(item.price * item.quantity, 2),
                notes=item.notes,
                selections=item.selections,
            ))
    return items


@bp.route("/api/restaurant/sessions/<int:session_id>/payment", methods=["POST", "PUT"])
@login_required
def record_payment(session_id):
    data = json_body()
    method = str(data.get("payment_method") or "CASH").upper()
    if method not in PAYMENT_METHODS:
        return jsonify({"error": f"Invalid payment method. Valid options: {', '.join(PAYMENT_METHODS)}"}), 400

    user = current_user()
    restaurant = user.restaurant
    if restaurant is None:
        return jsonify({"error": "Restaurant not found"}), 404
    customer_session = CustomerSession.query.filter_by(id=session_id, restaurant_id=restaurant.id).first()
    if customer_session is None:
        return jsonify({"error": "Session not found"}), 404

    count = Payment.query.filter_by(restaurant_id=restaurant.id).count()
    raw_order_ids = data.get("order_ids") or []
    if not isinstance(raw_order_ids, list):
        return jsonify({"error": "Order IDs must be a list"}), 400
    order_ids = [to_int(i) for i in raw_order_ids]
    table = customer_session.table
    payment = Payment(
        payment_number=f"PAY{count + 1:06d}",
        session_id=customer_session.id,
        restaurant_id=restaurant.id,
        customer_name=customer_session.customer_name,
        customer_phone=customer_session.customer_phone,
        customer_email=customer_session.customer_email,
        party_size=customer_session.party_size,
        table_number=table.number if table else "",
        table_name=table.name if table else None,
        check_in_time=customer_session.check_in_time,
        check_out_time=customer_session.check_out_time or utcnow(),
        restaurant_name=restaurant.name or "",
        restaurant_address=restaurant.address,
        restaurant_phone=restaurant.phone,
        payment_method=method,
        subtotal_amount=_amount(data.get("subtotal_amount")),
        discount_amount=_amount(data.get("discount_amount")),
        extra_charges_amount=_amount(data.get("extra_charges_amount")),
        final_amount=_amount(data.get("final_amount")),
        received_amount=_optional_amount(data.get("received_amount")),
        change_amount=_optional_amount(data.get("change_amount")),
        notes=clean(data.get("notes")),
        extra_charges=data.get("extra_charges") or None,
    )
    payment.items = _snapshot_items(customer_session, order_ids)
    db.session.add(payment)
    db.session.commit()

    logger.info("Payment %s recorded for session %s (%s %.2f)",
                payment.payment_number, customer_session.id, method, payment.final_amount)
    broadcast(restaurant.id, "payment.created", payment=payment.to_dict())
    return jsonify({
        "success": True,
        "id": payment.id,
        "payment_id": payment.id,
        "data": payment.to_dict(),
    }), 201


@bp.get("/api/restaurant/sessions/<int:session_id>/payment")
@login_required
def get_payment(session_id):
    restaurant_id = own_restaurant_id()
    payment = (Payment.query.filter_by(session_id=session_id, restaurant_id=restaurant_id)
               .order_by(Payment.id.asc())
               .first())
    if payment is None:
        return jsonify({"error": "Payment not found"}), 404
    return jsonify(payment.to_dict())


@bp.get("/api/restaurant/<int:restaurant_id>/payments")
@login_required
def list_payments(restaurant_id):
    restaurant_access(restaurant_id)
    payments = Payment.query.filter_by(restaurant_id=restaurant_id).order_by(Payment.id.desc()).all()
    return jsonify([p.to_dict() for p in payments])


@bp.get("/api/restaurant/<int:restaurant_id>/payments/stats")
@login_required
def payment_stats(restaurant_id):
    restaurant_access(restaurant_id)
    total, count, average = (db.session.query(func.sum(Payment.final_amount),
                                              func.count(Payment.id),
                                              func.avg(Payment.final_amount))
                             .filter(Payment.restaurant_id == restaurant_id)
                             .one())
    breakdown = (db.session.query(Payment.payment_method, func.count(Payment.id), func.sum(Payment.final_amount))
                 .filter(Payment.restaurant_id == restaurant_id)
                 .group_by(Payment.payment_method)
                 .order_by(Payment.payment_method)
                 .all())
    return jsonify({
        "total_revenue": total or 0,
        "total_payments": count or 0,
        "average_order_value": average or 0,
        "payment_method_breakdown": [
            {"method": method, "count": n, "total": amount or 0}
            for method, n, amount in breakdown
        ],
    })
