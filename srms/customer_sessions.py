"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Customer seating sessions: walk-in queue, seating at a table, status
updates and checkout.

    WAITING -> SEATED -> ORDERING -> ORDERED -> SERVING -> DINING -> BILLING -> COMPLETED
"""

import logging

from flask import Blueprint, jsonify

from srms.auth import login_required, own_restaurant_id, restaurant_access
from srms.errors import ApiError
from srms.models import db, CustomerSession, Table, SESSION_STATUSES, ACTIVE_SESSION_STATUSES, utcnow
from srms.realtime import broadcast
from srms.utils import json_body, clean, to_int

logger = logging.getLogger(__name__)

bp = Blueprint("customer_sessions", __name__)


def _find_session(restaurant_id, session_id):
    customer_session = CustomerSession.query.filter_by(id=session_id, restaurant_id=restaurant_id).first()
    if customer_session is None:
        raise ApiError("Customer session not found", 404)
    return customer_session


def _new_session(restaurant_id, data, party_size):
    customer_session = CustomerSession(
        customer_name=clean(data.get("customer_name")),
        customer_phone=clean(data.get("customer_phone")),
        customer_email=clean(data.get("customer_email")),
        party_size=party_size,
        notes=clean(data.get("notes")),
        status="WAITING",
        restaurant_id=restaurant_id,
    )
    db.session.add(customer_session)
    db.session.commit()
    broadcast(restaurant_id, "session.created", session=customer_session.to_dict())
    return customer_session


# --------- caller's restaurant ---------
@bp.get("/api/restaurant/sessions")
@login_required
def list_own_sessions():
    restaurant_id = own_restaurant_id()
    sessions = (CustomerSession.query.filter_by(restaurant_id=restaurant_id)
                .order_by(CustomerSession.check_in_time.desc(), CustomerSession.id.desc())
                .all())
    return jsonify([s.to_dict(include_orders=True) for s in sessions])


@bp.post("/api/restaurant/sessions")
@login_required
def create_own_session():
    restaurant_id = own_restaurant_id()
    data = json_body()
    party_size = to_int(data.get("party_size"))
    if not party_size or party_size < 1:
        return jsonify({"error": "Party size is required"}), 400
    return jsonify(_new_session(restaurant_id, data, party_size).to_dict()), 201


# --------- restaurant in the URL ---------
@bp.get("/api/restaurant/<int:restaurant_id>/sessions")
@login_required
def list_open_sessions(restaurant_id):
    restaurant_access(restaurant_id)
    sessions = (CustomerSession.query
                .filter(CustomerSession.restaurant_id == restaurant_id,
                        CustomerSession.status != "COMPLETED")
                .order_by(CustomerSession.check_in_time.desc(), CustomerSession.id.desc())
                .all())
    return jsonify([s.to_dict() for s in sessions])


@bp.post("/api/restaurant/<int:restaurant_id>/sessions")
@login_required
def create_session(restaurant_id):
    restaurant_access(restaurant_id)
    data = json_body()
    party_size = to_int(data.get("party_size"))
    if not party_size or party_size < 1:
        return jsonify({"error": "Party size is required"}), 400
    return jsonify(_new_session(restaurant_id, data, party_size).to_dict()), 201


@bp.get("/api/restaurant/<int:restaurant_id>/sessions/<int:session_id>")
@login_required
def get_session(restaurant_id, session_id):
    restaurant_access(restaurant_id)
    customer_session = _find_session(restaurant_id, session_id)
    return jsonify(customer_session.to_dict(include_orders=True, include_waiter=True))


@bp.put("/api/restaurant/<int:restaurant_id>/sessions/<int:session_id>")
@login_required
def update_session(restaurant_id, session_id):
    restaurant_access(restaurant_id)
    customer_session = _find_session(restaurant_id, session_id)
    data = json_body()

    status = str(data["status"]).upper() if data.get("status") else None
    if status and status not in SESSION_STATUSES:
        return jsonify({"error": f"Invalid status. Valid options: {', '.join(SESSION_STATUSES)}"}), 400
    party_size = to_int(data.get("party_size")) if "party_size" in data else None
    if "party_size" in data and (not party_size or party_size < 1):
        return jsonify({"error": "Party size is required"}), 400

    if status:
        customer_session.status = status
        if status == "COMPLETED" and customer_session.check_out_time is None:
            customer_session.check_out_time = utcnow()
    if "notes" in data:
        customer_session.notes = clean(data.get("notes"))
    if party_size:
        customer_session.party_size = party_size
    db.session.commit()
    broadcast(restaurant_id, "session.updated", session=customer_session.to_dict())
    return jsonify(customer_session.to_dict())


@bp.put("/api/restaurant/<int:restaurant_id>/sessions/<int:session_id>/seat")
@login_required
def seat_session(restaurant_id, session_id):
    user = restaurant_access(restaurant_id)
    table_id = to_int(json_body().get("table_id"))
    if not table_id:
        return jsonify({"error": "Table ID is required"}), 400

    table = Table.query.filter_by(id=table_id, restaurant_id=restaurant_id, is_active=True).first()
    if table is None:
        return jsonify({"error": "Table not found or inactive"}), 400
    occupied = (CustomerSession.query
                .filter(CustomerSession.table_id == table.id,
                        CustomerSession.status.in_(ACTIVE_SESSION_STATUSES))
                .first())
    if occupied is not None:
        return jsonify({"error": "Table is already occupied"}), 400

    customer_session = _find_session(restaurant_id, session_id)
    customer_session.table_id = table.id
    customer_session.status = "SEATED"
    customer_session.seated_time = utcnow()
    customer_session.waiter_id = user.id
    db.session.commit()
    logger.info("Session %s seated at table %s", customer_session.id, table.number)
    broadcast(restaurant_id, "session.seated", session=customer_session.to_dict())
    return jsonify(customer_session.to_dict())


@bp.put("/api/restaurant/<int:restaurant_id>/sessions/<int:session_id>/checkout")
@login_required
def checkout_session(restaurant_id, session_id):
    restaurant_access(restaurant_id)
    customer_session = _find_session(restaurant_id, session_id)
    customer_session.status = "COMPLETED"
    customer_session.check_out_time = utcnow()
    db.session.commit()
    broadcast(restaurant_id, "session.completed", session=customer_session.to_dict())
    return jsonify(customer_session.to_dict())
