"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Socket.IO server and event handling. Each restaurant gets its own room so
that dashboards only see events of their tenant.
"""

import logging

from flask import session
from flask_socketio import SocketIO, join_room

from srms.models import db, User

logger = logging.getLogger(__name__)

# Create SocketIO once (no app yet), then bind inside the factory
socketio = SocketIO(cors_allowed_origins="*")


def restaurant_room(restaurant_id):
    return f"restaurant:{restaurant_id}"


def broadcast(restaurant_id, event_type, **payload):
    socketio.emit("event", {"type": event_type, **payload}, to=restaurant_room(restaurant_id))


@socketio.on("connect")
def on_connect(auth=None):
    user_id = session.get("user_id")
    user = db.session.get(User, user_id) if user_id else None
    if user is None or user.restaurant_id is None:
        logger.warning("Rejected socket connection without a restaurant user")
        return False
    join_room(restaurant_room(user.restaurant_id))
    logger.info("Socket connected for user %s to restaurant %s", user.id, user.restaurant_id)
    return None


@socketio.on("disconnect")
def on_disconnect(*args):
    logger.debug("Socket disconnected for user %s", session.get("user_id"))
