"""
Project: Smart Restaurant Management System (SRMS)
School: University of Maryland Global Campus (UMGC)
Dept: Software Development and Security – Capstone Project
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: September–October 2025

Description:
Main application entry point. Initializes Flask, database, and Socket.IO.
Registers blueprints and error handlers, configures logging, and launches
the app.
"""

import logging

from flask import Flask, jsonify

from srms import (
    auth, categories, customer_sessions, menu, orders,
    payments, restaurants, setup_api, staff, tables,
)
from srms.config import Config, TestingConfig
from srms.errors import register_error_handlers
from srms.models import db
from srms.realtime import socketio

BLUEPRINTS = (
    auth.bp,
    restaurants.bp,
    categories.bp,
    menu.bp,
    tables.bp,
    customer_sessions.bp,
    orders.bp,
    payments.bp,
    staff.bp,
    setup_api.bp,
)


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        root.addHandler(handler)
    root.setLevel(level)
    app.logger.setLevel(level)


def create_app(testing: bool = False):
    app = Flask(__name__)
    app.config.from_object(TestingConfig if testing else Config)
    configure_logging(app)

    db.init_app(app)
    socketio.init_app(app, async_mode=app.config["SOCKETIO_ASYNC_MODE"])  # <-- bind socketio to this app

    for bp in BLUEPRINTS:
        app.register_blueprint(bp)
    register_error_handlers(app)

    # ---------- HEALTH ----------
    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    socketio.run(app, host=app.config["HOST"], port=app.config["PORT"], debug=False)
