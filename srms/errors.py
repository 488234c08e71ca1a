"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
API error type and the JSON error handlers registered on the app.
"""

from flask import jsonify, request
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from srms.models import db


class ApiError(Exception):
    """Raised from helpers and handlers; rendered as {"error": message}."""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(ex):
        return jsonify({"error": ex.message}), ex.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(ex):
        return jsonify({"error": ex.description or ex.name}), ex.code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(ex):
        db.session.rollback()
        app.logger.warning("Integrity error on %s %s: %s", request.method, request.path, ex.orig)
        return jsonify({"error": "A record with this information already exists"}), 409

    @app.errorhandler(Exception)
    def handle_unexpected(ex):
        db.session.rollback()
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500
