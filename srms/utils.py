"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Small request-parsing helpers shared by the blueprints.
"""

import math

from flask import request


def json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def clean(value):
    """Trim a string field; empty or missing values become None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def is_blank(value):
    return not isinstance(value, str) or not value.strip()


def to_float(value):
    """Parse a number the way a form would send it; None when not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_int(value, default=None):
    if isinstance(value, bool) or value is None:
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def is_number(value):
    """A finite JSON number; booleans and out-of-range values do not count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False
