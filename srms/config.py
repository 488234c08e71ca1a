"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC – Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Application configuration. Values come from the environment (a local
.env file is loaded first); TestingConfig is used by the test suite.
"""

import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "srms.db"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # eventlet is what socketio.run() serves with in production
    SOCKETIO_ASYNC_MODE = os.getenv("SOCKETIO_ASYNC_MODE", "eventlet")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    PASSWORD_MIN_LENGTH = 6
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5013"))


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SOCKETIO_ASYNC_MODE = "threading"
    LOG_LEVEL = "WARNING"
