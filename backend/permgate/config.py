# backend/permgate/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/permgate.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",  # optional alternative location
        "sqlite:///permgate.sqlite3",  # default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Seconds after which a held catalog sync lock is treated as abandoned
    CATALOG_SYNC_LOCK_TIMEOUT = int(os.environ.get("CATALOG_SYNC_LOCK_TIMEOUT", "600"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
