# backend/storefront/config.py
from __future__ import annotations
import os


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, str(default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Relative sqlite paths resolve against the Flask instance folder
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///storefront.sqlite3")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Listing page sizes; requested limits are clamped to [1, max]
    CATALOG_DEFAULT_PAGE_LIMIT = _env_int("CATALOG_DEFAULT_PAGE_LIMIT", 12)
    CATALOG_MAX_PAGE_LIMIT = _env_int("CATALOG_MAX_PAGE_LIMIT", 100)

    # Storefront home page sections
    CATALOG_HIGHLIGHT_NEW_ARRIVALS = _env_int("CATALOG_HIGHLIGHT_NEW_ARRIVALS", 8)
    CATALOG_HIGHLIGHT_FEATURED = _env_int("CATALOG_HIGHLIGHT_FEATURED", 4)

    # Frontend dev servers (vite dev and preview)
    CORS_ALLOWED_ORIGINS = tuple(
        o.strip()
        for o in os.environ.get(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173,http://localhost:4173,http://127.0.0.1:4173",
        ).split(",")
        if o.strip()
    )
