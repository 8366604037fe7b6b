# Overview: Flask API routes for health and version; reports catalog readiness to deploy tooling.

# backend/storefront/routes/system.py
"""
System health and version endpoints.

/health runs two checks against the catalog store:
- database: the three catalog tables answer a count query
- catalog: at least one product is visible on the storefront
"""

import sys
import time
from flask import Blueprint, current_app
from sqlalchemy import func, select, true
from sqlalchemy.exc import SQLAlchemyError
from ..extensions import db
from ..models import Product, Category, ProductCategory
from ..time_utils import to_utc_z, utcnow

system_bp = Blueprint("system", __name__)

API_VERSION = "1.0.0"

HEALTHY = "healthy"
DEGRADED = "degraded"
UNHEALTHY = "unhealthy"


def _count(stmt) -> int:
    return db.session.execute(stmt).scalar_one()


def _timed_check(name: str, probe) -> dict:
    """
    Run probe() and wrap its result with status and latency.

    probe returns (status, details). A database error marks the check
    unhealthy and rolls the session back so the request can continue.
    """
    started = time.perf_counter()
    try:
        status, details = probe()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Health check '%s' failed", name)
        status, details = UNHEALTHY, {"error": f"{name} check failed"}
    return {
        "status": status,
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
        "details": details,
    }


def check_database_health() -> dict:
    def probe():
        return HEALTHY, {
            "products": _count(select(func.count(Product.id))),
            "categories": _count(select(func.count(Category.id))),
            "category_links": _count(select(func.count(ProductCategory.id))),
        }
    return _timed_check("database", probe)


def check_catalog_health() -> dict:
    """An empty storefront is degraded, not down."""
    def probe():
        active = _count(select(func.count(Product.id)).where(Product.is_active == true()))
        return (HEALTHY if active else DEGRADED), {"active_products": active}
    return _timed_check("catalog", probe)


@system_bp.get("/health")
def health():
    """
    Returns:
    - 200: healthy, or degraded but still serving
    - 503: at least one check is unhealthy
    """
    checks = {
        "database": check_database_health(),
        "catalog": check_catalog_health(),
    }
    statuses = {check["status"] for check in checks.values()}

    if UNHEALTHY in statuses:
        overall, http_status = UNHEALTHY, 503
    elif DEGRADED in statuses:
        overall, http_status = DEGRADED, 200
    else:
        overall, http_status = HEALTHY, 200

    return {
        "status": overall,
        "timestamp": to_utc_z(utcnow()),
        "checks": checks,
    }, http_status


@system_bp.get("/version")
def version():
    """Version info for deployment debugging. No secrets or paths."""
    return {
        "api_version": API_VERSION,
        "environment": "development" if current_app.debug else "production",
        "python_version": sys.version.split()[0],
        "server_time": to_utc_z(utcnow()),
    }
