# backend/permgate/routes/system.py
"""
System health endpoint.

Reports database reachability and whether the permission tables look
seeded, for deployment checks.
"""

import time
from flask import Blueprint, current_app
from ..extensions import db
from ..models import Role, Permission
from ..permissions import get_catalog
from ..time_utils import utcnow

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    start_time = time.time()
    try:
        role_count = db.session.query(Role).count()
        permission_count = db.session.query(Permission).filter_by(is_active=True).count()

        elapsed_ms = (time.time() - start_time) * 1000

        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": {
                "roles": role_count,
                "active_permissions": permission_count,
            }
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


def check_catalog_sync_health() -> dict:
    """Degraded when the stored projection lags the loaded catalog."""
    try:
        catalog_names = get_catalog().names()
        stored = {
            name for (name,) in db.session.query(Permission.name).filter_by(is_active=True).all()
        }
        missing = sorted(catalog_names - stored)
        if missing:
            return {
                "status": "degraded",
                "warning": f"{len(missing)} catalog permission(s) not synced; run 'flask perms sync-catalog'",
                "details": {"catalog_size": len(catalog_names)},
            }
        return {"status": "healthy", "details": {"catalog_size": len(catalog_names)}}
    except Exception:
        current_app.logger.exception("Catalog sync health check failed")
        return {"status": "unhealthy", "error": "Catalog check error"}


@system_bp.get("/health")
def health():
    """
    Health check endpoint.

    Returns:
    - 200: healthy or degraded
    - 503: one or more checks unhealthy
    """
    checks = {
        "database": check_database_health(),
        "catalog": check_catalog_sync_health(),
    }

    statuses = [check["status"] for check in checks.values()]
    if "unhealthy" in statuses:
        overall_status, http_status = "unhealthy", 503
    elif "degraded" in statuses:
        overall_status, http_status = "degraded", 200  # Degraded is still operational
    else:
        overall_status, http_status = "healthy", 200

    return {
        "status": overall_status,
        "timestamp": utcnow().isoformat() + "Z",
        "checks": checks,
    }, http_status
