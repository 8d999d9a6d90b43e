# Overview: Flask API routes for the current principal's permissions; returns JSON responses.

from flask import Blueprint, request, jsonify, g, current_app

from ..decorators import require_auth
from ..services.authorization_service import authorize_all, authorize_any, resolve_principal


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.get("/permissions")
@require_auth
def my_permissions_route():
    """
    Effective permissions of the current principal.

    WHY: Frontends hide menus and buttons the principal cannot use. The
    list is advisory; every protected route still checks on the server.
    """
    try:
        permissions = resolve_principal(g.principal)
    except Exception:
        current_app.logger.exception("Failed to resolve permissions")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({
        "principal_id": g.principal.principal_id,
        "roles": sorted(g.principal.role_names),
        "permissions": sorted(permissions),
    })


@auth_bp.post("/check-permissions")
@require_auth
def check_permissions_route():
    """
    Check a list of permissions for the current principal.

    Request body:
    - permissions: list[str] (required)
    - mode: "any" or "all" (default "all")
    """
    data = request.get_json(silent=True) or {}
    names = data.get("permissions")
    mode = data.get("mode", "all")

    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        return jsonify({"error": "permissions must be a list of names"}), 400
    if mode not in ("any", "all"):
        return jsonify({"error": "mode must be 'any' or 'all'"}), 400

    decide = authorize_any if mode == "any" else authorize_all
    decision = decide(g.principal, names)

    return jsonify({
        "decision": decision.value,
        "allowed": decision.allowed,
        "mode": mode,
        "permissions": names,
    })
