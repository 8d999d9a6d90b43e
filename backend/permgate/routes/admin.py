# Overview: Flask API routes for admin operations; parses input and returns JSON responses.

# backend/permgate/routes/admin.py
"""
Admin routes for catalog, role and grant management.

Provides endpoints for:
- Catalog inspection (grouped catalog, stored permissions)
- Role management (list, create, update, delete)
- Grant management (list, grant, replace, revoke)

All endpoints require authentication and appropriate permissions.
"""

from flask import Blueprint, request, jsonify, g, current_app

from ..errors import (
    NotFoundError,
    ProtectedPermissionError,
    RoleAlreadyExists,
    SystemRoleProtected,
)
from ..extensions import db
from ..models import Permission, RoleHasPermission
from ..permissions import get_catalog
from ..services import permission_service, role_service
from ..decorators import require_auth, require_permission

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _actor() -> str | None:
    return g.principal.principal_id


# =============================================================================
# CATALOG
# =============================================================================

@admin_bp.get("/catalog")
@require_auth
@require_permission("admin.permissions.view")
def get_catalog_route():
    """Catalog grouped by category, with counts."""
    catalog = get_catalog()
    return jsonify({
        "groups": {
            category: [entry.to_dict() for entry in entries]
            for category, entries in catalog.groups.items()
        },
        "stats": catalog.stats(),
    })


@admin_bp.get("/permissions")
@require_auth
@require_permission("admin.permissions.view")
def list_permissions():
    """
    List stored permissions.

    Query params:
    - category: str - filter by category
    - type: str - filter by permission_type
    - active: "true"/"false" - filter by is_active (default: all)
    """
    category = request.args.get("category")
    permission_type = request.args.get("type")
    active = request.args.get("active")

    query = db.session.query(Permission)

    if category:
        query = query.filter_by(category=category)
    if permission_type:
        query = query.filter_by(permission_type=permission_type)
    if active is not None:
        query = query.filter_by(is_active=active.lower() == "true")

    permissions = query.order_by(Permission.category, Permission.name).all()

    return jsonify({"permissions": [p.to_dict() for p in permissions], "count": len(permissions)})


# =============================================================================
# ROLE MANAGEMENT
# =============================================================================

@admin_bp.get("/roles")
@require_auth
@require_permission("admin.roles.view")
def list_roles():
    """List all roles with their permission counts."""
    include_inactive = request.args.get("include_inactive", "false").lower() == "true"

    result = []
    for role in role_service.list_roles(include_inactive=include_inactive):
        role_dict = role.to_dict()
        role_dict["permission_count"] = db.session.query(RoleHasPermission).filter_by(
            role_name=role.name
        ).count()
        result.append(role_dict)

    return jsonify({"roles": result})


@admin_bp.post("/roles")
@require_auth
@require_permission("roles.create")
def create_role():
    """
    Create a new role.

    Request body:
    - name: str (required)
    - display_name: str (optional)
    - description: str (optional)
    - color: str (optional)
    - layout_type: "admin" or "user" (default "user")
    """
    data = request.get_json(silent=True) or {}
    name = data.get("name")

    if not name:
        return jsonify({"error": "name required"}), 400

    try:
        role = role_service.create_role(
            name=name,
            display_name=data.get("display_name"),
            description=data.get("description"),
            color=data.get("color"),
            layout_type=data.get("layout_type", "user"),
            created_by=_actor(),
        )
    except RoleAlreadyExists as e:
        return jsonify({"error": str(e)}), 409
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to create role")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({"role": role.to_dict(), "message": "Role created successfully"}), 201


@admin_bp.put("/roles/<role_name>")
@require_auth
@require_permission("roles.update")
def update_role(role_name: str):
    """
    Edit a role.

    Request body (all optional):
    - display_name, description, color: str
    - layout_type: "admin" or "user"
    - is_active: bool
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body required"}), 400

    unknown = set(data) - set(role_service.UPDATABLE_FIELDS)
    if unknown:
        return jsonify({"error": f"Cannot update role field(s): {', '.join(sorted(unknown))}"}), 400

    try:
        role = role_service.update_role(role_name, updated_by=_actor(), **data)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except (SystemRoleProtected, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"role": role.to_dict(), "message": "Role updated successfully"})


@admin_bp.delete("/roles/<role_name>")
@require_auth
@require_permission("roles.delete")
def delete_role(role_name: str):
    try:
        role_service.delete_role(role_name, deleted_by=_actor())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except SystemRoleProtected as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": f"Role {role_name} deleted"})


# =============================================================================
# GRANT MANAGEMENT
# =============================================================================

@admin_bp.get("/roles/<role_name>/permissions")
@require_auth
@require_permission("admin.roles.view")
def list_role_permissions(role_name: str):
    try:
        grants = permission_service.list_grants(role_name)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    return jsonify({
        "role": role_name,
        "permissions": [grant.permission_name for grant in grants],
        "grants": [grant.to_dict() for grant in grants],
    })


@admin_bp.post("/roles/<role_name>/permissions")
@require_auth
@require_permission("roles.assign-permissions")
def grant_permission_to_role(role_name: str):
    """
    Grant a permission to a role.

    Request body:
    - permission_name: str (required)
    """
    data = request.get_json(silent=True) or {}
    permission_name = data.get("permission_name")

    if not permission_name:
        return jsonify({"error": "permission_name required"}), 400

    try:
        grant = permission_service.grant_permission(role_name, permission_name, granted_by=_actor())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    return jsonify({
        "message": f"Permission {permission_name} granted to role {role_name}",
        "grant": grant.to_dict(),
    }), 201


@admin_bp.put("/roles/<role_name>/permissions")
@require_auth
@require_permission("roles.assign-permissions")
def replace_role_permissions(role_name: str):
    """
    Replace a role's permissions.

    Request body:
    - permissions: list[str] (required)
    """
    data = request.get_json(silent=True) or {}
    names = data.get("permissions")

    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        return jsonify({"error": "permissions must be a list of names"}), 400

    try:
        grants = permission_service.replace_role_permissions(role_name, names, granted_by=_actor())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    return jsonify({
        "role": role_name,
        "permissions": [grant.permission_name for grant in grants],
    })


@admin_bp.delete("/roles/<role_name>/permissions/<permission_name>")
@require_auth
@require_permission("roles.assign-permissions")
def revoke_permission_from_role(role_name: str, permission_name: str):
    """Revoke a permission from a role."""
    try:
        permission_service.revoke_permission(role_name, permission_name, revoked_by=_actor())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ProtectedPermissionError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": f"Permission {permission_name} revoked from role {role_name}"})
