# Overview: Service-layer operations for role grants; encapsulates business logic and database work.

"""
Role-Permission Assignment and Security Event Logging

WHY: Grants are the only mutable part of the permission model. Every change
goes through here so normalization, protection and auditing apply uniformly.

DESIGN PRINCIPLES:
- Referential: a grant needs an existing role and an existing, active
  permission row (synced from the catalog).
- Idempotent: granting twice leaves one row; the unique constraint on
  (role_name, permission_name) settles concurrent duplicates.
- Normalized: granting any permission also grants the layout permission of
  the same permission_type, so a holder can always enter the panel.
- Protected: system default roles keep their layout permission.
- Audited: grant changes are written to security_events.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from ..errors import GrantNotFound, PermissionNotFound, ProtectedPermissionError, RoleNotFound
from ..extensions import db
from ..models import Permission, Role, RoleHasPermission, SecurityEvent
from ..permissions import default_role_permissions, resolve_catalog
from ..time_utils import utcnow


logger = logging.getLogger(__name__)


def log_security_event(
    principal_id: str | None,
    event_type: str,
    success: bool,
    resource: str | None = None,
    action: str | None = None,
    reason: str | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> SecurityEvent:
    """
    Log security event to audit trail.

    event_type examples:
    - PERMISSION_DENIED
    - PERMISSION_GRANTED
    - PERMISSION_REVOKED
    - ROLE_PERMISSIONS_REPLACED
    - ROLE_CREATED
    - ROLE_DELETED
    """
    event = SecurityEvent(
        principal_id=principal_id,
        event_type=event_type,
        resource=resource,
        action=action,
        success=success,
        reason=reason,
        ip_address=ip_address,
        user_agent=user_agent,
        occurred_at=utcnow(),
    )

    db.session.add(event)
    db.session.commit()

    return event


def _get_role(role_name: str) -> Role:
    role = db.session.query(Role).filter_by(name=role_name).first()
    if not role:
        raise RoleNotFound(role_name)
    return role


def _get_active_permission(permission_name: str) -> Permission:
    permission = db.session.query(Permission).filter_by(name=permission_name, is_active=True).first()
    if not permission:
        raise PermissionNotFound(permission_name)
    return permission


def _ensure_grant(role_name: str, permission_name: str, granted_by: str | None) -> tuple[RoleHasPermission, bool]:
    """Return (grant, created). Commits when a row is inserted."""
    existing = db.session.query(RoleHasPermission).filter_by(
        role_name=role_name,
        permission_name=permission_name,
    ).first()
    if existing:
        return existing, False

    grant = RoleHasPermission(
        role_name=role_name,
        permission_name=permission_name,
        granted_by=granted_by,
        granted_at=utcnow(),
    )
    db.session.add(grant)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent grant of the same pair
        db.session.rollback()
        existing = db.session.query(RoleHasPermission).filter_by(
            role_name=role_name,
            permission_name=permission_name,
        ).first()
        if existing is None:
            raise
        return existing, False

    return grant, True


def _layout_names_for(permission_type: str, catalog) -> set[str]:
    """Synced, active layout permissions of one permission_type."""
    names = {p.name for p in catalog.layout_permissions_for(permission_type)}
    if not names:
        return set()
    rows = db.session.query(Permission.name).filter(
        Permission.name.in_(names),
        Permission.is_active.is_(True),
    ).all()
    return {name for (name,) in rows}


def get_protected_permissions(role: Role, catalog=None) -> frozenset[str]:
    """
    Permissions a role must always keep.

    For a system default role this is the layout permission(s) matching its
    layout_type; other roles have no protected minimum.
    """
    if not role.is_system_default:
        return frozenset()
    catalog = resolve_catalog(catalog)
    return frozenset(p.name for p in catalog.layout_permissions_for(role.layout_type))


def grant_permission(
    role_name: str,
    permission_name: str,
    granted_by: str | None = None,
    catalog=None,
) -> RoleHasPermission:
    """
    Grant a permission to a role.

    Raises RoleNotFound or PermissionNotFound. Idempotent: an existing grant
    is returned unchanged. The layout permission of the same permission_type
    is granted alongside when it has been synced.
    """
    catalog = resolve_catalog(catalog)
    _get_role(role_name)
    permission = _get_active_permission(permission_name)

    grant, created = _ensure_grant(role_name, permission_name, granted_by)

    for layout_name in sorted(_layout_names_for(permission.permission_type, catalog) - {permission_name}):
        _, layout_created = _ensure_grant(role_name, layout_name, granted_by)
        if layout_created:
            logger.info("Granted %s to role %s (layout for %s)", layout_name, role_name, permission_name)

    if created:
        logger.info("Granted %s to role %s", permission_name, role_name)
        log_security_event(
            principal_id=granted_by,
            event_type="PERMISSION_GRANTED",
            success=True,
            resource=f"role:{role_name}",
            action=permission_name,
        )

    return grant


def revoke_permission(
    role_name: str,
    permission_name: str,
    revoked_by: str | None = None,
    catalog=None,
) -> None:
    """
    Revoke a permission from a role.

    Raises RoleNotFound, GrantNotFound, or ProtectedPermissionError when the
    permission is part of a system default role's protected minimum.
    """
    role = _get_role(role_name)

    grant = db.session.query(RoleHasPermission).filter_by(
        role_name=role_name,
        permission_name=permission_name,
    ).first()
    if not grant:
        raise GrantNotFound(role_name, permission_name)

    if permission_name in get_protected_permissions(role, catalog):
        raise ProtectedPermissionError(role_name, permission_name)

    db.session.query(RoleHasPermission).filter_by(
        role_name=role_name,
        permission_name=permission_name,
    ).delete(synchronize_session="fetch")
    db.session.commit()

    logger.info("Revoked %s from role %s", permission_name, role_name)
    log_security_event(
        principal_id=revoked_by,
        event_type="PERMISSION_REVOKED",
        success=True,
        resource=f"role:{role_name}",
        action=permission_name,
    )


def list_grants(role_name: str) -> list[RoleHasPermission]:
    _get_role(role_name)
    return (
        db.session.query(RoleHasPermission)
        .filter_by(role_name=role_name)
        .order_by(RoleHasPermission.permission_name)
        .all()
    )


def replace_role_permissions(
    role_name: str,
    permission_names,
    granted_by: str | None = None,
    catalog=None,
) -> list[RoleHasPermission]:
    """
    Replace a role's grant set in one transaction.

    Every name is checked before anything changes, so an unknown name raises
    PermissionNotFound with the old grants intact. Layout normalization and
    the protected minimum are applied to the new set.
    """
    catalog = resolve_catalog(catalog)
    role = _get_role(role_name)

    requested = list(dict.fromkeys(permission_names))
    permissions = [_get_active_permission(name) for name in requested]

    desired = set(requested)
    for permission_type in {p.permission_type for p in permissions}:
        desired |= _layout_names_for(permission_type, catalog)

    protected = get_protected_permissions(role, catalog)
    if protected:
        stored = (
            db.session.query(Permission.name)
            .filter(Permission.name.in_(protected), Permission.is_active.is_(True))
            .all()
        )
        desired |= {name for (name,) in stored}

    current = {
        grant.permission_name: grant
        for grant in db.session.query(RoleHasPermission).filter_by(role_name=role_name).all()
    }

    # Existing protected grants stay even while their row is inactive
    removed = sorted(set(current) - desired - set(protected))
    added = sorted(desired - set(current))

    try:
        for name in removed:
            db.session.delete(current[name])
        now = utcnow()
        for name in added:
            db.session.add(RoleHasPermission(
                role_name=role_name,
                permission_name=name,
                granted_by=granted_by,
                granted_at=now,
            ))
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Replaced permissions of role %s: %d added, %d removed", role_name, len(added), len(removed)
    )
    log_security_event(
        principal_id=granted_by,
        event_type="ROLE_PERMISSIONS_REPLACED",
        success=True,
        resource=f"role:{role_name}",
        reason=f"added={','.join(added)} removed={','.join(removed)}",
    )

    return list_grants(role_name)


def assign_default_role_permissions(catalog=None) -> int:
    """
    Assign default grants to the system default roles.

    super_admin gets every permission, admin every admin-type permission,
    user every user-type permission. Missing roles or unsynced permissions
    are skipped. Idempotent: returns the number of new grants.

    WHY: Default permission sets ensure consistent RBAC out-of-the-box.
    """
    catalog = resolve_catalog(catalog)
    created_count = 0

    for role_name, permission_names in default_role_permissions(catalog).items():
        role = db.session.query(Role).filter_by(name=role_name).first()
        if not role:
            continue  # Role doesn't exist, skip

        active = {
            name for (name,) in db.session.query(Permission.name).filter(
                Permission.name.in_(permission_names),
                Permission.is_active.is_(True),
            ).all()
        }
        existing = {
            name for (name,) in db.session.query(RoleHasPermission.permission_name)
            .filter_by(role_name=role_name).all()
        }

        for permission_name in permission_names:
            if permission_name not in active or permission_name in existing:
                continue
            db.session.add(RoleHasPermission(
                role_name=role_name,
                permission_name=permission_name,
                granted_by="system",
                granted_at=utcnow(),
            ))
            existing.add(permission_name)
            created_count += 1

    db.session.commit()
    return created_count
