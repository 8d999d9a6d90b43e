# Overview: Service-layer operations for roles; encapsulates business logic and database work.

from __future__ import annotations

import logging
import re

from ..errors import RoleAlreadyExists, RoleNotFound, SystemRoleProtected
from ..extensions import db
from ..models import Role, RoleHasPermission
from ..permissions import DEFAULT_ROLES, PermissionType
from .permission_service import log_security_event


logger = logging.getLogger(__name__)

ROLE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_-]{1,63}$")


def create_role(
    name: str,
    display_name: str | None = None,
    description: str | None = None,
    color: str | None = None,
    layout_type: str = PermissionType.USER,
    created_by: str | None = None,
    is_system_default: bool = False,
) -> Role:
    """
    Create a role.

    Raises ValueError for a malformed name or layout_type and
    RoleAlreadyExists if the name is taken.
    """
    name = (name or "").strip()
    if not ROLE_NAME_PATTERN.match(name):
        raise ValueError(
            "Role name must be 2-64 characters of lowercase letters, digits, '_' or '-', "
            "starting with a letter"
        )
    if layout_type not in PermissionType.ALL:
        raise ValueError(f"layout_type must be one of: {', '.join(PermissionType.ALL)}")

    if db.session.query(Role).filter_by(name=name).first():
        raise RoleAlreadyExists(name)

    role = Role(
        name=name,
        display_name=display_name or name.replace("_", " ").title(),
        description=description,
        color=color,
        layout_type=layout_type,
        is_system_default=is_system_default,
        is_active=True,
        created_by=created_by,
    )
    db.session.add(role)
    db.session.commit()

    logger.info("Created role %s", name)
    log_security_event(
        principal_id=created_by,
        event_type="ROLE_CREATED",
        success=True,
        resource=f"role:{name}",
    )
    return role


def get_role(name: str) -> Role:
    role = db.session.query(Role).filter_by(name=name).first()
    if not role:
        raise RoleNotFound(name)
    return role


def list_roles(include_inactive: bool = False) -> list[Role]:
    query = db.session.query(Role)
    if not include_inactive:
        query = query.filter(Role.is_active.is_(True))
    return query.order_by(Role.name).all()


UPDATABLE_FIELDS = ("display_name", "description", "color", "layout_type", "is_active")


def update_role(name: str, updated_by: str | None = None, **fields) -> Role:
    """
    Edit a role's presentation fields.

    Accepts display_name, description, color, layout_type and is_active.
    The name is the key grants and identity providers refer to, so it is
    not editable. System default roles raise SystemRoleProtected.
    """
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update role field(s): {', '.join(sorted(unknown))}")

    role = get_role(name)
    if role.is_system_default:
        raise SystemRoleProtected(name, action="edited")

    if "display_name" in fields and not (fields["display_name"] or "").strip():
        raise ValueError("display_name cannot be empty")
    if "layout_type" in fields and fields["layout_type"] not in PermissionType.ALL:
        raise ValueError(f"layout_type must be one of: {', '.join(PermissionType.ALL)}")
    if "is_active" in fields and not isinstance(fields["is_active"], bool):
        raise ValueError("is_active must be a boolean")

    changed = sorted(key for key, value in fields.items() if getattr(role, key) != value)
    for key in changed:
        setattr(role, key, fields[key])
    db.session.commit()

    if changed:
        logger.info("Updated role %s: %s", name, ", ".join(changed))
        log_security_event(
            principal_id=updated_by,
            event_type="ROLE_UPDATED",
            success=True,
            resource=f"role:{name}",
            reason=f"changed {', '.join(changed)}",
        )
    return role


def delete_role(name: str, deleted_by: str | None = None) -> None:
    """
    Delete a role and its grants.

    System default roles cannot be deleted (SystemRoleProtected).
    """
    role = get_role(name)
    if role.is_system_default:
        raise SystemRoleProtected(name)

    # SQLite does not enforce ON DELETE CASCADE without PRAGMA foreign_keys
    grant_count = db.session.query(RoleHasPermission).filter_by(role_name=name).delete(
        synchronize_session="fetch"
    )
    db.session.delete(role)
    db.session.commit()

    logger.info("Deleted role %s (%d grants removed)", name, grant_count)
    log_security_event(
        principal_id=deleted_by,
        event_type="ROLE_DELETED",
        success=True,
        resource=f"role:{name}",
        reason=f"{grant_count} grants removed",
    )


def create_default_roles() -> int:
    """
    Create the system default roles.

    Idempotent: existing roles are left as they are. Returns the number
    of roles created.
    """
    created_count = 0

    for name, display_name, description, color, layout_type, _selector in DEFAULT_ROLES:
        if db.session.query(Role).filter_by(name=name).first():
            continue

        db.session.add(Role(
            name=name,
            display_name=display_name,
            description=description,
            color=color,
            layout_type=layout_type,
            is_system_default=True,
            is_active=True,
            created_by="system",
        ))
        created_count += 1

    db.session.commit()
    return created_count
