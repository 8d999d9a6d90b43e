from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class Role(db.Model):
    """
    Roles that carry permission grants.

    Roles are keyed by name; the identity provider hands us role names and
    the resolver looks them up here.

    SYSTEM DEFAULT: is_system_default roles (super_admin, admin, user) are
    created by the seed and cannot be deleted. They also keep a protected
    minimum grant set (see permission_service.get_protected_permissions).
    """
    __tablename__ = "roles"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False, unique=True, index=True)
    display_name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=True)
    color = db.Column(db.String(16), nullable=True)

    # Which panel this role lands in: "admin" or "user"
    layout_type = db.Column(db.String(16), nullable=False, default="user")

    is_system_default = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_by = db.Column(db.String(128), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=True, onupdate=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "color": self.color,
            "layout_type": self.layout_type,
            "is_system_default": self.is_system_default,
            "is_active": self.is_active,
            "created_by": self.created_by,
            "created_at": to_utc_z(self.created_at),
        }


class Permission(db.Model):
    """
    Synchronized projection of a catalog entry.

    WHY: Grants need a row to point at. The catalog (permissions package) is
    the source of truth; these rows are written only by sync_service.

    Localized text is stored as native JSON maps ({"tr": ..., "en": ...}).
    Rows are never deleted by sync; stale rows are soft-deactivated through
    sync_service.deactivate_stale_permissions.
    """
    __tablename__ = "permissions"
    __table_args__ = (
        db.Index("ix_permissions_category_type", "category", "permission_type"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, unique=True, index=True)
    category = db.Column(db.String(16), nullable=False)        # layout, view, function
    resource_path = db.Column(db.String(64), nullable=False)
    action = db.Column(db.String(16), nullable=False)
    permission_type = db.Column(db.String(16), nullable=False)  # admin, user

    display_name = db.Column(db.JSON, nullable=False, default=dict)
    description = db.Column(db.JSON, nullable=False, default=dict)

    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=True)
    deactivated_at = db.Column(db.DateTime(timezone=True), nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "resource_path": self.resource_path,
            "action": self.action,
            "permission_type": self.permission_type,
            "display_name": self.display_name,
            "description": self.description,
            "is_active": self.is_active,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
            "deactivated_at": to_utc_z(self.deactivated_at),
        }


class RoleHasPermission(db.Model):
    """
    Role-Permission grant.

    Identity is the (role_name, permission_name) pair; the unique constraint
    makes concurrent grants of the same pair collapse into one row.
    """
    __tablename__ = "role_has_permissions"
    __table_args__ = (
        db.UniqueConstraint("role_name", "permission_name", name="uq_role_has_permissions"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    role_name = db.Column(
        db.String(64), db.ForeignKey("roles.name", ondelete="CASCADE"), nullable=False, index=True
    )
    permission_name = db.Column(
        db.String(128), db.ForeignKey("permissions.name", ondelete="CASCADE"), nullable=False, index=True
    )

    granted_by = db.Column(db.String(128), nullable=True)
    granted_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=db.func.now())

    role = db.relationship("Role", backref=db.backref("grants", lazy=True))
    permission = db.relationship("Permission", backref=db.backref("grants", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role_name": self.role_name,
            "permission_name": self.permission_name,
            "granted_by": self.granted_by,
            "granted_at": to_utc_z(self.granted_at),
        }
