# Overview: System default roles and how their default grants are selected.

from .categories import PermissionType


# Default grant selectors
ALL_PERMISSIONS = "all"

# (name, display_name, description, color, layout_type, default grant selector)
DEFAULT_ROLES = [
    ("super_admin", "Super Admin", "System super administrator with every permission", "#dc2626",
     PermissionType.ADMIN, ALL_PERMISSIONS),
    ("admin", "Admin", "System administrator", "#2563eb",
     PermissionType.ADMIN, PermissionType.ADMIN),
    ("user", "User", "Regular customer account", "#16a34a",
     PermissionType.USER, PermissionType.USER),
]


def default_role_permissions(catalog) -> dict[str, list[str]]:
    """Map each default role name to the catalog permission names it starts with."""
    result = {}
    for name, _display, _desc, _color, _layout, selector in DEFAULT_ROLES:
        if selector == ALL_PERMISSIONS:
            entries = catalog.all_permissions()
        else:
            entries = catalog.by_type(selector)
        result[name] = [p.name for p in entries]
    return result
