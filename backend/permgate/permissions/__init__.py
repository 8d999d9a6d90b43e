# Overview: Permission catalog package.
# Re-exports the public catalog, validation and taxonomy APIs.

from .categories import (
    LAYOUT_SUFFIX,
    REQUIRED_LOCALES,
    VIEW_SUFFIX,
    PermissionAction,
    PermissionCategory,
    PermissionType,
)
from .catalog import PermissionCatalog, PermissionDefinition, load_catalog, load_default_catalog
from .dependencies import close_over_dependencies, find_cycle
from .validator import ValidationReport, validate_catalog
from .roles import DEFAULT_ROLES, default_role_permissions
from .helpers import get_catalog, resolve_catalog

__all__ = [
    "LAYOUT_SUFFIX",
    "REQUIRED_LOCALES",
    "VIEW_SUFFIX",
    "PermissionAction",
    "PermissionCategory",
    "PermissionType",
    "PermissionCatalog",
    "PermissionDefinition",
    "load_catalog",
    "load_default_catalog",
    "close_over_dependencies",
    "find_cycle",
    "ValidationReport",
    "validate_catalog",
    "DEFAULT_ROLES",
    "default_role_permissions",
    "get_catalog",
    "resolve_catalog",
]
