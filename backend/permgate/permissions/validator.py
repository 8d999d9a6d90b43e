# Overview: Consistency checks over the whole permission catalog.

"""
Catalog Validator

Runs every check over every entry and collects all violations, so a catalog
author can fix everything in one edit cycle.

Errors block sync. Warnings are printed but never block.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .categories import (
    LAYOUT_SUFFIX,
    REQUIRED_LOCALES,
    VIEW_SUFFIX,
    PermissionAction,
    PermissionCategory,
    PermissionType,
)
from .dependencies import find_cycle


@dataclass
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def _label(entry, index: int) -> str:
    if isinstance(entry.name, str) and entry.name:
        return entry.name
    return f"<entry #{index}>"


def _check_required(entry, label: str, errors: list[str]) -> set[str]:
    """Report missing required fields; return the names of the missing ones."""
    missing = set()
    for attr in ("name", "category", "resource_path", "action", "permission_type"):
        value = getattr(entry, attr)
        if not isinstance(value, str) or not value.strip():
            missing.add(attr)
            errors.append(f"Permission {label} is missing required field: {attr}")

    for attr in ("display_name", "description"):
        texts = getattr(entry, attr)
        for locale in REQUIRED_LOCALES:
            text = texts.get(locale)
            if not isinstance(text, str) or not text.strip():
                missing.add(f"{attr}.{locale}")
                errors.append(f"Permission {label} is missing required field: {attr}.{locale}")
    return missing


def _check_enums(entry, label: str, missing: set[str], errors: list[str]) -> None:
    if "category" not in missing and entry.category not in PermissionCategory.ALL:
        errors.append(f"Invalid category for permission {label}: {entry.category!r}")
    if "permission_type" not in missing and entry.permission_type not in PermissionType.ALL:
        errors.append(f"Invalid permission_type for permission {label}: {entry.permission_type!r}")
    if "action" not in missing and entry.action not in PermissionAction.ALL:
        errors.append(f"Invalid action for permission {label}: {entry.action!r}")


def _check_category_coupling(entry, label: str, missing: set[str], errors: list[str]) -> None:
    if "category" in missing:
        return

    name = entry.name if isinstance(entry.name, str) else ""
    has_action = "action" not in missing

    if entry.category == PermissionCategory.LAYOUT:
        if has_action and entry.action != PermissionAction.ACCESS:
            errors.append(
                f"Category/action mismatch: layout permission {label} must use action "
                f"'access', got '{entry.action}'"
            )
        if name and not name.endswith(LAYOUT_SUFFIX):
            errors.append(f"Layout permission name must end with {LAYOUT_SUFFIX}: {label}")

    elif entry.category == PermissionCategory.VIEW:
        if has_action and entry.action != PermissionAction.VIEW:
            errors.append(
                f"Category/action mismatch: view permission {label} must use action "
                f"'view', got '{entry.action}'"
            )
        if name and not name.endswith(VIEW_SUFFIX):
            errors.append(f"View permission name must end with {VIEW_SUFFIX}: {label}")

    elif entry.category == PermissionCategory.FUNCTION:
        if has_action and entry.action == PermissionAction.VIEW:
            errors.append(
                f"Category/action mismatch: function permission {label} must not use action 'view'"
            )
        if LAYOUT_SUFFIX in name or VIEW_SUFFIX in name:
            errors.append(
                f"Function permission name must not contain {VIEW_SUFFIX} or {LAYOUT_SUFFIX}: {label}"
            )


def _collect_warnings(entry, label: str, warnings: list[str]) -> None:
    path = entry.resource_path
    if isinstance(path, str) and path and ("/" in path or any(ch.isspace() for ch in path)):
        warnings.append(f"Resource path should not contain whitespace or '/': {label} -> {path}")

    if entry.category == PermissionCategory.FUNCTION and not entry.dev_notes:
        warnings.append(f"Function permission has no dev_notes: {label}")

    if not entry.used_in:
        warnings.append(f"Permission has no used_in entries: {label}")

    tr = entry.display_name.get("tr")
    en = entry.display_name.get("en")
    if tr and en and tr == en:
        warnings.append(f"Turkish and English display names are identical: {label}")


def validate_catalog(catalog) -> ValidationReport:
    """
    Validate every entry of catalog and return a ValidationReport.

    Dependency references are checked against the full name set, built
    before any entry is inspected, so forward references are allowed.
    """
    report = ValidationReport()
    entries = list(catalog.all_permissions())

    # Pass 1: names
    counts = Counter(e.name for e in entries if isinstance(e.name, str) and e.name)
    known_names = set(counts)
    for name, count in counts.items():
        if count > 1:
            report.errors.append(f"Duplicate permission name: {name} (declared {count} times)")

    # Pass 2: per-entry checks
    for index, entry in enumerate(entries):
        label = _label(entry, index)
        missing = _check_required(entry, label, report.errors)
        _check_enums(entry, label, missing, report.errors)
        _check_category_coupling(entry, label, missing, report.errors)

        for dep in entry.dependencies:
            if dep == entry.name:
                report.errors.append(f"Permission {label} depends on itself")
            elif dep not in known_names:
                report.errors.append(f"Permission {label} has unknown dependency: {dep}")

        _collect_warnings(entry, label, report.warnings)

    # Pass 3: graph shape, over resolvable edges only (self-edges reported above)
    graph = {
        name: tuple(d for d in deps if d in known_names and d != name)
        for name, deps in catalog.dependency_map().items()
    }
    cycle = find_cycle(graph)
    if cycle:
        report.errors.append(f"Dependency cycle: {' -> '.join(cycle)}")

    return report
