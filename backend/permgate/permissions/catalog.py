# Overview: Immutable in-memory permission catalog and its lookups.

"""
Permission Catalog

WHY: The code-defined catalog is the single source of truth for which
permissions exist. Storage rows are a projection of it (see sync_service)
and the resolver reads dependencies from it, never from storage.

DESIGN:
- Built once by an explicit loader call (load_default_catalog) at app
  creation; importing this module has no side effects.
- Every container is a tuple or a read-only mapping so a single handle can
  be shared across threads without locking.
- Entries are tolerant records: a dict with missing or bad fields still
  loads, so the validator can report every problem in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .categories import PermissionCategory, PermissionType


def _frozen_text(value) -> Mapping[str, str]:
    if isinstance(value, Mapping):
        return MappingProxyType(dict(value))
    return MappingProxyType({})


def _ordered_unique(values) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values or ()))


@dataclass(frozen=True)
class PermissionDefinition:
    name: str
    category: str
    resource_path: str
    action: str
    permission_type: str
    display_name: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    description: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    dependencies: tuple[str, ...] = ()
    used_in: tuple[str, ...] = ()
    dev_notes: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "PermissionDefinition":
        """Build a definition from a catalog dict; missing keys become empty values."""
        return cls(
            name=data.get("name") or "",
            category=data.get("category") or "",
            resource_path=data.get("resource_path") or "",
            action=data.get("action") or "",
            permission_type=data.get("permission_type") or "",
            display_name=_frozen_text(data.get("display_name")),
            description=_frozen_text(data.get("description")),
            dependencies=_ordered_unique(data.get("dependencies")),
            used_in=tuple(data.get("used_in") or ()),
            dev_notes=data.get("dev_notes") or None,
        )

    def sync_fields(self) -> dict:
        """Column values a stored Permission row should carry for this entry."""
        return {
            "category": self.category,
            "resource_path": self.resource_path,
            "action": self.action,
            "permission_type": self.permission_type,
            "display_name": dict(self.display_name),
            "description": dict(self.description),
        }

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            **self.sync_fields(),
            "dependencies": list(self.dependencies),
            "used_in": list(self.used_in),
            "dev_notes": self.dev_notes,
        }


class PermissionCatalog:
    """Read-only view over a fixed list of permission definitions."""

    def __init__(self, entries: Iterable[PermissionDefinition]):
        self._entries = tuple(entries)

        by_name: dict[str, PermissionDefinition] = {}
        for entry in self._entries:
            # First declaration wins; duplicates are a validator error
            by_name.setdefault(entry.name, entry)
        self._by_name = MappingProxyType(by_name)

        self._dependency_map = MappingProxyType(
            {name: entry.dependencies for name, entry in by_name.items()}
        )

    def __iter__(self) -> Iterator[PermissionDefinition]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"<PermissionCatalog {len(self._entries)} permissions>"

    def all_permissions(self) -> tuple[PermissionDefinition, ...]:
        return self._entries

    def by_category(self, category: str) -> tuple[PermissionDefinition, ...]:
        return tuple(p for p in self._entries if p.category == category)

    def by_type(self, permission_type: str) -> tuple[PermissionDefinition, ...]:
        return tuple(p for p in self._entries if p.permission_type == permission_type)

    def by_resource(self, resource_path: str) -> tuple[PermissionDefinition, ...]:
        return tuple(p for p in self._entries if p.resource_path == resource_path)

    def by_name(self, name: str) -> PermissionDefinition | None:
        return self._by_name.get(name)

    def names(self) -> frozenset[str]:
        return frozenset(self._by_name)

    def dependency_map(self) -> Mapping[str, tuple[str, ...]]:
        """Adjacency map: permission name -> names it depends on."""
        return self._dependency_map

    def layout_permissions_for(self, permission_type: str) -> tuple[PermissionDefinition, ...]:
        """Layout (panel entry) permissions of one principal population."""
        return tuple(
            p for p in self._entries
            if p.category == PermissionCategory.LAYOUT and p.permission_type == permission_type
        )

    @property
    def groups(self) -> dict[str, tuple[PermissionDefinition, ...]]:
        return {category: self.by_category(category) for category in PermissionCategory.ALL}

    def stats(self) -> dict:
        counts = {"total": len(self._entries)}
        for category in PermissionCategory.ALL:
            counts[category] = len(self.by_category(category))
        for permission_type in PermissionType.ALL:
            counts[permission_type] = len(self.by_type(permission_type))
        return counts


def load_catalog(*groups: Iterable) -> PermissionCatalog:
    """
    Build a catalog from one or more groups of entries.

    Entries may be dicts (as in permissions.definitions) or ready
    PermissionDefinition instances. Group order is preserved.
    """
    entries = []
    for group in groups:
        for item in group:
            if isinstance(item, PermissionDefinition):
                entries.append(item)
            else:
                entries.append(PermissionDefinition.from_dict(item))
    return PermissionCatalog(entries)


def load_default_catalog() -> PermissionCatalog:
    """Load the built-in catalog (layout, view, then function permissions)."""
    from .definitions import FUNCTION_PERMISSIONS, LAYOUT_PERMISSIONS, VIEW_PERMISSIONS

    return load_catalog(LAYOUT_PERMISSIONS, VIEW_PERMISSIONS, FUNCTION_PERMISSIONS)
