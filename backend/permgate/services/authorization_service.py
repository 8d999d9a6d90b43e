# Overview: Service-layer authorization decisions; resolves a principal's effective permissions.

"""
Authorization Resolver

WHY: Guards need one answer, allow or deny, for a principal and a
permission name. The answer comes from the principal's role grants
expanded through catalog dependencies.

DESIGN PRINCIPLES:
- Fail closed: unknown roles, unknown permissions, inactive rows and any
  internal fault all resolve to DENY.
- Catalog-bounded: a grant counts only if its name is in the loaded
  catalog. Dependencies come from the catalog, never from storage.
- Deterministic: the effective set is the least fixpoint of the grant set
  under the dependency relation; evaluation order does not matter.
- Cached per principal: the flattened set is computed once per Principal
  (one request), not per check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from ..errors import DependencyCycle
from ..extensions import db
from ..models import Permission, Role, RoleHasPermission
from ..permissions import close_over_dependencies, resolve_catalog


logger = logging.getLogger(__name__)


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOW


@dataclass
class Principal:
    """Authenticated subject as seen by the resolver: an id and role names."""
    principal_id: str | None
    role_names: frozenset[str] = frozenset()
    _permissions: frozenset[str] | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.role_names = frozenset(self.role_names)


def load_granted_permissions(role_names: Iterable[str]) -> set[str]:
    """
    Permission names directly granted to the given roles.

    Only active roles and active permission rows contribute. Unknown role
    names contribute nothing.
    """
    names = set(role_names)
    if not names:
        return set()

    known = {
        name for (name,) in db.session.query(Role.name).filter(Role.name.in_(names)).all()
    }
    unknown = names - known
    if unknown:
        logger.warning("Ignoring unknown role(s): %s", ", ".join(sorted(unknown)))

    rows = (
        db.session.query(RoleHasPermission.permission_name)
        .join(Role, Role.name == RoleHasPermission.role_name)
        .join(Permission, Permission.name == RoleHasPermission.permission_name)
        .filter(
            RoleHasPermission.role_name.in_(known),
            Role.is_active.is_(True),
            Permission.is_active.is_(True),
        )
        .all()
    )
    return {name for (name,) in rows}


def effective_permissions(role_names: Iterable[str], catalog=None) -> frozenset[str]:
    """
    Granted permissions closed over catalog dependencies.

    Raises DependencyCycle if the closure walks into a cycle.
    """
    catalog = resolve_catalog(catalog)
    granted = load_granted_permissions(role_names)

    known = catalog.names()
    dropped = granted - known
    if dropped:
        logger.debug("Ignoring granted permission(s) not in catalog: %s", ", ".join(sorted(dropped)))

    return close_over_dependencies(sorted(granted & known), catalog.dependency_map())


def resolve_principal(principal: Principal, catalog=None) -> frozenset[str]:
    """Effective permissions of a principal, computed once and cached on it."""
    if principal._permissions is None:
        principal._permissions = effective_permissions(principal.role_names, catalog)
    return principal._permissions


def _as_set(effective: Iterable[str]) -> set[str] | frozenset[str]:
    if isinstance(effective, (set, frozenset)):
        return effective
    return set(effective)


def has_permission(effective: Iterable[str], permission_name: str) -> bool:
    return permission_name in _as_set(effective)


def has_any(effective: Iterable[str], permission_names: Iterable[str]) -> bool:
    effective = _as_set(effective)
    return any(name in effective for name in permission_names)


def has_all(effective: Iterable[str], permission_names: Iterable[str]) -> bool:
    """True when every name is held; vacuously true for an empty request."""
    effective = _as_set(effective)
    return all(name in effective for name in permission_names)


def _as_principal(subject) -> Principal:
    if isinstance(subject, Principal):
        return subject
    if isinstance(subject, str):
        return Principal(principal_id=None, role_names=frozenset([subject]))
    return Principal(principal_id=None, role_names=frozenset(subject or ()))


def _decide(subject, check, label: str, catalog=None) -> Decision:
    try:
        principal = _as_principal(subject)
        effective = resolve_principal(principal, catalog)
        return Decision.ALLOW if check(effective) else Decision.DENY
    except DependencyCycle as exc:
        logger.error("Denied %s: dependency cycle %s", label, " -> ".join(exc.cycle))
    except Exception:
        logger.exception("Denied %s: authorization failed", label)
    return Decision.DENY


def authorize(subject, permission_name: str, catalog=None) -> Decision:
    """
    Decide whether subject holds permission_name.

    subject is a Principal, a role name, or an iterable of role names.
    Never raises; every fault resolves to Decision.DENY.
    """
    return _decide(subject, lambda eff: has_permission(eff, permission_name), permission_name, catalog)


def authorize_any(subject, permission_names: Iterable[str], catalog=None) -> Decision:
    names = list(permission_names)
    return _decide(subject, lambda eff: has_any(eff, names), f"any of {names}", catalog)


def authorize_all(subject, permission_names: Iterable[str], catalog=None) -> Decision:
    """Like has_all, except an empty request is DENY: a guard must name something."""
    names = list(permission_names)
    if not names:
        logger.warning("Denied empty all-of permission request")
        return Decision.DENY
    return _decide(subject, lambda eff: has_all(eff, names), f"all of {names}", catalog)
