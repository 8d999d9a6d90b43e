# Overview: Service-layer operations for catalog sync; projects the catalog into storage.

"""
Catalog Synchronization

WHY: Grants point at Permission rows, so every catalog entry needs a row
before it can be granted. Sync projects the catalog into storage.

DESIGN PRINCIPLES:
- Gate: the validator runs first; an invalid catalog writes nothing.
- Additive: rows are created or refreshed, never deleted. Rows that left
  the catalog are handled by deactivate_stale_permissions, run on purpose.
- Idempotent: an update is issued only when a stored value differs, so a
  second run over an unchanged catalog writes nothing.
- Partial failure: each entry is its own transaction. One failed write is
  recorded and the run moves on.
- Single writer: runs hold the "catalog-sync" SyncLock row.
"""

from __future__ import annotations

import logging
import os
import socket
import time
import uuid
from dataclasses import dataclass, field

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import CatalogInvalid, SyncInProgress
from ..extensions import db
from ..models import Permission, SyncLock
from ..permissions import resolve_catalog, validate_catalog
from ..time_utils import utcnow


logger = logging.getLogger(__name__)

SYNC_LOCK_NAME = "catalog-sync"


@dataclass
class SyncFailure:
    """One catalog entry whose write failed."""
    name: str
    operation: str  # create, update, upsert
    error: str

    def to_dict(self) -> dict:
        return {"name": self.name, "operation": self.operation, "error": self.error}


@dataclass
class SyncResult:
    created_names: list[str] = field(default_factory=list)
    updated_names: list[str] = field(default_factory=list)
    unchanged: int = 0
    failures: list[SyncFailure] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    duration: float = 0.0

    @property
    def created(self) -> int:
        return len(self.created_names)

    @property
    def updated(self) -> int:
        return len(self.updated_names)

    @property
    def success(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "created": self.created,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "created_names": list(self.created_names),
            "updated_names": list(self.updated_names),
            "failures": [f.to_dict() for f in self.failures],
            "warnings": list(self.warnings),
            "duration": round(self.duration, 3),
        }


@dataclass
class CatalogDiff:
    missing_in_storage: list[str]
    only_in_storage: list[str]
    inactive_in_storage: list[str]

    @property
    def in_sync(self) -> bool:
        return not (self.missing_in_storage or self.only_in_storage or self.inactive_in_storage)

    def to_dict(self) -> dict:
        return {
            "in_sync": self.in_sync,
            "missing_in_storage": list(self.missing_in_storage),
            "only_in_storage": list(self.only_in_storage),
            "inactive_in_storage": list(self.inactive_in_storage),
        }


# =============================================================================
# SINGLE-WRITER LOCK
# =============================================================================

def _default_holder() -> str:
    return f"{socket.gethostname()}:{os.getpid()}:{uuid.uuid4().hex[:8]}"


def _age_seconds(acquired_at) -> float:
    if acquired_at.tzinfo is not None:
        acquired_at = acquired_at.replace(tzinfo=None) - acquired_at.utcoffset()
    return (utcnow() - acquired_at).total_seconds()


def acquire_sync_lock(holder: str | None = None, timeout: int | None = None) -> str:
    """
    Take the catalog sync lock and return the holder token.

    Raises SyncInProgress if another run holds it. A lock older than
    timeout seconds is treated as abandoned and taken over.
    """
    holder = holder or _default_holder()
    if timeout is None:
        timeout = current_app.config.get("CATALOG_SYNC_LOCK_TIMEOUT", 600)

    existing = db.session.get(SyncLock, SYNC_LOCK_NAME)
    if existing is not None:
        if _age_seconds(existing.acquired_at) < timeout:
            raise SyncInProgress(
                f"Catalog sync already running (held by {existing.holder} since {existing.acquired_at})"
            )
        logger.warning(
            "Taking over abandoned catalog sync lock held by %s since %s",
            existing.holder, existing.acquired_at,
        )
        db.session.delete(existing)
        db.session.commit()

    db.session.add(SyncLock(name=SYNC_LOCK_NAME, holder=holder, acquired_at=utcnow()))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise SyncInProgress("Catalog sync already running")

    return holder


def release_sync_lock(holder: str) -> None:
    db.session.query(SyncLock).filter_by(name=SYNC_LOCK_NAME, holder=holder).delete()
    db.session.commit()


# =============================================================================
# SYNC
# =============================================================================

def _write_permission(definition) -> str | None:
    """
    Stage the upsert for one catalog entry.

    Returns "create", "update", or None when the stored row already matches.
    """
    existing = db.session.query(Permission).filter_by(name=definition.name).first()
    desired = definition.sync_fields()

    if existing is None:
        db.session.add(Permission(name=definition.name, is_active=True, **desired))
        return "create"

    changes = {key: value for key, value in desired.items() if getattr(existing, key) != value}
    if not existing.is_active:
        # Back in the catalog after a deactivation
        changes["is_active"] = True
        changes["deactivated_at"] = None

    if not changes:
        return None

    for key, value in changes.items():
        setattr(existing, key, value)
    existing.updated_at = utcnow()
    return "update"


def sync_catalog(catalog=None, *, holder: str | None = None) -> SyncResult:
    """
    Validate the catalog, then upsert every entry into the permissions table.

    Raises CatalogInvalid before any write when validation fails, and
    SyncInProgress when another run holds the lock. Per-entry storage
    failures do not raise; they are listed in SyncResult.failures.
    """
    catalog = resolve_catalog(catalog)

    report = validate_catalog(catalog)
    if not report.is_valid:
        logger.error("Catalog sync refused: %d validation error(s)", len(report.errors))
        raise CatalogInvalid(report)

    result = SyncResult(warnings=list(report.warnings))

    started = time.monotonic()
    token = acquire_sync_lock(holder)

    try:
        for definition in catalog.all_permissions():
            operation = None
            try:
                operation = _write_permission(definition)
                if operation is not None:
                    db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                logger.error("Failed to sync permission %s: %s", definition.name, exc)
                result.failures.append(SyncFailure(definition.name, operation or "upsert", str(exc)))
                continue

            if operation == "create":
                result.created_names.append(definition.name)
            elif operation == "update":
                result.updated_names.append(definition.name)
            else:
                result.unchanged += 1
    finally:
        release_sync_lock(token)

    result.duration = time.monotonic() - started
    logger.info(
        "Catalog sync finished: %d created, %d updated, %d unchanged, %d failed",
        result.created, result.updated, result.unchanged, len(result.failures),
    )
    return result


# =============================================================================
# STALE ROWS
# =============================================================================

def compare_catalog_to_storage(catalog=None) -> CatalogDiff:
    """Names the catalog has but storage lacks, and the reverse."""
    catalog = resolve_catalog(catalog)
    catalog_names = catalog.names()

    rows = db.session.query(Permission.name, Permission.is_active).all()
    stored = {name: is_active for name, is_active in rows}

    return CatalogDiff(
        missing_in_storage=sorted(catalog_names - stored.keys()),
        only_in_storage=sorted(name for name in stored if name not in catalog_names),
        inactive_in_storage=sorted(
            name for name, is_active in stored.items() if name in catalog_names and not is_active
        ),
    )


def deactivate_stale_permissions(catalog=None, *, dry_run: bool = False) -> list[str]:
    """
    Soft-deactivate active rows whose name is no longer in the catalog.

    Rows are never deleted; grants on them stop counting because the
    resolver ignores inactive permissions. Returns the affected names.
    """
    catalog = resolve_catalog(catalog)
    catalog_names = catalog.names()

    stale = [
        row for row in db.session.query(Permission).filter(Permission.is_active.is_(True)).all()
        if row.name not in catalog_names
    ]
    names = sorted(row.name for row in stale)
    if dry_run or not stale:
        return names

    token = acquire_sync_lock()
    try:
        now = utcnow()
        for row in stale:
            row.is_active = False
            row.deactivated_at = now
            row.updated_at = now
        db.session.commit()
    finally:
        release_sync_lock(token)

    logger.info("Deactivated %d stale permission(s): %s", len(names), ", ".join(names))
    return names
