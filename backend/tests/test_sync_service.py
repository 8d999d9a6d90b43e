"""
Catalog sync tests.

Verifies:
- Invalid catalogs write nothing
- Sync is idempotent and never deletes rows
- Per-entry failures are recorded without aborting the run
- Only one sync runs at a time
- Stale rows are soft-deactivated on request
"""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from permgate.errors import CatalogInvalid, SyncInProgress
from permgate.models import Permission, SyncLock
from permgate.permissions import load_catalog, load_default_catalog
from permgate.services import sync_service
from permgate.time_utils import utcnow

from conftest import entry


def _stored_names(db_session):
    return {p.name for p in db_session.query(Permission).all()}


class TestSyncCatalog:

    def test_first_sync_creates_everything(self, db_session, small_catalog):
        result = sync_service.sync_catalog(small_catalog)

        assert result.success
        assert result.created == len(small_catalog)
        assert result.updated == 0
        assert _stored_names(db_session) == small_catalog.names()

        row = db_session.query(Permission).filter_by(name="admin.layout").one()
        assert row.is_active is True
        assert row.display_name == {"tr": "admin.layout (tr)", "en": "admin.layout (en)"}

    def test_second_sync_is_a_no_op(self, db_session, small_catalog):
        sync_service.sync_catalog(small_catalog)
        result = sync_service.sync_catalog(small_catalog)

        assert result.created == 0
        assert result.updated == 0
        assert result.unchanged == len(small_catalog)

    def test_changed_fields_are_refreshed(self, db_session, small_catalog):
        sync_service.sync_catalog(small_catalog)

        changed = load_catalog([
            entry("admin.layout", "layout", "access", resource_path="admin",
                  display_name={"tr": "Yönetim", "en": "Administration"}),
        ])
        result = sync_service.sync_catalog(changed)

        assert result.updated_names == ["admin.layout"]
        row = db_session.query(Permission).filter_by(name="admin.layout").one()
        assert row.display_name == {"tr": "Yönetim", "en": "Administration"}
        assert row.updated_at is not None

    def test_sync_never_deletes(self, db_session, small_catalog):
        sync_service.sync_catalog(small_catalog)
        smaller = load_catalog([entry("admin.layout", "layout", "access", resource_path="admin")])

        sync_service.sync_catalog(smaller)

        assert _stored_names(db_session) == small_catalog.names()

    def test_invalid_catalog_writes_nothing(self, db_session):
        broken = load_catalog([
            entry("admin.layout", "layout", "access"),
            entry("users.create", "function", "create", dependencies=["admin.users.view"]),
        ])

        with pytest.raises(CatalogInvalid) as exc_info:
            sync_service.sync_catalog(broken)

        assert exc_info.value.report.errors == [
            "Permission users.create has unknown dependency: admin.users.view"
        ]
        assert db_session.query(Permission).count() == 0
        assert db_session.query(SyncLock).count() == 0

    def test_validation_cannot_be_skipped(self, db_session):
        broken = load_catalog([
            entry("x.view", "view", "create", dependencies=["nonexistent.permission"]),
        ])

        with pytest.raises(TypeError):
            sync_service.sync_catalog(broken, validate=False)
        with pytest.raises(CatalogInvalid):
            sync_service.sync_catalog(broken)

        assert db_session.query(Permission).count() == 0

    def test_per_entry_failure_does_not_abort(self, db_session, small_catalog, monkeypatch):
        real_write = sync_service._write_permission

        def flaky(definition):
            if definition.name == "admin.dashboard.view":
                raise IntegrityError("INSERT", {}, Exception("boom"))
            return real_write(definition)

        monkeypatch.setattr(sync_service, "_write_permission", flaky)
        result = sync_service.sync_catalog(small_catalog)

        assert not result.success
        assert [f.name for f in result.failures] == ["admin.dashboard.view"]
        assert result.created == len(small_catalog) - 1
        assert _stored_names(db_session) == small_catalog.names() - {"admin.dashboard.view"}
        assert db_session.query(SyncLock).count() == 0

    def test_default_catalog_syncs_clean(self, db_session):
        result = sync_service.sync_catalog()
        assert result.success
        assert result.warnings == []
        assert result.created == len(load_default_catalog())

    def test_result_to_dict(self, db_session, small_catalog):
        data = sync_service.sync_catalog(small_catalog).to_dict()
        assert data["success"] is True
        assert data["created"] == len(small_catalog)
        assert data["failures"] == []


class TestSyncLock:

    def test_held_lock_blocks_sync(self, db_session, small_catalog):
        sync_service.acquire_sync_lock("other-worker")

        with pytest.raises(SyncInProgress):
            sync_service.sync_catalog(small_catalog)
        assert db_session.query(Permission).count() == 0

        sync_service.release_sync_lock("other-worker")
        assert sync_service.sync_catalog(small_catalog).success

    def test_abandoned_lock_is_taken_over(self, db_session, small_catalog):
        db_session.add(SyncLock(
            name=sync_service.SYNC_LOCK_NAME,
            holder="crashed-worker",
            acquired_at=utcnow() - timedelta(hours=2),
        ))
        db_session.commit()

        result = sync_service.sync_catalog(small_catalog)

        assert result.success
        assert db_session.query(SyncLock).count() == 0

    def test_release_only_removes_own_lock(self, db_session):
        sync_service.acquire_sync_lock("worker-a")
        sync_service.release_sync_lock("worker-b")
        assert db_session.query(SyncLock).count() == 1


class TestStaleRows:

    def test_compare_catalog_to_storage(self, db_session, synced_small_catalog):
        smaller = load_catalog([
            entry("admin.layout", "layout", "access", resource_path="admin"),
            entry("admin.reports.view", "view", "view", dependencies=["admin.layout"]),
        ])

        diff = sync_service.compare_catalog_to_storage(smaller)

        assert diff.missing_in_storage == ["admin.reports.view"]
        assert "users.create" in diff.only_in_storage
        assert "admin.layout" not in diff.only_in_storage
        assert not diff.in_sync

    def test_deactivate_stale_dry_run_changes_nothing(self, db_session, synced_small_catalog):
        smaller = load_catalog([entry("admin.layout", "layout", "access", resource_path="admin")])

        names = sync_service.deactivate_stale_permissions(smaller, dry_run=True)

        assert "users.create" in names
        assert db_session.query(Permission).filter_by(is_active=False).count() == 0

    def test_deactivate_stale_then_resync_reactivates(self, db_session, synced_small_catalog):
        smaller = load_catalog([entry("admin.layout", "layout", "access", resource_path="admin")])

        names = sync_service.deactivate_stale_permissions(smaller)

        assert set(names) == synced_small_catalog.names() - {"admin.layout"}
        row = db_session.query(Permission).filter_by(name="users.create").one()
        assert row.is_active is False
        assert row.deactivated_at is not None
        assert db_session.query(Permission).count() == len(synced_small_catalog)

        result = sync_service.sync_catalog(synced_small_catalog)

        assert "users.create" in result.updated_names
        assert db_session.query(Permission).filter_by(is_active=False).count() == 0
        assert sync_service.compare_catalog_to_storage(synced_small_catalog).in_sync
