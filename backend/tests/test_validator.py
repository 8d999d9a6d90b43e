"""
Catalog validator tests.

Each broken catalog below differs from a valid one in exactly one way, so
the report must carry exactly the expected error.
"""

import pytest

from permgate.permissions import load_catalog, validate_catalog

from conftest import entry


def _valid_layout():
    return [entry("admin.layout", "layout", "access", resource_path="admin")]


def _valid_view():
    return [entry("admin.dashboard.view", "view", "view", dependencies=["admin.layout"])]


def test_valid_catalog_has_no_findings():
    report = validate_catalog(load_catalog(_valid_layout(), _valid_view()))
    assert report.is_valid
    assert report.errors == []
    assert report.warnings == []


def test_view_with_wrong_action_yields_exactly_one_error():
    view = [entry("admin.dashboard.view", "view", "create", dependencies=["admin.layout"])]
    report = validate_catalog(load_catalog(_valid_layout(), view))
    assert not report.is_valid
    assert report.errors == [
        "Category/action mismatch: view permission admin.dashboard.view must use action 'view', got 'create'"
    ]


def test_dangling_dependency_yields_exactly_one_error():
    function = [entry("users.create", "function", "create", dependencies=["admin.users.view"])]
    report = validate_catalog(load_catalog(_valid_layout(), function))
    assert report.errors == ["Permission users.create has unknown dependency: admin.users.view"]


def test_forward_references_are_allowed():
    # View declared after the function that depends on it
    function = [entry("users.create", "function", "create", dependencies=["admin.dashboard.view"])]
    report = validate_catalog(load_catalog(_valid_layout(), function, _valid_view()))
    assert report.errors == []


def test_duplicate_names_reported_once_with_count():
    layout = _valid_layout() * 3
    report = validate_catalog(load_catalog(layout))
    assert report.errors == ["Duplicate permission name: admin.layout (declared 3 times)"]


class TestCategoryCoupling:

    def test_layout_must_use_access(self):
        report = validate_catalog(load_catalog([entry("admin.layout", "layout", "view")]))
        assert report.errors == [
            "Category/action mismatch: layout permission admin.layout must use action 'access', got 'view'"
        ]

    def test_layout_name_suffix(self):
        report = validate_catalog(load_catalog([entry("admin.panel", "layout", "access")]))
        assert report.errors == ["Layout permission name must end with .layout: admin.panel"]

    def test_view_name_suffix(self):
        report = validate_catalog(load_catalog([entry("admin.dashboard", "view", "view")]))
        assert report.errors == ["View permission name must end with .view: admin.dashboard"]

    def test_function_must_not_use_view_action(self):
        report = validate_catalog(load_catalog([entry("users.list", "function", "view")]))
        assert report.errors == [
            "Category/action mismatch: function permission users.list must not use action 'view'"
        ]

    @pytest.mark.parametrize("name", ["users.view.create", "admin.layout.create"])
    def test_function_name_must_not_carry_markers(self, name):
        report = validate_catalog(load_catalog([entry(name, "function", "create")]))
        assert report.errors == [
            f"Function permission name must not contain .view or .layout: {name}"
        ]


class TestRequiredFields:

    def test_missing_locale_text(self):
        bad = entry("admin.layout", "layout", "access", display_name={"en": "Admin Panel"})
        report = validate_catalog(load_catalog([bad]))
        assert report.errors == ["Permission admin.layout is missing required field: display_name.tr"]

    def test_missing_action_skips_coupling_check(self):
        bad = entry("admin.layout", "layout", "access")
        del bad["action"]
        report = validate_catalog(load_catalog([bad]))
        assert report.errors == ["Permission admin.layout is missing required field: action"]

    def test_nameless_entry_is_labelled_by_position(self):
        bad = entry("admin.layout", "layout", "access")
        bad["name"] = ""
        report = validate_catalog(load_catalog(_valid_layout(), [bad]))
        assert "Permission <entry #1> is missing required field: name" in report.errors

    def test_invalid_enums(self):
        bad = entry("x.y", "widget", "explode", permission_type="robot")
        report = validate_catalog(load_catalog([bad]))
        assert set(report.errors) == {
            "Invalid category for permission x.y: 'widget'",
            "Invalid permission_type for permission x.y: 'robot'",
            "Invalid action for permission x.y: 'explode'",
        }


class TestGraph:

    def test_self_dependency(self):
        bad = entry("users.create", "function", "create", dependencies=["users.create"])
        report = validate_catalog(load_catalog([bad]))
        assert report.errors == ["Permission users.create depends on itself"]

    def test_cycle(self):
        function = [
            entry("a.create", "function", "create", dependencies=["b.create"]),
            entry("b.create", "function", "create", dependencies=["a.create"]),
        ]
        report = validate_catalog(load_catalog(function))
        assert report.errors == ["Dependency cycle: a.create -> b.create -> a.create"]


class TestWarnings:

    def test_warnings_do_not_block(self):
        function = [entry("users.create", "function", "create", resource_path="admin/users",
                          dev_notes=None, used_in=[],
                          display_name={"tr": "Kullanıcı", "en": "Kullanıcı"})]
        report = validate_catalog(load_catalog(function))
        assert report.is_valid
        assert report.warnings == [
            "Resource path should not contain whitespace or '/': users.create -> admin/users",
            "Function permission has no dev_notes: users.create",
            "Permission has no used_in entries: users.create",
            "Turkish and English display names are identical: users.create",
        ]

    def test_report_to_dict(self):
        report = validate_catalog(load_catalog(_valid_layout() * 2))
        data = report.to_dict()
        assert data["is_valid"] is False
        assert len(data["errors"]) == 1
