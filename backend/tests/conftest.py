"""
Pytest fixtures for permgate backend tests.

Provides test database setup, catalog builders, principal headers and
test client.
"""

import pytest

from permgate import create_app
from permgate.decorators import set_identity_loader
from permgate.extensions import db
from permgate.permissions import load_catalog
from permgate.services import permission_service, role_service, sync_service
from permgate.services.authorization_service import Principal


def header_identity_loader(request):
    """
    Test identity loader: X-Principal names the subject, X-Roles its roles.

    Requests without X-Principal are anonymous.
    """
    principal_id = request.headers.get("X-Principal")
    if not principal_id:
        return None
    roles = [r.strip() for r in request.headers.get("X-Roles", "").split(",") if r.strip()]
    return Principal(principal_id=principal_id, role_names=frozenset(roles))


def principal_headers(principal_id: str, *roles: str) -> dict:
    """Helper to create identity headers for a principal."""
    return {"X-Principal": principal_id, "X-Roles": ",".join(roles)}


def entry(name, category, action, permission_type="admin", resource_path="res", **overrides):
    """Build a valid catalog dict; overrides replace or add keys."""
    data = {
        "name": name,
        "category": category,
        "resource_path": resource_path,
        "action": action,
        "permission_type": permission_type,
        "display_name": {"tr": f"{name} (tr)", "en": f"{name} (en)"},
        "description": {"tr": f"{name} açıklaması", "en": f"{name} description"},
        "dependencies": [],
        "used_in": ["TestComponent"],
    }
    if category == "function":
        data["dev_notes"] = "test entry"
    data.update(overrides)
    return data


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })
    set_identity_loader(app, header_identity_loader)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """Create CLI runner."""
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def small_catalog():
    """
    Three-level admin chain plus one user-type chain.

    users.create -> admin.dashboard.view -> admin.layout
    customer.profile.update -> customer.profile.view -> customer.layout
    """
    layout = [
        entry("admin.layout", "layout", "access", resource_path="admin"),
        entry("customer.layout", "layout", "access", permission_type="user", resource_path="customer"),
    ]
    view = [
        entry("admin.dashboard.view", "view", "view", resource_path="dashboard",
              dependencies=["admin.layout"]),
        entry("customer.profile.view", "view", "view", permission_type="user", resource_path="profile",
              dependencies=["customer.layout"]),
    ]
    function = [
        entry("users.create", "function", "create", resource_path="users",
              dependencies=["admin.dashboard.view"]),
        entry("customer.profile.update", "function", "update", permission_type="user",
              resource_path="profile", dependencies=["customer.profile.view"]),
    ]
    return load_catalog(layout, view, function)


@pytest.fixture(scope='function')
def synced_small_catalog(db_session, small_catalog):
    """small_catalog synced into storage."""
    sync_service.sync_catalog(small_catalog)
    return small_catalog


@pytest.fixture(scope='function')
def setup_roles(db_session):
    """Sync the built-in catalog, create default roles and their grants."""
    sync_service.sync_catalog()
    role_service.create_default_roles()
    permission_service.assign_default_role_permissions()
    db_session.commit()


@pytest.fixture(scope='function')
def super_admin_headers(setup_roles):
    return principal_headers("root", "super_admin")


@pytest.fixture(scope='function')
def admin_headers(setup_roles):
    return principal_headers("alice", "admin")


@pytest.fixture(scope='function')
def user_headers(setup_roles):
    return principal_headers("bob", "user")
