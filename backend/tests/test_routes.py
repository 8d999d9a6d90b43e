"""
HTTP route tests.

Verifies:
- Unauthenticated requests return 401
- Principals without the guarded permission get 403 and an audit event
- Admin grant endpoints map service errors to 400/404/409
"""

import pytest

from permgate.models import SecurityEvent

from conftest import principal_headers


# =============================================================================
# UNAUTHENTICATED ACCESS - 401
# =============================================================================


class TestUnauthenticatedAccess:

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/auth/permissions"),
            ("POST", "/api/auth/check-permissions"),
            ("GET", "/api/admin/catalog"),
            ("GET", "/api/admin/permissions"),
            ("GET", "/api/admin/roles"),
            ("POST", "/api/admin/roles"),
            ("PUT", "/api/admin/roles/user"),
            ("DELETE", "/api/admin/roles/user"),
            ("GET", "/api/admin/roles/user/permissions"),
            ("PUT", "/api/admin/roles/user/permissions"),
        ],
    )
    def test_requires_auth(self, client, db_session, method, path):
        resp = getattr(client, method.lower())(path)
        assert resp.status_code == 401, f"{method} {path} returned {resp.status_code}"


def test_health(client, setup_roles):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json["status"] == "healthy"


def test_health_degraded_before_sync(client, db_session):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json["checks"]["catalog"]["status"] == "degraded"


# =============================================================================
# CURRENT PRINCIPAL
# =============================================================================


class TestAuthRoutes:

    def test_my_permissions(self, client, user_headers):
        resp = client.get("/api/auth/permissions", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json["roles"] == ["user"]
        assert "customer.layout" in resp.json["permissions"]
        assert "admin.layout" not in resp.json["permissions"]

    def test_unknown_role_has_no_permissions(self, client, setup_roles):
        resp = client.get("/api/auth/permissions", headers=principal_headers("eve", "ghost"))
        assert resp.status_code == 200
        assert resp.json["permissions"] == []

    def test_check_permissions_all(self, client, admin_headers):
        resp = client.post(
            "/api/auth/check-permissions",
            json={"permissions": ["users.create", "customer.layout"], "mode": "all"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json["decision"] == "deny"

    def test_check_permissions_any(self, client, admin_headers):
        resp = client.post(
            "/api/auth/check-permissions",
            json={"permissions": ["users.create", "customer.layout"], "mode": "any"},
            headers=admin_headers,
        )
        assert resp.json["allowed"] is True

    def test_check_permissions_bad_body(self, client, admin_headers):
        resp = client.post("/api/auth/check-permissions", json={"permissions": "users.create"},
                           headers=admin_headers)
        assert resp.status_code == 400

        resp = client.post("/api/auth/check-permissions",
                           json={"permissions": ["users.create"], "mode": "some"},
                           headers=admin_headers)
        assert resp.status_code == 400


# =============================================================================
# GUARDS - 403
# =============================================================================


class TestUserDenied:

    def test_cannot_list_roles(self, client, db_session, user_headers):
        resp = client.get("/api/admin/roles", headers=user_headers)
        assert resp.status_code == 403
        assert resp.json["required_permission"] == "admin.roles.view"

        event = db_session.query(SecurityEvent).filter_by(event_type="PERMISSION_DENIED").one()
        assert event.principal_id == "bob"
        assert event.resource == "/api/admin/roles"
        assert event.success is False

    def test_cannot_create_role(self, client, user_headers):
        resp = client.post("/api/admin/roles", json={"name": "evil-role"}, headers=user_headers)
        assert resp.status_code == 403

    def test_cannot_grant(self, client, user_headers):
        resp = client.post(
            "/api/admin/roles/user/permissions",
            json={"permission_name": "admin.layout"},
            headers=user_headers,
        )
        assert resp.status_code == 403


# =============================================================================
# ADMIN
# =============================================================================


class TestAdminRoutes:

    def test_catalog(self, client, admin_headers):
        resp = client.get("/api/admin/catalog", headers=admin_headers)
        assert resp.status_code == 200
        assert set(resp.json["groups"]) == {"layout", "view", "function"}
        assert resp.json["stats"]["total"] == sum(len(v) for v in resp.json["groups"].values())

    def test_list_permissions_filters(self, client, admin_headers):
        resp = client.get("/api/admin/permissions?category=layout", headers=admin_headers)
        assert resp.status_code == 200
        assert {p["name"] for p in resp.json["permissions"]} == {"admin.layout", "customer.layout"}

        resp = client.get("/api/admin/permissions?type=user&category=layout", headers=admin_headers)
        assert [p["name"] for p in resp.json["permissions"]] == ["customer.layout"]

    def test_list_roles(self, client, admin_headers):
        resp = client.get("/api/admin/roles", headers=admin_headers)
        assert resp.status_code == 200
        names = [r["name"] for r in resp.json["roles"]]
        assert names == ["admin", "super_admin", "user"]

    def test_create_and_delete_role(self, client, admin_headers):
        resp = client.post(
            "/api/admin/roles",
            json={"name": "support_agent", "layout_type": "admin"},
            headers=admin_headers,
        )
        assert resp.status_code == 201
        assert resp.json["role"]["created_by"] == "alice"

        resp = client.post("/api/admin/roles", json={"name": "support_agent"}, headers=admin_headers)
        assert resp.status_code == 409

        resp = client.delete("/api/admin/roles/support_agent", headers=admin_headers)
        assert resp.status_code == 200

        resp = client.delete("/api/admin/roles/support_agent", headers=admin_headers)
        assert resp.status_code == 404

    def test_create_role_validation(self, client, admin_headers):
        resp = client.post("/api/admin/roles", json={}, headers=admin_headers)
        assert resp.status_code == 400

        resp = client.post("/api/admin/roles", json={"name": "Bad Name"}, headers=admin_headers)
        assert resp.status_code == 400

    def test_cannot_delete_system_role(self, client, super_admin_headers):
        resp = client.delete("/api/admin/roles/user", headers=super_admin_headers)
        assert resp.status_code == 400

    def test_update_role(self, client, admin_headers):
        client.post("/api/admin/roles", json={"name": "support_agent"}, headers=admin_headers)

        resp = client.put(
            "/api/admin/roles/support_agent",
            json={"display_name": "Support", "description": "Handles tickets"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json["role"]["display_name"] == "Support"
        assert resp.json["role"]["description"] == "Handles tickets"

        resp = client.put("/api/admin/roles/support_agent", json={"name": "other"},
                          headers=admin_headers)
        assert resp.status_code == 400

        resp = client.put("/api/admin/roles/ghost", json={"color": "#000000"}, headers=admin_headers)
        assert resp.status_code == 404

    def test_cannot_update_system_role(self, client, super_admin_headers):
        resp = client.put("/api/admin/roles/admin", json={"display_name": "Boss"},
                          headers=super_admin_headers)
        assert resp.status_code == 400

    def test_user_cannot_update_role(self, client, user_headers):
        resp = client.put("/api/admin/roles/user", json={"color": "#000000"}, headers=user_headers)
        assert resp.status_code == 403

    def test_grant_and_revoke(self, client, admin_headers):
        client.post("/api/admin/roles", json={"name": "support_agent", "layout_type": "admin"},
                    headers=admin_headers)

        resp = client.post(
            "/api/admin/roles/support_agent/permissions",
            json={"permission_name": "support.tickets.update"},
            headers=admin_headers,
        )
        assert resp.status_code == 201

        resp = client.get("/api/admin/roles/support_agent/permissions", headers=admin_headers)
        assert resp.json["permissions"] == ["admin.layout", "support.tickets.update"]

        resp = client.delete(
            "/api/admin/roles/support_agent/permissions/support.tickets.update",
            headers=admin_headers,
        )
        assert resp.status_code == 200

        resp = client.delete(
            "/api/admin/roles/support_agent/permissions/support.tickets.update",
            headers=admin_headers,
        )
        assert resp.status_code == 404

    def test_grant_errors(self, client, admin_headers):
        resp = client.post("/api/admin/roles/ghost/permissions",
                           json={"permission_name": "admin.layout"}, headers=admin_headers)
        assert resp.status_code == 404

        resp = client.post("/api/admin/roles/user/permissions",
                           json={"permission_name": "nope"}, headers=admin_headers)
        assert resp.status_code == 404

        resp = client.post("/api/admin/roles/user/permissions", json={}, headers=admin_headers)
        assert resp.status_code == 400

    def test_revoke_protected(self, client, admin_headers):
        resp = client.delete("/api/admin/roles/user/permissions/customer.layout", headers=admin_headers)
        assert resp.status_code == 400

    def test_replace(self, client, admin_headers):
        resp = client.put(
            "/api/admin/roles/user/permissions",
            json={"permissions": ["customer.calendar.view"]},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json["permissions"] == ["customer.calendar.view", "customer.layout"]

        resp = client.put("/api/admin/roles/user/permissions", json={"permissions": ["nope"]},
                          headers=admin_headers)
        assert resp.status_code == 404

        resp = client.put("/api/admin/roles/user/permissions", json={}, headers=admin_headers)
        assert resp.status_code == 400

    def test_admin_panel_grant_reaches_the_guard(self, client, super_admin_headers):
        client.post("/api/admin/roles", json={"name": "auditor", "layout_type": "admin"},
                    headers=super_admin_headers)
        auditor = principal_headers("carol", "auditor")

        assert client.get("/api/admin/roles", headers=auditor).status_code == 403

        client.post("/api/admin/roles/auditor/permissions",
                    json={"permission_name": "admin.roles.view"}, headers=super_admin_headers)

        assert client.get("/api/admin/roles", headers=auditor).status_code == 200
