"""
Tests del panel de administración de ferreterías
"""

from decimal import Decimal

from conftest import register_tenant


class TestTenantAdmin:

    def test_list_and_search(self, client, admin_headers, tenant):
        register_tenant(client, name="Ferretería Luque", email="luque@example.com")

        data = client.get("/admin/tenants/", headers=admin_headers).json()
        assert data["total"] == 2

        found = client.get("/admin/tenants/?search=luque", headers=admin_headers).json()
        assert [t["email"] for t in found["tenants"]] == ["luque@example.com"]

    def test_filter_by_status(self, client, admin_headers, tenant):
        client.patch(f"/admin/tenants/{tenant['tenant_id']}/status", json={"is_active": False}, headers=admin_headers)
        register_tenant(client, name="Activa", email="activa@example.com")

        inactive = client.get("/admin/tenants/?is_active=false", headers=admin_headers).json()
        assert [t["id"] for t in inactive["tenants"]] == [tenant["tenant_id"]]

    def test_get_and_update(self, client, admin_headers, tenant):
        response = client.patch(f"/admin/tenants/{tenant['tenant_id']}",
                                json={"name": "Ferretería Central SA", "plan_code": "ENTERPRISE"},
                                headers=admin_headers)
        assert response.status_code == 200

        data = client.get(f"/admin/tenants/{tenant['tenant_id']}", headers=admin_headers).json()
        assert data["name"] == "Ferretería Central SA"
        assert data["plan_code"] == "ENTERPRISE"

    def test_invalid_plan(self, client, admin_headers, tenant):
        response = client.patch(f"/admin/tenants/{tenant['tenant_id']}", json={"plan_code": "GOLD"},
                                headers=admin_headers)
        assert response.status_code == 422

    def test_suspend_blocks_access(self, client, admin_headers, tenant, auth_headers):
        response = client.patch(f"/admin/tenants/{tenant['tenant_id']}/status", json={"is_active": False},
                                headers=admin_headers)
        assert response.json()["is_active"] is False
        assert client.get("/products/", headers=auth_headers).status_code == 403

        client.patch(f"/admin/tenants/{tenant['tenant_id']}/status", json={"is_active": True}, headers=admin_headers)
        assert client.get("/products/", headers=auth_headers).status_code == 200

    def test_delete_deactivates(self, client, admin_headers, tenant):
        response = client.delete(f"/admin/tenants/{tenant['tenant_id']}", headers=admin_headers)
        assert response.status_code == 200

        data = client.get(f"/admin/tenants/{tenant['tenant_id']}", headers=admin_headers).json()
        assert data["is_active"] is False

    def test_unknown_tenant(self, client, admin_headers):
        response = client.get("/admin/tenants/00000000-0000-0000-0000-000000000000", headers=admin_headers)
        assert response.status_code == 404

    def test_stats(self, client, admin_headers, tenant):
        pro = register_tenant(client, name="Pro", email="pro@example.com")
        ent = register_tenant(client, name="Enterprise", email="ent@example.com")
        suspended = register_tenant(client, name="Suspendida", email="susp@example.com")

        client.patch(f"/admin/tenants/{pro['tenant_id']}", json={"plan_code": "PRO"}, headers=admin_headers)
        client.patch(f"/admin/tenants/{ent['tenant_id']}", json={"plan_code": "ENTERPRISE"}, headers=admin_headers)
        client.patch(f"/admin/tenants/{suspended['tenant_id']}", json={"plan_code": "PRO"}, headers=admin_headers)
        client.patch(f"/admin/tenants/{suspended['tenant_id']}/status", json={"is_active": False},
                     headers=admin_headers)

        stats = client.get("/admin/tenants/stats", headers=admin_headers).json()
        assert stats["total_tenants"] == 4
        assert stats["active_tenants"] == 3
        assert stats["inactive_tenants"] == 1
        assert stats["tenants_by_plan"] == {"FREE": 1, "PRO": 2, "ENTERPRISE": 1}
        # Suspendidas no suman
        assert Decimal(stats["monthly_recurring_revenue"]) == Decimal("600000")

    def test_requires_admin(self, client, auth_headers):
        assert client.get("/admin/tenants/stats", headers=auth_headers).status_code == 403
