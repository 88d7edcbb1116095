"""
Tests de planes y facturación del SaaS
"""

from datetime import date, timedelta
from decimal import Decimal

from ferrepos.modules.subscriptions.models import Plan
from ferrepos.modules.subscriptions.seed_plans import seed_plans, PLANS_DATA


def _upgrade(client, admin_headers, tenant_id, plan_code):
    response = client.patch(f"/admin/tenants/{tenant_id}", json={"plan_code": plan_code}, headers=admin_headers)
    assert response.status_code == 200, response.text


def _issue(client, admin_headers, tenant_id):
    response = client.post("/admin/invoices/", json={"tenant_id": tenant_id}, headers=admin_headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestPlans:

    def test_seed_is_idempotent(self, db_session):
        assert seed_plans(db_session) == 0
        assert db_session.query(Plan).count() == len(PLANS_DATA)

    def test_list_plans_is_public(self, client):
        response = client.get("/subscriptions/plans")
        assert response.status_code == 200

        plans = response.json()
        assert [p["code"] for p in plans] == ["FREE", "PRO", "ENTERPRISE"]
        assert [Decimal(p["price"]) for p in plans] == [Decimal("0"), Decimal("150000"), Decimal("450000")]
        assert [p["max_products"] for p in plans] == [50, 1000, 10000]

    def test_get_plan(self, client):
        plan = client.get("/subscriptions/plans/PRO").json()
        assert plan["name"] == "Plan Profesional"
        assert plan["support_level"] == "Email Prioritario"
        assert plan["is_popular"] is True
        assert plan["features"]

    def test_unknown_plan_code(self, client):
        assert client.get("/subscriptions/plans/GOLD").status_code == 422

    def test_current_subscription(self, client, auth_headers, make_product):
        make_product()
        data = client.get("/subscriptions/current", headers=auth_headers).json()

        assert data["plan"]["code"] == "FREE"
        assert data["products_used"] == 1
        assert data["products_remaining"] == 49
        assert data["can_add_products"] is True

    def test_current_requires_tenant(self, client, admin_headers):
        assert client.get("/subscriptions/current", headers=admin_headers).status_code == 403


class TestTenantInvoices:

    def test_issue_invoice_uses_plan_price(self, client, admin_headers, tenant):
        _upgrade(client, admin_headers, tenant["tenant_id"], "PRO")
        invoice = _issue(client, admin_headers, tenant["tenant_id"])

        assert Decimal(invoice["amount"]) == Decimal("150000")
        assert invoice["plan_name"] == "Plan Profesional"
        assert invoice["tenant_name"] == tenant["tenant_name"]
        assert invoice["status"] == "PENDING"
        issue = date.fromisoformat(invoice["issue_date"])
        assert date.fromisoformat(invoice["due_date"]) == issue + timedelta(days=10)

    def test_issue_for_unknown_tenant(self, client, admin_headers):
        response = client.post("/admin/invoices/", json={"tenant_id": "00000000-0000-0000-0000-000000000000"},
                               headers=admin_headers)
        assert response.status_code == 404

    def test_tenant_cannot_issue_invoices(self, client, auth_headers, tenant):
        response = client.post("/admin/invoices/", json={"tenant_id": tenant["tenant_id"]}, headers=auth_headers)
        assert response.status_code == 403

    def test_pay_invoice(self, client, admin_headers, tenant):
        invoice = _issue(client, admin_headers, tenant["tenant_id"])
        response = client.post(f"/admin/invoices/{invoice['id']}/pay", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "PAID"
        assert response.json()["paid_at"] is not None

    def test_edit_invoice(self, client, admin_headers, tenant):
        invoice = _issue(client, admin_headers, tenant["tenant_id"])
        response = client.patch(f"/admin/invoices/{invoice['id']}", json={"amount": "99000", "status": "PAID"},
                                headers=admin_headers)

        data = response.json()
        assert Decimal(data["amount"]) == Decimal("99000")
        assert data["status"] == "PAID"
        assert data["paid_at"] is not None

    def test_refresh_overdue(self, client, admin_headers, tenant):
        late = _issue(client, admin_headers, tenant["tenant_id"])
        on_time = _issue(client, admin_headers, tenant["tenant_id"])
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        client.patch(f"/admin/invoices/{late['id']}", json={"due_date": yesterday}, headers=admin_headers)

        response = client.post("/admin/invoices/refresh-overdue", headers=admin_headers)
        assert response.json() == {"updated": 1}

        overdue = client.get("/admin/invoices/?status=OVERDUE", headers=admin_headers).json()
        assert [i["id"] for i in overdue["invoices"]] == [late["id"]]

        pending = client.get("/admin/invoices/?status=PENDING", headers=admin_headers).json()
        assert [i["id"] for i in pending["invoices"]] == [on_time["id"]]

    def test_summary(self, client, admin_headers, tenant):
        _upgrade(client, admin_headers, tenant["tenant_id"], "PRO")
        paid = _issue(client, admin_headers, tenant["tenant_id"])
        _issue(client, admin_headers, tenant["tenant_id"])
        late = _issue(client, admin_headers, tenant["tenant_id"])

        client.post(f"/admin/invoices/{paid['id']}/pay", headers=admin_headers)
        client.patch(f"/admin/invoices/{late['id']}", json={"status": "OVERDUE"}, headers=admin_headers)

        summary = client.get("/admin/invoices/summary", headers=admin_headers).json()
        assert Decimal(summary["paid_amount"]) == Decimal("150000")
        assert Decimal(summary["pending_amount"]) == Decimal("150000")
        assert summary["overdue_count"] == 1
        assert Decimal(summary["overdue_amount"]) == Decimal("150000")

    def test_list_invoices(self, client, admin_headers, tenant):
        _issue(client, admin_headers, tenant["tenant_id"])
        _issue(client, admin_headers, tenant["tenant_id"])

        data = client.get("/admin/invoices/", headers=admin_headers).json()
        assert data["total"] == 2
        assert len(data["invoices"]) == 2

    def test_list_invoices_page_size_is_capped(self, client, admin_headers):
        response = client.get("/admin/invoices/?limit=101", headers=admin_headers)
        assert response.status_code == 422

    def test_unknown_invoice(self, client, admin_headers):
        response = client.post("/admin/invoices/00000000-0000-0000-0000-000000000000/pay", headers=admin_headers)
        assert response.status_code == 404
