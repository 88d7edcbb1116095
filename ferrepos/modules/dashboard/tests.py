"""
Tests del panel principal
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

from ferrepos.modules.dashboard.service import NO_SALES_MESSAGE
from ferrepos.modules.sales.models import Sale


def _sell(client, headers, product, quantity):
    response = client.post("/sales/checkout", json={"items": [{"product_id": product["id"], "quantity": quantity}]},
                           headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestSummary:

    def test_empty_summary(self, client, auth_headers):
        data = client.get("/dashboard/summary", headers=auth_headers).json()

        assert Decimal(data["total_revenue"]) == Decimal("0")
        assert data["sales_count"] == 0
        assert len(data["daily_sales"]) == 7
        assert all(Decimal(day["total"]) == 0 for day in data["daily_sales"])

    def test_summary_with_sales(self, client, auth_headers, make_product):
        product = make_product(price="5000", stock=10, min_stock=5)
        _sell(client, auth_headers, product, 2)
        _sell(client, auth_headers, product, 4)

        data = client.get("/dashboard/summary", headers=auth_headers).json()
        today = datetime.now(timezone.utc).strftime("%m-%d")

        assert Decimal(data["total_revenue"]) == Decimal("30000")
        assert data["sales_count"] == 2
        assert data["low_stock_count"] == 1  # quedan 4 con mínimo 5
        assert data["daily_sales"][-1]["date"] == today
        assert Decimal(data["daily_sales"][-1]["total"]) == Decimal("30000")

    def test_days_are_oldest_first(self, client, auth_headers, make_product, db_session):
        product = make_product(price="1000")
        sale = _sell(client, auth_headers, product, 1)

        three_days_ago = datetime.now(timezone.utc) - timedelta(days=3)
        db_session.query(Sale).filter(Sale.id == UUID(sale["id"])).update({Sale.date: three_days_ago})
        db_session.commit()

        days = client.get("/dashboard/summary", headers=auth_headers).json()["daily_sales"]
        assert days[3]["date"] == three_days_ago.strftime("%m-%d")
        assert Decimal(days[3]["total"]) == Decimal("1000")
        assert Decimal(days[-1]["total"]) == 0

    def test_old_sales_count_in_revenue_only(self, client, auth_headers, make_product, db_session):
        product = make_product(price="1000")
        sale = _sell(client, auth_headers, product, 1)
        db_session.query(Sale).filter(Sale.id == UUID(sale["id"])).update(
            {Sale.date: datetime.now(timezone.utc) - timedelta(days=30)}
        )
        db_session.commit()

        data = client.get("/dashboard/summary", headers=auth_headers).json()
        assert Decimal(data["total_revenue"]) == Decimal("1000")
        assert all(Decimal(day["total"]) == 0 for day in data["daily_sales"])


class TestInsights:

    def test_no_sales_skips_ai(self, client, auth_headers, fake_ai):
        data = client.get("/dashboard/insights", headers=auth_headers).json()

        assert data == {"analysis": NO_SALES_MESSAGE, "generated": False}
        assert fake_ai.prompts == []

    def test_insights_with_sales(self, client, auth_headers, make_product, fake_ai):
        fake_ai.reply = "1. Reponer stock\n2. Promociones\n3. Revisar precios"
        _sell(client, auth_headers, make_product(price="2000"), 1)

        data = client.get("/dashboard/insights", headers=auth_headers).json()
        assert data == {"analysis": fake_ai.reply, "generated": True}
        assert "Ventas totales conteo: 1" in fake_ai.prompts[0]
