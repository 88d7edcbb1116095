"""
Tests del catálogo de productos

Cubre:
- CRUD con SKU único por ferretería
- Búsqueda por nombre o SKU y filtros
- Stock bajo y ajustes de stock con movimientos
- Límite de productos del plan
- Descripción generada con IA
"""

from decimal import Decimal

from ferrepos.core.config import settings
from ferrepos.modules.ai import DESCRIPTION_FALLBACK
from ferrepos.modules.products.models import Product, InventoryMovement
from ferrepos.modules.subscriptions.models import Plan


class TestProductCrud:

    def test_create_product(self, client, make_product):
        product = make_product(sku="  mtl-001 ", name="Martillo Carpintero", price="45000", tax_rate=10)

        assert product["sku"] == "MTL-001"
        assert Decimal(product["price"]) == Decimal("45000")
        assert product["tax_rate"] == 10
        assert product["is_low_stock"] is False

    def test_create_with_category(self, client, auth_headers, make_product):
        category = client.get("/categories/", headers=auth_headers).json()["categories"][0]
        product = make_product(category_id=category["id"])
        assert product["category_name"] == category["name"]

    def test_unknown_category(self, client, auth_headers):
        response = client.post("/products/", json={
            "sku": "X1", "name": "X", "price": "1000",
            "category_id": "00000000-0000-0000-0000-000000000000"
        }, headers=auth_headers)
        assert response.status_code == 404

    def test_duplicate_sku(self, client, auth_headers, make_product):
        make_product(sku="TAL-01")
        response = client.post("/products/", json={"sku": "tal-01", "name": "Otro", "price": "1"},
                               headers=auth_headers)
        assert response.status_code == 409

    def test_invalid_tax_rate(self, client, auth_headers):
        response = client.post("/products/", json={"sku": "A", "name": "A", "price": "1", "tax_rate": 7},
                               headers=auth_headers)
        assert response.status_code == 422

    def test_negative_price(self, client, auth_headers):
        response = client.post("/products/", json={"sku": "A", "name": "A", "price": "-1"},
                               headers=auth_headers)
        assert response.status_code == 422

    def test_update_product(self, client, auth_headers, make_product):
        product = make_product()
        response = client.patch(f"/products/{product['id']}", json={"price": "12000", "tax_rate": 5},
                                headers=auth_headers)
        assert response.status_code == 200
        assert Decimal(response.json()["price"]) == Decimal("12000")
        assert response.json()["tax_rate"] == 5

    def test_update_sku_conflict(self, client, auth_headers, make_product):
        make_product(sku="A-1")
        product = make_product(sku="A-2")
        response = client.patch(f"/products/{product['id']}", json={"sku": "a-1"}, headers=auth_headers)
        assert response.status_code == 409

    def test_delete_product(self, client, auth_headers, make_product):
        product = make_product()
        assert client.delete(f"/products/{product['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/products/{product['id']}", headers=auth_headers).status_code == 404

    def test_get_by_sku(self, client, auth_headers, make_product):
        make_product(sku="CEM-50")
        response = client.get("/products/sku/cem-50", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["sku"] == "CEM-50"

        assert client.get("/products/sku/NOPE", headers=auth_headers).status_code == 404


class TestProductSearch:

    def test_search_by_name_and_sku(self, client, auth_headers, make_product):
        make_product(sku="MTL-001", name="Martillo")
        make_product(sku="DST-002", name="Destornillador")
        make_product(sku="CLV-003", name="Clavos 2 pulgadas")

        by_name = client.get("/products/?search=marti", headers=auth_headers).json()
        assert [p["sku"] for p in by_name["products"]] == ["MTL-001"]

        by_sku = client.get("/products/?search=dst", headers=auth_headers).json()
        assert [p["name"] for p in by_sku["products"]] == ["Destornillador"]

    def test_in_stock_only(self, client, auth_headers, make_product):
        make_product(sku="A", stock=0)
        make_product(sku="B", stock=3)

        data = client.get("/products/?in_stock_only=true", headers=auth_headers).json()
        assert data["total"] == 1
        assert data["products"][0]["sku"] == "B"

    def test_pagination(self, client, auth_headers, make_product):
        for _ in range(5):
            make_product()
        data = client.get("/products/?limit=2&offset=2", headers=auth_headers).json()
        assert data["total"] == 5
        assert len(data["products"]) == 2

    def test_default_page_size(self, client, auth_headers):
        data = client.get("/products/", headers=auth_headers).json()
        assert data["limit"] == settings.DEFAULT_PAGE_SIZE

    def test_page_size_is_capped(self, client, auth_headers):
        response = client.get(f"/products/?limit={settings.MAX_PAGE_SIZE + 1}", headers=auth_headers)
        assert response.status_code == 422

    def test_low_stock(self, client, auth_headers, make_product):
        make_product(sku="OK", stock=10, min_stock=2)
        make_product(sku="EDGE", stock=2, min_stock=2)
        make_product(sku="LOW", stock=0, min_stock=5)

        data = client.get("/products/low-stock", headers=auth_headers).json()
        assert data["total_count"] == 2
        assert {p["sku"] for p in data["products"]} == {"EDGE", "LOW"}
        assert all(p["is_low_stock"] for p in data["products"])


class TestStockAdjustment:

    def test_increase_and_decrease(self, client, auth_headers, make_product, db_session):
        product = make_product(stock=5)

        response = client.post(f"/products/{product['id']}/stock", json={"quantity": 10, "notes": "Reposición"},
                               headers=auth_headers)
        assert response.json()["stock"] == 15

        response = client.post(f"/products/{product['id']}/stock", json={"quantity": -3},
                               headers=auth_headers)
        assert response.json()["stock"] == 12

        movements = client.get(f"/products/{product['id']}/movements", headers=auth_headers).json()
        assert len(movements) == 2
        assert {m["movement_type"] for m in movements} == {"ADJ"}
        assert db_session.query(InventoryMovement).count() == 2

    def test_movements_survive_product_deletion(self, client, auth_headers, make_product, db_session):
        product = make_product(sku="BORRAR", name="Producto a borrar", stock=5)
        client.post(f"/products/{product['id']}/stock", json={"quantity": 3}, headers=auth_headers)

        assert client.delete(f"/products/{product['id']}", headers=auth_headers).status_code == 200

        db_session.expire_all()
        movement = db_session.query(InventoryMovement).one()
        assert movement.product_id is None
        assert movement.product_sku == "BORRAR"
        assert movement.product_name == "Producto a borrar"
        assert movement.quantity == 3

    def test_cannot_go_below_zero(self, client, auth_headers, make_product):
        product = make_product(stock=2)
        response = client.post(f"/products/{product['id']}/stock", json={"quantity": -3},
                               headers=auth_headers)
        assert response.status_code == 409
        assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["stock"] == 2

    def test_zero_adjustment_rejected(self, client, auth_headers, make_product):
        product = make_product()
        response = client.post(f"/products/{product['id']}/stock", json={"quantity": 0},
                               headers=auth_headers)
        assert response.status_code == 422


class TestPlanLimit:

    def test_free_plan_limit(self, client, auth_headers, make_product, db_session):
        db_session.query(Plan).filter(Plan.code == "FREE").update({Plan.max_products: 2})
        db_session.commit()

        make_product()
        make_product()
        response = client.post("/products/", json={"sku": "EXTRA", "name": "Extra", "price": "1"},
                               headers=auth_headers)
        assert response.status_code == 403
        assert db_session.query(Product).count() == 2


class TestDescribe:

    def test_describe_uses_ai(self, client, auth_headers, fake_ai):
        fake_ai.reply = "Martillo de acero forjado con mango ergonómico."
        response = client.post("/products/describe", json={"name": "Martillo", "category": "Herramientas"},
                               headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["description"] == fake_ai.reply
        assert "Martillo" in fake_ai.prompts[0]
        assert "Herramientas" in fake_ai.prompts[0]

    def test_describe_fallback(self, client, auth_headers, fake_ai, monkeypatch):
        def boom(prompt):
            raise RuntimeError("sin clave")

        monkeypatch.setattr(fake_ai, "generate_text", boom)
        response = client.post("/products/describe", json={"name": "Martillo"}, headers=auth_headers)
        assert response.json()["description"] == DESCRIPTION_FALLBACK
