"""
Tests de ventas: cotización y cobro en el punto de venta
"""

from decimal import Decimal
from uuid import uuid4

from ferrepos.modules.customers.models import Customer
from ferrepos.modules.products.models import InventoryMovement
from ferrepos.modules.sales.models import Sale


def _cart(*pairs):
    return [{"product_id": product["id"], "quantity": quantity} for product, quantity in pairs]


class TestQuote:

    def test_quote_mixed_rates(self, client, auth_headers, make_product, db_session):
        hammer = make_product(name="Martillo", price="45000", tax_rate=10)
        seeds = make_product(name="Semillas", price="25000", tax_rate=5)

        response = client.post("/sales/quote", json={"items": _cart((hammer, 1), (seeds, 1))},
                               headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total"]) == Decimal("70000.00")
        assert Decimal(data["vat10"]) == Decimal("4090.91")
        assert Decimal(data["vat5"]) == Decimal("1190.48")
        assert Decimal(data["subtotal"]) == Decimal("64718.61")
        assert db_session.query(Sale).count() == 0

    def test_quote_empty_cart(self, client, auth_headers):
        response = client.post("/sales/quote", json={"items": []}, headers=auth_headers)
        assert response.status_code == 200
        assert Decimal(response.json()["total"]) == Decimal("0")

    def test_quote_unknown_product(self, client, auth_headers):
        response = client.post("/sales/quote", json={"items": [{"product_id": str(uuid4()), "quantity": 1}]},
                               headers=auth_headers)
        assert response.status_code == 404


class TestCheckout:

    def test_checkout_registers_sale(self, client, auth_headers, make_product, db_session):
        hammer = make_product(sku="MTL", name="Martillo", price="45000", tax_rate=10, stock=5)
        seeds = make_product(sku="SEM", name="Semillas", price="25000", tax_rate=5, stock=3)

        response = client.post("/sales/checkout", json={"items": _cart((hammer, 2), (seeds, 1))},
                               headers=auth_headers)

        assert response.status_code == 201, response.text
        sale = response.json()
        assert sale["customer_name"] == "Cliente General"
        assert Decimal(sale["total"]) == Decimal("115000.00")
        assert Decimal(sale["subtotal"]) + Decimal(sale["vat10"]) + Decimal(sale["vat5"]) == Decimal(sale["total"])
        assert len(sale["items"]) == 2

        line = next(i for i in sale["items"] if i["sku"] == "MTL")
        assert line["quantity"] == 2
        assert Decimal(line["line_total"]) == Decimal("90000")

        assert client.get(f"/products/{hammer['id']}", headers=auth_headers).json()["stock"] == 3
        assert client.get(f"/products/{seeds['id']}", headers=auth_headers).json()["stock"] == 2

        movements = db_session.query(InventoryMovement).filter(InventoryMovement.movement_type == "OUT").all()
        assert sorted(m.quantity for m in movements) == [-2, -1]

    def test_repeated_product_lines_are_merged(self, client, auth_headers, make_product):
        product = make_product(price="1000", stock=3)
        response = client.post("/sales/checkout", json={"items": _cart((product, 2), (product, 2))},
                               headers=auth_headers)
        assert response.status_code == 409

    def test_empty_cart(self, client, auth_headers):
        response = client.post("/sales/checkout", json={"items": []}, headers=auth_headers)
        assert response.status_code == 400

    def test_unknown_product(self, client, auth_headers):
        response = client.post("/sales/checkout", json={"items": [{"product_id": str(uuid4()), "quantity": 1}]},
                               headers=auth_headers)
        assert response.status_code == 404

    def test_insufficient_stock_changes_nothing(self, client, auth_headers, make_product, db_session):
        product = make_product(stock=1)
        response = client.post("/sales/checkout", json={"items": _cart((product, 2))}, headers=auth_headers)

        assert response.status_code == 409
        assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["stock"] == 1
        assert db_session.query(Sale).count() == 0

    def test_zero_quantity_rejected(self, client, auth_headers, make_product):
        product = make_product()
        response = client.post("/sales/checkout", json={"items": _cart((product, 0))}, headers=auth_headers)
        assert response.status_code == 422

    def test_explicit_customer(self, client, auth_headers, make_product):
        customer = client.post("/customers/", json={"name": "Constructora Sur", "doc_type": "RUC",
                                                    "doc_number": "80069563"}, headers=auth_headers).json()
        product = make_product()

        response = client.post("/sales/checkout", json={"customer_id": customer["id"], "items": _cart((product, 1))},
                               headers=auth_headers)
        assert response.json()["customer_name"] == "Constructora Sur"
        assert response.json()["customer_id"] == customer["id"]

    def test_walk_in_customer_when_none_exist(self, client, auth_headers, make_product, db_session):
        db_session.query(Customer).delete()
        db_session.commit()
        product = make_product()

        response = client.post("/sales/checkout", json={"items": _cart((product, 1))}, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["customer_name"] == "Consumidor Final"
        assert response.json()["customer_id"] is None


class TestSalesHistory:

    def test_list_newest_first_and_receipt(self, client, auth_headers, make_product):
        product = make_product(price="1000", stock=10)
        first = client.post("/sales/checkout", json={"items": _cart((product, 1))}, headers=auth_headers).json()
        second = client.post("/sales/checkout", json={"items": _cart((product, 2))}, headers=auth_headers).json()

        data = client.get("/sales/", headers=auth_headers).json()
        assert data["total"] == 2
        assert [s["id"] for s in data["sales"]] == [second["id"], first["id"]]

        receipt = client.get(f"/sales/{first['id']}", headers=auth_headers).json()
        assert Decimal(receipt["total"]) == Decimal("1000")
        assert receipt["items"][0]["name"] == product["name"]

    def test_unknown_sale(self, client, auth_headers):
        assert client.get(f"/sales/{uuid4()}", headers=auth_headers).status_code == 404
