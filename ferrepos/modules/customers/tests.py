"""
Tests del módulo de clientes

Cubre:
- Alta con CI, RUC, pasaporte y documento extranjero (el DV se calcula al guardar)
- Vista previa del DV
- Búsqueda por nombre o documento
- Validación de teléfonos paraguayos
"""

import pytest

from ferrepos.modules.customers.service import build_tax_id, check_digit_preview
from fastapi import HTTPException


class TestTaxIdHelpers:

    def test_ruc_gets_check_digit(self):
        assert build_tax_id("RUC", "80069563") == "80069563-1"

    def test_ruc_with_matching_dv(self):
        assert build_tax_id("RUC", "80069563-1") == "80069563-1"

    def test_ruc_with_wrong_dv(self):
        with pytest.raises(HTTPException) as exc:
            build_tax_id("RUC", "80069563-4")
        assert exc.value.status_code == 400

    def test_ruc_without_digits(self):
        with pytest.raises(HTTPException):
            build_tax_id("RUC", "abc")

    def test_ci_is_stored_as_is(self):
        assert build_tax_id("CI", " 1234567 ") == "1234567"

    def test_passport_and_foreign_document_kept_as_typed(self):
        assert build_tax_id("PAS", " AB123456 ") == "AB123456"
        assert build_tax_id("EXT", "DNI-30111222") == "DNI-30111222"

    def test_empty_document(self):
        assert build_tax_id("RUC", "") is None
        assert build_tax_id("CI", None) is None

    def test_preview(self):
        assert check_digit_preview("3799439") == {"base": "3799439", "check_digit": 5, "ruc": "3799439-5"}
        assert check_digit_preview("") == {"base": "", "check_digit": None, "ruc": None}


class TestCustomersApi:

    def test_create_ruc_customer(self, client, auth_headers):
        response = client.post("/customers/", json={
            "name": "Constructora Asunción S.A.",
            "email": "compras@constructora.com.py",
            "phone": "0981 123 456",
            "doc_type": "RUC",
            "doc_number": "80069563",
        }, headers=auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["tax_id"] == "80069563-1"
        assert data["doc_type"] == "RUC"
        assert data["phone"] == "+595981123456"

    def test_create_ci_customer(self, client, auth_headers):
        response = client.post("/customers/", json={
            "name": "Juan Benítez", "doc_type": "CI", "doc_number": "3799439"
        }, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["tax_id"] == "3799439"

    def test_create_passport_customer(self, client, auth_headers):
        response = client.post("/customers/", json={
            "name": "John Smith", "doc_type": "PAS", "doc_number": "X1234567"
        }, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["doc_type"] == "PAS"
        assert response.json()["tax_id"] == "X1234567"

    def test_create_foreign_document_customer(self, client, auth_headers):
        response = client.post("/customers/", json={
            "name": "Ana Souza", "doc_type": "EXT", "doc_number": "RG 12.345.678-9"
        }, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["doc_type"] == "EXT"
        assert response.json()["tax_id"] == "RG 12.345.678-9"

    def test_unknown_doc_type(self, client, auth_headers):
        response = client.post("/customers/", json={
            "name": "X", "doc_type": "DNI", "doc_number": "123"
        }, headers=auth_headers)
        assert response.status_code == 422

    def test_duplicate_document(self, client, auth_headers):
        response = client.post("/customers/", json={
            "name": "Otro Cliente General", "doc_type": "RUC", "doc_number": "44444401"
        }, headers=auth_headers)
        assert response.status_code == 409

    def test_invalid_email(self, client, auth_headers):
        response = client.post("/customers/", json={"name": "X", "email": "no-es-email"}, headers=auth_headers)
        assert response.status_code == 422

    def test_check_digit_endpoint(self, client, auth_headers):
        response = client.get("/customers/ruc/check-digit?base=80069563", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"base": "80069563", "check_digit": 1, "ruc": "80069563-1"}

    def test_check_digit_endpoint_without_digits(self, client, auth_headers):
        response = client.get("/customers/ruc/check-digit?base=abc", headers=auth_headers)
        assert response.json()["check_digit"] is None

    def test_search(self, client, auth_headers):
        client.post("/customers/", json={"name": "María Gómez", "doc_type": "CI", "doc_number": "1234567"},
                    headers=auth_headers)

        by_name = client.get("/customers/?search=maría", headers=auth_headers).json()
        assert [c["name"] for c in by_name["customers"]] == ["María Gómez"]

        by_doc = client.get("/customers/?search=44444401", headers=auth_headers).json()
        assert [c["name"] for c in by_doc["customers"]] == ["Cliente General"]

    def test_update_switches_to_ruc(self, client, auth_headers):
        customer = client.post("/customers/", json={
            "name": "Pedro", "doc_type": "CI", "doc_number": "1234567"
        }, headers=auth_headers).json()

        response = client.patch(f"/customers/{customer['id']}", json={"doc_type": "RUC"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["tax_id"] == "1234567-9"

    def test_update_switches_to_passport(self, client, auth_headers):
        customer = client.post("/customers/", json={
            "name": "Pedro", "doc_type": "CI", "doc_number": "1234567"
        }, headers=auth_headers).json()

        response = client.patch(f"/customers/{customer['id']}", json={"doc_type": "PAS", "doc_number": "P998877"},
                                headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["doc_type"] == "PAS"
        assert response.json()["tax_id"] == "P998877"

    def test_update_name(self, client, auth_headers):
        customer = client.get("/customers/", headers=auth_headers).json()["customers"][0]
        response = client.patch(f"/customers/{customer['id']}", json={"address": "Av. Mcal. López 123"},
                                headers=auth_headers)
        assert response.json()["address"] == "Av. Mcal. López 123"
        assert response.json()["tax_id"] == customer["tax_id"]

    def test_delete(self, client, auth_headers):
        customer = client.post("/customers/", json={"name": "Temporal"}, headers=auth_headers).json()
        assert client.delete(f"/customers/{customer['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/customers/{customer['id']}", headers=auth_headers).status_code == 404
