"""
Tests del cálculo de totales con IVA paraguayo

Cubre:
- Extracción de IVA 10% (monto / 11) y 5% (monto / 21)
- Redondeo a 2 decimales una sola vez por tasa; el total queda exacto
- Invariante subtotal + vat10 + vat5 == total
- Líneas inválidas y tasas no soportadas
- Endpoints /taxes/iva/*
"""

import random
import pytest
from decimal import Decimal, ROUND_HALF_UP

from ferrepos.modules.taxes.calculator import (
    compute_totals, compute_line_tax, get_paraguay_vat_rates,
    InvalidLineError, InvalidRateError, TotalsError, VAT_DIVISORS, CENTS
)
from ferrepos.modules.taxes.schemas import CartLine, SaleTotals


def line(price, quantity=1, rate=10):
    return CartLine(unit_price=Decimal(price), quantity=quantity, vat_rate=rate)


class TestComputeTotals:

    def test_single_line_vat10(self):
        totals = compute_totals([line("45000")])

        assert totals.total == Decimal("45000.00")
        assert totals.vat10 == Decimal("4090.91")
        assert totals.vat5 == Decimal("0.00")
        assert totals.subtotal == Decimal("40909.09")

    def test_mixed_rates(self):
        totals = compute_totals([line("25000", rate=5), line("45000", rate=10)])

        assert totals.total == Decimal("70000.00")
        assert totals.vat5 == Decimal("1190.48")
        assert totals.vat10 == Decimal("4090.91")
        assert totals.subtotal == Decimal("64718.61")

    def test_quantity_multiplies_price(self):
        totals = compute_totals([line("11000", quantity=3)])

        assert totals.total == Decimal("33000.00")
        assert totals.vat10 == Decimal("3000.00")
        assert totals.subtotal == Decimal("30000.00")

    def test_empty_cart_is_all_zero(self):
        totals = compute_totals([])

        assert totals == SaleTotals()
        assert totals.total == Decimal("0.00")
        assert totals.total_vat == Decimal("0.00")

    def test_vat_rounded_once_per_bucket(self):
        # 7/11 = 0.64; redondeando por línea daría 7 * 0.09 = 0.63
        totals = compute_totals([line("1") for _ in range(7)])

        assert totals.vat10 == Decimal("0.64")
        assert totals.subtotal == Decimal("6.36")

    def test_sum_invariant_holds(self):
        lines = [
            line("12345.67", 3, 10),
            line("999.99", 7, 5),
            line("0.01", 1, 10),
            line("3333.33", 2, 5),
        ]
        totals = compute_totals(lines)

        assert totals.subtotal + totals.vat10 + totals.vat5 == totals.total
        assert totals.total == Decimal("37037.01") + Decimal("6999.93") + Decimal("0.01") + Decimal("6666.66")

    def test_zero_price_allowed(self):
        totals = compute_totals([line("0", quantity=5)])
        assert totals.total == Decimal("0.00")

    def test_is_deterministic(self):
        lines = [line("45000"), line("25000", rate=5)]
        assert compute_totals(lines) == compute_totals(lines)

    def test_accepts_generator(self):
        totals = compute_totals(line(p) for p in ("11000", "22000"))
        assert totals.total == Decimal("33000.00")

    def test_total_keeps_exact_sum(self):
        totals = compute_totals([line("0.125")])

        assert totals.total == Decimal("0.125")
        assert totals.vat10 == Decimal("0.01")
        assert totals.subtotal + totals.vat10 + totals.vat5 == totals.total

    def test_large_amounts_keep_precision(self):
        totals = compute_totals([line("1E+27", quantity=3), line("0.01", rate=5)])

        assert totals.total == Decimal("3000000000000000000000000000.01")
        assert totals.vat10 == Decimal("272727272727272727272727272.73")
        assert totals.subtotal + totals.vat10 + totals.vat5 == totals.total

    def test_single_line_invariants_hold_for_generated_carts(self):
        rng = random.Random(20240611)
        for _ in range(300):
            rate = rng.choice([5, 10])
            price = Decimal(rng.randint(0, 50_000_000)) / 100
            quantity = rng.randint(1, 500)

            totals = compute_totals([line(price, quantity, rate)])
            amount = price * quantity
            expected_vat = (amount / VAT_DIVISORS[rate]).quantize(CENTS, rounding=ROUND_HALF_UP)

            assert totals.total == amount
            assert totals.total_vat == expected_vat
            assert (totals.vat10 if rate == 10 else totals.vat5) == expected_vat
            assert totals.subtotal + totals.vat10 + totals.vat5 == totals.total


class TestInvalidLines:

    def test_negative_price(self):
        with pytest.raises(InvalidLineError):
            compute_totals([line("-1")])

    def test_zero_quantity(self):
        with pytest.raises(InvalidLineError):
            compute_totals([line("1000", quantity=0)])

    def test_negative_quantity(self):
        with pytest.raises(InvalidLineError):
            compute_totals([line("1000", quantity=-2)])

    def test_amount_out_of_range(self):
        with pytest.raises(InvalidLineError):
            compute_totals([line("1E+200")])

    def test_unknown_rate(self):
        with pytest.raises(InvalidRateError):
            compute_totals([line("1000", rate=7)])

    def test_errors_share_base_class(self):
        assert issubclass(InvalidLineError, TotalsError)
        assert issubclass(InvalidRateError, ValueError)


class TestLineTax:

    def test_vat10_divisor(self):
        assert compute_line_tax(Decimal("1100"), 10) == Decimal("100")

    def test_vat5_divisor(self):
        assert compute_line_tax(Decimal("2100"), 5) == Decimal("100")

    def test_unknown_rate(self):
        with pytest.raises(InvalidRateError):
            compute_line_tax(Decimal("100"), 0)

    def test_rates_catalog(self):
        rates = {r["rate"]: r["divisor"] for r in get_paraguay_vat_rates()}
        assert rates == {10: 11, 5: 21}


class TestTaxesEndpoints:

    def test_rates_are_public(self, client):
        response = client.get("/taxes/iva/rates")
        assert response.status_code == 200
        assert {r["rate"] for r in response.json()} == {5, 10}

    def test_totals_endpoint(self, client, auth_headers):
        response = client.post("/taxes/iva/totals", json={"lines": [
            {"unit_price": "25000", "quantity": 1, "vat_rate": 5},
            {"unit_price": "45000", "quantity": 1, "vat_rate": 10},
        ]}, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total"]) == Decimal("70000.00")
        assert Decimal(data["subtotal"]) == Decimal("64718.61")
        assert Decimal(data["total_vat"]) == Decimal("5281.39")

    def test_totals_endpoint_rejects_bad_rate(self, client, auth_headers):
        response = client.post("/taxes/iva/totals", json={"lines": [
            {"unit_price": "1000", "quantity": 1, "vat_rate": 7},
        ]}, headers=auth_headers)
        assert response.status_code == 400

    def test_totals_endpoint_rejects_huge_price(self, client, auth_headers):
        response = client.post("/taxes/iva/totals", json={"lines": [
            {"unit_price": "1E+27", "quantity": 1, "vat_rate": 10},
        ]}, headers=auth_headers)
        assert response.status_code == 422

    def test_totals_endpoint_negative_quantity(self, client, auth_headers):
        response = client.post("/taxes/iva/totals", json={"lines": [
            {"unit_price": "1000", "quantity": -2, "vat_rate": 10},
        ]}, headers=auth_headers)
        assert response.status_code == 400

    def test_totals_endpoint_requires_auth(self, client):
        response = client.post("/taxes/iva/totals", json={"lines": []})
        assert response.status_code == 401
