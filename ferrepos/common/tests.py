"""
Tests de validadores paraguayos: DV del RUC y teléfonos
"""

import pytest

from ferrepos.common.validators import (
    compute_check_digit, format_ruc, split_ruc, validate_ruc,
    validate_paraguay_phone, format_paraguay_phone
)


class TestCheckDigit:

    @pytest.mark.parametrize("base,expected", [
        ("80069563", 1),
        ("44444401", 7),
        ("3799439", 5),
        ("1234567", 9),
        ("1", 9),
    ])
    def test_known_values(self, base, expected):
        assert compute_check_digit(base) == expected

    def test_remainder_zero_maps_to_zero(self):
        # 11 - 0 = 11 -> 0
        assert compute_check_digit("0") == 0

    def test_remainder_one_maps_to_one(self):
        # 6 * 2 = 12, 12 % 11 = 1, 11 - 1 = 10 -> 1
        assert compute_check_digit("6") == 1

    def test_ignores_separators(self):
        assert compute_check_digit("80.069.563") == compute_check_digit("80069563")

    @pytest.mark.parametrize("base", ["", None, "abc", "-.-"])
    def test_no_digits_is_none(self, base):
        assert compute_check_digit(base) is None

    def test_result_is_single_digit(self):
        for n in range(1, 500):
            assert 0 <= compute_check_digit(str(n * 7919)) <= 9


class TestRucHelpers:

    def test_format_ruc(self):
        assert format_ruc("80069563") == "80069563-1"
        assert format_ruc("44.444.401") == "44444401-7"

    def test_format_ruc_without_digits(self):
        assert format_ruc("") == ""

    def test_split_ruc(self):
        assert split_ruc("80069563-1") == ("80069563", "1")
        assert split_ruc("80069563") == ("80069563", None)

    def test_validate_ruc(self):
        assert validate_ruc("80069563-1")
        assert validate_ruc("44444401-7")
        assert not validate_ruc("80069563-2")
        assert not validate_ruc("80069563")
        assert not validate_ruc("-1")


class TestPhones:

    @pytest.mark.parametrize("phone", ["0981123456", "+595981123456", "595981123456", "021 123456"])
    def test_valid_phones(self, phone):
        assert validate_paraguay_phone(phone)

    @pytest.mark.parametrize("phone", ["123", "000-0000", "+1 555 1234"])
    def test_invalid_phones(self, phone):
        assert not validate_paraguay_phone(phone)

    def test_format_mobile(self):
        assert format_paraguay_phone("0981 123 456") == "+595981123456"

    def test_format_landline(self):
        assert format_paraguay_phone("(021) 123-456") == "+59521123456"

    def test_format_keeps_invalid(self):
        assert format_paraguay_phone("000-0000") == "000-0000"
