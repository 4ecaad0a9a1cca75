"""Tests for base-unit conversion."""

from decimal import Decimal

import pytest

from tokenfactory.units import (
    BASE_UNIT,
    MAX_UINT256,
    InvalidAmountError,
    apply_ratio,
    from_base_units,
    parse_uint,
    to_base_units,
)


class TestToBaseUnits:
    """Tests for decimal -> base unit conversion."""

    def test_one_whole_unit(self):
        assert to_base_units("1.0") == 10**18

    def test_fractional_amount(self):
        assert to_base_units("2.5") == 2_500_000_000_000_000_000

    def test_smallest_unit(self):
        assert to_base_units("0.000000000000000001") == 1

    def test_zero(self):
        assert to_base_units("0") == 0

    def test_accepts_int_and_decimal(self):
        assert to_base_units(3) == 3 * BASE_UNIT
        assert to_base_units(Decimal("0.25")) == BASE_UNIT // 4

    def test_strips_whitespace(self):
        assert to_base_units(" 1.5 ") == 1_500_000_000_000_000_000

    def test_large_amount_is_exact(self):
        # 30+ significant digits would be rounded by the default decimal context
        assert to_base_units("123456789012345.123456789012345678") == (
            123456789012345123456789012345678
        )

    def test_too_many_decimals_rejected(self):
        with pytest.raises(InvalidAmountError, match="decimal places"):
            to_base_units("0.0000000000000000001")

    @pytest.mark.parametrize("value", ["abc", "", "1,5", "0x10"])
    def test_not_a_number_rejected(self, value):
        with pytest.raises(InvalidAmountError):
            to_base_units(value)

    @pytest.mark.parametrize("value", ["-1", "NaN", "Infinity"])
    def test_negative_and_non_finite_rejected(self, value):
        with pytest.raises(InvalidAmountError):
            to_base_units(value)

    def test_bool_rejected(self):
        with pytest.raises(InvalidAmountError):
            to_base_units(True)

    def test_overflow_rejected(self):
        with pytest.raises(InvalidAmountError, match="uint256"):
            to_base_units(str(MAX_UINT256))

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            to_base_units("nope", "tokenPrice")

    def test_field_name_in_message(self):
        with pytest.raises(InvalidAmountError, match="tokenPrice"):
            to_base_units("nope", "tokenPrice")


class TestRoundTrip:
    """from_base_units(to_base_units(p)) == p."""

    @pytest.mark.parametrize(
        "price",
        ["0", "1", "1.0", "0.7", "2.5", "0.000000000000000001", "1000000.123456789"],
    )
    def test_round_trip(self, price):
        assert from_base_units(to_base_units(price)) == Decimal(price)

    def test_from_base_units_rejects_negative(self):
        with pytest.raises(InvalidAmountError):
            from_base_units(-1)

    def test_from_base_units_rejects_non_int(self):
        with pytest.raises(InvalidAmountError):
            from_base_units("100")


class TestApplyRatio:
    """Tests for deposit ratio application."""

    def test_seventy_percent_of_one_unit(self):
        assert apply_ratio(10**18, Decimal("0.7")) == 7 * 10**17

    def test_zero_price(self):
        assert apply_ratio(0, Decimal("0.7")) == 0

    def test_rounds_toward_zero(self):
        assert apply_ratio(1, Decimal("0.7")) == 0
        assert apply_ratio(15, Decimal("0.7")) == 10

    def test_exact_for_multiples_of_ten(self):
        price = to_base_units("123.456")
        assert apply_ratio(price, Decimal("0.7")) * 10 == price * 7

    def test_negative_ratio_rejected(self):
        with pytest.raises(InvalidAmountError):
            apply_ratio(100, Decimal("-0.1"))


class TestParseUint:
    """Tests for whole-number parsing."""

    def test_integer_string(self):
        assert parse_uint("1000") == 1000

    def test_int(self):
        assert parse_uint(3) == 3

    def test_integral_decimal_string(self):
        assert parse_uint("5.0") == 5

    def test_fraction_rejected(self):
        with pytest.raises(InvalidAmountError, match="whole number"):
            parse_uint("5.5", "tokensToPurchase")

    def test_negative_rejected(self):
        with pytest.raises(InvalidAmountError):
            parse_uint("-3")


class TestExtremeExponents:
    """Exponents far outside uint256 range fail fast with InvalidAmountError."""

    def test_huge_exponent_rejected(self):
        with pytest.raises(InvalidAmountError, match="uint256"):
            to_base_units("1e999990")

    def test_tiny_exponent_rejected(self):
        with pytest.raises(InvalidAmountError, match="decimal places"):
            to_base_units("1e-1001100")

    def test_zero_with_tiny_exponent(self):
        assert to_base_units("0e-1001100") == 0

    def test_trailing_zeros_beyond_precision_are_exact(self):
        assert to_base_units("1." + "0" * 40) == 10**18

    def test_largest_amount_accepted(self):
        assert to_base_units(from_base_units(MAX_UINT256)) == MAX_UINT256

    def test_parse_uint_huge_exponent_rejected(self):
        with pytest.raises(InvalidAmountError, match="uint256"):
            parse_uint("1e99999999", "totalSupply")

    def test_parse_uint_max(self):
        assert parse_uint(str(MAX_UINT256)) == MAX_UINT256

    def test_parse_uint_exponent_form(self):
        assert parse_uint("1e3") == 1000
