"""
AddrNotes Backend — Validator Unit Tests
==========================================

What:  Tests for field extraction: presence, nulls, integers, signs, addresses.
Why:   The validator is the only barrier between raw JSON and the store.

Test Strategy:
    ✅ Mandatory / optional / null handling in extract_field
    ✅ Integer text round-trip (accepts "12", rejects "12.5", "12abc", "007")
    ✅ Address length bounds (26..35) and Base58 alphabet
    ✅ Negative cost/value rejected, zero accepted
    ✅ cost/value capped at 2**53 - 1
"""

import pytest

from addrnotes.exceptions import (
    InvalidAddressCharsError,
    InvalidAddressLengthError,
    MissingFieldError,
    NegativeValueError,
    NotAnIntegerError,
    NotAStringError,
    NullFieldError,
    ValidationError,
    ValueTooLargeError,
)
from addrnotes.services.validator import (
    MAX_AMOUNT,
    FieldOptions,
    extract_address,
    extract_cost,
    extract_field,
    extract_integer_field,
    extract_text_field,
    extract_value,
)

from conftest import ADDR_A


class TestExtractField:
    """Tests for presence and null rules."""

    def test_returns_raw_value(self):
        assert extract_field({"status": "paid"}, "status") == "paid"

    def test_absent_optional_returns_none(self):
        assert extract_field({}, "status") is None

    def test_absent_mandatory_raises(self):
        with pytest.raises(MissingFieldError, match='"costUnit" property exists'):
            extract_field({}, "costUnit", FieldOptions(mandatory=True))

    def test_missing_message_uses_display_name(self):
        with pytest.raises(MissingFieldError, match="The address is not provided"):
            extract_field({}, "addr", FieldOptions(display_name="address", mandatory=True))

    def test_null_allowed_by_default(self):
        assert extract_field({"status": None}, "status") is None

    def test_null_disallowed_raises(self):
        with pytest.raises(NullFieldError, match="may not be null"):
            extract_field({"status": None}, "status", FieldOptions(disallow_null=True))

    def test_falsy_values_are_kept(self):
        assert extract_field({"cost": 0}, "cost") == 0
        assert extract_field({"status": ""}, "status") == ""

    def test_errors_are_validation_errors_with_field(self):
        with pytest.raises(ValidationError) as exc_info:
            extract_field({}, "valueUnit", FieldOptions(mandatory=True))
        assert exc_info.value.field == "valueUnit"
        assert exc_info.value.context == {"field": "valueUnit"}


class TestExtractIntegerField:
    """Tests for the integer text round-trip rule."""

    @pytest.mark.parametrize("raw, expected", [
        (12, 12),
        ("12", 12),
        ("  12 ", 12),
        ("0", 0),
        ("-7", -7),
        (12.0, 12),
        (10 ** 15, 10 ** 15),
    ])
    def test_accepts_integers(self, raw, expected):
        assert extract_integer_field({"n": raw}, "n") == expected

    @pytest.mark.parametrize("raw", [
        "12.5", 12.5, "12abc", "abc", "", "007", "+5", "1_000", "1e3", True, False, [1], {"a": 1},
    ])
    def test_rejects_non_integers(self, raw):
        with pytest.raises(NotAnIntegerError, match="n is not an integer"):
            extract_integer_field({"n": raw}, "n")

    def test_absent_returns_none(self):
        assert extract_integer_field({}, "n") is None

    def test_null_rejected_when_disallowed(self):
        with pytest.raises(NullFieldError):
            extract_integer_field({"n": None}, "n", FieldOptions(disallow_null=True))

    def test_message_shows_both_forms(self):
        with pytest.raises(NotAnIntegerError) as exc_info:
            extract_integer_field({"cost": "12abc"}, "cost")
        assert exc_info.value.message == 'cost is not an integer ("NaN" != "12abc").'

        with pytest.raises(NotAnIntegerError) as exc_info:
            extract_integer_field({"cost": "007"}, "cost")
        assert exc_info.value.message == 'cost is not an integer ("7" != "007").'


class TestExtractTextField:

    def test_accepts_string(self):
        assert extract_text_field({"costUnit": "USD"}, "costUnit") == "USD"

    @pytest.mark.parametrize("raw", [5, 1.5, True, ["USD"], {"unit": "USD"}])
    def test_rejects_other_types(self, raw):
        with pytest.raises(NotAStringError, match="must be a string"):
            extract_text_field({"costUnit": raw}, "costUnit")


class TestExtractAddress:
    """Tests for Base58 address validation."""

    def test_accepts_valid_address_unchanged(self):
        assert extract_address({"addr": ADDR_A}) == ADDR_A

    @pytest.mark.parametrize("length", [26, 30, 35])
    def test_accepts_lengths_inside_bounds(self, length):
        addr = ("123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz" * 2)[:length]
        assert extract_address({"addr": addr}) == addr

    @pytest.mark.parametrize("length", [0, 1, 25, 36, 50])
    def test_rejects_lengths_outside_bounds(self, length):
        with pytest.raises(InvalidAddressLengthError, match="invalid length"):
            extract_address({"addr": "1" * length})

    @pytest.mark.parametrize("bad_char", ["0", "O", "I", "l", "-", " ", "_", "é"])
    def test_rejects_characters_outside_base58(self, bad_char):
        addr = ADDR_A[:10] + bad_char + ADDR_A[11:]
        with pytest.raises(InvalidAddressCharsError, match="invalid characters"):
            extract_address({"addr": addr})

    def test_length_is_checked_before_characters(self):
        with pytest.raises(InvalidAddressLengthError):
            extract_address({"addr": "0" * 40})

    def test_missing_address(self):
        with pytest.raises(MissingFieldError, match="The address is not provided"):
            extract_address({})

    def test_null_address(self):
        with pytest.raises(NullFieldError, match="The address may not be null"):
            extract_address({"addr": None})

    def test_non_string_address(self):
        with pytest.raises(NotAStringError):
            extract_address({"addr": 12345678901234567890123456789})


class TestCostAndValue:

    @pytest.mark.parametrize("extract, name", [(extract_cost, "cost"), (extract_value, "value")])
    def test_zero_and_positive_accepted(self, extract, name):
        assert extract({name: 0}) == 0
        assert extract({name: "42"}) == 42

    @pytest.mark.parametrize("extract, name", [(extract_cost, "cost"), (extract_value, "value")])
    def test_negative_rejected(self, extract, name):
        with pytest.raises(NegativeValueError, match=f"The {name} cannot be negative."):
            extract({name: -1})

    @pytest.mark.parametrize("extract, name", [(extract_cost, "cost"), (extract_value, "value")])
    def test_optional_but_not_null(self, extract, name):
        assert extract({}) is None
        with pytest.raises(NullFieldError):
            extract({name: None})

    @pytest.mark.parametrize("extract, name", [(extract_cost, "cost"), (extract_value, "value")])
    def test_largest_amount_accepted(self, extract, name):
        assert extract({name: MAX_AMOUNT}) == 2 ** 53 - 1
        assert extract({name: str(MAX_AMOUNT)}) == MAX_AMOUNT

    @pytest.mark.parametrize("extract, name", [(extract_cost, "cost"), (extract_value, "value")])
    @pytest.mark.parametrize("raw", [2 ** 53, 2 ** 63, 10 ** 30, "9007199254740993"])
    def test_amounts_above_the_cap_rejected(self, extract, name, raw):
        expected = f"The {name} cannot be greater than 9007199254740991."
        with pytest.raises(ValueTooLargeError, match=expected) as exc_info:
            extract({name: raw})
        assert exc_info.value.field == name
