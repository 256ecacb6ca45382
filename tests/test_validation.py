"""
Tests for field validators and input sanitization
"""

from datetime import date
from decimal import Decimal

import pytest

from khata.core.exceptions import ValidationException
from khata.core.responses import format_currency, pagination_meta
from khata.core.validation import (
    FieldError,
    missing_fields,
    require_fields,
    sanitize,
    validate_amount,
    validate_date,
    validate_email,
    validate_password,
    validate_phone,
    validate_transaction_type,
)


class TestRequiredFields:

    def test_missing_null_and_blank(self):
        data = {"name": "  ", "email": None, "phone": "+911234567"}
        assert missing_fields(data, ("name", "email", "phone", "password")) == ["name", "email", "password"]

    def test_require_fields_lists_every_field(self):
        with pytest.raises(ValidationException) as exc_info:
            require_fields({}, ("name", "phone"))
        assert exc_info.value.status_code == 400
        assert exc_info.value.details == [
            {"field": "name", "message": "Field 'name' is required"},
            {"field": "phone", "message": "Field 'phone' is required"},
        ]

    def test_zero_is_present(self):
        assert missing_fields({"amount": 0}, ("amount",)) == []


class TestFieldValidators:

    @pytest.mark.parametrize("value", ["ravi@mailbox.in", "a.b+c@shop.co.in"])
    def test_valid_email(self, value):
        assert validate_email(value) == value

    @pytest.mark.parametrize("value", ["ravi", "ravi@", "@mailbox.in", "ravi@@mailbox.in"])
    def test_invalid_email(self, value):
        with pytest.raises(FieldError) as exc_info:
            validate_email(value)
        assert exc_info.value.message == "Invalid email format"

    @pytest.mark.parametrize("value", ["+919876543210", "9876543210", "12"])
    def test_valid_phone(self, value):
        assert validate_phone(value) == value

    @pytest.mark.parametrize("value", ["0123456", "+0", "98765-43210", "1", "+1234567890123456"])
    def test_invalid_phone(self, value):
        with pytest.raises(FieldError):
            validate_phone(value)

    def test_password_length(self):
        assert validate_password("abcdef") == "abcdef"
        with pytest.raises(FieldError) as exc_info:
            validate_password("abcde")
        assert exc_info.value.message == "Password must be at least 6 characters long"

    @pytest.mark.parametrize("value, expected", [
        (0, Decimal("0")),
        ("12.50", Decimal("12.50")),
        (99.5, Decimal("99.5")),
        ("10.100", Decimal("10.100")),
        ("9999999999.99", Decimal("9999999999.99")),
    ])
    def test_valid_amount(self, value, expected):
        assert validate_amount(value) == expected

    @pytest.mark.parametrize("value", [-1, "-0.01", "abc", None, True, "NaN", "Infinity", "10.125", "1e20", 10000000000])
    def test_invalid_amount(self, value):
        with pytest.raises(FieldError) as exc_info:
            validate_amount(value)
        assert exc_info.value.message == "Amount must be a positive number"

    def test_amount_label(self):
        with pytest.raises(FieldError) as exc_info:
            validate_amount(-5, field="credit_limit", label="Credit limit")
        assert exc_info.value.field == "credit_limit"
        assert exc_info.value.message == "Credit limit must be a positive number"

    def test_valid_date(self):
        assert validate_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2023-02-29", "2024-2-1", "01-02-2024", "2024-01-01T00:00:00", 20240101])
    def test_invalid_date(self, value):
        with pytest.raises(FieldError) as exc_info:
            validate_date(value)
        assert exc_info.value.message == "Invalid date format. Use YYYY-MM-DD"

    def test_transaction_type(self):
        assert validate_transaction_type("credit") == "credit"
        assert validate_transaction_type("debit") == "debit"
        with pytest.raises(FieldError):
            validate_transaction_type("CREDIT")


class TestSanitize:

    def test_strips_tags_and_trims(self):
        assert sanitize("  <b>Ravi</b>  ") == "Ravi"

    def test_escapes_remaining_markup(self):
        assert sanitize('Tom & "Jerry"') == "Tom &amp; &quot;Jerry&quot;"

    def test_nested_structures(self):
        data = {"name": "<i>x</i>", "tags": [" a ", 3], "n": None}
        assert sanitize(data) == {"name": "x", "tags": ["a", 3], "n": None}


class TestResponseHelpers:

    def test_format_currency(self):
        assert format_currency(1234.5) == "₹1,234.50"
        assert format_currency(-40) == "-₹40.00"
        assert format_currency(None) == "₹0.00"
        assert format_currency(10, symbol="$") == "$10.00"

    def test_pagination_meta(self):
        meta = pagination_meta(total=25, page=3, limit=10)
        assert meta == {
            "current_page": 3,
            "per_page": 10,
            "total": 25,
            "total_pages": 3,
            "has_next": False,
            "has_prev": True,
        }

    def test_pagination_meta_empty(self):
        meta = pagination_meta(total=0, page=1, limit=20)
        assert meta["total_pages"] == 0
        assert meta["has_next"] is False
        assert meta["has_prev"] is False
