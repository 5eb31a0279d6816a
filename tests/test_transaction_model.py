"""Tests for the Transaction record, amount coercion and user input model."""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from yakstra.core.errors import FormatError
from yakstra.models.transaction import Transaction, TransactionIn, coerce_amount


class TestCoerceAmount:
    def test_numbers(self):
        assert coerce_amount(5) == 5.0
        assert coerce_amount(120.5) == 120.5

    def test_numeric_strings(self):
        assert coerce_amount("120.50") == 120.5
        assert coerce_amount("  -3 ") == -3.0
        assert coerce_amount("1e3") == 1000.0
        assert coerce_amount(".5") == 0.5

    def test_leading_prefix(self):
        assert coerce_amount("42abc") == 42.0

    def test_non_numeric_is_nan(self):
        assert math.isnan(coerce_amount("abc"))
        assert math.isnan(coerce_amount(""))
        assert math.isnan(coerce_amount(None))
        assert math.isnan(coerce_amount(True))

    def test_strict_rejects(self):
        for bad in ("abc", "42abc", "", None, "nan", math.inf, "1_000", "infinity", "1e999"):
            with pytest.raises(FormatError):
                coerce_amount(bad, strict=True)
        assert coerce_amount(" 7.25 ", strict=True) == 7.25
        assert coerce_amount("-.5e1", strict=True) == -5.0


class TestTransaction:
    def test_defaults(self):
        t = Transaction(title="x", amount=1)
        assert t.type == "expense"
        assert t.currency == "USD"
        assert t.description == ""
        assert t.id.isdigit()

    def test_none_values_fall_back(self):
        t = Transaction.from_record(
            {"id": None, "title": "x", "amount": "2", "description": None, "type": None, "currency": None}
        )
        assert t.id
        assert t.description == ""
        assert t.type == "expense"
        assert t.currency == "USD"

    def test_date_objects_become_iso_text(self):
        assert Transaction(date=date(2024, 1, 5)).date == "2024-01-05"

    def test_records_are_frozen(self):
        t = Transaction(id="1", title="x", amount=1)
        with pytest.raises(ValidationError):
            t.amount = 2  # type: ignore[misc]

    def test_alias_and_field_name_accepted(self):
        a = Transaction.from_record({"id": "1", "paymentMethod": "Cash"})
        b = Transaction(id="1", payment_method="Cash")
        assert a.payment_method == b.payment_method == "Cash"
        assert a.to_record()["paymentMethod"] == "Cash"


class TestTransactionIn:
    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            TransactionIn(title="   ", amount=1, category="Others", date="2024-01-01")

    def test_nan_amount_rejected(self):
        with pytest.raises(ValidationError):
            TransactionIn(title="x", amount=math.nan, category="Others", date="2024-01-01")

    def test_bad_currency_rejected(self):
        with pytest.raises(ValidationError):
            TransactionIn(title="x", amount=1, category="Others", date="2024-01-01", currency="US")

    def test_to_transaction_uses_fallback_currency(self):
        payload = TransactionIn(
            title="Rent",
            amount=900,
            category="Rental",
            date="2024-01-01",
            paymentMethod="Bank",
            type="income",
        )
        t = payload.to_transaction(id="abc", currency="EUR")
        assert t.id == "abc"
        assert t.currency == "EUR"
        assert t.date == "2024-01-01"
        assert t.payment_method == "Bank"
        assert t.type == "income"
