"""Tests for the CSV codec - line splitting, row mapping and export layout."""

import math

import pytest

from yakstra.core.errors import FormatError
from yakstra.models.transaction import Transaction
from yakstra.services.csv_codec import (
    decode_csv,
    encode_csv,
    format_number,
    split_csv_line,
)

HEADER = "ID,Type,Title,Amount,Currency,Category,Date,Payment Method,Description"


class TestSplitCsvLine:
    """Quote-aware comma splitting."""

    def test_plain_fields(self):
        assert split_csv_line("a,b,c") == ["a", "b", "c"]

    def test_comma_inside_quotes_does_not_split(self):
        assert split_csv_line('"Food, drinks",12') == ["Food, drinks", "12"]

    def test_fields_are_trimmed(self):
        assert split_csv_line('  a , "b " ,c\r') == ["a", "b", "c"]

    def test_empty_fields_kept(self):
        assert split_csv_line('"",x,') == ["", "x", ""]

    def test_embedded_quote_only_toggles_state(self):
        # No unescaping: the quote characters vanish and the comma after the
        # unbalanced quote stays inside the field.
        assert split_csv_line('"say "hi", there",x') == ["say hi, there", "x"]


class TestEncodeCsv:
    def test_header_and_quoted_cells(self, january_transactions):
        text = encode_csv(january_transactions)
        lines = text.split("\n")
        assert lines[0] == HEADER
        assert lines[1] == (
            '"1","income","Salary","5000","USD","Salary","2024-01-15","Bank Transfer",""'
        )
        assert lines[2] == (
            '"2","expense","Groceries","120.5","USD","Food & Dining","2024-01-20","Card",""'
        )
        assert text.endswith("\n")

    def test_empty_list_is_header_only(self):
        assert encode_csv([]) == HEADER + "\n"

    def test_number_rendering(self):
        assert format_number(5000.0) == "5000"
        assert format_number(120.5) == "120.5"
        assert format_number(-3.0) == "-3"
        assert format_number(math.nan) == "NaN"


class TestDecodeCsv:
    def test_positional_mapping(self):
        text = HEADER + '\n"42","income","Bonus","250.75","EUR","Salary","2024-02-01","Bank","Q4"\n'
        [t] = decode_csv(text)
        assert t.id == "42"
        assert t.type == "income"
        assert t.title == "Bonus"
        assert t.amount == 250.75
        assert t.currency == "EUR"
        assert t.category == "Salary"
        assert t.date == "2024-02-01"
        assert t.payment_method == "Bank"
        assert t.description == "Q4"

    def test_short_row_is_dropped_without_error(self):
        text = "\n".join(
            [
                HEADER,
                "a,b,c,d,e",
                '"7","expense","Bus","2.5","USD","Transportation","2024-03-03","Cash",""',
            ]
        )
        result = decode_csv(text)
        assert [t.id for t in result] == ["7"]

    def test_header_only_is_format_error(self):
        with pytest.raises(FormatError):
            decode_csv(HEADER + "\n")

    def test_blank_content_is_format_error(self):
        with pytest.raises(FormatError):
            decode_csv("\n   \n")

    def test_blank_lines_ignored(self):
        text = HEADER + '\n\n"1","expense","x","1","USD","Others","2024-01-01","Cash",""\n\n'
        assert len(decode_csv(text)) == 1

    def test_missing_type_and_currency_get_defaults(self):
        text = HEADER + '\n"1","","Coffee","3","","Food & Dining","2024-01-02","Cash",""'
        [t] = decode_csv(text)
        assert t.type == "expense"
        assert t.currency == "USD"

    def test_invalid_type_falls_back_to_expense(self):
        text = HEADER + '\n"1","transfer","Move","3","USD","Others","2024-01-02","Cash",""'
        assert decode_csv(text)[0].type == "expense"

    def test_non_numeric_amount_becomes_nan(self):
        text = HEADER + '\n"1","expense","Bad","abc","USD","Others","2024-01-02","Cash",""'
        assert math.isnan(decode_csv(text)[0].amount)

    def test_numeric_prefix_is_honored(self):
        text = HEADER + '\n"1","expense","Odd","12.5usd","USD","Others","2024-01-02","Cash",""'
        assert decode_csv(text)[0].amount == 12.5

    def test_strict_mode_rejects_non_numeric_amount(self):
        text = HEADER + '\n"1","expense","Bad","abc","USD","Others","2024-01-02","Cash",""'
        with pytest.raises(FormatError, match="row 2"):
            decode_csv(text, strict=True)

    def test_crlf_line_endings(self):
        text = HEADER + '\r\n"1","income","Pay","10","USD","Salary","2024-01-02","Bank","note"\r\n'
        [t] = decode_csv(text)
        assert t.description == "note"


def test_round_trip_preserves_fields(january_transactions):
    decoded = decode_csv(encode_csv(january_transactions))
    assert decoded == january_transactions


def test_round_trip_keeps_description():
    original = [
        Transaction(
            id="99",
            title="Train",
            amount=17.25,
            category="Travel",
            date="2024-05-05",
            payment_method="Card",
            description="return ticket",
            type="expense",
            currency="GBP",
        )
    ]
    assert decode_csv(encode_csv(original)) == original
