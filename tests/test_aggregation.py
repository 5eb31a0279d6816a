"""Tests for monthly aggregation, category statistics and list filters."""

import math
from datetime import date

import pytest

from yakstra.models.transaction import Transaction
from yakstra.services.aggregation import (
    category_totals,
    compute_category_breakdown,
    compute_monthly_summary,
    filter_by_month,
    filter_transactions,
    parse_transaction_date,
    percentage_share,
    recent_transactions,
    sum_by_type,
    top_categories,
)


def tx(id, amount, category="Others", d="2024-01-10", type="expense"):
    return Transaction(id=id, title=f"t{id}", amount=amount, category=category, date=d, type=type)


class TestMonthlySummary:
    def test_january_scenario(self, january_transactions):
        summary = compute_monthly_summary(january_transactions, date(2024, 1, 31))
        assert summary.month == "January 2024"
        assert summary.income == 5000
        assert summary.expenses == pytest.approx(120.50)
        assert summary.balance == pytest.approx(4879.50)
        assert summary.income_count == 1
        assert summary.expense_count == 1

    def test_other_month_is_empty(self, january_transactions):
        summary = compute_monthly_summary(january_transactions, date(2024, 2, 1))
        assert (summary.income, summary.expenses, summary.balance) == (0.0, 0.0, 0.0)

    def test_same_month_other_year_excluded(self):
        rows = [tx("1", 10, d="2023-01-10")]
        assert filter_by_month(rows, date(2024, 1, 1)) == []

    def test_balance_identity_and_sign(self):
        rows = [
            tx("1", 100, type="income"),
            tx("2", 30),
            tx("3", 250),
        ]
        summary = compute_monthly_summary(rows, date(2024, 1, 1))
        assert summary.balance == sum_by_type(rows, "income") - sum_by_type(rows, "expense")
        assert summary.balance < 0

    def test_unparseable_dates_never_match(self):
        rows = [tx("1", 10, d="not-a-date"), tx("2", 5, d="")]
        assert filter_by_month(rows, date(2024, 1, 1)) == []

    def test_empty_input(self):
        summary = compute_monthly_summary([], date(2024, 1, 1))
        assert summary.income == 0.0
        assert summary.expenses == 0.0
        assert category_totals([]) == {}

    def test_nan_amount_propagates(self):
        rows = [tx("1", "abc"), tx("2", 10)]
        assert math.isnan(sum_by_type(rows, "expense"))


class TestCategoryStatistics:
    def test_totals_keep_encounter_order(self):
        rows = [
            tx("1", 10, "Travel"),
            tx("2", 5, "Shopping"),
            tx("3", 7, "Travel"),
            tx("4", 100, "Salary", type="income"),
        ]
        assert list(category_totals(rows).items()) == [("Travel", 17.0), ("Shopping", 5.0)]
        assert category_totals(rows, "income") == {"Salary": 100.0}

    def test_top_categories_descending_and_stable(self):
        totals = {"A": 10.0, "B": 30.0, "C": 10.0, "D": 5.0}
        assert top_categories(totals) == [("B", 30.0), ("A", 10.0), ("C", 10.0), ("D", 5.0)]
        assert top_categories(totals, limit=2) == [("B", 30.0), ("A", 10.0)]

    def test_percentage_share(self):
        assert percentage_share(1, 3) == 33.3
        assert percentage_share(2, 3) == 66.7
        assert percentage_share(5, 0) == 0.0

    def test_breakdown_with_all_zero_amounts(self):
        rows = [tx("1", 0, "Travel"), tx("2", 0, "Shopping")]
        shares = compute_category_breakdown(rows)
        assert [s.percent for s in shares] == [0.0, 0.0]

    def test_breakdown_percentages(self):
        rows = [tx("1", 30, "Travel"), tx("2", 70, "Shopping")]
        shares = compute_category_breakdown(rows)
        assert [(s.category, s.percent) for s in shares] == [("Travel", 30.0), ("Shopping", 70.0)]


class TestListViews:
    rows = [
        tx("1", 1, "Travel", "2024-01-05"),
        tx("2", 2, "Salary", "2024-02-01", "income"),
        tx("3", 3, "Travel", "2024-01-20"),
        tx("4", 4, "Others", "bad-date"),
        tx("5", 5, "Travel", "2024-01-20"),
    ]

    def test_newest_first_with_stable_ties(self):
        ids = [t.id for t in filter_transactions(self.rows)]
        assert ids == ["2", "3", "5", "1", "4"]

    def test_filters_combine(self):
        result = filter_transactions(self.rows, type_="expense", category="Travel", month="2024-01")
        assert [t.id for t in result] == ["3", "5", "1"]

    def test_bad_month_filter(self):
        with pytest.raises(ValueError):
            filter_transactions(self.rows, month="January")

    def test_recent(self):
        assert [t.id for t in recent_transactions(self.rows, limit=2)] == ["2", "3"]


def test_parse_transaction_date():
    assert parse_transaction_date("2024-01-15") == date(2024, 1, 15)
    assert parse_transaction_date("2024-13-01") is None
    assert parse_transaction_date("") is None
