from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from yakstra.models.constants import EXPENSE, INCOME
from yakstra.models.transaction import Transaction
from yakstra.services.money import round1

"""Aggregation helpers over a transaction snapshot.

Scopes implemented:
    - Monthly filter and income / expense / balance summary
    - Category totals, top-N ranking and percentage shares
    - List-view filtering (type, category, YYYY-MM month) and recent items

Design notes:
    Every function is pure over the sequence it is given; callers pass the
    Ledger snapshot. Amounts are summed as-is, so a NaN amount surfaces as a
    NaN total instead of being skipped.
"""


def parse_transaction_date(value: str) -> Optional[date]:
    """Return the calendar date of a ``YYYY-MM-DD`` string, None if unparseable."""
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except (ValueError, AttributeError):
        return None


def month_label(as_of: date) -> str:
    return as_of.strftime("%B %Y")


# ---------------- Monthly summary -----------------
def filter_by_month(
    transactions: Iterable[Transaction], as_of: date | None = None
) -> List[Transaction]:
    """Transactions dated in the same calendar month and year as ``as_of``."""
    as_of = as_of or date.today()
    selected: List[Transaction] = []
    for t in transactions:
        d = parse_transaction_date(t.date)
        if d is not None and d.year == as_of.year and d.month == as_of.month:
            selected.append(t)
    return selected


def sum_by_type(transactions: Iterable[Transaction], type_: str) -> float:
    return sum((t.amount for t in transactions if t.type == type_), 0.0)


def compute_balance(income: float, expenses: float) -> float:
    return income - expenses


@dataclass(frozen=True)
class MonthlySummary:
    month: str
    income: float
    expenses: float
    balance: float
    income_count: int
    expense_count: int


def compute_monthly_summary(
    transactions: Iterable[Transaction], as_of: date | None = None
) -> MonthlySummary:
    as_of = as_of or date.today()
    monthly = filter_by_month(transactions, as_of)
    income = sum_by_type(monthly, INCOME)
    expenses = sum_by_type(monthly, EXPENSE)
    return MonthlySummary(
        month=month_label(as_of),
        income=income,
        expenses=expenses,
        balance=compute_balance(income, expenses),
        income_count=sum(1 for t in monthly if t.type == INCOME),
        expense_count=sum(1 for t in monthly if t.type == EXPENSE),
    )


# ---------------- Category breakdown -----------------
def category_totals(
    transactions: Iterable[Transaction], type_: str = EXPENSE
) -> Dict[str, float]:
    """Sum amounts per category; keys keep first-encounter order."""
    totals: Dict[str, float] = {}
    for t in transactions:
        if t.type != type_:
            continue
        totals[t.category] = totals.get(t.category, 0.0) + t.amount
    return totals


def top_categories(totals: Dict[str, float], limit: int = 5) -> List[Tuple[str, float]]:
    """Largest totals first; ties keep encounter order (sorted() is stable)."""
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def percentage_share(amount: float, total: float) -> float:
    if total == 0:
        return 0.0
    return round1(amount / total * 100)


@dataclass(frozen=True)
class CategoryShare:
    category: str
    total: float
    percent: float


def compute_category_breakdown(
    transactions: Iterable[Transaction], type_: str = EXPENSE
) -> List[CategoryShare]:
    totals = category_totals(transactions, type_)
    grand = sum(totals.values(), 0.0)
    return [
        CategoryShare(category=c, total=amount, percent=percentage_share(amount, grand))
        for c, amount in totals.items()
    ]


# ---------------- List views -----------------
def _newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    # Unparseable dates sort last; equal dates keep collection order.
    return sorted(
        transactions,
        key=lambda t: parse_transaction_date(t.date) or date.min,
        reverse=True,
    )


def parse_month_filter(month: str) -> Tuple[int, int]:
    """Parse a ``YYYY-MM`` filter value into (year, month)."""
    try:
        parsed = datetime.strptime(month, "%Y-%m")
    except ValueError:
        raise ValueError(f"month filter must be YYYY-MM, got '{month}'") from None
    return parsed.year, parsed.month


def filter_transactions(
    transactions: Sequence[Transaction],
    type_: str | None = None,
    category: str | None = None,
    month: str | None = None,
) -> List[Transaction]:
    selected = list(transactions)
    if type_:
        selected = [t for t in selected if t.type == type_]
    if category:
        selected = [t for t in selected if t.category == category]
    if month:
        year, month_no = parse_month_filter(month)
        selected = filter_by_month(selected, date(year, month_no, 1))
    return _newest_first(selected)


def recent_transactions(transactions: Sequence[Transaction], limit: int = 5) -> List[Transaction]:
    return _newest_first(transactions)[:limit]
