"""Monthly text report, the body handed to a mail / share collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List
from urllib.parse import quote

from yakstra.models.constants import EXPENSE, INCOME
from yakstra.models.transaction import Transaction
from .aggregation import filter_by_month, month_label, sum_by_type
from .currency import format_currency

RULE = "=" * 31
APP_TITLE = "Yakstra Income & Expense Tracker"
FOOTER = "Generated by Yakstra - Multi-Currency Income & Expense Tracker"


@dataclass(frozen=True)
class MonthlyReport:
    subject: str
    body: str


def generate_monthly_report(
    transactions: Iterable[Transaction], currency: str, as_of: date | None = None
) -> MonthlyReport:
    as_of = as_of or date.today()
    label = month_label(as_of)
    monthly = filter_by_month(transactions, as_of)
    income_items = [t for t in monthly if t.type == INCOME]
    expense_items = [t for t in monthly if t.type == EXPENSE]
    income = sum_by_type(monthly, INCOME)
    expenses = sum_by_type(monthly, EXPENSE)

    def fmt(amount: float) -> str:
        return format_currency(amount, currency)

    lines: List[str] = [
        f"{APP_TITLE} - {label} Report",
        "",
        "MONTHLY SUMMARY",
        RULE,
        f"Total Income:    {fmt(income)}",
        f"Total Expenses:  {fmt(expenses)}",
        f"Balance:         {fmt(income - expenses)}",
        "",
        f"INCOME DETAILS ({len(income_items)} transactions)",
        RULE,
    ]
    if income_items:
        lines.extend(f"{t.date} - {t.title}: {fmt(t.amount)}" for t in income_items)
    else:
        lines.append("No income recorded")

    lines += ["", f"EXPENSE DETAILS ({len(expense_items)} transactions)", RULE]
    if expense_items:
        lines.extend(
            f"{t.date} - {t.title} ({t.category}): {fmt(t.amount)}" for t in expense_items
        )
    else:
        lines.append("No expenses recorded")

    lines += ["", RULE, FOOTER]
    return MonthlyReport(
        subject=f"Monthly Financial Report - {label}", body="\n".join(lines)
    )


def build_mailto_link(report: MonthlyReport) -> str:
    return f"mailto:?subject={quote(report.subject, safe='')}&body={quote(report.body, safe='')}"
