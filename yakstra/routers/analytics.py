from __future__ import annotations

import math
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from yakstra.core.config import Settings
from yakstra.models.constants import EXPENSE, category_icon
from yakstra.services.aggregation import (
    compute_category_breakdown,
    compute_monthly_summary,
    filter_by_month,
    parse_month_filter,
    top_categories,
    category_totals,
)
from yakstra.services.chart import (
    CATEGORY_COLORS,
    DEFAULT_SLICE_COLOR,
    INCOME_EXPENSE_COLORS,
    PieLayout,
    layout_pie,
)
from yakstra.services.currency import format_currency
from yakstra.services.money import round2
from yakstra.services.ledger import Ledger
from yakstra.services.report import build_mailto_link, generate_monthly_report

router = APIRouter(prefix="/analytics", tags=["analytics"])

TypeParam = Literal["income", "expense"]


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _json_amount(value: float) -> Optional[float]:
    return round2(value) if math.isfinite(value) else None


def _as_of(month: Optional[str]) -> date:
    if not month:
        return date.today()
    try:
        year, month_no = parse_month_filter(month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return date(year, month_no, 1)


class MonthlySummaryOut(BaseModel):
    month: str
    currency: str
    income: Optional[float]
    expenses: Optional[float]
    balance: Optional[float]
    income_count: int
    expense_count: int
    formatted_income: str
    formatted_expenses: str
    formatted_balance: str


class CategoryShareOut(BaseModel):
    category: str
    total: Optional[float]
    percent: Optional[float]
    formatted_total: str
    color: str
    icon: str


class TopCategoryOut(BaseModel):
    category: str
    total: Optional[float]
    formatted_total: str
    icon: str


class SliceOut(BaseModel):
    label: str
    value: float
    start_angle: float
    end_angle: float
    color: str


class PieLayoutOut(BaseModel):
    center_x: float
    center_y: float
    radius: float
    total: Optional[float]
    no_data: bool
    slices: List[SliceOut]


class ReportOut(BaseModel):
    subject: str
    body: str
    mailto: str


def _layout_out(layout: PieLayout) -> PieLayoutOut:
    return PieLayoutOut(
        center_x=layout.center_x,
        center_y=layout.center_y,
        radius=layout.radius,
        total=_json_amount(layout.total),
        no_data=layout.no_data,
        slices=[
            SliceOut(
                label=s.label,
                value=s.value,
                start_angle=s.start_angle,
                end_angle=s.end_angle,
                color=s.color,
            )
            for s in layout.slices
        ],
    )


@router.get("/summary", response_model=MonthlySummaryOut, summary="Income, expenses and balance for a month")
async def monthly_summary(
    month: Optional[str] = Query(None, description="YYYY-MM (defaults to current month)"),
    ledger: Ledger = Depends(get_ledger),
):
    summary = compute_monthly_summary(ledger.transactions, _as_of(month))
    cur = ledger.currency
    return MonthlySummaryOut(
        month=summary.month,
        currency=cur,
        income=_json_amount(summary.income),
        expenses=_json_amount(summary.expenses),
        balance=_json_amount(summary.balance),
        income_count=summary.income_count,
        expense_count=summary.expense_count,
        formatted_income=format_currency(summary.income, cur),
        formatted_expenses=format_currency(summary.expenses, cur),
        formatted_balance=format_currency(summary.balance, cur),
    )


@router.get("/categories", response_model=List[CategoryShareOut], summary="Category totals with percentage share")
async def category_breakdown(
    type: TypeParam = Query(EXPENSE),
    month: Optional[str] = Query(None, description="YYYY-MM; all time when omitted"),
    ledger: Ledger = Depends(get_ledger),
):
    rows = ledger.transactions
    if month:
        rows = filter_by_month(rows, _as_of(month))
    return [
        CategoryShareOut(
            category=s.category,
            total=_json_amount(s.total),
            percent=_json_amount(s.percent),
            formatted_total=format_currency(s.total, ledger.currency),
            color=CATEGORY_COLORS.get(s.category, DEFAULT_SLICE_COLOR),
            icon=category_icon(s.category, type),
        )
        for s in compute_category_breakdown(rows, type)
    ]


@router.get("/top-categories", response_model=List[TopCategoryOut], summary="Largest categories by total")
async def top_category_ranking(
    type: TypeParam = Query(EXPENSE),
    limit: Optional[int] = Query(None, ge=1, le=50),
    ledger: Ledger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
):
    totals = category_totals(ledger.transactions, type)
    ranked = top_categories(totals, limit or settings.top_categories_limit)
    return [
        TopCategoryOut(
            category=c,
            total=_json_amount(amount),
            formatted_total=format_currency(amount, ledger.currency),
            icon=category_icon(c, type),
        )
        for c, amount in ranked
    ]


@router.get("/charts/income-expense", response_model=PieLayoutOut, summary="Pie layout of monthly income vs expenses")
async def income_expense_chart(
    month: Optional[str] = Query(None, description="YYYY-MM (defaults to current month)"),
    width: Optional[int] = Query(None, gt=0),
    height: Optional[int] = Query(None, gt=0),
    ledger: Ledger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
):
    summary = compute_monthly_summary(ledger.transactions, _as_of(month))
    data = {"Income": summary.income, "Expenses": summary.expenses}
    try:
        layout = layout_pie(
            data,
            width or settings.chart_width,
            height or settings.chart_height,
            colors=INCOME_EXPENSE_COLORS,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _layout_out(layout)


@router.get("/charts/categories", response_model=PieLayoutOut, summary="Pie layout of category totals")
async def category_chart(
    type: TypeParam = Query(EXPENSE),
    month: Optional[str] = Query(None, description="YYYY-MM; all time when omitted"),
    width: Optional[int] = Query(None, gt=0),
    height: Optional[int] = Query(None, gt=0),
    ledger: Ledger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
):
    rows = ledger.transactions
    if month:
        rows = filter_by_month(rows, _as_of(month))
    try:
        layout = layout_pie(
            category_totals(rows, type),
            width or settings.chart_width,
            height or settings.chart_height,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return _layout_out(layout)


@router.get("/report", response_model=ReportOut, summary="Monthly text report")
async def monthly_report(
    month: Optional[str] = Query(None, description="YYYY-MM (defaults to current month)"),
    ledger: Ledger = Depends(get_ledger),
):
    report = generate_monthly_report(ledger.transactions, ledger.currency, _as_of(month))
    return ReportOut(subject=report.subject, body=report.body, mailto=build_mailto_link(report))
