from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from yakstra.models.constants import (
    EXPENSE,
    INCOME,
    THEMES,
    all_categories,
    categories_for,
)
from yakstra.services.currency import list_currencies
from yakstra.services.ledger import Ledger

"""Display preferences (currency, theme) and the static catalogs.

    - GET /settings/currencies  -> 16 known currencies with display labels
    - GET/PUT /settings/currency
    - GET /settings/categories  -> expense, income and combined filter lists
    - GET/PUT /settings/theme   -> light | dark
"""

router = APIRouter(prefix="/settings", tags=["settings"])


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


class CurrencyOut(BaseModel):
    code: str
    symbol: str
    name: str
    label: str


class CurrencyPayload(BaseModel):
    currency: str = Field(..., min_length=3, max_length=3, description="Currency code, e.g. EUR")


class ThemePayload(BaseModel):
    theme: str = Field(..., description="light or dark")


class PreferenceOut(BaseModel):
    value: str
    persisted: bool = True


@router.get("/currencies", response_model=List[CurrencyOut], summary="Supported display currencies")
async def currencies():
    return [
        CurrencyOut(code=c.code, symbol=c.symbol, name=c.name, label=c.label)
        for c in list_currencies()
    ]


@router.get("/currency", response_model=PreferenceOut, summary="Current display currency")
async def get_currency(ledger: Ledger = Depends(get_ledger)):
    return PreferenceOut(value=ledger.currency)


@router.put("/currency", response_model=PreferenceOut, summary="Change the display currency")
async def put_currency(payload: CurrencyPayload, ledger: Ledger = Depends(get_ledger)):
    try:
        persisted = ledger.set_currency(payload.currency)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return PreferenceOut(value=ledger.currency, persisted=persisted)


@router.get("/categories", summary="Known category lists")
async def categories() -> Dict[str, List[str]]:
    return {
        "expense": categories_for(EXPENSE),
        "income": categories_for(INCOME),
        "all": all_categories(),
    }


@router.get("/theme", response_model=PreferenceOut, summary="Current UI theme")
async def get_theme(ledger: Ledger = Depends(get_ledger)):
    return PreferenceOut(value=ledger.theme)


@router.put("/theme", response_model=PreferenceOut, summary="Change the UI theme")
async def put_theme(payload: ThemePayload, ledger: Ledger = Depends(get_ledger)):
    if payload.theme not in THEMES:
        raise HTTPException(status_code=400, detail=f"theme must be one of {list(THEMES)}")
    persisted = ledger.set_theme(payload.theme)
    return PreferenceOut(value=ledger.theme, persisted=persisted)
