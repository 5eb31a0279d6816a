from __future__ import annotations

import math
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from yakstra.models.constants import category_icon
from yakstra.models.transaction import Transaction, TransactionIn
from yakstra.services.aggregation import filter_transactions, recent_transactions
from yakstra.services.currency import format_currency
from yakstra.services.ledger import Ledger, TransactionNotFound

router = APIRouter(prefix="/transactions", tags=["transactions"])

# Dependencies -----------------------------------------------------


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


# Request / Response Models ----------------------------------------
class TransactionOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    amount: Optional[float] = Field(None, description="null when the stored amount is not a number")
    category: str
    date: str
    payment_method: str = Field(..., alias="paymentMethod")
    description: str
    type: str
    currency: str
    formatted_amount: str
    icon: str


class TransactionWriteOut(BaseModel):
    transaction: TransactionOut
    persisted: bool


class DeleteOut(BaseModel):
    status: str
    id: Optional[str] = None
    persisted: bool


# Helpers ----------------------------------------------------------


def to_out(t: Transaction, display_currency: str) -> TransactionOut:
    return TransactionOut(
        id=t.id,
        title=t.title,
        amount=t.amount if math.isfinite(t.amount) else None,
        category=t.category,
        date=t.date,
        payment_method=t.payment_method,
        description=t.description,
        type=t.type,
        currency=t.currency,
        formatted_amount=format_currency(t.amount, display_currency),
        icon=category_icon(t.category, t.type),
    )


# Routes -----------------------------------------------------------
@router.get("/", response_model=List[TransactionOut], summary="List transactions, newest first")
async def list_transactions(
    type: Optional[Literal["income", "expense"]] = Query(None, description="Filter by type"),
    category: Optional[str] = Query(None, description="Filter by category"),
    month: Optional[str] = Query(None, description="Filter by month (YYYY-MM)"),
    ledger: Ledger = Depends(get_ledger),
):
    try:
        rows = filter_transactions(
            ledger.transactions, type_=type, category=category, month=month
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [to_out(t, ledger.currency) for t in rows]


@router.get("/recent", response_model=List[TransactionOut], summary="Most recent transactions")
async def list_recent(
    limit: int = Query(5, ge=1, le=100),
    ledger: Ledger = Depends(get_ledger),
):
    return [to_out(t, ledger.currency) for t in recent_transactions(ledger.transactions, limit)]


@router.get("/{transaction_id}", response_model=TransactionOut, summary="Fetch one transaction")
async def get_transaction(transaction_id: str, ledger: Ledger = Depends(get_ledger)):
    try:
        return to_out(ledger.get(transaction_id), ledger.currency)
    except TransactionNotFound:
        raise HTTPException(status_code=404, detail="transaction not found")


@router.post(
    "/", response_model=TransactionWriteOut, status_code=201, summary="Record a transaction"
)
async def create_transaction(payload: TransactionIn, ledger: Ledger = Depends(get_ledger)):
    created = ledger.add(payload)
    return TransactionWriteOut(
        transaction=to_out(created, ledger.currency), persisted=ledger.persisted
    )


@router.put(
    "/{transaction_id}", response_model=TransactionWriteOut, summary="Replace a transaction"
)
async def replace_transaction(
    transaction_id: str, payload: TransactionIn, ledger: Ledger = Depends(get_ledger)
):
    try:
        updated = ledger.replace(transaction_id, payload)
    except TransactionNotFound:
        raise HTTPException(status_code=404, detail="transaction not found")
    return TransactionWriteOut(
        transaction=to_out(updated, ledger.currency), persisted=ledger.persisted
    )


@router.delete("/{transaction_id}", response_model=DeleteOut, summary="Delete a transaction")
async def delete_transaction(transaction_id: str, ledger: Ledger = Depends(get_ledger)):
    try:
        persisted = ledger.delete(transaction_id)
    except TransactionNotFound:
        raise HTTPException(status_code=404, detail="transaction not found")
    return DeleteOut(status="deleted", id=transaction_id, persisted=persisted)


@router.delete("/", response_model=DeleteOut, summary="Delete all transactions")
async def clear_transactions(ledger: Ledger = Depends(get_ledger)):
    return DeleteOut(status="cleared", persisted=ledger.clear())
