from __future__ import annotations

import math
import re
import time
from datetime import date as date_type, datetime
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from yakstra.core.errors import FormatError
from .constants import DEFAULT_CURRENCY, DEFAULT_TYPE, TRANSACTION_TYPES

# Leading numeric prefix, the way a lenient float parser reads "12.5abc" as 12.5.
_NUMERIC_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_PLAIN_NUMBER = re.compile(r"^\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*\Z")
_CURRENCY_CODE = re.compile(r"^[A-Za-z]{3}$")


def new_transaction_id() -> str:
    """Millisecond timestamp string, the id format used for generated records."""
    return str(int(time.time() * 1000))


def coerce_amount(value: Any, strict: bool = False) -> float:
    """Coerce raw input to a float amount.

    Lenient mode never fails: unparseable input becomes NaN and numeric
    prefixes are honored. Strict mode raises FormatError unless the whole
    value is a finite number.
    """
    if isinstance(value, bool):
        if strict:
            raise FormatError(f"invalid amount {value!r}")
        return math.nan
    if isinstance(value, (int, float)):
        result = float(value)
        if strict and not math.isfinite(result):
            raise FormatError(f"invalid amount {value!r}")
        return result
    text = "" if value is None else str(value)
    if strict:
        if not _PLAIN_NUMBER.match(text):
            raise FormatError(f"invalid amount {value!r}")
        result = float(text)
        if not math.isfinite(result):
            raise FormatError(f"invalid amount {value!r}")
        return result
    match = _NUMERIC_PREFIX.match(text)
    if not match:
        return math.nan
    return float(match.group(1))


class Transaction(BaseModel):
    """A single income or expense record.

    Records are frozen; an edit builds a new record carrying the same id.
    Field defaults mirror the import rules: missing type -> expense, missing
    currency -> USD, missing description -> empty string.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_transaction_id)
    title: str = ""
    amount: float = math.nan
    category: str = ""
    date: str = ""
    payment_method: str = Field("", alias="paymentMethod")
    description: str = ""
    type: str = DEFAULT_TYPE
    currency: str = DEFAULT_CURRENCY

    @field_validator("id", mode="before")
    @classmethod
    def fill_id(cls, v: Any) -> str:
        if v is None or v == "":
            return new_transaction_id()
        return str(v)

    @field_validator("title", "category", "payment_method", "description", mode="before")
    @classmethod
    def text_or_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("amount", mode="before")
    @classmethod
    def lenient_amount(cls, v: Any) -> float:
        return coerce_amount(v)

    @field_validator("date", mode="before")
    @classmethod
    def iso_date_text(cls, v: Any) -> str:
        if isinstance(v, datetime):
            return v.date().isoformat()
        if isinstance(v, date_type):
            return v.isoformat()
        return "" if v is None else str(v)

    @field_validator("type", mode="before")
    @classmethod
    def known_type(cls, v: Any) -> str:
        return v if v in TRANSACTION_TYPES else DEFAULT_TYPE

    @field_validator("currency", mode="before")
    @classmethod
    def currency_or_default(cls, v: Any) -> str:
        if v is None or v == "":
            return DEFAULT_CURRENCY
        return str(v)

    @classmethod
    def from_record(cls, record: Mapping[str, Any], strict: bool = False) -> "Transaction":
        """Build a transaction from a plain mapping (JSON element, CSV row)."""
        data = dict(record)
        if strict:
            data["amount"] = coerce_amount(data.get("amount"), strict=True)
        return cls.model_validate(data)

    def to_record(self) -> Dict[str, Any]:
        """Plain mapping for export and storage; a non-finite amount becomes null."""
        record = self.model_dump(by_alias=True)
        if not math.isfinite(self.amount):
            record["amount"] = None
        return record


class TransactionIn(BaseModel):
    """User-entered transaction (create or full replacement)."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    amount: float = Field(..., allow_inf_nan=False)
    category: str
    date: date_type
    payment_method: str = Field("", alias="paymentMethod")
    description: Optional[str] = None
    type: Literal["income", "expense"] = "expense"
    currency: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v.strip()

    @field_validator("currency")
    @classmethod
    def three_letter_code(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not _CURRENCY_CODE.match(v):
            raise ValueError("currency must be a 3-letter code")
        return v.upper() if v is not None else None

    def to_transaction(self, id: Optional[str] = None, currency: str = DEFAULT_CURRENCY) -> Transaction:
        return Transaction(
            id=id,
            title=self.title,
            amount=self.amount,
            category=self.category,
            date=self.date,
            payment_method=self.payment_method,
            description=self.description or "",
            type=self.type,
            currency=self.currency or currency,
        )
