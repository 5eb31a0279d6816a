"""Pydantic domain models for the Yakstra tracker."""

from .constants import (
    DEFAULT_CURRENCY,
    DEFAULT_TYPE,
    EXPENSE,
    EXPENSE_CATEGORIES,
    INCOME,
    INCOME_CATEGORIES,
    TRANSACTION_TYPES,
)  # re-export
from .transaction import Transaction, TransactionIn, coerce_amount, new_transaction_id

__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_TYPE",
    "EXPENSE",
    "EXPENSE_CATEGORIES",
    "INCOME",
    "INCOME_CATEGORIES",
    "TRANSACTION_TYPES",
    "Transaction",
    "TransactionIn",
    "coerce_amount",
    "new_transaction_id",
]
