"""Application-state coordinator.

The Ledger owns the in-memory transaction collection plus the display
currency and theme. It loads everything from Storage once and rewrites the
whole collection after every mutation. In-memory state stays authoritative
when a write fails; ``persisted`` records the outcome of the last write so
callers can warn that changes are not yet durable.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from yakstra.db.storage import Storage
from yakstra.models.constants import DEFAULT_CURRENCY, DEFAULT_THEME
from yakstra.models.transaction import Transaction, TransactionIn
from .currency import is_known_currency

logger = logging.getLogger("yakstra.ledger")


class TransactionNotFound(KeyError):
    pass


class Ledger:
    def __init__(self, storage: Storage, strict_amounts: bool = False):
        self._storage = storage
        self.strict_amounts = strict_amounts
        self._transactions: List[Transaction] = []
        self._currency = DEFAULT_CURRENCY
        self._theme = DEFAULT_THEME
        self.persisted = True

    def load(self) -> None:
        self._transactions = self._storage.load_transactions()
        self._currency = self._storage.load_currency()
        self._theme = self._storage.load_theme()
        logger.info(
            "loaded %d transactions (currency=%s)", len(self._transactions), self._currency
        )

    # Snapshot ---------------------------------------------------------
    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def theme(self) -> str:
        return self._theme

    def get(self, transaction_id: str) -> Transaction:
        for t in self._transactions:
            if t.id == transaction_id:
                return t
        raise TransactionNotFound(transaction_id)

    # Internal ---------------------------------------------------------
    def _save(self) -> bool:
        self.persisted = self._storage.save_transactions(self._transactions)
        if not self.persisted:
            logger.warning("transactions kept in memory only; storage write failed")
        return self.persisted

    def _unique_id(self, candidate: str) -> str:
        taken = {t.id for t in self._transactions}
        if candidate not in taken:
            return candidate
        n = int(candidate) if candidate.isdigit() else 0
        while str(n) in taken:
            n += 1
        return str(n)

    # Mutations --------------------------------------------------------
    def add(self, payload: TransactionIn) -> Transaction:
        transaction = payload.to_transaction(currency=self._currency)
        transaction = transaction.model_copy(update={"id": self._unique_id(transaction.id)})
        self._transactions.append(transaction)
        self._save()
        return transaction

    def replace(self, transaction_id: str, payload: TransactionIn) -> Transaction:
        """Edit by full replacement; the record keeps its id and position."""
        for index, existing in enumerate(self._transactions):
            if existing.id == transaction_id:
                updated = payload.to_transaction(
                    id=transaction_id, currency=existing.currency
                )
                self._transactions[index] = updated
                self._save()
                return updated
        raise TransactionNotFound(transaction_id)

    def delete(self, transaction_id: str) -> bool:
        remaining = [t for t in self._transactions if t.id != transaction_id]
        if len(remaining) == len(self._transactions):
            raise TransactionNotFound(transaction_id)
        self._transactions = remaining
        return self._save()

    def import_transactions(self, imported: Iterable[Transaction]) -> int:
        """Append decoded records to the collection; ids are kept as imported."""
        added = list(imported)
        self._transactions.extend(added)
        self._save()
        logger.info("imported %d transactions", len(added))
        return len(added)

    def clear(self) -> bool:
        self._transactions = []
        self.persisted = self._storage.clear_all()
        return self.persisted

    # Preferences ------------------------------------------------------
    def set_currency(self, code: str) -> bool:
        code = code.upper()
        if not is_known_currency(code):
            raise ValueError(f"unsupported currency '{code}'")
        self._currency = code
        return self._storage.save_currency(code)

    def set_theme(self, theme: str) -> bool:
        saved = self._storage.save_theme(theme)
        self._theme = theme
        return saved


def build_ledger(storage: Storage, strict_amounts: bool = False, load: bool = True) -> Ledger:
    ledger = Ledger(storage, strict_amounts=strict_amounts)
    if load:
        ledger.load()
    return ledger


__all__ = ["Ledger", "TransactionNotFound", "build_ledger"]
