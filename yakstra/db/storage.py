"""Key-value persistence for the tracker.

Responsibilities
----------------
- Store the whole transaction collection as one JSON document under a fixed
  key, rewritten on every save (no incremental persistence).
- Store the selected display currency and UI theme under their own keys.
- Degrade instead of raising: reads fall back to defaults, writes report
  success as a boolean. Failures are logged.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List, Optional

from yakstra.core.errors import StorageError
from yakstra.models.constants import DEFAULT_CURRENCY, DEFAULT_THEME, THEMES
from yakstra.models.transaction import Transaction
from .schema import BASIC_UTC_NOW, init_db

logger = logging.getLogger("yakstra.storage")

TRANSACTIONS_KEY = "yakstra_transactions"
CURRENCY_KEY = "yakstra_currency"
THEME_KEY = "yakstra_theme"


class Storage:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def initialize(self) -> None:
        init_db(self.db_path)

    def get_value(self, key: str) -> Optional[str]:
        try:
            conn = self._connect()
            try:
                cur = conn.cursor()
                cur.execute("SELECT value FROM metadata WHERE key=?", (key,))
                row = cur.fetchone()
                return row[0] if row else None
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to read '{key}': {e}") from e

    def set_value(self, key: str, value: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        "INSERT INTO metadata(key,value) VALUES(?,?) "
                        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
                        f"updated_at=({BASIC_UTC_NOW})",
                        (key, value),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to write '{key}': {e}") from e

    def delete_value(self, key: str) -> None:
        try:
            conn = self._connect()
            try:
                with conn:
                    conn.execute("DELETE FROM metadata WHERE key=?", (key,))
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"failed to delete '{key}': {e}") from e

    # ------------------------------------------------------------------
    # Transactions
    def save_transactions(self, transactions: Iterable[Transaction]) -> bool:
        data = json.dumps(
            [t.to_record() for t in transactions], ensure_ascii=False, allow_nan=False
        )
        try:
            self.set_value(TRANSACTIONS_KEY, data)
        except StorageError:
            logger.exception("error saving transactions")
            return False
        return True

    def load_transactions(self) -> List[Transaction]:
        try:
            raw = self.get_value(TRANSACTIONS_KEY)
            if not raw:
                return []
            parsed = json.loads(raw)
            return [Transaction.from_record(item) for item in parsed]
        except (StorageError, ValueError, TypeError):
            logger.exception("error loading transactions")
            return []

    def clear_all(self) -> bool:
        try:
            self.delete_value(TRANSACTIONS_KEY)
        except StorageError:
            logger.exception("error clearing transactions")
            return False
        return True

    # ------------------------------------------------------------------
    # Preferences
    def save_currency(self, currency: str) -> bool:
        try:
            self.set_value(CURRENCY_KEY, currency)
        except StorageError:
            logger.exception("error saving currency")
            return False
        return True

    def load_currency(self) -> str:
        try:
            return self.get_value(CURRENCY_KEY) or DEFAULT_CURRENCY
        except StorageError:
            logger.exception("error loading currency")
            return DEFAULT_CURRENCY

    def save_theme(self, theme: str) -> bool:
        if theme not in THEMES:
            raise ValueError(f"Invalid theme '{theme}'")
        try:
            self.set_value(THEME_KEY, theme)
        except StorageError:
            logger.exception("error saving theme")
            return False
        return True

    def load_theme(self) -> str:
        try:
            theme = self.get_value(THEME_KEY) or DEFAULT_THEME
        except StorageError:
            logger.exception("error loading theme")
            return DEFAULT_THEME
        return theme if theme in THEMES else DEFAULT_THEME
