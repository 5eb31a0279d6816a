"""Pytest configuration for test isolation.

``yakstra.main`` builds a module-level app on import, which reads settings
from the environment and creates its SQLite file under ``DATA_DIR``. Point
that at a throwaway directory BEFORE anything imports the package, and give
every test that needs persistence its own database file.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="yakstra_test_"))

import pytest

from yakstra.core.config import Settings
from yakstra.db.storage import Storage
from yakstra.models.transaction import Transaction
from yakstra.services.ledger import Ledger


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "yakstra.sqlite3"


@pytest.fixture
def storage(db_path: Path) -> Storage:
    s = Storage(db_path)
    s.initialize()
    return s


@pytest.fixture
def ledger(storage: Storage) -> Ledger:
    led = Ledger(storage)
    led.load()
    return led


@pytest.fixture
def settings(db_path: Path) -> Settings:
    return Settings(db_path=db_path)


@pytest.fixture
def client(settings: Settings):
    from fastapi.testclient import TestClient
    from yakstra.main import create_app

    with TestClient(create_app(settings_override=settings)) as c:
        yield c


@pytest.fixture
def january_transactions():
    return [
        Transaction(
            id="1",
            title="Salary",
            amount=5000,
            category="Salary",
            date="2024-01-15",
            payment_method="Bank Transfer",
            type="income",
        ),
        Transaction(
            id="2",
            title="Groceries",
            amount=120.50,
            category="Food & Dining",
            date="2024-01-20",
            payment_method="Card",
            type="expense",
        ),
    ]
