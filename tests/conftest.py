"""Shared fixtures for the ledger test suite."""

from __future__ import annotations

from decimal import Decimal

import pytest

from finance_core.config import DATA_FILE_ENV
from finance_core.logging_setup import LOG_LEVEL_ENV, reset_logging
from finance_core.models import Transaction
from finance_core.services import Ledger


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch):
    """Keep user environment and earlier logging setup out of each test."""
    monkeypatch.delenv(DATA_FILE_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    reset_logging()
    yield
    reset_logging()


def make_transaction(date: str, category: str, amount: str, description: str = "") -> Transaction:
    return Transaction(date=date, category=category, amount=Decimal(amount), description=description)


@pytest.fixture
def ledger() -> Ledger:
    return Ledger()


@pytest.fixture
def march_ledger(ledger: Ledger) -> Ledger:
    ledger.add_transaction(make_transaction("2024-03-01", "Salary", "2000"))
    ledger.add_transaction(make_transaction("2024-03-05", "Food", "-150.50"))
    ledger.add_transaction(make_transaction("2024-04-01", "Rent", "-900"))
    return ledger
