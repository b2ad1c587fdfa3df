"""Core business logic package for the personal finance ledger."""

from .exceptions import MalformedRecordError, PersistenceError, ValidationError
from .models import Budget, BudgetStatus, MonthlySummary, SearchHit, Transaction
from .services import Ledger, transaction_from_input
from .storage import CSVStorage, LoadResult, SkippedLine

__all__ = [
    "Budget",
    "BudgetStatus",
    "MonthlySummary",
    "SearchHit",
    "Transaction",
    "Ledger",
    "transaction_from_input",
    "CSVStorage",
    "LoadResult",
    "SkippedLine",
    "MalformedRecordError",
    "PersistenceError",
    "ValidationError",
]
