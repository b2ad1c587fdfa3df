"""Framework-agnostic ledger service for the finance manager."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Union

from .exceptions import ValidationError
from .logging_setup import get_logger
from .models import Budget, BudgetStatus, MonthlySummary, SearchHit, Transaction
from .storage import DELIMITER, CSVStorage, LoadResult
from .validators import (
    trim,
    validate_amount,
    validate_date,
    validate_limit,
    validate_required_str,
    validate_year_month,
)

__all__ = ["DEFAULT_CATEGORY", "SORT_MODES", "Ledger", "transaction_from_input"]

DEFAULT_CATEGORY = "Miscellaneous"
SORT_MODES = ("date", "amount")

logger = get_logger(__name__)


def transaction_from_input(
    date: object,
    amount: object,
    category: Optional[str] = None,
    description: Optional[str] = None,
) -> Transaction:
    """Validate raw interface input and build a ``Transaction``.

    A blank category falls back to ``Miscellaneous``. Categories may not
    contain the file delimiter, since only descriptions are rewritten on save.
    """
    category_text = trim(category or "") or DEFAULT_CATEGORY
    if DELIMITER in category_text:
        raise ValidationError("category cannot contain a comma")
    return Transaction(
        date=validate_date(date),
        category=category_text,
        amount=validate_amount(amount),
        description=description or "",
    )


class Ledger:
    """Owns the transaction and budget collections and their operations."""

    def __init__(self, storage: Optional[CSVStorage] = None) -> None:
        self._storage = storage or CSVStorage()
        self._transactions: List[Transaction] = []
        self._budgets: List[Budget] = []

    def __len__(self) -> int:
        return len(self._transactions)

    @property
    def is_empty(self) -> bool:
        return not self._transactions

    # Transactions ---------------------------------------------------------
    def add_transaction(self, transaction: Transaction) -> Transaction:
        self._transactions.append(transaction)
        logger.debug("Added transaction %s at index %d", transaction, len(self._transactions) - 1)
        return transaction

    def delete_transaction(self, index: int) -> bool:
        """Remove the transaction at ``index``; later positions shift down by one.

        Returns False, leaving the ledger untouched, when ``index`` is outside
        ``[0, len - 1]``. Negative indexes never wrap around.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if index < 0 or index >= len(self._transactions):
            return False
        removed = self._transactions.pop(index)
        logger.debug("Deleted transaction %s from index %d", removed, index)
        return True

    def clear(self) -> None:
        self._transactions = []

    def list(self) -> List[Transaction]:
        return list(self._transactions)

    def search_by_category(self, query: str) -> List[SearchHit]:
        """Case-sensitive substring match on the category, in ledger order."""
        return [
            SearchHit(index=index, transaction=transaction)
            for index, transaction in enumerate(self._transactions)
            if query in transaction.category
        ]

    def search_by_date(self, date: str) -> List[SearchHit]:
        validate_date(date)
        return [
            SearchHit(index=index, transaction=transaction)
            for index, transaction in enumerate(self._transactions)
            if transaction.date == date
        ]

    def sort_by_date(self) -> None:
        # Zero-padded YYYY-MM-DD makes lexical order chronological.
        self._transactions.sort(key=lambda transaction: transaction.date)

    def sort_by_amount(self) -> None:
        self._transactions.sort(key=lambda transaction: transaction.amount)

    def sort(self, mode: str) -> None:
        if mode == "date":
            self.sort_by_date()
        elif mode == "amount":
            self.sort_by_amount()
        else:
            raise ValidationError(f"sort mode must be one of: {', '.join(SORT_MODES)}")

    def monthly_summary(self, year_month: str) -> MonthlySummary:
        validate_year_month(year_month)
        income = Decimal("0")
        expense = Decimal("0")
        for transaction in self._transactions:
            if transaction.date[:7] != year_month:
                continue
            if transaction.amount >= 0:
                income += transaction.amount
            else:
                expense += transaction.amount
        return MonthlySummary(
            year_month=year_month, income=income, expense=expense, net=income + expense
        )

    # Budgets --------------------------------------------------------------
    def set_budget(self, category: str, limit: object) -> Budget:
        """Create the budget for ``category`` or overwrite its limit."""
        name = validate_required_str(category, "category")
        amount = validate_limit(limit)

        existing = self.get_budget(name)
        if existing is not None:
            existing.limit = amount
            logger.debug("Updated budget for %r to %s", name, amount)
            return existing

        budget = Budget(category=name, limit=amount)
        self._budgets.append(budget)
        logger.debug("Added budget for %r at %s", name, amount)
        return budget

    def get_budget(self, category: str) -> Optional[Budget]:
        for budget in self._budgets:
            if budget.category == category:
                return budget
        return None

    def list_budgets(self) -> List[Budget]:
        return list(self._budgets)

    def check_budgets(self) -> List[BudgetStatus]:
        spent_per_category: Dict[str, Decimal] = defaultdict(Decimal)
        for transaction in self._transactions:
            if transaction.amount < 0:
                spent_per_category[transaction.category] += -transaction.amount

        statuses = []
        for budget in self._budgets:
            spent = spent_per_category.get(budget.category, Decimal("0"))
            statuses.append(
                BudgetStatus(
                    category=budget.category,
                    spent=spent,
                    limit=budget.limit,
                    exceeded=spent > budget.limit,
                )
            )
        return statuses

    # Persistence ----------------------------------------------------------
    def save(self, path: Union[str, Path]) -> int:
        """Write every transaction to ``path`` and return how many were written."""
        return self._storage.save(path, self._transactions)

    def load(self, path: Union[str, Path]) -> LoadResult:
        """Replace all transactions with those read from ``path``.

        Malformed lines are skipped and reported in the result. If the file
        cannot be read the ledger is left unchanged.
        """
        result = self._storage.load(path)
        self._transactions = list(result.transactions)
        return result
