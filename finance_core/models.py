"""Data models for the finance ledger domain."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

__all__ = ["Budget", "BudgetStatus", "MonthlySummary", "SearchHit", "Transaction"]


@dataclass(frozen=True)
class Transaction:
    date: str
    category: str
    amount: Decimal
    description: str = ""

    @property
    def is_income(self) -> bool:
        return self.amount >= 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the transaction to JSON-friendly natives."""
        return {
            "date": self.date,
            "category": self.category,
            "amount": str(self.amount),
            "description": self.description,
        }


@dataclass
class Budget:
    """Spending ceiling for one category; the limit is updated in place."""

    category: str
    limit: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "limit": str(self.limit)}


@dataclass(frozen=True)
class SearchHit:
    index: int
    transaction: Transaction


@dataclass(frozen=True)
class MonthlySummary:
    year_month: str
    income: Decimal
    expense: Decimal
    net: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year_month": self.year_month,
            "income": str(self.income),
            "expense": str(self.expense),
            "net": str(self.net),
        }


@dataclass(frozen=True)
class BudgetStatus:
    category: str
    spent: Decimal
    limit: Decimal
    exceeded: bool

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "spent": str(self.spent),
            "limit": str(self.limit),
            "exceeded": self.exceeded,
        }
