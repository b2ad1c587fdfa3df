from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from finance_core.models import Budget, BudgetStatus, MonthlySummary, Transaction


def test_transaction_is_immutable():
    transaction = Transaction(date="2024-01-01", category="Food", amount=Decimal("-5"))
    with pytest.raises(FrozenInstanceError):
        transaction.amount = Decimal("5")  # type: ignore[misc]


def test_transaction_sign_convention():
    income = Transaction(date="2024-01-01", category="Salary", amount=Decimal("0"))
    expense = Transaction(date="2024-01-01", category="Food", amount=Decimal("-0.01"))
    assert income.is_income and not income.is_expense
    assert expense.is_expense and not expense.is_income


def test_transaction_to_dict_renders_amount_as_text():
    transaction = Transaction(
        date="2024-01-01", category="Food", amount=Decimal("-12.30"), description="Lunch, tacos"
    )
    assert transaction.to_dict() == {
        "date": "2024-01-01",
        "category": "Food",
        "amount": "-12.30",
        "description": "Lunch, tacos",
    }


def test_budget_limit_is_mutable():
    budget = Budget(category="Food", limit=Decimal("100"))
    budget.limit = Decimal("150")
    assert budget.to_dict() == {"category": "Food", "limit": "150"}


def test_budget_status_remaining():
    status = BudgetStatus(category="Food", spent=Decimal("110"), limit=Decimal("100"), exceeded=True)
    assert status.remaining == Decimal("-10")
    assert status.to_dict()["exceeded"] is True


def test_monthly_summary_to_dict():
    summary = MonthlySummary(
        year_month="2024-03", income=Decimal("2000"), expense=Decimal("-150.50"), net=Decimal("1849.50")
    )
    assert summary.to_dict() == {
        "year_month": "2024-03",
        "income": "2000",
        "expense": "-150.50",
        "net": "1849.50",
    }
