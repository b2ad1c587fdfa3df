"""Console interface for the personal finance ledger."""

from __future__ import annotations

import argparse
import sys
from decimal import Decimal
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from finance_core.config import get_settings
from finance_core.exceptions import PersistenceError, ValidationError
from finance_core.logging_setup import configure_logging
from finance_core.models import Budget, BudgetStatus, MonthlySummary, SearchHit, Transaction
from finance_core.services import SORT_MODES, Ledger, transaction_from_input
from finance_core.storage import LoadResult
from finance_core.validators import (
    DATE_FORMAT_HINT,
    is_numeric,
    is_valid_date,
    parse_amount,
    trim,
    validate_date,
)

InputFunc = Callable[[str], str]

TABLE_HEADER = f"{'Idx':>3} | {'Date':<10} | {'Category':<15} | {'Amount':>10} | Description"
TABLE_RULE = "-" * 67

MENU = """
=== Personal Finance Manager ===
1. Add transaction
2. Delete transaction
3. List transactions
4. Save transactions to file
5. Load transactions from file
6. Monthly summary
7. Search transactions
8. Sort transactions
9. Add or update budget
10. List budgets
11. Check budgets
0. Exit"""


def _parse_date(value: str) -> str:
    try:
        return validate_date(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format {DATE_FORMAT_HINT}."
        ) from exc


def _parse_amount(value: str) -> str:
    if not is_numeric(value):
        raise argparse.ArgumentTypeError("Amount must be a numeric value")
    return value


def _parse_budget_limit(value: str) -> Tuple[str, str]:
    category, sep, limit = value.rpartition("=")
    if not sep or not trim(category):
        raise argparse.ArgumentTypeError(
            f"Invalid budget '{value}'. Expected CATEGORY=AMOUNT."
        )
    return category, limit


def _money(amount: Decimal) -> str:
    return f"{amount:.2f}"


def _format_row(index: int, transaction: Transaction) -> str:
    return (
        f"{index:>3} | {transaction.date:<10} | {transaction.category:<15} | "
        f"{_money(transaction.amount):>10} | {transaction.description}"
    )


def print_transactions(rows: Iterable[Tuple[int, Transaction]]) -> None:
    print(TABLE_HEADER)
    print(TABLE_RULE)
    for index, transaction in rows:
        print(_format_row(index, transaction))


def print_ledger(ledger: Ledger) -> None:
    if ledger.is_empty:
        print("No transactions recorded.")
        return
    print_transactions(enumerate(ledger.list()))


def print_hits(hits: List[SearchHit], empty_message: str) -> None:
    if not hits:
        print(empty_message)
        return
    print("Results found:")
    print_transactions((hit.index, hit.transaction) for hit in hits)


def print_summary(summary: MonthlySummary) -> None:
    print(f"Summary for {summary.year_month}:")
    print(f"Income:   ${_money(summary.income)}")
    print(f"Expenses: ${_money(summary.expense)}")
    print(f"Net:      ${_money(summary.net)}")


def print_budgets(budgets: List[Budget]) -> None:
    if not budgets:
        print("No budgets defined.")
        return
    print("Category          | Limit")
    print("-" * 28)
    for budget in budgets:
        print(f"{budget.category:>17} | ${_money(budget.limit)}")


def print_budget_check(statuses: List[BudgetStatus]) -> None:
    if not statuses:
        print("No budgets defined.")
        return
    print("Budget check:")
    for status in statuses:
        if status.exceeded:
            print(
                f"ALERT! Category '{status.category}' has exceeded the budget! "
                f"Spent: ${_money(status.spent)}, Limit: ${_money(status.limit)}"
            )
        else:
            print(
                f"Category '{status.category}' is within budget. "
                f"Spent: ${_money(status.spent)}, Limit: ${_money(status.limit)}"
            )
    if not any(status.exceeded for status in statuses):
        print("All budgets are within limits.")


def _report_skipped(result: LoadResult, path: Path) -> None:
    for skipped in result.skipped:
        print(
            f"Skipping line {skipped.line_number} of {path}: {skipped.reason}",
            file=sys.stderr,
        )


def report_load(result: LoadResult, path: Path) -> None:
    _report_skipped(result, path)
    print(f"File loaded with {len(result.transactions)} transactions.")


def _open_ledger(path: Path) -> Ledger:
    ledger = Ledger()
    if path.exists():
        _report_skipped(ledger.load(path), path)
    return ledger


# Interactive session ---------------------------------------------------------
def _read_int(input_func: InputFunc, prompt: str, minimum: int, maximum: int) -> int:
    while True:
        raw = trim(input_func(prompt))
        try:
            value = int(raw)
        except ValueError:
            print("Invalid input. Try again.")
            continue
        if value < minimum or value > maximum:
            print(f"Please enter a number between {minimum} and {maximum}.")
            continue
        return value


def _read_amount(input_func: InputFunc, prompt: str) -> Decimal:
    while True:
        amount = parse_amount(input_func(prompt))
        if amount is not None:
            return amount
        print("Invalid amount, try again.")


def _read_filename(input_func: InputFunc, prompt: str, default_file: str) -> Path:
    return Path(trim(input_func(prompt)) or default_file)


def _menu_add(ledger: Ledger, input_func: InputFunc) -> None:
    while True:
        date = trim(input_func(f"Date ({DATE_FORMAT_HINT}): "))
        if is_valid_date(date):
            break
        print("Invalid date, try again.")
    category = input_func("Category: ")
    amount = _read_amount(input_func, "Amount (positive income, negative expense): ")
    description = input_func("Description: ")
    ledger.add_transaction(transaction_from_input(date, amount, category, description))
    print("Transaction added successfully.")


def _menu_delete(ledger: Ledger, input_func: InputFunc) -> None:
    if ledger.is_empty:
        print("No transactions to delete.")
        return
    print_ledger(ledger)
    max_index = len(ledger) - 1
    index = _read_int(
        input_func, f"Enter transaction index to delete (0 to {max_index}): ", 0, max_index
    )
    if ledger.delete_transaction(index):
        print("Transaction deleted successfully.")
    else:
        print("Invalid index.")


def _menu_save(ledger: Ledger, input_func: InputFunc, default_file: str) -> None:
    path = _read_filename(
        input_func, f"Enter filename to save (e.g. {default_file}): ", default_file
    )
    ledger.save(path)
    print(f"Data saved to {path}")


def _menu_load(ledger: Ledger, input_func: InputFunc, default_file: str) -> None:
    path = _read_filename(
        input_func, f"Enter filename to load (e.g. {default_file}): ", default_file
    )
    report_load(ledger.load(path), path)


def _menu_summary(ledger: Ledger, input_func: InputFunc) -> None:
    year_month = trim(input_func("Enter year and month for summary (format YYYY-MM): "))
    print_summary(ledger.monthly_summary(year_month))


def _menu_search(ledger: Ledger, input_func: InputFunc) -> None:
    print("Search by:\n1. Category (substring)\n2. Exact date (YYYY-MM-DD)")
    option = trim(input_func("Option: "))
    if option == "1":
        query = input_func("Enter part of the category to search: ")
        print_hits(ledger.search_by_category(query), "No transactions found for that category.")
    elif option == "2":
        date = trim(input_func(f"Enter exact date ({DATE_FORMAT_HINT}): "))
        print_hits(ledger.search_by_date(date), "No transactions found on that date.")
    else:
        print("Invalid option.")


def _menu_sort(ledger: Ledger, input_func: InputFunc) -> None:
    print("Sort by:\n1. Date ascending\n2. Amount ascending")
    option = trim(input_func("Option: "))
    modes = {"1": "date", "2": "amount"}
    if option not in modes:
        print("Invalid option.")
        return
    ledger.sort(modes[option])
    print(f"Transactions sorted by {modes[option]} ascending.")


def _menu_budget(ledger: Ledger, input_func: InputFunc) -> None:
    category = trim(input_func("Enter category for budget: "))
    if not category:
        print("Category cannot be empty.")
        return
    limit = _read_amount(input_func, "Enter budget limit (positive number): ")
    existed = ledger.get_budget(category) is not None
    ledger.set_budget(category, limit)
    verb = "updated" if existed else "added"
    print(f"Budget {verb} for category '{category}'.")


def run_menu(
    ledger: Ledger,
    input_func: InputFunc = input,
    default_file: str = "data.csv",
) -> int:
    """Drive the interactive menu until the user exits or input runs out."""
    actions = {
        "1": lambda: _menu_add(ledger, input_func),
        "2": lambda: _menu_delete(ledger, input_func),
        "3": lambda: print_ledger(ledger),
        "4": lambda: _menu_save(ledger, input_func, default_file),
        "5": lambda: _menu_load(ledger, input_func, default_file),
        "6": lambda: _menu_summary(ledger, input_func),
        "7": lambda: _menu_search(ledger, input_func),
        "8": lambda: _menu_sort(ledger, input_func),
        "9": lambda: _menu_budget(ledger, input_func),
        "10": lambda: print_budgets(ledger.list_budgets()),
        "11": lambda: print_budget_check(ledger.check_budgets()),
    }
    while True:
        print(MENU)
        try:
            choice = trim(input_func("Select option: "))
            if choice == "0":
                print("Exiting program...")
                return 0
            action = actions.get(choice)
            if action is None:
                print("Invalid option, please try again.")
                continue
            action()
        except ValidationError as exc:
            print(f"Validation error: {exc}")
        except PersistenceError as exc:
            print(f"Storage error: {exc}")
        except EOFError:
            print()
            print("Exiting program...")
            return 0


# One-shot commands -------------------------------------------------------------
def handle_add(args: argparse.Namespace, ledger: Ledger) -> bool:
    transaction = transaction_from_input(args.date, args.amount, args.category, args.description)
    ledger.add_transaction(transaction)
    print("Transaction added:")
    print_transactions([(len(ledger) - 1, transaction)])
    return True


def handle_delete(args: argparse.Namespace, ledger: Ledger) -> bool:
    if not ledger.delete_transaction(args.index):
        max_index = len(ledger) - 1
        if max_index < 0:
            raise ValidationError("No transactions to delete")
        raise ValidationError(f"Invalid index {args.index}; expected 0 to {max_index}")
    print(f"Transaction {args.index} deleted.")
    return True


def handle_list(args: argparse.Namespace, ledger: Ledger) -> bool:
    print_ledger(ledger)
    return False


def handle_search(args: argparse.Namespace, ledger: Ledger) -> bool:
    if args.date is not None:
        print_hits(ledger.search_by_date(args.date), "No transactions found on that date.")
    else:
        print_hits(
            ledger.search_by_category(args.category), "No transactions found for that category."
        )
    return False


def handle_sort(args: argparse.Namespace, ledger: Ledger) -> bool:
    ledger.sort(args.mode)
    print(f"Transactions sorted by {args.mode} ascending.")
    return True


def handle_summary(args: argparse.Namespace, ledger: Ledger) -> bool:
    print_summary(ledger.monthly_summary(args.year_month))
    return False


def handle_budgets(args: argparse.Namespace, ledger: Ledger) -> bool:
    for category, limit in args.limits:
        ledger.set_budget(category, limit)
    print_budgets(ledger.list_budgets())
    print_budget_check(ledger.check_budgets())
    return False


HANDLERS = {
    "add": handle_add,
    "delete": handle_delete,
    "list": handle_list,
    "search": handle_search,
    "sort": handle_sort,
    "summary": handle_summary,
    "budgets": handle_budgets,
}


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Personal Finance Manager CLI")
    parser.add_argument(
        "--file",
        default=settings.data_file,
        type=Path,
        help=f"Ledger file to read and write (default: {settings.data_file})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add a new transaction")
    add_parser.add_argument("date", type=_parse_date)
    add_parser.add_argument(
        "amount", type=_parse_amount, help="Positive for income, negative for expense"
    )
    add_parser.add_argument("--category", default="")
    add_parser.add_argument("--description", default="")

    delete_parser = subparsers.add_parser("delete", help="Delete a transaction by index")
    delete_parser.add_argument("index", type=int)

    subparsers.add_parser("list", help="List transactions")

    search_parser = subparsers.add_parser("search", help="Search transactions")
    search_group = search_parser.add_mutually_exclusive_group(required=True)
    search_group.add_argument("--category", help="Substring of the category (case-sensitive)")
    search_group.add_argument("--date", type=_parse_date, help=f"Exact date ({DATE_FORMAT_HINT})")

    sort_parser = subparsers.add_parser("sort", help="Sort transactions in place and save")
    sort_parser.add_argument("mode", choices=SORT_MODES)

    summary_parser = subparsers.add_parser("summary", help="Monthly income/expense summary")
    summary_parser.add_argument("year_month", metavar="YYYY-MM")

    budgets_parser = subparsers.add_parser("budgets", help="Check spending against budgets")
    budgets_parser.add_argument(
        "--limit",
        dest="limits",
        action="append",
        type=_parse_budget_limit,
        default=[],
        metavar="CATEGORY=AMOUNT",
    )

    subparsers.add_parser("menu", help="Start the interactive menu")

    return parser


def main(argv: Optional[List[str]] = None, input_func: InputFunc = input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "menu":
            return run_menu(Ledger(), input_func, default_file=str(args.file))
        handler = HANDLERS.get(args.command)
        if handler is None:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown command: {args.command}")
            return 2
        ledger = _open_ledger(args.file)
        if handler(args, ledger):
            ledger.save(args.file)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
