"""Delimited-text persistence for ledger transactions.

Each transaction occupies one line, ``date,category,amount,description``, with
no header and no quoting. Commas inside the description are rewritten to
semicolons on the way out, so a save/load cycle is lossy for that one field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from .exceptions import MalformedRecordError, PersistenceError
from .logging_setup import get_logger
from .models import Transaction
from .validators import is_valid_date, parse_amount, trim

__all__ = ["CSVStorage", "LoadResult", "SkippedLine", "decode_line", "encode_line"]

DELIMITER = ","
DESCRIPTION_SUBSTITUTE = ";"

logger = get_logger(__name__)


@dataclass(frozen=True)
class SkippedLine:
    line_number: int
    reason: str
    raw: str


@dataclass
class LoadResult:
    transactions: List[Transaction] = field(default_factory=list)
    skipped: List[SkippedLine] = field(default_factory=list)


def encode_line(transaction: Transaction) -> str:
    """Render ``transaction`` as one line of the ledger file (no newline).

    Only the description is rewritten. A comma in the category is written as
    is and will shift the fields when the line is read back, which is why
    ``transaction_from_input`` refuses such categories.
    """
    description = transaction.description.replace(DELIMITER, DESCRIPTION_SUBSTITUTE)
    return DELIMITER.join(
        [transaction.date, transaction.category, str(transaction.amount), description]
    )


def decode_line(line: str) -> Transaction:
    """Parse one stored line or raise ``MalformedRecordError``.

    Splits on the first three commas only; whatever follows the third comma is
    the description, kept as written apart from the line ending.
    """
    parts = line.rstrip("\r\n").split(DELIMITER, 3)
    # Missing trailing fields decode as empty strings.
    parts.extend([""] * (4 - len(parts)))
    date, category, amount_text = (trim(part) for part in parts[:3])
    description = parts[3]

    if not is_valid_date(date):
        raise MalformedRecordError("invalid date", line)
    amount = parse_amount(amount_text)
    if amount is None:
        raise MalformedRecordError("invalid amount", line)
    return Transaction(date=date, category=category, amount=amount, description=description)


class CSVStorage:
    """Reads and writes ledger files; one instance can serve many paths."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def load(self, path: Union[str, Path]) -> LoadResult:
        path = Path(path)
        result = LoadResult()
        try:
            with path.open("r", encoding=self._encoding, newline="") as handle:
                for line_number, line in enumerate(handle, start=1):
                    if not trim(line):
                        continue
                    try:
                        result.transactions.append(decode_line(line))
                    except MalformedRecordError as exc:
                        logger.debug(
                            "Skipping line %d of %s: %s", line_number, path, exc.reason
                        )
                        result.skipped.append(
                            SkippedLine(
                                line_number=line_number,
                                reason=exc.reason,
                                raw=line.rstrip("\r\n"),
                            )
                        )
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        logger.info(
            "Loaded %d transactions from %s (%d skipped)",
            len(result.transactions),
            path,
            len(result.skipped),
        )
        return result

    def save(self, path: Union[str, Path], transactions: Iterable[Transaction]) -> int:
        path = Path(path)
        if not path.name:
            raise PersistenceError(f"Unable to write to {path}: not a file name")
        temp_path = path.with_name(path.name + ".tmp")
        count = 0
        try:
            with temp_path.open("w", encoding=self._encoding, newline="\n") as handle:
                for transaction in transactions:
                    handle.write(encode_line(transaction) + "\n")
                    count += 1
                handle.flush()
            # Use replace for atomic move on POSIX.
            temp_path.replace(path)
        except OSError as exc:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove temporary file %s", temp_path)
            raise PersistenceError(f"Unable to write to {path}") from exc

        logger.info("Saved %d transactions to %s", count, path)
        return count
