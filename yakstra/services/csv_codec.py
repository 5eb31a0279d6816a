"""CSV encoding / decoding of transaction lists.

Format contract:
    - Header line (unquoted): ID,Type,Title,Amount,Currency,Category,Date,Payment Method,Description
    - One line per transaction, every cell wrapped in double quotes.
    - Embedded quotes are neither escaped on encode nor unescaped on decode;
      a ``"`` only toggles the in-quotes state of the line splitter.

Decoding is lenient per row: lines that yield fewer than nine fields are
dropped without failing the file. Only a file without any data line is a
FormatError.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List

from yakstra.core.errors import FormatError
from yakstra.models.transaction import Transaction

logger = logging.getLogger("yakstra.csv")

HEADER = [
    "ID",
    "Type",
    "Title",
    "Amount",
    "Currency",
    "Category",
    "Date",
    "Payment Method",
    "Description",
]

# Positional layout of a data row.
COLUMNS = [
    "id",
    "type",
    "title",
    "amount",
    "currency",
    "category",
    "date",
    "paymentMethod",
    "description",
]


def format_number(value: float) -> str:
    """Render a float the way the exported files always have (5000, 120.5, NaN)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _row(t: Transaction) -> List[str]:
    return [
        t.id,
        t.type,
        t.title,
        format_number(t.amount),
        t.currency,
        t.category,
        t.date,
        t.payment_method,
        t.description or "",
    ]


def encode_csv(transactions: Iterable[Transaction]) -> str:
    lines = [",".join(HEADER)]
    for t in transactions:
        lines.append(",".join(f'"{cell}"' for cell in _row(t)))
    return "\n".join(lines) + "\n"


def split_csv_line(line: str) -> List[str]:
    """Split one line on commas outside double quotes; fields are trimmed."""
    values: List[str] = []
    current: List[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    values.append("".join(current).strip())
    return values


def decode_csv(content: str, strict: bool = False) -> List[Transaction]:
    lines = [line for line in content.split("\n") if line.strip()]
    if len(lines) < 2:
        raise FormatError("CSV file is empty")

    transactions: List[Transaction] = []
    for lineno, line in enumerate(lines[1:], start=2):
        values = split_csv_line(line)
        if len(values) < len(COLUMNS):
            logger.debug(
                "dropping csv row %d: %d fields, need %d",
                lineno,
                len(values),
                len(COLUMNS),
            )
            continue
        record = dict(zip(COLUMNS, values))
        try:
            transactions.append(Transaction.from_record(record, strict=strict))
        except FormatError as e:
            raise FormatError(f"row {lineno}: {e}") from e
    return transactions
