"""JSON encoding / decoding of transaction lists.

The document is a bare array of records using the exported field names
(``paymentMethod`` in camelCase). Decoding is all-or-nothing.
"""

from __future__ import annotations

import json
from typing import Iterable, List

from yakstra.core.errors import FormatError
from yakstra.models.transaction import Transaction


def encode_json(transactions: Iterable[Transaction]) -> str:
    return json.dumps(
        [t.to_record() for t in transactions], indent=2, ensure_ascii=False, allow_nan=False
    )


def decode_json(content: str, strict: bool = False) -> List[Transaction]:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON: {e.msg}") from e
    if not isinstance(data, list):
        raise FormatError("Invalid JSON format")
    transactions: List[Transaction] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise FormatError(f"Invalid JSON format: element {index} is not an object")
        try:
            transactions.append(Transaction.from_record(item, strict=strict))
        except FormatError as e:
            raise FormatError(f"element {index}: {e}") from e
    return transactions
