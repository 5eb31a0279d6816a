"""File import / export boundary.

Import picks the codec from the file extension; export produces the payload
together with a suggested ``<prefix>_<YYYY-MM-DD>.<ext>`` filename. Delivery
(download, disk write) is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Literal

from yakstra.core.errors import FormatError
from yakstra.models.transaction import Transaction
from .csv_codec import decode_csv, encode_csv
from .json_codec import decode_json, encode_json

logger = logging.getLogger("yakstra.transfer")

ExportFormat = Literal["json", "csv"]

DEFAULT_EXPORT_PREFIX = "yakstra_transactions"
MEDIA_TYPES = {"json": "application/json", "csv": "text/csv"}


@dataclass(frozen=True)
class ExportPayload:
    filename: str
    content: str
    media_type: str


def export_filename(fmt: str, today: date | None = None, prefix: str = DEFAULT_EXPORT_PREFIX) -> str:
    today = today or date.today()
    return f"{prefix}_{today.isoformat()}.{fmt}"


def export_transactions(
    transactions: Iterable[Transaction],
    fmt: ExportFormat,
    today: date | None = None,
    prefix: str = DEFAULT_EXPORT_PREFIX,
) -> ExportPayload:
    if fmt == "json":
        content = encode_json(transactions)
    elif fmt == "csv":
        content = encode_csv(transactions)
    else:
        raise ValueError(f"unsupported export format '{fmt}'")
    return ExportPayload(
        filename=export_filename(fmt, today, prefix),
        content=content,
        media_type=MEDIA_TYPES[fmt],
    )


def import_transactions(filename: str, content: str, strict: bool = False) -> List[Transaction]:
    """Decode an uploaded file; raises FormatError, never returns a partial list."""
    name = (filename or "").lower()
    if name.endswith(".json"):
        transactions = decode_json(content, strict=strict)
    elif name.endswith(".csv"):
        transactions = decode_csv(content, strict=strict)
    else:
        raise FormatError("Unsupported file format")
    logger.info("decoded %d transactions from %s", len(transactions), filename)
    return transactions
