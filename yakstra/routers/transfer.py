from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from yakstra.core.config import Settings
from yakstra.core.errors import FormatError
from yakstra.services.ledger import Ledger
from yakstra.services.transfer import export_transactions, import_transactions

"""Import / export endpoints.

    - POST /transfer/import  -> multipart upload (.json or .csv); appends to
                                the collection unless dry_run is set
    - GET  /transfer/export  -> attachment named <prefix>_<YYYY-MM-DD>.<ext>

FormatError propagates to the app-level handler (400); nothing is applied
when decoding fails.
"""

router = APIRouter(prefix="/transfer", tags=["transfer"])


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


class ImportResult(BaseModel):
    filename: str
    count: int
    applied: bool
    persisted: bool


@router.post("/import", response_model=ImportResult, summary="Import transactions from a file")
async def import_file(
    file: UploadFile = File(..., description="JSON array or CSV export"),
    dry_run: bool = Query(False, description="Decode only; do not add to the collection"),
    ledger: Ledger = Depends(get_ledger),
):
    raw = await file.read()
    try:
        content = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FormatError("File is not valid UTF-8 text") from e
    imported = import_transactions(
        file.filename or "", content, strict=ledger.strict_amounts
    )
    if dry_run:
        return ImportResult(
            filename=file.filename or "", count=len(imported), applied=False, persisted=True
        )
    count = ledger.import_transactions(imported)
    return ImportResult(
        filename=file.filename or "", count=count, applied=True, persisted=ledger.persisted
    )


@router.get("/export", summary="Download all transactions as JSON or CSV")
async def export_file(
    format: Literal["json", "csv"] = Query("json"),
    ledger: Ledger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
):
    payload = export_transactions(
        ledger.transactions, format, prefix=settings.export_prefix
    )
    return Response(
        content=payload.content,
        media_type=payload.media_type,
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )
