"""Domain exceptions and the HTTP handlers that render them.

FormatError  - an import payload could not be decoded (bad JSON root,
               unsupported extension, empty CSV, strict-mode amount).
StorageError - the key-value store could not be read or written. Storage
               callers normally see a default value or ``False`` instead;
               the exception only crosses the storage module boundary when
               a caller asks for it explicitly.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger("yakstra.errors")


class FormatError(ValueError):
    """Malformed import payload."""


class StorageError(RuntimeError):
    """Persistence read/write failure."""


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        detail = f"No route for {request.method} {request.url.path}"
        error = "not_found"
    else:
        detail = exc.detail
        error = "not_found" if exc.status_code == 404 else "http_error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error, "detail": detail},
        headers=getattr(exc, "headers", None),
    )


def format_error_handler(request: Request, exc: FormatError):  # type: ignore
    logger.info("rejected import payload: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "format_error", "detail": str(exc)},
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
