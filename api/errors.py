"""Render failures that escape the dashboard routes as API envelopes.

Form failures never get here; InvoiceActions turns those into FormState.
What remains is lookups that miss, malformed paths and store failures on
read routes.
"""

import logging
from uuid import UUID

import psycopg2
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes

logger = logging.getLogger(__name__)


class InvoiceNotFoundError(LookupError):
    """No invoice has the requested id."""

    def __init__(self, invoice_id: UUID):
        super().__init__(f"Invoice {invoice_id} not found")
        self.invoice_id = invoice_id


def _envelope(
    status_code: int,
    code: str,
    message: str,
    fields: dict[str, list[str]] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message, fields=fields).model_dump(mode="json"),
    )


def request_field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group FastAPI's validation errors by parameter name.

    loc is ("path", "invoice_id") or ("body", ...); the first element is dropped.
    """
    fields: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())[1:]]
        fields.setdefault(".".join(loc) or "request", []).append(error["msg"])
    return fields


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(InvoiceNotFoundError)
    async def invoice_not_found_handler(request: Request, exc: InvoiceNotFoundError):
        return _envelope(404, ErrorCodes.NOT_FOUND, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _envelope(
            422,
            ErrorCodes.VALIDATION_ERROR,
            "Invalid request.",
            fields=request_field_errors(exc),
        )

    @app.exception_handler(psycopg2.Error)
    async def database_error_handler(request: Request, exc: psycopg2.Error):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return _envelope(500, ErrorCodes.DATABASE_ERROR, "Database error: Failed to load invoices.")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _envelope(500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
