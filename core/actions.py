"""
Form actions for creating, editing and deleting invoices.

Each action validates the submitted form, runs one statement through
InvoiceService, then marks the invoice listing stale. Create and edit finish
by redirecting to the listing; delete returns a message because it is
triggered from the listing itself.
"""

import logging
from typing import Any, Mapping, Protocol
from uuid import UUID

import psycopg2
from pydantic import BaseModel, Field

from core.services.invoice_service import InvoiceService
from core.validation import validate_invoice_form

logger = logging.getLogger(__name__)

INVOICES_ROUTE = "/dashboard/invoices"


class ViewCache(Protocol):
    def invalidate(self, route: str) -> None: ...


class Navigator(Protocol):
    def redirect_to(self, route: str) -> Any: ...


class FormState(BaseModel):
    """What a form gets back when an action doesn't redirect."""

    errors: dict[str, list[str]] | None = None
    message: str | None = None
    failed: bool = Field(False, exclude=True)


def missing_fields(operation: str, errors: dict[str, list[str]]) -> FormState:
    return FormState(
        errors=errors,
        message=f"Missing Fields. Failed to {operation} invoice.",
        failed=True,
    )


def database_error(operation: str) -> FormState:
    return FormState(message=f"Database error: Failed to {operation} invoice.", failed=True)


class InvoiceActions:
    """Invoice mutations invoked by form submissions."""

    def __init__(
        self,
        service: InvoiceService,
        view_cache: ViewCache,
        navigator: Navigator,
        invoices_route: str = INVOICES_ROUTE,
    ):
        self.service = service
        self.view_cache = view_cache
        self.navigator = navigator
        self.invoices_route = invoices_route

    def create_invoice(self, form_data: Mapping[str, Any], prev_state: FormState | None = None) -> Any:
        """
        Create an invoice from the submitted form.

        Args:
            form_data: Raw form fields (customerId, amount, status)
            prev_state: State returned by the previous submission, if any

        Returns:
            The navigator's redirect on success, otherwise a FormState with
            field errors or a database error message.
        """
        result = validate_invoice_form(form_data)
        if not result.valid:
            return missing_fields("create", result.field_errors)

        try:
            self.service.create(result.data)
        except psycopg2.Error:
            logger.exception("Failed to create invoice")
            return database_error("create")

        self.view_cache.invalidate(self.invoices_route)
        return self.navigator.redirect_to(self.invoices_route)

    def update_invoice(
        self,
        invoice_id: UUID,
        form_data: Mapping[str, Any],
        prev_state: FormState | None = None,
    ) -> Any:
        """
        Overwrite an invoice's customer, amount and status.

        An id that matches no invoice changes nothing and still redirects.

        Returns:
            The navigator's redirect on success, otherwise a FormState.
        """
        result = validate_invoice_form(form_data)
        if not result.valid:
            return missing_fields("update", result.field_errors)

        try:
            self.service.update(invoice_id, result.data)
        except psycopg2.Error:
            logger.exception("Failed to update invoice %s", invoice_id)
            return database_error("update")

        self.view_cache.invalidate(self.invoices_route)
        return self.navigator.redirect_to(self.invoices_route)

    def delete_invoice(self, invoice_id: UUID) -> FormState:
        """Delete an invoice. Deleting a missing id reports success as well."""
        try:
            self.service.delete(invoice_id)
        except psycopg2.Error:
            logger.exception("Failed to delete invoice %s", invoice_id)
            return database_error("delete")

        self.view_cache.invalidate(self.invoices_route)
        return FormState(message="Invoice Deleted")
