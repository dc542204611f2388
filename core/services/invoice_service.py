"""
Invoice service for the dashboard's invoice table.

One parameterized statement per mutation. Database errors propagate to the
caller untouched; deciding what the user sees is the action layer's job.
"""

import logging
from datetime import date
from uuid import UUID

from clients.postgres_client import PostgresClient
from core.models import Invoice, InvoiceForm
from utils.timezone import today_utc

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for invoice operations."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def create(self, data: InvoiceForm, invoice_date: date | None = None) -> Invoice:
        """
        Insert a new invoice.

        Args:
            data: Validated form fields
            invoice_date: Invoice date, defaults to today (UTC)

        Returns:
            Created invoice with its store-assigned id
        """
        invoice_date = invoice_date or today_utc()

        row = self.postgres.execute_returning(
            """
            INSERT INTO invoices (customer_id, amount, status, date)
            VALUES (%s, %s, %s, %s)
            RETURNING id, customer_id, amount, status, date
            """,
            (data.customer_id, data.amount_cents, data.status.value, invoice_date)
        )[0]

        invoice = Invoice.model_validate(row)
        logger.info("Created invoice %s", invoice.id)
        return invoice

    def update(self, invoice_id: UUID, data: InvoiceForm) -> Invoice | None:
        """
        Overwrite an invoice's customer, amount and status. The date is kept.

        Args:
            invoice_id: Invoice UUID
            data: Validated form fields

        Returns:
            Updated invoice, or None if no invoice has that id (nothing changes).
        """
        rows = self.postgres.execute_returning(
            """
            UPDATE invoices
            SET customer_id = %s, amount = %s, status = %s
            WHERE id = %s
            RETURNING id, customer_id, amount, status, date
            """,
            (data.customer_id, data.amount_cents, data.status.value, invoice_id)
        )

        if not rows:
            logger.info("Update matched no invoice %s", invoice_id)
            return None

        return Invoice.model_validate(rows[0])

    def delete(self, invoice_id: UUID) -> bool:
        """
        Delete an invoice.

        Returns:
            True if a row was deleted, False if no invoice has that id.
        """
        rows = self.postgres.execute_returning(
            "DELETE FROM invoices WHERE id = %s RETURNING id",
            (invoice_id,)
        )

        if not rows:
            logger.info("Delete matched no invoice %s", invoice_id)
            return False

        return True

    def get_by_id(self, invoice_id: UUID) -> Invoice | None:
        """Get invoice by ID, or None."""
        row = self.postgres.execute_single(
            "SELECT id, customer_id, amount, status, date FROM invoices WHERE id = %s",
            (invoice_id,)
        )

        if row is None:
            return None

        return Invoice.model_validate(row)

    def list_recent(self, limit: int = 100) -> list[Invoice]:
        """
        List invoices, newest first.

        Args:
            limit: Maximum results

        Returns:
            Invoices ordered by date DESC
        """
        rows = self.postgres.execute(
            """
            SELECT id, customer_id, amount, status, date
            FROM invoices
            ORDER BY date DESC, id
            LIMIT %s
            """,
            (limit,)
        )

        return [Invoice.model_validate(row) for row in rows]
