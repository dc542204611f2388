"""Invoice domain models.

Amounts are stored in cents (integer) to avoid floating point issues.
Forms submit whole currency units ("19.99"), which become 1999 cents.
The invoices.amount column is a 32-bit INTEGER, which caps an invoice at
MAX_AMOUNT.
"""

import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

MAX_AMOUNT = Decimal("21474836.47")


class InvoiceStatus(str, Enum):
    """Invoice payment status."""

    PENDING = "pending"
    PAID = "paid"


def coerce_amount(value: Any) -> Any:
    """
    Coerce a submitted amount string to a Decimal.

    Blank input counts as zero so it fails the "greater than 0" check rather
    than a parsing check. Non-numeric text raises ValueError.
    """
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return Decimal(0)
        try:
            return Decimal(text)
        except InvalidOperation:
            raise ValueError(f"'{value}' is not a number")
    return value


class InvoiceForm(BaseModel):
    """Invoice fields submitted by the create and edit forms.

    Aliases are the HTML form field names.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    customer_id: str = Field(..., alias="customerId", min_length=1)
    amount: Annotated[Decimal, BeforeValidator(coerce_amount)] = Field(
        ..., gt=0, le=MAX_AMOUNT, decimal_places=2, allow_inf_nan=False
    )
    status: InvoiceStatus

    @property
    def amount_cents(self) -> int:
        """Amount in minor units."""
        return int((self.amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class Invoice(BaseModel):
    """Full invoice entity as stored."""

    id: UUID
    customer_id: str
    amount: int
    status: InvoiceStatus
    date: datetime.date

    model_config = {"from_attributes": True}
