"""
Invoice form validation.

Turns raw form fields into an InvoiceForm, or into a per-field error report
that the form can render next to each input. Bad input is an expected outcome,
so nothing here raises for it.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import ValidationError

from core.models import InvoiceForm

FORM_FIELDS = ("customerId", "amount", "status")

FIELD_MESSAGES = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}


@dataclass
class ValidationResult:
    """Outcome of validating one form submission."""

    data: InvoiceForm | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return self.data is not None


def validate_invoice_form(raw: Mapping[str, Any]) -> ValidationResult:
    """
    Validate submitted invoice fields.

    Args:
        raw: Form fields keyed by their HTML names (customerId, amount, status).
            Unknown keys are ignored.

    Returns:
        ValidationResult with either data or field_errors set. Every failing
        field gets exactly one message.
    """
    fields = {name: raw[name] for name in FORM_FIELDS if name in raw}

    try:
        form = InvoiceForm.model_validate(fields)
    except ValidationError as e:
        field_errors: dict[str, list[str]] = {}
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else ""
            message = FIELD_MESSAGES.get(name)
            if message is None:
                continue
            messages = field_errors.setdefault(name, [])
            if message not in messages:
                messages.append(message)
        return ValidationResult(field_errors=field_errors)

    return ValidationResult(data=form)
