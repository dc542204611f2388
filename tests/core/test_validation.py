"""Tests for core/validation.py - invoice form validation."""

from decimal import Decimal

import pytest

from core.models import InvoiceStatus
from core.validation import validate_invoice_form, FIELD_MESSAGES


def form(**overrides):
    fields = {"customerId": "c1", "amount": "19.99", "status": "pending"}
    fields.update(overrides)
    return fields


class TestValidForm:
    """Well-formed submissions produce normalized data."""

    def test_valid_form_returns_data(self):
        result = validate_invoice_form(form())

        assert result.valid is True
        assert result.field_errors == {}
        assert result.data.customer_id == "c1"
        assert result.data.amount == Decimal("19.99")
        assert result.data.status == InvoiceStatus.PENDING

    def test_amount_converts_to_cents(self):
        result = validate_invoice_form(form(amount="19.99"))
        assert result.data.amount_cents == 1999

    def test_paid_status_accepted(self):
        result = validate_invoice_form(form(status="paid"))
        assert result.data.status == InvoiceStatus.PAID

    def test_whitespace_trimmed(self):
        result = validate_invoice_form(form(customerId="  c1  ", amount=" 5 "))
        assert result.data.customer_id == "c1"
        assert result.data.amount_cents == 500

    def test_extra_fields_ignored(self):
        result = validate_invoice_form(form(id="ignored", date="2020-01-01"))
        assert result.valid is True

    def test_validation_is_pure(self):
        raw = form()
        first = validate_invoice_form(raw)
        second = validate_invoice_form(raw)
        assert first.data == second.data
        assert raw == form()


class TestCustomerId:
    """customerId must be a non-empty string."""

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_customer_rejected(self, value):
        result = validate_invoice_form(form(customerId=value))

        assert result.valid is False
        assert result.field_errors == {"customerId": ["Please select a customer."]}

    def test_missing_customer_rejected(self):
        raw = form()
        del raw["customerId"]

        result = validate_invoice_form(raw)

        assert result.field_errors["customerId"] == [FIELD_MESSAGES["customerId"]]

    def test_none_customer_rejected(self):
        result = validate_invoice_form(form(customerId=None))
        assert "customerId" in result.field_errors

    @pytest.mark.parametrize("value", ["c1", "3958dc9e-712f-4377-85e9-fec4b6a6442a", "CUST-0042"])
    def test_any_reference_accepted(self, value):
        result = validate_invoice_form(form(customerId=value))
        assert result.data.customer_id == value


class TestAmount:
    """amount must coerce to a number greater than 0."""

    @pytest.mark.parametrize("value", ["0", "-1", "-0.01", "", "abc", "NaN", "Infinity", "1.005", "21474836.48", "1e30"])
    def test_bad_amount_rejected(self, value):
        result = validate_invoice_form(form(amount=value))

        assert result.valid is False
        assert result.field_errors == {"amount": ["Please enter an amount greater than $0."]}

    def test_missing_amount_rejected(self):
        raw = form()
        del raw["amount"]

        result = validate_invoice_form(raw)

        assert result.field_errors["amount"] == [FIELD_MESSAGES["amount"]]

    @pytest.mark.parametrize("value,cents", [("0.01", 1), ("100", 10000), ("1e2", 10000), ("0.1", 10), ("21474836.47", 2147483647)])
    def test_positive_amounts_accepted(self, value, cents):
        result = validate_invoice_form(form(amount=value))
        assert result.data.amount_cents == cents


class TestStatus:
    """status must be pending or paid."""

    @pytest.mark.parametrize("value", ["", "overdue", "PAID", None])
    def test_bad_status_rejected(self, value):
        result = validate_invoice_form(form(status=value))

        assert result.valid is False
        assert result.field_errors == {"status": ["Please select an invoice status."]}


class TestMultipleErrors:
    """Errors from several fields are reported together."""

    def test_all_fields_invalid(self):
        result = validate_invoice_form({})

        assert result.valid is False
        assert set(result.field_errors) == {"customerId", "amount", "status"}
        for messages in result.field_errors.values():
            assert len(messages) == 1
