"""End-to-end tests for the dashboard invoice routes over a mocked database."""

from datetime import date
from uuid import UUID

import psycopg2
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from auth.config import AuthConfig
from auth.session import SessionManager

ROUTE = "/dashboard/invoices"
INVOICE_ID = "00000000-0000-0000-0000-0000000000a1"
CUSTOMER_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"

VALID_FORM = {"customerId": CUSTOMER_ID, "amount": "19.99", "status": "pending"}


@pytest.fixture
def app(db, valkey):
    return create_app(db, valkey)


@pytest.fixture
def client(app, valkey, test_user_id):
    """Logged-in client that does not follow redirects."""
    session = SessionManager(valkey, AuthConfig()).create_session(test_user_id)
    client = TestClient(app, follow_redirects=False)
    client.cookies.set("session_token", session.token)
    return client


class TestAuthRequired:

    def test_listing_without_session(self, app):
        response = TestClient(app).get(ROUTE)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"

    def test_health_is_public(self, app):
        assert TestClient(app).get("/health").json() == {"ok": True}


class TestCreate:

    def test_success_redirects_to_listing(self, client, db, invoice_row):
        db.execute_returning.return_value = [invoice_row]

        response = client.post(f"{ROUTE}/create", data=VALID_FORM)

        assert response.status_code == 303
        assert response.headers["location"] == ROUTE
        params = db.execute_returning.call_args.args[1]
        assert params[:3] == (CUSTOMER_ID, 1999, "pending")

    def test_invalid_form_returns_field_errors(self, client, db):
        response = client.post(f"{ROUTE}/create", data={"customerId": "", "amount": "0"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["message"] == "Missing Fields. Failed to create invoice."
        assert error["fields"] == {
            "customerId": ["Please select a customer."],
            "amount": ["Please enter an amount greater than $0."],
            "status": ["Please select an invoice status."],
        }
        db.execute_returning.assert_not_called()

    def test_database_failure_returns_message(self, client, db):
        db.execute_returning.side_effect = psycopg2.OperationalError("connection lost")

        response = client.post(f"{ROUTE}/create", data=VALID_FORM)

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "DATABASE_ERROR"
        assert error["message"] == "Database error: Failed to create invoice."


class TestUpdate:

    def test_success_redirects_to_listing(self, client, db, invoice_row):
        db.execute_returning.return_value = [invoice_row]

        response = client.post(f"{ROUTE}/{INVOICE_ID}/edit", data={**VALID_FORM, "status": "paid"})

        assert response.status_code == 303
        assert response.headers["location"] == ROUTE
        assert db.execute_returning.call_args.args[1] == (CUSTOMER_ID, 1999, "paid", UUID(INVOICE_ID))

    def test_missing_invoice_still_redirects(self, client, db):
        db.execute_returning.return_value = []

        response = client.post(f"{ROUTE}/{INVOICE_ID}/edit", data=VALID_FORM)

        assert response.status_code == 303

    def test_invalid_form(self, client):
        response = client.post(f"{ROUTE}/{INVOICE_ID}/edit", data={**VALID_FORM, "amount": "-5"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["message"] == "Missing Fields. Failed to update invoice."
        assert list(error["fields"]) == ["amount"]

    def test_malformed_id_rejected(self, client, db):
        response = client.post(f"{ROUTE}/not-a-uuid/edit", data=VALID_FORM)

        assert response.status_code == 422
        db.execute_returning.assert_not_called()


class TestDelete:

    def test_success_returns_message(self, client, db):
        db.execute_returning.return_value = [{"id": INVOICE_ID}]

        response = client.post(f"{ROUTE}/{INVOICE_ID}/delete")

        assert response.status_code == 200
        assert response.json()["data"] == {"message": "Invoice Deleted"}

    def test_database_failure(self, client, db):
        db.execute_returning.side_effect = psycopg2.DatabaseError("deadlock detected")

        response = client.post(f"{ROUTE}/{INVOICE_ID}/delete")

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Database error: Failed to delete invoice."


class TestListing:

    def test_second_read_served_from_cache(self, client, db, invoice_row):
        db.execute.return_value = [invoice_row]

        first = client.get(ROUTE)
        second = client.get(ROUTE)

        assert first.json()["data"] == second.json()["data"]
        assert first.json()["data"][0]["amount"] == 1999
        assert db.execute.call_count == 1

    def test_mutation_invalidates_cached_listing(self, client, db, invoice_row):
        db.execute.return_value = [invoice_row]
        db.execute_returning.return_value = [invoice_row]
        client.get(ROUTE)

        client.post(f"{ROUTE}/create", data=VALID_FORM)
        client.get(ROUTE)

        assert db.execute.call_count == 2

    def test_failed_mutation_keeps_cache(self, client, db, invoice_row):
        db.execute.return_value = [invoice_row]
        client.get(ROUTE)

        client.post(f"{ROUTE}/create", data={"customerId": ""})
        client.get(ROUTE)

        assert db.execute.call_count == 1


class TestGetInvoice:

    def test_found(self, client, db, invoice_row):
        db.execute_single.return_value = invoice_row

        response = client.get(f"{ROUTE}/{INVOICE_ID}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == INVOICE_ID
        assert data["date"] == date(2024, 6, 1).isoformat()

    def test_not_found(self, client):
        response = client.get(f"{ROUTE}/{INVOICE_ID}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
