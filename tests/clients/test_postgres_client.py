"""Tests for PostgresClient - pooling, parameter conversion and rollback."""

from datetime import date
from unittest.mock import MagicMock, patch
from uuid import UUID

import psycopg2
import psycopg2.pool
import pytest

from clients.postgres_client import PostgresClient

DSN = "postgresql://dashboard@db.test/invoices"
INVOICE_ID = UUID("00000000-0000-0000-0000-0000000000a1")


@pytest.fixture
def pool():
    """Patched ThreadedConnectionPool handing out one mock connection."""
    with patch("clients.postgres_client.psycopg2.pool.ThreadedConnectionPool") as pool_cls:
        pool = pool_cls.return_value
        conn = MagicMock()
        pool.getconn.return_value = conn
        yield pool
    PostgresClient.close_all_pools()


@pytest.fixture
def conn(pool):
    return pool.getconn.return_value


@pytest.fixture
def cursor(conn):
    return conn.cursor.return_value.__enter__.return_value


@pytest.fixture
def client(pool):
    return PostgresClient(DSN)


class TestPool:

    def test_pool_shared_per_url(self, pool):
        with patch("clients.postgres_client.psycopg2.pool.ThreadedConnectionPool") as pool_cls:
            PostgresClient("postgresql://other@db.test/one")
            PostgresClient("postgresql://other@db.test/one")

        assert pool_cls.call_count == 1

    def test_connection_returned_to_pool(self, client, pool, conn, cursor):
        cursor.description = None

        client.execute("SELECT 1")

        pool.putconn.assert_called_once_with(conn)

    def test_empty_pool_raises(self, client, pool):
        pool.getconn.return_value = None

        with pytest.raises(psycopg2.pool.PoolError):
            client.execute("SELECT 1")


class TestExecute:

    def test_returns_rows_as_dicts(self, client, conn, cursor):
        cursor.description = [("id",)]
        cursor.fetchall.return_value = [{"id": "a1"}]

        assert client.execute("SELECT id FROM invoices") == [{"id": "a1"}]
        conn.commit.assert_called_once()

    def test_no_result_set_returns_empty_list(self, client, cursor):
        cursor.description = None
        assert client.execute("SELECT 1 WHERE false") == []

    def test_execute_single_first_row_or_none(self, client, cursor):
        cursor.description = [("id",)]
        cursor.fetchall.return_value = []
        assert client.execute_single("SELECT id FROM invoices") is None

        cursor.fetchall.return_value = [{"id": "a1"}, {"id": "a2"}]
        assert client.execute_single("SELECT id FROM invoices") == {"id": "a1"}

    def test_params_converted(self, client, cursor):
        cursor.fetchall.return_value = []

        client.execute_returning(
            "UPDATE invoices SET date = %s WHERE id = %s RETURNING id",
            (date(2024, 6, 1), INVOICE_ID),
        )

        assert cursor.execute.call_args.args[1] == ("2024-06-01", str(INVOICE_ID))


class TestRollback:

    def test_failed_statement_rolls_back(self, client, pool, conn, cursor):
        cursor.execute.side_effect = psycopg2.IntegrityError("amount_positive")

        with pytest.raises(psycopg2.IntegrityError):
            client.execute_returning("INSERT INTO invoices ...", ("c1", 0, "pending"))

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        pool.putconn.assert_called_once_with(conn)
