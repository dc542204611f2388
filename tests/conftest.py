"""Shared test fixtures for the invoice dashboard test suite."""

from datetime import date
from unittest.mock import Mock, patch
from uuid import UUID

import fakeredis
import pytest

from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient


# =============================================================================
# TEST CONSTANTS
# =============================================================================

TEST_USER_ID = UUID("00000000-0000-0000-0000-000000000001")

TEST_INVOICE_ID = UUID("00000000-0000-0000-0000-0000000000a1")
TEST_CUSTOMER_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"


@pytest.fixture
def test_user_id() -> UUID:
    """The primary test user's ID."""
    return TEST_USER_ID


@pytest.fixture
def invoice_row() -> dict:
    """An invoices row as RealDictCursor returns it."""
    return {
        "id": str(TEST_INVOICE_ID),
        "customer_id": TEST_CUSTOMER_ID,
        "amount": 1999,
        "status": "pending",
        "date": date(2024, 6, 1),
    }


# =============================================================================
# INFRASTRUCTURE DOUBLES
# =============================================================================


@pytest.fixture
def db():
    """PostgresClient double. Tests set return values per query method."""
    mock = Mock(spec=PostgresClient)
    mock.execute.return_value = []
    mock.execute_single.return_value = None
    mock.execute_returning.return_value = []
    return mock


@pytest.fixture
def fake_redis():
    """In-process fakeredis connection, for asserting on raw keys and TTLs."""
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def valkey(fake_redis):
    """ValkeyClient talking to the fake_redis server."""
    with patch("clients.valkey_client.redis.from_url", return_value=fake_redis):
        client = ValkeyClient("redis://valkey.test:6379/0")
    yield client
    client.close()
