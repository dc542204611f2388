"""Process entry point: `uvicorn main:build_app --factory`."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from api.app import create_app
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from clients.vault_client import get_database_url, get_valkey_url

logger = logging.getLogger(__name__)


def build_app() -> FastAPI:
    """Connect to Postgres and Valkey with Vault-issued URLs and build the app."""
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    postgres = PostgresClient(get_database_url())
    valkey = ValkeyClient(get_valkey_url())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Invoice dashboard ready")
        yield
        PostgresClient.close_all_pools()
        valkey.close()

    return create_app(postgres, valkey, lifespan=lifespan)
