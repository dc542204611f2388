#!/usr/bin/env python3
"""
Create a dashboard login.

The password is prompted for, or read from stdin with --password-stdin so it
never appears in shell history. The database URL comes from Vault, like the
web app's.

Usage:
    invoice-dashboard-create-user admin@example.com
    echo "$PASSWORD" | invoice-dashboard-create-user admin@example.com --password-stdin
"""

import argparse
import getpass
import logging
import sys

import psycopg2.errors
from dotenv import load_dotenv
from pydantic import ValidationError

from auth.database import AuthDatabase
from auth.passwords import hash_password
from auth.types import Credentials
from clients.postgres_client import PostgresClient
from clients.vault_client import get_database_url

logger = logging.getLogger(__name__)


def _read_password(from_stdin: bool) -> str:
    if from_stdin:
        return sys.stdin.readline().rstrip("\n")
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        raise SystemExit("Passwords do not match")
    return password


def create_user(auth_db: AuthDatabase, email: str, password: str):
    """Validate the pair the way the login form does, then store it."""
    credentials = Credentials(email=email, password=password)
    return auth_db.create_user(credentials.email, hash_password(credentials.password))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a dashboard login")
    parser.add_argument("email", help="Login email (stored lowercased)")
    parser.add_argument(
        "--password-stdin",
        action="store_true",
        help="Read the password from the first line of stdin instead of prompting",
    )
    args = parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    password = _read_password(args.password_stdin)
    auth_db = AuthDatabase(PostgresClient(get_database_url()))

    try:
        user = create_user(auth_db, args.email, password)
    except ValidationError as e:
        print(f"Invalid email or password: {e.errors()[0]['msg']}", file=sys.stderr)
        return 2
    except psycopg2.errors.UniqueViolation:
        print(f"A user with email {args.email.lower()} already exists", file=sys.stderr)
        return 1
    finally:
        PostgresClient.close_all_pools()

    logger.info("Created user %s (%s)", user.id, user.email)
    return 0


if __name__ == "__main__":
    sys.exit(main())
