"""Database operations for authentication (users table)."""

from uuid import UUID

from clients.postgres_client import PostgresClient
from auth.types import User
from utils.timezone import now_utc

_USER_COLUMNS = "id, email, password_hash, is_active, created_at, last_login_at"


def _row_to_user(row: dict) -> User:
    return User(
        id=UUID(row["id"]) if isinstance(row["id"], str) else row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        is_active=row["is_active"],
        created_at=row["created_at"],
        last_login_at=row["last_login_at"],
    )


class AuthDatabase:
    """Database operations for authentication."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def get_user_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive)."""
        row = self._db.execute_single(
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = lower(%s)",
            (email,),
        )
        if row is None:
            return None
        return _row_to_user(row)

    def create_user(self, email: str, password_hash: str) -> User:
        """Create new user with email (lowercased) and a hashed password."""
        rows = self._db.execute_returning(
            f"""INSERT INTO users (email, password_hash)
                VALUES (lower(%s), %s)
                RETURNING {_USER_COLUMNS}""",
            (email, password_hash),
        )
        return _row_to_user(rows[0])

    def update_last_login(self, user_id: UUID) -> None:
        """Update last_login_at to current time."""
        self._db.execute_returning(
            "UPDATE users SET last_login_at = %s WHERE id = %s RETURNING id",
            (now_utc(), str(user_id)),
        )
