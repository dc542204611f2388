"""Authentication service - credentials sign-in and session lifecycle."""

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from auth.database import AuthDatabase
from auth.exceptions import (
    InvalidCredentialsError,
    UnknownProviderError,
    UserInactiveError,
)
from auth.passwords import hash_password, verify_password
from auth.rate_limiter import RateLimiter
from auth.session import SessionManager
from auth.types import AuthenticatedUser, Credentials

logger = logging.getLogger(__name__)

# Stands in for the stored hash of an unregistered email
_UNKNOWN_USER_HASH = hash_password("no-such-user")


class AuthService:
    """Signs users in with email and password.

    Handles:
    - Credentials sign-in (with per-email rate limiting)
    - Session issue on sign-in
    - Logout
    """

    PROVIDERS = {"credentials"}

    def __init__(
        self,
        auth_db: AuthDatabase,
        session_manager: SessionManager,
        rate_limiter: RateLimiter,
    ):
        self._auth_db = auth_db
        self._session_manager = session_manager
        self._rate_limiter = rate_limiter

    def sign_in(
        self,
        provider: str,
        form_data: Mapping[str, Any],
        ip_address: str | None = None,
    ) -> AuthenticatedUser:
        """Sign in through a provider and open a session.

        Flow:
        1. Check the provider is known
        2. Parse email/password from the form
        3. Count the attempt against the email's rate limit
        4. Look up the user and verify the password
        5. Refuse deactivated accounts
        6. Create session, update last login, reset rate limit

        Raises:
            UnknownProviderError: Provider isn't configured.
            InvalidCredentialsError: Malformed form, unknown email or wrong password.
            RateLimitedError: Too many attempts for this email.
            UserInactiveError: Account is deactivated.
        """
        if provider not in self.PROVIDERS:
            raise UnknownProviderError(f"Unknown sign-in provider '{provider}'")

        try:
            credentials = Credentials(
                email=form_data.get("email"),
                password=form_data.get("password"),
            )
        except ValidationError:
            raise InvalidCredentialsError("Malformed credentials")

        email = credentials.email.lower()
        self._rate_limiter.check_rate_limit(email)

        user = self._auth_db.get_user_by_email(email)
        stored_hash = user.password_hash if user is not None else _UNKNOWN_USER_HASH
        password_ok = verify_password(credentials.password, stored_hash)
        if user is None or not password_ok:
            logger.info("Failed sign-in for %s from %s", email, ip_address)
            raise InvalidCredentialsError("Invalid email or password")

        if not user.is_active:
            logger.info("Sign-in refused for inactive user %s", user.id)
            raise UserInactiveError("User account is deactivated")

        session = self._session_manager.create_session(user.id)
        self._auth_db.update_last_login(user.id)
        self._rate_limiter.reset_rate_limit(email)

        logger.info("User %s signed in from %s", user.id, ip_address)
        return AuthenticatedUser(user=user, session=session)

    def logout(self, session_token: str) -> None:
        """Revoke session (logout). Safe to call with invalid token."""
        self._session_manager.revoke_session(session_token)

