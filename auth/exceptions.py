"""Typed exceptions for auth failures.

Every AuthError carries a `kind` naming the failure class. The login form
maps kinds to user-facing text; anything that isn't an AuthError is a bug or
an outage and is left to propagate.
"""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""

    kind = "AuthError"


class InvalidCredentialsError(AuthError):
    """
    Email/password pair didn't match an account.

    Raised for unknown emails, wrong passwords and malformed submissions alike
    so the response never reveals which one it was.
    """

    kind = "CredentialsSignin"


class UnknownProviderError(AuthError):
    """Sign-in was requested through a provider that isn't configured."""

    kind = "Configuration"


class RateLimitedError(AuthError):
    """Too many attempts. Client should wait before retrying."""

    kind = "RateLimited"

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"Rate limited. Retry after {retry_after_seconds} seconds.")


class UserInactiveError(AuthError):
    """User account is deactivated. Login not permitted."""

    kind = "AccessDenied"


class SessionExpiredError(AuthError):
    """Session has expired and user must re-authenticate."""

    kind = "SessionExpired"
