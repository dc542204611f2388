"""Authentication modules."""

from auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    UnknownProviderError,
    RateLimitedError,
    UserInactiveError,
    SessionExpiredError,
)
from auth.types import User, Session, Credentials, AuthenticatedUser
from auth.config import AuthConfig
from auth.database import AuthDatabase
from auth.passwords import hash_password, verify_password
from auth.rate_limiter import RateLimiter
from auth.session import SessionManager
from auth.service import AuthService
from auth.actions import CredentialsAuthenticator
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router
