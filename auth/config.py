"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    All durations are in their natural units (minutes for short durations,
    hours for longer ones) to make configuration intuitive.
    """

    # Session settings
    session_expiry_hours: int = Field(
        default=24 * 30,
        description="Session lifetime in hours, slid forward on activity",
        ge=1,
        le=2160,
    )
    session_cookie_secure: bool = Field(
        default=True,
        description="Send the session cookie over HTTPS only",
    )

    # Login rate limiting
    rate_limit_attempts: int = Field(
        default=5,
        description="Max login attempts per email per window",
        ge=1,
        le=20,
    )
    rate_limit_window_minutes: int = Field(
        default=15,
        description="Rate limit window duration",
        ge=5,
        le=60,
    )

    # Where a successful login lands
    login_redirect: str = Field(
        default="/dashboard",
        description="Route the browser is sent to after signing in",
    )
