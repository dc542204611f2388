"""Per-email throttling of sign-in attempts.

Every attempt, successful or not, restarts the email's window, so an
address under attack stays locked until the attempts stop for a full
window. A successful sign-in clears the counter.
"""

from clients.valkey_client import ValkeyClient
from auth.config import AuthConfig
from auth.exceptions import RateLimitedError


class RateLimiter:
    """Counts sign-in attempts per email in Valkey."""

    KEY_PREFIX = "ratelimit:login:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._max_attempts = config.rate_limit_attempts
        self._window_seconds = config.rate_limit_window_minutes * 60

    def _key(self, email: str) -> str:
        return f"{self.KEY_PREFIX}{email.lower()}"

    def check_rate_limit(self, email: str) -> None:
        """Record an attempt for email.

        Raises:
            RateLimitedError: The attempt exceeds rate_limit_attempts for the window.
        """
        attempts, retry_after = self._valkey.count_in_window(self._key(email), self._window_seconds)
        if attempts > self._max_attempts:
            raise RateLimitedError(retry_after_seconds=max(retry_after, 1))

    def reset_rate_limit(self, email: str) -> None:
        self._valkey.delete(self._key(email))
