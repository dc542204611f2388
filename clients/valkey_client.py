"""
Valkey store for dashboard state that outlives a request: login sessions,
login attempt counters and the cached invoice listing.

Values are JSON documents under namespaced keys ("session:", "view:",
"ratelimit:login:"). Connection errors propagate; there is no in-memory
fallback.
"""

import json
import logging
from typing import Any

import redis

logger = logging.getLogger(__name__)


class ValkeyClient:
    """
    JSON documents and windowed counters over redis-py.

    Usage:
        valkey = ValkeyClient(get_valkey_url())
        valkey.set_json("view:/dashboard/invoices", rows, expire_seconds=300)
        rows = valkey.get_json("view:/dashboard/invoices")  # None once invalidated
        attempts, retry_after = valkey.count_in_window("ratelimit:login:a@b.c", 900)
    """

    def __init__(self, url: str):
        """
        Connect and ping once.

        Raises:
            redis.ConnectionError: Valkey is unreachable
        """
        self._client = redis.from_url(url, decode_responses=True)
        self._client.ping()
        logger.info("Connected to Valkey")

    def get_json(self, key: str) -> Any:
        """
        Decode the document stored at key, or None if it's absent or expired.

        Raises ValueError if the stored value isn't JSON.
        """
        value = self._client.get(key)
        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in key '{key}': {e}")

    def set_json(self, key: str, value: dict | list, expire_seconds: int | None = None) -> None:
        """Store value as JSON, replacing any previous document and TTL."""
        self._client.set(key, json.dumps(value), ex=expire_seconds)

    def delete(self, key: str) -> bool:
        """Drop key. Returns False if there was nothing to drop."""
        return self._client.delete(key) > 0

    def incr(self, key: str) -> int:
        """Add one to the counter at key, creating it at 1. Returns the new value."""
        return self._client.incr(key)

    def count_in_window(self, key: str, window_seconds: int) -> tuple[int, int]:
        """
        Count one event and restart the key's window.

        INCR, EXPIRE and TTL run in one MULTI so concurrent callers each see
        their own count.

        Returns:
            (events in the current window, seconds until the window closes)
        """
        pipe = self._client.pipeline(transaction=True)
        pipe.incr(key)
        pipe.expire(key, window_seconds)
        pipe.ttl(key)
        count, _, ttl = pipe.execute()
        return count, ttl

    def close(self) -> None:
        self._client.close()
        logger.info("Valkey connection closed")
