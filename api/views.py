"""Cached page views and redirects used by the invoice actions."""

import logging
from typing import Any

from starlette.responses import RedirectResponse

from clients.valkey_client import ValkeyClient

logger = logging.getLogger(__name__)


class ValkeyViewCache:
    """
    Rendered route payloads cached in Valkey, one generation at a time.

    Each route has a generation counter. Payloads are stored under the
    generation they were rendered from, and invalidate() moves the route to a
    new generation. A render that read the database before an invalidation
    therefore files its payload under the old generation, where no reader
    looks, and it expires with its TTL.

    Usage:
        cache = ValkeyViewCache(valkey, ttl_seconds=300)
        generation = cache.generation("/dashboard/invoices")
        payload = cache.get("/dashboard/invoices", generation)
        if payload is None:
            payload = render()
            cache.put("/dashboard/invoices", generation, payload)

        cache.invalidate("/dashboard/invoices")  # next get() misses
    """

    KEY_PREFIX = "view:"

    def __init__(self, valkey: ValkeyClient, ttl_seconds: int):
        self._valkey = valkey
        self._ttl_seconds = ttl_seconds

    def _generation_key(self, route: str) -> str:
        return f"{self.KEY_PREFIX}{route}:generation"

    def _payload_key(self, route: str, generation: int) -> str:
        return f"{self.KEY_PREFIX}{route}@{generation}"

    def generation(self, route: str) -> int:
        """Current generation of route. Read this before rendering."""
        return self._valkey.get_json(self._generation_key(route)) or 0

    def get(self, route: str, generation: int) -> Any | None:
        """Payload rendered for this generation, or None."""
        return self._valkey.get_json(self._payload_key(route, generation))

    def put(self, route: str, generation: int, payload: dict | list) -> None:
        """Cache a payload rendered from data read at `generation`."""
        self._valkey.set_json(
            self._payload_key(route, generation), payload, expire_seconds=self._ttl_seconds
        )

    def invalidate(self, route: str) -> None:
        """Move route to a new generation so the next read renders it again."""
        generation = self._valkey.incr(self._generation_key(route))
        logger.debug("Invalidated cached view %s (generation %d)", route, generation)


class RedirectNavigator:
    """Sends the browser to another route after a form post."""

    def redirect_to(self, route: str) -> RedirectResponse:
        # 303 so the browser follows up with GET, not a resubmitted POST
        return RedirectResponse(url=route, status_code=303)
