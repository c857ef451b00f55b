"""
Listing cache and the path invalidation signal.

Listing pages keep their rows in a small per-process cache keyed by logical
path (``/dashboard/invoices``, ``/dashboard/customers``). After a successful
mutation the service layer calls ``revalidate_path(path)``, which emits the
``path-revalidated`` signal; the cache is one receiver, and anything else
(e.g. a CDN purge hook) can subscribe the same way.

Entries also expire after ``LISTING_CACHE_TTL_SECONDS`` so that other worker
processes, which never see this process's signal, converge on fresh data.
"""

import logging
import os
import time
from typing import Any, Callable, Dict, Tuple

from blinker import Namespace

logger = logging.getLogger(__name__)

_signals = Namespace()

#: Sent with the logical path as sender after any successful mutation.
path_revalidated = _signals.signal("path-revalidated")


def get_listing_cache_ttl() -> float:
    """
    Environment Variables:
        LISTING_CACHE_TTL_SECONDS: Seconds a cached listing stays valid.
            Default: 30. Zero disables caching.
    """
    try:
        return max(0.0, float(os.getenv("LISTING_CACHE_TTL_SECONDS", "30")))
    except ValueError:
        return 30.0


class ListingCache:
    """Path-keyed cache of listing rows."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}

    def get_or_load(self, path: str, loader: Callable[[], Any]) -> Any:
        """Return the cached rows for ``path``, calling ``loader`` on a miss."""
        if self.ttl_seconds <= 0:
            return loader()

        entry = self._entries.get(path)
        now = self._clock()
        if entry is not None and now - entry[0] < self.ttl_seconds:
            return entry[1]

        value = loader()
        self._entries[path] = (now, value)
        return value

    def invalidate(self, path: str) -> None:
        self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: str) -> bool:
        return path in self._entries


listing_cache = ListingCache(get_listing_cache_ttl())


@path_revalidated.connect
def _drop_cached_listing(path: str, **kwargs) -> None:
    listing_cache.invalidate(path)


def revalidate_path(path: str) -> None:
    """Signal that the listing at ``path`` is stale.

    Best-effort: a failing receiver is logged and never propagates to the
    request that triggered the mutation.
    """
    try:
        path_revalidated.send(path)
    except Exception as e:
        logger.warning(
            "Path revalidation receiver failed",
            extra={"context": {"path": path, "error": str(e)}},
            exc_info=True,
        )
