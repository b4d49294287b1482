"""In-memory TTL cache client.

A small reference client that satisfies every optional capability the
runner knows about (:class:`~clikit.core.protocols.CacheClient`,
:class:`~clikit.core.protocols.CacheDisable`,
:class:`~clikit.core.protocols.Disposable`).  Used by the
``python -m clikit`` demo and by tests; real tools supply their own
client backed by an HTTP API or a database.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Entry:
    value: Any
    expires_at: float


class MemoryCacheClient:
    """Dictionary-backed cache with per-entry expiry.

    Parameters
    ----------
    ttl_seconds:
        Lifetime of each entry.  Must be positive.
    clock:
        Monotonic time source; injectable for deterministic tests.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl: float = ttl_seconds
        self._clock: Callable[[], float] = clock
        self._entries: dict[str, _Entry] = {}
        self._enabled: bool = True
        self._closed: bool = False
        self._hits: int = 0
        self._misses: int = 0

    # ------------------------------------------------------------------
    # Cache access
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any | None:
        """Return the cached value for *key*, or ``None`` on a miss."""
        if not self._enabled:
            self._misses += 1
            return None
        entry = self._entries.get(key)
        if entry is None or entry.expires_at <= self._clock():
            self._entries.pop(key, None)
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*; ignored while the cache is disabled."""
        if not self._enabled:
            return
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + self._ttl)

    # ------------------------------------------------------------------
    # Capabilities used by the runner and the cache commands
    # ------------------------------------------------------------------

    def disable_cache(self) -> None:
        logger.debug("Cache disabled for this run")
        self._enabled = False

    def get_cache_stats(self) -> dict[str, Any]:
        now = self._clock()
        live = sum(1 for entry in self._entries.values() if entry.expires_at > now)
        return {
            "enabled": self._enabled,
            "entries": live,
            "hits": self._hits,
            "misses": self._misses,
            "ttlSeconds": self._ttl,
        }

    def clear_cache(self) -> int:
        cleared = len(self._entries)
        self._entries.clear()
        return cleared

    def invalidate_cache_key(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def disconnect(self) -> None:
        """Release the cache; further calls are no-ops."""
        if self._closed:
            return
        self._entries.clear()
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed
