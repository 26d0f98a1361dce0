"""In-memory expiring cache for semantic-layer responses.

Keys are prompts, stored as their SHA-256 digest. When full, the entry
closest to expiry is evicted. Expired entries read as missing and are
purged by an optional background sweep.

Single-process only; each service instance owns its cache.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: str
    expires_at: float


def prompt_key(prompt: str) -> str:
    return hashlib.sha256(prompt.encode()).hexdigest()


class ResponseCache:
    """Bounded TTL store. ``get``/``set`` are safe from any thread."""

    def __init__(
        self,
        ttl_seconds: float = 3600,
        max_entries: int = 1000,
        sweep_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max(1, max_entries)
        self._sweep_seconds = sweep_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._sweeper: asyncio.Task[None] | None = None

    def get(self, prompt: str) -> str | None:
        key = prompt_key(prompt)
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or self._clock() >= entry.expires_at:
            return None
        return entry.value

    def set(self, prompt: str, value: str) -> None:
        key = prompt_key(prompt)
        with self._lock:
            if key not in self._entries and (
                len(self._entries) >= self._max_entries
            ):
                self._evict_nearest_expiry()
            self._entries[key] = _Entry(
                value=value, expires_at=self._clock() + self._ttl
            )

    def delete(self, prompt: str) -> None:
        with self._lock:
            self._entries.pop(prompt_key(prompt), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def purge_expired(self) -> int:
        """Drop expired entries; returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [
                k for k, e in self._entries.items() if now >= e.expires_at
            ]
            for k in expired:
                del self._entries[k]
        if expired:
            logger.debug("event=cache_sweep removed=%d", len(expired))
        return len(expired)

    def _evict_nearest_expiry(self) -> None:
        # Caller holds the lock.
        if not self._entries:
            return
        victim = min(
            self._entries, key=lambda k: self._entries[k].expires_at
        )
        del self._entries[victim]

    # ── Background sweep ─────────────────────────────────

    def start(self) -> None:
        """Start the periodic sweep on the running loop. Idempotent."""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.get_running_loop().create_task(
            self._sweep_loop()
        )

    async def stop(self) -> None:
        task = self._sweeper
        self._sweeper = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_seconds)
            self.purge_expired()
