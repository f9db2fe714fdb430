"""
BountyBoard - TTL cache

Holds slow-changing listings (organization repositories, the organization
directory) for a fixed TTL. The clock is injected so expiry is testable
without sleeping.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30 * 60


def is_expired(now: float, stored_at: float, ttl: float) -> bool:
    """True once ``ttl`` seconds or more have passed since ``stored_at``."""
    return now - stored_at >= ttl


@dataclass
class CacheEntry:
    value: Any
    stored_at: float


class TTLCache:
    """Key/value cache with wall-clock expiry."""

    def __init__(self, ttl: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if is_expired(self._clock(), entry.stored_at, self.ttl):
            logger.debug(f"Cache entry expired: {key}")
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one key, or everything when no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)
