"""In-memory cache for the most recently fetched publication list."""
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .config_loader import Config
from .models import Publication

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    data: Tuple[Publication, ...]
    timestamp: float


class PublicationCache:
    """
    Single-slot, time-boxed store for the sorted publication list.

    The slot holds exactly one generation of data. ``store`` replaces it with
    a single attribute assignment, so readers always see either the old or the
    new entry, never a mix. Expired data is kept around so it can still be
    served when a refresh fails.
    """

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            ttl: Seconds an entry is served without refreshing
            clock: Monotonic time source, injectable for tests
        """
        self.ttl = Config.CACHE_TTL_SECONDS if ttl is None else ttl
        self._clock = clock
        self._entry: Optional[CacheEntry] = None

    @property
    def is_empty(self) -> bool:
        return self._entry is None

    def age(self) -> Optional[float]:
        """Seconds since the last store, or None when nothing is cached."""
        entry = self._entry
        if entry is None:
            return None
        return self._clock() - entry.timestamp

    def is_fresh(self) -> bool:
        age = self.age()
        return age is not None and age < self.ttl

    def get_fresh(self) -> Optional[List[Publication]]:
        """Return cached data younger than the TTL, else None."""
        entry = self._entry
        if entry is None or self._clock() - entry.timestamp >= self.ttl:
            return None
        return list(entry.data)

    def get_stale(self) -> Optional[List[Publication]]:
        """Return cached data regardless of age, or None when nothing is cached."""
        entry = self._entry
        if entry is None:
            return None
        return list(entry.data)

    def store(self, data: Sequence[Publication]) -> None:
        """Replace the cached generation with ``data``."""
        self._entry = CacheEntry(data=tuple(data), timestamp=self._clock())
        logger.debug(f"Cached {len(data)} publications")
