"""Time-bounded in-memory cache for documentation lookups.

Entries expire ``ttl`` seconds after insertion.  Expired entries are only
dropped when they are read; there is no background sweep.  An optional
``max_entries`` bound evicts the oldest insertion first.  The clock is
injected so expiry can be tested without sleeping.  Not thread-safe: the
cache is owned by a single lookup component.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Any, Callable, Optional

DEFAULT_TTL = 60.0 * 60.0


class TTLCache:
    """Key -> value cache with per-entry insertion timestamps."""

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._values: OrderedDict[str, Any] = OrderedDict()
        self._inserted_at: dict[str, float] = {}

    def _expired(self, key: str) -> bool:
        return self._clock() - self._inserted_at[key] >= self.ttl

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for *key*, or *default* if missing or expired."""
        if key not in self._values:
            return default
        if self._expired(key):
            self._drop(key)
            return default
        return self._values[key]

    def set(self, key: str, value: Any) -> None:
        """Store *value*, restarting its lifetime."""
        if key in self._values:
            self._drop(key)
        self._values[key] = value
        self._inserted_at[key] = self._clock()
        if self.max_entries is not None:
            while len(self._values) > self.max_entries:
                oldest = next(iter(self._values))
                self._drop(oldest)

    def clear(self) -> None:
        """Remove every entry."""
        self._values.clear()
        self._inserted_at.clear()

    def stats(self) -> dict[str, Any]:
        """Entry count and keys, including entries that expired but were never read."""
        return {"size": len(self._values), "entries": list(self._values)}

    def _drop(self, key: str) -> None:
        del self._values[key]
        del self._inserted_at[key]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._values and not self._expired(key)

    def __len__(self) -> int:
        return len(self._values)
