"""Once-per-key bookkeeping for package-level advisories."""

from __future__ import annotations

import threading
from typing import Set


class FirstOccurrenceTracker:
    """Remembers keys for the lifetime of a session."""

    def __init__(self) -> None:
        self._seen: Set[str] = set()
        self._lock = threading.Lock()

    def first_time(self, key: str) -> bool:
        """Return True the first time ``key`` is seen, False on every later call."""
        with self._lock:
            if key in self._seen:
                return False
            self._seen.add(key)
            return True

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)


__all__ = ["FirstOccurrenceTracker"]
