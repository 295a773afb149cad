"""Counters for lookups that came back empty."""

from __future__ import annotations

import threading
from collections import Counter


class ZeroMatchLog:
    """Thread-safe tallies of brand, division, and location misses.

    Shared by the indexes and the engine; requests only ever add to it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._brands: Counter[str] = Counter()
        self._unmapped_divisions: Counter[str] = Counter()
        self._empty_divisions: Counter[str] = Counter()
        self._locations = 0

    def brand_miss(self, brand: str) -> None:
        with self._lock:
            self._brands[brand] += 1

    def unmapped_division(self, label: str) -> None:
        with self._lock:
            self._unmapped_divisions[label] += 1

    def empty_division(self, label: str) -> None:
        with self._lock:
            self._empty_divisions[label] += 1

    def location_miss(self) -> None:
        with self._lock:
            self._locations += 1

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            return {
                "brand_misses": dict(self._brands),
                "unmapped_divisions": dict(self._unmapped_divisions),
                "empty_divisions": dict(self._empty_divisions),
                "location_misses": self._locations,
            }
