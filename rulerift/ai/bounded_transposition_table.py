"""Bounded transposition memo for one adversarial search episode."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models import Move


class Bound(str, Enum):
    """How a stored score relates to the true minimax value."""

    EXACT = "exact"
    LOWER = "lower"  # search failed high; true value >= score
    UPPER = "upper"  # search failed low; true value <= score


@dataclass(slots=True)
class MemoEntry:
    score: float
    depth: int
    bound: Bound
    move: Optional[Move] = None


class BoundedTranspositionTable:
    """LRU-evicting memo keyed by canonical position strings.

    A table lives inside one search context and is dropped with it; it is
    never shared across decisions.
    """

    def __init__(self, max_entries: int = 200_000) -> None:
        self._table: OrderedDict[str, MemoEntry] = OrderedDict()
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: str) -> Optional[MemoEntry]:
        """Return the entry for ``key`` and mark it recently used."""
        entry = self._table.get(key)
        if entry is None:
            self.misses += 1
            return None
        self._table.move_to_end(key)
        self.hits += 1
        return entry

    def put(self, key: str, entry: MemoEntry) -> None:
        """Store ``entry``, evicting the least recently used one if full.

        A shallower result never replaces a deeper one for the same key.
        """
        existing = self._table.get(key)
        if existing is not None:
            self._table.move_to_end(key)
            if existing.depth > entry.depth:
                return
        elif len(self._table) >= self.max_entries:
            self._table.popitem(last=False)
            self.evictions += 1
        self._table[key] = entry

    def __contains__(self, key: str) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def clear(self) -> None:
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def stats(self) -> dict:
        """Return entries, hits, misses, evictions and hit_rate."""
        total_lookups = self.hits + self.misses
        return {
            "entries": len(self._table),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hits / total_lookups if total_lookups else 0.0,
        }
