"""Cache performance counters.

Usage:
    metrics = CacheMetrics()
    metrics.record_hit("roster")
    metrics.record_miss("injuries")
    print(f"Hit rate: {metrics.hit_rate}%")
"""

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class CacheMetrics:
    """Track cache lookups for monitoring.

    Attributes:
        hits: Lookups answered by a fresh entry
        misses: Lookups with no entry at all
        stale: Lookups that found an entry past its TTL (re-fetched)
        by_kind: Per entity kind breakdown of all three outcomes
    """

    hits: int = 0
    misses: int = 0
    stale: int = 0
    by_kind: dict[str, Counter] = field(default_factory=dict)

    def _bump(self, kind: str, outcome: str) -> None:
        self.by_kind.setdefault(kind, Counter())[outcome] += 1

    def record_hit(self, kind: str) -> None:
        self.hits += 1
        self._bump(kind, "hits")

    def record_miss(self, kind: str) -> None:
        self.misses += 1
        self._bump(kind, "misses")

    def record_stale(self, kind: str) -> None:
        self.stale += 1
        self._bump(kind, "stale")

    @property
    def lookups(self) -> int:
        return self.hits + self.misses + self.stale

    @property
    def hit_rate(self) -> float:
        """Fresh hits as a percentage of all lookups (0.0 when idle)."""
        total = self.lookups
        return round(self.hits / total * 100, 1) if total > 0 else 0.0

    def to_dict(self) -> dict:
        """Export metrics as a plain dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "stale": self.stale,
            "hit_rate": self.hit_rate,
            "by_kind": {kind: dict(counts) for kind, counts in sorted(self.by_kind.items())},
        }
