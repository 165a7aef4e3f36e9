"""Tick-indexed sample series for run statistics.

The engine records the waiting-line length after every tick and the wait
time of every customer at assignment. Data keeps those (tick, value) pairs
for post-run analysis and plotting.
"""

from __future__ import annotations

import builtins
import statistics
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    import pandas as pd


class Data:
    """Container for (tick, value) samples with aggregation helpers.

    Samples are stored in append order. The engine appends with
    non-decreasing ticks, so the series is time ordered.

    Args:
        name: Label used when the series is exported.
    """

    def __init__(self, name: str = "value") -> None:
        self.name = name
        self._samples: List[Tuple[int, float]] = []

    def add_stat(self, value: float, tick: int) -> None:
        """Record ``value`` observed at ``tick``."""
        self._samples.append((tick, value))

    def clear(self) -> None:
        self._samples.clear()

    @property
    def values(self) -> List[Tuple[int, float]]:
        """All samples as (tick, value) tuples."""
        return self._samples

    def between(self, start_tick: int, end_tick: int) -> Data:
        """Return a new Data with samples in [start_tick, end_tick)."""
        result = Data(self.name)
        result._samples = [(t, v) for t, v in self._samples if start_tick <= t < end_tick]
        return result

    # === Aggregations ===

    def mean(self) -> float:
        """Mean of sample values. Returns 0.0 if empty."""
        if not self._samples:
            return 0.0
        return self.sum() / len(self._samples)

    def min(self) -> float:
        """Minimum sample value. Returns 0.0 if empty."""
        if not self._samples:
            return 0.0
        return builtins.min(v for _, v in self._samples)

    def max(self) -> float:
        """Maximum sample value. Returns 0.0 if empty."""
        if not self._samples:
            return 0.0
        return builtins.max(v for _, v in self._samples)

    def sum(self) -> float:
        return builtins.sum(v for _, v in self._samples)

    def count(self) -> int:
        return len(self._samples)

    def std(self) -> float:
        """Population standard deviation. Returns 0.0 if fewer than 2 samples."""
        if len(self._samples) < 2:
            return 0.0
        return statistics.pstdev(v for _, v in self._samples)

    def percentile(self, p: float) -> float:
        """Linearly interpolated percentile, ``p`` in [0, 1]. Returns 0.0 if empty."""
        vals = sorted(v for _, v in self._samples)
        if not vals:
            return 0.0
        if p <= 0:
            return float(vals[0])
        if p >= 1:
            return float(vals[-1])
        pos = p * (len(vals) - 1)
        lo = int(pos)
        hi = builtins.min(lo + 1, len(vals) - 1)
        frac = pos - lo
        return float(vals[lo] * (1.0 - frac) + vals[hi] * frac)

    # === Convenience ===

    def ticks(self) -> list[int]:
        return [t for t, _ in self._samples]

    def raw_values(self) -> list[float]:
        return [v for _, v in self._samples]

    def to_series(self) -> pd.Series:
        """Export as a pandas Series indexed by tick."""
        import pandas as pd

        return pd.Series(
            self.raw_values(),
            index=pd.Index(self.ticks(), name="tick"),
            name=self.name,
        )

    def __len__(self) -> int:
        return len(self._samples)

    def __bool__(self) -> bool:
        return len(self._samples) > 0
