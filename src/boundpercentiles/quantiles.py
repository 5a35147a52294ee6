"""Fixed-memory percentile estimation over a bounded value domain.

The [min, max] interval is split into floor(1 / eps) equal-width buckets.
Inserting a value bumps the counter of the bucket it falls in; a percentile
query walks the buckets until the running total reaches the requested share
of the population and reports that bucket's midpoint.

Memory O(1 / eps), insert O(1), percentile O(1 / eps). The reported value is
off by at most half a bucket width, which is never more than (max - min) * eps.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .config import (
    DEFAULT_EPS,
    EstimatorConfig,
    OutOfBoundsStrategy,
    validate_params,
)
from .logutil import get_logger


class PercentileStatus(Enum):
    OK = "ok"
    EMPTY = "empty"  # nothing inserted yet
    INVALID = "invalid"  # p outside [0, 100]


@dataclass(frozen=True)
class PercentileResult:
    status: PercentileStatus
    value: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.status is PercentileStatus.OK


class BoundPercentiles:
    """
    Histogram-backed percentile tracker for streams with known bounds.

    Values outside [min_value, max_value] are either dropped ("ignore", the
    default) or clamped to the nearest bound ("trim"). Queries return None
    both when nothing has been inserted and when p is outside [0, 100];
    use query() to tell the two apart.

    Not thread-safe: callers sharing an instance must serialize access.
    """

    def __init__(
        self,
        min_value: float,
        max_value: float,
        eps: float = DEFAULT_EPS,
        out_of_bounds_strategy: OutOfBoundsStrategy | str | None = None,
    ) -> None:
        validate_params(min_value, max_value, eps)
        self.min_value = min_value
        self.max_value = max_value
        self.eps = eps
        self.strategy = OutOfBoundsStrategy.parse(out_of_bounds_strategy)
        self.bucket_count: int = math.floor(1 / eps)
        # span may be inf for extreme bounds; the half span never is
        self._span = max_value - min_value
        self._half_span = max_value / 2 - min_value / 2
        self._buckets: List[int] = [0] * self.bucket_count
        self.total_count: int = 0
        # Out-of-bounds bookkeeping
        self.values_dropped: int = 0
        self.values_trimmed: int = 0
        self._log = get_logger()
        self._log.debug(
            "estimator over [%s, %s] with %d buckets, strategy=%s",
            min_value,
            max_value,
            self.bucket_count,
            self.strategy.value,
        )

    @classmethod
    def from_config(cls, cfg: EstimatorConfig) -> "BoundPercentiles":
        return cls(cfg.min_value, cfg.max_value, cfg.eps, cfg.out_of_bounds_strategy)

    @property
    def config(self) -> EstimatorConfig:
        return EstimatorConfig(
            min_value=self.min_value,
            max_value=self.max_value,
            eps=self.eps,
            out_of_bounds_strategy=self.strategy.value,
        )

    @property
    def buckets(self) -> Tuple[int, ...]:
        return tuple(self._buckets)

    def bucket_index(self, value: float) -> Optional[int]:
        """Return the bucket an in-bound value maps to, or None if it is out of bounds."""
        if not (self.min_value <= value <= self.max_value):
            return None
        span = self._span
        if span == 0:
            return 0
        scaled = self.bucket_count * (value - self.min_value)
        if math.isfinite(scaled) and math.isfinite(span):
            idx = math.floor(scaled / span)
        else:
            # Bounds near the float limits: work on halves so nothing overflows
            ratio = (value / 2 - self.min_value / 2) / self._half_span
            idx = math.floor(ratio * self.bucket_count)
        # value == max lands one past the end; keep it in the rightmost bucket
        return min(idx, self.bucket_count - 1)

    def bucket_midpoint(self, index: int) -> float:
        """Representative value reported for bucket `index`."""
        if not 0 <= index < self.bucket_count:
            raise IndexError(f"bucket index {index} out of range 0..{self.bucket_count - 1}")
        offset = self._span * (index + 0.5)
        if math.isfinite(offset):
            return self.min_value + offset / self.bucket_count
        frac = (index + 0.5) / self.bucket_count
        return (self.min_value / 2 + self._half_span * frac) * 2

    def insert(self, value: float) -> None:
        """Record one observation. Never raises."""
        if value < self.min_value:
            if self.strategy is OutOfBoundsStrategy.IGNORE:
                self._drop(value)
                return
            value = self.min_value
            self.values_trimmed += 1
        elif value > self.max_value:
            if self.strategy is OutOfBoundsStrategy.IGNORE:
                self._drop(value)
                return
            value = self.max_value
            self.values_trimmed += 1

        idx = self.bucket_index(value)
        if idx is None:  # NaN compares neither below nor above the bounds
            self._drop(value)
            return
        self._buckets[idx] += 1
        self.total_count += 1

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            self.insert(value)

    def _drop(self, value: float) -> None:
        self.values_dropped += 1
        if self._log.isEnabledFor(logging.DEBUG):
            self._log.debug(
                "dropping %r outside [%s, %s]", value, self.min_value, self.max_value
            )

    def query(self, p: float) -> PercentileResult:
        """Calculate the `p`-th percentile, reporting why no value is available."""
        # Negated form also rejects NaN
        if not (0 <= p <= 100):
            self._log.debug("percentile %r outside [0, 100]", p)
            return PercentileResult(PercentileStatus.INVALID)

        buckets = self._buckets
        # First non-empty bucket
        left = 0
        while left < self.bucket_count and buckets[left] == 0:
            left += 1
        # Last non-empty bucket
        right = self.bucket_count - 1
        while right >= 0 and buckets[right] == 0:
            right -= 1
        if left > right:
            return PercentileResult(PercentileStatus.EMPTY)

        threshold = p * self.total_count / 100
        pivot = left
        running = 0
        while pivot <= right:
            count = buckets[pivot]
            if count:
                running += count
                if running >= threshold:
                    break
            pivot += 1
        return PercentileResult(PercentileStatus.OK, self.bucket_midpoint(pivot))

    def percentile(self, p: float) -> Optional[float]:
        """Return the `p`-th percentile, or None when there is no data or p is invalid."""
        return self.query(p).value

    def percentiles(self, ps: Iterable[float]) -> List[Optional[float]]:
        return [self.percentile(p) for p in ps]

    def __len__(self) -> int:
        return self.total_count

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(min_value={self.min_value!r}, max_value={self.max_value!r}, "
            f"eps={self.eps!r}, out_of_bounds_strategy={self.strategy.value!r}, "
            f"total_count={self.total_count})"
        )


__all__ = ["BoundPercentiles", "PercentileResult", "PercentileStatus"]
