from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

DEFAULT_EPS = 0.01
# Largest eps that still yields two buckets
MAX_EPS = 0.5


class ConstructionError(ValueError):
    """Raised when an estimator cannot be built from the given parameters."""


class OutOfBoundsStrategy(Enum):
    """What to do with values outside [min, max]."""

    IGNORE = "ignore"  # drop the value
    TRIM = "trim"  # clamp to the nearest bound

    @classmethod
    def parse(cls, value: OutOfBoundsStrategy | str | None) -> OutOfBoundsStrategy:
        """Resolve a strategy from an enum member, its string value, or nothing.

        Falsy values (None, "") select the default IGNORE strategy.
        """
        if not value:
            return cls.IGNORE
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConstructionError(f"Unknown out_of_bounds_strategy {value!r}") from None


@dataclass
class EstimatorConfig:
    # Expected bounds of the input
    min_value: float
    max_value: float
    # Resolution; bucket count is floor(1 / eps)
    eps: float = DEFAULT_EPS
    # 'ignore' (default) or 'trim'
    out_of_bounds_strategy: OutOfBoundsStrategy | str | None = OutOfBoundsStrategy.IGNORE.value

    @property
    def strategy(self) -> OutOfBoundsStrategy:
        return OutOfBoundsStrategy.parse(self.out_of_bounds_strategy)

    @property
    def bucket_count(self) -> int:
        return math.floor(1 / self.eps)

    def validate(self) -> None:
        validate_params(self.min_value, self.max_value, self.eps)
        OutOfBoundsStrategy.parse(self.out_of_bounds_strategy)


def validate_params(min_value: float, max_value: float, eps: float) -> None:
    """Check bounds and precision, raising ConstructionError on the first problem."""
    for name, bound in (("min_value", min_value), ("max_value", max_value)):
        if not math.isfinite(bound):
            raise ConstructionError(f"'{name}' must be a finite number, got {bound!r}")
    if min_value > max_value:
        raise ConstructionError("'min_value' is greater than 'max_value'")
    # Negated form also rejects NaN
    if not (0 < eps <= MAX_EPS):
        raise ConstructionError(f"'eps' should be in (0, {MAX_EPS}], got {eps!r}")
    # Subnormal eps would ask for an infinite number of buckets
    if not math.isfinite(1 / eps):
        raise ConstructionError(f"'eps' is too small to size the buckets, got {eps!r}")


__all__ = [
    "DEFAULT_EPS",
    "MAX_EPS",
    "ConstructionError",
    "OutOfBoundsStrategy",
    "EstimatorConfig",
    "validate_params",
]
