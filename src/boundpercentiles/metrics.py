"""Metrics helper for BoundPercentiles.

Provides a lightweight, dependency-free snapshot of an estimator's counters
suitable for logging or exposition. Avoids mutating the estimator and leaves
bucket contents out.
"""
from __future__ import annotations

from typing import Dict, Any

from .quantiles import BoundPercentiles


def estimator_metrics(est: BoundPercentiles) -> Dict[str, Any]:
    return {
        "total_count": est.total_count,
        "values_dropped": est.values_dropped,
        "values_trimmed": est.values_trimmed,
        "bucket_count": est.bucket_count,
        "non_empty_buckets": sum(1 for c in est.buckets if c),
        "config": {
            "min_value": est.min_value,
            "max_value": est.max_value,
            "eps": est.eps,
            "out_of_bounds_strategy": est.strategy.value,
        },
    }

__all__ = ["estimator_metrics"]
