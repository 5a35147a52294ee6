"""Package metadata and public API for boundpercentiles.

Expose a single source of truth for the version. Prefer reading from
importlib.metadata so that an editable install or wheel always reports
the version declared in pyproject.toml. Fallback to a hardcoded string
to avoid import errors when metadata is unavailable (e.g. direct source
usage without installation).
"""

from __future__ import annotations

from importlib import metadata as _metadata

from .config import ConstructionError, EstimatorConfig, OutOfBoundsStrategy
from .logutil import get_logger
from .metrics import estimator_metrics
from .quantiles import BoundPercentiles, PercentileResult, PercentileStatus

__all__ = [
	"__version__",
	"BoundPercentiles",
	"ConstructionError",
	"EstimatorConfig",
	"OutOfBoundsStrategy",
	"PercentileResult",
	"PercentileStatus",
	"estimator_metrics",
	"get_logger",
]

_FALLBACK_VERSION = "0.1.0"  # MUST match pyproject.toml [project].version

try:  # pragma: no cover - success path covered indirectly via version test
	__version__ = _metadata.version("boundpercentiles")  # type: ignore[assignment]
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree without install
	__version__ = _FALLBACK_VERSION
