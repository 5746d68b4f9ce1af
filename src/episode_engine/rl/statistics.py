"""Episode-length statistics reported at the end of each run."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import math
from typing import Any, Sequence

import numpy as np


@dataclass(frozen=True)
class BenchmarkResult:
    """Summary of the episode lengths collected during one run.

    Attributes:
        n_samples: Number of episode lengths in the sample.
        mean: Arithmetic mean episode length.
        sigma_bar: ``sqrt(sum((x - mean)^2)) / n``. The count divides once,
            after the square root; this is not the textbook standard deviation.
        standard_error: ``sigma_bar / sqrt(n)``.
        confidence_95: ``2 * standard_error``.
    """

    n_samples: int
    mean: float
    sigma_bar: float
    standard_error: float
    confidence_95: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_episode_lengths(samples: Sequence[float]) -> BenchmarkResult | None:
    """Compute the run benchmark, or ``None`` for an empty sample."""
    if len(samples) == 0:
        return None
    values = np.asarray(samples, dtype=np.float64)
    n_samples = int(values.shape[0])
    mean = float(values.mean())
    sigma_bar = math.sqrt(float(np.sum((values - mean) ** 2))) / n_samples
    standard_error = sigma_bar / math.sqrt(n_samples)
    return BenchmarkResult(
        n_samples=n_samples,
        mean=mean,
        sigma_bar=sigma_bar,
        standard_error=standard_error,
        confidence_95=2.0 * standard_error,
    )
