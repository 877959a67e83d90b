"""Seasonal indices by the ratio-to-moving-average method.

Algorithm summary: smooth the series with a centered moving average spanning
one full cycle, divide each observation by its moving average, average those
ratios per position in the cycle, and rescale the averages so they have mean
1.0. The series divided by its season's index is the deseasonalized series.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from .exceptions import DomainError
from .validation import as_sample, require_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeasonalResult:
    """Seasonal indices and the intermediate worksheet columns.

    ``moving_averages`` and ``ratios`` hold ``None`` at the first and last
    ``periods_per_season // 2`` positions, where no centered window fits.
    """

    periods_per_season: int
    indices: Tuple[float, ...]
    raw_indices: Tuple[float, ...]
    deseasonalized: Tuple[float, ...]
    moving_averages: Tuple[Optional[float], ...]
    ratios: Tuple[Optional[float], ...]

    @property
    def half_period(self) -> int:
        return self.periods_per_season // 2


def _window_weights(periods: int) -> np.ndarray:
    """Weights of a centered moving average spanning ``periods`` observations.

    Odd periods use ``periods`` equal weights. Even periods need
    ``periods + 1`` points with the two end points halved (2×P centered MA).
    """
    if periods % 2:
        weights = np.ones(periods)
    else:
        weights = np.ones(periods + 1)
        weights[0] = weights[-1] = 0.5
    return weights / periods


def centered_moving_average(data: Iterable[float], periods: int) -> np.ndarray:
    """Centered moving average; NaN where the window does not fit."""
    arr = as_sample(data, "data")
    periods = require_count(periods, "Periods per season", minimum=2)
    weights = _window_weights(periods)
    half = periods // 2
    out = np.full(arr.size, np.nan)
    if arr.size > 2 * half:
        # weights are symmetric, so convolution equals correlation here
        out[half : arr.size - half] = np.convolve(arr, weights, mode="valid")
    return out


def seasonal_decomposition(
    data: Iterable[float], periods_per_season: int
) -> SeasonalResult:
    """Compute seasonal indices with the ratio-to-moving-average method.

    Args:
        data (Iterable[float]): Observations in chronological order, at least
            two complete cycles long.
        periods_per_season (int): Cycle length P (4 for quarters, 12 for
            months), at least 2.

    Returns:
        SeasonalResult: P normalized indices averaging exactly 1.0, the raw
        (unnormalized) averages, the deseasonalized series and the moving
        average and ratio columns.

    Raises:
        MalformedInputError: If any observation is not a finite number.
        DomainError: If P < 2, fewer than 2P observations are given, or a
            moving average or seasonal index is zero.
    """
    periods = require_count(periods_per_season, "Periods per season", minimum=2)
    arr = as_sample(data, "data")
    n = int(arr.size)
    if n < 2 * periods:
        raise DomainError(
            f"Please enter at least {2 * periods} data points (2 complete seasons), got {n}",
            "data",
            n,
        )

    moving = centered_moving_average(arr, periods)
    defined = np.isfinite(moving)
    if np.any(moving[defined] == 0):
        raise DomainError("A centered moving average is zero; ratios are undefined.")
    ratios = np.full(n, np.nan)
    ratios[defined] = arr[defined] / moving[defined]
    logger.debug(
        "Centered moving average defined at %d of %d positions (P=%d)",
        int(defined.sum()),
        n,
        periods,
    )

    season = np.arange(n) % periods
    raw = np.array([np.mean(ratios[defined & (season == s)]) for s in range(periods)])
    raw_mean = float(np.mean(raw))
    if raw_mean == 0:
        raise DomainError("Raw seasonal indices average to zero; they cannot be normalized.")
    indices = raw / raw_mean
    if np.any(indices == 0):
        raise DomainError("A seasonal index is zero; the series cannot be deseasonalized.")
    deseasonalized = arr / indices[season]

    return SeasonalResult(
        periods_per_season=periods,
        indices=tuple(float(v) for v in indices),
        raw_indices=tuple(float(v) for v in raw),
        deseasonalized=tuple(float(v) for v in deseasonalized),
        moving_averages=tuple(float(v) if ok else None for v, ok in zip(moving, defined)),
        ratios=tuple(float(v) if ok else None for v, ok in zip(ratios, defined)),
    )
