"""Descriptive statistics, standard errors and confidence intervals."""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from ..constants import DEFAULT_CONFIDENCE, MIN_EXPECTED_COUNT
from ..exceptions import DomainError
from ..validation import (
    as_sample,
    require_count,
    require_finite,
    require_positive,
    require_probability,
)
from .distributions import confidence_percent, t_critical, z_critical


@dataclass(frozen=True)
class ConfidenceInterval:
    """Interval ``estimate ± critical_value * standard_error``."""

    estimate: float
    standard_error: float
    critical_value: float
    critical_type: str
    margin_of_error: float
    lower: float
    upper: float
    confidence_level: int
    n: int
    df: Optional[float] = None

    @property
    def width(self) -> float:
        return self.upper - self.lower


def mean(data: Iterable[float]) -> float:
    arr = as_sample(data, "data", min_size=1)
    return float(np.mean(arr))


def std_dev(data: Iterable[float], ddof: int = 1) -> float:
    """Standard deviation; ``ddof=1`` (default) is the sample form, n - 1."""
    if ddof not in (0, 1):
        raise DomainError(f"ddof must be 0 or 1, got {ddof!r}", "ddof", ddof)
    arr = as_sample(data, "data", min_size=ddof + 1)
    return float(np.std(arr, ddof=ddof))


def standard_error_mean(sd: float, n: int) -> float:
    """``σ / √n``."""
    sd = require_finite(sd, "Standard deviation")
    if sd < 0:
        raise DomainError(f"Standard deviation must be non-negative, got {sd:g}", "sd", sd)
    n = require_count(n, "Sample size", minimum=1)
    return sd / math.sqrt(n)


def standard_error_proportion(p: float, n: int) -> float:
    """``√(p(1-p)/n)``."""
    p = require_probability(p, "Proportion")
    n = require_count(n, "Sample size", minimum=1)
    return math.sqrt(p * (1.0 - p) / n)


def check_success_failure(n: int, p: float) -> bool:
    """Warn when ``n p`` or ``n (1 - p)`` is below ``MIN_EXPECTED_COUNT``.

    Returns:
        bool: True when the normal approximation is reasonable.
    """
    if n * p < MIN_EXPECTED_COUNT or n * (1.0 - p) < MIN_EXPECTED_COUNT:
        warnings.warn(
            f"Expected counts n*p = {n * p:.1f} and n*(1-p) = {n * (1.0 - p):.1f} "
            f"should both be at least {MIN_EXPECTED_COUNT:g}; "
            f"the normal approximation may be poor.",
            UserWarning,
            stacklevel=3,
        )
        return False
    return True


def confidence_interval_mean(
    sample_mean: float,
    sd: float,
    n: int,
    confidence_level: float = DEFAULT_CONFIDENCE,
    sigma_known: bool = False,
) -> ConfidenceInterval:
    """Confidence interval for a population mean from summary statistics.

    Args:
        sample_mean (float): Sample mean x̄.
        sd (float): Population σ when ``sigma_known`` else the sample s.
        n (int): Sample size, at least 2.
        confidence_level (float): 0.90, 0.95, 0.99 (or 90, 95, 99, ...).
        sigma_known (bool): Use z instead of t with ``df = n - 1``.

    Returns:
        ConfidenceInterval: Interval and its ingredients.
    """
    sample_mean = require_finite(sample_mean, "Sample mean")
    sd = require_positive(sd, "Standard deviation")
    n = require_count(n, "Sample size", minimum=2)
    pct = confidence_percent(confidence_level)

    se = standard_error_mean(sd, n)
    if sigma_known:
        crit, crit_type, df = z_critical(pct), "z", None
    else:
        df = float(n - 1)
        crit, crit_type = t_critical(df, pct), "t"

    margin = crit * se
    return ConfidenceInterval(
        estimate=sample_mean,
        standard_error=se,
        critical_value=crit,
        critical_type=crit_type,
        margin_of_error=margin,
        lower=sample_mean - margin,
        upper=sample_mean + margin,
        confidence_level=pct,
        n=n,
        df=df,
    )


def confidence_interval_mean_from_sample(
    data: Iterable[float],
    confidence_level: float = DEFAULT_CONFIDENCE,
    sigma: Optional[float] = None,
) -> ConfidenceInterval:
    """Raw-data form of :func:`confidence_interval_mean`.

    When ``sigma`` is given it is treated as the known population σ;
    otherwise the sample standard deviation is used with a t critical value.
    """
    arr = as_sample(data, "data", min_size=2)
    sigma_known = sigma is not None
    sd = sigma if sigma_known else float(np.std(arr, ddof=1))
    if not sigma_known and sd == 0:
        raise DomainError("All observations are identical; the standard deviation is 0")
    return confidence_interval_mean(
        float(np.mean(arr)), sd, int(arr.size), confidence_level, sigma_known
    )


def confidence_interval_proportion(
    successes: int, n: int, confidence_level: float = DEFAULT_CONFIDENCE
) -> ConfidenceInterval:
    """Wald interval for a proportion, clamped to ``[0, 1]``."""
    n = require_count(n, "Sample size", minimum=1)
    successes = require_count(successes, "Number of successes", minimum=0)
    if successes > n:
        raise DomainError(
            f"Number of successes ({successes}) cannot exceed sample size ({n})",
            "successes",
            successes,
        )
    pct = confidence_percent(confidence_level)
    z = z_critical(pct)
    p_hat = successes / n
    check_success_failure(n, p_hat)
    se = standard_error_proportion(p_hat, n)
    margin = z * se
    return ConfidenceInterval(
        estimate=p_hat,
        standard_error=se,
        critical_value=z,
        critical_type="z",
        margin_of_error=margin,
        lower=max(0.0, p_hat - margin),
        upper=min(1.0, p_hat + margin),
        confidence_level=pct,
        n=n,
    )
