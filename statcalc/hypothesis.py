"""One- and two-sample hypothesis tests for means and proportions.

Every test follows the same recipe:

    statistic = (estimate - hypothesized) / SE
    two-sided p = 2 * (1 - CDF(|statistic|))

and one-tailed p-values are derived from the two-sided one with
:func:`adjust_p_value`. The decision is ``reject_null = p_value < alpha``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from .constants import DEFAULT_ALPHA
from .exceptions import DomainError
from .stats.descriptive import check_success_failure
from .stats.distributions import normal_cdf, t_cdf
from .validation import (
    as_sample,
    require_alpha,
    require_count,
    require_finite,
    require_positive,
    require_probability,
)

ALTERNATIVES = ("two-sided", "less", "greater")
_ALTERNATIVE_ALIASES = {
    "two-sided": "two-sided",
    "two-tailed": "two-sided",
    "less": "less",
    "left": "less",
    "left-tailed": "less",
    "greater": "greater",
    "right": "greater",
    "right-tailed": "greater",
}


@dataclass(frozen=True)
class TestResult:
    """Outcome of a single hypothesis test."""

    test: str
    statistic_type: str
    estimate: float
    hypothesized: float
    standard_error: float
    statistic: float
    p_value: float
    alpha: float
    alternative: str
    reject_null: bool
    df: Optional[float] = None

    __test__ = False  # not a pytest test class


@dataclass(frozen=True)
class PValueComparison:
    """Hand-computed p-value checked against the calculated one."""

    manual_p_value: float
    calculated_p_value: float
    difference: float
    percent_difference: float
    same_conclusion: bool
    manual_reject_null: bool


def normalize_alternative(alternative: str) -> str:
    key = str(alternative).strip().lower()
    if key not in _ALTERNATIVE_ALIASES:
        raise DomainError(
            f"alternative must be one of {ALTERNATIVES}, got {alternative!r}",
            "alternative",
            alternative,
        )
    return _ALTERNATIVE_ALIASES[key]


def adjust_p_value(two_sided_p: float, statistic: float, alternative: str) -> float:
    """Convert a two-sided p-value to the requested alternative.

    Left-tailed: ``p/2`` when the statistic is negative, else ``1 - p/2``.
    Right-tailed is the mirror image.
    """
    alternative = normalize_alternative(alternative)
    if alternative == "two-sided":
        return two_sided_p
    if alternative == "less":
        return two_sided_p / 2.0 if statistic < 0 else 1.0 - two_sided_p / 2.0
    return two_sided_p / 2.0 if statistic > 0 else 1.0 - two_sided_p / 2.0


def _two_sided_p(statistic: float, df: Optional[float]) -> float:
    cdf = normal_cdf(abs(statistic)) if df is None else t_cdf(abs(statistic), df)
    return min(1.0, max(0.0, 2.0 * (1.0 - cdf)))


def _finish(
    test: str,
    estimate: float,
    hypothesized: float,
    se: float,
    df: Optional[float],
    alpha: float,
    alternative: str,
) -> TestResult:
    alpha = require_alpha(alpha)
    alternative = normalize_alternative(alternative)
    statistic = (estimate - hypothesized) / se
    p_value = adjust_p_value(_two_sided_p(statistic, df), statistic, alternative)
    return TestResult(
        test=test,
        statistic_type="z" if df is None else "t",
        estimate=estimate,
        hypothesized=hypothesized,
        standard_error=se,
        statistic=statistic,
        p_value=p_value,
        alpha=alpha,
        alternative=alternative,
        reject_null=p_value < alpha,
        df=df,
    )


def z_test_mean(
    sample_mean: float,
    hypothesized_mean: float,
    sigma: float,
    n: int,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = "two-sided",
) -> TestResult:
    """One-sample z test for a mean with known population σ."""
    sample_mean = require_finite(sample_mean, "Sample mean")
    hypothesized_mean = require_finite(hypothesized_mean, "Hypothesized mean")
    sigma = require_positive(sigma, "Standard deviation")
    n = require_count(n, "Sample size", minimum=2)
    se = sigma / math.sqrt(n)
    return _finish("one-sample z test", sample_mean, hypothesized_mean, se, None, alpha, alternative)


def t_test_mean(
    sample_mean: float,
    hypothesized_mean: float,
    sd: float,
    n: int,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = "two-sided",
) -> TestResult:
    """One-sample t test for a mean with unknown σ (``df = n - 1``)."""
    sample_mean = require_finite(sample_mean, "Sample mean")
    hypothesized_mean = require_finite(hypothesized_mean, "Hypothesized mean")
    sd = require_positive(sd, "Standard deviation")
    n = require_count(n, "Sample size", minimum=2)
    se = sd / math.sqrt(n)
    return _finish(
        "one-sample t test", sample_mean, hypothesized_mean, se, float(n - 1), alpha, alternative
    )


def t_test_mean_from_sample(
    data: Iterable[float],
    hypothesized_mean: float,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = "two-sided",
) -> TestResult:
    arr = as_sample(data, "data", min_size=2)
    sd = float(np.std(arr, ddof=1))
    if sd == 0:
        raise DomainError("All observations are identical; the standard deviation is 0")
    return t_test_mean(float(np.mean(arr)), hypothesized_mean, sd, int(arr.size), alpha, alternative)


def z_test_proportion(
    successes: int,
    n: int,
    hypothesized_proportion: float,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = "two-sided",
) -> TestResult:
    """One-sample z test for a proportion.

    The standard error is computed under H0, ``√(p0 (1 - p0) / n)``, not from
    the sample proportion.
    """
    n = require_count(n, "Sample size", minimum=1)
    successes = require_count(successes, "Number of successes", minimum=0)
    if successes > n:
        raise DomainError(
            f"Successes ({successes}) cannot exceed sample size ({n})", "successes", successes
        )
    p0 = require_probability(hypothesized_proportion, "Hypothesized proportion", open_interval=True)
    check_success_failure(n, p0)
    se = math.sqrt(p0 * (1.0 - p0) / n)
    return _finish("one-sample proportion z test", successes / n, p0, se, None, alpha, alternative)


def welch_df(sd1: float, n1: int, sd2: float, n2: int) -> float:
    """Welch–Satterthwaite approximation to the degrees of freedom."""
    v1 = sd1**2 / n1
    v2 = sd2**2 / n2
    return (v1 + v2) ** 2 / (v1**2 / (n1 - 1) + v2**2 / (n2 - 1))


def two_sample_t_test(
    mean1: float,
    sd1: float,
    n1: int,
    mean2: float,
    sd2: float,
    n2: int,
    equal_variance: bool = False,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = "two-sided",
) -> TestResult:
    """Two independent-sample t test of ``μ1 - μ2 = 0``.

    Args:
        mean1, sd1, n1: Summary statistics of the first sample.
        mean2, sd2, n2: Summary statistics of the second sample.
        equal_variance (bool): Pool the variances (``df = n1 + n2 - 2``);
            otherwise use Welch's SE and the Welch–Satterthwaite df, which is
            generally not an integer.
        alpha (float): Significance level.
        alternative (str): ``"two-sided"``, ``"less"`` or ``"greater"``,
            relative to ``μ1 - μ2``.

    Returns:
        TestResult: With ``estimate = mean1 - mean2``.
    """
    mean1 = require_finite(mean1, "Mean of sample 1")
    mean2 = require_finite(mean2, "Mean of sample 2")
    sd1 = require_positive(sd1, "Standard deviation of sample 1")
    sd2 = require_positive(sd2, "Standard deviation of sample 2")
    n1 = require_count(n1, "Size of sample 1", minimum=2)
    n2 = require_count(n2, "Size of sample 2", minimum=2)

    if equal_variance:
        df = float(n1 + n2 - 2)
        sp2 = ((n1 - 1) * sd1**2 + (n2 - 1) * sd2**2) / df
        se = math.sqrt(sp2 * (1.0 / n1 + 1.0 / n2))
        name = "two-sample pooled t test"
    else:
        se = math.sqrt(sd1**2 / n1 + sd2**2 / n2)
        df = welch_df(sd1, n1, sd2, n2)
        name = "two-sample Welch t test"
    return _finish(name, mean1 - mean2, 0.0, se, df, alpha, alternative)


def two_sample_t_test_from_samples(
    sample1: Iterable[float],
    sample2: Iterable[float],
    equal_variance: bool = False,
    alpha: float = DEFAULT_ALPHA,
    alternative: str = "two-sided",
) -> TestResult:
    a = as_sample(sample1, "Sample 1", min_size=2)
    b = as_sample(sample2, "Sample 2", min_size=2)
    return two_sample_t_test(
        float(np.mean(a)),
        float(np.std(a, ddof=1)),
        int(a.size),
        float(np.mean(b)),
        float(np.std(b, ddof=1)),
        int(b.size),
        equal_variance=equal_variance,
        alpha=alpha,
        alternative=alternative,
    )


def compare_p_value(manual_p_value: float, result: TestResult) -> PValueComparison:
    """Check a student's hand-computed p-value against ``result``."""
    manual = require_probability(manual_p_value, "Manual p-value")
    calculated = result.p_value
    diff = abs(manual - calculated)
    pct = diff / calculated * 100.0 if calculated != 0 else 0.0
    manual_reject = manual < result.alpha
    return PValueComparison(
        manual_p_value=manual,
        calculated_p_value=calculated,
        difference=diff,
        percent_difference=pct,
        same_conclusion=manual_reject == result.reject_null,
        manual_reject_null=manual_reject,
    )
