"""Sample-size planning for estimating a mean or a proportion."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_CONFIDENCE
from .exceptions import DomainError, InfeasibleProblemError
from .stats.distributions import z_critical
from .validation import require_count, require_positive, require_probability

logger = logging.getLogger(__name__)

PARAMETERS = ("proportion", "mean")


@dataclass(frozen=True)
class SampleSizeResult:
    """Required sample size, before and after finite population correction."""

    parameter: str
    z: float
    margin_of_error: float
    n0: int
    population_size: Optional[int] = None
    n_adjusted: Optional[int] = None
    proportion: Optional[float] = None
    sigma: Optional[float] = None

    @property
    def required(self) -> int:
        return self.n0 if self.n_adjusted is None else self.n_adjusted


def sample_size_proportion(z: float, p: float, margin_of_error: float) -> int:
    """``n0 = ⌈z² p (1 - p) / E²⌉``."""
    z = require_positive(z, "z")
    p = require_probability(p, "Proportion")
    e = require_positive(margin_of_error, "Margin of error")
    return int(math.ceil(z * z * p * (1.0 - p) / (e * e)))


def sample_size_mean(z: float, sigma: float, margin_of_error: float) -> int:
    """``n0 = ⌈z² σ² / E²⌉``."""
    z = require_positive(z, "z")
    sigma = require_positive(sigma, "Standard deviation")
    e = require_positive(margin_of_error, "Margin of error")
    return int(math.ceil(z * z * sigma * sigma / (e * e)))


def finite_population_correction(n0: int, population_size: int) -> int:
    """``n = ⌈n0 / (1 + (n0 - 1) / N)⌉``.

    Raises:
        InfeasibleProblemError: If ``n0`` exceeds the population size.
    """
    n0 = require_count(n0, "Initial sample size", minimum=1)
    population_size = require_count(population_size, "Population size", minimum=1)
    if n0 > population_size:
        raise InfeasibleProblemError(
            f"Required sample size ({n0}) exceeds population size ({population_size})",
            details={"n0": n0, "population_size": population_size},
        )
    return int(math.ceil(n0 / (1.0 + (n0 - 1) / population_size)))


def plan_sample_size(
    parameter: str,
    margin_of_error: float,
    *,
    confidence_level: float = DEFAULT_CONFIDENCE,
    z: Optional[float] = None,
    proportion: Optional[float] = None,
    sigma: Optional[float] = None,
    population_size: Optional[int] = None,
) -> SampleSizeResult:
    """Work out the sample size needed for a target margin of error.

    Args:
        parameter (str): ``"proportion"`` or ``"mean"``.
        margin_of_error (float): Target half-width E of the interval.
        confidence_level (float): Used to look up z when ``z`` is not given.
        z (float, optional): Explicit critical value.
        proportion (float, optional): Planning value of p; required for
            proportions, strictly between 0 and 1 (0.5 is the conservative
            choice).
        sigma (float, optional): Planning value of σ; required for means.
        population_size (int, optional): Finite population size N. When
            given, the finite population correction is applied.

    Returns:
        SampleSizeResult: ``n0`` and, with N, the corrected ``n_adjusted``.

    Raises:
        DomainError: On out-of-range inputs or a missing planning value.
        InfeasibleProblemError: If ``n0`` is larger than N.
    """
    if parameter not in PARAMETERS:
        raise DomainError(
            f"parameter must be one of {PARAMETERS}, got {parameter!r}", "parameter", parameter
        )
    z_value = z_critical(confidence_level) if z is None else require_positive(z, "z")

    if parameter == "proportion":
        e = require_probability(margin_of_error, "Margin of error", open_interval=True)
        if proportion is None:
            raise DomainError("A planning proportion is required", "proportion", None)
        # p of 0 or 1 would plan a sample of size 0
        proportion = require_probability(proportion, "Proportion", open_interval=True)
        n0 = sample_size_proportion(z_value, proportion, e)
    else:
        e = require_positive(margin_of_error, "Margin of error")
        if sigma is None:
            raise DomainError("A planning standard deviation is required", "sigma", None)
        n0 = sample_size_mean(z_value, sigma, e)

    n_adjusted = None
    if population_size is not None:
        n_adjusted = finite_population_correction(n0, population_size)
        logger.debug(
            "Finite population correction: n0=%d -> n=%d (N=%d)",
            n0,
            n_adjusted,
            population_size,
        )

    return SampleSizeResult(
        parameter=parameter,
        z=z_value,
        margin_of_error=e,
        n0=n0,
        population_size=None if population_size is None else int(population_size),
        n_adjusted=n_adjusted,
        proportion=float(proportion) if parameter == "proportion" else None,
        sigma=float(sigma) if parameter == "mean" else None,
    )
