"""Simple linear regression (ordinary least squares, one predictor).

Provides the slope/intercept fit used by the regression calculator together
with the classroom diagnostics: R², standard errors of both coefficients and
the t test of the slope.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from ..exceptions import DomainError
from ..validation import as_sample
from .distributions import t_cdf


@dataclass(frozen=True)
class RegressionResult:
    """Fitted line ``ŷ = intercept + slope * x`` and its diagnostics."""

    slope: float
    intercept: float
    r_squared: float
    standard_error_slope: float
    standard_error_intercept: float
    predictions: Tuple[float, ...]
    residuals: Tuple[float, ...]
    n: int
    df: int
    mean_x: float
    mean_y: float
    ss_xx: float
    ss_yy: float
    ss_xy: float
    ss_residual: float
    mse: float
    t_slope: Optional[float]
    p_slope: float

    @property
    def correlation(self) -> float:
        """Pearson r, carrying the sign of the slope."""
        return math.copysign(math.sqrt(self.r_squared), self.slope)

    def predict(self, x: float) -> float:
        return self.intercept + self.slope * float(x)


def linear_regression(
    x: Iterable[float], y: Iterable[float], min_points: int = 3
) -> RegressionResult:
    """Fit an ordinary least-squares straight line to paired data.

    Args:
        x (Iterable[float]): Independent variable values.
        y (Iterable[float]): Dependent variable values, same length as ``x``.
        min_points (int, optional): Minimum number of pairs. Defaults to
            ``3`` so that ``df = n - 2`` is positive.

    Returns:
        RegressionResult: Slope, intercept, R², coefficient standard errors,
        fitted values and residuals (index-aligned with the input), and the
        slope t statistic with its two-sided p-value.

    Raises:
        MalformedInputError: If any value is not a finite number.
        DomainError: If lengths differ, there are fewer than ``min_points``
            pairs, or ``x`` or ``y`` has no variance.

    Note:
        ``slope = Sxy / Sxx``, ``intercept = ȳ - slope·x̄``,
        ``R² = 1 - SSres / Syy``, ``MSE = SSres / (n - 2)``,
        ``SE(slope) = √(MSE / Sxx)`` and
        ``SE(intercept) = √(MSE (1/n + x̄² / Sxx))``.
    """
    min_points = max(3, int(min_points))
    x_arr = as_sample(x, "X values")
    y_arr = as_sample(y, "Y values")
    if x_arr.size != y_arr.size:
        raise DomainError(
            f"X and Y must have the same number of values ({x_arr.size} vs {y_arr.size})"
        )
    n = int(x_arr.size)
    if n < min_points:
        raise DomainError(
            f"Regression needs at least {min_points} data points, got {n}", "n", n
        )

    xbar = float(np.mean(x_arr))
    ybar = float(np.mean(y_arr))
    dx = x_arr - xbar
    dy = y_arr - ybar
    ssxx = float(np.sum(dx**2))
    ssyy = float(np.sum(dy**2))
    ssxy = float(np.sum(dx * dy))
    if ssxx <= 0:
        raise DomainError("X values have no variance; the slope is undefined.")
    if ssyy <= 0:
        raise DomainError("Y values have no variance; R² is undefined.")

    m = ssxy / ssxx
    b = ybar - m * xbar
    yhat = b + m * x_arr
    resid = y_arr - yhat

    sse = float(np.sum(resid**2))
    r2 = min(1.0, max(0.0, 1.0 - sse / ssyy))

    dof = n - 2
    mse = sse / dof
    se_m = math.sqrt(mse / ssxx)
    se_b = math.sqrt(mse * (1.0 / n + xbar**2 / ssxx))

    if se_m > 0:
        t_stat = m / se_m
        p_m = min(1.0, max(0.0, 2.0 * (1.0 - t_cdf(abs(t_stat), dof))))
    else:
        # Exact fit: no sampling error to test against.
        t_stat = None
        p_m = 0.0

    return RegressionResult(
        slope=float(m),
        intercept=float(b),
        r_squared=float(r2),
        standard_error_slope=se_m,
        standard_error_intercept=se_b,
        predictions=tuple(float(v) for v in yhat),
        residuals=tuple(float(v) for v in resid),
        n=n,
        df=dof,
        mean_x=xbar,
        mean_y=ybar,
        ss_xx=ssxx,
        ss_yy=ssyy,
        ss_xy=ssxy,
        ss_residual=sse,
        mse=mse,
        t_slope=None if t_stat is None else float(t_stat),
        p_slope=float(p_m),
    )
