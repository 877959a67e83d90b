"""Convert calculator result records into tidy tables.

This module sits between the numeric calculators and any presentation layer:
every function takes a result record and returns a :class:`pandas.DataFrame`
with the column labels from :mod:`statcalc.schema`. Undefined worksheet cells
(boundary moving averages) become NaN here and only here.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from .anova import AnovaResult
from .exceptions import DomainError
from .linear_programming import LPResult
from .schema import ANOVA_COLUMNS, REGRESSION_COLUMNS, SEASONAL_COLUMNS, VERTEX_COLUMNS
from .seasonal import SeasonalResult
from .stats.regression import RegressionResult


def _with_nan(values: Iterable[Optional[float]]) -> np.ndarray:
    return np.array([np.nan if v is None else v for v in values], dtype=float)


def record_table(record: Any) -> pd.DataFrame:
    """One-row table of the scalar fields of a result record.

    Args:
        record: Any frozen result dataclass (``TestResult``,
            ``ConfidenceInterval``, ``SampleSizeResult``, ...).

    Returns:
        pandas.DataFrame: Single row; tuple-valued fields are left out.

    Raises:
        DomainError: If ``record`` is not a dataclass instance.
    """
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise DomainError(f"Expected a result record, got {type(record).__name__}")
    row = {
        f.name: getattr(record, f.name)
        for f in dataclasses.fields(record)
        if not isinstance(getattr(record, f.name), (tuple, list))
    }
    return pd.DataFrame([row])


def anova_table(result: AnovaResult) -> pd.DataFrame:
    """Classic between / within / total ANOVA source table."""
    c = ANOVA_COLUMNS
    return pd.DataFrame(
        [
            {
                c.source: "Between Groups",
                c.ss: result.ss_between,
                c.df: result.df_between,
                c.ms: result.ms_between,
                c.f: result.f_statistic,
                c.p: result.p_value,
            },
            {
                c.source: "Within Groups",
                c.ss: result.ss_within,
                c.df: result.df_within,
                c.ms: result.ms_within,
                c.f: np.nan,
                c.p: np.nan,
            },
            {
                c.source: "Total",
                c.ss: result.ss_total,
                c.df: result.df_total,
                c.ms: np.nan,
                c.f: np.nan,
                c.p: np.nan,
            },
        ]
    )


def regression_table(
    x: Iterable[float], y: Iterable[float], result: RegressionResult
) -> pd.DataFrame:
    """Observed, fitted and residual values, one row per observation."""
    x_vals = list(x)
    y_vals = list(y)
    if not len(x_vals) == len(y_vals) == result.n:
        raise DomainError("x and y must match the data the regression was fitted on")
    c = REGRESSION_COLUMNS
    return pd.DataFrame(
        {
            c.x: np.asarray(x_vals, dtype=float),
            c.y: np.asarray(y_vals, dtype=float),
            c.predicted: list(result.predictions),
            c.residual: list(result.residuals),
        }
    )


def seasonal_table(data: Iterable[float], result: SeasonalResult) -> pd.DataFrame:
    """Ratio-to-moving-average worksheet, one row per period."""
    observed = np.asarray(list(data), dtype=float)
    if observed.size != len(result.deseasonalized):
        raise DomainError("data must match the series the indices were computed from")
    c = SEASONAL_COLUMNS
    season = np.arange(observed.size) % result.periods_per_season
    return pd.DataFrame(
        {
            c.period: np.arange(1, observed.size + 1),
            c.season: season + 1,
            c.observed: observed,
            c.moving_average: _with_nan(result.moving_averages),
            c.ratio: _with_nan(result.ratios),
            c.index: np.asarray(result.indices)[season],
            c.deseasonalized: list(result.deseasonalized),
        }
    )


def vertex_table(result: LPResult) -> pd.DataFrame:
    """Feasible corner points with their objective values, best first."""
    c = VERTEX_COLUMNS
    return pd.DataFrame(
        [
            {
                c.x: v.x,
                c.y: v.y,
                c.objective: v.objective_value,
                c.optimal: v.is_optimal,
            }
            for v in result.vertices
        ],
        columns=[c.x, c.y, c.objective, c.optimal],
    )
