"""Define standardized column names for result DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupColumns:
    """Column labels for per-group summaries (ANOVA input description)."""

    group: str = "Group"
    n: str = "n"
    mean: str = "Mean"
    sd: str = "Standard Deviation"


@dataclass(frozen=True)
class AnovaTableColumns:
    """Column labels for the classic ANOVA source table.

    Attributes:
        source: Row label: ``Between Groups``, ``Within Groups`` or ``Total``.
        ss: Sum of squares for the source.
        df: Degrees of freedom for the source.
        ms: Mean square ``SS / df``; blank for the total row.
        f: F statistic; only on the between-groups row.
        p: p-value ``P(F_{df1, df2} > F)``; only on the between-groups row.
    """

    source: str = "Source"
    ss: str = "SS"
    df: str = "df"
    ms: str = "MS"
    f: str = "F"
    p: str = "p-value"


@dataclass(frozen=True)
class RegressionColumns:
    """Column labels for per-observation regression output."""

    x: str = "x"
    y: str = "y"
    predicted: str = "Predicted y"
    residual: str = "Residual"


@dataclass(frozen=True)
class SeasonalColumns:
    """Column labels for the ratio-to-moving-average worksheet.

    Attributes:
        period: 1-based position in the series.
        season: 1-based position within the cycle.
        observed: Observed value.
        moving_average: Centered moving average; NaN at the boundaries
            where the window does not fit.
        ratio: Observed / moving average; NaN where the average is missing.
        index: Normalized seasonal index for the season.
        deseasonalized: Observed / seasonal index.
    """

    period: str = "Period"
    season: str = "Season"
    observed: str = "Observed"
    moving_average: str = "Centered Moving Average"
    ratio: str = "Ratio to Moving Average"
    index: str = "Seasonal Index"
    deseasonalized: str = "Deseasonalized"


@dataclass(frozen=True)
class VertexColumns:
    """Column labels for the LP corner-point table."""

    x: str = "x"
    y: str = "y"
    objective: str = "Objective Value"
    optimal: str = "Optimal"


GROUP_COLUMNS = GroupColumns()
ANOVA_COLUMNS = AnovaTableColumns()
REGRESSION_COLUMNS = RegressionColumns()
SEASONAL_COLUMNS = SeasonalColumns()
VERTEX_COLUMNS = VertexColumns()
