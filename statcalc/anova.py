"""One-way analysis of variance.

Partitions the total variation of k groups into between-group and
within-group sums of squares and tests equality of group means with

    F = MS_between / MS_within,  df = (k - 1, N - k).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import DEFAULT_ALPHA, SS_IDENTITY_RTOL
from .exceptions import DomainError
from .schema import GROUP_COLUMNS
from .stats.distributions import f_cdf
from .validation import as_sample, require_alpha

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnovaResult:
    """One-way ANOVA table and test decision."""

    f_statistic: float
    p_value: float
    df_between: int
    df_within: int
    ss_between: float
    ss_within: float
    ss_total: float
    ms_between: float
    ms_within: float
    grand_mean: float
    group_means: Tuple[float, ...]
    group_sizes: Tuple[int, ...]
    alpha: float
    reject_null: bool

    @property
    def df_total(self) -> int:
        return self.df_between + self.df_within

    @property
    def eta_squared(self) -> float:
        """Share of total variation explained by group membership."""
        return self.ss_between / self.ss_total


def _as_groups(groups: Iterable[Iterable[float]]) -> list[np.ndarray]:
    arrays = [
        as_sample(g, f"Group {i}", min_size=0) for i, g in enumerate(groups, start=1)
    ]
    if len(arrays) < 2:
        raise DomainError(
            f"ANOVA needs at least 2 groups, got {len(arrays)}", "groups", len(arrays)
        )
    for i, arr in enumerate(arrays, start=1):
        if arr.size < 2:
            raise DomainError(
                f"Each group must have at least 2 observations; group {i} has {arr.size}",
                "groups",
                i,
            )
    return arrays


def one_way_anova(
    groups: Sequence[Iterable[float]], alpha: float = DEFAULT_ALPHA
) -> AnovaResult:
    """Run a one-way ANOVA on two or more groups.

    Args:
        groups (Sequence[Iterable[float]]): Observations per group; at least
            2 groups with at least 2 observations each.
        alpha (float): Significance level for ``reject_null``.

    Returns:
        AnovaResult: Sums of squares, mean squares, F, p-value and decision.

    Raises:
        DomainError: Too few groups or observations, or no variation within
            groups (F would be infinite).
    """
    alpha = require_alpha(alpha)
    arrays = _as_groups(groups)

    pooled = np.concatenate(arrays)
    k = len(arrays)
    n_total = int(pooled.size)
    grand_mean = float(np.mean(pooled))
    means = [float(np.mean(a)) for a in arrays]
    sizes = [int(a.size) for a in arrays]

    ss_between = float(sum(n * (m - grand_mean) ** 2 for n, m in zip(sizes, means)))
    ss_within = float(sum(np.sum((a - m) ** 2) for a, m in zip(arrays, means)))
    ss_total = float(np.sum((pooled - grand_mean) ** 2))

    scale = max(ss_total, float(np.sum(pooled**2)), 1.0)
    if not math.isclose(ss_between + ss_within, ss_total, rel_tol=0.0, abs_tol=SS_IDENTITY_RTOL * scale):
        logger.warning(
            "SS identity off by %.3g (between=%.6g, within=%.6g, total=%.6g)",
            ss_between + ss_within - ss_total,
            ss_between,
            ss_within,
            ss_total,
        )

    df_between = k - 1
    df_within = n_total - k
    ms_between = ss_between / df_between
    ms_within = ss_within / df_within
    if ms_within <= 0:
        raise DomainError(
            "There is no variation within groups; the F statistic is undefined."
        )

    f_stat = ms_between / ms_within
    p_value = min(1.0, max(0.0, 1.0 - f_cdf(f_stat, df_between, df_within)))

    return AnovaResult(
        f_statistic=f_stat,
        p_value=p_value,
        df_between=df_between,
        df_within=df_within,
        ss_between=ss_between,
        ss_within=ss_within,
        ss_total=ss_total,
        ms_between=ms_between,
        ms_within=ms_within,
        grand_mean=grand_mean,
        group_means=tuple(means),
        group_sizes=tuple(sizes),
        alpha=alpha,
        reject_null=p_value < alpha,
    )


def group_summary(groups: Sequence[Iterable[float]]) -> pd.DataFrame:
    """Per-group n, mean and sample standard deviation.

    Groups are labelled ``Group 1``, ``Group 2``, ... in input order.
    """
    arrays = _as_groups(groups)
    long_df = pd.DataFrame(
        {
            "group": np.repeat(
                [f"Group {i}" for i in range(1, len(arrays) + 1)],
                [a.size for a in arrays],
            ),
            "value": np.concatenate(arrays),
        }
    )
    summary = (
        long_df.groupby("group", sort=False)["value"]
        .agg(["count", "mean", "std"])
        .reset_index()
    )
    summary.columns = [
        GROUP_COLUMNS.group,
        GROUP_COLUMNS.n,
        GROUP_COLUMNS.mean,
        GROUP_COLUMNS.sd,
    ]
    return summary
