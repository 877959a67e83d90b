import math

import numpy as np
import pytest
from scipy import stats as st

from statcalc.anova import group_summary, one_way_anova
from statcalc.exceptions import DomainError, MalformedInputError

GROUPS = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]]


def test_anova_hand_computed_table():
    result = one_way_anova(GROUPS)
    assert math.isclose(result.grand_mean, 5.0)
    assert math.isclose(result.ss_between, 54.0)
    assert math.isclose(result.ss_within, 6.0)
    assert math.isclose(result.ss_total, 60.0)
    assert (result.df_between, result.df_within, result.df_total) == (2, 6, 8)
    assert math.isclose(result.ms_between, 27.0)
    assert math.isclose(result.ms_within, 1.0)
    assert math.isclose(result.f_statistic, 27.0)
    assert math.isclose(result.eta_squared, 0.9)
    assert result.group_means == (2.0, 5.0, 8.0)
    assert result.group_sizes == (3, 3, 3)
    assert result.reject_null


def test_anova_matches_scipy():
    ref = st.f_oneway(*GROUPS)
    result = one_way_anova(GROUPS)
    assert math.isclose(result.f_statistic, ref.statistic, rel_tol=1e-9)
    assert math.isclose(result.p_value, ref.pvalue, abs_tol=1e-6)


def test_anova_unequal_groups_match_scipy_and_ss_identity():
    rng = np.random.default_rng(3)
    groups = [rng.normal(m, 1.5, size=n) for m, n in ((10, 5), (11, 8), (10.5, 6), (12, 4))]
    result = one_way_anova(groups, alpha=0.01)
    ref = st.f_oneway(*groups)
    assert math.isclose(result.f_statistic, ref.statistic, rel_tol=1e-9)
    assert math.isclose(result.p_value, ref.pvalue, abs_tol=1e-6)
    assert math.isclose(result.ss_between + result.ss_within, result.ss_total, rel_tol=1e-9)
    assert result.alpha == 0.01


def test_anova_identical_groups_do_not_reject():
    result = one_way_anova([[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]])
    assert result.f_statistic == 0.0
    assert math.isclose(result.p_value, 1.0)
    assert not result.reject_null


@pytest.mark.parametrize(
    "groups,match",
    [
        ([[1.0, 2.0, 3.0]], "at least 2 groups"),
        ([[1.0, 2.0], [3.0]], "at least 2 observations"),
        ([[1.0, 1.0], [2.0, 2.0]], "no variation within groups"),
    ],
)
def test_anova_domain_errors(groups, match):
    with pytest.raises(DomainError, match=match):
        one_way_anova(groups)


def test_anova_rejects_non_finite():
    with pytest.raises(MalformedInputError):
        one_way_anova([[1.0, float("nan")], [2.0, 3.0]])


def test_group_summary():
    summary = group_summary(GROUPS)
    assert list(summary.columns) == ["Group", "n", "Mean", "Standard Deviation"]
    assert summary["Group"].to_list() == ["Group 1", "Group 2", "Group 3"]
    assert summary["n"].to_list() == [3, 3, 3]
    assert np.allclose(summary["Mean"], [2.0, 5.0, 8.0])
    assert np.allclose(summary["Standard Deviation"], [1.0, 1.0, 1.0])
