import math

import numpy as np
import pytest
from scipy import stats as st

from statcalc.exceptions import DomainError
from statcalc.hypothesis import (
    adjust_p_value,
    compare_p_value,
    normalize_alternative,
    t_test_mean,
    t_test_mean_from_sample,
    two_sample_t_test,
    two_sample_t_test_from_samples,
    welch_df,
    z_test_mean,
    z_test_proportion,
)


def test_one_sample_t_test_worked_example():
    result = t_test_mean(105.0, 100.0, 15.0, 25)
    assert math.isclose(result.standard_error, 3.0)
    assert math.isclose(result.statistic, 5.0 / 3.0)
    assert result.df == 24
    assert result.statistic_type == "t"
    assert math.isclose(result.p_value, 0.1085, abs_tol=1e-3)
    assert math.isclose(result.p_value, 2 * st.t.sf(5.0 / 3.0, 24), abs_tol=1e-6)
    assert not result.reject_null


def test_one_sided_p_values_from_two_sided():
    two = t_test_mean(105.0, 100.0, 15.0, 25).p_value
    greater = t_test_mean(105.0, 100.0, 15.0, 25, alternative="greater").p_value
    less = t_test_mean(105.0, 100.0, 15.0, 25, alternative="less").p_value
    assert math.isclose(greater, two / 2)
    assert math.isclose(less, 1 - two / 2)


def test_adjust_p_value():
    assert adjust_p_value(0.2, -1.5, "two-sided") == 0.2
    assert math.isclose(adjust_p_value(0.2, -1.5, "less"), 0.1)
    assert math.isclose(adjust_p_value(0.2, -1.5, "greater"), 0.9)
    assert math.isclose(adjust_p_value(0.2, 1.5, "greater"), 0.1)
    assert math.isclose(adjust_p_value(0.2, 1.5, "less"), 0.9)


def test_alternative_aliases():
    assert normalize_alternative("Right-Tailed") == "greater"
    assert normalize_alternative("left") == "less"
    assert normalize_alternative("two-tailed") == "two-sided"
    with pytest.raises(DomainError, match="alternative"):
        normalize_alternative("sideways")


def test_z_test_mean():
    result = z_test_mean(52.0, 50.0, 5.0, 25)
    assert math.isclose(result.statistic, 2.0)
    assert result.df is None
    assert result.statistic_type == "z"
    assert math.isclose(result.p_value, 2 * st.norm.sf(2.0), abs_tol=1e-6)
    assert result.reject_null


def test_p_value_stays_in_unit_interval_for_extreme_statistic():
    result = z_test_mean(1000.0, 0.0, 1.0, 100)
    assert 0.0 <= result.p_value <= 1.0
    assert result.reject_null


def test_t_test_from_sample_matches_scipy():
    data = [5.1, 4.9, 5.6, 5.8, 6.0, 5.3, 4.7, 5.5]
    result = t_test_mean_from_sample(data, 5.0)
    ref = st.ttest_1samp(data, 5.0)
    assert math.isclose(result.statistic, ref.statistic, rel_tol=1e-9)
    assert math.isclose(result.p_value, ref.pvalue, abs_tol=1e-6)


def test_proportion_z_test_uses_null_standard_error():
    result = z_test_proportion(60, 100, 0.5)
    assert math.isclose(result.estimate, 0.6)
    assert math.isclose(result.standard_error, 0.05)
    assert math.isclose(result.statistic, 2.0)
    assert math.isclose(result.p_value, 2 * st.norm.sf(2.0), abs_tol=1e-6)


@pytest.mark.parametrize("p0", [0.0, 1.0, 1.2])
def test_proportion_z_test_rejects_boundary_null(p0):
    with pytest.raises(DomainError):
        z_test_proportion(5, 10, p0)


def test_proportion_z_test_warns_on_small_expected_counts():
    with pytest.warns(UserWarning):
        z_test_proportion(3, 10, 0.5)


def test_welch_t_test_matches_scipy():
    args = (20.1, 3.2, 12, 17.4, 4.5, 15)
    result = two_sample_t_test(*args)
    ref = st.ttest_ind_from_stats(*args, equal_var=False)
    assert result.test == "two-sample Welch t test"
    assert math.isclose(result.estimate, 20.1 - 17.4)
    assert math.isclose(result.statistic, ref.statistic, rel_tol=1e-9)
    assert math.isclose(result.p_value, ref.pvalue, abs_tol=1e-6)
    assert math.isclose(result.df, welch_df(3.2, 12, 4.5, 15))
    assert result.df != int(result.df)


def test_pooled_t_test_matches_scipy():
    args = (20.1, 3.2, 12, 17.4, 4.5, 15)
    result = two_sample_t_test(*args, equal_variance=True)
    ref = st.ttest_ind_from_stats(*args, equal_var=True)
    assert result.test == "two-sample pooled t test"
    assert result.df == 25
    assert math.isclose(result.statistic, ref.statistic, rel_tol=1e-9)
    assert math.isclose(result.p_value, ref.pvalue, abs_tol=1e-6)


def test_two_sample_from_raw_data_matches_scipy():
    rng = np.random.default_rng(7)
    a = rng.normal(10.0, 2.0, size=14)
    b = rng.normal(11.5, 3.0, size=11)
    result = two_sample_t_test_from_samples(a, b)
    ref = st.ttest_ind(a, b, equal_var=False)
    assert math.isclose(result.statistic, ref.statistic, rel_tol=1e-9)
    assert math.isclose(result.p_value, ref.pvalue, abs_tol=1e-6)


@pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1])
def test_invalid_alpha(alpha):
    with pytest.raises(DomainError, match="alpha"):
        t_test_mean(1.0, 0.0, 1.0, 10, alpha=alpha)


def test_two_sample_requires_two_observations_each():
    with pytest.raises(DomainError):
        two_sample_t_test(1.0, 1.0, 1, 2.0, 1.0, 5)


def test_compare_p_value_same_conclusion():
    result = t_test_mean(105.0, 100.0, 15.0, 25)
    cmp = compare_p_value(0.11, result)
    assert cmp.same_conclusion
    assert not cmp.manual_reject_null
    assert math.isclose(cmp.difference, abs(0.11 - result.p_value))
    assert math.isclose(cmp.percent_difference, cmp.difference / result.p_value * 100)


def test_compare_p_value_different_conclusion():
    result = t_test_mean(105.0, 100.0, 15.0, 25)
    cmp = compare_p_value(0.01, result)
    assert cmp.manual_reject_null
    assert not cmp.same_conclusion


def test_compare_p_value_rejects_non_probability():
    result = t_test_mean(105.0, 100.0, 15.0, 25)
    with pytest.raises(DomainError):
        compare_p_value(1.5, result)
