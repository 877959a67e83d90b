import math

import numpy as np
import pytest

from statcalc.exceptions import DomainError, MalformedInputError
from statcalc.seasonal import centered_moving_average, seasonal_decomposition

QUARTERLY = [10.0, 20.0, 30.0, 40.0, 12.0, 22.0, 32.0, 42.0]


def test_even_period_centered_moving_average():
    ma = centered_moving_average(QUARTERLY, 4)
    assert np.isnan(ma[[0, 1, 6, 7]]).all()
    # 0.125 * 10 + 0.25 * (20 + 30 + 40) + 0.125 * 12
    assert math.isclose(ma[2], 25.25)
    assert math.isclose(ma[3], 0.125 * 20 + 0.25 * (30 + 40 + 12) + 0.125 * 22)


def test_odd_period_centered_moving_average():
    ma = centered_moving_average([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], 3)
    assert np.isnan(ma[0]) and np.isnan(ma[5])
    assert np.allclose(ma[1:5], [2.0, 3.0, 4.0, 5.0])


def test_quarterly_indices_average_to_one():
    result = seasonal_decomposition(QUARTERLY, 4)
    assert result.periods_per_season == 4
    assert result.half_period == 2
    assert len(result.indices) == 4
    assert math.isclose(sum(result.indices) / 4, 1.0, abs_tol=1e-12)
    assert [i for i, v in enumerate(result.moving_averages) if v is None] == [0, 1, 6, 7]
    assert [i for i, v in enumerate(result.ratios) if v is None] == [0, 1, 6, 7]


def test_deseasonalized_series_divides_by_season_index():
    result = seasonal_decomposition(QUARTERLY, 4)
    expected = [v / result.indices[i % 4] for i, v in enumerate(QUARTERLY)]
    assert np.allclose(result.deseasonalized, expected)
    # the high fourth quarter is pulled down, the low first quarter pushed up
    assert result.indices[3] > 1.0 > result.indices[0]


def test_raw_indices_are_rescaled_not_replaced():
    result = seasonal_decomposition(QUARTERLY, 4)
    scale = np.mean(result.raw_indices)
    assert np.allclose(np.asarray(result.raw_indices) / scale, result.indices)


def test_constant_series_has_unit_indices():
    data = [5.0] * 12
    result = seasonal_decomposition(data, 3)
    assert np.allclose(result.indices, 1.0)
    assert np.allclose(result.deseasonalized, data)


def test_monthly_series():
    months = np.arange(36)
    data = 100.0 + months + 10.0 * np.sin(2 * np.pi * months / 12)
    result = seasonal_decomposition(data, 12)
    assert len(result.indices) == 12
    assert math.isclose(np.mean(result.indices), 1.0, abs_tol=1e-12)
    assert sum(v is None for v in result.moving_averages) == 12


def test_too_few_points():
    with pytest.raises(DomainError, match="at least 8 data points"):
        seasonal_decomposition(QUARTERLY[:7], 4)


def test_period_must_be_at_least_two():
    with pytest.raises(DomainError):
        seasonal_decomposition(QUARTERLY, 1)


def test_zero_moving_average_is_a_domain_error():
    with pytest.raises(DomainError, match="moving average is zero"):
        seasonal_decomposition([1.0, -1.0] * 4, 2)


def test_non_finite_data():
    with pytest.raises(MalformedInputError):
        seasonal_decomposition([1.0, 2.0, float("nan"), 4.0, 5.0, 6.0, 7.0, 8.0], 4)
