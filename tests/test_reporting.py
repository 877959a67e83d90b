"""Tests for result-table construction."""

import numpy as np
import pytest

from statcalc.anova import one_way_anova
from statcalc.exceptions import DomainError
from statcalc.hypothesis import t_test_mean
from statcalc.linear_programming import solve_linear_program
from statcalc.reporting import (
    anova_table,
    record_table,
    regression_table,
    seasonal_table,
    vertex_table,
)
from statcalc.schema import ANOVA_COLUMNS, SEASONAL_COLUMNS, VERTEX_COLUMNS
from statcalc.seasonal import seasonal_decomposition
from statcalc.stats.descriptive import confidence_interval_mean
from statcalc.stats.regression import linear_regression


def test_record_table_has_one_row_of_scalars():
    table = record_table(t_test_mean(105.0, 100.0, 15.0, 25))
    assert len(table) == 1
    assert {"test", "statistic", "p_value", "df", "reject_null"} <= set(table.columns)
    assert table.loc[0, "df"] == 24


def test_record_table_skips_tuple_fields():
    table = record_table(one_way_anova([[1.0, 2.0], [3.0, 5.0]]))
    assert "group_means" not in table.columns
    assert "f_statistic" in table.columns


def test_record_table_works_for_intervals():
    table = record_table(confidence_interval_mean(50.0, 10.0, 25))
    assert table.loc[0, "critical_type"] == "t"


@pytest.mark.parametrize("bad", ["not a record", 3.0, None])
def test_record_table_rejects_non_records(bad):
    with pytest.raises(DomainError):
        record_table(bad)


def test_anova_table_layout():
    result = one_way_anova([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
    table = anova_table(result)
    c = ANOVA_COLUMNS
    assert table[c.source].to_list() == ["Between Groups", "Within Groups", "Total"]
    assert table[c.df].to_list() == [2, 6, 8]
    assert np.allclose(table[c.ss], [54.0, 6.0, 60.0])
    assert np.isclose(table.loc[0, c.f], 27.0)
    assert np.isnan(table.loc[1, c.f])
    assert np.isnan(table.loc[2, c.ms])


def test_regression_table():
    x = [1.0, 2.0, 3.0, 4.0, 5.0]
    y = [2.0, 4.0, 5.0, 4.0, 5.0]
    table = regression_table(x, y, linear_regression(x, y))
    assert list(table.columns) == ["x", "y", "Predicted y", "Residual"]
    assert np.allclose(table["Predicted y"] + table["Residual"], y)


def test_regression_table_length_mismatch():
    fit = linear_regression([1.0, 2.0, 3.0], [1.0, 3.0, 2.0])
    with pytest.raises(DomainError):
        regression_table([1.0, 2.0], [1.0, 3.0], fit)


def test_seasonal_table_marks_boundaries_as_nan():
    data = [10.0, 20.0, 30.0, 40.0, 12.0, 22.0, 32.0, 42.0]
    result = seasonal_decomposition(data, 4)
    table = seasonal_table(data, result)
    c = SEASONAL_COLUMNS
    assert table[c.period].to_list() == list(range(1, 9))
    assert table[c.season].to_list() == [1, 2, 3, 4, 1, 2, 3, 4]
    assert table[c.moving_average].isna().to_list() == [True, True] + [False] * 4 + [True, True]
    assert table[c.ratio].isna().sum() == 4
    assert np.allclose(table[c.index].to_numpy()[:4], result.indices)


def test_seasonal_table_length_mismatch():
    data = [10.0, 20.0, 30.0, 40.0, 12.0, 22.0, 32.0, 42.0]
    result = seasonal_decomposition(data, 4)
    with pytest.raises(DomainError):
        seasonal_table(data[:-1], result)


def test_vertex_table_best_first():
    result = solve_linear_program(3, 2, [(1, 1, "<=", 4), (2, 1, "<=", 6)])
    table = vertex_table(result)
    c = VERTEX_COLUMNS
    assert len(table) == 4
    assert bool(table.loc[0, c.optimal])
    assert table[c.optimal].sum() == 1
    assert np.isclose(table.loc[0, c.objective], 10.0)
