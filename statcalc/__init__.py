"""
A Python package of introductory statistics calculators.

Computes confidence intervals, hypothesis tests, ANOVA, regression, seasonal
indices, sample sizes and two-variable linear programs, returning frozen
result records that carry every intermediate value a worked solution shows.

Modules:
    - stats: Distribution functions, critical values, descriptive statistics and regression.
    - hypothesis: One- and two-sample z and t tests, p-value comparison.
    - anova: One-way analysis of variance.
    - seasonal: Seasonal indices by the ratio-to-moving-average method.
    - sample_size: Sample-size planning with finite population correction.
    - linear_programming: Corner-point solver for two-variable linear programs.
    - data_processing: Parses free-text number lists.
    - reporting / output: Result tables and CSV export.
"""

__version__ = "1.0.0"

from .anova import AnovaResult, group_summary, one_way_anova
from .data_processing import parse_data_input, parse_groups
from .exceptions import (
    DomainError,
    InfeasibleProblemError,
    MalformedInputError,
    StatCalcError,
)
from .hypothesis import (
    PValueComparison,
    TestResult,
    compare_p_value,
    t_test_mean,
    t_test_mean_from_sample,
    two_sample_t_test,
    two_sample_t_test_from_samples,
    z_test_mean,
    z_test_proportion,
)
from .linear_programming import (
    Constraint,
    LPResult,
    LPVertex,
    make_constraint,
    solve_linear_program,
)
from .output import save_tables_to_csv
from .reporting import (
    anova_table,
    record_table,
    regression_table,
    seasonal_table,
    vertex_table,
)
from .sample_size import (
    SampleSizeResult,
    finite_population_correction,
    plan_sample_size,
    sample_size_mean,
    sample_size_proportion,
)
from .seasonal import SeasonalResult, centered_moving_average, seasonal_decomposition
from .stats import (
    ConfidenceInterval,
    RegressionResult,
    confidence_interval_mean,
    confidence_interval_mean_from_sample,
    confidence_interval_proportion,
    f_cdf,
    linear_regression,
    normal_cdf,
    t_cdf,
    t_critical,
    z_critical,
)

__all__ = [
    # Errors
    "StatCalcError",
    "MalformedInputError",
    "DomainError",
    "InfeasibleProblemError",
    # Distributions and descriptive statistics
    "normal_cdf",
    "t_cdf",
    "f_cdf",
    "z_critical",
    "t_critical",
    "ConfidenceInterval",
    "confidence_interval_mean",
    "confidence_interval_mean_from_sample",
    "confidence_interval_proportion",
    # Hypothesis tests
    "TestResult",
    "PValueComparison",
    "z_test_mean",
    "t_test_mean",
    "t_test_mean_from_sample",
    "z_test_proportion",
    "two_sample_t_test",
    "two_sample_t_test_from_samples",
    "compare_p_value",
    # ANOVA
    "AnovaResult",
    "one_way_anova",
    "group_summary",
    # Regression
    "RegressionResult",
    "linear_regression",
    # Seasonal indices
    "SeasonalResult",
    "centered_moving_average",
    "seasonal_decomposition",
    # Sample size
    "SampleSizeResult",
    "sample_size_proportion",
    "sample_size_mean",
    "finite_population_correction",
    "plan_sample_size",
    # Linear programming
    "Constraint",
    "LPVertex",
    "LPResult",
    "make_constraint",
    "solve_linear_program",
    # Input and output
    "parse_data_input",
    "parse_groups",
    "record_table",
    "anova_table",
    "regression_table",
    "seasonal_table",
    "vertex_table",
    "save_tables_to_csv",
]
