"""
Numerical kernels for the statistics calculators.

This subpackage provides the distribution functions, descriptive statistics
and regression that the calculators in :mod:`statcalc` build on. All functions
operate on sequences and primitive types and return plain numbers or frozen
result records.

Modules:
    special:
        Log-gamma (Lanczos), the regularized incomplete beta function and its
        continued-fraction evaluator.

    distributions:
        Normal, Student's t and F CDFs; z and t critical-value tables.

    descriptive:
        Mean, standard deviation, standard errors and confidence intervals
        for means and proportions.

    regression:
        Simple ordinary least-squares regression with coefficient standard
        errors and the slope t test.

Design Principle:
    This subpackage has no dependencies on the calculator modules above it.
    It provides pure numerical utilities that can be independently tested.
"""

from .descriptive import (
    ConfidenceInterval,
    check_success_failure,
    confidence_interval_mean,
    confidence_interval_mean_from_sample,
    confidence_interval_proportion,
    mean,
    standard_error_mean,
    standard_error_proportion,
    std_dev,
)
from .distributions import (
    T_TABLE,
    Z_SCORES,
    confidence_percent,
    f_cdf,
    normal_cdf,
    t_cdf,
    t_critical,
    z_critical,
)
from .regression import RegressionResult, linear_regression
from .special import beta_continued_fraction, log_gamma, regularized_incomplete_beta

__all__ = [
    "log_gamma",
    "beta_continued_fraction",
    "regularized_incomplete_beta",
    "normal_cdf",
    "t_cdf",
    "f_cdf",
    "Z_SCORES",
    "T_TABLE",
    "confidence_percent",
    "z_critical",
    "t_critical",
    "mean",
    "std_dev",
    "standard_error_mean",
    "standard_error_proportion",
    "ConfidenceInterval",
    "check_success_failure",
    "confidence_interval_mean",
    "confidence_interval_mean_from_sample",
    "confidence_interval_proportion",
    "RegressionResult",
    "linear_regression",
]
