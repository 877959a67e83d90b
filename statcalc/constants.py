"""Centralized numeric tolerances and defaults.

These values are part of the observable behaviour of the calculators: golden
results (LP vertices, p-values near table boundaries) depend on them, so they
are fixed here rather than tuned per call site.
"""

from __future__ import annotations

# Continued-fraction evaluation of the incomplete beta function.
BETACF_MAX_ITER: int = 100
BETACF_EPS: float = 1e-10

# Above this df the t distribution is replaced by the standard normal.
T_NORMAL_CUTOFF_DF: float = 100.0
# Largest df in the critical-value table; beyond it z is used.
T_TABLE_MAX_DF: float = 120.0

# Linear programming.
DETERMINANT_TOL: float = 1e-10
NONNEGATIVITY_TOL: float = 1e-10
FEASIBILITY_TOL: float = 1e-6
DUPLICATE_TOL: float = 1e-6

# Relative tolerance for the ANOVA sum-of-squares identity.
SS_IDENTITY_RTOL: float = 1e-9

DEFAULT_ALPHA: float = 0.05
DEFAULT_CONFIDENCE: float = 0.95

# Success-failure condition for the normal approximation to a proportion.
MIN_EXPECTED_COUNT: float = 10.0
