"""Shared input checks for the calculators.

Each helper returns the cleaned value (``float``, ``int`` or a float array) or
raises a :mod:`statcalc.exceptions` error whose message can be shown to the
user as-is.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .exceptions import DomainError, MalformedInputError


def require_finite(value: float, name: str) -> float:
    """Return ``value`` as float, rejecting NaN, infinity and non-numbers."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise MalformedInputError(
            f"{name} must be a number, got {value!r}", tokens=[value]
        ) from None
    if not math.isfinite(v):
        raise MalformedInputError(f"{name} must be finite, got {value!r}", tokens=[v])
    return v


def require_positive(value: float, name: str) -> float:
    v = require_finite(value, name)
    if v <= 0:
        raise DomainError(f"{name} must be positive, got {v:g}", name, v)
    return v


def require_probability(value: float, name: str, *, open_interval: bool = False) -> float:
    """Check ``value`` lies in [0, 1], or in (0, 1) when ``open_interval``."""
    v = require_finite(value, name)
    if open_interval and not 0.0 < v < 1.0:
        raise DomainError(f"{name} must be strictly between 0 and 1, got {v:g}", name, v)
    if not 0.0 <= v <= 1.0:
        raise DomainError(f"{name} must be between 0 and 1, got {v:g}", name, v)
    return v


def require_alpha(alpha: float) -> float:
    return require_probability(alpha, "Significance level (alpha)", open_interval=True)


def require_count(value: float, name: str, minimum: int = 0) -> int:
    """Return ``value`` as int when it is a whole number >= ``minimum``."""
    v = require_finite(value, name)
    if v != math.floor(v):
        raise DomainError(f"{name} must be a whole number, got {v:g}", name, v)
    if v < minimum:
        raise DomainError(f"{name} must be at least {minimum}, got {int(v)}", name, int(v))
    return int(v)


def as_sample(values: Iterable[float], name: str = "data", min_size: int = 1) -> np.ndarray:
    """Convert ``values`` to a 1-D float array of finite numbers.

    Raises:
        MalformedInputError: If any entry is non-numeric, NaN or infinite.
        DomainError: If fewer than ``min_size`` observations are supplied.
    """
    try:
        arr = np.asarray(list(values), dtype=float)
    except (TypeError, ValueError):
        raise MalformedInputError(f"{name} must contain only numbers") from None
    if arr.ndim != 1:
        raise MalformedInputError(f"{name} must be a flat sequence of numbers")
    bad = arr[~np.isfinite(arr)]
    if bad.size:
        raise MalformedInputError(
            f"{name} contains {bad.size} non-finite value(s)", tokens=bad.tolist()
        )
    if arr.size < min_size:
        raise DomainError(
            f"{name} needs at least {min_size} observation(s), got {arr.size}",
            name,
            int(arr.size),
        )
    return arr
