"""Exceptions raised by the calculators.

Every calculator validates its input before touching the numeric kernels and
raises one of these instead of returning NaN or infinity. All of them derive
from :class:`ValueError`, so callers that only care about "bad input" can
catch that.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class StatCalcError(ValueError):
    """Base class for all calculator failures."""

    category = "error"

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(reason)
        self.reason = reason
        self.details = details or {}


class MalformedInputError(StatCalcError):
    """Input that is not a finite number (unparseable text, NaN, infinity)."""

    category = "malformed"

    def __init__(
        self,
        reason: str,
        tokens: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(reason, details)
        self.tokens = list(tokens or [])
        if self.tokens:
            self.details["tokens"] = self.tokens


class DomainError(StatCalcError):
    """Parameter outside the domain of the requested calculation."""

    category = "domain"

    def __init__(
        self,
        reason: str,
        parameter: Optional[str] = None,
        value: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(reason, details)
        self.parameter = parameter
        if parameter is not None:
            self.details["parameter"] = parameter
            self.details["value"] = value


class InfeasibleProblemError(StatCalcError):
    """Well-formed problem that has no solution."""

    category = "infeasible"
