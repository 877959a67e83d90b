"""Graphical (corner-point) solver for two-variable linear programs.

Problem form::

    maximize or minimize   cx * x + cy * y
    subject to             a_i * x + b_i * y  (<=, >=, =)  rhs_i
                           x >= 0, y >= 0

Every constraint, including the two non-negativity bounds, is treated as the
line ``a x + b y = c``. All pairwise intersections are candidate corners; the
feasible ones are deduplicated and the objective is evaluated at each. By the
corner-point theorem the optimum of a bounded problem is at one of them.

The vertex search cannot tell a bounded optimum from an unbounded problem on
its own, so :func:`solve_linear_program` also inspects the recession cone of
the feasible region and reports ``is_unbounded`` on the result.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .constants import (
    DETERMINANT_TOL,
    DUPLICATE_TOL,
    FEASIBILITY_TOL,
    NONNEGATIVITY_TOL,
)
from .exceptions import DomainError, InfeasibleProblemError
from .validation import require_finite

logger = logging.getLogger(__name__)

RELATIONS = ("<=", ">=", "=")
_RELATION_ALIASES = {
    "<=": "<=",
    "≤": "<=",
    ">=": ">=",
    "≥": ">=",
    "=": "=",
    "==": "=",
}
DIRECTIONS = ("maximize", "minimize")
_DIRECTION_ALIASES = {"max": "maximize", "maximize": "maximize", "min": "minimize", "minimize": "minimize"}


@dataclass(frozen=True)
class Constraint:
    """``a * x + b * y  relation  rhs``."""

    a: float
    b: float
    relation: str
    rhs: float

    def lhs(self, x: float, y: float) -> float:
        return self.a * x + self.b * y

    def is_satisfied(self, x: float, y: float, tol: float = FEASIBILITY_TOL) -> bool:
        value = self.lhs(x, y)
        if self.relation == "<=":
            return value <= self.rhs + tol
        if self.relation == ">=":
            return value >= self.rhs - tol
        return abs(value - self.rhs) <= tol


@dataclass(frozen=True)
class LPVertex:
    x: float
    y: float
    objective_value: float
    is_optimal: bool = False


@dataclass(frozen=True)
class LPResult:
    """Optimal corner, all feasible corners and the unboundedness flag.

    ``vertices`` is sorted by objective value, highest first; the optimal
    vertex is the one with ``is_optimal`` set.
    """

    direction: str
    objective: Tuple[float, float]
    optimal: LPVertex
    vertices: Tuple[LPVertex, ...]
    constraints: Tuple[Constraint, ...]
    is_unbounded: bool = False

    @property
    def x(self) -> float:
        return self.optimal.x

    @property
    def y(self) -> float:
        return self.optimal.y

    @property
    def objective_value(self) -> float:
        return self.optimal.objective_value


ConstraintLike = Union[Constraint, Sequence]


def make_constraint(a: float, b: float, relation: str, rhs: float) -> Constraint:
    """Build a validated :class:`Constraint`."""
    rel = _RELATION_ALIASES.get(str(relation).strip())
    if rel is None:
        raise DomainError(
            f"Constraint relation must be one of {RELATIONS}, got {relation!r}",
            "relation",
            relation,
        )
    return Constraint(
        a=require_finite(a, "Constraint coefficient a"),
        b=require_finite(b, "Constraint coefficient b"),
        relation=rel,
        rhs=require_finite(rhs, "Constraint right-hand side"),
    )


def _coerce_constraints(constraints: Iterable[ConstraintLike]) -> Tuple[Constraint, ...]:
    out = []
    for c in constraints:
        if isinstance(c, Constraint):
            out.append(make_constraint(c.a, c.b, c.relation, c.rhs))
        else:
            try:
                a, b, relation, rhs = c
            except (TypeError, ValueError):
                raise DomainError(
                    f"Constraint must be (a, b, relation, rhs), got {c!r}"
                ) from None
            out.append(make_constraint(a, b, relation, rhs))
    if not out:
        raise DomainError("At least one constraint is required")
    return tuple(out)


def line_intersection(
    line1: Tuple[float, float, float], line2: Tuple[float, float, float]
) -> Optional[Tuple[float, float]]:
    """Intersect ``a1 x + b1 y = c1`` and ``a2 x + b2 y = c2`` (Cramer's rule).

    Returns ``None`` for parallel or coincident lines
    (``|det| < DETERMINANT_TOL``).
    """
    a1, b1, c1 = line1
    a2, b2, c2 = line2
    det = a1 * b2 - a2 * b1
    if abs(det) < DETERMINANT_TOL:
        return None
    return (c1 * b2 - c2 * b1) / det, (a1 * c2 - a2 * c1) / det


def is_feasible(x: float, y: float, constraints: Sequence[Constraint]) -> bool:
    if x < -NONNEGATIVITY_TOL or y < -NONNEGATIVITY_TOL:
        return False
    return all(c.is_satisfied(x, y) for c in constraints)


def _recession_directions(constraints: Sequence[Constraint]) -> List[Tuple[float, float]]:
    """Candidate extreme rays of the feasible region's recession cone.

    The cone is ``{d >= 0 : a·d <= 0 (for <=), a·d >= 0 (for >=), a·d = 0
    (for =)}``. In two dimensions each extreme ray lies on one of its
    boundary lines, so the axes and the direction along each constraint line
    are enough.
    """
    candidates = [(1.0, 0.0), (0.0, 1.0)]
    for c in constraints:
        norm = math.hypot(c.a, c.b)
        if norm > 0:
            candidates.append((c.b / norm, -c.a / norm))
            candidates.append((-c.b / norm, c.a / norm))

    homogeneous = [Constraint(c.a, c.b, c.relation, 0.0) for c in constraints]
    rays = []
    for dx, dy in candidates:
        if dx < -NONNEGATIVITY_TOL or dy < -NONNEGATIVITY_TOL:
            continue
        if all(h.is_satisfied(dx, dy, tol=DETERMINANT_TOL) for h in homogeneous):
            rays.append((dx, dy))
    return rays


def is_unbounded(
    cx: float, cy: float, constraints: Sequence[Constraint], direction: str = "maximize"
) -> bool:
    """Whether the objective improves without limit over a non-empty region.

    Assumes the region is non-empty; the caller establishes that by finding a
    feasible vertex first.
    """
    sign = 1.0 if direction == "maximize" else -1.0
    return any(
        sign * (cx * dx + cy * dy) > DETERMINANT_TOL
        for dx, dy in _recession_directions(constraints)
    )


def solve_linear_program(
    cx: float,
    cy: float,
    constraints: Iterable[ConstraintLike],
    direction: str = "maximize",
) -> LPResult:
    """Solve a two-variable LP by enumerating corner points.

    Args:
        cx (float): Objective coefficient of x.
        cy (float): Objective coefficient of y.
        constraints (Iterable): :class:`Constraint` records or
            ``(a, b, relation, rhs)`` tuples; ``x, y >= 0`` is implicit.
        direction (str): ``"maximize"`` or ``"minimize"``.

    Returns:
        LPResult: The optimal vertex (first found among ties), every unique
        feasible vertex and whether the objective is unbounded.

    Raises:
        DomainError: On malformed coefficients, relations or direction.
        InfeasibleProblemError: If no feasible vertex exists.

    Note:
        Feasibility is checked with tolerance ``FEASIBILITY_TOL`` (1e-6);
        coordinates down to ``-NONNEGATIVITY_TOL`` count as zero and are
        clamped to 0 in the output. When ``is_unbounded`` is true the
        returned vertex is merely the best corner, not an optimum.
    """
    cx = require_finite(cx, "Objective coefficient of x")
    cy = require_finite(cy, "Objective coefficient of y")
    key = str(direction).strip().lower()
    if key not in _DIRECTION_ALIASES:
        raise DomainError(
            f"direction must be one of {DIRECTIONS}, got {direction!r}", "direction", direction
        )
    direction = _DIRECTION_ALIASES[key]
    parsed = _coerce_constraints(constraints)

    lines = [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    lines.extend((c.a, c.b, c.rhs) for c in parsed)

    candidates = []
    for line1, line2 in itertools.combinations(lines, 2):
        point = line_intersection(line1, line2)
        if point is not None:
            candidates.append(point)

    unique: List[LPVertex] = []
    for px, py in candidates:
        if not is_feasible(px, py, parsed):
            continue
        vx, vy = max(0.0, px), max(0.0, py)
        if any(abs(u.x - vx) < DUPLICATE_TOL and abs(u.y - vy) < DUPLICATE_TOL for u in unique):
            continue
        unique.append(LPVertex(vx, vy, cx * px + cy * py))

    logger.debug(
        "LP: %d lines, %d intersections, %d unique feasible vertices",
        len(lines),
        len(candidates),
        len(unique),
    )
    if not unique:
        raise InfeasibleProblemError(
            "No feasible solution exists for the given constraints",
            details={"candidates": len(candidates)},
        )

    best = 0
    for i, v in enumerate(unique[1:], start=1):
        if direction == "maximize":
            better = v.objective_value > unique[best].objective_value
        else:
            better = v.objective_value < unique[best].objective_value
        if better:
            best = i

    vertices = [
        LPVertex(v.x, v.y, v.objective_value, is_optimal=(i == best))
        for i, v in enumerate(unique)
    ]
    optimal = vertices[best]
    vertices.sort(key=lambda v: v.objective_value, reverse=True)

    unbounded = is_unbounded(cx, cy, parsed, direction)
    if unbounded:
        logger.warning(
            "Objective is unbounded over the feasible region; "
            "(%.6g, %.6g) is only the best corner point",
            optimal.x,
            optimal.y,
        )

    return LPResult(
        direction=direction,
        objective=(cx, cy),
        optimal=optimal,
        vertices=tuple(vertices),
        constraints=parsed,
        is_unbounded=unbounded,
    )
