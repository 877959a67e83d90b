"""Command-line front end for the statistics calculators.

Each sub-command parses its text arguments, runs one calculator, prints the
result and, with ``--outdir``, writes the result tables as CSV. Calculator
failures are logged with their reason and give exit status 2.
"""

from __future__ import annotations

import argparse
import logging
import re
from typing import Callable, Dict, List, Tuple

import pandas as pd

from . import anova, hypothesis, linear_programming, reporting, sample_size, seasonal
from .constants import DEFAULT_ALPHA, DEFAULT_CONFIDENCE
from .data_processing import parse_data_input, parse_groups
from .exceptions import DomainError, StatCalcError
from .output import save_tables_to_csv
from .stats import descriptive
from .stats.regression import linear_regression

logger = logging.getLogger(__name__)

Outcome = Tuple[List[str], Dict[str, pd.DataFrame]]


def _test_lines(result: hypothesis.TestResult) -> List[str]:
    lines = [
        f"{result.test} ({result.alternative})",
        f"  estimate = {result.estimate:.6g}, hypothesized = {result.hypothesized:.6g}",
        f"  SE = {result.standard_error:.6g}",
        f"  {result.statistic_type} = {result.statistic:.4f}",
    ]
    if result.df is not None:
        lines.append(f"  df = {result.df:.2f}")
    decision = "reject H0" if result.reject_null else "fail to reject H0"
    lines.append(f"  p-value = {result.p_value:.4f} -> {decision} at alpha = {result.alpha:g}")
    return lines


def _ci_lines(ci: descriptive.ConfidenceInterval) -> List[str]:
    lines = [
        f"{ci.confidence_level}% confidence interval",
        f"  estimate = {ci.estimate:.6g}, SE = {ci.standard_error:.6g}",
        f"  {ci.critical_type}* = {ci.critical_value:.4f}"
        + (f" (df = {ci.df:g})" if ci.df is not None else ""),
        f"  margin of error = {ci.margin_of_error:.6g}",
        f"  ({ci.lower:.6g}, {ci.upper:.6g})",
    ]
    return lines


def _run_ci_mean(args: argparse.Namespace) -> Outcome:
    if args.data is not None:
        ci = descriptive.confidence_interval_mean_from_sample(
            parse_data_input(args.data), args.confidence, sigma=args.sigma
        )
    else:
        _require(args, "mean", "n")
        sd = args.sigma if args.sigma is not None else args.sd
        if sd is None:
            raise DomainError("Either --sd or --sigma is required")
        ci = descriptive.confidence_interval_mean(
            args.mean, sd, args.n, args.confidence, sigma_known=args.sigma is not None
        )
    return _ci_lines(ci), {"confidence_interval": reporting.record_table(ci)}


def _run_ci_proportion(args: argparse.Namespace) -> Outcome:
    ci = descriptive.confidence_interval_proportion(args.successes, args.n, args.confidence)
    return _ci_lines(ci), {"confidence_interval": reporting.record_table(ci)}


def _with_comparison(result: hypothesis.TestResult, manual_p) -> Outcome:
    lines = _test_lines(result)
    tables = {"test_result": reporting.record_table(result)}
    if manual_p is not None:
        cmp = hypothesis.compare_p_value(manual_p, result)
        verdict = "same conclusion" if cmp.same_conclusion else "DIFFERENT conclusion"
        lines.append(
            f"  your p-value {cmp.manual_p_value:.4f} differs by {cmp.difference:.4f} ({verdict})"
        )
        tables["p_value_comparison"] = reporting.record_table(cmp)
    return lines, tables


def _run_z_test(args: argparse.Namespace) -> Outcome:
    result = hypothesis.z_test_mean(
        args.mean, args.mu0, args.sigma, args.n, args.alpha, args.alternative
    )
    return _with_comparison(result, args.manual_p)


def _run_t_test(args: argparse.Namespace) -> Outcome:
    if args.data is not None:
        result = hypothesis.t_test_mean_from_sample(
            parse_data_input(args.data), args.mu0, args.alpha, args.alternative
        )
    else:
        _require(args, "mean", "sd", "n")
        result = hypothesis.t_test_mean(
            args.mean, args.mu0, args.sd, args.n, args.alpha, args.alternative
        )
    return _with_comparison(result, args.manual_p)


def _run_proportion_test(args: argparse.Namespace) -> Outcome:
    result = hypothesis.z_test_proportion(
        args.successes, args.n, args.p0, args.alpha, args.alternative
    )
    return _with_comparison(result, args.manual_p)


def _run_two_sample(args: argparse.Namespace) -> Outcome:
    if args.data1 is not None or args.data2 is not None:
        _require(args, "data1", "data2")
        result = hypothesis.two_sample_t_test_from_samples(
            parse_data_input(args.data1, "Sample 1"),
            parse_data_input(args.data2, "Sample 2"),
            equal_variance=args.equal_variance,
            alpha=args.alpha,
            alternative=args.alternative,
        )
    else:
        _require(args, "mean1", "sd1", "n1", "mean2", "sd2", "n2")
        result = hypothesis.two_sample_t_test(
            args.mean1,
            args.sd1,
            args.n1,
            args.mean2,
            args.sd2,
            args.n2,
            equal_variance=args.equal_variance,
            alpha=args.alpha,
            alternative=args.alternative,
        )
    return _with_comparison(result, args.manual_p)


def _run_anova(args: argparse.Namespace) -> Outcome:
    groups = parse_groups(args.group, min_groups=2)
    result = anova.one_way_anova(groups, alpha=args.alpha)
    decision = "reject H0" if result.reject_null else "fail to reject H0"
    lines = [
        f"One-way ANOVA, {len(groups)} groups, grand mean = {result.grand_mean:.6g}",
        f"  SS between = {result.ss_between:.6g}, SS within = {result.ss_within:.6g}, "
        f"SS total = {result.ss_total:.6g}",
        f"  F({result.df_between}, {result.df_within}) = {result.f_statistic:.4f}",
        f"  p-value = {result.p_value:.4f} -> {decision} at alpha = {result.alpha:g}",
    ]
    tables = {
        "anova_table": reporting.anova_table(result),
        "group_summary": anova.group_summary(groups),
    }
    return lines, tables


def _run_regression(args: argparse.Namespace) -> Outcome:
    x = parse_data_input(args.x, "X values")
    y = parse_data_input(args.y, "Y values")
    result = linear_regression(x, y)
    lines = [
        f"y = {result.intercept:.6g} + {result.slope:.6g} x  (n = {result.n})",
        f"  SE(slope) = {result.standard_error_slope:.6g}, "
        f"SE(intercept) = {result.standard_error_intercept:.6g}",
        f"  R^2 = {result.r_squared:.4f}, slope p-value = {result.p_slope:.4f}",
    ]
    return lines, {"regression": reporting.regression_table(x, y, result)}


def _run_seasonal(args: argparse.Namespace) -> Outcome:
    data = parse_data_input(args.data)
    result = seasonal.seasonal_decomposition(data, args.periods)
    lines = [f"Seasonal indices (P = {result.periods_per_season}):"]
    lines.extend(f"  season {i}: {v:.4f}" for i, v in enumerate(result.indices, start=1))
    return lines, {"seasonal": reporting.seasonal_table(data, result)}


def _run_sample_size(args: argparse.Namespace) -> Outcome:
    result = sample_size.plan_sample_size(
        args.parameter,
        args.margin,
        confidence_level=args.confidence,
        z=args.z,
        proportion=args.p,
        sigma=args.sigma,
        population_size=args.population,
    )
    lines = [f"n0 = {result.n0} (z = {result.z:g}, E = {result.margin_of_error:g})"]
    if result.n_adjusted is not None:
        lines.append(
            f"  with finite population N = {result.population_size}: n = {result.n_adjusted}"
        )
    return lines, {"sample_size": reporting.record_table(result)}


def _parse_constraint(text: str) -> linear_programming.Constraint:
    parts = [p for p in re.split(r"[,\s]+", text.strip()) if p]
    if len(parts) != 4:
        raise DomainError(f"Constraint must look like 'a,b,<=,rhs', got {text!r}")
    a, b, relation, rhs = parts
    try:
        return linear_programming.make_constraint(float(a), float(b), relation, float(rhs))
    except ValueError as exc:
        if isinstance(exc, StatCalcError):
            raise
        raise DomainError(f"Constraint must look like 'a,b,<=,rhs', got {text!r}") from exc


def _run_lp(args: argparse.Namespace) -> Outcome:
    constraints = [_parse_constraint(c) for c in args.constraint]
    cx, cy = args.objective
    result = linear_programming.solve_linear_program(cx, cy, constraints, args.direction)
    lines = [
        f"{result.direction} {cx:g}x + {cy:g}y",
        f"  optimum at (x, y) = ({result.x:.6g}, {result.y:.6g}), "
        f"objective = {result.objective_value:.6g}",
    ]
    if result.is_unbounded:
        lines.append("  warning: the objective is unbounded; this is only the best corner point")
    return lines, {"vertices": reporting.vertex_table(result)}


def _require(args: argparse.Namespace, *names: str) -> None:
    missing = ["--" + n.replace("_", "-") for n in names if getattr(args, n) is None]
    if missing:
        raise DomainError(f"Missing required option(s): {', '.join(missing)}")


def _add_test_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--alpha", type=float, default=DEFAULT_ALPHA)
    parser.add_argument(
        "--alternative",
        default="two-sided",
        choices=hypothesis.ALTERNATIVES,
        help="Alternative hypothesis (default: two-sided).",
    )
    parser.add_argument(
        "--manual-p",
        type=float,
        default=None,
        help="Your own p-value, to compare against the calculated one.",
    )


def _build_arg_parser() -> argparse.ArgumentParser:
    """Build command-line parser for module execution."""
    parser = argparse.ArgumentParser(
        prog="statcalc", description="Statistics calculators with worked results."
    )
    parser.add_argument("--outdir", default=None, help="Write result tables as CSV here.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("ci-mean", help="Confidence interval for a mean.")
    p.add_argument("--data", help="Raw observations, comma or space separated.")
    p.add_argument("--mean", type=float)
    p.add_argument("--sd", type=float, help="Sample standard deviation.")
    p.add_argument("--sigma", type=float, help="Known population standard deviation.")
    p.add_argument("--n", type=float)
    p.add_argument("--confidence", type=float, default=DEFAULT_CONFIDENCE)
    p.set_defaults(handler=_run_ci_mean)

    p = sub.add_parser("ci-proportion", help="Confidence interval for a proportion.")
    p.add_argument("--successes", type=float, required=True)
    p.add_argument("--n", type=float, required=True)
    p.add_argument("--confidence", type=float, default=DEFAULT_CONFIDENCE)
    p.set_defaults(handler=_run_ci_proportion)

    p = sub.add_parser("z-test", help="One-sample z test (known sigma).")
    p.add_argument("--mean", type=float, required=True)
    p.add_argument("--mu0", type=float, required=True)
    p.add_argument("--sigma", type=float, required=True)
    p.add_argument("--n", type=float, required=True)
    _add_test_options(p)
    p.set_defaults(handler=_run_z_test)

    p = sub.add_parser("t-test", help="One-sample t test.")
    p.add_argument("--data")
    p.add_argument("--mean", type=float)
    p.add_argument("--sd", type=float)
    p.add_argument("--n", type=float)
    p.add_argument("--mu0", type=float, required=True)
    _add_test_options(p)
    p.set_defaults(handler=_run_t_test)

    p = sub.add_parser("proportion-test", help="One-sample z test for a proportion.")
    p.add_argument("--successes", type=float, required=True)
    p.add_argument("--n", type=float, required=True)
    p.add_argument("--p0", type=float, required=True)
    _add_test_options(p)
    p.set_defaults(handler=_run_proportion_test)

    p = sub.add_parser("two-sample", help="Two-sample t test (Welch or pooled).")
    p.add_argument("--data1")
    p.add_argument("--data2")
    for i in (1, 2):
        p.add_argument(f"--mean{i}", type=float)
        p.add_argument(f"--sd{i}", type=float)
        p.add_argument(f"--n{i}", type=float)
    p.add_argument("--equal-variance", action="store_true")
    _add_test_options(p)
    p.set_defaults(handler=_run_two_sample)

    p = sub.add_parser("anova", help="One-way ANOVA.")
    p.add_argument("--group", action="append", required=True, help="Repeat once per group.")
    p.add_argument("--alpha", type=float, default=DEFAULT_ALPHA)
    p.set_defaults(handler=_run_anova)

    p = sub.add_parser("regression", help="Simple linear regression.")
    p.add_argument("--x", required=True)
    p.add_argument("--y", required=True)
    p.set_defaults(handler=_run_regression)

    p = sub.add_parser("seasonal", help="Seasonal indices (ratio to moving average).")
    p.add_argument("--data", required=True)
    p.add_argument("--periods", type=int, required=True)
    p.set_defaults(handler=_run_seasonal)

    p = sub.add_parser("sample-size", help="Required sample size.")
    p.add_argument("--parameter", choices=sample_size.PARAMETERS, required=True)
    p.add_argument("--margin", type=float, required=True)
    p.add_argument("--confidence", type=float, default=DEFAULT_CONFIDENCE)
    p.add_argument("--z", type=float, default=None)
    p.add_argument("--p", type=float, default=None)
    p.add_argument("--sigma", type=float, default=None)
    p.add_argument("--population", type=float, default=None)
    p.set_defaults(handler=_run_sample_size)

    p = sub.add_parser("lp", help="Two-variable linear program (corner points).")
    p.add_argument("--objective", type=float, nargs=2, metavar=("CX", "CY"), required=True)
    p.add_argument(
        "--constraint", action="append", required=True, help="'a,b,<=,rhs'; repeatable."
    )
    p.add_argument("--direction", choices=linear_programming.DIRECTIONS, default="maximize")
    p.set_defaults(handler=_run_lp)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for running one calculator."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    handler: Callable[[argparse.Namespace], Outcome] = args.handler

    try:
        lines, tables = handler(args)
    except StatCalcError as exc:
        logger.error("%s failed (%s): %s", args.command, exc.category, exc.reason)
        return 2

    for line in lines:
        print(line)
    if args.outdir:
        save_tables_to_csv(tables, args.outdir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
