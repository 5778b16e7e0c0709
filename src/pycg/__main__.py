"""
Command line entry point for pycg.

Usage::

    python -m pycg run.yaml                       # run a YAML run file
    python -m pycg run.yaml --show-trace
    python -m pycg --problem rosenbrock --dimension 4 --iterations 500

Exit status is 0 when the run converged, 1 when it did not and 2 on
error.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import pycg
from pycg.core.exceptions import OptimizationError

logger = logging.getLogger("pycg")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m pycg",
        description="Minimize a test problem with preconditioned nonlinear conjugate gradient.",
    )
    parser.add_argument("config", nargs="?", help="YAML run file")
    parser.add_argument("--problem", help="Built-in problem (quadratic, rosenbrock, himmelblau, powell)")
    parser.add_argument("--dimension", type=int, help="Problem dimension")
    parser.add_argument("--iterations", type=int, help="Maximum number of iterations")
    parser.add_argument("--show-trace", action="store_true", help="Print per-iteration progress")
    parser.add_argument("--log-level", default="warning", help="Log level (default: warning)")
    parser.add_argument("--version", action="version", version=f"pycg {pycg.__version__}")
    return parser


def run(args: argparse.Namespace):
    """Build the run described by args and minimize."""
    from pycg.builder import build_run_from_config, load_and_run

    overrides = {}
    if args.iterations is not None:
        overrides["iterations"] = args.iterations
    if args.show_trace:
        overrides["show_trace"] = True

    if args.config is not None:
        return load_and_run(args.config, **overrides)

    problem_config = {"name": args.problem}
    if args.dimension is not None:
        problem_config["dimension"] = args.dimension
    minimizer, problem, initial_x = build_run_from_config(
        {"problem": problem_config, "options": overrides}
    )
    return minimizer.minimize(problem.as_function(), initial_x)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.config is None) == (args.problem is None):
        parser.error("give either a run file or --problem")

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = run(args)
    except (OptimizationError, ValueError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print(result.summary())
    return 0 if result.converged else 1


if __name__ == "__main__":
    raise SystemExit(main())
