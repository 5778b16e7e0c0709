#!/usr/bin/env python3
"""
Example 2: Rosenbrock Valley

Minimize the 2-D Rosenbrock function from the classic start (-1.2, 1)
with both line searches and print the iteration trace of the
Hager-Zhang run.

    f(x, y) = 100 (y - x^2)^2 + (1 - x)^2,   minimum at (1, 1)

Usage:
    python examples/02_rosenbrock.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pycg.linesearch import BacktrackingLineSearch, HagerZhangLineSearch
from pycg.minimizer import ConjugateGradient
from pycg.problems import Rosenbrock


def main():
    print("=" * 60)
    print("  Example 2: ROSENBROCK VALLEY")
    print("=" * 60)

    problem = Rosenbrock()
    df = problem.as_function()

    # Trace of the default (Hager-Zhang) run
    ConjugateGradient(show_trace=True).minimize(df, problem.initial_x)

    minimizers = {
        "Hager-Zhang": ConjugateGradient(linesearch=HagerZhangLineSearch()),
        "Backtracking": ConjugateGradient(
            linesearch=BacktrackingLineSearch(), iterations=20000
        ),
    }

    print(f"\n{'='*60}")
    print(f"{'Line search':<14} {'Iter':>6} {'f calls':>8} {'g calls':>8} {'f(x)':>14}")
    print(f"{'-'*60}")
    for name, minimizer in minimizers.items():
        result = minimizer.minimize(df, problem.initial_x)
        print(f"{name:<14} {result.iterations:>6} {result.f_calls:>8} "
              f"{result.g_calls:>8} {result.f_minimum:>14.6e}")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
