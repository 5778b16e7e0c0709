#!/usr/bin/env python3
"""
Example 1: Convex Quadratic

Minimize f(x) = 1/2 x^T A x - b^T x for a random SPD matrix A and
compare the result with the direct solution of A x = b.

Math:
    With exact line searches, conjugate gradient solves an n-dimensional
    SPD quadratic in at most n iterations. The Hager-Zhang line search
    is exact on quadratics up to rounding, so the iteration count should
    be close to n.

Usage:
    python examples/01_quadratic.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from pycg.minimizer import ConjugateGradient
from pycg.problems import Quadratic


def main():
    print("=" * 60)
    print("  Example 1: CONVEX QUADRATIC")
    print("=" * 60)

    n = 20
    rng = np.random.RandomState(42)
    Q = rng.randn(n, n)
    A = Q @ Q.T + n * np.eye(n)
    b = rng.randn(n)
    problem = Quadratic(A=A, b=b)

    minimizer = ConjugateGradient(grtol=1e-10, ftol=0.0)
    result = minimizer.minimize(problem.as_function(), np.zeros(n))
    print(result)

    x_direct = np.linalg.solve(A, b)
    error = np.max(np.abs(result.minimum - x_direct))

    print(f"\nDimension:          {n}")
    print(f"Condition number:   {np.linalg.cond(A):.2f}")
    print(f"Iterations:         {result.iterations}")
    print(f"Max error vs solve: {error:.2e}")

    if error < 1e-8:
        print("\n[PASS] Matches direct solve")
    else:
        print("\n[FAIL] Does not match direct solve")
    print("=" * 60)


if __name__ == "__main__":
    main()
