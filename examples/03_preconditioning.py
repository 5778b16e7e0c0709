#!/usr/bin/env python3
"""
Example 3: Diagonal Preconditioning

An ill-scaled quadratic f(x) = 1/2 sum d_i x_i^2 with d spanning six
orders of magnitude. The Jacobi preconditioner P = diag(1/d) undoes the
scaling, so the preconditioned run needs far fewer iterations.

Usage:
    python examples/03_preconditioning.py
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from pycg.minimizer import ConjugateGradient
from pycg.preconditioner import DiagonalPreconditioner
from pycg.problems import Quadratic


def main():
    print("=" * 60)
    print("  Example 3: DIAGONAL PRECONDITIONING")
    print("=" * 60)

    n = 50
    d = np.logspace(0, 6, n)
    problem = Quadratic(A=np.diag(d))
    x0 = np.ones(n)

    plain = ConjugateGradient(grtol=1e-6, ftol=0.0, iterations=10000)
    jacobi = ConjugateGradient(
        grtol=1e-6, ftol=0.0, iterations=10000, P=DiagonalPreconditioner(1.0 / d)
    )

    for name, minimizer in [("none", plain), ("Jacobi", jacobi)]:
        result = minimizer.minimize(problem.as_function(), x0)
        print(f"P = {name:<8} iterations = {result.iterations:>5}   "
              f"f = {result.f_minimum:.3e}   converged = {result.converged}")

    print("=" * 60)


if __name__ == "__main__":
    main()
