"""
Vector arithmetic primitives shared by the optimizer.

Thin wrappers around numpy reductions that always return Python
scalars, so that scalar state in the driver never silently becomes a
0-d array.
"""
import numpy as np


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Inner product of two vectors of identical length."""
    return float(np.dot(a.ravel(), b.ravel()))


def isfinite_all(a: np.ndarray) -> bool:
    """True if every component of *a* is finite."""
    return bool(np.all(np.isfinite(a)))


def maxdiff(a: np.ndarray, b: np.ndarray) -> float:
    """Largest absolute componentwise difference between *a* and *b*."""
    if a.size == 0:
        return 0.0
    return float(np.max(np.abs(a - b)))


def infnorm(a: np.ndarray) -> float:
    """Infinity norm (max absolute component) of *a*."""
    if a.size == 0:
        return 0.0
    return float(np.max(np.abs(a)))
