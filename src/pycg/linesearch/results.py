"""
Line search cache.

Records the (step, value, slope) triples evaluated during one line
search episode. The driver clears it and seeds the zero-step entry at
the start of every iteration; alphatry and the line search append to
it.
"""
from typing import List


class LineSearchResults:
    """
    Ordered cache of line search evaluations.

    Attributes:
        alpha: Step lengths evaluated.
        value: phi(alpha) = f(x + alpha * s) at each step.
        slope: phi'(alpha) = grad f(x + alpha * s) . s at each step.
        nfailures: Count of non-finite evaluations encountered.
    """

    def __init__(self) -> None:
        self.alpha: List[float] = []
        self.value: List[float] = []
        self.slope: List[float] = []
        self.nfailures: int = 0

    def push(self, alpha: float, value: float, slope: float) -> None:
        """Append one evaluation."""
        self.alpha.append(float(alpha))
        self.value.append(float(value))
        self.slope.append(float(slope))

    def clear(self) -> None:
        """Drop all evaluations and reset the failure count."""
        self.alpha.clear()
        self.value.clear()
        self.slope.clear()
        self.nfailures = 0

    def __len__(self) -> int:
        return len(self.alpha)

    def __repr__(self) -> str:
        return (
            f"LineSearchResults(alpha={self.alpha}, value={self.value}, "
            f"slope={self.slope}, nfailures={self.nfailures})"
        )
