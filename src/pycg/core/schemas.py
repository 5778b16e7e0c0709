"""
Plain data schemas for optimizer configuration.

CGOptions is the transport-neutral form of the ConjugateGradient
keyword arguments, used by the config loader and the CLI.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CGOptions:
    """Options recognised by the conjugate gradient driver."""

    xtol: float = 1e-32
    ftol: float = 1e-8
    grtol: float = 1e-8
    iterations: int = 1000
    store_trace: bool = False
    show_trace: bool = False
    extended_trace: bool = False
    eta: float = 0.4

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CGOptions":
        return cls(
            xtol=float(d.get("xtol", 1e-32)),
            ftol=float(d.get("ftol", 1e-8)),
            grtol=float(d.get("grtol", 1e-8)),
            iterations=int(d.get("iterations", 1000)),
            store_trace=bool(d.get("store_trace", False)),
            show_trace=bool(d.get("show_trace", False)),
            extended_trace=bool(d.get("extended_trace", False)),
            eta=float(d.get("eta", 0.4)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "xtol": self.xtol,
            "ftol": self.ftol,
            "grtol": self.grtol,
            "iterations": self.iterations,
            "store_trace": self.store_trace,
            "show_trace": self.show_trace,
            "extended_trace": self.extended_trace,
            "eta": self.eta,
        }
