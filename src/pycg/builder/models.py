"""
Pydantic models for YAML run files.

All validation and field constraints for file-based configuration live
here. The loader builds minimizers and problems from these models only.
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


# ------------------------------------------------------------------ #
#  Sections
# ------------------------------------------------------------------ #


class ProblemConfig(BaseModel):
    """``problem:`` section."""

    name: str = Field("rosenbrock", description="Test problem (quadratic, rosenbrock, himmelblau, powell)")
    dimension: Optional[int] = Field(None, gt=0, description="Number of variables")
    initial_x: Optional[List[float]] = Field(None, description="Starting point override")

    @field_validator("name")
    @classmethod
    def name_must_be_known(cls, v: str) -> str:
        from pycg.problems import PROBLEMS

        v_lower = v.lower()
        if v_lower not in PROBLEMS:
            raise ValueError(
                f"Unknown problem '{v}'. Choose from: {', '.join(sorted(PROBLEMS))}"
            )
        return v_lower


class OptionsConfig(BaseModel):
    """``options:`` section (driver options)."""

    xtol: float = Field(1e-32, ge=0, description="Position convergence tolerance")
    ftol: float = Field(1e-8, ge=0, description="Relative function convergence tolerance")
    grtol: float = Field(1e-8, ge=0, description="Gradient convergence tolerance")
    iterations: int = Field(1000, gt=0, description="Maximum number of iterations")
    store_trace: bool = False
    show_trace: bool = False
    extended_trace: bool = False
    eta: float = Field(0.4, gt=0, description="Lower-bound parameter of beta")


class LineSearchConfig(BaseModel):
    """``linesearch:`` section."""

    type: str = Field("hagerzhang", description="Line search (hagerzhang, backtracking)")

    # Hager-Zhang
    delta: float = Field(0.1, gt=0, lt=1)
    sigma: float = Field(0.9, gt=0, lt=1)
    rho: float = Field(5.0, gt=1)
    epsilon: float = Field(1e-6, ge=0)
    gamma: float = Field(0.66, gt=0, lt=1)
    linesearchmax: int = Field(50, gt=0)

    # Backtracking
    c1: float = Field(1e-4, gt=0, lt=1)
    rhohi: float = Field(0.5, gt=0, lt=1)
    rholo: float = Field(0.1, gt=0, lt=1)
    max_iterations: int = Field(1000, gt=0)

    @field_validator("type")
    @classmethod
    def type_must_be_known(cls, v: str) -> str:
        from pycg.linesearch import LINESEARCHES

        v_lower = v.lower()
        if v_lower not in LINESEARCHES:
            raise ValueError(
                f"Unknown line search '{v}'. Choose from: {', '.join(sorted(LINESEARCHES))}"
            )
        return v_lower

    @field_validator("sigma")
    @classmethod
    def sigma_ge_delta(cls, v: float, info) -> float:
        delta = info.data.get("delta")
        if delta is not None and v < delta:
            raise ValueError("sigma must be >= delta")
        return v


class PreconditionerConfig(BaseModel):
    """``preconditioner:`` section."""

    type: str = Field("identity", description="Preconditioner (identity, diagonal)")
    weights: Optional[Union[float, List[float]]] = Field(
        None, description="Diagonal weights (scalar broadcasts)"
    )

    @field_validator("type")
    @classmethod
    def type_must_be_known(cls, v: str) -> str:
        allowed = {"identity", "none", "diagonal"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(
                f"Unknown preconditioner '{v}'. Choose from: {', '.join(sorted(allowed))}"
            )
        return v_lower


# ------------------------------------------------------------------ #
#  Run file
# ------------------------------------------------------------------ #


class RunConfig(BaseModel):
    """A complete run file."""

    problem: ProblemConfig = Field(default_factory=ProblemConfig)
    options: OptionsConfig = Field(default_factory=OptionsConfig)
    linesearch: LineSearchConfig = Field(default_factory=LineSearchConfig)
    preconditioner: PreconditionerConfig = Field(default_factory=PreconditionerConfig)
