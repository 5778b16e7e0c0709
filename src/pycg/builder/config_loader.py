"""
Configuration loader for YAML-based optimization runs.

Provides functions to load a run file, validate it and build the
minimizer and test problem it describes.
"""
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import numpy as np
from pydantic import ValidationError

from pycg.core.schemas import CGOptions
from pycg.linesearch import BacktrackingLineSearch, HagerZhangLineSearch
from pycg.minimizer import ConjugateGradient, OptimizationResults
from pycg.preconditioner import DiagonalPreconditioner, IdentityPreconditioner, Preconditioner
from pycg.problems import PROBLEMS, Problem

from .models import LineSearchConfig, PreconditionerConfig, RunConfig


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration (empty for an empty file).
    """
    try:
        import yaml
    except ImportError:
        raise ImportError("PyYAML is required: pip install pyyaml")

    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_config(config: Dict[str, Any]) -> RunConfig:
    """
    Validate a configuration dictionary.

    Raises:
        ValueError: If the configuration is invalid.
    """
    try:
        return RunConfig.model_validate(config)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration:\n{exc}") from exc


def _parse_linesearch(ls_config: LineSearchConfig):
    """Parse line search from config."""
    if ls_config.type in ("hagerzhang", "hager_zhang"):
        return HagerZhangLineSearch(
            delta=ls_config.delta,
            sigma=ls_config.sigma,
            rho=ls_config.rho,
            epsilon=ls_config.epsilon,
            gamma=ls_config.gamma,
            linesearchmax=ls_config.linesearchmax,
        )
    elif ls_config.type == "backtracking":
        return BacktrackingLineSearch(
            c1=ls_config.c1,
            rhohi=ls_config.rhohi,
            rholo=ls_config.rholo,
            iterations=ls_config.max_iterations,
        )
    else:
        raise ValueError(f"Unknown line search type: {ls_config.type}")


def _parse_preconditioner(pc_config: PreconditionerConfig, dimension: int) -> Preconditioner:
    """Parse preconditioner from config."""
    if pc_config.type in ("identity", "none"):
        return IdentityPreconditioner()
    elif pc_config.type == "diagonal":
        weights = 1.0 if pc_config.weights is None else pc_config.weights
        p = np.broadcast_to(np.asarray(weights, dtype=float), (dimension,))
        return DiagonalPreconditioner(p.copy())
    else:
        raise ValueError(f"Unknown preconditioner type: {pc_config.type}")


def build_problem_from_config(config: Dict[str, Any]) -> Tuple[Problem, np.ndarray]:
    """
    Build the test problem and starting point from configuration.

    Returns:
        (problem, initial_x)
    """
    run = parse_config(config)
    return _build_problem(run)


def _build_problem(run: RunConfig) -> Tuple[Problem, np.ndarray]:
    pb = run.problem
    cls = PROBLEMS[pb.name]
    problem = cls() if pb.dimension is None else cls(dimension=pb.dimension)

    if pb.initial_x is not None:
        initial_x = np.array(pb.initial_x, dtype=float)
        if initial_x.shape != (problem.dimension,):
            raise ValueError(
                f"initial_x has {initial_x.size} entries, "
                f"problem {problem.get_name()} needs {problem.dimension}"
            )
    else:
        initial_x = problem.initial_x
    return problem, initial_x


def build_minimizer_from_config(
    config: Dict[str, Any],
    dimension: int,
) -> ConjugateGradient:
    """
    Build a ConjugateGradient minimizer from configuration dictionary.

    Args:
        config: Configuration dictionary (typically from YAML).
        dimension: Number of variables (sizes a diagonal preconditioner).

    Returns:
        Configured ConjugateGradient.

    Example config:
        problem:
          name: rosenbrock
          dimension: 4
        options:
          grtol: 1.0e-10
          iterations: 500
          show_trace: false
        linesearch:
          type: hagerzhang
          sigma: 0.9
        preconditioner:
          type: diagonal
          weights: 0.5
    """
    run = parse_config(config)
    return _build_minimizer(run, dimension)


def _build_minimizer(run: RunConfig, dimension: int) -> ConjugateGradient:
    options = CGOptions.from_dict(run.options.model_dump())
    return ConjugateGradient(
        linesearch=_parse_linesearch(run.linesearch),
        P=_parse_preconditioner(run.preconditioner, dimension),
        **options.to_dict(),
    )


def build_run_from_config(
    config: Dict[str, Any],
) -> Tuple[ConjugateGradient, Problem, np.ndarray]:
    """
    Build minimizer, problem and starting point in one pass.

    Returns:
        (minimizer, problem, initial_x)
    """
    run = parse_config(config)
    problem, initial_x = _build_problem(run)
    return _build_minimizer(run, problem.dimension), problem, initial_x


def load_and_run(
    path: Union[str, Path],
    **overrides: Any,
) -> OptimizationResults:
    """
    Load a run file, build everything and minimize.

    Args:
        path: Path to YAML run file.
        **overrides: Values merged into the ``options`` section.

    Returns:
        OptimizationResults of the run.
    """
    config = load_yaml(path)
    if overrides:
        config = dict(config)
        config["options"] = {**(config.get("options") or {}), **overrides}

    minimizer, problem, initial_x = build_run_from_config(config)
    return minimizer.minimize(problem.as_function(), initial_x)
