"""
Builder module for file-based optimization runs.
"""

from .config_loader import (
    build_minimizer_from_config,
    build_problem_from_config,
    build_run_from_config,
    load_and_run,
    load_yaml,
    parse_config,
)
from .models import (
    LineSearchConfig,
    OptionsConfig,
    PreconditionerConfig,
    ProblemConfig,
    RunConfig,
)

__all__ = [
    "load_yaml",
    "parse_config",
    "build_minimizer_from_config",
    "build_problem_from_config",
    "build_run_from_config",
    "load_and_run",
    "RunConfig",
    "ProblemConfig",
    "OptionsConfig",
    "LineSearchConfig",
    "PreconditionerConfig",
]
