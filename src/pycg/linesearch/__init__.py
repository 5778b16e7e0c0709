"""
Line search module for the conjugate gradient driver.

Provides:
- LineSearch: contract shared by all line searches
- HagerZhangLineSearch: approximate Wolfe search (default)
- BacktrackingLineSearch: Armijo backtracking
- alphainit / alphatry: initial step selection
"""

from .backtracking import BacktrackingLineSearch
from .hager_zhang import HagerZhangLineSearch, satisfies_wolfe, secant
from .initial_step import alphainit, alphatry
from .linesearch import LineSearch, linefunc
from .results import LineSearchResults

LINESEARCHES = {
    "hagerzhang": HagerZhangLineSearch,
    "hager_zhang": HagerZhangLineSearch,
    "backtracking": BacktrackingLineSearch,
}

__all__ = [
    "LineSearch",
    "LineSearchResults",
    "HagerZhangLineSearch",
    "BacktrackingLineSearch",
    "LINESEARCHES",
    "alphainit",
    "alphatry",
    "linefunc",
    "satisfies_wolfe",
    "secant",
]
