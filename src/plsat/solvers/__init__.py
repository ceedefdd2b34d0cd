"""
Solver package with unified interface.
"""

from .base import SolverBase, SolverResult, SolverStatus
from .config import SolverConfig, get_config, load_config
from .registry import SolverRegistry, register_solver

# Importing the built-in solver modules registers them
from .dpll import DPLLSearch, DPLLSolver, solve
from .brute_force import BruteForceSolver, brute_force

__all__ = [
    "SolverBase",
    "SolverResult",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "get_config",
    "load_config",
    "SolverConfig",
    "DPLLSearch",
    "DPLLSolver",
    "BruteForceSolver",
    "solve",
    "brute_force",
]
