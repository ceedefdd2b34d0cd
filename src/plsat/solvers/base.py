"""
Base interface for all satisfiability solvers in the package.
Defines the standardized solver interface that all solver implementations must follow.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from ..assignment import Assignment
from ..exceptions import ConfigurationError
from ..formula import Conjunction


class SolverStatus(Enum):
    """Enum representing the status of a solver run."""

    UNKNOWN = "unknown"
    SATISFIABLE = "satisfiable"
    UNSATISFIABLE = "unsatisfiable"


class SolverResult:
    """
    Standardized result object returned by all solvers.
    """

    def __init__(
        self,
        status: SolverStatus = SolverStatus.UNKNOWN,
        assignment: Assignment | None = None,
        runtime: float = 0.0,
        total_clauses: int = 0,
        statistics: dict[str, Any] | None = None,
    ):
        self.status = status
        self.assignment = assignment
        self.runtime = runtime
        self.total_clauses = total_clauses
        self.statistics = statistics or {}

    @property
    def is_sat(self) -> bool:
        """Returns True if the problem is satisfiable."""
        return self.status == SolverStatus.SATISFIABLE

    @property
    def is_unsat(self) -> bool:
        """Returns True if the problem is unsatisfiable."""
        return self.status == SolverStatus.UNSATISFIABLE

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the result to plain Python types.

        Returns:
            Dictionary with status, runtime, clause count, statistics and the
            assignment as signed DIMACS literals (None when unsatisfiable)
        """
        return {
            "status": self.status.value,
            "runtime": self.runtime,
            "total_clauses": self.total_clauses,
            "statistics": dict(self.statistics),
            "model": self.assignment.to_dimacs() if self.assignment is not None else None,
        }

    def __str__(self) -> str:
        """String representation of the result."""
        status_str = str(self.status.value).upper()
        if self.status == SolverStatus.SATISFIABLE:
            return f"SAT Result: {status_str} ({self.total_clauses} clauses, {self.runtime:.4f}s)"
        elif self.status == SolverStatus.UNSATISFIABLE:
            return f"SAT Result: {status_str} (proved in {self.runtime:.4f}s)"
        else:
            return "SAT Result: UNKNOWN"


class SolverBase(ABC):
    """
    Abstract base class for solver implementations.
    All solver implementations must inherit from this class.

    A solver takes a complete formula per call; clauses cannot be added to a
    search that has already started.
    """

    solver_name = "base"

    @abstractmethod
    def solve(self, conjunction: Conjunction) -> SolverResult:
        """
        Decide the satisfiability of a formula.

        Args:
            conjunction: The CNF formula

        Returns:
            SolverResult containing the verdict and, when satisfiable, the assignment

        Raises:
            VariableOutOfRangeError: If the formula uses a variable the solver cannot index
        """

    @abstractmethod
    def get_model(self) -> Assignment | None:
        """
        Get the satisfying assignment found by the last solve, if any.
        """

    @abstractmethod
    def get_statistics(self) -> dict[str, Any]:
        """
        Get statistics of the last solve.
        """

    def configure(self, config: dict[str, Any]) -> None:
        """
        Configure the solver with the given parameters.

        Args:
            config: Dictionary of configuration parameters

        Raises:
            ConfigurationError: If a parameter is unknown
        """
        for key, value in config.items():
            if key.startswith("_") or not hasattr(self, key):
                raise ConfigurationError(
                    f"Unknown configuration parameter for {self.solver_name}: {key}"
                )
            setattr(self, key, value)
