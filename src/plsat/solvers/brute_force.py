"""
Brute-force enumeration solver.

Baseline for comparison with DPLL: the formula's variables are treated as the
bits of a binary counter (lowest variable index is the least significant bit)
and every assignment is tried in counting order until one satisfies the
formula or the counter overflows.
"""

import logging
import time
from typing import Any

from ..assignment import Assignment
from ..evaluator import evaluate_conjunction
from ..formula import MAX_VARIABLES, Conjunction
from ..truth import TruthValue
from .base import SolverBase, SolverResult, SolverStatus
from .config import get_config
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)


def _increment(assignment: Assignment) -> bool:
    """
    Advance the assignment to the next one in counting order.

    Returns:
        True if the counter overflowed (every assignment has been tried)
    """
    for variable in assignment.universe:
        if assignment[variable] is TruthValue.TRUE:
            assignment[variable] = TruthValue.FALSE
        else:
            assignment[variable] = TruthValue.TRUE
            return False
    return True


@register_solver("brute-force")
class BruteForceSolver(SolverBase):
    """
    Exhaustive enumeration over the formula's variables, no pruning.
    """

    def __init__(self, max_variables: int | None = None):
        config = get_config()
        self.max_variables = max_variables or config.get("solver.max_variables", MAX_VARIABLES)

        self.model = None
        self.stats: dict[str, Any] = {"solver_name": self.solver_name}

    def solve(self, conjunction: Conjunction) -> SolverResult:
        start_time = time.time()

        assignment = Assignment.for_conjunction(
            conjunction, default=TruthValue.FALSE, max_variables=self.max_variables
        )
        tried = 1
        exhausted = False
        while evaluate_conjunction(conjunction, assignment) is not TruthValue.TRUE:
            if _increment(assignment):
                exhausted = True
                break
            tried += 1

        runtime = time.time() - start_time
        if exhausted:
            self.model = None
            status = SolverStatus.UNSATISFIABLE
        else:
            self.model = assignment
            status = SolverStatus.SATISFIABLE

        self.stats = {
            "solver_name": self.solver_name,
            "assignments_tried": tried,
            "runtime": runtime,
        }
        logger.info(f"Brute force finished: {status.value} after {tried} assignments")

        return SolverResult(
            status=status,
            assignment=self.model,
            runtime=runtime,
            total_clauses=len(conjunction),
            statistics=self.stats,
        )

    def get_model(self) -> Assignment | None:
        return self.model

    def get_statistics(self) -> dict[str, Any]:
        return self.stats


def brute_force(conjunction: Conjunction, max_variables: int | None = None) -> Assignment | None:
    """Find the first satisfying assignment in counting order, or None."""
    return BruteForceSolver(max_variables=max_variables).solve(conjunction).assignment
