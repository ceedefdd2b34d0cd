"""
DPLL solver implementation using the unified solver interface.

Each search node evaluates the formula under the current partial assignment,
then in order of preference assigns a unit literal, a pure literal, or
branches on the first undefined variable (True first, then False). Search
nodes live on an explicit stack of frames rather than the call stack, and
every tentative assignment is undone before its frame is abandoned, so the
assignment is back to its pre-branch state whenever failure propagates.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from ..assignment import Assignment
from ..evaluator import evaluate_conjunction, evaluate_disjunction
from ..formula import MAX_VARIABLES, Conjunction, Disjunction, Literal
from ..truth import TruthValue
from ..utils.logging_utils import StructuredLogger
from .base import SolverBase, SolverResult, SolverStatus
from .config import get_config
from .registry import register_solver

# Set up logging
logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """A search node's pending assignment: the variable and the values left to try."""

    variable: int
    values: list[TruthValue]
    depth: int
    reason: str
    assigned: bool = False


class DPLLSearch:
    """
    A single DPLL search over one formula and one assignment.

    The search owns the assignment for its whole lifetime and is the only
    code mutating it. Nodes are kept on an explicit stack of frames, so the
    search depth is not limited by the interpreter's recursion limit.
    """

    def __init__(
        self,
        conjunction: Conjunction,
        assignment: Assignment,
        tracer: StructuredLogger | None = None,
    ):
        self.conjunction = conjunction
        self.assignment = assignment
        self.tracer = tracer
        self.stats = {
            "nodes": 0,
            "decisions": 0,
            "unit_propagations": 0,
            "pure_literals": 0,
            "backtracks": 0,
            "max_depth": 0,
        }
        self._steps = 0
        self._debug = logger.isEnabledFor(logging.DEBUG)

    def _open_clauses(self) -> list[Disjunction]:
        """Clauses not yet evaluating TRUE, in formula order."""
        return [
            disjunction
            for disjunction in self.conjunction
            if evaluate_disjunction(disjunction, self.assignment) is not TruthValue.TRUE
        ]

    def find_unit(self) -> Literal | None:
        """
        Find the first unit literal: the only literal with an UNDEFINED variable
        in a clause that is not yet TRUE.
        """
        for disjunction in self._open_clauses():
            match = None
            unset = 0
            for literal in disjunction:
                if self.assignment[literal.variable] is TruthValue.UNDEFINED:
                    unset += 1
                    if match is None:
                        match = literal
            if unset == 1:
                return match
        return None

    def find_pure(self) -> Literal | None:
        """
        Find the first pure literal.

        Variables are considered in canonical order. A variable is pure when it
        occurs at least once in the open clauses and always with the same
        polarity.
        """
        occurrences: dict[int, Literal | None] = {}
        for disjunction in self._open_clauses():
            for literal in disjunction:
                seen = occurrences.get(literal.variable, literal)
                if seen is not None and seen.negated != literal.negated:
                    # Both polarities occur
                    seen = None
                occurrences[literal.variable] = seen

        for variable in self.assignment.undefined_variables():
            literal = occurrences.get(variable)
            if literal is not None:
                return literal
        return None

    def _examine(self, depth: int) -> bool | _Frame:
        """
        Evaluate the node at ``depth`` and choose what to assign next.

        Returns:
            True if the formula is satisfied, False if this node fails, or the
            frame to explore (unit, then pure literal, then a True/False branch)
        """
        self.stats["nodes"] += 1
        self.stats["max_depth"] = max(self.stats["max_depth"], depth)

        result = evaluate_conjunction(self.conjunction, self.assignment)
        if result is TruthValue.TRUE:
            return True
        if result is TruthValue.FALSE:
            return False

        literal = self.find_unit()
        if literal is not None:
            self.stats["unit_propagations"] += 1
            return _Frame(literal.variable, [literal.satisfying_value], depth, "unit")

        literal = self.find_pure()
        if literal is not None:
            self.stats["pure_literals"] += 1
            return _Frame(literal.variable, [literal.satisfying_value], depth, "pure")

        variable = self.assignment.first_undefined()
        if variable is None:
            # UNDEFINED result with nothing left to assign
            return False
        return _Frame(variable, [TruthValue.TRUE, TruthValue.FALSE], depth, "branch")

    def _assign(self, frame: _Frame, value: TruthValue) -> None:
        self._steps += 1
        if frame.reason == "branch":
            self.stats["decisions"] += 1
        if self.tracer is not None:
            self.tracer.log_decision(self._steps, frame.depth, frame.variable, value, frame.reason)
        if self._debug:
            logger.debug(f"[depth {frame.depth}] {frame.reason}: variable {frame.variable} = {value}")

        self.assignment[frame.variable] = value
        frame.assigned = True

    def _undo(self, frame: _Frame) -> None:
        self.assignment.unset(frame.variable)
        frame.assigned = False
        self.stats["backtracks"] += 1
        if self.tracer is not None:
            self.tracer.log_backtrack(self._steps, frame.depth, frame.variable)

    def _run(self, stack: list[_Frame]) -> bool:
        """
        Explore frames depth-first until the formula is satisfied or every
        frame is exhausted.

        On failure, or when an exception escapes, every variable assigned by
        these frames is UNDEFINED again.
        """
        found = False
        try:
            while stack:
                frame = stack[-1]
                if frame.assigned:
                    # Everything below this value failed
                    self._undo(frame)
                if not frame.values:
                    stack.pop()
                    continue

                self._assign(frame, frame.values.pop(0))
                outcome = self._examine(frame.depth + 1)
                if outcome is True:
                    found = True
                    return True
                if outcome is not False:
                    stack.append(outcome)
            return False
        finally:
            if not found:
                for frame in reversed(stack):
                    if frame.assigned:
                        self._undo(frame)

    def try_assign(self, variable: int, value: TruthValue, depth: int, reason: str) -> bool:
        """
        Tentatively assign ``variable`` and search below it.

        Returns:
            True if a satisfying assignment was found. On False the variable
            is UNDEFINED again.
        """
        return self._run([_Frame(variable, [value], depth, reason)])

    def step(self, depth: int = 0) -> bool:
        """
        Search from the current assignment.

        Args:
            depth: Depth of this node in the search tree

        Returns:
            True if the assignment now satisfies the formula, False if this
            subtree holds no satisfying assignment
        """
        outcome = self._examine(depth)
        if isinstance(outcome, bool):
            return outcome
        return self._run([outcome])


@register_solver("dpll")
class DPLLSolver(SolverBase):
    """
    Davis-Putnam-Logemann-Loveland search with unit propagation and
    pure-literal elimination.
    """

    def __init__(self, max_variables: int | None = None, tracer: StructuredLogger | None = None):
        """
        Initialize the DPLL solver.

        Args:
            max_variables: Size of the variable table (configured default if None)
            tracer: Optional structured logger receiving every decision and backtrack
        """
        config = get_config()

        self.max_variables = max_variables or config.get("solver.max_variables", MAX_VARIABLES)
        self.tracer = tracer

        self.model = None
        self.stats: dict[str, Any] = {"solver_name": self.solver_name}

    def solve(self, conjunction: Conjunction) -> SolverResult:
        """
        Solve the formula with DPLL.

        Args:
            conjunction: The CNF formula

        Returns:
            SolverResult; on SATISFIABLE the assignment defines every variable
            of the formula
        """
        start_time = time.time()

        assignment = Assignment.for_conjunction(
            conjunction, default=TruthValue.UNDEFINED, max_variables=self.max_variables
        )
        search = DPLLSearch(conjunction, assignment, tracer=self.tracer)
        found = search.step()

        if found:
            # Variables the search never had to decide are free; fix them
            assignment.complete(TruthValue.FALSE)
            self.model = assignment
            status = SolverStatus.SATISFIABLE
        else:
            self.model = None
            status = SolverStatus.UNSATISFIABLE

        runtime = time.time() - start_time
        self.stats = dict(search.stats, solver_name=self.solver_name, runtime=runtime)
        logger.info(
            f"DPLL finished: {status.value} after {search.stats['nodes']} nodes "
            f"({runtime:.4f}s)"
        )
        if self.tracer is not None:
            self.tracer.log_result(status.value, runtime, search.stats)

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


def solve(
    conjunction: Conjunction,
    max_variables: int | None = None,
    tracer: StructuredLogger | None = None,
) -> Assignment | None:
    """
    Find a satisfying assignment with DPLL.

    Args:
        conjunction: The CNF formula
        max_variables: Size of the variable table (configured default if None)
        tracer: Optional structured logger for search events

    Returns:
        An assignment defining every variable of the formula and satisfying
        it, or None if the formula is unsatisfiable

    Raises:
        VariableOutOfRangeError: If the formula uses a variable beyond the table
    """
    return DPLLSolver(max_variables=max_variables, tracer=tracer).solve(conjunction).assignment
