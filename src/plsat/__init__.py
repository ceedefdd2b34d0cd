"""
plsat: satisfiability of propositional formulas in conjunctive normal form.
"""

from plsat.assignment import Assignment
from plsat.evaluator import (
    evaluate,
    evaluate_conjunction,
    evaluate_disjunction,
    evaluate_literal,
)
from plsat.exceptions import (
    ConfigurationError,
    InconsistentAssignmentError,
    MalformedFormulaError,
    PLSatError,
    VariableOutOfRangeError,
)
from plsat.formula import MAX_VARIABLES, Conjunction, Disjunction, Literal
from plsat.parser import load_formula, parse, parse_dimacs
from plsat.solvers import brute_force, solve
from plsat.truth import TruthValue

__version__ = "0.1.0"

__all__ = [
    "Assignment",
    "Conjunction",
    "Disjunction",
    "Literal",
    "MAX_VARIABLES",
    "TruthValue",
    "evaluate",
    "evaluate_conjunction",
    "evaluate_disjunction",
    "evaluate_literal",
    "parse",
    "parse_dimacs",
    "load_formula",
    "solve",
    "brute_force",
    "PLSatError",
    "VariableOutOfRangeError",
    "MalformedFormulaError",
    "InconsistentAssignmentError",
    "ConfigurationError",
]
