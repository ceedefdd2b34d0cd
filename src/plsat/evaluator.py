"""
Three-valued evaluation of literals, clauses and formulas under a partial
assignment.

All functions are pure: they read the assignment and never mutate it.

Both scans resolve fully before answering UNDEFINED. A clause is TRUE as soon
as any literal is TRUE even if an UNDEFINED literal comes first, and a formula
is FALSE as soon as any clause is FALSE even if an UNDEFINED clause comes
first. The search relies on this: a clause that is already satisfied must
never be mistaken for an open one during unit and pure-literal detection.
"""

from .assignment import Assignment
from .formula import Conjunction, Disjunction, Literal
from .truth import TruthValue


def evaluate_literal(literal: Literal, assignment: Assignment) -> TruthValue:
    value = assignment[literal.variable]
    if literal.negated:
        return value.negate()
    return value


def evaluate_disjunction(disjunction: Disjunction, assignment: Assignment) -> TruthValue:
    """
    Evaluate a clause.

    Returns:
        TRUE if any literal is TRUE, else UNDEFINED if any literal is
        UNDEFINED, else FALSE (the empty clause is FALSE)
    """
    result = TruthValue.FALSE
    for literal in disjunction:
        value = evaluate_literal(literal, assignment)
        if value is TruthValue.TRUE:
            return TruthValue.TRUE
        if value is TruthValue.UNDEFINED:
            result = TruthValue.UNDEFINED
    return result


def evaluate_conjunction(conjunction: Conjunction, assignment: Assignment) -> TruthValue:
    """
    Evaluate a formula.

    Returns:
        FALSE if any clause is FALSE, else UNDEFINED if any clause is
        UNDEFINED, else TRUE (the empty formula is TRUE)
    """
    result = TruthValue.TRUE
    for disjunction in conjunction:
        value = evaluate_disjunction(disjunction, assignment)
        if value is TruthValue.FALSE:
            return TruthValue.FALSE
        if value is TruthValue.UNDEFINED:
            result = TruthValue.UNDEFINED
    return result


def evaluate(item: Literal | Disjunction | Conjunction, assignment: Assignment) -> TruthValue:
    """Evaluate any formula node under ``assignment``."""
    if isinstance(item, Literal):
        return evaluate_literal(item, assignment)
    if isinstance(item, Disjunction):
        return evaluate_disjunction(item, assignment)
    if isinstance(item, Conjunction):
        return evaluate_conjunction(item, assignment)
    raise TypeError(f"Cannot evaluate object of type {type(item).__name__}")
