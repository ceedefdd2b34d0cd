"""
Unit tests for three-valued evaluation.

Clauses and formulas are resolved fully: a TRUE literal anywhere in a clause
makes it TRUE and a FALSE clause anywhere in a formula makes it FALSE,
regardless of UNDEFINED elements scanned before them.
"""

import unittest

from plsat.assignment import Assignment
from plsat.evaluator import (
    evaluate,
    evaluate_conjunction,
    evaluate_disjunction,
    evaluate_literal,
)
from plsat.formula import Conjunction, Disjunction, Literal
from plsat.parser import parse
from plsat.truth import TruthValue

A, B, C = ord("A"), ord("B"), ord("C")


def make_assignment(conjunction, **values):
    """Undefined assignment for ``conjunction`` with some letters set."""
    assignment = Assignment.for_conjunction(conjunction, default=TruthValue.UNDEFINED)
    for name, value in values.items():
        assignment[ord(name)] = TruthValue.from_bool(value)
    return assignment


class TestTruthValue(unittest.TestCase):
    """Test cases for TruthValue helpers."""

    def test_negate(self):
        self.assertEqual(TruthValue.TRUE.negate(), TruthValue.FALSE)
        self.assertEqual(TruthValue.FALSE.negate(), TruthValue.TRUE)
        self.assertEqual(TruthValue.UNDEFINED.negate(), TruthValue.UNDEFINED)

    def test_rendering(self):
        self.assertEqual(str(TruthValue.TRUE), "True")
        self.assertEqual(f"{TruthValue.UNDEFINED}", "Undefined")
        self.assertFalse(TruthValue.UNDEFINED.is_defined)


class TestEvaluateLiteral(unittest.TestCase):
    """Test cases for literal evaluation."""

    def setUp(self):
        self.formula = parse("(A v B)")

    def test_undefined_variable(self):
        assignment = make_assignment(self.formula)
        self.assertEqual(evaluate_literal(Literal(A), assignment), TruthValue.UNDEFINED)
        self.assertEqual(evaluate_literal(Literal(A, True), assignment), TruthValue.UNDEFINED)

    def test_defined_variable(self):
        assignment = make_assignment(self.formula, A=True)
        self.assertEqual(evaluate_literal(Literal(A), assignment), TruthValue.TRUE)
        self.assertEqual(evaluate_literal(Literal(A, True), assignment), TruthValue.FALSE)


class TestEvaluateDisjunction(unittest.TestCase):
    """Test cases for clause evaluation."""

    def setUp(self):
        self.formula = parse("(A v B v C)")
        self.clause = self.formula[0]

    def test_all_false(self):
        assignment = make_assignment(self.formula, A=False, B=False, C=False)
        self.assertEqual(evaluate_disjunction(self.clause, assignment), TruthValue.FALSE)

    def test_any_true(self):
        assignment = make_assignment(self.formula, A=False, B=True, C=False)
        self.assertEqual(evaluate_disjunction(self.clause, assignment), TruthValue.TRUE)

    def test_undefined_before_true_is_still_true(self):
        """An UNDEFINED literal ahead of a TRUE one does not hide the TRUE one."""
        assignment = make_assignment(self.formula, C=True)
        self.assertEqual(evaluate_disjunction(self.clause, assignment), TruthValue.TRUE)

    def test_undefined_without_true(self):
        assignment = make_assignment(self.formula, A=False, C=False)
        self.assertEqual(evaluate_disjunction(self.clause, assignment), TruthValue.UNDEFINED)

    def test_empty_clause_is_false(self):
        assignment = Assignment()
        self.assertEqual(evaluate_disjunction(Disjunction(), assignment), TruthValue.FALSE)


class TestEvaluateConjunction(unittest.TestCase):
    """Test cases for formula evaluation."""

    def setUp(self):
        self.formula = parse("(A v B) ^ (C)")

    def test_all_clauses_true(self):
        assignment = make_assignment(self.formula, A=True, B=False, C=True)
        self.assertEqual(evaluate_conjunction(self.formula, assignment), TruthValue.TRUE)

    def test_undefined_clause_before_false_clause_is_false(self):
        """A FALSE clause is reported even when an UNDEFINED clause comes first."""
        assignment = make_assignment(self.formula, C=False)
        self.assertEqual(evaluate_conjunction(self.formula, assignment), TruthValue.FALSE)

    def test_undefined(self):
        assignment = make_assignment(self.formula, C=True)
        self.assertEqual(evaluate_conjunction(self.formula, assignment), TruthValue.UNDEFINED)

    def test_empty_conjunction_is_true(self):
        self.assertEqual(evaluate_conjunction(Conjunction(), Assignment()), TruthValue.TRUE)

    def test_conjunction_with_empty_clause_is_false(self):
        formula = Conjunction((Disjunction(),))
        self.assertEqual(evaluate_conjunction(formula, Assignment()), TruthValue.FALSE)

    def test_evaluation_is_pure(self):
        """Repeated evaluation gives the same answer and never mutates anything."""
        assignment = make_assignment(self.formula, A=False)
        before = assignment.as_array()

        results = {evaluate_conjunction(self.formula, assignment) for _ in range(3)}

        self.assertEqual(results, {TruthValue.UNDEFINED})
        self.assertTrue((assignment.as_array() == before).all())
        self.assertEqual(self.formula, parse("(A v B) ^ (C)"))


class TestEvaluateDispatch(unittest.TestCase):
    """Test cases for the generic evaluate()."""

    def test_dispatch(self):
        formula = parse("(A v ~B)")
        assignment = make_assignment(formula, A=False, B=False)
        self.assertEqual(evaluate(Literal(B, True), assignment), TruthValue.TRUE)
        self.assertEqual(evaluate(formula[0], assignment), TruthValue.TRUE)
        self.assertEqual(evaluate(formula, assignment), TruthValue.TRUE)

    def test_rejects_other_types(self):
        with self.assertRaises(TypeError):
            evaluate([1, 2], Assignment())


if __name__ == "__main__":
    unittest.main()
