"""
Immutable CNF formula model.

A formula is a Conjunction (logical AND) of Disjunctions (logical OR) of
Literals. Variables are non-negative integer indices into the bounded table
kept by an Assignment. The text parser uses character codes as indices
('A' -> 65); DIMACS input uses the variable numbers as they appear.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .truth import TruthValue

MAX_VARIABLES = 128


def variable_name(variable: int, symbolic: bool = False) -> str:
    """Render a variable as a letter (symbolic formulas) or as its index."""
    if symbolic:
        return chr(variable)
    return str(variable)


@dataclass(frozen=True)
class Literal:
    """A variable or its negation."""

    variable: int
    negated: bool = False

    def __post_init__(self):
        if isinstance(self.variable, bool) or not isinstance(self.variable, int):
            raise TypeError(f"Literal variable must be an int, got {self.variable!r}")
        if self.variable < 0:
            raise ValueError(f"Literal variable must be non-negative, got {self.variable}")

    @classmethod
    def from_dimacs(cls, value: int) -> "Literal":
        """Build a literal from a signed DIMACS integer (0 is not a literal)."""
        if value == 0:
            raise ValueError("0 terminates a DIMACS clause and is not a literal")
        return cls(abs(value), value < 0)

    def to_dimacs(self) -> int:
        return -self.variable if self.negated else self.variable

    @property
    def satisfying_value(self) -> TruthValue:
        """The value its variable must take for this literal to be True."""
        return TruthValue.FALSE if self.negated else TruthValue.TRUE

    def __invert__(self) -> "Literal":
        return Literal(self.variable, not self.negated)

    def to_text(self, symbolic: bool = False) -> str:
        return ("~" if self.negated else "") + variable_name(self.variable, symbolic)


@dataclass(frozen=True)
class Disjunction:
    """An ordered clause of literals. The empty clause is vacuously False."""

    literals: tuple[Literal, ...] = ()

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        object.__setattr__(self, "literals", tuple(self.literals))

    def __iter__(self) -> Iterator[Literal]:
        return iter(self.literals)

    def __len__(self) -> int:
        return len(self.literals)

    def __getitem__(self, index: int) -> Literal:
        return self.literals[index]

    @property
    def variables(self) -> frozenset[int]:
        return frozenset(literal.variable for literal in self.literals)

    def to_text(self, symbolic: bool = False) -> str:
        return "(" + " v ".join(lit.to_text(symbolic) for lit in self.literals) + ")"


@dataclass(frozen=True)
class Conjunction:
    """
    An ordered sequence of clauses. The empty conjunction is vacuously True.

    Attributes:
        disjunctions: The clauses, in source order
        symbolic: Whether variables were written as letters (affects rendering only)
    """

    disjunctions: tuple[Disjunction, ...] = ()
    symbolic: bool = field(default=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "disjunctions", tuple(self.disjunctions))

    @classmethod
    def from_clauses(
        cls, clauses: Iterable[Iterable[int]], symbolic: bool = False
    ) -> "Conjunction":
        """
        Build a conjunction from DIMACS-style integer clauses.

        Args:
            clauses: Iterable of clauses, each an iterable of non-zero signed ints
            symbolic: Whether the variable numbers are character codes

        Returns:
            The conjunction
        """
        return cls(
            tuple(
                Disjunction(tuple(Literal.from_dimacs(value) for value in clause))
                for clause in clauses
            ),
            symbolic=symbolic,
        )

    def __iter__(self) -> Iterator[Disjunction]:
        return iter(self.disjunctions)

    def __len__(self) -> int:
        return len(self.disjunctions)

    def __getitem__(self, index: int) -> Disjunction:
        return self.disjunctions[index]

    @property
    def variables(self) -> tuple[int, ...]:
        """The formula's universe, in ascending (canonical) order."""
        used = set()
        for disjunction in self.disjunctions:
            used.update(disjunction.variables)
        return tuple(sorted(used))

    def to_clauses(self) -> list[list[int]]:
        return [[lit.to_dimacs() for lit in clause] for clause in self.disjunctions]

    def to_text(self) -> str:
        return " ^ ".join(clause.to_text(self.symbolic) for clause in self.disjunctions)

    def __str__(self) -> str:
        return self.to_text()
