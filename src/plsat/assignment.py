"""
Assignment store: the partial interpretation a solver builds.

The store is a fixed-size numpy table indexed by variable, holding one
TruthValue per slot. Only variables in the universe (the variables of the
formula being solved) may be written; every other slot stays UNDEFINED for
the lifetime of the assignment.
"""

from collections.abc import Iterable, Iterator

import numpy as np

from .exceptions import InconsistentAssignmentError, VariableOutOfRangeError
from .formula import MAX_VARIABLES, Conjunction, variable_name
from .truth import TruthValue


class Assignment:
    """
    Mutable mapping from variable to TruthValue over a bounded universe.

    A variable holds exactly one value at a time. The owning solver is the only
    writer; there is no internal locking.
    """

    def __init__(
        self,
        universe: Iterable[int] = (),
        max_variables: int = MAX_VARIABLES,
        default: TruthValue = TruthValue.UNDEFINED,
        symbolic: bool = False,
    ):
        """
        Initialize the assignment.

        Args:
            universe: Variables that may be assigned
            max_variables: Size of the variable table
            default: Initial value of every variable in the universe
            symbolic: Render variables as letters when printing

        Raises:
            VariableOutOfRangeError: If a universe variable does not fit the table
        """
        if max_variables <= 0:
            raise ValueError(f"max_variables must be positive, got {max_variables}")

        self.max_variables = max_variables
        self.symbolic = symbolic
        self._universe = tuple(sorted(set(universe)))
        for variable in self._universe:
            if not 0 <= variable < max_variables:
                raise VariableOutOfRangeError(variable, max_variables)
        self._members = frozenset(self._universe)

        self._table = np.full(max_variables, int(TruthValue.UNDEFINED), dtype=np.int8)
        self.reset(default)

    @classmethod
    def for_conjunction(
        cls,
        conjunction: Conjunction,
        default: TruthValue = TruthValue.FALSE,
        max_variables: int | None = None,
    ) -> "Assignment":
        """
        Create the initial assignment for a formula.

        Variables used by the formula start at ``default``; all others are
        UNDEFINED and stay that way.
        """
        return cls(
            conjunction.variables,
            max_variables=max_variables or MAX_VARIABLES,
            default=default,
            symbolic=conjunction.symbolic,
        )

    @property
    def universe(self) -> tuple[int, ...]:
        """Variables this assignment may hold, in canonical order."""
        return self._universe

    def _check_range(self, variable: int) -> None:
        if not 0 <= variable < self.max_variables:
            raise VariableOutOfRangeError(variable, self.max_variables)

    def __getitem__(self, variable: int) -> TruthValue:
        self._check_range(variable)
        return TruthValue(int(self._table[variable]))

    def __setitem__(self, variable: int, value: TruthValue | bool) -> None:
        self._check_range(variable)
        if variable not in self._members:
            raise InconsistentAssignmentError(
                "Cannot assign a variable outside the formula", variable=variable
            )
        if isinstance(value, bool):
            value = TruthValue.from_bool(value)
        elif not isinstance(value, TruthValue):
            raise InconsistentAssignmentError(
                f"Not a truth value: {value!r}", variable=variable
            )
        self._table[variable] = int(value)

    def unset(self, variable: int) -> None:
        """Return a variable to UNDEFINED."""
        self[variable] = TruthValue.UNDEFINED

    def reset(self, default: TruthValue = TruthValue.UNDEFINED) -> None:
        """Set every universe variable to ``default``."""
        if self._universe:
            self._table[list(self._universe)] = int(default)

    def __contains__(self, variable: int) -> bool:
        return variable in self._members

    def __len__(self) -> int:
        return len(self._universe)

    def __iter__(self) -> Iterator[int]:
        return iter(self._universe)

    def items(self) -> Iterator[tuple[int, TruthValue]]:
        for variable in self._universe:
            yield variable, TruthValue(int(self._table[variable]))

    def undefined_variables(self) -> Iterator[int]:
        """Universe variables still UNDEFINED, in canonical order."""
        for variable in self._universe:
            if self._table[variable] == TruthValue.UNDEFINED:
                yield variable

    def first_undefined(self) -> int | None:
        return next(self.undefined_variables(), None)

    @property
    def is_complete(self) -> bool:
        return self.first_undefined() is None

    def complete(self, value: TruthValue = TruthValue.FALSE) -> None:
        """Give every still-UNDEFINED universe variable ``value``."""
        for variable in list(self.undefined_variables()):
            self._table[variable] = int(value)

    def copy(self) -> "Assignment":
        clone = Assignment(
            self._universe, max_variables=self.max_variables, symbolic=self.symbolic
        )
        clone._table = self._table.copy()
        return clone

    def as_array(self) -> np.ndarray:
        """A copy of the raw table (one int8 TruthValue per variable slot)."""
        return self._table.copy()

    def to_dict(self) -> dict[int, bool | None]:
        """Universe variables mapped to True/False, or None when UNDEFINED."""
        result = {}
        for variable, value in self.items():
            result[variable] = None if value is TruthValue.UNDEFINED else value is TruthValue.TRUE
        return result

    def to_dimacs(self) -> list[int]:
        """Defined variables as signed DIMACS literals."""
        return [
            variable if value is TruthValue.TRUE else -variable
            for variable, value in self.items()
            if value.is_defined
        ]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented
        return (
            self._universe == other._universe
            and self.max_variables == other.max_variables
            and np.array_equal(self._table, other._table)
        )

    def __repr__(self) -> str:
        values = ", ".join(
            f"{variable_name(variable, self.symbolic)}={value}"
            for variable, value in self.items()
        )
        return f"Assignment({values})"
