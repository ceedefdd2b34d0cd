"""
Three-valued truth used to evaluate partial assignments.
"""

from enum import IntEnum


class TruthValue(IntEnum):
    """Truth value of a variable, literal, clause or formula.

    The integer values are what the assignment table stores.
    """

    FALSE = 0
    TRUE = 1
    UNDEFINED = 2

    @classmethod
    def from_bool(cls, value: bool) -> "TruthValue":
        return cls.TRUE if value else cls.FALSE

    def negate(self) -> "TruthValue":
        """Logical NOT; UNDEFINED stays UNDEFINED."""
        if self is TruthValue.TRUE:
            return TruthValue.FALSE
        if self is TruthValue.FALSE:
            return TruthValue.TRUE
        return self

    @property
    def is_defined(self) -> bool:
        return self is not TruthValue.UNDEFINED

    def __str__(self) -> str:
        return self.name.capitalize()

    def __format__(self, format_spec: str) -> str:
        # IntEnum would otherwise format as the bare integer
        return format(str(self), format_spec)
