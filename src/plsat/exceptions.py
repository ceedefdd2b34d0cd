"""
Custom exception classes for propositional satisfiability checking.

This module defines the exceptions raised at the boundaries of the solver:
malformed input, variables outside the supported universe, illegal writes
to an assignment and bad configuration. An unsatisfiable formula is a
regular outcome and never raises.
"""


class PLSatError(Exception):
    """Base exception class for all plsat errors."""
    pass


class VariableOutOfRangeError(PLSatError):
    """
    Raised when a literal names a variable outside the bounded universe.

    Attributes:
        variable: The offending variable index
        max_variables: Size of the universe the formula was checked against
    """
    def __init__(self, variable, max_variables, message="Variable out of range"):
        self.variable = variable
        self.max_variables = max_variables
        self.message = f"{message}: {variable} (supported range is 0..{max_variables - 1})"
        super().__init__(self.message)


class MalformedFormulaError(PLSatError):
    """
    Raised by the parsers when the input text is not a well-formed CNF formula
    (empty conjunction, empty disjunction or an invalid literal).
    """
    def __init__(self, message="Malformed formula", text=None):
        self.text = text
        self.message = message
        if text is not None:
            self.message = f"{message}: {text!r}"
        super().__init__(self.message)


class InconsistentAssignmentError(PLSatError):
    """
    Raised when an assignment is asked to hold something it cannot
    (a variable outside its universe, or a value that is not a truth value).
    """
    def __init__(self, message="Inconsistent variable assignment", variable=None):
        self.variable = variable
        self.message = message
        if variable is not None:
            self.message = f"{message} for variable {variable}"
        super().__init__(self.message)


class ConfigurationError(PLSatError):
    """
    Raised when there's a problem with solver configuration.
    """
    pass
