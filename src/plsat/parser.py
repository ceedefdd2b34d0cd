"""
Formula parsing utilities.

This module reads CNF formulas from two textual forms:

- the propositional text syntax, e.g. ``(A v ~B) ^ (C v D)``, where ``^``
  separates clauses, ``v`` separates literals and ``~`` negates; variables
  are single ASCII letters (``v`` excluded) indexed by character code;
- DIMACS CNF, as produced by most SAT benchmarks.
"""

import logging
import os
from typing import Any, TextIO

from .exceptions import MalformedFormulaError
from .formula import Conjunction, Disjunction, Literal

# Set up logging
logger = logging.getLogger(__name__)

CLAUSE_SEPARATOR = "^"
LITERAL_SEPARATOR = "v"
NEGATION = "~"
DIMACS_EXTENSIONS = (".cnf", ".dimacs")


def _parse_literal(token: str) -> Literal:
    body = token.strip().strip("()").strip()
    negations = 0
    while body.startswith(NEGATION):
        negations += 1
        body = body[1:].lstrip()
    body = body.strip("()").strip()

    if len(body) != 1 or not (body.isascii() and body.isalpha()):
        raise MalformedFormulaError("Invalid literal", token)
    return Literal(ord(body), negations % 2 == 1)


def _parse_disjunction(text: str) -> Disjunction:
    tokens = text.split(LITERAL_SEPARATOR)
    if all(not token.strip("() \t\r\n") for token in tokens):
        raise MalformedFormulaError("Empty disjunction", text)
    return Disjunction(tuple(_parse_literal(token) for token in tokens))


def parse(text: str) -> Conjunction:
    """
    Parse a formula written in the propositional text syntax.

    Args:
        text: Formula text such as ``(A v B) ^ (~A v C)``

    Returns:
        The conjunction, clauses and literals in source order

    Raises:
        MalformedFormulaError: On empty input, an empty clause or an invalid literal
    """
    if not text.strip():
        raise MalformedFormulaError("Empty conjunction")

    clauses = tuple(_parse_disjunction(part) for part in text.split(CLAUSE_SEPARATOR))
    logger.debug(f"Parsed {len(clauses)} clauses")
    return Conjunction(clauses, symbolic=True)


def parse_dimacs(source: str | TextIO) -> Conjunction:
    """
    Parse CNF formula from DIMACS format.

    Args:
        source: DIMACS content as a string or file-like object

    Returns:
        The conjunction

    Raises:
        MalformedFormulaError: If the format is invalid
    """
    conjunction, _ = parse_dimacs_with_metadata(source)
    return conjunction


def parse_dimacs_with_metadata(
    source: str | TextIO,
) -> tuple[Conjunction, dict[str, Any]]:
    """
    Parse DIMACS and also return its header information.

    Returns:
        Tuple of (conjunction, metadata)
        - metadata: Dictionary with comments, num_variables and num_clauses
    """
    # Convert string to lines if needed
    if isinstance(source, str):
        lines = source.strip().split("\n")
    else:
        lines = source.readlines()

    clauses = []
    metadata = {"comments": [], "num_variables": 0, "num_clauses": 0}

    found_problem_line = False
    current_clause = []

    for line in lines:
        line = line.strip()

        # Skip empty lines
        if not line:
            continue

        # Handle comments
        if line.startswith("c"):
            metadata["comments"].append(line[1:].strip())
            continue

        # Handle problem line
        if line.startswith("p"):
            if found_problem_line:
                raise MalformedFormulaError("Multiple problem lines in CNF input")

            parts = line.split()
            if len(parts) < 4 or parts[1] != "cnf":
                raise MalformedFormulaError("Invalid problem line", line)

            try:
                metadata["num_variables"] = int(parts[2])
                metadata["num_clauses"] = int(parts[3])
            except ValueError:
                raise MalformedFormulaError("Invalid numbers in problem line", line)

            found_problem_line = True
            continue

        # Some generators end the file with a "%" line
        if line.startswith("%"):
            break

        try:
            values = [int(x) for x in line.split()]
        except ValueError:
            raise MalformedFormulaError("Invalid clause line", line)

        for value in values:
            if value == 0:
                if not current_clause:
                    raise MalformedFormulaError("Empty disjunction", line)
                clauses.append(current_clause)
                current_clause = []
            else:
                current_clause.append(value)

    # Add the last clause if it was not terminated
    if current_clause:
        clauses.append(current_clause)

    if not found_problem_line:
        raise MalformedFormulaError("No problem line found in CNF input")

    if len(clauses) != metadata["num_clauses"]:
        raise MalformedFormulaError(
            f"Expected {metadata['num_clauses']} clauses, but found {len(clauses)}"
        )

    return Conjunction.from_clauses(clauses), metadata


def formula_to_dimacs(
    conjunction: Conjunction,
    num_variables: int | None = None,
    comments: list[str] | None = None,
) -> str:
    """
    Convert a conjunction to DIMACS format.

    Args:
        conjunction: The formula
        num_variables: Number of variables (highest variable index if not provided)
        comments: List of comment lines to include

    Returns:
        DIMACS format string representation
    """
    if num_variables is None:
        num_variables = max(conjunction.variables, default=0)

    lines = [f"c {comment}" for comment in comments or []]
    lines.append(f"p cnf {num_variables} {len(conjunction)}")
    for clause in conjunction.to_clauses():
        lines.append(" ".join(map(str, clause)) + " 0")

    return "\n".join(lines)


def load_formula(file_path: str, format: str = "auto") -> Conjunction:
    """
    Load a formula from a file.

    Args:
        file_path: Path to the formula file
        format: "text", "dimacs", or "auto" to decide from the file extension

    Returns:
        The conjunction

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file cannot be read (e.g. it is a directory)
        MalformedFormulaError: If the content is not UTF-8 text or is invalid
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Formula file not found: {file_path}")

    if format == "auto":
        format = "dimacs" if file_path.lower().endswith(DIMACS_EXTENSIONS) else "text"

    try:
        with open(file_path, encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise MalformedFormulaError(f"Formula file is not valid UTF-8 ({e.reason})", file_path)

    logger.info(f"Loading {format} formula from {file_path}")
    if format == "dimacs":
        return parse_dimacs(content)
    if format == "text":
        return parse(content)
    raise ValueError(f"Unknown formula format: {format}")
