"""
plsat command line driver: read a formula file, solve it, report the
assignment and the time taken.
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

import yaml

from .assignment import Assignment
from .exceptions import ConfigurationError, MalformedFormulaError, VariableOutOfRangeError
from .formula import variable_name
from .parser import load_formula
from .solvers import SolverRegistry, SolverResult, load_config
from .utils.logging_utils import configure_logging, create_logger

logger = logging.getLogger(__name__)


def format_assignment(assignment: Assignment | None) -> str:
    """Render an assignment as ``X = True`` lines, or "No solution"."""
    if assignment is None:
        return "No solution"
    return "\n".join(
        f"{variable_name(variable, assignment.symbolic)} = {value}"
        for variable, value in assignment.items()
    )


def result_document(result: SolverResult, duration_ms: int) -> dict:
    """Machine-readable form of a result for the json and yaml outputs."""
    document = result.to_dict()
    document["duration_ms"] = duration_ms
    if result.assignment is not None:
        document["assignment"] = {
            variable_name(variable, result.assignment.symbolic): value
            for variable, value in result.assignment.to_dict().items()
        }
    else:
        document["assignment"] = None
    return document


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plsat", description="Decide satisfiability of a CNF formula"
    )
    parser.add_argument("file", nargs="?", help="formula file (text syntax or DIMACS)")
    parser.add_argument(
        "-a", "--algorithm", default=None,
        help="solver to use (default: solver.name from the configuration)",
    )
    parser.add_argument(
        "--format", choices=["auto", "text", "dimacs"], default="auto",
        help="input format; auto picks DIMACS for .cnf/.dimacs files",
    )
    parser.add_argument(
        "--output", choices=["text", "json", "yaml"], default="text",
        help="result format",
    )
    parser.add_argument("--config", type=str, default=None, help="YAML configuration file")
    parser.add_argument("--log-level", type=str, default=None, help="logging level")
    parser.add_argument(
        "--trace-dir", type=str, default=None,
        help="write a structured search trace to this directory",
    )
    parser.add_argument("--quiet", action="store_true", help="do not echo the formula")
    parser.add_argument(
        "--list-solvers", action="store_true", help="list available solvers and exit"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        configure_logging(
            level=args.log_level or config.get("logging.level", "INFO"),
            fmt=config.get("logging.format"),
            file=config.get("logging.file"),
        )
    except ValueError as e:
        print(f"Error: invalid logging configuration: {e}", file=sys.stderr)
        return 1

    if args.list_solvers:
        for name in SolverRegistry.list_solvers():
            print(name)
        return 0

    if not args.file:
        parser.print_usage(sys.stderr)
        return 1

    try:
        conjunction = load_formula(args.file, format=args.format)
    except FileNotFoundError:
        print("Error: file not found", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 1
    except MalformedFormulaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    tracer = None
    trace_dir = args.trace_dir or (
        config.get("trace.output_dir") if config.get("trace.enabled") else None
    )
    if trace_dir:
        tracer = create_logger(
            experiment_name=Path(args.file).stem,
            output_dir=trace_dir,
            format_type=config.get("trace.format", "json"),
        )

    try:
        solver = SolverRegistry.create(
            args.algorithm,
            max_variables=config.get("solver.max_variables"),
        )
        if tracer is not None:
            if hasattr(solver, "tracer"):
                solver.configure({"tracer": tracer})
            else:
                logger.warning(f"Solver '{solver.solver_name}' does not support tracing")

        if not args.quiet and args.output == "text":
            print(conjunction)

        start = time.perf_counter()
        result = solver.solve(conjunction)
        duration_ms = int((time.perf_counter() - start) * 1000)
    except (ConfigurationError, VariableOutOfRangeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if tracer is not None:
            tracer.finalize()

    if args.output == "json":
        print(json.dumps(result_document(result, duration_ms), indent=2))
    elif args.output == "yaml":
        print(yaml.safe_dump(result_document(result, duration_ms), sort_keys=False), end="")
    else:
        print(format_assignment(result.assignment))
        print(f"duration = {duration_ms} ms")

    return 0


if __name__ == "__main__":
    sys.exit(main())
