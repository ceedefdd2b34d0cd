"""
Logging utilities for the solvers.

This module configures Python's built-in logging from the ``logging`` config
section, and provides a StructuredLogger that records search events (tentative
assignments, backtracks, results) as JSON Lines or CSV, one file per event
type, plus a NumpyJSONEncoder for serializing numpy values.
"""

import csv
import json
import logging
import os
import time
from datetime import datetime
from typing import Any

import numpy as np

PACKAGE_LOGGER = "plsat"


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that can handle NumPy arrays and scalars."""

    def default(self, obj):
        """Convert numpy objects to standard Python types."""
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, (set, frozenset)):
            return sorted(obj)
        return super().default(obj)


def configure_logging(
    level: str | int = "INFO",
    fmt: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    file: str | None = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level name or number
        fmt: Format string for log records
        file: Optional path of a log file written alongside the console output

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    # Remove any existing handlers
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(fmt)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if file:
        os.makedirs(os.path.dirname(os.path.abspath(file)), exist_ok=True)
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class StructuredLogger:
    """
    A logger for structured search events.

    This logger can output data in JSON Lines or CSV format.
    It maintains separate files for different event types.
    """

    FORMAT_JSON = "json"
    FORMAT_CSV = "csv"

    def __init__(
        self,
        output_dir: str,
        experiment_name: str,
        format_type: str = "json",
    ):
        """
        Initialize the structured logger.

        Args:
            output_dir: Directory to save log files in
            experiment_name: Name of the run (used in filenames)
            format_type: Format to save logs in ("json" or "csv")
        """
        if format_type not in (self.FORMAT_JSON, self.FORMAT_CSV):
            raise ValueError(f"Unsupported log format: {format_type}")

        self.output_dir = output_dir
        self.experiment_name = experiment_name
        self.format_type = format_type

        # Ensure the output directory exists
        os.makedirs(output_dir, exist_ok=True)

        self.files = {}
        self.write_counts = {}
        self.metadata = {
            "experiment_name": experiment_name,
            "start_time": datetime.now().isoformat(),
            "log_files": {},
        }

    def _get_file(self, event_type: str) -> tuple:
        """
        Get the file handle for a given event type.

        Args:
            event_type: Type of event (used in filename)

        Returns:
            Tuple of (file_handle, is_new)
        """
        if event_type not in self.files:
            ext = ".jsonl" if self.format_type == self.FORMAT_JSON else ".csv"
            filename = f"{self.experiment_name}_{event_type}{ext}"
            filepath = os.path.join(self.output_dir, filename)

            self.metadata["log_files"][event_type] = filepath

            file = open(
                filepath,
                "w",
                newline="" if self.format_type == self.FORMAT_CSV else None,
            )
            self.files[event_type] = file
            self.write_counts[event_type] = 0
            return file, True

        return self.files[event_type], False

    def _write_event(self, event_type: str, data: dict[str, Any]):
        """
        Write an event to the appropriate log file.

        Args:
            event_type: Type of event
            data: Data to log
        """
        file, is_new = self._get_file(event_type)

        if self.format_type == self.FORMAT_JSON:
            file.write(json.dumps(data, cls=NumpyJSONEncoder) + "\n")
        else:
            writer = csv.DictWriter(file, fieldnames=list(data.keys()))
            if is_new:
                writer.writeheader()
            writer.writerow(data)
        file.flush()

        self.write_counts[event_type] += 1

    def log_decision(self, step: int, depth: int, variable: int, value: Any, reason: str):
        """
        Log a tentative assignment made by the search.

        Args:
            step: Sequence number of the decision within the solve
            depth: Depth of the search node making it
            variable: Variable index
            value: Value assigned
            reason: Why it was chosen ("unit", "pure" or "branch")
        """
        data = {
            "step": step,
            "depth": depth,
            "variable": variable,
            "value": str(value),
            "reason": reason,
            "timestamp": time.time(),
        }
        self._write_event("decision", data)

    def log_backtrack(self, step: int, depth: int, variable: int):
        """Log a variable being reset to UNDEFINED after a failed branch."""
        data = {
            "step": step,
            "depth": depth,
            "variable": variable,
            "timestamp": time.time(),
        }
        self._write_event("backtrack", data)

    def log_result(self, status: str, runtime: float, statistics: dict[str, Any]):
        """
        Log the outcome of a solve.

        Args:
            status: Verdict of the solve
            runtime: Runtime in seconds
            statistics: Search statistics
        """
        data = {"status": status, "runtime": runtime, "timestamp": time.time()}
        data.update(statistics)
        self._write_event("result", data)

    def close(self):
        """Close all open file handles."""
        for file in self.files.values():
            file.close()
        self.files = {}

    def finalize(self) -> str:
        """
        Close all files and write the metadata file.

        Returns:
            Path to the metadata file
        """
        self.close()

        self.metadata["end_time"] = datetime.now().isoformat()
        self.metadata["record_counts"] = self.write_counts

        metadata_path = os.path.join(
            self.output_dir, f"{self.experiment_name}_metadata.json"
        )
        with open(metadata_path, "w") as f:
            json.dump(self.metadata, f, indent=2)

        return metadata_path


def create_logger(
    experiment_name: str,
    output_dir: str = "logs",
    format_type: str = "json",
) -> StructuredLogger:
    """
    Create a structured logger with default settings.

    Args:
        experiment_name: Name of the run
        output_dir: Directory to save logs in
        format_type: Format to save logs in ("json" or "csv")

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(
        output_dir=output_dir,
        experiment_name=experiment_name,
        format_type=format_type,
    )
