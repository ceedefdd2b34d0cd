"""
Unit tests for logging and error handling components.

Tests the StructuredLogger and exception classes to ensure they work as expected.
"""

import csv
import json
import logging
import os
import shutil
import tempfile
import unittest

import numpy as np

from plsat.exceptions import (
    ConfigurationError,
    InconsistentAssignmentError,
    MalformedFormulaError,
    PLSatError,
    VariableOutOfRangeError,
)
from plsat.truth import TruthValue
from plsat.utils.logging_utils import (
    PACKAGE_LOGGER,
    NumpyJSONEncoder,
    StructuredLogger,
    configure_logging,
    create_logger,
)


class TestExceptions(unittest.TestCase):
    """Test cases for custom exception classes."""

    def test_hierarchy(self):
        for error_cls in (
            ConfigurationError,
            InconsistentAssignmentError,
            MalformedFormulaError,
            VariableOutOfRangeError,
        ):
            self.assertTrue(issubclass(error_cls, PLSatError))

    def test_variable_out_of_range_error(self):
        error = VariableOutOfRangeError(200, 128)
        self.assertEqual(error.variable, 200)
        self.assertEqual(error.max_variables, 128)
        self.assertEqual(str(error), "Variable out of range: 200 (supported range is 0..127)")

    def test_malformed_formula_error(self):
        self.assertEqual(str(MalformedFormulaError()), "Malformed formula")

        error = MalformedFormulaError("Invalid literal", "B2")
        self.assertEqual(error.text, "B2")
        self.assertEqual(str(error), "Invalid literal: 'B2'")

    def test_inconsistent_assignment_error(self):
        error = InconsistentAssignmentError()
        self.assertEqual(str(error), "Inconsistent variable assignment")

        error = InconsistentAssignmentError(variable=5)
        self.assertIn("variable 5", str(error))
        self.assertEqual(error.variable, 5)


class TestStructuredLogger(unittest.TestCase):
    """Test cases for StructuredLogger class."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_logger_initialization(self):
        logger = StructuredLogger(output_dir=self.test_dir, experiment_name="test_run")
        self.assertEqual(logger.experiment_name, "test_run")
        self.assertEqual(logger.output_dir, self.test_dir)
        self.assertEqual(logger.format_type, "json")
        logger.close()

    def test_unsupported_format(self):
        with self.assertRaises(ValueError):
            StructuredLogger(self.test_dir, "bad", format_type="xml")

    def test_json_logging(self):
        """Test JSON format logging."""
        logger = StructuredLogger(
            output_dir=self.test_dir,
            experiment_name="json_test",
            format_type=StructuredLogger.FORMAT_JSON,
        )
        logger.log_decision(1, 0, 65, TruthValue.TRUE, "branch")
        logger.log_backtrack(1, 0, 65)
        logger.log_result("satisfiable", 0.25, {"nodes": np.int64(3)})
        logger.close()

        with open(os.path.join(self.test_dir, "json_test_decision.jsonl")) as f:
            decision = json.loads(f.readline())
        self.assertEqual(decision["step"], 1)
        self.assertEqual(decision["variable"], 65)
        self.assertEqual(decision["value"], "True")
        self.assertEqual(decision["reason"], "branch")

        with open(os.path.join(self.test_dir, "json_test_backtrack.jsonl")) as f:
            backtrack = json.loads(f.readline())
        self.assertEqual(backtrack["depth"], 0)

        with open(os.path.join(self.test_dir, "json_test_result.jsonl")) as f:
            result = json.loads(f.readline())
        self.assertEqual(result["status"], "satisfiable")
        self.assertEqual(result["runtime"], 0.25)
        self.assertEqual(result["nodes"], 3)

    def test_csv_logging(self):
        """Test CSV format logging."""
        logger = StructuredLogger(
            output_dir=self.test_dir,
            experiment_name="csv_test",
            format_type=StructuredLogger.FORMAT_CSV,
        )
        logger.log_decision(1, 0, 65, TruthValue.TRUE, "unit")
        logger.log_decision(2, 1, 66, TruthValue.FALSE, "pure")
        logger.close()

        decision_file = os.path.join(self.test_dir, "csv_test_decision.csv")
        with open(decision_file) as f:
            rows = list(csv.DictReader(f))

        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0]["variable"], "65")
        self.assertEqual(rows[0]["value"], "True")
        self.assertEqual(rows[1]["step"], "2")
        self.assertEqual(rows[1]["reason"], "pure")

    def test_finalize(self):
        """Test finalizing the logger."""
        logger = create_logger("final_test", output_dir=self.test_dir)
        logger.log_decision(1, 0, 1, TruthValue.TRUE, "branch")
        logger.log_decision(2, 1, 2, TruthValue.TRUE, "branch")
        logger.log_backtrack(2, 1, 2)

        metadata_file = logger.finalize()
        self.assertEqual(
            metadata_file, os.path.join(self.test_dir, "final_test_metadata.json")
        )
        with open(metadata_file) as f:
            metadata = json.load(f)

        self.assertEqual(metadata["experiment_name"], "final_test")
        self.assertEqual(metadata["record_counts"], {"decision": 2, "backtrack": 1})
        self.assertIn("end_time", metadata)
        self.assertEqual(logger.files, {})


class TestNumpyJSONEncoder(unittest.TestCase):
    """Test cases for NumpyJSONEncoder class."""

    def test_numpy_values(self):
        data = {
            "int": np.int8(2),
            "float": np.float32(0.5),
            "array": np.array([0, 1, 2], dtype=np.int8),
            "set": {3, 1, 2},
        }
        decoded = json.loads(json.dumps(data, cls=NumpyJSONEncoder))
        self.assertEqual(decoded["int"], 2)
        self.assertEqual(decoded["float"], 0.5)
        self.assertEqual(decoded["array"], [0, 1, 2])
        self.assertEqual(decoded["set"], [1, 2, 3])

    def test_unsupported_type(self):
        with self.assertRaises(TypeError):
            json.dumps({"value": object()}, cls=NumpyJSONEncoder)


class TestConfigureLogging(unittest.TestCase):
    """Test cases for configure_logging."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        shutil.rmtree(self.test_dir)

    def test_level_and_handlers(self):
        logger = configure_logging("debug")
        self.assertEqual(logger.name, PACKAGE_LOGGER)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)

        # Reconfiguring replaces handlers instead of stacking them
        configure_logging("WARNING")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.WARNING)

    def test_log_file(self):
        log_file = os.path.join(self.test_dir, "logs", "plsat.log")
        configure_logging("INFO", fmt="%(levelname)s %(message)s", file=log_file)

        logging.getLogger("plsat.solvers.dpll").info("search finished")
        for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
            handler.flush()

        with open(log_file) as f:
            self.assertIn("INFO search finished", f.read())


if __name__ == "__main__":
    unittest.main()
