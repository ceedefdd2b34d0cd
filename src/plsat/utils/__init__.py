"""
Utilities for the plsat package.
"""

from plsat.utils.logging_utils import (
    NumpyJSONEncoder,
    StructuredLogger,
    configure_logging,
    create_logger,
)

__all__ = [
    "NumpyJSONEncoder",
    "StructuredLogger",
    "configure_logging",
    "create_logger",
]
