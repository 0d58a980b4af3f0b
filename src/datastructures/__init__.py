"""Data structures for solver configuration and results.

This module defines the configuration and result data structures
for the VPNS lid-driven cavity solver.
"""

from .config import VPNSinfo, ConfigurationError, EDGE_COEFFICIENT_CONVENTIONS
from .fields import Fields
from .time_series import TimeSeries

__all__ = [
    # Configuration and metadata
    "VPNSinfo",
    "ConfigurationError",
    "EDGE_COEFFICIENT_CONVENTIONS",
    # Fields
    "Fields",
    # Time series
    "TimeSeries",
]
