"""
Utilities module for the pylinejoin library.

This module provides input validation and interop with shapely geometries and
pandas / polars point tables.
"""

from pylinejoin.utilities.validation import (
    InvalidLinesError,
    InvalidOptionsError,
    validate_lines,
    validate_tolerance
)
from pylinejoin.utilities.geometry import join_linestrings, to_multilinestring
from pylinejoin.utilities.dataframes import join_dataframe

__all__ = [
    # Validation
    'InvalidLinesError',
    'InvalidOptionsError',
    'validate_lines',
    'validate_tolerance',
    # Shapely
    'join_linestrings',
    'to_multilinestring',
    # DataFrames
    'join_dataframe',
]
