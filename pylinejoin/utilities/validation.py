"""
Input validation module for pylinejoin.

Every public entry point funnels its input through this module before any
spatial work is done, so malformed geometry fails fast with an error naming
the offending line instead of producing silently wrong output.
"""

import math
import numbers
from collections.abc import Sequence

import numpy as np


class InvalidLinesError(ValueError):
    """Raised when the line collection (or one of its lines) is malformed."""


class InvalidOptionsError(ValueError):
    """Raised when a join option has an invalid value."""


def validate_tolerance(tolerance) -> float:
    """
    Check a join tolerance and return it as a float.

    Parameters
    ----------
    tolerance : int or float
        Maximum distance between two endpoints for them to count as coincident.

    Returns
    -------
    float
        The tolerance as a float.

    Raises
    ------
    InvalidOptionsError
        If the tolerance is not a real number, is not finite, or is negative.
    """
    if isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Real):
        raise InvalidOptionsError(f"tolerance must be a number, got {type(tolerance).__name__}")

    tolerance = float(tolerance)
    if not math.isfinite(tolerance):
        raise InvalidOptionsError("tolerance must be finite")
    if tolerance < 0:
        raise InvalidOptionsError(f"tolerance must be non-negative, got {tolerance}")
    return tolerance


def validate_lines(lines) -> list:
    """
    Convert a collection of lines into a list of (n, 2) float arrays.

    Parameters
    ----------
    lines : sequence of sequences of (x, y)
        The input lines. Each line needs at least one point and each point
        exactly two finite numeric coordinates. numpy arrays of shape (n, 2)
        are accepted as lines too.

    Returns
    -------
    list of np.ndarray
        One float64 array of shape (n, 2) per input line, in input order.

    Raises
    ------
    InvalidLinesError
        If `lines` is not a sequence, or any line or point is malformed.
    """
    # Strings are sequences too, but never a valid line collection
    if isinstance(lines, (str, bytes)) or not isinstance(lines, (Sequence, np.ndarray)):
        raise InvalidLinesError(
            f"lines must be a sequence of lines, got {type(lines).__name__}"
        )

    arrays = []
    for line_index, line in enumerate(lines):
        arrays.append(_validate_line(line, line_index))
    return arrays


def _validate_line(line, line_index: int) -> np.ndarray:
    if isinstance(line, (str, bytes)) or not isinstance(line, (Sequence, np.ndarray)):
        raise InvalidLinesError(
            f"line {line_index} must be a sequence of points, got {type(line).__name__}"
        )
    if len(line) == 0:
        raise InvalidLinesError(f"line {line_index} has no points")

    for point_index, point in enumerate(line):
        if isinstance(point, (str, bytes)) or not isinstance(point, (Sequence, np.ndarray)):
            raise InvalidLinesError(
                f"line {line_index}, point {point_index} must be an (x, y) pair, "
                f"got {type(point).__name__}"
            )
        if len(point) != 2:
            raise InvalidLinesError(
                f"line {line_index}, point {point_index} must have exactly 2 coordinates, "
                f"got {len(point)}"
            )
        for value in point:
            # bool is an int subclass; reject it explicitly
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
                raise InvalidLinesError(
                    f"line {line_index}, point {point_index} has a non-numeric coordinate: {value!r}"
                )

    coords = np.asarray(line, dtype=float).reshape(-1, 2)
    if not np.all(np.isfinite(coords)):
        raise InvalidLinesError(f"line {line_index} contains non-finite coordinates")
    return coords
