"""
Endpoint extraction module for pylinejoin.

A line's endpoints are its first and last point. They are the only points the
join algorithm ever looks at: two lines can be joined only where one line's
start or end coincides with another line's start or end.

Endpoints are stored in a flat sequence, two per line, in input order:
line 0 start, line 0 end, line 1 start, line 1 end, ... Position `2 * i` is the
start of line `i` and position `2 * i + 1` its end. Every other component relies
on this ordering to stay deterministic.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np


@dataclass(frozen=True)
class Endpoint:
    """
    The start or end of one input line.

    Attributes
    ----------
    line_index : int
        Position of the owning line in the input collection.
    is_start : bool
        True for the line's first point, False for its last point.
    point : tuple of float
        The (x, y) coordinate of the endpoint.
    """

    line_index: int
    is_start: bool
    point: Tuple[float, float]

    @property
    def flat_index(self) -> int:
        """Position of this endpoint in the flat endpoint sequence."""
        return 2 * self.line_index + (0 if self.is_start else 1)

    @property
    def match_key(self) -> Tuple[bool, int]:
        """Key identifying this endpoint in the join instruction table."""
        return (self.is_start, self.line_index)


def extract_endpoints(lines: List[np.ndarray]) -> List[Endpoint]:
    """
    Derive the start and end endpoint of every line.

    Parameters
    ----------
    lines : list of np.ndarray
        Validated lines, each an array of shape (n, 2) with n >= 1.

    Returns
    -------
    list of Endpoint
        2 * len(lines) endpoints: start then end for each line, in line order.
        A single-point line yields two endpoints at the same coordinate.
    """
    endpoints = []
    for line_index, coords in enumerate(lines):
        start = coords[0]
        end = coords[-1]
        endpoints.append(Endpoint(line_index, True, (float(start[0]), float(start[1]))))
        endpoints.append(Endpoint(line_index, False, (float(end[0]), float(end[1]))))
    return endpoints


def endpoint_coordinates(endpoints: List[Endpoint]) -> np.ndarray:
    """Stack endpoint coordinates into an array of shape (len(endpoints), 2)."""
    if not endpoints:
        return np.empty((0, 2), dtype=float)
    return np.array([endpoint.point for endpoint in endpoints], dtype=float)
