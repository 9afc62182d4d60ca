"""
Line joining module for pylinejoin.

This module is the public entry point of the library. It wires the four
stages together:

1. **Endpoint extraction**: start and end point of every line
2. **Spatial matching**: endpoints within `tolerance` of each other
3. **Join resolution**: a conflict-free, ordered set of join instructions
4. **Chain building**: merged polylines, followed by the untouched lines

Typical use is collapsing line data that was artificially split (for example
roads or boundaries cut at tile edges) back into continuous features.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pylinejoin.joining.chains import JoinedLine, build_chains
from pylinejoin.joining.resolver import resolve_joins
from pylinejoin.matching.endpoints import extract_endpoints
from pylinejoin.matching.spatial_index import find_candidates
from pylinejoin.utilities.validation import validate_lines, validate_tolerance


@dataclass(frozen=True)
class JoinOptions:
    """
    Options controlling a join run.

    Attributes
    ----------
    preserve_directions : bool, default=False
        If True, only join the end of one line to the start of another, so no
        line is ever reversed. If False, lines may be flipped to connect.
    tolerance : float, default=0.0
        Maximum Euclidean distance between two endpoints for them to be
        treated as coincident. 0 means exact coincidence.
    geographic : bool, default=False
        Coordinates are (lon, lat) WGS84 degrees and `tolerance` is in metres.
    show_progress : bool, default=False
        Display a tqdm progress bar while resolving joins.
    """

    preserve_directions: bool = False
    tolerance: float = 0.0
    geographic: bool = False
    show_progress: bool = False

    def __post_init__(self):
        # frozen dataclass: bypass __setattr__ to store the normalised value
        object.__setattr__(self, "tolerance", validate_tolerance(self.tolerance))
        object.__setattr__(self, "preserve_directions", bool(self.preserve_directions))
        object.__setattr__(self, "geographic", bool(self.geographic))
        object.__setattr__(self, "show_progress", bool(self.show_progress))


def join_line_groups(
    lines,
    preserve_directions: bool = False,
    tolerance: float = 0.0,
    geographic: bool = False,
    show_progress: bool = False,
    options: Optional[JoinOptions] = None
) -> List[JoinedLine]:
    """
    Join lines touching at their endpoints and report which lines form each result.

    Parameters
    ----------
    lines : sequence of sequences of (x, y)
        The input lines, e.g. GeoJSON LineString coordinate arrays. Each line
        needs at least one point. numpy arrays of shape (n, 2) also work.
    preserve_directions : bool, default=False
        Never flip a line; only end -> start joins are made.
    tolerance : float, default=0.0
        Maximum distance between endpoints that still counts as touching.
    geographic : bool, default=False
        Interpret coordinates as (lon, lat) degrees and `tolerance` as metres.
    show_progress : bool, default=False
        Display a tqdm progress bar while resolving joins.
    options : JoinOptions, optional
        Pre-built options. When given, the individual keyword arguments above
        are ignored.

    Returns
    -------
    list of JoinedLine
        Joined chains first, in the order their first join was resolved, then
        all lines that joined nothing, in input order.

    Raises
    ------
    InvalidLinesError
        If `lines` or any of its lines is malformed.
    InvalidOptionsError
        If `tolerance` is negative or not a finite number.

    See Also
    --------
    join_lines : Same operation returning only the coordinates.
    """
    if options is None:
        options = JoinOptions(
            preserve_directions=preserve_directions,
            tolerance=tolerance,
            geographic=geographic,
            show_progress=show_progress,
        )

    arrays = validate_lines(lines)
    if not arrays:
        return []

    endpoints = extract_endpoints(arrays)
    candidates = find_candidates(endpoints, options.tolerance, options.geographic)
    table = resolve_joins(
        endpoints,
        candidates,
        preserve_directions=options.preserve_directions,
        show_progress=options.show_progress,
    )
    return build_chains(arrays, table.instructions())


def join_lines(
    lines,
    preserve_directions: bool = False,
    tolerance: float = 0.0,
    geographic: bool = False,
    show_progress: bool = False,
    options: Optional[JoinOptions] = None
) -> List[List[Tuple[float, float]]]:
    """
    Join lines whose endpoints touch into longer lines.

    Parameters
    ----------
    lines : sequence of sequences of (x, y)
        The input lines, e.g. GeoJSON LineString coordinate arrays.
    preserve_directions : bool, default=False
        If True no line will be flipped in the other direction; if False this
        may happen so that lines meeting start-to-start or end-to-end join.
    tolerance : float, default=0.0
        Tolerance allowed to still join endpoints which are close but not
        exactly touching.
    geographic : bool, default=False
        Interpret coordinates as (lon, lat) degrees and `tolerance` as metres.
    show_progress : bool, default=False
        Display a tqdm progress bar while resolving joins.
    options : JoinOptions, optional
        Pre-built options, overriding the keyword arguments.

    Returns
    -------
    list of list of (float, float)
        The joined lines followed by the lines that were not joined. Every
        input line appears in exactly one output line.

    Examples
    --------
    >>> import pylinejoin as plj
    >>>
    >>> plj.join_lines([[(0, 0), (1, 0)], [(1, 0), (2, 0)]], preserve_directions=True)
    [[(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)]]
    >>>
    >>> # Bridge a gap of 1 unit; the start of the second line is dropped
    >>> plj.join_lines([[(0, 0), (1, 0)], [(2, 0), (3, 0)]], tolerance=1)
    [[(0.0, 0.0), (1.0, 0.0), (3.0, 0.0)]]

    Notes
    -----
    **Join rules:**
    - Every endpoint takes part in at most one join
    - A line never joins itself
    - Endpoints are visited in input order and the first acceptable
      candidate wins, so the result is deterministic
    - A join is never made onto a line that already takes part in another
      join as either side; this stops chains closing back on themselves early

    **Junction points:** the first point of the appended line is dropped by
    position, so with a tolerance > 0 the gap is bridged straight from the
    last point of one line to the second point of the next.

    **Performance:** one KD-tree radius query per endpoint, O(N * k) overall
    where k is the average number of endpoints within the tolerance.
    """
    groups = join_line_groups(
        lines,
        preserve_directions=preserve_directions,
        tolerance=tolerance,
        geographic=geographic,
        show_progress=show_progress,
        options=options,
    )
    return [group.coords for group in groups]
