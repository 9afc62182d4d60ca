"""
Shapely interoperability module for pylinejoin.

Lets the join run directly on shapely geometries, which is how line data
usually arrives after being read with shapely, geopandas or similar tools.
"""

from typing import List

from shapely.geometry import LineString, MultiLineString

from pylinejoin.joining.join import join_lines
from pylinejoin.utilities.validation import InvalidLinesError


def _explode(geometries) -> List[list]:
    coords = []
    for position, geom in enumerate(geometries):
        if isinstance(geom, LineString):
            if not geom.is_empty:
                coords.append([tuple(pt[:2]) for pt in geom.coords])
        elif isinstance(geom, MultiLineString):
            # Parts keep their order inside the collection
            for part in geom.geoms:
                if not part.is_empty:
                    coords.append([tuple(pt[:2]) for pt in part.coords])
        else:
            raise InvalidLinesError(
                f"geometry {position} must be a LineString or MultiLineString, "
                f"got {type(geom).__name__}"
            )
    return coords


def _to_linestring(coords) -> LineString:
    # A LineString needs two points; degenerate single-point lines become zero-length lines
    if len(coords) == 1:
        coords = [coords[0], coords[0]]
    return LineString(coords)


def join_linestrings(
    geometries,
    preserve_directions: bool = False,
    tolerance: float = 0.0,
    geographic: bool = False
) -> List[LineString]:
    """
    Join shapely LineStrings that touch at their endpoints.

    Parameters
    ----------
    geometries : iterable of LineString or MultiLineString
        Input geometries. MultiLineStrings are exploded into their parts;
        empty geometries are skipped. Z values are ignored.
    preserve_directions : bool, default=False
        Never flip a line; only end -> start joins are made.
    tolerance : float, default=0.0
        Maximum distance between endpoints that still counts as touching.
    geographic : bool, default=False
        Interpret coordinates as (lon, lat) degrees and `tolerance` as metres.

    Returns
    -------
    list of LineString
        Joined lines first, then the lines that joined nothing.

    Raises
    ------
    InvalidLinesError
        If a geometry is neither a LineString nor a MultiLineString.

    Examples
    --------
    >>> from shapely.geometry import LineString
    >>> from pylinejoin.utilities.geometry import join_linestrings
    >>>
    >>> merged = join_linestrings([
    ...     LineString([(0, 0), (1, 0)]),
    ...     LineString([(1, 0), (1, 1)]),
    ... ])
    >>> merged[0].wkt
    'LINESTRING (0 0, 1 0, 1 1)'
    """
    coords = _explode(geometries)
    joined = join_lines(
        coords,
        preserve_directions=preserve_directions,
        tolerance=tolerance,
        geographic=geographic,
    )
    return [_to_linestring(line) for line in joined]


def to_multilinestring(polylines) -> MultiLineString:
    """Wrap join output (coordinate lists or LineStrings) into one MultiLineString."""
    parts = []
    for line in polylines:
        if isinstance(line, LineString):
            parts.append(line)
        else:
            parts.append(_to_linestring(list(line)))
    return MultiLineString(parts)
