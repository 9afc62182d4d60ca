"""
Spatial matching module for pylinejoin.

This module indexes line endpoints in a KD-tree and finds, for every endpoint,
all endpoints lying within the join tolerance. The result (the candidate lists)
is the only input the join resolver needs.

Distances are Euclidean in the coordinate space of the input. For geographic
data (lon/lat degrees) the endpoints can be projected to a local Azimuthal
Equidistant (AEQD) projection first, so the tolerance is expressed in metres.
"""

import warnings
from typing import Dict, List, Tuple

import numpy as np
from pyproj import Transformer
from scipy.spatial import cKDTree

from pylinejoin.matching.endpoints import Endpoint, endpoint_coordinates

# ========== AEQD Projection Transformer Cache ==========
# Key: (rounded_lat, rounded_lon, precision) -> WGS84 -> AEQD transformer
_transformer_cache: Dict[Tuple[float, float, int], Transformer] = {}
_TRANSFORMER_CACHE_SIZE = 64


def _get_aeqd_transformer(cen_lat: float, cen_lon: float, precision: int = 6) -> Transformer:
    key = (round(cen_lat, precision), round(cen_lon, precision), precision)
    if key in _transformer_cache:
        return _transformer_cache[key]
    proj = f"+proj=aeqd +lat_0={cen_lat:.9f} +lon_0={cen_lon:.9f} +datum=WGS84 +units=m +no_defs"
    fwd = Transformer.from_crs("EPSG:4326", proj, always_xy=True)
    _transformer_cache[key] = fwd
    if len(_transformer_cache) > _TRANSFORMER_CACHE_SIZE:
        _transformer_cache.pop(next(iter(_transformer_cache)))
    return fwd


def project_to_metres(coords: np.ndarray) -> np.ndarray:
    """
    Project (lon, lat) degree coordinates to a local metric plane.

    The projection is an AEQD centred on the centroid of `coords` (circular
    mean for longitude, so data straddling ±180° stays centred), which keeps
    distances accurate for the extent of a typical tile or dataset.

    Parameters
    ----------
    coords : np.ndarray
        Array of shape (n, 2) holding (lon, lat) pairs in WGS84 degrees.

    Returns
    -------
    np.ndarray
        Array of shape (n, 2) holding (x, y) in metres.
    """
    if len(coords) == 0:
        return coords.copy()

    lons = coords[:, 0]
    lats = coords[:, 1]
    if np.any(np.abs(lons) > 180.0) or np.any(np.abs(lats) > 90.0):
        warnings.warn(
            "geographic=True but some coordinates are outside lon/lat range; "
            "metric tolerance will be meaningless for them.",
            RuntimeWarning,
        )

    # Circular mean keeps the centre on the data when it crosses the antimeridian
    rad_lons = np.radians(lons)
    cen_lon = float(np.degrees(np.arctan2(np.mean(np.sin(rad_lons)), np.mean(np.cos(rad_lons)))))
    transformer = _get_aeqd_transformer(float(np.mean(lats)), cen_lon)
    xs, ys = transformer.transform(lons, lats)
    return np.column_stack([xs, ys])


class EndpointIndex:
    """
    KD-tree over endpoint coordinates answering fixed-radius queries.

    Parameters
    ----------
    coords : np.ndarray
        Array of shape (n, 2) with the (already projected, if needed) endpoint
        coordinates. Row i is endpoint i of the flat endpoint sequence.

    Notes
    -----
    Query results are sorted by endpoint index. The resolver picks the first
    valid candidate, so this order is the tie-break order of the whole
    algorithm and must not depend on tree internals.
    """

    def __init__(self, coords: np.ndarray):
        self.coords = np.asarray(coords, dtype=float).reshape(-1, 2)
        self._tree = cKDTree(self.coords) if len(self.coords) else None

    def __len__(self):
        return len(self.coords)

    def query(self, point, radius: float) -> List[int]:
        """Indices of all endpoints within `radius` (inclusive) of `point`."""
        if self._tree is None:
            return []
        found = self._tree.query_ball_point(np.asarray(point, dtype=float), r=radius)
        return sorted(int(i) for i in found)

    def query_all(self, radius: float) -> List[List[int]]:
        """
        Run `query` for every indexed endpoint at once.

        Every endpoint appears in its own result list, since its distance to
        itself is zero.
        """
        if self._tree is None:
            return []
        neighbors = self._tree.query_ball_point(self.coords, r=radius, return_sorted=True)
        return [[int(i) for i in found] for found in neighbors]


def find_candidates(
    endpoints: List[Endpoint],
    tolerance: float = 0.0,
    geographic: bool = False
) -> List[List[int]]:
    """
    Find, for every endpoint, the endpoints within `tolerance` of it.

    Parameters
    ----------
    endpoints : list of Endpoint
        Flat endpoint sequence from `extract_endpoints()`.
    tolerance : float, default=0.0
        Search radius. 0 means exact coincidence. In coordinate units, or in
        metres when `geographic` is True.
    geographic : bool, default=False
        Treat coordinates as (lon, lat) WGS84 degrees and project them to a
        local AEQD plane before searching.

    Returns
    -------
    list of list of int
        `candidates[i]` holds the flat indices of all endpoints within the
        tolerance of endpoint i, in ascending order, including i itself.
    """
    coords = endpoint_coordinates(endpoints)
    if geographic:
        coords = project_to_metres(coords)

    index = EndpointIndex(coords)
    return index.query_all(tolerance)
