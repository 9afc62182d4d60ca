"""
Endpoint matching module for pylinejoin.

This module finds which line endpoints are close enough to be joined:
- Endpoints: Start and end point of every line, in a flat ordered sequence
- Spatial index: KD-tree radius queries over the endpoints
"""

from pylinejoin.matching.endpoints import Endpoint, extract_endpoints, endpoint_coordinates
from pylinejoin.matching.spatial_index import EndpointIndex, find_candidates, project_to_metres

__all__ = [
    'Endpoint',
    'extract_endpoints',
    'endpoint_coordinates',
    'EndpointIndex',
    'find_candidates',
    'project_to_metres',
]
