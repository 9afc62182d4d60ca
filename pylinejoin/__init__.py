"""
pylinejoin - Join polylines that touch at their endpoints.

pylinejoin merges a collection of polylines into longer polylines wherever
their endpoints coincide, exactly or within a distance tolerance. It is meant
for geometry pipelines that need to collapse artificially segmented line data
(roads or boundaries split at tile edges, for instance) back into continuous
features.

Components
----------
- **matching**: Endpoint extraction and KD-tree endpoint matching
- **joining**: Join resolution, chain building and the public `join_lines`
- **utilities**: Input validation, shapely and DataFrame interop

Quick Start
-----------
```python
import pylinejoin as plj

lines = [
    [(0, 0), (1, 0)],
    [(1, 0), (2, 0)],
    [(5, 5), (6, 6)],
]

plj.join_lines(lines, preserve_directions=True)
# [[(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)], [(5.0, 5.0), (6.0, 6.0)]]

# Bridge small gaps
plj.join_lines([[(0, 0), (1, 0)], [(2, 0), (3, 0)]], tolerance=1)
# [[(0.0, 0.0), (1.0, 0.0), (3.0, 0.0)]]

# Shapely geometries
from shapely.geometry import LineString
plj.utilities.join_linestrings([LineString([(0, 0), (1, 0)]), LineString([(1, 0), (1, 1)])])
```
"""

from pylinejoin._version import __version__, __version_info__
from pylinejoin import matching, utilities, joining
from pylinejoin.joining import JoinOptions, JoinedLine, join_line_groups, join_lines
from pylinejoin.utilities import InvalidLinesError, InvalidOptionsError

__all__ = [
    '__version__',
    '__version_info__',
    'matching',
    'joining',
    'utilities',
    'join_lines',
    'join_line_groups',
    'JoinOptions',
    'JoinedLine',
    'InvalidLinesError',
    'InvalidOptionsError',
]
