"""
Joining module for the pylinejoin library.

This module resolves endpoint matches into join instructions and builds the
merged output polylines from them.
"""

from pylinejoin.joining.resolver import JoinInstruction, JoinTable, Slot, resolve_joins
from pylinejoin.joining.chains import ChainBuilder, JoinedLine, build_chains
from pylinejoin.joining.join import JoinOptions, join_line_groups, join_lines

__all__ = [
    'JoinInstruction',
    'JoinTable',
    'Slot',
    'resolve_joins',
    'ChainBuilder',
    'JoinedLine',
    'build_chains',
    'JoinOptions',
    'join_line_groups',
    'join_lines',
]
