"""
Chain building module for pylinejoin.

Applies resolved join instructions in order, growing output polylines
("chains") one line at a time, then passes every untouched input line through
unchanged.

State is an arena of chains plus a join log mapping each original line index
to the arena slot currently holding the chain it belongs to. When an
instruction touches a line that was already merged, the join log is used to
find the up-to-date chain so the new line extends it instead of starting a
fresh one.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from pylinejoin.joining.resolver import JoinInstruction, MatchKey

Point = Tuple[float, float]


@dataclass(frozen=True)
class JoinedLine:
    """
    One output polyline and the input lines it was built from.

    Attributes
    ----------
    coords : list of (x, y)
        The output polyline.
    members : tuple of (int, bool)
        `(line_index, reversed)` for every input line in the polyline, in the
        order they appear along it. `reversed` is True when the line's points
        run backwards in the output.
    """

    coords: List[Point]
    members: Tuple[Tuple[int, bool], ...]

    @property
    def line_indices(self) -> Tuple[int, ...]:
        return tuple(line_index for line_index, _ in self.members)


@dataclass
class _Chain:
    coords: List[Point]
    members: List[Tuple[int, bool]]
    head: MatchKey  # endpoint key at coords[0]
    tail: MatchKey  # endpoint key at coords[-1]

    @classmethod
    def from_line(cls, line_index: int, coords: np.ndarray) -> "_Chain":
        return cls(
            coords=[tuple(point) for point in coords.tolist()],
            members=[(line_index, False)],
            head=(True, line_index),
            tail=(False, line_index),
        )

    def reversed(self) -> "_Chain":
        return _Chain(
            coords=self.coords[::-1],
            members=[(line_index, not flipped) for line_index, flipped in reversed(self.members)],
            head=self.tail,
            tail=self.head,
        )

    def oriented(self, key: MatchKey, at_head: bool) -> "_Chain":
        """Return this chain turned so the endpoint `key` sits at its head (or tail)."""
        if key == (self.head if at_head else self.tail):
            return self
        if key == (self.tail if at_head else self.head):
            return self.reversed()
        raise ValueError(f"endpoint {key} is not a free end of the chain")


def _join_chains(source: _Chain, source_key: MatchKey, target: _Chain, target_key: MatchKey) -> _Chain:
    """
    Join `target` onto `source` where `source_key` meets `target_key`.

    The junction point kept is the one from `source`; the duplicate from
    `target` is dropped by position, not by distance.
    """
    if source_key == source.tail:
        target = target.oriented(target_key, at_head=True)
        return _Chain(
            coords=source.coords + target.coords[1:],
            members=source.members + target.members,
            head=source.head,
            tail=target.tail,
        )

    if source_key == source.head:
        target = target.oriented(target_key, at_head=False)
        return _Chain(
            coords=target.coords[:-1] + source.coords,
            members=target.members + source.members,
            head=target.head,
            tail=source.tail,
        )

    raise ValueError(f"endpoint {source_key} is not a free end of the chain")


class ChainBuilder:
    """
    Arena of output chains plus the join log mapping lines to arena slots.

    Parameters
    ----------
    lines : list of np.ndarray
        Validated input lines.
    """

    def __init__(self, lines: List[np.ndarray]):
        self.lines = lines
        self.join_log: Dict[int, int] = {}
        self._arena: List[Optional[_Chain]] = []

    def _resolve(self, line_index: int) -> Tuple[_Chain, Optional[int]]:
        slot = self.join_log.get(line_index)
        if slot is None:
            return _Chain.from_line(line_index, self.lines[line_index]), None
        return self._arena[slot], slot

    def apply(self, instruction: JoinInstruction) -> int:
        """
        Apply one join instruction and return the arena slot it wrote to.

        The merged chain is stored in the from-line's slot if it has one,
        else in the to-line's slot, else in a new slot. Every line in the
        merged chain is then logged against that slot.
        """
        source, source_slot = self._resolve(instruction.from_line)
        target, target_slot = self._resolve(instruction.to_line)

        if source_slot is not None and source_slot == target_slot:
            raise ValueError(
                f"join {instruction} would close a chain onto itself"
            )

        merged = _join_chains(source, instruction.from_key, target, instruction.to_key)

        if source_slot is not None:
            slot = source_slot
            if target_slot is not None:
                # The target chain now lives inside the source's slot
                self._arena[target_slot] = None
        elif target_slot is not None:
            slot = target_slot
        else:
            slot = len(self._arena)
            self._arena.append(None)

        self._arena[slot] = merged
        for line_index, _ in merged.members:
            self.join_log[line_index] = slot
        return slot

    def apply_all(self, instructions: Iterable[JoinInstruction]) -> "ChainBuilder":
        for instruction in instructions:
            self.apply(instruction)
        return self

    def result(self) -> List[JoinedLine]:
        """
        Joined chains in the order they were first created, followed by every
        line that was never joined, in input order.
        """
        output = [
            JoinedLine(coords=chain.coords, members=tuple(chain.members))
            for chain in self._arena
            if chain is not None
        ]
        for line_index, coords in enumerate(self.lines):
            if line_index not in self.join_log:
                output.append(JoinedLine(
                    coords=[tuple(point) for point in coords.tolist()],
                    members=((line_index, False),),
                ))
        return output


def build_chains(lines: List[np.ndarray], instructions: Iterable[JoinInstruction]) -> List[JoinedLine]:
    """
    Apply join instructions to the input lines and collect the output polylines.

    Parameters
    ----------
    lines : list of np.ndarray
        Validated input lines.
    instructions : iterable of JoinInstruction
        Resolved instructions, in acceptance order.

    Returns
    -------
    list of JoinedLine
        Every input line appears in exactly one output polyline.
    """
    return ChainBuilder(lines).apply_all(instructions).result()
