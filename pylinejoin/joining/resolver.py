"""
Join resolution module for pylinejoin.

Turns the raw candidate lists produced by the spatial matcher into a
conflict-free, ordered list of join instructions.

The algorithm is greedy and single-pass: endpoints are visited in flat order
(line 0 start, line 0 end, line 1 start, ...), each endpoint's candidates in
ascending index order, and the first acceptable pair wins. There is no
backtracking, so the output is fully determined by the input order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Tuple, Union

from tqdm import tqdm

from pylinejoin.matching.endpoints import Endpoint

MatchKey = Tuple[bool, int]


class Slot(Enum):
    """State of an endpoint's entry in the join table, other than an instruction."""

    UNUSED = "unused"
    RESERVED = "reserved"  # consumed as the target side of an instruction


@dataclass(frozen=True)
class JoinInstruction:
    """
    Directive to append the `to_line` chain onto the `from_line` chain.

    The join happens at the `from_line` endpoint selected by `from_is_start`
    and the `to_line` endpoint selected by `to_is_start`.
    """

    from_line: int
    from_is_start: bool
    to_line: int
    to_is_start: bool

    @property
    def is_forward(self) -> bool:
        """True for an end -> start join, which never flips either line."""
        return not self.from_is_start and self.to_is_start

    @property
    def from_key(self) -> MatchKey:
        return (self.from_is_start, self.from_line)

    @property
    def to_key(self) -> MatchKey:
        return (self.to_is_start, self.to_line)


class JoinTable:
    """
    Join instructions keyed by the endpoint that determines them.

    Each endpoint key is in one of three states: unused, reserved (spoken for
    as the target of another endpoint's instruction) or holding the
    instruction it determines. Once used, a key never changes state.
    """

    def __init__(self):
        self._slots: Dict[MatchKey, Union[Slot, JoinInstruction]] = {}

    def __len__(self):
        return len(self._slots)

    def __contains__(self, key: MatchKey) -> bool:
        return key in self._slots

    def state(self, key: MatchKey) -> Union[Slot, JoinInstruction]:
        return self._slots.get(key, Slot.UNUSED)

    def touches_line(self, line_index: int) -> bool:
        """True if either endpoint of the line already has an entry."""
        return (True, line_index) in self._slots or (False, line_index) in self._slots

    def record(self, instruction: JoinInstruction):
        if instruction.from_key in self._slots or instruction.to_key in self._slots:
            raise ValueError(f"endpoint already used by another join: {instruction}")
        self._slots[instruction.from_key] = instruction
        self._slots[instruction.to_key] = Slot.RESERVED

    def instructions(self) -> Iterator[JoinInstruction]:
        """Recorded instructions in the order they were accepted."""
        for value in self._slots.values():
            if isinstance(value, JoinInstruction):
                yield value


def _accepts_orientation(source: Endpoint, target: Endpoint, preserve_directions: bool) -> bool:
    if not preserve_directions:
        return True
    # Only end -> start keeps both lines in their original direction
    return not source.is_start and target.is_start


def resolve_joins(
    endpoints: List[Endpoint],
    candidates: List[List[int]],
    preserve_directions: bool = False,
    show_progress: bool = False
) -> JoinTable:
    """
    Decide which endpoint pairs become joins.

    Parameters
    ----------
    endpoints : list of Endpoint
        Flat endpoint sequence from `extract_endpoints()`.
    candidates : list of list of int
        `candidates[i]` is the ordered list of endpoint indices near endpoint i,
        as returned by `find_candidates()`.
    preserve_directions : bool, default=False
        Only accept end -> start pairs, so no line ever has to be reversed.
    show_progress : bool, default=False
        Display a tqdm progress bar over the endpoints.

    Returns
    -------
    JoinTable
        The accepted instructions, in acceptance order, plus the reserved keys.

    Notes
    -----
    A pair (source, target) is accepted when all of the following hold:

    1. source and target are different endpoints of different lines
    2. the orientation is allowed (end -> start only with `preserve_directions`)
    3. neither endpoint key is already used
    4. the target line has no entry at all in the table

    Rule 4 only stops a join from running back onto a line that is already
    part of a recorded join. It is an ordering guard, not a cycle detector:
    for chains of more than two lines, whether a closing join is accepted
    depends on the order endpoints are visited in. Callers depend on these
    tie-break results, so the rule stays as it is.
    """
    table = JoinTable()

    iterator = enumerate(endpoints)
    if show_progress:
        iterator = tqdm(iterator, total=len(endpoints), desc="Resolving joins")

    for source_index, source in iterator:
        for target_index in candidates[source_index]:
            target = endpoints[target_index]

            # Skip self point matches and self line matches
            if target_index == source_index or target.line_index == source.line_index:
                continue

            if not _accepts_orientation(source, target, preserve_directions):
                continue

            # An endpoint takes part in at most one join
            if source.match_key in table or target.match_key in table:
                continue

            # Skip joining back onto a line already involved in a join
            if table.touches_line(target.line_index):
                continue

            table.record(JoinInstruction(
                from_line=source.line_index,
                from_is_start=source.is_start,
                to_line=target.line_index,
                to_is_start=target.is_start,
            ))

    return table
