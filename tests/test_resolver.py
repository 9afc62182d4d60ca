"""Tests for join resolution."""

import pytest

from pylinejoin.joining.resolver import JoinInstruction, JoinTable, Slot, resolve_joins
from pylinejoin.matching.endpoints import extract_endpoints
from pylinejoin.matching.spatial_index import find_candidates
from pylinejoin.utilities.validation import validate_lines


def _resolve(lines, preserve_directions=False, tolerance=0.0):
    arrays = validate_lines(lines)
    endpoints = extract_endpoints(arrays)
    candidates = find_candidates(endpoints, tolerance)
    return resolve_joins(endpoints, candidates, preserve_directions=preserve_directions)


def test_forward_join_records_instruction_and_reservation():
    table = _resolve([
        [[0, 0], [1, 0]],
        [[1, 0], [2, 0]],
    ], preserve_directions=True)

    assert list(table.instructions()) == [JoinInstruction(0, False, 1, True)]
    assert table.state((False, 0)) == JoinInstruction(0, False, 1, True)
    assert table.state((True, 1)) is Slot.RESERVED
    assert table.state((True, 0)) is Slot.UNUSED
    assert table.state((False, 1)) is Slot.UNUSED


def test_instruction_orientation_flag():
    assert JoinInstruction(0, False, 1, True).is_forward
    assert not JoinInstruction(0, True, 1, True).is_forward
    assert not JoinInstruction(0, False, 1, False).is_forward
    assert not JoinInstruction(0, True, 1, False).is_forward


def test_preserve_directions_skips_wrong_orientation_but_keeps_looking():
    # The end of line 0 touches the end of line 1 (lower index) and the start of line 2
    lines = [
        [[0, 0], [1, 0]],
        [[5, 5], [1, 0]],
        [[1, 0], [2, 0]],
    ]
    preserved = _resolve(lines, preserve_directions=True)
    assert list(preserved.instructions()) == [JoinInstruction(0, False, 2, True)]

    flipped = _resolve(lines)
    assert list(flipped.instructions())[0] == JoinInstruction(0, False, 1, False)


def test_no_instruction_for_self_line_match():
    # A closed ring: start and end of the same line coincide
    table = _resolve([[[0, 0], [1, 0], [1, 1], [0, 0]]])
    assert len(table) == 0


def test_endpoint_used_once_at_star_junction():
    # Four lines leave the origin; each origin endpoint joins at most once
    lines = [
        [[0, 0], [1, 0]],
        [[0, 0], [0, 1]],
        [[0, 0], [-1, 0]],
        [[0, 0], [0, -1]],
    ]
    table = _resolve(lines)
    instructions = list(table.instructions())
    used = []
    for instruction in instructions:
        used.extend([instruction.from_key, instruction.to_key])
    assert len(used) == len(set(used))
    assert instructions == [JoinInstruction(0, True, 1, True), JoinInstruction(2, True, 3, True)]


def test_join_refused_onto_line_already_in_a_join():
    table = _resolve([
        [[2, 0], [3, 0]],
        [[1, 0], [2, 0]],
        [[0, 0], [1, 0]],
    ], preserve_directions=True)
    assert list(table.instructions()) == [JoinInstruction(1, False, 0, True)]


def test_square_cycle_is_not_closed():
    table = _resolve([
        [[0, 0], [1, 0]],
        [[1, 0], [1, 1]],
        [[1, 1], [0, 1]],
        [[0, 1], [0, 0]],
    ], preserve_directions=True)
    assert list(table.instructions()) == [
        JoinInstruction(0, False, 1, True),
        JoinInstruction(1, False, 2, True),
        JoinInstruction(2, False, 3, True),
    ]
    # Line 3's end would join back to line 0, which already joined
    assert table.state((False, 3)) is Slot.UNUSED


def test_record_rejects_used_endpoint():
    table = JoinTable()
    table.record(JoinInstruction(0, False, 1, True))
    with pytest.raises(ValueError):
        table.record(JoinInstruction(2, False, 1, True))
    with pytest.raises(ValueError):
        table.record(JoinInstruction(0, False, 2, True))


def test_touches_line():
    table = JoinTable()
    table.record(JoinInstruction(0, False, 1, True))
    assert table.touches_line(0)
    assert table.touches_line(1)
    assert not table.touches_line(2)


def test_instructions_keep_acceptance_order():
    table = JoinTable()
    table.record(JoinInstruction(4, False, 5, True))
    table.record(JoinInstruction(0, True, 2, False))
    table.record(JoinInstruction(1, False, 3, True))
    assert [i.from_line for i in table.instructions()] == [4, 0, 1]


def test_progress_bar_does_not_change_result(capsys):
    lines = [
        [[0, 0], [1, 0]],
        [[1, 0], [2, 0]],
    ]
    arrays = validate_lines(lines)
    endpoints = extract_endpoints(arrays)
    candidates = find_candidates(endpoints)
    quiet = resolve_joins(endpoints, candidates)
    noisy = resolve_joins(endpoints, candidates, show_progress=True)
    assert list(quiet.instructions()) == list(noisy.instructions())
