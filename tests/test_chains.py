"""Tests for chain building."""

import numpy as np
import pytest

from pylinejoin.joining.chains import ChainBuilder, build_chains
from pylinejoin.joining.resolver import JoinInstruction


def _lines(*lines):
    return [np.asarray(line, dtype=float) for line in lines]


def test_no_instructions_passes_lines_through():
    lines = _lines([[0, 0], [1, 0]], [[5, 5], [6, 6]])
    result = build_chains(lines, [])
    assert [group.coords for group in result] == [[(0, 0), (1, 0)], [(5, 5), (6, 6)]]
    assert [group.members for group in result] == [((0, False),), ((1, False),)]


def test_forward_join_drops_duplicate_junction():
    lines = _lines([[0, 0], [1, 0]], [[1, 0], [2, 0]])
    result = build_chains(lines, [JoinInstruction(0, False, 1, True)])
    assert len(result) == 1
    assert result[0].coords == [(0, 0), (1, 0), (2, 0)]


def test_chain_extended_through_join_log():
    lines = _lines([[0, 0], [1, 0]], [[1, 0], [2, 0]], [[2, 0], [3, 0]])
    builder = ChainBuilder(lines)
    first = builder.apply(JoinInstruction(0, False, 1, True))
    second = builder.apply(JoinInstruction(1, False, 2, True))

    assert first == second == 0
    assert builder.join_log == {0: 0, 1: 0, 2: 0}
    assert builder.result()[0].coords == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_end_to_end_reverses_target():
    lines = _lines([[0, 0], [1, 0]], [[2, 0], [1, 0]])
    result = build_chains(lines, [JoinInstruction(0, False, 1, False)])
    assert result[0].coords == [(0, 0), (1, 0), (2, 0)]
    assert result[0].members == ((0, False), (1, True))


def test_start_to_end_prepends_target():
    lines = _lines([[1, 0], [2, 0]], [[0, 0], [1, 0]])
    result = build_chains(lines, [JoinInstruction(0, True, 1, False)])
    assert result[0].coords == [(0, 0), (1, 0), (2, 0)]
    assert result[0].members == ((1, False), (0, False))


def test_join_at_head_of_existing_chain():
    lines = _lines([[1, 0], [2, 0]], [[2, 0], [3, 0]], [[1, 0], [0, 0]])
    builder = ChainBuilder(lines)
    builder.apply(JoinInstruction(0, False, 1, True))
    builder.apply(JoinInstruction(0, True, 2, True))
    result = builder.result()
    assert result[0].coords == [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert result[0].members == ((2, True), (0, False), (1, False))


def test_two_chains_merge_into_first_slot():
    lines = _lines([[0, 0], [1, 0]], [[1, 0], [2, 0]], [[2, 0], [3, 0]], [[3, 0], [4, 0]])
    builder = ChainBuilder(lines)
    builder.apply(JoinInstruction(0, False, 1, True))
    builder.apply(JoinInstruction(2, False, 3, True))
    slot = builder.apply(JoinInstruction(1, False, 2, True))

    assert slot == 0
    result = builder.result()
    assert len(result) == 1
    assert result[0].coords == [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]
    assert set(builder.join_log.values()) == {0}


def test_closing_a_chain_onto_itself_is_rejected():
    lines = _lines([[0, 0], [1, 0]], [[1, 0], [0, 0]])
    builder = ChainBuilder(lines)
    builder.apply(JoinInstruction(0, False, 1, True))
    with pytest.raises(ValueError):
        builder.apply(JoinInstruction(1, False, 0, True))


def test_joined_chains_come_before_untouched_lines():
    lines = _lines([[9, 9], [8, 8]], [[0, 0], [1, 0]], [[1, 0], [2, 0]])
    result = build_chains(lines, [JoinInstruction(1, False, 2, True)])
    assert [group.line_indices for group in result] == [(1, 2), (0,)]
