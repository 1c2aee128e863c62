"""
Tests for board helpers, snapshots and attack utilities.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import dataclasses

import numpy as np
import pytest

from nqueens.board import (
    EMPTY,
    StepResult,
    board_to_matrix,
    empty_board,
    format_board,
    mirror_board,
)
from nqueens.utils import (
    check_attack,
    check_board_size,
    conflicts_with_placed,
    count_attacking_pairs,
    has_distinct_mirror,
    is_valid_solution,
    symmetry_limit,
)


# =============================================================================
# Board Helper Tests
# =============================================================================

def test_mirror_board():
    assert mirror_board((1, 3, 0, 2)) == (2, 0, 3, 1)
    assert mirror_board((0, EMPTY, EMPTY), 3) == (2, EMPTY, EMPTY)
    assert mirror_board(mirror_board((0, 4, 7, 5, 2, 6, 1, 3))) == (0, 4, 7, 5, 2, 6, 1, 3)


def test_board_to_matrix():
    matrix = board_to_matrix((1, 3, 0, EMPTY))

    assert matrix.shape == (4, 4)
    assert matrix.dtype == np.int8
    assert matrix.sum() == 3
    assert matrix[0, 1] == 1 and matrix[1, 3] == 1 and matrix[2, 0] == 1
    assert matrix[3].sum() == 0


def test_format_board():
    text = format_board((1, EMPTY, EMPTY), trial_pos=(1, 2), has_conflict=True)
    assert text.splitlines() == [". Q .", ". . X", ". . ."]

    text = format_board((1, EMPTY, EMPTY), trial_pos=(1, 0))
    assert text.splitlines()[1] == "? . ."


def test_step_result_snapshot():
    result = StepResult(queens=(1, 3, 0, 2), trial_pos=(3, 2), solution_found=True)

    assert result.board_size == 4
    assert result.placed_count == 4
    assert result.mirrored_queens() == (2, 0, 3, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.steps_count = 5


def test_empty_snapshot():
    result = StepResult.empty(5)
    assert result.queens == empty_board(5) == (EMPTY,) * 5
    assert result.trial_pos == (EMPTY, EMPTY)
    assert result.placed_count == 0
    assert not result.is_finished


# =============================================================================
# Utils Tests
# =============================================================================

def test_attack_checking():
    assert check_attack((0, 0), (0, 5))      # same row
    assert check_attack((0, 2), (4, 2))      # same column
    assert check_attack((1, 1), (3, 3))      # falling diagonal
    assert check_attack((0, 3), (3, 0))      # rising diagonal
    assert not check_attack((0, 0), (1, 2))

    print("Attack checking test passed")


def test_conflicts_with_placed():
    queens = (1, 3, EMPTY, EMPTY)
    assert conflicts_with_placed(queens, 2, 2)   # diagonal with (1, 3)
    assert conflicts_with_placed(queens, 2, 1)   # column of (0, 1)
    assert not conflicts_with_placed(queens, 2, 0)


def test_solution_validation():
    assert is_valid_solution((1, 3, 0, 2))
    assert is_valid_solution((0,))
    assert not is_valid_solution((0, 1, 2, 3))
    assert not is_valid_solution((1, 3, 0, EMPTY))
    assert not is_valid_solution(())
    assert count_attacking_pairs((0, 1, 2, 3)) == 6


def test_symmetry_helpers():
    assert [symmetry_limit(n) for n in range(1, 9)] == [1, 1, 2, 2, 3, 3, 4, 4]
    assert not has_distinct_mirror((2, 0, 3, 1, 4), 5)
    assert has_distinct_mirror((0, 2, 4, 1, 3), 5)
    assert has_distinct_mirror((1, 3, 0, 2), 4)


def test_board_size_check():
    info = check_board_size(8)
    assert info['supported']
    assert info['known_solutions'] == 92
    assert info['bits_required'] == 8
    assert info['first_row_columns'] == 4

    assert not check_board_size(32)['supported']
    assert not check_board_size(0)['supported']
    assert check_board_size(20)['known_solutions'] is None
